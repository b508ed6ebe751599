"""
Configuration schema for matrix path evaluation.

All session parameters are captured in a single RunConfig object,
which is exportable to JSON for reproducibility.
"""

from typing import Literal, Optional
import json

from pydantic import BaseModel, Field

PYDANTIC_V2 = hasattr(BaseModel, "model_dump")


class EvaluatorConfig(BaseModel):
    """Matrix evaluator configuration."""

    backend: Literal["kan", "exp-log"] = "kan"
    time_decimals: int = 6
    cache_max_entries: Optional[int] = 4096
    linear_eigen_interpolation: bool = False

    class Config:
        extra = "allow"


class PreparationConfig(BaseModel):
    """Pre-processing applied to the base matrix: (scalar * A) ** exponent."""

    scalar: float = 1.0
    exponent: int = 1
    normalize: bool = False

    class Config:
        extra = "allow"


class SamplingConfig(BaseModel):
    """Time grid used to sample paths."""

    start_t: float = 0.0
    end_t: float = 1.0
    t_precision: float = 0.01
    path_resolution: int = 100
    compare_backends: bool = False

    class Config:
        extra = "allow"


class ActivationConfig(BaseModel):
    """Elementwise activation applied to transformed vectors."""

    name: str = "identity"
    custom_expression: str = ""

    class Config:
        extra = "allow"


class RandomMatrixConfig(BaseModel):
    """Random GL+ matrix generation."""

    dimension: int = 3
    entry_range: float = 2.0
    decimals: int = 2
    max_attempts: int = 30
    require_positive_eigenvalues: bool = False
    seed: Optional[int] = None

    class Config:
        extra = "allow"


class RunConfig(BaseModel):
    """Complete session configuration."""

    run_name: str = "default_run"
    log_level: Optional[str] = None
    evaluator: EvaluatorConfig = Field(default_factory=EvaluatorConfig)
    preparation: PreparationConfig = Field(default_factory=PreparationConfig)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    activation: ActivationConfig = Field(default_factory=ActivationConfig)
    random_matrix: RandomMatrixConfig = Field(default_factory=RandomMatrixConfig)

    class Config:
        extra = "allow"

    def to_json(self) -> str:
        """Export configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def to_dict(self) -> dict:
        """Export configuration to dictionary."""
        if PYDANTIC_V2:
            return self.model_dump()
        else:
            return self.dict()

    @classmethod
    def from_json(cls, json_str: str) -> "RunConfig":
        """Load configuration from JSON string."""
        data = json.loads(json_str)
        return cls(**data)

    @classmethod
    def from_file(cls, path: str) -> "RunConfig":
        """Load configuration from JSON file."""
        with open(path, "r") as f:
            return cls.from_json(f.read())

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, "w") as f:
            f.write(self.to_json())


def get_default_config() -> RunConfig:
    """Get default run configuration."""
    return RunConfig()
