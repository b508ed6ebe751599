"""Core utilities: configuration, hashing, logging."""

from .config import (
    RunConfig,
    EvaluatorConfig,
    PreparationConfig,
    SamplingConfig,
    ActivationConfig,
    RandomMatrixConfig,
    get_default_config,
)
from .hashing import compute_config_hash, compute_matrix_hash
from .logging import get_logger, setup_logging

__all__ = [
    "RunConfig",
    "EvaluatorConfig",
    "PreparationConfig",
    "SamplingConfig",
    "ActivationConfig",
    "RandomMatrixConfig",
    "get_default_config",
    "compute_config_hash",
    "compute_matrix_hash",
    "get_logger",
    "setup_logging",
]
