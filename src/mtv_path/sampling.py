"""
Path sampling over a time grid.

For each requested backend an evaluator is built once, A(t) is sampled on
the grid, and every input vector is carried along as the point sequence
activation(A(t) v). Running both backends on the same grid is how the two
paths are compared.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from .activation import ActivationFunction
from .core.logging import get_logger
from .linalg.kernel import as_matrix, as_vector
from .paths.base import TransformOptions
from .paths.evaluator import MatrixBackend, create_matrix_evaluator
from .paths.validation import validate_exp_log_matrix, validate_kan_matrix

DEFAULT_T_PRECISION = 0.01
PATH_RESOLUTION = 100


@dataclass
class VectorPath:
    """Sampled trajectory of one vector."""
    initial: NDArray
    final: NDArray
    points: NDArray


@dataclass
class BackendPaths:
    """All vector trajectories produced by one backend."""
    backend: str
    label: str
    times: NDArray
    transformations: Dict[int, VectorPath] = field(default_factory=dict)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to long-form DataFrame, one row per (vector, sample)."""
        records = []
        for vector_id, path in self.transformations.items():
            for step, (t, point) in enumerate(zip(self.times, path.points)):
                record = {
                    "backend": self.backend,
                    "vector_id": vector_id,
                    "step": step,
                    "t": float(t),
                }
                for axis, value in enumerate(point):
                    record[f"x{axis}"] = float(value)
                records.append(record)
        return pd.DataFrame(records)


@dataclass
class SamplingResult:
    """Paths per backend plus the first error encountered."""
    paths: List[BackendPaths] = field(default_factory=list)
    error: Optional[str] = None
    info: Dict[str, Any] = field(default_factory=dict)

    def for_backend(self, backend: Union[MatrixBackend, str]) -> Optional[BackendPaths]:
        name = MatrixBackend.coerce(backend).value
        for entry in self.paths:
            if entry.backend == name:
                return entry
        return None

    def to_dataframe(self) -> pd.DataFrame:
        frames = [entry.to_dataframe() for entry in self.paths]
        if not frames:
            return pd.DataFrame()
        return pd.concat(frames, ignore_index=True)


def build_sample_times(
    start_t: float,
    end_t: float,
    t_precision: float = DEFAULT_T_PRECISION,
    path_resolution: int = PATH_RESOLUTION
) -> NDArray:
    """
    Evenly spaced sample times covering [start_t, end_t].

    The step is the finer of t_precision and 1 / path_resolution.

    Returns:
        Array of steps + 1 times, or an empty array when end_t <= start_t
    """
    span = end_t - start_t
    if not math.isfinite(span) or span <= 0:
        return np.array([], dtype=float)

    precision = t_precision if math.isfinite(t_precision) and t_precision > 0 else DEFAULT_T_PRECISION
    step = min(precision, 1.0 / path_resolution)
    total_steps = max(1, math.ceil(span / step))
    return start_t + (np.arange(total_steps + 1) / total_steps) * span


def _rejection_reason(matrix: NDArray, backend: MatrixBackend) -> str:
    if backend is MatrixBackend.EXP_LOG:
        result = validate_exp_log_matrix(matrix)
        return result.reason or "exp(t ln A) backend unavailable."
    result = validate_kan_matrix(matrix)
    return result.reason or "Matrix unavailable."


def compute_backend_paths(
    A: Any,
    vectors: Union[Sequence[Sequence[float]], Dict[int, Sequence[float]]],
    times: Sequence[float],
    backends: Sequence[Union[MatrixBackend, str]] = (MatrixBackend.KAN,),
    options: Optional[TransformOptions] = None,
    activation: Optional[ActivationFunction] = None,
    cache_max_entries: Optional[int] = 4096,
    time_decimals: int = 6
) -> SamplingResult:
    """
    Sample vector trajectories for each backend.

    Args:
        A: Effective matrix
        vectors: List of vectors (ids are list positions) or {id: vector}
        times: Sample times
        backends: Backends to run, in output order
        options: Evaluation options shared by all backends
        activation: Elementwise function applied to each A(t) v
        cache_max_entries: Cache bound for each evaluator
        time_decimals: Quantization of t for cache keys

    Returns:
        SamplingResult; a backend that cannot represent A is skipped and its
        reason recorded in error
    """
    logger = get_logger("sampling")
    matrix = as_matrix(A)
    times = np.asarray(times, dtype=float)
    if times.size == 0:
        return SamplingResult(error="No sampling points available.")

    items = vectors.items() if isinstance(vectors, dict) else enumerate(vectors)
    vector_map = {int(k): as_vector(v, matrix.shape[0]) for k, v in items}

    result = SamplingResult()

    for backend in backends:
        backend = MatrixBackend.coerce(backend)
        evaluator = create_matrix_evaluator(
            matrix, backend, cache_max_entries=cache_max_entries, time_decimals=time_decimals
        )
        if evaluator is None:
            reason = _rejection_reason(matrix, backend)
            logger.warning(f"{backend.label} skipped: {reason}")
            result.error = result.error or reason
            continue

        samples = [evaluator.get_matrix_at(float(t), options) for t in times]
        if any(sample is None for sample in samples):
            result.error = result.error or "Matrix generation failed at specific time samples."
            logger.warning(f"{backend.label} failed at some sample times")
            continue

        stacked = np.stack(samples)
        entry = BackendPaths(backend=backend.value, label=backend.label, times=times)
        for vector_id, vector in vector_map.items():
            points = stacked @ vector
            if activation is not None:
                points = np.asarray(activation(points), dtype=float)
            entry.transformations[vector_id] = VectorPath(
                initial=points[0].copy(),
                final=points[-1].copy(),
                points=points,
            )
        result.paths.append(entry)

    if not result.paths and result.error is None:
        result.error = "Matrix unavailable."
    return result
