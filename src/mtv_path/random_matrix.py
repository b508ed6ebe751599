"""
Random GL+ matrix generation.

Candidates have entries drawn uniformly from [-r, r) and rounded, so they
stay readable when shown to a user. A negative determinant is repaired by
flipping the first column rather than by redrawing.
"""

from typing import Optional, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .linalg.kernel import determinant
from .paths.validation import validate_exp_log_matrix

if TYPE_CHECKING:
    from .core.config import RandomMatrixConfig

MIN_ABS_DET = 1e-5


def _candidate(rng: np.random.Generator, dimension: int, entry_range: float, decimals: int) -> NDArray:
    values = rng.uniform(-entry_range, entry_range, size=(dimension, dimension))
    return np.round(values, decimals)


def flip_column_sign(matrix: NDArray, column: int = 0) -> NDArray:
    flipped = matrix.copy()
    flipped[:, column] *= -1.0
    return flipped


def _orient(matrix: NDArray) -> NDArray:
    return flip_column_sign(matrix) if determinant(matrix) <= 0 else matrix


def generate_random_gl_plus_matrix(
    dimension: int = 3,
    rng: Optional[np.random.Generator] = None,
    require_positive_eigenvalues: bool = False,
    entry_range: float = 2.0,
    decimals: int = 2,
    max_attempts: int = 30
) -> NDArray:
    """
    Draw a random matrix with positive determinant.

    Args:
        dimension: 2 or 3
        rng: numpy Generator (default: fresh default_rng())
        require_positive_eigenvalues: Also require an exp-log path to exist
        entry_range: Entries are drawn from [-entry_range, entry_range)
        decimals: Rounding of entries
        max_attempts: Candidates tried before the fallback

    Returns:
        dimension x dimension matrix with det > 0
    """
    if rng is None:
        rng = np.random.default_rng()

    for _ in range(max_attempts):
        candidate = _candidate(rng, dimension, entry_range, decimals)
        det = determinant(candidate)
        if abs(det) < MIN_ABS_DET:
            continue
        if det < 0:
            candidate = flip_column_sign(candidate)
        if require_positive_eigenvalues and not validate_exp_log_matrix(candidate).valid:
            continue
        return candidate

    fallback = _candidate(rng, dimension, entry_range, decimals)
    fallback[np.diag_indices(dimension)] += 1.0
    fallback = _orient(fallback)

    if abs(determinant(fallback)) < MIN_ABS_DET or (
        require_positive_eigenvalues and not validate_exp_log_matrix(fallback).valid
    ):
        return np.diag(np.round(rng.uniform(0.5, entry_range + 0.5, size=dimension), decimals))
    return fallback


def random_matrix_from_config(config: "RandomMatrixConfig") -> NDArray:
    """Draw a random GL+ matrix with the settings and seed of a RandomMatrixConfig."""
    return generate_random_gl_plus_matrix(
        dimension=config.dimension,
        rng=np.random.default_rng(config.seed),
        require_positive_eigenvalues=config.require_positive_eigenvalues,
        entry_range=config.entry_range,
        decimals=config.decimals,
        max_attempts=config.max_attempts,
    )
