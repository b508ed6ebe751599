"""
Effective matrix preparation.

The matrix handed to the path backends is A_eff = (scalar * A) ** exponent,
optionally normalized to |det| = 1. Evaluators are rebuilt whenever any of
these inputs change.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from .linalg.kernel import as_matrix, determinant, is_finite

NORMALIZATION_MIN_DET = 1e-8


@dataclass
class PreparedMatrix:
    """Effective matrix plus the bookkeeping shown next to it."""
    matrix: Optional[NDArray]
    adjusted_matrix: NDArray
    scalar: float
    exponent: int
    normalization_applied: bool = False
    normalization_failed: bool = False
    determinant_before: Optional[float] = None
    determinant_after: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.matrix is not None and self.error is None


def sanitize_scalar(scalar: Any) -> float:
    try:
        value = float(scalar)
    except (TypeError, ValueError):
        return 1.0
    return value if math.isfinite(value) else 1.0


def sanitize_exponent(exponent: Any) -> int:
    try:
        value = float(exponent)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(value):
        return 1
    return max(1, int(round(value)))


def prepare_matrix(
    A: Any,
    scalar: float = 1.0,
    exponent: int = 1,
    normalize: bool = False
) -> PreparedMatrix:
    """
    Compute the effective matrix (scalar * A) ** exponent.

    Args:
        A: Base 2x2 or 3x3 matrix
        scalar: Multiplier; non-finite values fall back to 1
        exponent: Integer power; rounded and clamped to >= 1
        normalize: Divide by |det|^(1/N) so that |det| = 1

    Returns:
        PreparedMatrix; on overflow matrix is None and error is set
    """
    base = as_matrix(A)
    safe_scalar = sanitize_scalar(scalar)
    safe_exponent = sanitize_exponent(exponent)

    with np.errstate(over="ignore", invalid="ignore"):
        scaled = base * safe_scalar
        powered = scaled if safe_exponent == 1 else np.linalg.matrix_power(scaled, safe_exponent)

    if not is_finite(powered):
        return PreparedMatrix(
            matrix=None,
            adjusted_matrix=base,
            scalar=safe_scalar,
            exponent=safe_exponent,
            error="Matrix adjustment error. Check scalar or exponent values.",
        )

    det_before = determinant(powered)
    result = PreparedMatrix(
        matrix=powered,
        adjusted_matrix=powered,
        scalar=safe_scalar,
        exponent=safe_exponent,
        determinant_before=det_before,
    )

    if normalize:
        if abs(det_before) < NORMALIZATION_MIN_DET:
            result.normalization_failed = True
        else:
            root = abs(det_before) ** (1.0 / powered.shape[0])
            normalized = powered / root
            result.matrix = normalized
            result.normalization_applied = True
            result.determinant_after = determinant(normalized)

    return result
