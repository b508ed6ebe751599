"""
Pre-flight domain checks.

These run the rejection steps of a backend without building its evaluator,
so a caller can disable a backend, or constrain random matrix generation,
before anything is evaluated.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

from ..linalg.kernel import as_matrix, determinant, is_finite
from .base import UnrepresentableMatrix
from .explog import check_exp_log_domain


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a domain check."""
    valid: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> dict:
        return {"valid": self.valid, "reason": self.reason}


def validate_exp_log_matrix(A: Any) -> ValidationResult:
    """
    Check whether A admits an exp-log path.

    A must be invertible and every eigenvalue must be either strictly
    positive real or complex with a non-negligible imaginary part.

    Args:
        A: 2x2 or 3x3 real matrix

    Returns:
        ValidationResult with the first failing reason
    """
    try:
        check_exp_log_domain(as_matrix(A))
    except UnrepresentableMatrix as e:
        return ValidationResult(False, e.reason)
    return ValidationResult(True)


def validate_kan_matrix(A: Any) -> ValidationResult:
    """Check the determinant precondition of the KAN path."""
    matrix = as_matrix(A)
    if not is_finite(matrix):
        return ValidationResult(False, "Matrix has non-finite entries.")
    det_a = determinant(matrix)
    if not math.isfinite(det_a) or det_a <= 0:
        return ValidationResult(
            False,
            "KAN path requires an orientation-preserving invertible matrix (det(A) > 0).",
        )
    return ValidationResult(True)
