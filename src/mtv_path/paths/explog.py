"""
exp-log path: A(t) = exp(t log A).

log A is assembled from the eigendecomposition A = V diag(lambda) V^-1 as
V diag(log lambda) V^-1, using the principal logarithm of each eigenvalue.
Unlike the KAN path this family is a true one-parameter group,
A(s + t) = A(s) A(t), which is why its domain is narrower: every eigenvalue
must be admissible (positive real, or genuinely complex).

When V is too ill-conditioned to invert (defective matrices such as a pure
shear) the logarithm falls back to the Schur-based scipy.linalg.logm and
evaluation to scipy.linalg.expm.
"""

import math
import warnings
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import expm, logm

from ..core.logging import get_logger
from ..linalg.eigen import Eigenvalue, eigendecompose
from ..linalg.kernel import EPSILON, determinant, frozen, is_finite
from .base import MatrixEvaluationStrategy, TransformOptions, UnrepresentableMatrix

# Above this condition number V^-1 is not trusted
MAX_EIGENVECTOR_CONDITION = 1e8

# Relative size of an imaginary remnant that indicates a wrong branch
IMAG_TOLERANCE = 1e-6

DOMAIN_REASON = (
    "exp(t ln A) requires strictly positive real eigenvalues or complex conjugate pairs."
)


@dataclass(frozen=True)
class ExpLogData:
    """Eigen-data and logarithm of A, derived once."""
    eigenvalues: Tuple[Eigenvalue, ...]
    eigenvectors: NDArray
    inverse_eigenvectors: Optional[NDArray]
    log_eigenvalues: NDArray
    log_a: NDArray

    @property
    def diagonalizable(self) -> bool:
        return self.inverse_eigenvectors is not None


def check_exp_log_domain(A: NDArray) -> Tuple[List[Eigenvalue], NDArray, NDArray]:
    """
    Validate that A admits a real exp-log path.

    Args:
        A: Real square matrix

    Returns:
        Tuple of (tagged eigenvalues, raw complex eigenvalues, eigenvectors)

    Raises:
        UnrepresentableMatrix: on a singular matrix, solver failure, or an
            inadmissible eigenvalue
    """
    if not is_finite(A):
        raise UnrepresentableMatrix("Matrix has non-finite entries.")

    det_a = determinant(A)
    if not math.isfinite(det_a) or abs(det_a) < EPSILON:
        raise UnrepresentableMatrix("Matrix is singular (|det(A)| is near zero).")

    try:
        tagged, raw, vectors = eigendecompose(A)
    except np.linalg.LinAlgError as e:
        raise UnrepresentableMatrix(f"Eigendecomposition failed: {e}") from e

    if not is_finite(raw) or not is_finite(vectors):
        raise UnrepresentableMatrix("Eigendecomposition produced non-finite values.")

    for value in tagged:
        if value.modulus < EPSILON:
            raise UnrepresentableMatrix("Matrix has an eigenvalue near zero.")
        if not value.is_admissible():
            raise UnrepresentableMatrix(DOMAIN_REASON)

    return tagged, raw, vectors


def build_exp_log_data(A: NDArray) -> ExpLogData:
    """
    Build log A for the exp-log path.

    Raises:
        UnrepresentableMatrix: if A is outside the exp-log domain
    """
    tagged, _, vectors = check_exp_log_domain(A)
    log_values = np.array([value.log() for value in tagged], dtype=complex)

    inverse = None
    if np.linalg.cond(vectors) < MAX_EIGENVECTOR_CONDITION:
        inverse = np.linalg.inv(vectors)
        log_a = vectors @ np.diag(log_values) @ inverse
    else:
        warnings.warn(
            "Eigenvector matrix is ill-conditioned; falling back to Schur logarithm."
        )
        try:
            log_a = np.asarray(logm(A), dtype=complex)
        except (ValueError, np.linalg.LinAlgError) as e:
            raise UnrepresentableMatrix(f"Matrix logarithm failed: {e}") from e

    if not is_finite(log_a):
        raise UnrepresentableMatrix("Matrix logarithm is not finite.")

    return ExpLogData(
        eigenvalues=tuple(tagged),
        eigenvectors=frozen(vectors, complex),
        inverse_eigenvectors=None if inverse is None else frozen(inverse, complex),
        log_eigenvalues=frozen(log_values, complex),
        log_a=frozen(log_a, complex),
    )


def to_real_matrix(M: NDArray) -> NDArray:
    """
    Drop the imaginary part of an evaluated matrix.

    A remnant above IMAG_TOLERANCE (relative to the real part) means the
    domain check admitted a matrix it should not have; it is logged.
    """
    real = np.real(M).astype(float)
    if np.iscomplexobj(M):
        remnant = float(np.max(np.abs(np.imag(M)))) if M.size else 0.0
        scale = max(1.0, float(np.max(np.abs(real)))) if M.size else 1.0
        if remnant > IMAG_TOLERANCE * scale:
            get_logger("paths").warning(
                f"exp-log evaluation left imaginary remnant {remnant:.3e}; result truncated to real part"
            )
    return real


def evaluate_exp_log(t: float, data: ExpLogData) -> Optional[NDArray]:
    """
    Evaluate exp(t log A).

    Args:
        t: Path parameter; any finite real
        data: Output of build_exp_log_data

    Returns:
        Real matrix A(t), or None if t is not finite or the result overflows
    """
    if not math.isfinite(t):
        return None

    with np.errstate(over="ignore", invalid="ignore"):
        if data.diagonalizable:
            powered = np.exp(t * data.log_eigenvalues)
            M = data.eigenvectors @ np.diag(powered) @ data.inverse_eigenvectors
        else:
            M = expm(t * data.log_a)

    if not is_finite(M):
        return None
    return to_real_matrix(M)


class ExpLogStrategy(MatrixEvaluationStrategy):
    """Eigen/logarithm backend."""

    name = "exp-log"
    label = "exp(t ln A) Path"

    def __init__(self, matrix: NDArray, data: ExpLogData):
        super().__init__(matrix)
        self.data = data

    @classmethod
    def build(cls, A: NDArray) -> "ExpLogStrategy":
        return cls(A, build_exp_log_data(A))

    def option_key(self, options: TransformOptions) -> str:
        return "default"

    def evaluate(self, t: float, options: TransformOptions) -> Optional[NDArray]:
        return evaluate_exp_log(t, self.data)
