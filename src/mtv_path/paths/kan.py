"""
KAN path: rotation * scale * shear interpolation.

A is factored once as A = Q D U with
- Q a proper rotation (det Q = +1)
- D a positive diagonal scale
- U a unit upper-triangular shear

and each factor is replaced by its own one-parameter family:

    Q(t) = exp(t log Q)                  closed-form axis/angle rotation
    D(t) = diag(exp(t log d_i))          or t d_i + (1 - t) when linear
    U(t) = I + t log U + t^2/2 (log U)^2 exact, log U is nilpotent

A(t) = Q(t) D(t) U(t). The family passes through I and A but is not a
one-parameter group: A(s + t) != A(s) A(t) in general.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import qr

from ..linalg.kernel import add, determinant, diag, frozen, is_finite, multiply, scale, subtract
from ..linalg.rotation import RotationGenerator, extract_rotation_generator, rotation_at
from .base import MatrixEvaluationStrategy, TransformOptions, UnrepresentableMatrix


@dataclass(frozen=True)
class KanPathData:
    """Generators of the three factors, derived once from A."""
    rotation: RotationGenerator
    diag_values: NDArray
    diag_logs: NDArray
    log_d: NDArray
    log_u: NDArray
    log_u_squared: NDArray
    k_squared: NDArray

    @property
    def rotation_axis(self) -> Optional[NDArray]:
        return self.rotation.axis

    @property
    def rotation_angle(self) -> float:
        return self.rotation.angle


def apply_sign_correction(Q: NDArray, R: NDArray) -> Tuple[NDArray, NDArray]:
    """
    Make the QR factors canonical.

    Columns of Q and rows of R are flipped wherever R has a negative
    diagonal entry. If Q is still a reflection, the last column of Q and the
    last row of R are flipped so that det(Q) = +1.
    """
    signs = np.where(np.diag(R) >= 0, 1.0, -1.0)
    Q = Q * signs[np.newaxis, :]
    R = R * signs[:, np.newaxis]

    if determinant(Q) < 0:
        Q[:, -1] *= -1.0
        R[-1, :] *= -1.0

    return Q, R


def unit_upper_generators(U: NDArray) -> Tuple[NDArray, NDArray, NDArray]:
    """
    Logarithm of a unit upper-triangular matrix.

    K = U - I is strictly upper triangular, so K^n = 0 for n >= 3 in the
    supported dimensions and the Mercator series log(I + K) = K - K^2/2
    terminates.

    Returns:
        Tuple of (log U, (log U)^2, K^2)
    """
    K = subtract(U, np.eye(U.shape[0]))
    K2 = multiply(K, K)
    log_u = subtract(K, scale(K2, 0.5))
    return log_u, multiply(log_u, log_u), K2


def decompose_kan(A: NDArray) -> KanPathData:
    """
    Factor A = Q D U and extract the generator of each factor.

    Args:
        A: 2x2 or 3x3 real matrix

    Returns:
        KanPathData

    Raises:
        UnrepresentableMatrix: if A is not finite, det(A) <= 0, or the
            corrected scale factors are not strictly positive
    """
    if not is_finite(A):
        raise UnrepresentableMatrix("Matrix has non-finite entries.")

    det_a = determinant(A)
    if not math.isfinite(det_a) or det_a <= 0:
        raise UnrepresentableMatrix(
            "KAN path requires an orientation-preserving invertible matrix (det(A) > 0)."
        )

    raw_q, raw_r = qr(A)
    Q, R = apply_sign_correction(raw_q, raw_r)

    diag_values = np.diag(R).copy()
    if not is_finite(diag_values) or np.any(diag_values <= 0):
        raise UnrepresentableMatrix(
            "Matrix cannot be split into rotation, positive scale and shear."
        )

    U = multiply(diag(1.0 / diag_values), R)
    rotation = extract_rotation_generator(Q)
    diag_logs = np.log(diag_values)
    log_u, log_u_squared, k_squared = unit_upper_generators(U)

    return KanPathData(
        rotation=RotationGenerator(
            angle=rotation.angle,
            log_q=frozen(rotation.log_q),
            axis=None if rotation.axis is None else frozen(rotation.axis),
        ),
        diag_values=frozen(diag_values),
        diag_logs=frozen(diag_logs),
        log_d=frozen(diag(diag_logs)),
        log_u=frozen(log_u),
        log_u_squared=frozen(log_u_squared),
        k_squared=frozen(k_squared),
    )


def evaluate_kan_path(
    t: float,
    data: KanPathData,
    options: Optional[TransformOptions] = None
) -> Optional[NDArray]:
    """
    Evaluate Q(t) D(t) U(t).

    Args:
        t: Path parameter; any finite real
        data: Generators from decompose_kan
        options: linear_eigen_interpolation switches D(t) to the linear curve

    Returns:
        A(t), or None if t is not finite or the product overflows
    """
    if not math.isfinite(t):
        return None
    options = options or TransformOptions()

    Qt = rotation_at(data.rotation, t)

    if options.linear_eigen_interpolation:
        Dt = diag(t * data.diag_values + (1.0 - t))
    else:
        Dt = diag(np.exp(data.diag_logs * t))

    n = data.log_u.shape[0]
    Ut = add(np.eye(n), add(scale(data.log_u, t), scale(data.log_u_squared, 0.5 * t * t)))

    result = multiply(multiply(Qt, Dt), Ut)
    if not is_finite(result):
        return None
    return result


class KanStrategy(MatrixEvaluationStrategy):
    """Rotation * scale * shear backend."""

    name = "kan"
    label = "KAN Path"

    def __init__(self, matrix: NDArray, data: KanPathData):
        super().__init__(matrix)
        self.data = data

    @classmethod
    def build(cls, A: NDArray) -> "KanStrategy":
        return cls(A, decompose_kan(A))

    def option_key(self, options: TransformOptions) -> str:
        return "linear" if options.linear_eigen_interpolation else "pow"

    def evaluate(self, t: float, options: TransformOptions) -> Optional[NDArray]:
        return evaluate_kan_path(t, self.data, options)
