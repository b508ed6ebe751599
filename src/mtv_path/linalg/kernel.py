"""
Dense small-matrix primitives.

Everything here is pure and total over float64 arrays. The only guarded
operation is normalize(), which falls back to the first basis vector when
the input is too short to divide by.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Sequence

EPSILON = 1e-9
SMALL_ANGLE = 1e-7

SUPPORTED_DIMENSIONS = (2, 3)


def as_matrix(values) -> NDArray:
    """
    Coerce nested sequences to a square float64 matrix.

    Raises:
        ValueError: if the input is not square or its size is unsupported
    """
    arr = np.array(values, dtype=float)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {arr.shape}")
    if arr.shape[0] not in SUPPORTED_DIMENSIONS:
        raise ValueError(
            f"Unsupported dimension {arr.shape[0]}; expected one of {SUPPORTED_DIMENSIONS}"
        )
    return arr


def as_vector(values, dimension: int) -> NDArray:
    """Coerce a sequence to a float64 vector of the given length."""
    arr = np.array(values, dtype=float).reshape(-1)
    if arr.shape[0] != dimension:
        raise ValueError(f"Expected a vector of length {dimension}, got {arr.shape[0]}")
    return arr


def is_finite(arr: NDArray) -> bool:
    return bool(np.all(np.isfinite(arr)))


def frozen(arr, dtype=float) -> NDArray:
    """Read-only copy of arr as dtype (float or complex)."""
    arr = np.array(arr, dtype=dtype)
    arr.setflags(write=False)
    return arr


def multiply(a: NDArray, b: NDArray) -> NDArray:
    return a @ b


def add(a: NDArray, b: NDArray) -> NDArray:
    return a + b


def subtract(a: NDArray, b: NDArray) -> NDArray:
    return a - b


def scale(m: NDArray, scalar: float) -> NDArray:
    return m * scalar


def transpose(m: NDArray) -> NDArray:
    return m.T.copy()


def determinant(m: NDArray) -> float:
    """Closed-form determinant for 2x2 and 3x3, LU otherwise."""
    n = m.shape[0]
    if n == 2:
        return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])
    if n == 3:
        a, b, c = m[0]
        d, e, f = m[1]
        g, h, i = m[2]
        return float(a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g))
    return float(np.linalg.det(m))


def diag(values: Sequence[float]) -> NDArray:
    return np.diag(np.asarray(values, dtype=float))


def skew(axis: Sequence[float]) -> NDArray:
    """Cross-product matrix [axis]_x, so that skew(a) @ v == cross(a, v)."""
    x, y, z = axis
    return np.array([
        [0.0, -z, y],
        [z, 0.0, -x],
        [-y, x, 0.0],
    ])


def axis_from_skew(m: NDArray) -> NDArray:
    """Inverse of skew() on the antisymmetric part's entries."""
    return np.array([m[2, 1], m[0, 2], m[1, 0]])


def norm(v: NDArray) -> float:
    return float(np.linalg.norm(v))


def normalize(v: NDArray) -> NDArray:
    """Unit vector along v, or [1, 0, ...] when |v| < EPSILON."""
    length = norm(v)
    if length < EPSILON:
        fallback = np.zeros(len(v))
        fallback[0] = 1.0
        return fallback
    return np.asarray(v, dtype=float) / length


def multiply_matrix_vector(m: NDArray, v: NDArray) -> NDArray:
    return m @ v
