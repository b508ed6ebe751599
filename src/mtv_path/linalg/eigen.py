"""
Eigenvalues as an explicit tagged union.

An eigenvalue is either RealEigenvalue(value) or ComplexEigenvalue(re, im).
The split is made once, when the solver output is classified, using the
imaginary-part tolerance; after that nothing relies on implicit promotion
between float and complex.

Admissibility (a single-valued logarithm exists under our convention):
- ComplexEigenvalue: always admissible, the principal branch is used and
  conjugate pairs give conjugate logarithms
- RealEigenvalue: admissible only if strictly positive
"""

import cmath
import math
from dataclasses import dataclass
from typing import List, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .kernel import EPSILON


@dataclass(frozen=True)
class RealEigenvalue:
    """Eigenvalue with negligible imaginary part."""
    value: float

    @property
    def re(self) -> float:
        return self.value

    @property
    def im(self) -> float:
        return 0.0

    @property
    def modulus(self) -> float:
        return abs(self.value)

    def is_admissible(self, eps: float = EPSILON) -> bool:
        return self.value > eps

    def log(self) -> complex:
        return complex(math.log(self.value), 0.0)

    def to_dict(self) -> dict:
        return {"re": self.value, "im": 0.0}


@dataclass(frozen=True)
class ComplexEigenvalue:
    """Eigenvalue with non-negligible imaginary part."""
    re: float
    im: float

    @property
    def modulus(self) -> float:
        return math.hypot(self.re, self.im)

    def is_admissible(self, eps: float = EPSILON) -> bool:
        return self.modulus > eps

    def log(self) -> complex:
        return cmath.log(complex(self.re, self.im))

    def to_dict(self) -> dict:
        return {"re": self.re, "im": self.im}


Eigenvalue = Union[RealEigenvalue, ComplexEigenvalue]


def classify_eigenvalue(z: complex, imag_tol: float = EPSILON) -> Eigenvalue:
    """Tag a raw solver eigenvalue as real or complex."""
    z = complex(z)
    if abs(z.imag) <= imag_tol:
        return RealEigenvalue(z.real)
    return ComplexEigenvalue(z.real, z.imag)


def eigendecompose(A: NDArray) -> Tuple[List[Eigenvalue], NDArray, NDArray]:
    """
    Eigendecompose a real square matrix.

    Args:
        A: Real square matrix

    Returns:
        Tuple of (tagged eigenvalues, raw complex eigenvalues, eigenvector columns V)

    Raises:
        numpy.linalg.LinAlgError: if the solver does not converge
    """
    raw_values, vectors = np.linalg.eig(A)
    raw_values = raw_values.astype(complex)
    tagged = [classify_eigenvalue(z) for z in raw_values]
    return tagged, raw_values, vectors.astype(complex)


def compute_eigenvalues(A: NDArray) -> List[Eigenvalue]:
    """Tagged eigenvalues of A, or an empty list if the solver fails."""
    try:
        tagged, _, _ = eigendecompose(A)
    except np.linalg.LinAlgError:
        return []
    return tagged
