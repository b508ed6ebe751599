"""
Linear Algebra Module.

Small dense matrix primitives, rotation generators, and tagged eigenvalues
shared by both path backends.
"""

from .kernel import (
    EPSILON,
    SMALL_ANGLE,
    SUPPORTED_DIMENSIONS,
    as_matrix,
    as_vector,
    add,
    multiply,
    subtract,
    scale,
    transpose,
    determinant,
    diag,
    frozen,
    skew,
    norm,
    normalize,
    multiply_matrix_vector,
)
from .rotation import (
    RotationGenerator,
    extract_rotation_generator,
    rotation_at,
    rotation_matrix_2d,
    rotation_from_axis_angle,
)
from .eigen import (
    Eigenvalue,
    RealEigenvalue,
    ComplexEigenvalue,
    classify_eigenvalue,
    compute_eigenvalues,
    eigendecompose,
)

__all__ = [
    "EPSILON",
    "SMALL_ANGLE",
    "SUPPORTED_DIMENSIONS",
    "as_matrix",
    "as_vector",
    "add",
    "multiply",
    "subtract",
    "scale",
    "transpose",
    "determinant",
    "diag",
    "frozen",
    "skew",
    "norm",
    "normalize",
    "multiply_matrix_vector",
    "RotationGenerator",
    "extract_rotation_generator",
    "rotation_at",
    "rotation_matrix_2d",
    "rotation_from_axis_angle",
    "Eigenvalue",
    "RealEigenvalue",
    "ComplexEigenvalue",
    "classify_eigenvalue",
    "compute_eigenvalues",
    "eigendecompose",
]
