"""
mtv-path: interpolated matrix powers for animation.

Given an invertible 2x2 or 3x3 matrix A, produce a smooth family A(t) with
A(0) = I and A(1) = A, for any real t, along one of two paths:
- kan: rotation * positive scale * shear, each factor interpolated alone
- exp-log: exp(t log A) from the eigendecomposition
"""

from .paths import (
    MatrixBackend,
    MatrixEvaluator,
    TransformOptions,
    UnrepresentableMatrix,
    ValidationResult,
    create_matrix_evaluator,
    validate_exp_log_matrix,
    validate_kan_matrix,
)
from .preparation import PreparedMatrix, prepare_matrix
from .random_matrix import generate_random_gl_plus_matrix, random_matrix_from_config
from .activation import ActivationResult, resolve_activation
from .sampling import SamplingResult, build_sample_times, compute_backend_paths
from .runner import run_paths
from .core.config import RunConfig, get_default_config

__version__ = "0.1.0"

__all__ = [
    "MatrixBackend",
    "MatrixEvaluator",
    "TransformOptions",
    "UnrepresentableMatrix",
    "ValidationResult",
    "create_matrix_evaluator",
    "validate_exp_log_matrix",
    "validate_kan_matrix",
    "PreparedMatrix",
    "prepare_matrix",
    "generate_random_gl_plus_matrix",
    "random_matrix_from_config",
    "ActivationResult",
    "resolve_activation",
    "SamplingResult",
    "build_sample_times",
    "compute_backend_paths",
    "run_paths",
    "RunConfig",
    "get_default_config",
]
