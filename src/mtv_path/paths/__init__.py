"""
Matrix Path Module.

Two backends produce a one-parameter family A(t) with A(0) = I, A(1) = A:
- kan: rotation * positive scale * shear factors, each interpolated on its own
- exp-log: exp(t log A), a true one-parameter group on a narrower domain

Both sit behind MatrixEvaluator, created with create_matrix_evaluator().
"""

from .base import MatrixEvaluationStrategy, TransformOptions, UnrepresentableMatrix
from .kan import (
    KanPathData,
    KanStrategy,
    apply_sign_correction,
    decompose_kan,
    evaluate_kan_path,
    unit_upper_generators,
)
from .explog import (
    ExpLogData,
    ExpLogStrategy,
    build_exp_log_data,
    check_exp_log_domain,
    evaluate_exp_log,
)
from .evaluator import (
    MatrixBackend,
    MatrixEvaluator,
    build_strategy,
    create_matrix_evaluator,
    calculate_at,
    calculate_at_vector,
)
from .validation import ValidationResult, validate_exp_log_matrix, validate_kan_matrix

__all__ = [
    # Shared types
    "MatrixEvaluationStrategy",
    "TransformOptions",
    "UnrepresentableMatrix",
    # KAN backend
    "KanPathData",
    "KanStrategy",
    "apply_sign_correction",
    "decompose_kan",
    "evaluate_kan_path",
    "unit_upper_generators",
    # exp-log backend
    "ExpLogData",
    "ExpLogStrategy",
    "build_exp_log_data",
    "check_exp_log_domain",
    "evaluate_exp_log",
    # Facade
    "MatrixBackend",
    "MatrixEvaluator",
    "build_strategy",
    "create_matrix_evaluator",
    "calculate_at",
    "calculate_at_vector",
    # Validation
    "ValidationResult",
    "validate_exp_log_matrix",
    "validate_kan_matrix",
]
