"""
Path law checks and backend comparison.

Every backend must satisfy
- identity: A(0) = I
- reconstruction: A(1) = A

The exp-log backend must in addition be a one-parameter group,
A(s + t) = A(s) A(t). The KAN backend is not expected to be; for it the
same quantity is reported as a defect, not a check.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from ..paths.evaluator import MatrixBackend, MatrixEvaluator
from .stats import compute_distribution_stats, compute_invariant_check_stats, compute_residual_stats

DEFAULT_LAW_TIMES = (-1.0, -0.5, 0.25, 0.5, 0.75, 1.5)


@dataclass
class PathLawReport:
    """Per-law pass/fail with the measured error."""
    backend: str
    checks: Dict[str, bool] = field(default_factory=dict)
    errors: Dict[str, float] = field(default_factory=dict)
    homomorphism_defect: Optional[float] = None

    @property
    def all_passed(self) -> bool:
        return all(self.checks.values())

    def summary(self) -> Dict[str, Any]:
        return compute_invariant_check_stats(self.checks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backend": self.backend,
            "checks": dict(self.checks),
            "errors": dict(self.errors),
            "homomorphism_defect": self.homomorphism_defect,
            "summary": self.summary(),
        }


def _max_abs(a: Optional[NDArray], b: NDArray) -> float:
    if a is None:
        return float("inf")
    return float(np.max(np.abs(a - b)))


def homomorphism_defect(evaluator: MatrixEvaluator, times: Sequence[float]) -> float:
    """
    Largest max|A(s + t) - A(s) A(t)| over all pairs of times.

    Returns:
        Defect, or inf if any evaluation fails
    """
    worst = 0.0
    for s in times:
        for t in times:
            As = evaluator.get_matrix_at(s)
            At = evaluator.get_matrix_at(t)
            Ast = evaluator.get_matrix_at(s + t)
            if As is None or At is None or Ast is None:
                return float("inf")
            scale = max(1.0, float(np.max(np.abs(Ast))))
            worst = max(worst, float(np.max(np.abs(Ast - As @ At))) / scale)
    return worst


def check_path_laws(
    evaluator: MatrixEvaluator,
    times: Sequence[float] = DEFAULT_LAW_TIMES,
    tol: float = 1e-6
) -> PathLawReport:
    """
    Check identity, reconstruction and (exp-log only) group laws.

    Args:
        evaluator: Evaluator under test
        times: Times paired up for the group law
        tol: Absolute tolerance, relative for matrices with entries above 1

    Returns:
        PathLawReport
    """
    report = PathLawReport(backend=evaluator.backend.value)
    A = evaluator.matrix
    n = evaluator.dimension

    report.errors["identity"] = _max_abs(evaluator.get_matrix_at(0.0), np.eye(n))
    report.checks["identity"] = report.errors["identity"] < tol

    scale = max(1.0, float(np.max(np.abs(A))))
    report.errors["reconstruction"] = _max_abs(evaluator.get_matrix_at(1.0), A) / scale
    report.checks["reconstruction"] = report.errors["reconstruction"] < tol

    defect = homomorphism_defect(evaluator, times)
    report.homomorphism_defect = defect
    if evaluator.backend is MatrixBackend.EXP_LOG:
        report.errors["homomorphism"] = defect
        report.checks["homomorphism"] = defect < tol

    return report


def compare_backend_paths(
    first: MatrixEvaluator,
    second: MatrixEvaluator,
    times: Sequence[float]
) -> Dict[str, Any]:
    """
    Residual statistics between two evaluators' matrices on a time grid.

    Args:
        first: e.g. the KAN evaluator
        second: e.g. the exp-log evaluator
        times: Sample times

    Returns:
        Residual statistics from compute_residual_stats, plus backends, the
        time of the largest entrywise disagreement and its per-time
        distribution
    """
    first_samples = [first.get_matrix_at(float(t)) for t in times]
    second_samples = [second.get_matrix_at(float(t)) for t in times]
    if any(m is None for m in first_samples + second_samples):
        return {"error": "Evaluation failed at some sample times"}

    a = np.stack(first_samples)
    b = np.stack(second_samples)
    per_time = np.max(np.abs(a - b), axis=(1, 2))

    result = compute_residual_stats(a, b)
    result["backends"] = (first.backend.value, second.backend.value)
    result["worst_t"] = float(np.asarray(times, dtype=float)[int(np.argmax(per_time))])
    result["per_time"] = compute_distribution_stats(per_time)
    return result
