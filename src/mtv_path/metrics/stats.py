"""
Statistical utilities for metrics computation.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Dict, Any
from scipy import stats


def compute_distribution_stats(data: NDArray) -> Dict[str, float]:
    """
    Compute basic distribution statistics.

    Args:
        data: Array of values

    Returns:
        Dictionary of statistics
    """
    data = np.asarray(data, dtype=float).ravel()
    if len(data) == 0:
        return {"error": "Empty data"}

    return {
        "count": len(data),
        "mean": float(np.mean(data)),
        "std": float(np.std(data)),
        "min": float(np.min(data)),
        "max": float(np.max(data)),
        "median": float(np.median(data)),
        "q25": float(np.percentile(data, 25)),
        "q75": float(np.percentile(data, 75)),
        "skewness": float(stats.skew(data)) if np.std(data) > 0 else 0.0,
    }


def compute_residual_stats(
    predicted: NDArray,
    actual: NDArray
) -> Dict[str, float]:
    """
    Compute residual statistics.

    Args:
        predicted: Predicted values
        actual: Actual values

    Returns:
        Dictionary of residual statistics
    """
    predicted = np.asarray(predicted, dtype=float).ravel()
    actual = np.asarray(actual, dtype=float).ravel()
    n = min(len(predicted), len(actual))
    if n == 0:
        return {"error": "Empty data"}

    residuals = predicted[:n] - actual[:n]

    return {
        "n": n,
        "mae": float(np.mean(np.abs(residuals))),
        "rmse": float(np.sqrt(np.mean(residuals**2))),
        "max_error": float(np.max(np.abs(residuals))),
        "mean_residual": float(np.mean(residuals)),
        "std_residual": float(np.std(residuals)),
        "median_residual": float(np.median(residuals)),
    }


def compute_invariant_check_stats(
    checks: Dict[str, bool]
) -> Dict[str, Any]:
    """
    Summarize invariant check results.

    Args:
        checks: Dictionary of check name -> pass/fail

    Returns:
        Summary statistics
    """
    total = len(checks)
    passed = sum(1 for v in checks.values() if v)
    failed = total - passed

    return {
        "total_checks": total,
        "passed": passed,
        "failed": failed,
        "pass_rate": passed / total if total > 0 else 0.0,
        "all_passed": failed == 0,
        "failed_checks": [k for k, v in checks.items() if not v],
    }
