"""
Metrics Module: Path laws, backend comparison and readouts.
"""

from .laws import PathLawReport, check_path_laws, compare_backend_paths, homomorphism_defect
from .readout import MatrixReadout, matrix_readout
from .stats import compute_distribution_stats, compute_residual_stats, compute_invariant_check_stats

__all__ = [
    "PathLawReport",
    "check_path_laws",
    "compare_backend_paths",
    "homomorphism_defect",
    "MatrixReadout",
    "matrix_readout",
    "compute_distribution_stats",
    "compute_residual_stats",
    "compute_invariant_check_stats",
]
