"""
Tabular export of sampled paths.
"""

from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from ..sampling import SamplingResult


def paths_to_dataframe(result: "SamplingResult") -> pd.DataFrame:
    """Long-form DataFrame of every backend's vector trajectories."""
    df = result.to_dataframe()
    for key in ("config_hash", "matrix_hash"):
        if key in result.info:
            df[key] = result.info[key]
    return df


def save_paths_csv(result: "SamplingResult", path: str) -> str:
    """
    Save sampled paths to CSV.

    Args:
        result: Output of compute_backend_paths or run_paths
        path: Destination file

    Returns:
        Path written
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    paths_to_dataframe(result).to_csv(out_path, index=False)
    return str(out_path)
