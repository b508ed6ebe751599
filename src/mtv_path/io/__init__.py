"""I/O Module: caching and tabular export."""

from .cache import EvaluatorCache, time_key
from .export import paths_to_dataframe, save_paths_csv

__all__ = ["EvaluatorCache", "time_key", "paths_to_dataframe", "save_paths_csv"]
