"""
Hashing utilities for reproducibility.

Provides deterministic digests of configurations and input matrices so that
sampled paths can be traced back to what produced them.
"""

import hashlib
import json
from typing import Any

import numpy as np


def compute_config_hash(config: Any) -> str:
    """
    Compute deterministic hash of configuration.

    Args:
        config: Configuration object with to_dict() method or dict

    Returns:
        Hex string of SHA-256 hash (first 16 chars)
    """
    if hasattr(config, "to_dict"):
        config_dict = config.to_dict()
    else:
        config_dict = dict(config)

    # Sort keys for deterministic serialization
    config_str = json.dumps(config_dict, sort_keys=True, default=str)
    hash_obj = hashlib.sha256(config_str.encode("utf-8"))
    return hash_obj.hexdigest()[:16]


def compute_matrix_hash(matrix: Any) -> str:
    """
    Compute hash of a matrix's shape and float64 contents.

    Args:
        matrix: Array-like square matrix

    Returns:
        Hex string of SHA-256 hash (first 16 chars)
    """
    arr = np.ascontiguousarray(np.asarray(matrix, dtype=float))
    hash_obj = hashlib.sha256(str(arr.shape).encode("utf-8"))
    hash_obj.update(arr.tobytes())
    return hash_obj.hexdigest()[:16]
