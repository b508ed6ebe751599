"""
Per-evaluator matrix cache for animation-rate lookups.
"""

import math
from collections import OrderedDict
from typing import Hashable, Optional, Tuple

from numpy.typing import NDArray

CacheKey = Tuple[Hashable, float]


def time_key(t: float, decimals: int = 6) -> Optional[float]:
    """Quantize t for cache lookup; None for non-finite t."""
    if not math.isfinite(t):
        return None
    return round(t, decimals)


class EvaluatorCache:
    """
    Cache evaluated matrices keyed by (option key, quantized t).

    Entries are stored read-only, so repeated lookups return the very same
    array. Not thread-safe; one cache belongs to one evaluator.
    """

    def __init__(self, max_entries: Optional[int] = 4096):
        """
        Initialize cache.

        Args:
            max_entries: Maximum number of entries before least-recently-used
                eviction; None for unbounded
        """
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self._entries: "OrderedDict[CacheKey, NDArray]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def get(self, key: CacheKey) -> Optional[NDArray]:
        """
        Get cached matrix.

        Args:
            key: (option key, quantized t)

        Returns:
            Cached matrix or None if not present
        """
        matrix = self._entries.get(key)
        if matrix is None:
            self.misses += 1
            return None
        self.hits += 1
        self._entries.move_to_end(key)
        return matrix

    def set(self, key: CacheKey, matrix: NDArray) -> NDArray:
        """
        Store matrix and return the stored (read-only) array.

        Args:
            key: (option key, quantized t)
            matrix: Evaluated matrix
        """
        matrix.setflags(write=False)
        self._entries[key] = matrix
        self._entries.move_to_end(key)
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return matrix

    def clear(self) -> int:
        """
        Clear all cached values.

        Returns:
            Number of items cleared
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def stats(self) -> dict:
        return {
            "entries": len(self._entries),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
        }
