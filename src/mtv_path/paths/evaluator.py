"""
Matrix Evaluator Facade and Backend Selector.

Provides one interface over both path backends:
1. kan: rotation * scale * shear factorization (any det(A) > 0)
2. exp-log: exp(t log A) from the eigendecomposition (admissible spectra only)

An evaluator is built once per (matrix, backend) pair; the expensive
factorization happens at construction and every get_matrix_at() afterwards
is a cached closed-form evaluation.
"""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from numpy.typing import NDArray

from ..core.logging import get_logger
from ..io.cache import EvaluatorCache, time_key
from ..linalg.eigen import Eigenvalue, compute_eigenvalues
from ..linalg.kernel import as_matrix, as_vector, multiply_matrix_vector
from .base import MatrixEvaluationStrategy, TransformOptions, UnrepresentableMatrix
from .explog import ExpLogStrategy
from .kan import KanStrategy

OptionsLike = Union[TransformOptions, Mapping[str, Any], None]


class MatrixBackend(Enum):
    """Available path backends."""
    KAN = "kan"
    EXP_LOG = "exp-log"

    @property
    def strategy(self) -> type:
        return _STRATEGIES[self]

    @property
    def label(self) -> str:
        return self.strategy.label

    @classmethod
    def coerce(cls, backend: Union["MatrixBackend", str]) -> "MatrixBackend":
        if isinstance(backend, cls):
            return backend
        return cls(backend)


_STRATEGIES: Dict[MatrixBackend, type] = {
    MatrixBackend.KAN: KanStrategy,
    MatrixBackend.EXP_LOG: ExpLogStrategy,
}


class MatrixEvaluator:
    """
    Cached A(t) evaluation over one backend strategy.

    Not safe to share across threads without external locking: cache
    writes are unsynchronized.
    """

    def __init__(
        self,
        strategy: MatrixEvaluationStrategy,
        eigenvalues: Optional[List[Eigenvalue]] = None,
        cache: Optional[EvaluatorCache] = None,
        time_decimals: int = 6
    ):
        self.strategy = strategy
        self.cache = cache if cache is not None else EvaluatorCache()
        self.time_decimals = time_decimals
        self._eigenvalues = (
            eigenvalues if eigenvalues is not None else compute_eigenvalues(strategy.matrix)
        )

    @property
    def backend(self) -> MatrixBackend:
        return MatrixBackend(self.strategy.name)

    @property
    def matrix(self) -> NDArray:
        return self.strategy.matrix

    @property
    def dimension(self) -> int:
        return self.strategy.dimension

    @property
    def eigenvalues(self) -> List[Eigenvalue]:
        """Eigenvalues of A for diagnostic readout."""
        return list(self._eigenvalues)

    @property
    def eigen_values(self) -> List[Dict[str, float]]:
        """Eigenvalues of A as {re, im} records."""
        return [value.to_dict() for value in self._eigenvalues]

    def get_matrix_at(self, t: float, options: OptionsLike = None) -> Optional[NDArray]:
        """
        Evaluate A(t).

        Args:
            t: Path parameter
            options: TransformOptions or mapping

        Returns:
            Read-only matrix, identical object for repeated (t, options),
            or None if t is not finite or evaluation overflowed
        """
        opts = TransformOptions.coerce(options)
        tkey = time_key(t, self.time_decimals)
        if tkey is None:
            return None

        key = (self.strategy.option_key(opts), tkey)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        evaluated = self.strategy.evaluate(t, opts)
        if evaluated is None:
            return None
        return self.cache.set(key, evaluated)

    def apply_to_vector(
        self,
        t: float,
        v: Sequence[float],
        options: OptionsLike = None
    ) -> Optional[NDArray]:
        """A(t) v, or None when A(t) is unavailable."""
        vector = as_vector(v, self.dimension)
        matrix = self.get_matrix_at(t, options)
        if matrix is None:
            return None
        return multiply_matrix_vector(matrix, vector)

    def clear_cache(self) -> int:
        return self.cache.clear()


def build_strategy(
    A: Any,
    backend: Union[MatrixBackend, str] = MatrixBackend.KAN
) -> MatrixEvaluationStrategy:
    """
    Build a backend strategy for A.

    Raises:
        UnrepresentableMatrix: if the backend cannot represent A
        ValueError: on an unknown backend or a malformed matrix
    """
    backend = MatrixBackend.coerce(backend)
    matrix = as_matrix(A)
    matrix.setflags(write=False)
    return backend.strategy.build(matrix)


def create_matrix_evaluator(
    A: Any,
    backend: Union[MatrixBackend, str] = MatrixBackend.KAN,
    cache_max_entries: Optional[int] = 4096,
    time_decimals: int = 6
) -> Optional[MatrixEvaluator]:
    """
    Create an evaluator for A on the chosen backend.

    Args:
        A: 2x2 or 3x3 real matrix
        backend: "kan" or "exp-log"
        cache_max_entries: Cache bound (None = unbounded)
        time_decimals: Quantization of t for cache keys

    Returns:
        MatrixEvaluator, or None if the backend cannot represent A
    """
    logger = get_logger("paths")
    backend = MatrixBackend.coerce(backend)

    try:
        strategy = build_strategy(A, backend)
    except UnrepresentableMatrix as e:
        logger.debug(f"{backend.value} backend rejected matrix: {e.reason}")
        return None

    logger.debug(f"Built {backend.value} evaluator for {strategy.dimension}x{strategy.dimension} matrix")
    return MatrixEvaluator(
        strategy,
        eigenvalues=getattr(strategy.data, "eigenvalues", None),
        cache=EvaluatorCache(max_entries=cache_max_entries),
        time_decimals=time_decimals,
    )


def calculate_at(
    A: Any,
    t: float,
    backend: Union[MatrixBackend, str] = MatrixBackend.KAN,
    options: OptionsLike = None
) -> Optional[NDArray]:
    """One-shot A(t) without keeping the evaluator."""
    evaluator = create_matrix_evaluator(A, backend)
    return evaluator.get_matrix_at(t, options) if evaluator else None


def calculate_at_vector(
    A: Any,
    v: Sequence[float],
    t: float,
    backend: Union[MatrixBackend, str] = MatrixBackend.KAN,
    options: OptionsLike = None
) -> Optional[NDArray]:
    """One-shot A(t) v without keeping the evaluator."""
    evaluator = create_matrix_evaluator(A, backend)
    return evaluator.apply_to_vector(t, v, options) if evaluator else None
