"""
Shared types for matrix path backends.

A backend turns a fixed matrix A into a one-parameter family A(t) with
A(0) = I and A(1) = A. Each backend is a MatrixEvaluationStrategy built once
per matrix; per-t evaluation is cheap and pure.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from numpy.typing import NDArray


class UnrepresentableMatrix(Exception):
    """The matrix cannot be factored by the requested backend."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class TransformOptions:
    """
    Per-call evaluation options.

    linear_eigen_interpolation replaces the exponential scale curve
    d ** t with the straight line t * d + (1 - t). Both curves share their
    endpoints at t = 0 and t = 1, but the linear one is a different path and
    is not a matrix power.
    """
    linear_eigen_interpolation: bool = False

    @classmethod
    def coerce(cls, options: Union["TransformOptions", Mapping[str, Any], None]) -> "TransformOptions":
        """Accept None, a TransformOptions, or a plain mapping."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls(
            linear_eigen_interpolation=bool(
                options.get("linear_eigen_interpolation",
                            options.get("linearEigenInterpolation", False))
            )
        )


class MatrixEvaluationStrategy(ABC):
    """One way of producing A(t) from a fixed A."""

    name: str = ""
    label: str = ""

    def __init__(self, matrix: NDArray):
        self.matrix = matrix

    @property
    def dimension(self) -> int:
        return self.matrix.shape[0]

    @abstractmethod
    def option_key(self, options: TransformOptions) -> str:
        """Cache-key component for the options this backend honours."""

    @abstractmethod
    def evaluate(self, t: float, options: TransformOptions) -> Optional[NDArray]:
        """A(t), or None when t is not finite or the result overflows."""
