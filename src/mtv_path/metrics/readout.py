"""
Readouts of A(t) for display next to the animation.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from numpy.typing import NDArray

from ..linalg.eigen import Eigenvalue, compute_eigenvalues
from ..linalg.kernel import determinant
from ..paths.evaluator import MatrixEvaluator, OptionsLike


@dataclass
class MatrixReadout:
    """A(t) with its determinant and eigenvalues."""
    t: float
    matrix: Optional[NDArray]
    determinant: Optional[float]
    eigenvalues: Optional[List[Eigenvalue]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "t": self.t,
            "matrix": None if self.matrix is None else self.matrix.tolist(),
            "determinant": self.determinant,
            "eigenvalues": None if self.eigenvalues is None
            else [value.to_dict() for value in self.eigenvalues],
        }


def matrix_readout(
    evaluator: MatrixEvaluator,
    t: float,
    options: OptionsLike = None
) -> MatrixReadout:
    """Evaluate A(t) and describe it; fields are None if evaluation fails."""
    matrix = evaluator.get_matrix_at(t, options)
    if matrix is None:
        return MatrixReadout(t=t, matrix=None, determinant=None, eigenvalues=None)

    eigenvalues = compute_eigenvalues(matrix)
    return MatrixReadout(
        t=t,
        matrix=matrix,
        determinant=determinant(matrix),
        eigenvalues=eigenvalues or None,
    )
