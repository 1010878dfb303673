# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Sequence
from dataclasses import dataclass
import numpy as np

from .scalarfunction import ScalarFunction

@dataclass
class ProjectedProblem:
    """
    Small dense nonlinear eigenproblem :math:`T_m(\\lambda) = \\sum_k f_k(\\lambda) V^H M_k V`
    obtained by projecting a split operator onto the search space.
    """

    #: Scalar functions of the terms.
    functions: Sequence[ScalarFunction]
    #: Projected matrices of shape (k, m, m).
    matrices: np.ndarray

    def __post_init__(self) -> None:
        if self.matrices.ndim != 3 or self.matrices.shape[1] != self.matrices.shape[2]:
            raise ValueError("Projected matrices must be of shape (k, m, m).")
        if self.matrices.shape[0] != len(self.functions):
            raise ValueError("Number of projected matrices and functions differ.")

    @property
    def size(self) -> int:
        return self.matrices.shape[1]

    def evaluate(self, value: complex) -> tuple[np.ndarray, np.ndarray]:
        """Return :math:`T_m(\\lambda)` and :math:`T_m'(\\lambda)`."""
        coeffs = np.asarray([func.evaluate(value) for func in self.functions], dtype=np.complex128)
        mat = np.tensordot(coeffs[:,0], self.matrices, axes=([0], [0]))
        der = np.tensordot(coeffs[:,1], self.matrices, axes=([0], [0]))
        return mat, der

    def matrix(self, value: complex) -> np.ndarray:
        return self.evaluate(value)[0]

    def derivative(self, value: complex) -> np.ndarray:
        return self.evaluate(value)[1]
