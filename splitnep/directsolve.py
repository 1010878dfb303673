# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Callable, Optional
from dataclasses import dataclass, field
import time
import numpy as np
import scipy.linalg
import scipy.sparse as sp

from .backend import ArrayLike, namespace_of_arrays, to_numpy, device
from .utils import check_non_neg, norm
from .solveresult import SolveResult

@dataclass
class DirectSolve:
    """
    Linear solve service using the LU factorization of the matrix handed to refresh. The solve is
    exact for the refreshed matrix, the relative residual with respect to the operator passed to
    the call decides about convergence.
    """

    #: Relative residual, below which a solve counts as converged.
    eps: float = 1e-8

    _lu: Any = field(default=None, init=False, repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "eps":
            check_non_neg(name, value)
        super().__setattr__(name, value)

    def refresh(self, matrix: Any) -> None:
        dense = matrix.toarray() if sp.issparse(matrix) else to_numpy(matrix)
        self._lu = scipy.linalg.lu_factor(dense.astype(np.complex128), check_finite=False)

    def __call__[T: ArrayLike](
            self,
            mat: Callable[[T], T],
            rhs: T,
            guess: Optional[T] = None) -> SolveResult[T]:
        if self._lu is None:
            raise RuntimeError("DirectSolve has to be refreshed with a matrix before solving.")
        stamp = time.time()
        xp = namespace_of_arrays(rhs)
        sol = scipy.linalg.lu_solve(self._lu, to_numpy(rhs), check_finite=False)
        x = xp.asarray(sol, device=device(rhs))
        rhs_norm = norm(rhs)
        residual = norm(rhs - mat(x)) / rhs_norm if rhs_norm > 0.0 else 0.0
        return SolveResult(array=x,
                           converged=bool(residual <= self.eps),
                           iterations=1,
                           time=time.time() - stamp,
                           residuals=[residual])
