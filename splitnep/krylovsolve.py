# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Callable, Optional
from dataclasses import dataclass, field
from enum import Enum
from math import ceil

from .backend import ArrayLike
from .utils import check_pos, check_non_neg
from .solveresult import SolveResult
from .preconditioner import Preconditioner, PreconditionerType, preconditioner
from .bicgstab import BiCGStab
from .gmres import GMRES

class KrylovMethod(Enum):
    BICGSTAB = 0
    GMRES = 1

@dataclass
class KrylovSolve:
    """
    Linear solve service running a preconditioned Krylov method. The preconditioner is rebuilt from
    the matrix handed to refresh and kept for all solves until the next refresh.
    """

    #: Krylov method for the solves.
    method: KrylovMethod = KrylovMethod.BICGSTAB
    #: Preconditioner built on refresh.
    preconditioner: PreconditionerType = PreconditionerType.BLOCK_JACOBI
    #: Relative residual, after which a solve is stopped.
    eps: float = 1e-5
    #: Maximum number of iterations of a solve.
    maxit: int = 200
    #: Number of diagonal blocks of the block Jacobi preconditioner.
    nblocks: int = 1
    #: Size of the Arnoldi basis between restarts of GMRES.
    restart: int = 30

    _precond: Optional[Preconditioner] = field(default=None, init=False, repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("maxit", "nblocks", "restart"):
            check_pos(name, value)
        elif name == "eps":
            check_non_neg(name, value)
        super().__setattr__(name, value)

    def refresh(self, matrix: Any) -> None:
        params = {"nblocks": self.nblocks} if self.preconditioner == PreconditionerType.BLOCK_JACOBI else {}
        precond = preconditioner(self.preconditioner, **params)
        precond.setup(matrix)
        self._precond = precond

    def __call__[T: ArrayLike](
            self,
            mat: Callable[[T], T],
            rhs: T,
            guess: Optional[T] = None) -> SolveResult[T]:
        return self.solver()(mat, rhs, guess, self._precond)

    def solver(self) -> BiCGStab | GMRES:
        """The Krylov solver configured by method, eps and maxit."""
        if self.method == KrylovMethod.BICGSTAB:
            return BiCGStab(maxit=self.maxit, eps=self.eps)
        elif self.method == KrylovMethod.GMRES:
            return GMRES(nsteps=ceil(self.maxit / self.restart), subspace=self.restart, eps=self.eps)
        raise ValueError(f"Unknown Krylov method {self.method}.")
