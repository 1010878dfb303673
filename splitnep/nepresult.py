# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from dataclasses import dataclass, field
from enum import Enum

from .backend import ArrayLike
from .eigenpairstore import EigenpairStore
from .errors import MaxIterationsExceeded, LinearSolveDivergence, SplitNEPError

class NEPStatus(Enum):
    CONVERGED = 0
    MAX_IT_REACHED = 1
    FAILED = 2

class NEPReason(Enum):
    """Detailed reason for the end of a solve."""
    CONVERGED_TOL = 0
    DIVERGED_ITS = 1
    DIVERGED_USER = 2
    DIVERGED_LINEAR_SOLVE = 3
    DIVERGED_SUBSPACE_EXHAUSTED = 4
    DIVERGED_BREAKDOWN = 5
    DIVERGED_EVALUATION = 6

    @property
    def status(self) -> NEPStatus:
        if self == NEPReason.CONVERGED_TOL:
            return NEPStatus.CONVERGED
        elif self in (NEPReason.DIVERGED_ITS, NEPReason.DIVERGED_USER):
            return NEPStatus.MAX_IT_REACHED
        return NEPStatus.FAILED

@dataclass(frozen=True, kw_only=True)
class IterationRecord:
    #: Outer iteration.
    iteration: int
    #: Current eigenvalue approximation, None if the candidate was discarded.
    value: complex | None
    #: Error estimate of the convergence test.
    error: float
    #: Residual norm :math:`\|T(\lambda)u\|`.
    residual: float
    #: Size of the search space.
    subspace: int
    #: Iterations of the linear solve of this step.
    linear_iterations: int = 0
    #: Whether the linear solve service was refreshed in this step.
    refreshed: bool = False
    #: Whether the eigenpair was accepted in this step.
    locked: bool = False

@dataclass(kw_only=True)
class NEPResult[T: ArrayLike]:
    #: Reason for the end of the solve.
    reason: NEPReason
    #: Explanation of the final state.
    message: str
    #: Accepted eigenpairs in order of discovery.
    eigenpairs: EigenpairStore[T]
    #: Number of requested eigenpairs.
    nev: int
    #: Number of outer iterations performed.
    iterations: int = 0
    #: Number of times the linear solve service was refreshed.
    refreshes: int = 0
    #: Number of linear solves that did not converge.
    linear_failures: int = 0
    #: Number of subspace restarts after breakdowns or overflow.
    restarts: int = 0
    #: Time taken by the solve.
    time: float = 0.0
    #: Convergence history, one record per outer iteration.
    history: list[IterationRecord] = field(default_factory=list)

    @property
    def status(self) -> NEPStatus:
        return self.reason.status

    @property
    def converged(self) -> bool:
        return self.status == NEPStatus.CONVERGED

    def check(self) -> "NEPResult[T]":
        """Raise the error matching an unsuccessful solve, return self otherwise."""
        if self.status == NEPStatus.MAX_IT_REACHED:
            raise MaxIterationsExceeded(self.iterations, len(self.eigenpairs), self.nev)
        elif self.reason == NEPReason.DIVERGED_LINEAR_SOLVE:
            raise LinearSolveDivergence(self.linear_failures, self.message)
        elif self.status == NEPStatus.FAILED:
            raise SplitNEPError(self.message)
        return self
