# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Protocol, Callable, Optional
from .backend import ArrayLike

class LinearSolveResult[T: ArrayLike](Protocol):
    """Protocol for the result of a linear solve."""

    #: The solution array, an approximation if the solve did not converge.
    array: T

    #: Whether the solver reached its tolerance within its budget.
    converged: bool

    #: Number of iterations used.
    iterations: int

    #: The residuals of the linear solver.
    residuals: list[float]

class KrylovSolver[T: LinearSolveResult](Protocol):
    """Protocol for an iterative solver of a linear map with optional right preconditioner."""

    def __call__[S: ArrayLike](
        self,
        mat: Callable[[S], S],
        rhs: S,
        guess: Optional[S] = None,
        precond: Optional[Callable[[S], S]] = None, /
        ) -> T:
        """
        Solve a linear problem for a linear map with a right-hand side and an optional initial guess.
        """
        ...

class LinearSolveService[T: LinearSolveResult](Protocol):
    """
    Protocol for the linear solves of the nonlinear Arnoldi method. The operator passed to a solve
    stays the same between two calls of refresh, which hands over the assembled matrix the
    preconditioner (or factorization) is built from.
    """

    def refresh(self, matrix: Any, /) -> None:
        """Rebuild the preconditioner from an assembled matrix."""
        ...

    def __call__[S: ArrayLike](
        self,
        mat: Callable[[S], S],
        rhs: S,
        guess: Optional[S] = None, /
        ) -> T:
        """
        Solve the linear problem for the linear map with a right-hand side. Failing to converge is
        reported in the result, not raised.
        """
        ...
