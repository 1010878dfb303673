# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Protocol, Sequence, Optional
from .backend import ArrayLike
from .projectedproblem import ProjectedProblem

class ProjectedEigSolverResult[T: ArrayLike](Protocol):
    """Protocol for the result of a solver for the projected problem."""

    #: Eigenvector of the projected problem.
    array: T

    #: The computed eigenvalue.
    value: complex

    #: Whether the solver met its own stopping criterion.
    converged: bool

class ProjectedEigSolver[T: ProjectedEigSolverResult](Protocol):
    """Protocol for a solver of small dense nonlinear eigenvalue problems."""

    def __call__(self,
                 problem: ProjectedProblem,
                 target: complex,
                 locked: Sequence[complex] = [],
                 start: Optional[complex] = None, /
                 ) -> Optional[T]:
        """
        Find the eigenpair closest to target, skipping the already locked eigenvalues. The iteration
        starts at start if given, otherwise at target. Returns None if no further eigenvalue can be
        reached.
        """
        ...
