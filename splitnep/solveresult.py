# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from dataclasses import dataclass, field
from .backend import ArrayLike

@dataclass(kw_only=True)
class SolveResult[T: ArrayLike]:
    #: Solution of the linear system.
    array: T
    #: Whether the relative residual fell below the tolerance.
    converged: bool
    #: Number of iterations (applications of the operator for direct solves).
    iterations: int
    #: Time taken to compute the solution.
    time: float
    #: Convergence history of the relative residuals.
    residuals: list[float] = field(default_factory=list)
