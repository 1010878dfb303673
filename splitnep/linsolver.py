# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any
from enum import Enum

from .linearsolveservice import LinearSolveService
from .krylovsolve import KrylovSolve
from .directsolve import DirectSolve

class LinearSolverType(Enum):
    KRYLOV = 0
    DIRECT = 1

def linear_solve_service(kind: LinearSolverType = LinearSolverType.KRYLOV, **params: Any) -> LinearSolveService:
    """
    Create a linear solve service, e.g.
    ``linear_solve_service(LinearSolverType.KRYLOV, method=KrylovMethod.GMRES, nblocks=4)``.
    """
    if kind == LinearSolverType.KRYLOV:
        return KrylovSolve(**params)
    elif kind == LinearSolverType.DIRECT:
        return DirectSolve(**params)
    raise ValueError(f"Unknown linear solver type {kind}.")
