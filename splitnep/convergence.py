# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from enum import Enum

from .utils import EPS

class ConvergenceTest(Enum):
    """Error estimate compared against the tolerance of the nonlinear Arnoldi method."""
    #: :math:`\|r\|`
    ABSOLUTE = 0
    #: :math:`\|r\|/\max(|\lambda|, 1)`
    RELATIVE = 1
    #: :math:`\|r\|/\sum_k |f_k(\lambda)| \|M_k\|`
    NORM = 2

class ErrorType(Enum):
    """Error reported for converged eigenpairs."""
    ABSOLUTE = 0
    RELATIVE = 1
    BACKWARD = 2

def compute_error(kind: ErrorType, value: complex, residual: float, norm: float, floor: float = EPS) -> float:
    """
    Error of an eigenpair with eigenvalue value, residual norm :math:`\\|T(\\lambda)u\\|/\\|u\\|` and
    operator norm :math:`\\sum_k |f_k(\\lambda)| \\|M_k\\|`. Normalizations are bounded below by floor.
    """
    if kind == ErrorType.ABSOLUTE:
        return residual
    elif kind == ErrorType.RELATIVE:
        return residual / max(abs(value), floor)
    elif kind == ErrorType.BACKWARD:
        return residual / max(norm, floor)
    raise ValueError(f"Unknown error type {kind}.")

def error_estimate(test: ConvergenceTest, value: complex, residual: float, norm: float) -> float:
    kind = {ConvergenceTest.ABSOLUTE: ErrorType.ABSOLUTE,
            ConvergenceTest.RELATIVE: ErrorType.RELATIVE,
            ConvergenceTest.NORM: ErrorType.BACKWARD}[test]
    # eigenvalues close to zero are compared absolutely
    floor = 1.0 if test == ConvergenceTest.RELATIVE else EPS
    return compute_error(kind, value, residual, norm, floor)
