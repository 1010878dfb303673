# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""Exceptions raised by splitnep."""

class SplitNEPError(Exception):
    """Base class of all splitnep errors."""

class DimensionMismatch(SplitNEPError, ValueError):
    """The terms of a split operator or an input vector do not share the problem dimension."""

class EvaluationFailure(SplitNEPError, ArithmeticError):
    """A scalar function is undefined or not finite at the given argument."""

    def __init__(self, value: complex, msg: str = "") -> None:
        self.value = value
        super().__init__(msg or f"Function is undefined at {value}")

class LinearSolveDivergence(SplitNEPError, RuntimeError):
    """The linear solve service failed more often than tolerated."""

    def __init__(self, failures: int, msg: str = "") -> None:
        self.failures = failures
        super().__init__(msg or f"Linear solve failed {failures} times")

class SubspaceBreakdown(SplitNEPError, ArithmeticError):
    """Orthogonalization against the search space left a negligible vector."""

    def __init__(self, beta: float) -> None:
        self.beta = beta
        super().__init__(f"Orthogonalization breakdown, remaining norm {beta:.2e}")

class MaxIterationsExceeded(SplitNEPError, RuntimeError):
    """Not all requested eigenpairs converged within the iteration budget."""

    def __init__(self, iterations: int, nconv: int, nev: int) -> None:
        self.iterations = iterations
        self.nconv = nconv
        self.nev = nev
        super().__init__(f"{nconv} of {nev} eigenpairs converged after {iterations} iterations")
