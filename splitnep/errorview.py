# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""Text reports of a nonlinear eigensolve: the reason for its end, the errors of the computed
eigenpairs and the convergence history."""

from .nepresult import NEPResult
from .convergence import ErrorType
from .utils import format_scalar

_HEADERS = {
    ErrorType.ABSOLUTE: "||T(k)x||",
    ErrorType.RELATIVE: "||T(k)x||/||kx||",
    ErrorType.BACKWARD: "eta(x,k)",
}

def reason_view(result: NEPResult) -> str:
    if result.converged:
        nconv = len(result.eigenpairs)
        return (f" Nonlinear eigensolve converged ({nconv} eigenpair{'s' if nconv != 1 else ''}) "
                f"due to {result.reason.name}; iterations {result.iterations}\n")
    return (f" Nonlinear eigensolve did not converge due to {result.reason.name}; "
            f"iterations {result.iterations}\n")

def error_view(
        result: NEPResult,
        kind: ErrorType = ErrorType.RELATIVE,
        terse: bool = False,
        tol: float | None = None) -> str:
    """
    Report the errors of the first nev eigenpairs. The terse form only lists the eigenvalues if
    all errors are below tol (default: 1e-8), the detailed form prints a table of all pairs.
    """
    pairs = list(result.eigenpairs)
    nev = result.nev
    if len(pairs) < nev:
        return f" Problem: less than {nev} eigenvalues converged\n\n"
    if terse:
        tol = 1e-8 if tol is None else tol
        errors = [pair.error(kind) for pair in pairs[:nev]]
        if any(err >= tol for err in errors):
            return f" Problem: some of the first {nev} relative errors are higher than the tolerance\n\n"
        values = ", ".join(format_scalar(pair.value, 5) for pair in pairs[:nev])
        return f" All requested eigenvalues computed up to the required tolerance:\n     {values}\n\n"

    sep = "   " + "-" * 17 + " " + "-" * 18 + "\n"
    lines = [f"{'k':>13}{_HEADERS[kind]:>24}\n", sep]
    for pair in pairs:
        lines.append(f"   {format_scalar(pair.value):>17} {pair.error(kind):>18.6e}\n")
    lines.append(sep)
    return "".join(lines) + "\n"

def history_view(result: NEPResult) -> str:
    """One line per outer iteration with the current approximation and its error estimate."""
    lines = []
    for rec in result.history:
        if rec.value is None:
            lines.append(f"{rec.iteration:4d} NEP candidate discarded, subspace {rec.subspace}\n")
            continue
        flag = " locked" if rec.locked else ""
        lines.append(f"{rec.iteration:4d} NEP value {format_scalar(rec.value)} "
                     f"error estimate {rec.error:.6e} subspace {rec.subspace}{flag}\n")
    return "".join(lines)
