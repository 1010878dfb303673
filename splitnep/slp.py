# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional, Sequence
from dataclasses import dataclass
import time
import logging
import numpy as np

from .projectedproblem import ProjectedProblem
from .matrixpencildecomposition import MatrixPencilDecomposition
from .eigsolver import EigSolver
from .errors import EvaluationFailure
from .utils import check_pos, check_non_neg

logger = logging.getLogger(__name__)

@dataclass(kw_only=True)
class SLPResult:
    #: Normalized eigenvector of the projected problem.
    array: np.ndarray
    #: Eigenvalue.
    value: complex
    #: Whether the step size fell below the tolerance.
    converged: bool
    #: Number of linearizations.
    steps: int
    #: Time taken by the solver.
    time: float

@dataclass
class SLP:
    """
    Method of successive linear problems for small dense nonlinear eigenproblems. Each step solves
    the pencil :math:`T(\\lambda) x = \\mu T'(\\lambda) x`, whose eigenvalues give the Newton
    updates :math:`\\lambda - \\mu` of all branches, and follows the branch whose update is closest
    to the target. Branches heading for a locked eigenvalue are skipped. If all branches are
    locked, the iteration continues with Newton steps on :math:`\\det T(\\lambda)` with the locked
    eigenvalues deflated (Maehly correction).
    """

    #: Maximum number of linearizations.
    nsteps: int = 50

    #: Relative step size, below which the iteration is stopped
    eps: float = 1e-13

    #: Relative size of the complex shift applied to leave critical points and locked eigenvalues.
    perturbation: float = 1e-2

    #: Relative distance to a locked eigenvalue, below which a branch counts as locked.
    lock_tol: float = 1e-6

    #: Maximum number of shifts away from points without finite updates or where T is undefined.
    max_nudges: int = 3

    #: Eigenvalue solver for the linearized pencils
    solver: MatrixPencilDecomposition = EigSolver()

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("nsteps", "perturbation"):
            check_pos(name, value)
        elif name in ("eps", "lock_tol", "max_nudges"):
            check_non_neg(name, value)
        super().__setattr__(name, value)

    def __call__(
            self,
            problem: ProjectedProblem,
            target: complex,
            locked: Sequence[complex] = [],
            start: Optional[complex] = None, /) -> Optional[SLPResult]:
        """
        Find the eigenpair of problem closest to target that is not locked, starting the iteration
        at start (default: target). Returns None if no such eigenpair can be reached.
        """
        stamp = time.time()
        target = complex(target)
        value = target if start is None else complex(start)
        vec = None
        nudges = 0
        deflate = False
        for step in range(1, self.nsteps + 1):
            try:
                mat, der = problem.evaluate(value)
            except EvaluationFailure:
                if nudges >= self.max_nudges:
                    raise
                value, nudges = self._nudge(value), nudges + 1
                continue

            mus, vecs = self.solver(mat, der)
            finite = [i for i, mu in enumerate(mus) if np.isfinite(mu)]
            if len(finite) == 0:
                if nudges >= self.max_nudges:
                    logger.debug("no finite linearized eigenvalue at %s", value)
                    return None
                value, nudges = self._nudge(value), nudges + 1
                continue

            if not deflate:
                idx = self._nearest(value, target, mus, finite, locked)
                if idx is None:
                    logger.debug("all branches locked at %s, deflating", value)
                    deflate = True
                    if any(self._near(value, lock, self.perturbation) for lock in locked):
                        while any(self._near(value, lock, self.perturbation) for lock in locked):
                            value = self._nudge(value)
                        continue
                else:
                    delta = complex(mus[idx])
            if deflate:
                idx, delta = self._deflated(value, mus, finite, locked)
                if idx is None:
                    return None

            vec = vecs[:, idx]
            value -= delta
            if abs(delta) <= self.eps * max(1.0, abs(value)):
                if any(self._near(value, lock, self.lock_tol) for lock in locked):
                    return None
                return self._result(vec, value, True, step, stamp)

        if vec is None:
            return None
        return self._result(vec, value, False, self.nsteps, stamp)

    def _nearest(
            self,
            value: complex,
            target: complex,
            mus: np.ndarray,
            finite: Sequence[int],
            locked: Sequence[complex]) -> Optional[int]:
        best, best_dist = None, float("inf")
        for i in finite:
            update = value - complex(mus[i])
            if any(self._near(update, lock, self.lock_tol) for lock in locked):
                continue
            dist = abs(update - target)
            if dist < best_dist:
                best, best_dist = i, dist
        return best

    def _deflated(
            self,
            value: complex,
            mus: np.ndarray,
            finite: Sequence[int],
            locked: Sequence[complex]) -> tuple[Optional[int], complex]:
        # d/dl log det T = sum 1/mu
        idx = min(finite, key=lambda i: abs(mus[i]))
        if mus[idx] == 0.0:
            return idx, 0j
        if any(value == lock for lock in locked):
            return None, 0j
        terms = [1.0 / complex(mus[i]) for i in finite] + [-1.0 / (value - lock) for lock in locked]
        denom = sum(terms)
        # no root left once the locked poles cancel the determinant
        if not np.isfinite(denom) or abs(denom) <= self.eps * sum(abs(term) for term in terms):
            return None, 0j
        return idx, 1.0 / denom

    def _nudge(self, value: complex) -> complex:
        return value + self.perturbation * (1+1j) * max(1.0, abs(value))

    def _near(self, value: complex, lock: complex, tol: float) -> bool:
        return abs(value - lock) <= tol * max(1.0, abs(lock))

    def _result(self, vec: np.ndarray, value: complex, converged: bool, steps: int, stamp: float) -> SLPResult:
        vec = vec / np.linalg.norm(vec)
        return SLPResult(array=vec, value=value, converged=converged, steps=steps, time=time.time() - stamp)
