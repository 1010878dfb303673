# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Callable, Optional, Sequence
from dataclasses import dataclass, field
import time
import logging
import numpy as np

from .backend import ArrayLike, to_numpy
from .utils import check_pos, check_non_neg, norm, random_vector, format_scalar
from .errors import DimensionMismatch, EvaluationFailure, SubspaceBreakdown
from .splitoperator import SplitOperator
from .projectedproblem import ProjectedProblem
from .projectedeigsolver import ProjectedEigSolver
from .slp import SLP
from .linearsolveservice import LinearSolveService
from .krylovsolve import KrylovSolve
from .subspace import Subspace
from .convergence import ConvergenceTest, error_estimate
from .eigenpairstore import Eigenpair, EigenpairStore
from .nepresult import NEPResult, NEPReason, IterationRecord

logger = logging.getLogger(__name__)

@dataclass
class LagState:
    """Counts the outer iterations since the linear solve service was refreshed."""

    #: Number of outer iterations between two refreshes.
    lag: int
    #: Outer iterations since the last refresh.
    count: int = 0
    #: Number of refreshes so far.
    refreshes: int = 0

    @property
    def due(self) -> bool:
        return self.count >= self.lag

    def refreshed(self) -> None:
        self.count = 0
        self.refreshes += 1

    def step(self) -> None:
        self.count += 1

@dataclass
class NArnoldi:
    """
    Nonlinear Arnoldi method for eigenproblems :math:`T(\\lambda)u = 0` of split operators.

    Every outer iteration projects the operator onto the search space, solves the projected
    problem for the unlocked eigenvalue closest to the target and computes the residual
    :math:`r = T(\\lambda)u` of the Ritz pair. Converged pairs are locked, otherwise the search space
    is expanded by :math:`T(\\sigma)^{-1}r`, solved with the linear solve service. Every lag
    iterations the shift :math:`\\sigma` and the preconditioner of the service are refreshed with the
    eigenvalue approximation of the previous iteration, as long as its error is below shift_tol, and
    with the target otherwise.
    """

    #: Number of requested eigenpairs.
    nev: int = 1
    #: Eigenvalues closest to the target are searched, also the first shift of the linear solves.
    target: complex = 0.0
    #: Tolerance of the convergence test.
    tol: float = 1e-8
    #: Maximum number of outer iterations.
    max_it: int = 100
    #: Number of outer iterations between refreshes of the linear solve service.
    lag: int = 1
    #: Maximum size of the search space, defaults to min(n, max(2*nev+20, 50)).
    ncv: Optional[int] = None
    #: Restart a full search space with the locked vectors and the current Ritz vector instead of failing.
    restart: bool = True
    #: Error estimate compared against tol.
    conv_test: ConvergenceTest = ConvergenceTest.RELATIVE
    #: Number of tolerated linear solves that do not converge.
    max_linear_failures: int = 3
    #: Error below which an approximation replaces the target as shift of the linear solves.
    shift_tol: float = 1e-2
    #: Seed of the random vectors for the default initial space and restarts.
    seed: int = 0
    #: Solver of the projected problems.
    inner: ProjectedEigSolver = field(default_factory=SLP)
    #: Service for the linear solves of the expansion step.
    linsolver: LinearSolveService = field(default_factory=KrylovSolve)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("nev", "max_it", "lag"):
            check_pos(name, value)
        elif name == "ncv" and value is not None:
            check_pos(name, value)
        elif name in ("tol", "shift_tol", "max_linear_failures"):
            check_non_neg(name, value)
        super().__setattr__(name, value)

    def __call__[T: ArrayLike](
            self,
            op: SplitOperator[T],
            initial: Sequence[T] = [],
            callback: Optional[Callable[[IterationRecord], bool]] = None,
            ) -> NEPResult[T]:
        """
        Compute nev eigenpairs of op starting from the space spanned by the initial vectors, or
        from a random vector. The callback receives the record of every iteration and stops the
        solve by returning True.
        """
        stamp = time.time()
        xp = op.namespace
        ncv = self._subspace_size(op.size)
        self._check_input(op, initial, ncv)

        rng = np.random.default_rng(self.seed)
        space = Subspace[T](xp, op.size, ncv)
        space.reset([xp.asarray(vec, dtype=xp.complex128) for vec in initial])
        if len(space) == 0:
            space.append(random_vector(xp, op.size, rng))

        store = EigenpairStore[T]()
        result = NEPResult[T](reason=NEPReason.DIVERGED_ITS, message="", eigenpairs=store, nev=self.nev)
        lag = LagState(self.lag)
        shift = self._initial_shift(op, lag)
        if shift is None:
            result.reason = NEPReason.DIVERGED_EVALUATION
            result.message = f"operator cannot be evaluated close to the target {format_scalar(self.target)}"
            return self._finish(result, lag, stamp)
        base = shift
        # last unlocked approximation, and the next shift once it is accurate enough
        start: Optional[complex] = None
        approx: Optional[complex] = None

        for its in range(1, self.max_it + 1):
            result.iterations = its
            problem = ProjectedProblem(op.functions, to_numpy(op.projected_matrices(space.basis)))
            try:
                cand = self.inner(problem, complex(self.target), store.values, start)
                if cand is not None and not cand.converged:
                    logger.warning("iter %d: projected problem did not converge, candidate discarded", its)
                    cand = None
                if cand is not None:
                    vec = space.expand(cand.array)
                    vec = vec / norm(vec)
                    res = op.apply(cand.value, vec)
                    fnorm = op.function_norm(cand.value)
            except EvaluationFailure as err:
                logger.warning("iter %d: candidate discarded, %s", its, err)
                cand = None

            if cand is None:
                record = IterationRecord(iteration=its, value=None, error=float("inf"),
                                         residual=float("inf"), subspace=len(space))
                start = approx = None
                if not self._grow(space, None, None, store, rng, result):
                    result.history.append(record)
                    break
            else:
                value = cand.value
                residual = norm(res)
                error = error_estimate(self.conv_test, value, residual, fnorm)
                logger.debug("iter %d: lambda=%s error=%.3e subspace=%d",
                             its, format_scalar(value), error, len(space))

                if error <= self.tol:
                    store.append(Eigenpair(value=value, array=vec, residual=residual,
                                           norm=fnorm, iteration=its))
                    logger.info("iter %d: locked eigenvalue %s, error %.3e", its, format_scalar(value), error)
                    record = IterationRecord(iteration=its, value=value, error=error, residual=residual,
                                             subspace=len(space), locked=True)
                    # T is singular at a locked eigenvalue
                    start = approx = None
                else:
                    refreshed = False
                    if lag.due:
                        sigma = base if approx is None else approx
                        if sigma != shift:
                            try:
                                self._refresh(op, sigma, lag)
                                shift, refreshed = sigma, True
                            except EvaluationFailure as err:
                                logger.warning("iter %d: keeping shift %s, %s", its, format_scalar(shift), err)
                    sol = self.linsolver(lambda x: op.apply(shift, x), res)
                    record = IterationRecord(iteration=its, value=value, error=error, residual=residual,
                                             subspace=len(space), linear_iterations=sol.iterations,
                                             refreshed=refreshed)
                    if not sol.converged:
                        result.linear_failures += 1
                        logger.warning("iter %d: linear solve did not converge after %d iterations (%d/%d tolerated)",
                                       its, sol.iterations, result.linear_failures, self.max_linear_failures)
                        if result.linear_failures > self.max_linear_failures:
                            result.history.append(record)
                            result.reason = NEPReason.DIVERGED_LINEAR_SOLVE
                            result.message = f"linear solve failed {result.linear_failures} times"
                            break
                    if not self._grow(space, sol.array, vec, store, rng, result):
                        result.history.append(record)
                        break
                    start = value
                    approx = value if error < self.shift_tol else None

            lag.step()
            result.history.append(record)
            if len(store) >= self.nev:
                result.reason = NEPReason.CONVERGED_TOL
                break
            if callback is not None and callback(record):
                result.reason = NEPReason.DIVERGED_USER
                break

        return self._finish(result, lag, stamp)

    def _finish[T: ArrayLike](self, result: NEPResult[T], lag: LagState, stamp: float) -> NEPResult[T]:
        if not result.message:
            result.message = self._message(result)
        result.refreshes = lag.refreshes
        result.time = time.time() - stamp
        logger.info("solve finished with %s: %s", result.reason.name, result.message)
        return result

    def _initial_shift[T: ArrayLike](self, op: SplitOperator[T], lag: LagState) -> Optional[complex]:
        """Refresh the linear solve service at the target, or next to it where op is undefined at the target."""
        target = complex(self.target)
        for i in range(4):
            shift = target + i * 1e-2 * (1+1j) * max(1.0, abs(target))
            try:
                self._refresh(op, shift, lag)
                return shift
            except EvaluationFailure as err:
                logger.warning("cannot refresh linear solver at shift %s, %s", format_scalar(shift), err)
        return None

    def _grow[T: ArrayLike](
            self,
            space: Subspace[T],
            vec: Optional[T],
            ritz: Optional[T],
            store: EigenpairStore[T],
            rng: np.random.Generator,
            result: NEPResult[T]) -> bool:
        """Append vec (or a random vector) to the search space. Returns False if the space cannot grow."""
        if space.full:
            if not self.restart or len(store) + 1 >= space.capacity:
                result.reason = NEPReason.DIVERGED_SUBSPACE_EXHAUSTED
                result.message = f"search space of size {space.capacity} exhausted"
                return False
            keep = [pair.array for pair in store]
            if ritz is not None:
                keep.append(ritz)
            space.reset(keep)
            result.restarts += 1
            logger.info("search space restarted with %d vectors", len(space))

        if vec is not None:
            try:
                space.append(vec)
                return True
            except SubspaceBreakdown as err:
                logger.warning("%s, expanding with a random vector", err)
                result.restarts += 1
        for _ in range(3):
            try:
                space.append(random_vector(space.namespace, space.size, rng))
                return True
            except SubspaceBreakdown:
                continue
        result.reason = NEPReason.DIVERGED_BREAKDOWN
        result.message = f"no expansion vector found outside the search space of size {len(space)}"
        return False

    def _refresh[T: ArrayLike](self, op: SplitOperator[T], shift: complex, lag: LagState) -> None:
        logger.info("refreshing linear solver at shift %s", format_scalar(shift))
        self.linsolver.refresh(op.assemble(shift))
        lag.refreshed()

    def _message(self, result: NEPResult) -> str:
        nconv = len(result.eigenpairs)
        if result.reason == NEPReason.CONVERGED_TOL:
            return f"{nconv} eigenpairs converged in {result.iterations} iterations"
        elif result.reason == NEPReason.DIVERGED_USER:
            return f"stopped by callback after {result.iterations} iterations, {nconv} of {self.nev} converged"
        return f"maximum number of iterations {self.max_it} reached, {nconv} of {self.nev} converged"

    def _subspace_size(self, size: int) -> int:
        if self.ncv is not None:
            return min(self.ncv, size)
        return min(size, max(2*self.nev + 20, 50))

    def _check_input[T: ArrayLike](self, op: SplitOperator[T], initial: Sequence[T], ncv: int) -> None:
        if self.nev > op.size:
            raise ValueError(f"nev={self.nev} exceeds the dimension {op.size}.")
        if self.nev > ncv:
            raise ValueError(f"nev={self.nev} exceeds the search space size {ncv}.")
        for i, vec in enumerate(initial):
            if tuple(vec.shape) != (op.size,):
                raise DimensionMismatch(f"Initial vector {i} of shape {vec.shape} does not match dimension {op.size}.")
