# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Callable, Optional, Sequence, Type, overload
import h5py
import scipy.sparse as sp

from .backend import ArrayNamespace, get_namespace
from .scalarfunction import ScalarFunction
from .rational import Rational, constant as _constant, polynomial as _polynomial
from .exponential import Exponential
from .splitoperator import SplitOperator, Matrix

from .matrixpencildecomposition import MatrixPencilDecomposition
from .eigsolver import EigSolver
from .projectedeigsolver import ProjectedEigSolver
from .slp import SLP

from .linearsolveservice import LinearSolveService
from .preconditioner import PreconditionerType
from .krylovsolve import KrylovSolve, KrylovMethod
from .directsolve import DirectSolve
from .gmres import GMRES
from .bicgstab import BiCGStab

from .convergence import ConvergenceTest, ErrorType
from .eigenpairstore import Eigenpair, EigenpairStore
from .nepresult import NEPResult, IterationRecord
from .narnoldi import NArnoldi

from .io import write as _write, read as _read
from .errorview import reason_view, error_view, history_view

class SplitNEP[NDArray: Any]:
    """
    Entry point for nonlinear eigenvalue problems in split form bound to one array library.
    """

    #: Array namespace for the underlying array library.
    namespace: ArrayNamespace[NDArray]

    def __init__(self, namespace: Any) -> None:
        object.__setattr__(self, "namespace", get_namespace(namespace))

    #-------------------------------------------------------------------------------------------------
    # scalar function wrapper

    def rational(
            self,
            numerator: Sequence[complex],
            denominator: Sequence[complex] = (1.0,),
            scale: complex = 1.0) -> Rational:
        """
        :math:`f(\\lambda)=p(\\lambda)/q(\\lambda)`.\n
        Rational function with coefficients given highest degree first.
        """
        return Rational(numerator, denominator, scale=scale)

    def polynomial(self, coeffs: Sequence[complex]) -> Rational:
        """
        :math:`f(\\lambda)=\\sum_i{c_i\\lambda^{d-i}}`.\n
        Polynomial with coefficients given highest degree first.
        """
        return _polynomial(coeffs)

    def constant(self, value: complex) -> Rational:
        """
        :math:`f(\\lambda)=c`.
        """
        return _constant(value)

    def exp(self, factor: complex = 1.0, offset: complex = 0.0, scale: complex = 1.0) -> Exponential:
        """
        :math:`f(\\lambda)=s e^{a\\lambda+b}`.\n
        Use ``exp(-tau)`` for the kernel of a delay term with delay tau.
        """
        return Exponential(factor, offset, scale=scale)

    #-------------------------------------------------------------------------------------------------
    # operator wrapper

    def split_operator(self, *terms: tuple[Matrix, ScalarFunction]) -> SplitOperator[NDArray]:
        """
        :math:`T(\\lambda)=\\sum_k{f_k(\\lambda) M_k}`.\n
        Dense matrices are converted to the array library, sparse matrices of scipy are kept.
        """
        conv = [(mat if sp.issparse(mat) else self.namespace.asarray(mat), func) for mat, func in terms]
        return SplitOperator(conv)

    #-------------------------------------------------------------------------------------------------
    # solver wrapper

    def slp(
            self, *,
            nsteps: int = 50,
            eps: float = 1e-13,
            perturbation: float = 1e-2,
            lock_tol: float = 1e-6,
            max_nudges: int = 3,
            solver: MatrixPencilDecomposition = EigSolver()) -> SLP:
        """
        Successive linear problems for the small projected problems.
        """
        return SLP(nsteps=nsteps, eps=eps, perturbation=perturbation, lock_tol=lock_tol,
                   max_nudges=max_nudges, solver=solver)

    def gmres(self, *, nsteps: int = 20, subspace: int = 30, eps: float = 1e-5) -> GMRES:
        """
        Restarted GMRES iterative linear solver.
        """
        return GMRES(nsteps=nsteps, subspace=subspace, eps=eps)

    def bicgstab(self, *, maxit: int = 200, eps: float = 1e-5) -> BiCGStab:
        """
        BiCGStab iterative linear solver.
        """
        return BiCGStab(maxit=maxit, eps=eps)

    def krylov_solve(
            self, *,
            method: KrylovMethod = KrylovMethod.BICGSTAB,
            preconditioner: PreconditionerType = PreconditionerType.BLOCK_JACOBI,
            eps: float = 1e-5,
            maxit: int = 200,
            nblocks: int = 1,
            restart: int = 30) -> KrylovSolve:
        """
        Preconditioned Krylov linear solve service.
        """
        return KrylovSolve(method=method, preconditioner=preconditioner, eps=eps,
                           maxit=maxit, nblocks=nblocks, restart=restart)

    def direct_solve(self, *, eps: float = 1e-8) -> DirectSolve:
        """
        Linear solve service using a LU factorization.
        """
        return DirectSolve(eps=eps)

    def narnoldi(
            self, *,
            nev: int = 1,
            target: complex = 0.0,
            tol: float = 1e-8,
            max_it: int = 100,
            lag: int = 1,
            ncv: Optional[int] = None,
            restart: bool = True,
            conv_test: ConvergenceTest = ConvergenceTest.RELATIVE,
            max_linear_failures: int = 3,
            shift_tol: float = 1e-2,
            seed: int = 0,
            inner: Optional[ProjectedEigSolver] = None,
            linsolver: Optional[LinearSolveService] = None) -> NArnoldi:
        """
        Nonlinear Arnoldi eigensolver for split operators.
        """
        return NArnoldi(nev=nev, target=target, tol=tol, max_it=max_it, lag=lag, ncv=ncv,
                        restart=restart, conv_test=conv_test,
                        max_linear_failures=max_linear_failures, shift_tol=shift_tol, seed=seed,
                        inner=SLP() if inner is None else inner,
                        linsolver=KrylovSolve() if linsolver is None else linsolver)

    def solve(
            self,
            op: SplitOperator[NDArray],
            initial: Sequence[NDArray] = [],
            callback: Optional[Callable[[IterationRecord], bool]] = None,
            **params: Any) -> NEPResult[NDArray]:
        """
        Solve with a nonlinear Arnoldi eigensolver configured by params.
        """
        return self.narnoldi(**params)(op, initial, callback)

    #-------------------------------------------------------------------------------------------------
    # io wrapper

    @overload
    def write(self, group: h5py.Group, obj: Eigenpair[NDArray]) -> None: ...
    @overload
    def write(self, group: h5py.Group, obj: EigenpairStore[NDArray]) -> None: ...
    @overload
    def write(self, group: h5py.Group, obj: NEPResult[NDArray]) -> None: ...
    # implementation
    def write(self, group: h5py.Group, obj: Any) -> None:
        """
        Write an eigenpair, a collection of eigenpairs or a solve result to a hdf5 group.
        """
        _write(group, obj)

    @overload
    def read(self, group: h5py.Group, cls: Type[Eigenpair]) -> Eigenpair[NDArray]: ...
    @overload
    def read(self, group: h5py.Group, cls: Type[EigenpairStore]) -> EigenpairStore[NDArray]: ...
    @overload
    def read(self, group: h5py.Group, cls: Type[NEPResult]) -> NEPResult[NDArray]: ...
    # implementation
    def read(self, group: h5py.Group, cls: Any) -> Any:
        """
        Read an eigenpair, a collection of eigenpairs or a solve result from a hdf5 group.
        """
        return _read(group, cls, self.namespace)

    #-------------------------------------------------------------------------------------------------
    # report wrapper

    def reason_view(self, result: NEPResult[NDArray]) -> str:
        """Why the solve ended."""
        return reason_view(result)

    def error_view(
            self,
            result: NEPResult[NDArray],
            kind: ErrorType = ErrorType.RELATIVE,
            terse: bool = False) -> str:
        """Errors of the computed eigenpairs, as list of values or as table."""
        return error_view(result, kind, terse)

    def history_view(self, result: NEPResult[NDArray]) -> str:
        """Convergence history of the solve."""
        return history_view(result)
