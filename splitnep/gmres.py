# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Callable, Optional
from dataclasses import dataclass
import time
from math import sqrt

from .backend import ArrayLike, namespace_of_arrays, size
from .utils import check_pos, check_non_neg, norm, vdot
from .solveresult import SolveResult

class GMRESData[T: ArrayLike]:
    subspace: int
    guess: T
    basis: T

    def __init__(self, subspace: int, guess: T) -> None:
        self.subspace = min(subspace, size(guess))
        self.guess = guess
        xp = namespace_of_arrays(guess)
        self.basis = xp.zeros((self.subspace+1, *guess.shape),
                              device=guess.device, dtype=guess.dtype)

@dataclass
class GMRES:
    """
    Restarted GMRES linear solver with right preconditioning for complex linear maps.
    """

    #: Number of times the subspace is created and solved
    nsteps: int = 20

    #: Size of the Arnoldi basis
    subspace: int = 30

    #: Relative residual, after which the algorithm is stopped
    eps: float = 1e-5

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("nsteps", "subspace"):
            check_pos(name, value)
        elif name == "eps":
            check_non_neg(name, value)
        super().__setattr__(name, value)

    def __call__[T: ArrayLike](
            self,
            mat: Callable[[T], T],
            rhs: T,
            guess: Optional[T] = None,
            precond: Optional[Callable[[T], T]] = None, /) -> SolveResult[T]:
        """
        Solve the linear system with mat being a linear operator and rhs being the right hand side of
        the equation. The initial guess can be provided, otherwise it will be initialized to zero.
        """
        xp = namespace_of_arrays(rhs)
        if guess is None:
            guess = xp.zeros_like(rhs)
        if precond is None:
            precond = lambda x: x

        self._check_input(rhs, guess)

        stamp = time.time()
        rhs_norm = norm(rhs)
        if rhs_norm == 0.0:
            return SolveResult(array=xp.zeros_like(rhs), converged=True, iterations=0,
                               time=time.time() - stamp, residuals=[0.0])

        residuals = []
        iterations = 0
        data = GMRESData[T](self.subspace, xp.asarray(guess, copy=True))
        for _ in range(self.nsteps):
            residual, its = self._arnoldi_cycle(mat, precond, rhs, data)
            iterations += its
            residuals.append(residual / rhs_norm)
            if residuals[-1] <= self.eps:
                break

        return SolveResult(array=data.guess,
                           converged=residuals[-1] <= self.eps,
                           iterations=iterations,
                           time=time.time() - stamp,
                           residuals=residuals)

    def _arnoldi_cycle[T: ArrayLike](
            self,
            mat: Callable[[T], T],
            precond: Callable[[T], T],
            rhs: T,
            data: GMRESData[T]) -> tuple[float, int]:
        xp = namespace_of_arrays(rhs)
        subspace, basis = data.subspace, data.basis
        dtype = basis.dtype

        # Work arrays
        hess = xp.zeros((subspace+1, subspace), dtype=dtype)
        cs = [0.0] * subspace
        sn = [0j] * subspace
        g = xp.zeros(subspace+1, dtype=dtype)

        # Initialize with current residual
        r = rhs - mat(data.guess)
        res_norm = norm(r)
        if res_norm == 0.0:
            return res_norm, 0

        basis[0,:] = r / res_norm
        g[0] = res_norm

        idx = 0
        for i in range(subspace):

            # Modified Gram-Schmidt
            happy = self._gram_schmidt(mat, precond, basis, hess, i)

            # Apply previous Givens rotations to H column i
            for j in range(i):
                tmp = cs[j] * hess[j,i] + sn[j] * hess[j+1,i]
                hess[j+1,i] = -sn[j].conjugate() * hess[j,i] + cs[j] * hess[j+1,i]
                hess[j,i] = tmp

            # R = Q*H; zero out subdiagonal entry
            cs[i], sn[i], rot = self._givens(complex(hess[i,i]), complex(hess[i+1,i]))
            hess[i,i] = rot
            hess[i+1,i] = 0.0

            # Update g = Q*g
            g[i+1] = -sn[i].conjugate() * g[i]
            g[i] = cs[i] * g[i]

            # Residual after i+1 steps is |g[i+1]|
            idx += 1
            res_norm = abs(complex(g[idx]))

            if res_norm <= self.eps * norm(rhs) or happy:
                break

        # upper triangular solve of R y = g
        y = [0j] * idx
        for i in reversed(range(idx)):
            val = complex(g[i]) - sum(complex(hess[i,j]) * y[j] for j in range(i+1, idx))
            y[i] = val / complex(hess[i,i]) if complex(hess[i,i]) != 0 else 0j
        update = xp.tensordot(xp.asarray(y, dtype=dtype), basis[:idx,:], axes=([0], [0]))
        data.guess = data.guess + precond(update)
        return res_norm, idx

    def _gram_schmidt[T: ArrayLike](
            self,
            mat: Callable[[T], T],
            precond: Callable[[T], T],
            basis: T,
            hess: T,
            idx: int) -> bool:
        vec = mat(precond(basis[idx,:]))
        for j in range(idx + 1):
            hess[j,idx] = vdot(basis[j,:], vec)
            vec = vec - hess[j,idx] * basis[j,:]
        beta = norm(vec)
        hess[idx+1,idx] = beta
        if beta > 0.0:
            basis[idx+1,:] = vec / beta
        return beta == 0.0

    def _givens(self, val1: complex, val2: complex) -> tuple[float, complex, complex]:
        denom = sqrt(abs(val1)**2 + abs(val2)**2)
        if denom == 0.0:
            return 1.0, 0j, 0j
        if val1 == 0.0:
            return 0.0, 1+0j, val2
        phase = val1 / abs(val1)
        return abs(val1)/denom, phase * val2.conjugate() / denom, phase * denom

    def _check_input(self, rhs: ArrayLike, guess: ArrayLike) -> None:
        if guess.shape != rhs.shape:
            raise ValueError("x0 and b must have the same shape.")
        if guess.device != rhs.device:
            raise ValueError("x0 and b must be on the same device.")
