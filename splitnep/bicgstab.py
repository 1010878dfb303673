# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Callable, Optional
from dataclasses import dataclass
import time

from .backend import ArrayLike, namespace_of_arrays
from .utils import check_pos, check_non_neg, norm, vdot
from .solveresult import SolveResult

@dataclass
class BiCGStab:
    """
    Stabilized bi-conjugate gradient solver with right preconditioning for complex linear maps.
    """

    #: Maximum number of iterations
    maxit: int = 200

    #: Relative residual, after which the algorithm is stopped
    eps: float = 1e-5

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "maxit":
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
        Breakdowns end the iteration and are reported as not converged.
        """
        xp = namespace_of_arrays(rhs)
        if precond is None:
            precond = lambda x: x

        stamp = time.time()
        rhs_norm = norm(rhs)
        if rhs_norm == 0.0:
            return SolveResult(array=xp.zeros_like(rhs), converged=True, iterations=0,
                               time=time.time() - stamp, residuals=[0.0])

        if guess is None:
            x = xp.zeros_like(rhs)
            r = rhs
        else:
            if guess.shape != rhs.shape:
                raise ValueError("x0 and b must have the same shape.")
            x = xp.asarray(guess, copy=True)
            r = rhs - mat(x)
        shadow = r
        residuals = [norm(r) / rhs_norm]
        p = v = xp.zeros_like(rhs)
        rho_old = alpha = omega = 1+0j

        its = 0
        while residuals[-1] > self.eps and its < self.maxit:
            its += 1
            rho = vdot(shadow, r)
            if rho == 0.0:
                break
            if its == 1:
                p = r
            else:
                beta = (rho / rho_old) * (alpha / omega)
                p = r + beta * (p - omega * v)
            phat = precond(p)
            v = mat(phat)
            denom = vdot(shadow, v)
            if denom == 0.0:
                break
            alpha = rho / denom
            s = r - alpha * v
            if norm(s) / rhs_norm <= self.eps:
                x = x + alpha * phat
                residuals.append(norm(s) / rhs_norm)
                break

            shat = precond(s)
            t = mat(shat)
            tt = vdot(t, t)
            if tt == 0.0:
                break
            omega = vdot(t, s) / tt
            x = x + alpha * phat + omega * shat
            r = s - omega * t
            residuals.append(norm(r) / rhs_norm)
            if omega == 0.0:
                break
            rho_old = rho

        return SolveResult(array=x,
                           converged=residuals[-1] <= self.eps,
                           iterations=its,
                           time=time.time() - stamp,
                           residuals=residuals)
