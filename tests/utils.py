from typing import Any
import numpy as np
import scipy.sparse as sp
import array_api_compat as api

from splitnep.rational import Rational, constant
from splitnep.exponential import Exponential

backends = [api.array_namespace(np.zeros(1))]

#import torch as tr
#tr.set_default_dtype(tr.float64)
#backends.append(api.array_namespace(tr.zeros(1)))

def delay_matrices(n: int, sparse: bool = False) -> tuple[Any, Any, Any]:
    """Identity, A and B of the delay problem -l*I + A + exp(-tau*l)*B on (0, pi)."""
    h = np.pi / (n + 1)
    x = np.arange(1, n + 1) * h
    a = (np.diag(np.full(n-1, 1.0), -1) - 2.0 * np.eye(n) + np.diag(np.full(n-1, 1.0), 1)) / h**2
    a += 20.0 * np.eye(n)
    b = np.diag(-4.1 + x * (1.0 - np.exp(x - np.pi)))
    eye = np.eye(n)
    if sparse:
        return sp.csr_array(eye), sp.csr_array(a), sp.csr_array(b)
    return eye, a, b

def delay_terms(n: int, tau: float, sparse: bool = False) -> list[tuple[Any, Any]]:
    eye, a, b = delay_matrices(n, sparse)
    return [(eye, Rational([-1.0, 0.0])), (a, constant(1.0)), (b, Exponential(-tau))]

def delay_residual(n: int, tau: float, value: complex, vec: Any) -> float:
    eye, a, b = delay_matrices(n)
    mat = -value * eye + a + np.exp(-tau * value) * b
    vec = np.asarray(vec)
    return float(np.linalg.norm(mat @ vec) / np.linalg.norm(vec))

def initial_vector(xp, n: int):
    return xp.asarray(np.sin(4.0 * np.pi * np.arange(n) / n))

def rand_data(xp, *shape: int, seed: int = 0):
    rng = np.random.default_rng(seed)
    data = rng.random(shape) + 1j * rng.random(shape)
    return xp.asarray(data)

def delay_reference(n: int, tau: float, target: float = 0.0, nsteps: int = 100) -> float:
    """Real eigenvalue of the delay problem closest to target, from the fixed point of l = eig(A + exp(-tau*l)*B)."""
    _, a, b = delay_matrices(n)
    value = target
    for _ in range(nsteps):
        values = np.linalg.eigvalsh(a + np.exp(-tau * value) * b)
        value = float(values[np.argmin(np.abs(values - target))])
    return value
