# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any
import numpy as np

from .backend import ArrayLike, ArrayNamespace, namespace_of_arrays

#: Machine epsilon of double precision, used as floor for error normalizations.
EPS = float(np.finfo(np.float64).eps)

def check_pos(msg: str, value: int | float):
    if value <= 0:
        raise ValueError(f"{msg} must be above zero, got {value}")

def check_non_neg(msg: str, value: int | float):
    if value < 0:
        raise ValueError(f"{msg} must be a positive, got {value}")

def vdot[T: ArrayLike](x: T, y: T) -> complex:
    """Euclidean inner product, conjugate-linear in the first argument."""
    xp = namespace_of_arrays(x, y)
    return complex(xp.sum(xp.conj(x) * y))

def norm(x: ArrayLike) -> float:
    xp = namespace_of_arrays(x)
    return float(xp.sqrt(xp.sum(xp.abs(x)**2)))

def random_vector[T: ArrayLike](
        xp: ArrayNamespace[T],
        size: int,
        rng: np.random.Generator,
        device: Any = None) -> T:
    """Normalized complex vector with real, normally distributed entries."""
    data = rng.standard_normal(size)
    data /= np.linalg.norm(data)
    return xp.asarray(data.astype(np.complex128), device=device)

def format_scalar(value: complex, digits: int = 6) -> str:
    """Short text form of a possibly complex scalar, dropping a vanishing imaginary part."""
    value = complex(value)
    tiny = 10 * EPS * max(1.0, abs(value))
    real = 0.0 if abs(value.real) <= tiny else value.real
    if abs(value.imag) <= tiny:
        return f"{real:.{digits}f}"
    sign = "+" if value.imag >= 0 else "-"
    return f"{real:.{digits}f}{sign}{abs(value.imag):.{digits}f}i"
