# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Sequence
import math

from .backend import ArrayLike, ArrayNamespace
from .utils import norm, vdot
from .errors import SubspaceBreakdown

class Subspace[T: ArrayLike]:
    """
    Orthonormal basis of the search space, stored row-wise in a preallocated array of
    ``capacity`` rows.
    """

    capacity: int
    _basis: T
    _count: int

    def __init__(
            self,
            xp: ArrayNamespace[T],
            size: int,
            capacity: int,
            dtype: Any = None,
            device: Any = None,
            tol: float = 1e-12) -> None:
        self.capacity = capacity
        self.tol = tol
        self._xp = xp
        dtype = xp.complex128 if dtype is None else dtype
        self._basis = xp.zeros((capacity, size), dtype=dtype, device=device)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    @property
    def namespace(self) -> ArrayNamespace[T]:
        return self._xp

    @property
    def size(self) -> int:
        """Dimension of the vectors."""
        return self._basis.shape[1]

    @property
    def full(self) -> bool:
        return self._count >= self.capacity

    @property
    def basis(self) -> T:
        """Orthonormal basis vectors as rows, shape (m, n)."""
        return self._basis[:self._count,:]

    def append(self, vec: T) -> float:
        """
        Orthonormalize vec against the basis with two passes of Gram-Schmidt and append it. Returns
        the norm of the orthogonal part relative to the norm of vec.
        """
        if self.full:
            raise IndexError("Subspace is full.")
        vec_norm = norm(vec)
        if vec_norm == 0.0 or not math.isfinite(vec_norm):
            raise SubspaceBreakdown(0.0)
        vec = vec / vec_norm
        for _ in range(2):
            vec = self._gram_schmidt(vec)
        beta = norm(vec)
        if not math.isfinite(beta) or beta < self.tol:
            raise SubspaceBreakdown(beta)
        self._basis[self._count,:] = vec / beta
        self._count += 1
        return beta

    def expand[S: ArrayLike](self, coeffs: S) -> T:
        """Map coefficients with respect to the basis to the full space."""
        xp = self._xp
        coeffs = xp.asarray(coeffs, dtype=self._basis.dtype, device=self._basis.device)
        return xp.tensordot(coeffs, self.basis, axes=([0], [0]))

    def reset(self, vectors: Sequence[T] = []) -> None:
        """Restart the basis from the given vectors, dropping those that are numerically dependent."""
        self._count = 0
        for vec in vectors[:self.capacity]:
            try:
                self.append(vec)
            except SubspaceBreakdown:
                continue

    def _gram_schmidt(self, vec: T) -> T:
        for i in range(self._count):
            vec = vec - vdot(self._basis[i,:], vec) * self._basis[i,:]
        return vec
