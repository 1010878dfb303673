# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Protocol, Sequence
import numpy as np
import scipy.sparse as sp
import opt_einsum as oe

from .backend import ArrayLike, ArrayNamespace, namespace_of_matrix, to_numpy
from .scalarfunction import ScalarFunction
from .errors import DimensionMismatch

class Matrix(Protocol):
    """Square linear operator of a split operator term, e.g. a dense array or a scipy.sparse matrix."""

    @property
    def shape(self) -> tuple[int, ...]: ...

    def __matmul__(self, other: Any, /) -> Any: ...

class SplitOperator[T: ArrayLike]:
    """
    Nonlinear matrix function in split form :math:`T(\\lambda) = \\sum_k f_k(\\lambda) M_k`.
    The matrices are owned by the caller and are never modified.
    """

    _matrices: tuple[Matrix, ...]
    _functions: tuple[ScalarFunction, ...]
    _norms: tuple[float, ...]
    _size: int
    _xp: ArrayNamespace[T]

    def __init__(self, terms: Sequence[tuple[Matrix, ScalarFunction]]) -> None:
        self._check_terms(terms)
        self._matrices = tuple(mat for mat, _ in terms)
        self._functions = tuple(func for _, func in terms)
        self._size = int(self._matrices[0].shape[0])
        self._xp = namespace_of_matrix(self._matrices[0])
        self._norms = tuple(_inf_norm(mat) for mat in self._matrices)

    @property
    def size(self) -> int:
        """Dimension n of the problem."""
        return self._size

    @property
    def nterms(self) -> int:
        return len(self._matrices)

    @property
    def matrices(self) -> tuple[Matrix, ...]:
        return self._matrices

    @property
    def functions(self) -> tuple[ScalarFunction, ...]:
        return self._functions

    @property
    def norms(self) -> tuple[float, ...]:
        """Infinity norms of the matrices."""
        return self._norms

    @property
    def namespace(self) -> ArrayNamespace[T]:
        return self._xp

    def coefficients(self, value: complex) -> list[tuple[complex, complex]]:
        return [func.evaluate(value) for func in self._functions]

    def apply(self, value: complex, x: T) -> T:
        """Compute :math:`T(\\lambda)x`."""
        coeffs = [val for val, _ in self.coefficients(value)]
        return self._combine(coeffs, x)

    def apply_derivative(self, value: complex, x: T) -> T:
        """Compute :math:`T'(\\lambda)x`."""
        coeffs = [der for _, der in self.coefficients(value)]
        return self._combine(coeffs, x)

    def projected_matrices(self, basis: T) -> T:
        """
        Project all matrices onto the space spanned by the rows of the orthonormal ``basis`` of
        shape (m, n). Returns the stacked matrices :math:`V^H M_k V` of shape (k, m, m).
        """
        xp = self._xp
        if basis.ndim != 2 or basis.shape[1] != self._size:
            raise DimensionMismatch(f"Basis of shape {basis.shape} does not match dimension {self._size}")
        images = xp.stack([xp.asarray(mat @ basis.T) for mat in self._matrices])
        return oe.contract("in,knj->kij", xp.conj(basis), images)

    def assemble(self, value: complex) -> Any:
        """Materialize :math:`T(\\lambda)` as dense or sparse matrix, following the type of the terms."""
        coeffs = [val for val, _ in self.coefficients(value)]
        result = coeffs[0] * self._matrices[0]
        for coeff, mat in zip(coeffs[1:], self._matrices[1:]):
            result = result + coeff * mat
        return result

    def function_norm(self, value: complex) -> float:
        """Compute :math:`\\sum_k |f_k(\\lambda)| \\|M_k\\|_\\infty`."""
        return sum(abs(val) * nrm for (val, _), nrm in zip(self.coefficients(value), self._norms))

    def _combine(self, coeffs: Sequence[complex], x: T) -> T:
        result = coeffs[0] * (self._matrices[0] @ x)
        for coeff, mat in zip(coeffs[1:], self._matrices[1:]):
            result = result + coeff * (mat @ x)
        return result

    def _check_terms(self, terms: Sequence[tuple[Matrix, ScalarFunction]]) -> None:
        if len(terms) == 0:
            raise DimensionMismatch("Split operator needs at least one term.")
        sizes = []
        for i, (mat, func) in enumerate(terms):
            if not isinstance(func, ScalarFunction):
                raise TypeError(f"Term {i} has no scalar function.")
            if len(mat.shape) != 2 or mat.shape[0] != mat.shape[1]:
                raise DimensionMismatch(f"Matrix {i} of shape {mat.shape} is not square.")
            sizes.append(mat.shape[0])
        if any(s != sizes[0] for s in sizes[1:]):
            raise DimensionMismatch(f"Matrices have different sizes {sizes}.")

    def __repr__(self) -> str:
        return f"SplitOperator(size={self._size}, nterms={self.nterms})"

def _inf_norm(mat: Matrix) -> float:
    if sp.issparse(mat):
        return float(abs(mat).sum(axis=1).max()) if mat.shape[0] > 0 else 0.0
    data = to_numpy(mat)
    return float(np.max(np.sum(np.abs(data), axis=1))) if data.shape[0] > 0 else 0.0
