# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Protocol
from dataclasses import dataclass, field
from enum import Enum
import logging
import numpy as np
import scipy.sparse as sp

from .backend import ArrayLike, ArrayNamespace, namespace_of_matrix, to_numpy
from .utils import check_pos

logger = logging.getLogger(__name__)

class PreconditionerType(Enum):
    NONE = 0
    JACOBI = 1
    BLOCK_JACOBI = 2

class Preconditioner(Protocol):
    """Protocol for a preconditioner built from an assembled matrix."""

    def setup(self, matrix: Any, /) -> None:
        """Build the preconditioner for the given matrix."""
        ...

    def __call__[T: ArrayLike](self, x: T, /) -> T:
        """Apply the approximate inverse to a vector."""
        ...

class Identity:
    """No preconditioning."""

    def setup(self, matrix: Any) -> None:
        pass

    def __call__[T: ArrayLike](self, x: T) -> T:
        return x

    def __repr__(self) -> str:
        return "Identity()"

@dataclass
class Jacobi:
    """Point Jacobi preconditioner, zero diagonal entries are replaced by one."""

    _inv_diag: Any = field(default=None, init=False, repr=False)

    def setup(self, matrix: Any) -> None:
        xp = namespace_of_matrix(matrix)
        diag = np.asarray(matrix.diagonal()) if sp.issparse(matrix) else to_numpy(matrix).diagonal()
        diag = np.where(diag == 0, 1.0, diag).astype(np.complex128)
        self._inv_diag = xp.asarray(1.0 / diag)

    def __call__[T: ArrayLike](self, x: T) -> T:
        if self._inv_diag is None:
            raise RuntimeError("Preconditioner is not set up.")
        return self._inv_diag * x

@dataclass
class BlockJacobi:
    """
    Block Jacobi preconditioner with nblocks contiguous diagonal blocks of almost equal size, each
    applied by its dense inverse. A single block is an exact solve.
    """

    #: Number of diagonal blocks.
    nblocks: int = 1

    _blocks: list[tuple[int, int, Any]] = field(default_factory=list, init=False, repr=False)
    _xp: ArrayNamespace | None = field(default=None, init=False, repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "nblocks":
            check_pos(name, value)
        super().__setattr__(name, value)

    def setup(self, matrix: Any) -> None:
        xp = namespace_of_matrix(matrix)
        size = matrix.shape[0]
        nblocks = min(self.nblocks, size)
        bounds = [size * i // nblocks for i in range(nblocks + 1)]
        if sp.issparse(matrix):
            matrix = sp.csr_array(matrix)
        blocks = []
        for begin, end in zip(bounds[:-1], bounds[1:]):
            if sp.issparse(matrix):
                block = matrix[begin:end, begin:end].toarray()
            else:
                block = to_numpy(matrix[begin:end, begin:end])
            blocks.append((begin, end, xp.asarray(self._invert(block))))
        self._blocks = blocks
        self._xp = xp

    def __call__[T: ArrayLike](self, x: T) -> T:
        if self._xp is None:
            raise RuntimeError("Preconditioner is not set up.")
        out = self._xp.zeros_like(x)
        for begin, end, inv in self._blocks:
            out[begin:end] = inv @ x[begin:end]
        return out

    def _invert(self, block: np.ndarray) -> np.ndarray:
        block = block.astype(np.complex128)
        try:
            return np.linalg.inv(block)
        except np.linalg.LinAlgError:
            logger.warning("singular diagonal block of size %d, using pseudo-inverse", block.shape[0])
            return np.linalg.pinv(block)

def preconditioner(kind: PreconditionerType, **params: Any) -> Preconditioner:
    if kind == PreconditionerType.NONE:
        return Identity()
    elif kind == PreconditionerType.JACOBI:
        return Jacobi()
    elif kind == PreconditionerType.BLOCK_JACOBI:
        return BlockJacobi(**params)
    raise ValueError(f"Unknown preconditioner type {kind}.")
