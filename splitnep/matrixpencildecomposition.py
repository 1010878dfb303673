# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Protocol
from .backend import ArrayLike

class MatrixPencilDecomposition(Protocol):
    """Protocol for the eigenvalue decomposition of a matrix pencil."""

    def __call__(self, a: ArrayLike, b: ArrayLike, /) -> tuple[ArrayLike, ArrayLike]:
        """
        Return eigenvalues :math:`\\mu` and eigenvectors :math:`x` (as columns) of the pencil
        :math:`a x = \\mu b x`. Infinite eigenvalues are returned as non-finite numbers.
        """
        ...
