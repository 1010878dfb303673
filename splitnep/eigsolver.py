# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

import numpy as np
import scipy.linalg

from .backend import ArrayLike, to_numpy

class EigSolver:
    """Generalized eigenvalue decomposition of a small dense pencil using LAPACK via scipy."""

    def __call__(self, a: ArrayLike, b: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
        vals, vecs = scipy.linalg.eig(to_numpy(a), to_numpy(b), check_finite=False)
        return vals, vecs

    def __repr__(self) -> str:
        return "EigSolver()"
