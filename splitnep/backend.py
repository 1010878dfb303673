# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any
import numpy as np
import array_api_compat as api
from array_api_compat import to_device, device
from array_api_compat import size as _size

from .array_namespace import ArrayNamespace, ArrayLike, Device, DType


def get_namespace(obj: Any) -> ArrayNamespace:
    if not api.is_array_api_obj(obj):
        try:
            obj = obj.zeros(1)
        except AttributeError:
            raise TypeError("Provided object is not a recognized array or namespace.")
    return api.array_namespace(obj) # type: ignore

def namespace_of_arrays[T: ArrayLike](*arrays: T) -> ArrayNamespace[T]:
    return api.array_namespace(*arrays) # type: ignore

def namespace_of_matrix(mat: Any) -> ArrayNamespace:
    """Namespace of a dense matrix, numpy for scipy.sparse and other array-like operators."""
    if api.is_array_api_obj(mat):
        return api.array_namespace(mat) # type: ignore
    return api.array_namespace(np.zeros(1)) # type: ignore

def size(array: ArrayLike) -> int:
    val = _size(array)
    if val is None:
        raise ValueError("Array size is unknown (None).")
    return val

def to_numpy(array: Any) -> np.ndarray:
    """Copy an array of any backend into host memory as numpy array."""
    if isinstance(array, np.ndarray):
        return array
    if api.is_array_api_obj(array):
        return np.asarray(to_device(array, "cpu"))
    return np.asarray(array)
