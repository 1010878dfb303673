# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""Structural types for arrays and array namespaces following the array API standard."""

from typing import Any, Protocol, Self

type Device = Any
type DType = Any

class ArrayLike(Protocol):

    @property
    def shape(self) -> tuple[int | None, ...]: ...
    @property
    def dtype(self) -> DType: ...
    @property
    def device(self) -> Device: ...
    @property
    def ndim(self) -> int: ...

    def __getitem__(self, key: Any, /) -> Self: ...
    def __setitem__(self, key: Any, value: Any, /) -> None: ...
    def __add__(self, other: Any, /) -> Self: ...
    def __sub__(self, other: Any, /) -> Self: ...
    def __mul__(self, other: Any, /) -> Self: ...
    def __truediv__(self, other: Any, /) -> Self: ...
    def __matmul__(self, other: Any, /) -> Self: ...
    def __neg__(self) -> Self: ...

class ArrayNamespace[T: ArrayLike](Protocol):
    """The subset of an array API namespace used by splitnep."""

    complex128: DType
    float64: DType
    linalg: Any

    def asarray(self, obj: Any, /, *, dtype: DType | None = None, device: Device | None = None) -> T: ...
    def zeros(self, shape: int | tuple[int, ...], *, dtype: DType | None = None, device: Device | None = None) -> T: ...
    def zeros_like(self, x: T, /, *, dtype: DType | None = None, device: Device | None = None) -> T: ...
    def ones(self, shape: int | tuple[int, ...], *, dtype: DType | None = None, device: Device | None = None) -> T: ...
    def stack(self, arrays: Any, /, *, axis: int = 0) -> T: ...
    def conj(self, x: T, /) -> T: ...
    def abs(self, x: T, /) -> T: ...
    def sqrt(self, x: T, /) -> T: ...
    def sum(self, x: T, /, *, axis: Any = None) -> T: ...
    def max(self, x: T, /, *, axis: Any = None) -> T: ...
    def tensordot(self, x1: T, x2: T, /, *, axes: Any = 2) -> T: ...
