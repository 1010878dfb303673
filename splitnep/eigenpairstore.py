# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Iterator
from dataclasses import dataclass

from .backend import ArrayLike
from .convergence import ErrorType, compute_error

@dataclass(frozen=True, kw_only=True, eq=False)
class Eigenpair[T: ArrayLike]:
    #: Eigenvalue.
    value: complex
    #: Normalized eigenvector.
    array: T
    #: Residual norm :math:`\|T(\lambda)u\|/\|u\|`.
    residual: float
    #: Operator norm estimate :math:`\sum_k |f_k(\lambda)| \|M_k\|_\infty`.
    norm: float
    #: Outer iteration in which the pair was accepted.
    iteration: int

    def error(self, kind: ErrorType = ErrorType.RELATIVE) -> float:
        return compute_error(kind, self.value, self.residual, self.norm)

class EigenpairStore[T: ArrayLike]:
    """
    Append-only collection of accepted eigenpairs, kept in the order in which they were found.
    """

    _pairs: list[Eigenpair[T]]

    def __init__(self) -> None:
        self._pairs = []

    def append(self, pair: Eigenpair[T]) -> None:
        self._pairs.append(pair)

    def count(self) -> int:
        return len(self._pairs)

    def get(self, idx: int) -> Eigenpair[T]:
        return self._pairs[idx]

    def error(self, idx: int, kind: ErrorType = ErrorType.RELATIVE) -> float:
        return self._pairs[idx].error(kind)

    def errors(self, kind: ErrorType = ErrorType.RELATIVE) -> list[float]:
        return [pair.error(kind) for pair in self._pairs]

    @property
    def values(self) -> list[complex]:
        return [pair.value for pair in self._pairs]

    def __len__(self) -> int:
        return len(self._pairs)

    def __getitem__(self, idx: int) -> Eigenpair[T]:
        return self._pairs[idx]

    def __iter__(self) -> Iterator[Eigenpair[T]]:
        return iter(self._pairs)

    def __repr__(self) -> str:
        return f"EigenpairStore(count={len(self._pairs)})"
