# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Sequence
from dataclasses import dataclass

from .scalarfunction import ScalarFunction, FunctionType

@dataclass(frozen=True)
class Rational(ScalarFunction):
    """
    Rational function :math:`p(\\lambda)/q(\\lambda)`. Coefficients are given with the highest
    degree first, i.e. ``Rational([-1.0, 0.0])`` is :math:`-\\lambda`.
    """

    #: Coefficients of the numerator polynomial.
    numerator: Sequence[complex]
    #: Coefficients of the denominator polynomial.
    denominator: Sequence[complex] = (1.0,)

    def __post_init__(self) -> None:
        if len(self.numerator) == 0:
            raise ValueError("Numerator needs at least one coefficient.")
        if len(self.denominator) == 0:
            raise ValueError("Denominator needs at least one coefficient.")
        if all(c == 0 for c in self.denominator):
            raise ValueError("Denominator must not vanish identically.")
        object.__setattr__(self, "numerator", tuple(complex(c) for c in self.numerator))
        object.__setattr__(self, "denominator", tuple(complex(c) for c in self.denominator))

    @property
    def kind(self) -> FunctionType:
        return FunctionType.RATIONAL

    def _evaluate(self, value: complex) -> tuple[complex, complex]:
        p, dp = _horner(self.numerator, value)
        if len(self.denominator) == 1:
            q = self.denominator[0]
            return p / q, dp / q
        q, dq = _horner(self.denominator, value)
        if q == 0:
            raise ZeroDivisionError
        return p / q, (dp*q - p*dq) / (q*q)

def constant(value: complex) -> Rational:
    return Rational([value])

def polynomial(coeffs: Sequence[complex]) -> Rational:
    return Rational(coeffs)

def _horner(coeffs: Sequence[complex], value: complex) -> tuple[complex, complex]:
    p, dp = 0j, 0j
    for c in coeffs:
        dp = dp*value + p
        p = p*value + c
    return p, dp
