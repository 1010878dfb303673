# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from abc import abstractmethod
from dataclasses import dataclass
from enum import Enum
import cmath

from .errors import EvaluationFailure

class FunctionType(Enum):
    RATIONAL = 0
    EXPONENTIAL = 1

@dataclass(frozen=True, kw_only=True)
class ScalarFunction:
    """
    Scalar function :math:`f(\\lambda)` multiplying one matrix of a split operator. Implementations
    provide the value and the derivative at a (complex) argument. Both have to be analytic in the
    region in which eigenvalues are searched.
    """

    #: Factor multiplied to value and derivative.
    scale: complex = 1.0

    def __call__(self, value: complex) -> complex:
        return self.evaluate(value)[0]

    def evaluate(self, value: complex) -> tuple[complex, complex]:
        """Return :math:`f(\\lambda)` and :math:`f'(\\lambda)`. Raises EvaluationFailure where f is undefined."""
        try:
            val, der = self._evaluate(complex(value))
        except (ZeroDivisionError, OverflowError) as err:
            raise EvaluationFailure(value) from err
        val, der = self.scale * val, self.scale * der
        if not (cmath.isfinite(val) and cmath.isfinite(der)):
            raise EvaluationFailure(value, f"Function value is not finite at {value}")
        return val, der

    def derivative(self, value: complex) -> complex:
        return self.evaluate(value)[1]

    @property
    @abstractmethod
    def kind(self) -> FunctionType: ...

    @abstractmethod
    def _evaluate(self, value: complex) -> tuple[complex, complex]: ...
