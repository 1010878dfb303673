# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from dataclasses import dataclass
import cmath

from .scalarfunction import ScalarFunction, FunctionType

@dataclass(frozen=True)
class Exponential(ScalarFunction):
    """
    Exponential :math:`s \\exp(a\\lambda + b)` with factor :math:`a`, offset :math:`b` and scale
    :math:`s`. The kernel of a delay term with delay :math:`\\tau` is ``Exponential(-tau)``.
    """

    #: Factor of the argument.
    factor: complex = 1.0
    #: Constant added to the argument.
    offset: complex = 0.0

    @property
    def kind(self) -> FunctionType:
        return FunctionType.EXPONENTIAL

    def _evaluate(self, value: complex) -> tuple[complex, complex]:
        val = cmath.exp(self.factor*value + self.offset)
        return val, self.factor*val
