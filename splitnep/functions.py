# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any

from .scalarfunction import ScalarFunction, FunctionType
from .rational import Rational
from .exponential import Exponential

def scalar_function(kind: FunctionType, **params: Any) -> ScalarFunction:
    """Create a scalar function of the given kind, e.g. ``scalar_function(FunctionType.EXPONENTIAL, factor=-0.1)``."""
    if kind == FunctionType.RATIONAL:
        return Rational(**params)
    elif kind == FunctionType.EXPONENTIAL:
        return Exponential(**params)
    raise ValueError(f"Unknown function type {kind}.")
