"""firecalc - configuration-driven wildland fire behavior worksheet engine."""

from firecalc.calculator.eq_calc import EqCalc
from firecalc.utilities.config import PropertyDict, load_properties
from firecalc.exceptions import (
    FireCalcError,
    ConfigurationError,
    SimulationError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "EqCalc",
    "PropertyDict",
    "load_properties",
    "FireCalcError",
    "ConfigurationError",
    "SimulationError",
    "ValidationError",
]
