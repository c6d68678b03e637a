"""Custom exceptions for the firecalc worksheet engine.

This module defines a hierarchy of exceptions used throughout firecalc
to provide clear, specific error messages and enable targeted exception
handling by callers of the library. Nothing in firecalc terminates the
host process; every fatal condition surfaces as one of these types.

Exception Hierarchy:
    FireCalcError (base)
    ├── ConfigurationError - Unknown names, bad indices, cyclic or ambiguous graphs
    ├── ValidationError - Malformed values handed to cells or parsers
    └── SimulationError - Misuse of the recalculation pass

Example:
    >>> from firecalc.exceptions import ConfigurationError
    >>> raise ConfigurationError("Unknown fuel model", parameter="vSurfaceFuelBedModel")
"""

from typing import Optional


class FireCalcError(Exception):
    """Base exception for all firecalc errors.

    All custom exceptions in firecalc inherit from this class, allowing
    callers to catch every engine error with a single except clause.

    Example:
        >>> try:
        ...     calc.evaluate()
        ... except FireCalcError as e:
        ...     print(f"Recalculation failed: {e}")
    """

    pass


class ConfigurationError(FireCalcError):
    """Raised when the graph or its configuration cannot be resolved.

    This exception is raised when:
    - A value cell, function node or configuration property name is unknown
    - A fuel model or moisture scenario name is not in its dictionary
    - A discrete index (species, compass point, item) is out of range
    - The needed active functions form a dependency cycle
    - Two active functions write the same cell

    Attributes:
        message (str): Explanation of the configuration error.
        config_path (str): Path to the configuration file, if applicable.
        parameter (str): Name of the problematic cell, function or property.

    Example:
        >>> raise ConfigurationError(
        ...     "Unknown configuration property",
        ...     config_path="/path/to/worksheet.cfg",
        ...     parameter="surfaceConfFuelModels"
        ... )
    """

    def __init__(self, message: str, config_path: Optional[str] = None, parameter: Optional[str] = None):
        self.config_path = config_path
        self.parameter = parameter

        # Build detailed message
        parts = []
        if config_path:
            parts.append(f"in {config_path}")
        if parameter:
            parts.append(f"parameter '{parameter}'")

        if parts:
            full_message = f"{message} ({', '.join(parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class ValidationError(FireCalcError):
    """Raised when input validation fails.

    This exception is raised when:
    - A continuous cell is given a non-finite or non-numeric value
    - A discrete cell is asked for a continuous value (or vice versa)
    - A resource description string cannot be parsed

    Attributes:
        message (str): Explanation of the validation failure.
        field (str): Name of the field that failed validation, if applicable.
        value: The invalid value, if applicable.

    Example:
        >>> raise ValidationError(
        ...     "Fuel moisture must be finite",
        ...     field="vSurfaceFuelMoisDead1",
        ...     value=float("nan")
        ... )
    """

    def __init__(self, message: str, field: Optional[str] = None, value=None):
        self.field = field
        self.value = value

        parts = []
        if field:
            parts.append(f"field '{field}'")
        if value is not None:
            parts.append(f"value={value!r}")

        if parts:
            full_message = f"{message} ({', '.join(parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class SimulationError(FireCalcError):
    """Raised when a recalculation pass is misused.

    The only current trigger is a re-entrant call to ``evaluate()`` or
    ``reconfigure()`` while a pass already holds the graph.

    Attributes:
        message (str): Explanation of the error.
        step (str): Name of the function node executing at the time, if any.
    """

    def __init__(self, message: str, step: Optional[str] = None):
        self.step = step

        if step is not None:
            full_message = f"{message} (while running {step})"
        else:
            full_message = message

        super().__init__(full_message)
