"""Value cells: the named, unit-typed storage slots of the computation graph.

A cell is one of three kinds:

    - ContinuousCell: a float in a fixed native unit.
    - DiscreteCell: an index into a fixed tuple of named items (compass
      points, tactics, species, fuel models, ...).
    - TextCell: free text, used for documentation entries and for the
      whitespace/comma separated containment resource lists.

Cells hold values only. Input/output/constant flags live in the graph's
:class:`~firecalc.base_classes.graph.ConfigurationState`, never on the cell.

Classes:
    - ValueCell: common base.
    - ContinuousCell, DiscreteCell, TextCell: the tagged-union members.
"""

import math
import re
from typing import Optional, Sequence, Tuple, List

from firecalc.exceptions import ConfigurationError, ValidationError
from firecalc.utilities.unit_conversions import native_to_display


class ValueCell:
    """Base class for every value cell.

    Args:
        name (str): unique name, e.g. ``vSurfaceFireSpreadAtHead``
        units (str): native unit label
        decimals (int): display precision
        description (str): short human readable description
    """
    kind = None

    def __init__(self, name: str, units: str = "", decimals: int = 2, description: str = ""):
        self.name = name
        self.units = units
        self.decimals = decimals
        self.description = description

    @property
    def value(self):
        raise NotImplementedError

    def update(self, value):
        raise NotImplementedError

    def reset(self):
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name}={self.value!r} {self.units})".rstrip()


class ContinuousCell(ValueCell):
    kind = "continuous"

    def __init__(self, name: str, units: str = "", decimals: int = 2,
                 default: float = 0., description: str = ""):
        super().__init__(name, units, decimals, description)
        self.default = float(default)
        self._value = self.default

    @property
    def value(self) -> float:
        return self._value

    def update(self, value: float):
        """Stores a value in native units.

        Raises:
            ValidationError: if the value is not a finite real number
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise ValidationError("Continuous cell needs a number", self.name, value) from None

        value = float(value)
        if not math.isfinite(value):
            raise ValidationError("Continuous cell value must be finite", self.name, value)

        self._value = value

    def reset(self):
        self._value = self.default

    def display(self, units: Optional[str] = None) -> float:
        """Value converted to display units, rounded to the cell's decimals."""
        units = units or self.units
        try:
            val = native_to_display(self._value, self.units, units)
        except KeyError as e:
            raise ConfigurationError(str(e.args[0]), parameter=self.name) from None
        return round(val, self.decimals)


class DiscreteCell(ValueCell):
    kind = "discrete"

    def __init__(self, name: str, items: Sequence[str], default: int = 0,
                 description: str = ""):
        super().__init__(name, "", 0, description)
        if not items:
            raise ConfigurationError("Discrete cell needs at least one item", parameter=name)
        self.items: Tuple[str, ...] = tuple(items)
        self._check_index(default)
        self.default = default
        self._index = default

    def _check_index(self, index: int):
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValidationError("Discrete cell index must be an integer", self.name, index)
        if index < 0 or index >= len(self.items):
            raise ConfigurationError(
                f"Item index {index} outside 0..{len(self.items) - 1}", parameter=self.name
            )

    @property
    def value(self) -> int:
        return self._index

    @property
    def item(self) -> str:
        return self.items[self._index]

    def update(self, index: int):
        self._check_index(index)
        self._index = index

    def set_item(self, item_name: str):
        try:
            self._index = self.items.index(item_name)
        except ValueError:
            raise ConfigurationError(f"Unknown item '{item_name}'", parameter=self.name) from None

    def reset(self):
        self._index = self.default


# Separators accepted between tokens of a resource list
_TOKEN_SPLIT = re.compile(r'[\s,"]+')


class TextCell(ValueCell):
    kind = "text"

    def __init__(self, name: str, default: str = "", units: str = "", description: str = ""):
        super().__init__(name, units, 0, description)
        self.default = default
        self._text = default

    @property
    def value(self) -> str:
        return self._text

    def update(self, text: str):
        if not isinstance(text, str):
            raise ValidationError("Text cell needs a string", self.name, text)
        self._text = text

    def reset(self):
        self._text = self.default

    def tokens(self) -> List[str]:
        return [t for t in _TOKEN_SPLIT.split(self._text) if t]

    def numbers(self) -> List[float]:
        """Parses every token as a finite number.

        Raises:
            ValidationError: if a token is not numeric
        """
        out = []
        for tok in self.tokens():
            try:
                val = float(tok)
            except ValueError:
                raise ValidationError("Resource list entry is not a number", self.name, tok) from None
            if not math.isfinite(val):
                raise ValidationError("Resource list entry must be finite", self.name, tok)
            out.append(val)
        return out
