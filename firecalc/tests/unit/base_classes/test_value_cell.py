"""Tests for value cells.

These tests cover value storage, validation and the text cell tokenizer
used by the containment resource lists.
"""

import pytest

from firecalc.base_classes.value_cell import ContinuousCell, DiscreteCell, TextCell
from firecalc.exceptions import ConfigurationError, ValidationError


class TestContinuousCell:
    """Tests for continuous value cells."""

    def test_default_value(self):
        """A new cell holds its default."""
        cell = ContinuousCell("vX", "ft", 2, 3.5)
        assert cell.value == 3.5

    def test_update_and_reset(self):
        """Updates are kept until reset restores the default."""
        cell = ContinuousCell("vX", "ft", 2, 1.)
        cell.update(7)
        assert cell.value == 7.
        assert isinstance(cell.value, float)
        cell.reset()
        assert cell.value == 1.

    def test_numeric_string_is_accepted(self):
        """Strings that parse as numbers are stored as floats."""
        cell = ContinuousCell("vX")
        cell.update("2.5")
        assert cell.value == 2.5

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), -float("inf")])
    def test_non_finite_rejected(self, bad):
        """NaN and infinities raise ValidationError."""
        cell = ContinuousCell("vX")
        with pytest.raises(ValidationError):
            cell.update(bad)

    @pytest.mark.parametrize("bad", ["abc", None, [1.]])
    def test_non_numeric_rejected(self, bad):
        """Values that cannot become a float raise ValidationError."""
        cell = ContinuousCell("vX")
        with pytest.raises(ValidationError):
            cell.update(bad)

    def test_failed_update_keeps_value(self):
        """A rejected value leaves the previous value in place."""
        cell = ContinuousCell("vX", default=4.)
        with pytest.raises(ValidationError):
            cell.update(float("nan"))
        assert cell.value == 4.

    def test_display_conversion(self):
        """Display converts native units and rounds to the cell decimals."""
        cell = ContinuousCell("vSpread", "ft/min", 1, 66.)
        assert cell.display("ch/h") == pytest.approx(60.)

    def test_display_unknown_units(self):
        """An unknown display unit raises ConfigurationError."""
        cell = ContinuousCell("vSpread", "ft/min", 1, 66.)
        with pytest.raises(ConfigurationError):
            cell.display("furlongs")


class TestDiscreteCell:
    """Tests for discrete (enumerated) value cells."""

    def test_item_lookup(self):
        """The item name follows the stored index."""
        cell = DiscreteCell("vTactic", ("Head", "Rear"), 1)
        assert cell.value == 1
        assert cell.item == "Rear"

    def test_set_item(self):
        """Items can be selected by name."""
        cell = DiscreteCell("vTactic", ("Head", "Rear"))
        cell.set_item("Rear")
        assert cell.value == 1

    def test_unknown_item(self):
        """An unknown item name raises ConfigurationError."""
        cell = DiscreteCell("vTactic", ("Head", "Rear"))
        with pytest.raises(ConfigurationError):
            cell.set_item("Flank")

    def test_out_of_range_index(self):
        """An index outside the item list raises ConfigurationError."""
        cell = DiscreteCell("vTactic", ("Head", "Rear"))
        with pytest.raises(ConfigurationError):
            cell.update(2)
        with pytest.raises(ConfigurationError):
            cell.update(-1)

    @pytest.mark.parametrize("bad", [0.5, "Head", True])
    def test_non_integer_index(self, bad):
        """Floats, strings and booleans are not item indices."""
        cell = DiscreteCell("vTactic", ("Head", "Rear"))
        with pytest.raises(ValidationError):
            cell.update(bad)

    def test_empty_items(self):
        """A discrete cell needs at least one item."""
        with pytest.raises(ConfigurationError):
            DiscreteCell("vEmpty", ())


class TestTextCell:
    """Tests for text cells and resource list parsing."""

    def test_update_requires_string(self):
        """Non-string values raise ValidationError."""
        cell = TextCell("vNote")
        with pytest.raises(ValidationError):
            cell.update(3.)

    def test_tokens_split_on_separators(self):
        """Whitespace, commas and quotes all separate tokens."""
        cell = TextCell("vNames", '"Crew 1", Dozer\tEngine')
        assert cell.tokens() == ["Crew", "1", "Dozer", "Engine"]

    def test_numbers(self):
        """Numeric tokens are parsed into floats."""
        cell = TextCell("vArrival", "10, 20 45.5")
        assert cell.numbers() == [10., 20., 45.5]

    def test_empty_text_has_no_numbers(self):
        """A blank list yields no entries."""
        cell = TextCell("vArrival", "  ")
        assert cell.numbers() == []

    def test_non_numeric_token(self):
        """A token that is not a number raises ValidationError."""
        cell = TextCell("vArrival", "10 soon 30")
        with pytest.raises(ValidationError):
            cell.numbers()

    def test_non_finite_token(self):
        """Infinite entries are rejected."""
        cell = TextCell("vArrival", "10 inf")
        with pytest.raises(ValidationError):
            cell.numbers()
