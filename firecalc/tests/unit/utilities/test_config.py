"""Tests for the configuration property map and .cfg loading."""

import pytest

from firecalc.exceptions import ConfigurationError
from firecalc.utilities.config import DEFAULT_PROPERTIES, OPTION_GROUPS, PropertyDict, load_properties


class TestDefaults:
    """Tests for the built-in property defaults."""

    def test_one_selection_per_group(self):
        """Every option group has exactly one default selection."""
        prop = PropertyDict()
        for group in OPTION_GROUPS:
            assert prop.select(group) in OPTION_GROUPS[group]

    def test_documented_defaults(self):
        prop = PropertyDict()
        assert prop.select("surfaceFuel") == "surfaceConfFuelModels"
        assert prop.select("surfaceWindSpeed") == "surfaceConfWindSpeedAtMidflame"
        assert prop.select("containResources") == "containConfResourcesMultiple"
        assert prop.boolean("surfaceModuleActive")
        assert not prop.boolean("crownModuleActive")
        assert prop.integer("containConfMaxSteps") == 1000

    def test_defaults_are_read_only(self):
        """The shared default map cannot be edited."""
        with pytest.raises(TypeError):
            DEFAULT_PROPERTIES["surfaceModuleActive"] = False


class TestPropertyDict:
    """Tests for lookups, selection and copies."""

    def test_unknown_override(self):
        """Overriding an undeclared name raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            PropertyDict({"surfaceConfNoSuchThing": True})

    def test_unknown_lookup(self):
        """Looking up an undeclared name raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            PropertyDict().boolean("surfaceConfNoSuchThing")

    def test_select_unknown_group(self):
        with pytest.raises(ConfigurationError):
            PropertyDict().select("noSuchGroup")

    def test_select_none_chosen(self):
        """A group with no selection is an error when asked."""
        prop = PropertyDict({"surfaceConfSlopeInput": False})
        with pytest.raises(ConfigurationError):
            prop.select("surfaceSlope")

    def test_select_two_chosen(self):
        """A group with two selections is an error when asked."""
        prop = PropertyDict({"surfaceConfSlopeDerived": True})
        with pytest.raises(ConfigurationError):
            prop.select("surfaceSlope")

    def test_replace_returns_copy(self):
        """replace() leaves the original untouched."""
        prop = PropertyDict()
        changed = prop.replace(crownModuleActive=True)
        assert changed.boolean("crownModuleActive")
        assert not prop.boolean("crownModuleActive")
        assert changed != prop

    def test_replace_unknown(self):
        with pytest.raises(ConfigurationError):
            PropertyDict().replace(noSuchProperty=True)

    def test_equality(self):
        """Two maps with the same values compare equal."""
        assert PropertyDict({"crownModuleActive": True}) == \
            PropertyDict().replace(crownModuleActive=True)

    def test_mapping_protocol(self):
        prop = PropertyDict()
        assert "surfaceModuleActive" in prop
        assert len(prop) == len(DEFAULT_PROPERTIES)
        assert set(prop) == set(DEFAULT_PROPERTIES)
        assert prop.as_dict()["surfaceModuleActive"] is True


class TestLoadProperties:
    """Tests for reading .cfg files."""

    def test_load(self, tmp_path):
        """Switches and counts are coerced to their default types."""
        cfg = tmp_path / "worksheet.cfg"
        cfg.write_text(
            "[surface]\n"
            "surfaceConfFuelModels = no\n"
            "surfaceConfFuelAreaWeighted = yes\n"
            "\n"
            "[contain]\n"
            "containModuleActive = true\n"
            "containConfMaxSteps = 2000\n"
        )
        prop = load_properties(str(cfg))
        assert prop.select("surfaceFuel") == "surfaceConfFuelAreaWeighted"
        assert prop.boolean("containModuleActive")
        assert prop.integer("containConfMaxSteps") == 2000
        assert prop.config_path == str(cfg)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_properties(str(tmp_path / "missing.cfg"))

    def test_unknown_name(self, tmp_path):
        """Unknown names in the file are reported with the file path."""
        cfg = tmp_path / "bad.cfg"
        cfg.write_text("[surface]\nsurfaceConfBogus = yes\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_properties(str(cfg))
        assert exc_info.value.config_path == str(cfg)
        assert exc_info.value.parameter == "surfaceConfBogus"

    def test_bad_value(self, tmp_path):
        """A value that cannot be coerced raises ConfigurationError."""
        cfg = tmp_path / "bad.cfg"
        cfg.write_text("[contain]\ncontainConfMaxSteps = lots\n")
        with pytest.raises(ConfigurationError):
            load_properties(str(cfg))

    def test_names_are_case_sensitive(self, tmp_path):
        """Lower-cased names do not match camel-case properties."""
        cfg = tmp_path / "case.cfg"
        cfg.write_text("[surface]\nsurfaceconffuelmodels = yes\n")
        with pytest.raises(ConfigurationError):
            load_properties(str(cfg))
