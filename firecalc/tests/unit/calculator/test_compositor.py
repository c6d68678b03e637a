"""Tests for the two fuel model compositor."""

from dataclasses import fields

import pytest
from unittest.mock import MagicMock

from firecalc.calculator import compositor
from firecalc.calculator.compositor import (AREA_WEIGHTED, HARMONIC_MEAN, TWO_DIMENSIONAL,
                                            FuelMoistures, PipelineResult, SiteConditions,
                                            WindInputs, composite, single_fuel_pipeline)
from firecalc.calculator.functions.surface_fuel import MOISTURE_CLASSES
from firecalc.exceptions import ConfigurationError
from firecalc.utilities.config import PropertyDict


@pytest.fixture
def fast():
    return PipelineResult(spread_at_head=20., spread_at_vector=10., reaction_int=3000.,
                          flame_leng_at_head=6., depth=1., max_dir_from_upslope=15.,
                          length_to_width=2., wind_speed_limit=40., wind_speed_flag=False)


@pytest.fixture
def slow():
    return PipelineResult(spread_at_head=5., spread_at_vector=2.5, reaction_int=5000.,
                          flame_leng_at_head=3., depth=2., max_dir_from_upslope=30.,
                          length_to_width=1.5, wind_speed_limit=25., wind_speed_flag=True)


class TestSingleFuelPipeline:
    """Tests for one fuel model run end to end."""

    def test_fm1_spreads(self, fm1):
        res = single_fuel_pipeline(fm1, FuelMoistures(), SiteConditions(slope_fraction=0.3),
                                   WindInputs(midflame=5.))
        assert res.spread_at_head > 0.
        assert res.flame_leng_at_head > 0.
        assert res.spread_at_vector == pytest.approx(res.spread_at_head)
        assert res.depth == pytest.approx(fm1.depth)

    def test_wind_increases_spread(self, fm10):
        calm = single_fuel_pipeline(fm10, FuelMoistures(), SiteConditions(), WindInputs())
        windy = single_fuel_pipeline(fm10, FuelMoistures(), SiteConditions(),
                                     WindInputs(midflame=5.))
        assert windy.spread_at_head > calm.spread_at_head
        assert windy.length_to_width > calm.length_to_width

    def test_calculated_waf(self, fm4):
        """A calculated adjustment factor reduces the 20-ft wind."""
        res = single_fuel_pipeline(fm4, FuelMoistures(), SiteConditions(),
                                   WindInputs(mode="At20FtCalc", at_20ft=10.))
        assert 0. < res.waf < 1.
        assert res.midflame == pytest.approx(10. * res.waf)


class TestComposite:
    """Tests for merging two pipeline results."""

    def test_merge_rules(self, fast, slow):
        res = composite(fast, slow, 0.5, AREA_WEIGHTED)
        assert res.reaction_int == 5000.
        assert res.flame_leng_at_head == 6.
        assert res.depth == 2.
        assert res.wind_speed_limit == 25.
        assert res.wind_speed_flag is True
        assert res.max_dir_from_upslope == 15.
        assert res.length_to_width == 2.

    def test_every_field_has_a_rule(self):
        assert {f.name for f in fields(PipelineResult)} == set(compositor.MERGE_RULES)

    def test_area_weighted(self, fast, slow):
        res = composite(fast, slow, 0.25, AREA_WEIGHTED)
        assert res.spread_at_head == pytest.approx(0.25 * 20. + 0.75 * 5.)
        assert res.spread_at_vector == pytest.approx(0.25 * 10. + 0.75 * 2.5)

    def test_harmonic_mean(self, fast, slow):
        res = composite(fast, slow, 0.5, HARMONIC_MEAN)
        assert res.spread_at_head == pytest.approx(1. / (0.5 / 20. + 0.5 / 5.))

    def test_harmonic_mean_non_burnable(self, fast):
        """A non-burnable model stops the harmonic mean spread."""
        res = composite(fast, PipelineResult(), 0.5, HARMONIC_MEAN)
        assert res.spread_at_head == 0.

    @pytest.mark.parametrize("coverage,expected", [(1., 20.), (0.9995, 20.), (0., 5.),
                                                   (0.0005, 5.)])
    def test_degenerate_coverage(self, fast, slow, coverage, expected):
        """Coverage at either extreme copies the dominant model."""
        res = composite(fast, slow, coverage, HARMONIC_MEAN)
        assert res.spread_at_head == expected

    def test_two_dimensional_uses_sampler(self, fast, slow):
        sampler = MagicMock()
        sampler.expected_rate.return_value = 7.
        res = composite(fast, slow, 0.4, TWO_DIMENSIONAL, sampler)
        assert res.spread_at_head == 7.
        sampler.expected_rate.assert_any_call(20., 5., 0.4, 2., 1.5)
        assert sampler.expected_rate.call_count == 2

    def test_identical_models(self, fm10):
        """Blending a model with itself reproduces the single model result."""
        r = single_fuel_pipeline(fm10, FuelMoistures(), SiteConditions(slope_fraction=0.2),
                                 WindInputs(midflame=3.))
        res = composite(r, r, 0.3, AREA_WEIGHTED)
        assert res.spread_at_head == pytest.approx(r.spread_at_head)
        assert res.flame_leng_at_head == pytest.approx(r.flame_leng_at_head)

    def test_unknown_policy(self, fast, slow):
        with pytest.raises(ConfigurationError):
            composite(fast, slow, 0.5, "geometric")


class TestConfigurationReads:
    """Tests for configuration-dependent declarations of the weighted function."""

    def test_selected_policy(self):
        prop = PropertyDict({"surfaceConfFuelModels": False,
                             "surfaceConfFuelHarmonicMean": True})
        assert compositor.selected_policy(prop) == HARMONIC_MEAN

    def test_no_policy(self):
        with pytest.raises(ConfigurationError):
            compositor.selected_policy(PropertyDict())

    def test_midflame_reads(self):
        prop = PropertyDict()
        assert compositor.wind_mode(prop) == "AtMidflame"
        assert compositor.weighted_reads(prop) == ["vWindSpeedAtMidflame"] + list(MOISTURE_CLASSES)
        assert compositor.weighted_writes(prop) == []

    def test_calculated_waf_reads(self):
        prop = PropertyDict({"surfaceConfWindSpeedAtMidflame": False,
                             "surfaceConfWindSpeedAt10MCalc": True,
                             "surfaceConfSpreadDirMax": False,
                             "surfaceConfSpreadDirInput": True})
        reads = compositor.weighted_reads(prop)
        assert "vTreeCanopyCover" in reads
        assert "vSurfaceFireVectorDirFromUpslope" in reads
        assert "vWindAdjFactor" in compositor.weighted_writes(prop)

    @pytest.mark.parametrize("option,read", [("surfaceConfMoisLifeCat", "vSurfaceFuelMoisLifeLive"),
                                             ("surfaceConfMoisScenario", "vSurfaceFuelMoisScenario")])
    def test_moisture_option_reads(self, option, read):
        """Life category and scenario moistures replace the time-lag inputs."""
        prop = PropertyDict({"surfaceConfMoisTimeLag": False, option: True})
        reads = compositor.weighted_reads(prop)
        assert read in reads
        assert "vSurfaceFuelMoisDead1" not in reads
        assert set(MOISTURE_CLASSES) <= set(compositor.weighted_writes(prop))
