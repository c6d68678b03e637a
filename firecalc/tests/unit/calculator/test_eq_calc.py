"""Tests for the EqCalc worksheet facade."""

import pytest

from firecalc.calculator.eq_calc import EqCalc
from firecalc.exceptions import ConfigurationError, ValidationError


class TestCellAccess:
    """Tests for reading and writing cells through the facade."""

    def test_set_and_get(self, calc):
        calc.set("vWindSpeedAtMidflame", 7.5)
        assert calc.get("vWindSpeedAtMidflame") == 7.5

    def test_set_inputs_accepts_item_names(self, calc):
        """Discrete cells take an item name in set_inputs."""
        calc.set_inputs({"vContainAttackTactic": "Rear", "vSiteSlopeFraction": 0.1})
        assert calc.item("vContainAttackTactic") == "Rear"
        assert calc.get("vContainAttackTactic") == 1

    def test_set_text_rejects_numeric_cells(self, calc):
        with pytest.raises(ValidationError):
            calc.set_text("vWindSpeedAtMidflame", "FM1")

    def test_unknown_cell(self, calc):
        with pytest.raises(ConfigurationError):
            calc.get("vNoSuchCell")

    def test_default_fuel_model(self, calc):
        assert calc.text("vSurfaceFuelBedModel") == "FM1"


class TestConfiguration:
    """Tests for flags exposed by the facade."""

    def test_flags(self, calc):
        assert calc.is_active("fSurfaceFuelBedModel")
        assert calc.is_output("vSurfaceFireSpreadAtHead")
        assert calc.is_constant("vWindAdjFactor")
        assert not calc.show_init_from_fuel_model_button()
        assert "vSurfaceFireSpreadAtHead" in calc.output_names()

    def test_input_names(self, calc):
        """Inputs are derived from the outputs and active functions."""
        inputs = calc.input_names()
        assert "vSurfaceFuelBedModel" in inputs
        assert "vWindSpeedAtMidflame" in inputs
        assert "vSiteSlopeFraction" in inputs
        assert "vWindDirFromUpslope" not in inputs
        assert "vWindAdjFactor" not in inputs

    def test_set_properties_needs_reconfigure(self, calc, make_props):
        """New properties only take effect on reconfigure()."""
        calc.set_properties(make_props(crownModuleActive=True))
        assert not calc.is_active("fCrownFireType")
        calc.reconfigure()
        assert calc.is_active("fCrownFireType")


class TestEvaluate:
    """Tests for whole-worksheet evaluation."""

    def test_results_before_evaluate(self, calc):
        with pytest.raises(ConfigurationError):
            calc.results()

    def test_fm1_surface_run(self, surface_calc):
        surface_calc.evaluate()
        results = surface_calc.results()
        assert results["vSurfaceFireSpreadAtHead"] > 0.
        assert results["vSurfaceFireFlameLengAtHead"] > 0.
        assert results["vSurfaceFireLineIntAtHead"] > 0.
        assert results["vSurfaceFireReactionInt"] > 0.

    def test_heavier_fuel_burns_hotter(self, surface_calc):
        """Chaparral releases more heat per unit area than short grass."""
        surface_calc.evaluate()
        grass = surface_calc.get("vSurfaceFireHeatPerUnitArea")

        surface_calc.set_text("vSurfaceFuelBedModel", "FM4")
        surface_calc.evaluate()
        assert surface_calc.get("vSurfaceFireHeatPerUnitArea") > grass

    def test_more_wind_spreads_faster(self, surface_calc):
        surface_calc.evaluate()
        calm = surface_calc.get("vSurfaceFireSpreadAtHead")

        surface_calc.set("vWindSpeedAtMidflame", 10.)
        surface_calc.evaluate()
        assert surface_calc.get("vSurfaceFireSpreadAtHead") > calm

    def test_trace(self, surface_calc, memory_sink):
        """Each evaluation is one trace pass naming the functions it ran."""
        surface_calc.evaluate()
        run = memory_sink.functions_run()
        assert "fSurfaceFireSpreadAtHead" in run
        assert run.index("fSurfaceFuelBedIntermediates") < run.index("fSurfaceFireReactionInt")

        surface_calc.evaluate()
        assert memory_sink.pass_id == 2
        assert memory_sink.functions_run(pass_id=1) == memory_sink.functions_run(pass_id=2)

    def test_requested_outputs_only(self, surface_calc, memory_sink):
        """Asking for one output runs only what that output needs."""
        plan = surface_calc.evaluate(["vSurfaceFireReactionInt"])
        assert "fSurfaceFireSpreadAtHead" not in plan.function_names
        assert list(surface_calc.results()) == ["vSurfaceFireReactionInt"]

    def test_unknown_fuel_model(self, surface_calc):
        surface_calc.set_text("vSurfaceFuelBedModel", "FM99")
        with pytest.raises(ConfigurationError):
            surface_calc.evaluate()

    def test_graph_released_after_error(self, surface_calc):
        """A failed pass does not block the next one."""
        surface_calc.set_text("vSurfaceFuelBedModel", "FM99")
        with pytest.raises(ConfigurationError):
            surface_calc.evaluate()

        surface_calc.set_text("vSurfaceFuelBedModel", "FM1")
        surface_calc.evaluate()
        assert surface_calc.get("vSurfaceFireSpreadAtHead") > 0.

    def test_blended_fuels(self, two_fuel_props, memory_sink):
        """Blended fuels run the compositor in place of the single model chain."""
        c = EqCalc(two_fuel_props, memory_sink)
        c.reconfigure()
        c.set_inputs({"vSurfaceFuelBedModel1": "FM1", "vSurfaceFuelBedModel2": "FM10",
                      "vSurfaceFuelBedCoverage1": 0.6, "vWindSpeedAtMidflame": 5.})
        c.evaluate()

        run = memory_sink.functions_run()
        assert "fSurfaceFuelBedWeighted" in run
        assert "fSurfaceFuelBedModel" not in run
        assert c.get("vSurfaceFireSpreadAtHead") > 0.
        assert c.get("vSurfaceFireFlameLengAtHead") > 0.

    def test_blended_matches_single_model(self, make_props):
        """Blending a model with itself gives the single model spread rate."""
        single = EqCalc(make_props())
        single.reconfigure()
        single.set_inputs({"vSurfaceFuelBedModel": "FM10", "vWindSpeedAtMidflame": 4.})
        single.evaluate()

        blended = EqCalc(make_props(surfaceConfFuelModels=False,
                                    surfaceConfFuelAreaWeighted=True))
        blended.reconfigure()
        blended.set_inputs({"vSurfaceFuelBedModel1": "FM10", "vSurfaceFuelBedModel2": "FM10",
                            "vWindSpeedAtMidflame": 4.})
        blended.evaluate()

        assert blended.get("vSurfaceFireSpreadAtHead") == \
            pytest.approx(single.get("vSurfaceFireSpreadAtHead"))


class TestBlendedFuelOptions:
    """Tests for moisture and load transfer options with blended fuels."""

    @staticmethod
    def _run(props, inputs, **models):
        c = EqCalc(props)
        c.reconfigure()
        c.set_inputs({**models, **inputs})
        c.evaluate()
        return c

    def test_life_category_moisture(self, make_props):
        """Life category moistures reach both blended models."""
        props = dict(surfaceConfMoisTimeLag=False, surfaceConfMoisLifeCat=True)
        inputs = {"vSurfaceFuelMoisLifeDead": 0.25, "vWindSpeedAtMidflame": 4.}
        single = self._run(make_props(**props), inputs, vSurfaceFuelBedModel="FM4")

        blended_props = make_props(surfaceConfFuelModels=False,
                                   surfaceConfFuelAreaWeighted=True, **props)
        blended = self._run(blended_props, inputs, vSurfaceFuelBedModel1="FM4",
                            vSurfaceFuelBedModel2="FM4")

        names = blended.input_names()
        assert "vSurfaceFuelMoisLifeDead" in names
        assert "vSurfaceFuelMoisDead1" not in names
        assert blended.get("vSurfaceFuelMoisDead10") == 0.25
        assert blended.get("vSurfaceFireSpreadAtHead") == \
            pytest.approx(single.get("vSurfaceFireSpreadAtHead"))

    def test_scenario_moisture(self, make_props):
        """A moisture scenario fills the time-lag classes for blended fuels."""
        props = dict(surfaceConfMoisTimeLag=False, surfaceConfMoisScenario=True)
        inputs = {"vSurfaceFuelMoisScenario": "D1L1", "vWindSpeedAtMidflame": 4.}
        single = self._run(make_props(**props), inputs, vSurfaceFuelBedModel="FM10")

        blended_props = make_props(surfaceConfFuelModels=False,
                                   surfaceConfFuelHarmonicMean=True, **props)
        blended = self._run(blended_props, inputs, vSurfaceFuelBedModel1="FM10",
                            vSurfaceFuelBedModel2="FM10")

        assert "vSurfaceFuelMoisScenario" in blended.input_names()
        assert blended.get("vSurfaceFuelMoisDead1") == \
            pytest.approx(single.get("vSurfaceFuelMoisDead1"))
        assert blended.get("vSurfaceFireSpreadAtHead") == \
            pytest.approx(single.get("vSurfaceFireSpreadAtHead"))

    def test_input_transfer_skips_static_models(self, make_props):
        """An input transfer fraction only applies to dynamic models."""
        props = make_props(surfaceConfFuelModels=False, surfaceConfFuelAreaWeighted=True,
                           surfaceConfLoadTransferCalc=False, surfaceConfLoadTransferInput=True)

        def spread(model, fraction):
            c = self._run(props, {"vSurfaceFuelLoadTransferFraction": fraction,
                                  "vWindSpeedAtMidflame": 4.},
                          vSurfaceFuelBedModel1=model, vSurfaceFuelBedModel2=model)
            return c.get("vSurfaceFireSpreadAtHead")

        assert spread("FM2", 1.) == pytest.approx(spread("FM2", 0.))
        assert spread("GR2", 1.) != pytest.approx(spread("GR2", 0.))
