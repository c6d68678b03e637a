"""Tests for the Rothermel surface fire spread model.

These tests check the fuel bed intermediates, the heat sink and the spread
relations against hand computations and against the expected ordering of
results (more wind, more slope and drier fuel spread faster).
"""

import numpy as np
import pytest

from firecalc.models import rothermel
from firecalc.models.fuel_models import calc_time_lag_moisture, model_particles
from firecalc.utilities.fire_util import LifeCategory


def _bed(model, transfer=0.):
    p = model_particles(model)
    return rothermel.FuelBed(model.depth, model.mext_dead, p.life, p.load, p.savr, p.heat,
                             p.dens, p.stot, p.seff, transfer_fraction=transfer)


def _no_wind_rate(bed, dead=0.06, herb=1.0, wood=1.0):
    mois = calc_time_lag_moisture(bed.life, bed.savr, dead, dead + 0.01, dead + 0.02, 0.2,
                                  herb, wood)
    hs = rothermel.calc_heat_sink(bed, mois)
    rxi, _, _ = rothermel.calc_reaction_intensity(bed, hs.dead_mois, hs.live_mois, hs.live_mext)
    flux = rothermel.calc_propagating_flux(bed.sigma, bed.packing_ratio)
    return rothermel.calc_no_wind_rate(rxi, flux, hs.heat_sink), rxi


class TestFuelBed:
    """Tests for fuel bed intermediates."""

    def test_single_particle_sigma(self, fm1):
        """A single particle bed has the particle's savr as sigma."""
        bed = _bed(fm1)
        assert bed.sigma == pytest.approx(3500.)

    def test_bulk_density_and_packing(self, fm1):
        """Bulk density is load over depth; packing ratio divides by density."""
        bed = _bed(fm1)
        assert bed.bulk_density == pytest.approx(fm1.load_dead1 / fm1.depth)
        assert bed.packing_ratio == pytest.approx(fm1.load_dead1 / 32. / fm1.depth)

    def test_dead_only_model(self, fm1):
        """FM1 carries no live fuel."""
        bed = _bed(fm1)
        assert bed.dead_fraction == pytest.approx(1.)
        assert not bed.has_live_fuel()

    def test_load_transfer_moves_herb_load(self):
        """The transfer fraction moves live herb load to the dead herb slot."""
        life = [LifeCategory.DEAD, LifeCategory.DEAD, LifeCategory.DEAD, LifeCategory.HERB,
                LifeCategory.WOOD, LifeCategory.DEAD, LifeCategory.DEAD, LifeCategory.DEAD]
        load = [0.1, 0., 0., 0.2, 0., 0., 0., 0.]
        savr = [2000., 109., 30., 1800., 1500., 1800., 1., 1.]
        bed = rothermel.FuelBed(1., 0.2, life, load, savr, [8000.] * 8, [32.] * 8,
                                [0.0555] * 8, [0.01] * 8, transfer_fraction=0.5)
        assert bed.dead_herb == pytest.approx(0.1)
        assert bed.undead_herb == pytest.approx(0.1)
        assert bed.dead_load == pytest.approx(0.2)
        assert bed.live_load == pytest.approx(0.1)

    def test_zero_depth(self, fm1):
        """A bed without depth has no bulk density or packing."""
        p = model_particles(fm1)
        bed = rothermel.FuelBed(0., fm1.mext_dead, p.life, p.load, p.savr, p.heat, p.dens,
                                p.stot, p.seff)
        assert bed.bulk_density == 0.
        assert bed.packing_ratio == 0.


class TestHeatSinkAndIntensity:
    """Tests for moisture, heat sink and reaction intensity."""

    def test_moisture_damping_limits(self):
        """Damping is one for dry fuel and zero at extinction."""
        assert rothermel.calc_moisture_damping(0., 0.12) == pytest.approx(1.)
        assert rothermel.calc_moisture_damping(0.12, 0.12) == 0.
        assert rothermel.calc_moisture_damping(0.3, 0.3) == 0.
        assert rothermel.calc_moisture_damping(0.2, 0.12) == 0.
        assert rothermel.calc_moisture_damping(0.05, 0.) == 0.

    def test_mineral_damping_cap(self):
        """Mineral damping never exceeds one."""
        assert rothermel.calc_mineral_damping(0.01) == pytest.approx(0.174 * 0.01 ** -0.19)
        assert rothermel.calc_mineral_damping(0.) == 1.

    def test_dry_fuel_burns_hotter(self, fm1):
        """Reaction intensity falls as dead fuel moisture rises."""
        bed = _bed(fm1)
        _, rxi_dry = _no_wind_rate(bed, dead=0.03)
        _, rxi_wet = _no_wind_rate(bed, dead=0.10)
        assert rxi_dry > rxi_wet > 0.

    def test_extinguished_fuel(self, fm1):
        """Above the moisture of extinction nothing spreads."""
        bed = _bed(fm1)
        ros0, rxi = _no_wind_rate(bed, dead=0.15)
        assert rxi == pytest.approx(0., abs=1e-9)
        assert ros0 == pytest.approx(0., abs=1e-9)

    def test_live_mext_at_least_dead(self, fm4):
        """Live moisture of extinction is never below the dead value."""
        bed = _bed(fm4)
        mois = calc_time_lag_moisture(bed.life, bed.savr, 0.06, 0.07, 0.08, 0.2, 1., 1.)
        hs = rothermel.calc_heat_sink(bed, mois)
        assert hs.live_mext >= fm4.mext_dead
        assert hs.heat_sink > 0.


class TestSpread:
    """Tests for head, vector and back spread."""

    def test_wind_increases_spread(self, fm1):
        """More midflame wind gives a faster head fire."""
        bed = _bed(fm1)
        ros0, rxi = _no_wind_rate(bed)
        calm = rothermel.calc_spread_at_head(ros0, rxi, 0., 0., 0., bed.sigma,
                                             bed.packing_ratio, bed.beta_ratio)
        windy = rothermel.calc_spread_at_head(ros0, rxi, 0., 5., 0., bed.sigma,
                                              bed.packing_ratio, bed.beta_ratio)
        assert calm.ros == pytest.approx(ros0)
        assert windy.ros > calm.ros
        assert windy.eff_wind > 0.

    def test_slope_increases_spread(self, fm1):
        """Upslope spread exceeds flat ground spread."""
        bed = _bed(fm1)
        ros0, rxi = _no_wind_rate(bed)
        flat = rothermel.calc_spread_at_head(ros0, rxi, 0., 0., 0., bed.sigma,
                                             bed.packing_ratio, bed.beta_ratio)
        steep = rothermel.calc_spread_at_head(ros0, rxi, 0.6, 0., 0., bed.sigma,
                                              bed.packing_ratio, bed.beta_ratio)
        assert steep.ros > flat.ros
        assert steep.slope_factor > 0.

    def test_cross_slope_wind_direction(self, fm1):
        """A cross-slope wind turns the direction of maximum spread."""
        bed = _bed(fm1)
        ros0, rxi = _no_wind_rate(bed)
        head = rothermel.calc_spread_at_head(ros0, rxi, 0.3, 5., 90., bed.sigma,
                                             bed.packing_ratio, bed.beta_ratio)
        assert 0. < head.dir_max < 90.

    def test_wind_limit(self, fm1):
        """Extreme winds are capped at the effective wind limit."""
        bed = _bed(fm1)
        ros0, rxi = _no_wind_rate(bed)
        capped = rothermel.calc_spread_at_head(ros0, rxi, 0., 200., 0., bed.sigma,
                                               bed.packing_ratio, bed.beta_ratio)
        free = rothermel.calc_spread_at_head(ros0, rxi, 0., 200., 0., bed.sigma,
                                             bed.packing_ratio, bed.beta_ratio,
                                             apply_limit=False)
        assert capped.wind_flag
        assert capped.eff_wind == pytest.approx(capped.wind_limit)
        assert free.ros > capped.ros

    def test_no_fuel_no_spread(self):
        """A zero no-wind rate yields a zero result without the flag."""
        head = rothermel.calc_spread_at_head(0., 0., 0.5, 10., 0., 1., 0.1, 0.5)
        assert head.ros == 0.
        assert not head.wind_flag

    def test_spread_at_beta(self):
        """Spread at beta falls from the head to the back of the ellipse."""
        ecc = rothermel.calc_eccentricity(2.)
        assert rothermel.calc_spread_at_beta(10., ecc, 0.) == pytest.approx(10.)
        side = rothermel.calc_spread_at_beta(10., ecc, 90.)
        back = rothermel.calc_spread_at_back(10., ecc)
        assert 10. > side > back > 0.
        assert back == pytest.approx(10. * (1. - ecc) / (1. + ecc))

    def test_vector_beta_wraps(self):
        """The angle between directions is at most 180 degrees."""
        assert rothermel.calc_vector_beta(350., 10.) == pytest.approx(20.)
        assert rothermel.calc_vector_beta(90., 45.) == pytest.approx(45.)


class TestFireCharacteristics:
    """Tests for intensity, flame and ellipse shape relations."""

    def test_length_to_width(self):
        """Length-to-width grows by a quarter per mi/h of effective wind."""
        assert rothermel.calc_length_to_width(0.) == 1.
        assert rothermel.calc_length_to_width(4.) == pytest.approx(2.)

    def test_eccentricity(self):
        """A circle has zero eccentricity."""
        assert rothermel.calc_eccentricity(1.) == 0.
        assert rothermel.calc_eccentricity(2.) == pytest.approx(np.sqrt(3.) / 2.)

    def test_fireline_intensity(self):
        """Byram's intensity is ros * rxi * tau / 60."""
        assert rothermel.calc_fireline_intensity(10., 3000., 0.2) == pytest.approx(100.)

    def test_flame_length_round_trip(self):
        """Flame length and intensity relations invert each other."""
        fl = rothermel.calc_flame_length(100.)
        assert fl == pytest.approx(0.45 * 100. ** 0.46)
        assert rothermel.calc_fireline_intensity_from_flame_length(fl) == pytest.approx(100.)
        assert rothermel.calc_flame_length(0.) == 0.

    def test_residence_time(self):
        """Residence time is 384 / sigma."""
        assert rothermel.calc_residence_time(3500.) == pytest.approx(384. / 3500.)
        assert rothermel.calc_residence_time(0.) == 0.

    def test_scorch_height(self):
        """Scorch height is zero without intensity or above 140 oF."""
        assert rothermel.calc_scorch_height(0., 5., 80.) == 0.
        assert rothermel.calc_scorch_height(100., 5., 140.) == 0.
        assert rothermel.calc_scorch_height(100., 5., 80.) > \
            rothermel.calc_scorch_height(50., 5., 80.)

    def test_ellipse_area_and_perimeter(self):
        """A circle's area and perimeter match the closed forms."""
        assert rothermel.calc_fire_area(2., 2.) == pytest.approx(np.pi)
        assert rothermel.calc_fire_perimeter(2., 2.) == pytest.approx(2. * np.pi)
        assert rothermel.calc_fire_width(10., 2.) == pytest.approx(5.)
