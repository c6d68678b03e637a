"""Tests for site, map and calendar helpers."""

import math

import pytest

from firecalc.exceptions import ConfigurationError
from firecalc.models import site


class TestMap:
    """Tests for map scale, distance and slope."""

    def test_map_scale(self):
        """1:24000 is 2.64 map inches per mile."""
        assert site.calc_map_scale(24000.) == pytest.approx(2.64)

    def test_zero_fraction_gives_zero_scale(self):
        """A missing map fraction yields a zero scale instead of an error."""
        assert site.calc_map_scale(0.) == 0.

    def test_map_distance(self):
        """One mile on a 2.64 in/mi map is 2.64 in."""
        assert site.calc_map_distance(5280., 2.64) == pytest.approx(2.64)

    def test_map_slope(self):
        """Rise over reach from contours and a measured map distance."""
        degrees, rise, reach = site.calc_map_slope(40., 5., 24000., 0.5)
        assert rise == pytest.approx(200.)
        assert reach == pytest.approx(1000.)
        assert degrees == pytest.approx(math.degrees(math.atan(0.2)))

    def test_map_slope_without_reach(self):
        """A zero map distance gives a flat slope."""
        degrees, rise, reach = site.calc_map_slope(40., 5., 24000., 0.)
        assert degrees == 0.
        assert rise == pytest.approx(200.)

    def test_ridge_to_valley(self):
        """Map inches divided by inches per mile give miles."""
        assert site.calc_ridge_to_valley_dist(5.28, 2.64) == pytest.approx(2.)
        assert site.calc_ridge_to_valley_dist(5.28, 0.) == 0.


class TestSlopeAndDirection:
    """Tests for slope units and compass directions."""

    def test_slope_units(self):
        """45 degrees is a slope fraction of one."""
        assert site.calc_slope_fraction(45.) == pytest.approx(1.)
        assert site.calc_slope_degrees(1.) == pytest.approx(45.)

    @pytest.mark.parametrize("index,expected", [(0, 0.), (4, 90.), (9, 202.5), (15, 337.5)])
    def test_compass_points(self, index, expected):
        """Compass points are 22.5 degrees apart."""
        assert site.compass_to_degrees(index) == pytest.approx(expected)

    @pytest.mark.parametrize("index", [-1, 16])
    def test_compass_out_of_range(self, index):
        """Only the sixteen compass points exist."""
        with pytest.raises(ConfigurationError):
            site.compass_to_degrees(index)

    def test_upslope_is_opposite_aspect(self):
        """Upslope direction wraps into [0, 360)."""
        assert site.calc_upslope_dir(0.) == pytest.approx(180.)
        assert site.calc_upslope_dir(270.) == pytest.approx(90.)


class TestJulianDate:
    """Tests for the modified Julian date."""

    def test_epoch(self):
        """The MJD epoch is 17 November 1858."""
        assert site.calc_julian_date(18581117.) == pytest.approx(0.)

    def test_known_date(self):
        """1 January 2000 is MJD 51544."""
        assert site.calc_julian_date(20000101.) == pytest.approx(51544.)

    def test_fraction_of_day(self):
        """The fractional part adds elapsed time of day."""
        assert site.calc_julian_date(20000101.5) == pytest.approx(51544.5)

    def test_invalid_date(self):
        """A date that does not exist raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            site.calc_julian_date(20000231.)
