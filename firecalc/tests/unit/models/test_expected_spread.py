"""Tests for the two-dimensional expected spread sampler."""

import pytest

from firecalc.models.expected_spread import ExpectedSpreadSampler


class TestExpectedSpreadSampler:
    """Tests for Monte Carlo expected spread through two interleaved fuels."""

    @pytest.fixture
    def sampler(self):
        return ExpectedSpreadSampler(samples=20, depth=10, laterals=2, seed=7)

    def test_identical_fuels(self, sampler):
        """Two identical fuels spread at their common rate."""
        assert sampler.expected_rate(10., 10., 0.5, 1.) == pytest.approx(10.)
        assert sampler.expected_rate(10., 10., 0.5, 2.5) == pytest.approx(10.)

    def test_full_coverage(self, sampler):
        """Complete coverage by either fuel gives that fuel's rate."""
        assert sampler.expected_rate(12., 3., 1., 1.) == pytest.approx(12.)
        assert sampler.expected_rate(12., 3., 0., 1.) == pytest.approx(3.)

    def test_mixture_is_bounded(self, sampler):
        """A mixture spreads between the slower and the faster fuel."""
        rate = sampler.expected_rate(12., 3., 0.5, 1.)
        assert 3. < rate < 12.

    def test_more_fast_fuel_is_faster(self, sampler):
        """Raising the fast fuel's coverage raises the expected rate."""
        low = sampler.expected_rate(12., 3., 0.2, 1.)
        high = sampler.expected_rate(12., 3., 0.8, 1.)
        assert high > low

    def test_non_burnable_secondary(self, sampler):
        """A landscape of non-burnable fuel does not spread."""
        assert sampler.expected_rate(12., 0., 0., 1.) == 0.

    def test_reproducible(self):
        """The same seed gives the same estimate."""
        a = ExpectedSpreadSampler(samples=15, depth=8, seed=3).expected_rate(9., 2., 0.4, 1.5)
        b = ExpectedSpreadSampler(samples=15, depth=8, seed=3).expected_rate(9., 2., 0.4, 1.5)
        assert a == b

    def test_parameters_are_clamped(self):
        """Sample count and depth are at least one; laterals at least zero."""
        s = ExpectedSpreadSampler(samples=0, depth=-3, laterals=-1)
        assert (s.samples, s.depth, s.laterals) == (1, 1, 0)

    def test_each_fuel_keeps_its_shape(self, sampler):
        """An elongated secondary fuel slows the diagonal steps into it."""
        round_fuel = sampler.expected_rate(3., 12., 0.5, 1.)
        assert sampler.expected_rate(3., 12., 0.5, 1., 1.) == round_fuel
        assert sampler.expected_rate(3., 12., 0.5, 1., 4.) < round_fuel
