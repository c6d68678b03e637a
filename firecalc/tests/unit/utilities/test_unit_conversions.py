"""Tests for unit conversions and shared fire enumerations."""

import pytest

from firecalc.utilities import unit_conversions as uc
from firecalc.utilities.fire_util import (ContainDerivedStatus, ContainStatus, LifeCategory,
                                          is_dead, wrap_degrees)


class TestConversions:
    """Tests for the named conversion helpers."""

    @pytest.mark.parametrize("fwd,back,value", [
        (uc.F_to_C, uc.C_to_F, 77.),
        (uc.m_to_ft, uc.ft_to_m, 10.),
        (uc.mph_to_ft_min, uc.ft_min_to_mph, 5.),
        (uc.ft_to_mi, uc.mi_to_ft, 2640.),
        (uc.ch2_to_ac, uc.ac_to_ch2, 40.),
        (uc.TPA_to_Lbsft2, uc.Lbsft2_to_TPA, 3.),
        (uc.BTU_ft_s_to_kW_m, uc.kW_m_to_BTU_ft_s, 100.),
    ])
    def test_inverse_pairs(self, fwd, back, value):
        assert back(fwd(value)) == pytest.approx(value)

    def test_known_values(self):
        assert uc.F_to_C(212.) == pytest.approx(100.)
        assert uc.mph_to_ft_min(1.) == pytest.approx(88.)
        assert uc.ft_min_to_ch_h(66.) == pytest.approx(60.)
        assert uc.ac_to_ch2(1.) == pytest.approx(10.)
        assert uc.ft2_to_ac(43560.) == pytest.approx(1.)


class TestDisplayFactor:
    """Tests for native-to-display unit lookups."""

    def test_same_units(self):
        assert uc.display_factor("ft", "ft") == (1., 0.)

    def test_forward_and_reverse(self):
        """Reverse pairs are derived from the forward entry."""
        assert uc.native_to_display(10., "ft", "m") == pytest.approx(3.048)
        assert uc.native_to_display(3.048, "m", "ft") == pytest.approx(10.)

    def test_offset(self):
        """Temperature conversions carry an offset."""
        assert uc.native_to_display(32., "oF", "oC") == pytest.approx(0.)
        assert uc.native_to_display(100., "oC", "oF") == pytest.approx(212.)
        assert uc.display_to_native(100., "oF", "oC") == pytest.approx(212.)

    def test_unknown_pair(self):
        with pytest.raises(KeyError):
            uc.display_factor("ft", "oC")


class TestFireUtil:
    """Tests for shared enumerations and helpers."""

    @pytest.mark.parametrize("deg,expected", [(0., 0.), (360., 0.), (-90., 270.), (725., 5.)])
    def test_wrap_degrees(self, deg, expected):
        assert wrap_degrees(deg) == pytest.approx(expected)

    def test_litter_is_dead(self):
        assert is_dead(LifeCategory.LITTER)
        assert is_dead(LifeCategory.DEAD)
        assert not is_dead(LifeCategory.HERB)

    def test_crosswalk(self):
        """Only contained and overrun runs avoid the escaped status."""
        crosswalk = ContainDerivedStatus.crosswalk
        assert crosswalk[ContainStatus.CONTAINED] == ContainDerivedStatus.CONTAINED
        assert crosswalk[ContainStatus.OVERRUN] == ContainDerivedStatus.WITHDRAWN
        assert crosswalk[ContainStatus.EXHAUSTED] == ContainDerivedStatus.ESCAPED
        assert len(crosswalk) == len(ContainStatus.names)
