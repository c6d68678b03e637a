"""Crown fire initiation and spread.

Crown spread follows Rothermel (1991): 3.34 times the fuel model 10 surface
spread rate computed with 40% of the 20-ft wind speed. Initiation follows Van
Wagner (1977) and the active crown threshold follows Alexander (1988).

References:
    - Rothermel, R. C. (1991). Predicting behavior and size of crown fires in
      the northern Rocky Mountains. USDA Forest Service Research Paper INT-438.
    - Van Wagner, C. E. (1977). Conditions for the start and spread of crown
      fire. Canadian Journal of Forest Research 7: 23-34.
"""

import numpy as np

from firecalc.models.fuel_models import FuelModelCatalog, model_particles, calc_time_lag_moisture
from firecalc.models.rothermel import *
from firecalc.utilities.fire_util import SMIDGEN, CrownFireType
from firecalc.utilities.unit_conversions import ft_to_m, kW_m_to_BTU_ft_s, mph_to_ft_min

# Heat content of canopy foliage (Btu/lb)
CANOPY_HEAT = 8000.


def calc_crown_spread_rate(wind_20ft: float, mois_dead1: float, mois_dead10: float,
                           mois_dead100: float, mois_live_wood: float) -> float:
    """Active crown fire spread rate (ft/min)."""
    fuel = FuelModelCatalog.get("FM10")
    parts = model_particles(fuel)
    bed = FuelBed(fuel.depth, fuel.mext_dead, parts.life, parts.load, parts.savr,
                  parts.heat, parts.dens, parts.stot, parts.seff)

    mois = calc_time_lag_moisture(parts.life, parts.savr, mois_dead1, mois_dead10,
                                  mois_dead100, mois_dead100, mois_live_wood, mois_live_wood)
    hs = calc_heat_sink(bed, mois)
    rxi, _, _ = calc_reaction_intensity(bed, hs.dead_mois, hs.live_mois, hs.live_mext)
    flux = calc_propagating_flux(bed.sigma, bed.packing_ratio)
    ros0 = calc_no_wind_rate(rxi, flux, hs.heat_sink)

    head = calc_spread_at_head(ros0, rxi, 0., 0.4 * wind_20ft, 0., bed.sigma,
                               bed.packing_ratio, bed.beta_ratio)
    return 3.34 * head.ros


def calc_critical_surface_intensity(foliar_mois: float, crown_base_ht: float) -> float:
    """Van Wagner's critical surface fireline intensity (Btu/ft/s).

    Args:
        foliar_mois (float): foliar moisture content (fraction)
        crown_base_ht (float): crown base height (ft)
    """
    i0 = (0.010 * ft_to_m(crown_base_ht) * (460. + 25.9 * 100. * foliar_mois)) ** 1.5
    return kW_m_to_BTU_ft_s(i0)


def calc_critical_surface_flame_length(critical_intensity: float) -> float:
    return calc_flame_length(critical_intensity)


def calc_critical_crown_spread_rate(canopy_bulk_density: float) -> float:
    """Minimum spread rate (ft/min) for an active crown fire."""
    cbd = canopy_bulk_density * 16.0185  # kg/m3
    if cbd < SMIDGEN:
        return 0.
    return 3.0 / cbd * 3.28084


def calc_transition_ratio(surface_intensity: float, critical_intensity: float) -> float:
    return 0. if critical_intensity < SMIDGEN else surface_intensity / critical_intensity


def calc_active_ratio(crown_rate: float, critical_rate: float) -> float:
    return 0. if critical_rate < SMIDGEN else crown_rate / critical_rate


def calc_crown_fire_type(transition_ratio: float, active_ratio: float) -> int:
    if transition_ratio < 1.:
        return CrownFireType.SURFACE if active_ratio < 1. else CrownFireType.CONDITIONAL
    return CrownFireType.TORCHING if active_ratio < 1. else CrownFireType.CROWNING


def calc_crown_fuel_load(canopy_bulk_density: float, cover_ht: float, crown_base_ht: float) -> float:
    """Available canopy fuel load (lb/ft2)."""
    return canopy_bulk_density * max(0., cover_ht - crown_base_ht)


def calc_canopy_heat_per_unit_area(crown_fuel_load: float) -> float:
    return crown_fuel_load * CANOPY_HEAT


def calc_crown_fireline_intensity(heat_per_unit_area: float, crown_rate: float) -> float:
    return heat_per_unit_area * crown_rate / 60.


def calc_crown_flame_length(crown_intensity: float) -> float:
    """Thomas (1963) flame length (ft) of a crown fire."""
    return 0. if crown_intensity < SMIDGEN else 0.2 * crown_intensity ** (2. / 3.)


def calc_crown_length_to_width(wind_20ft: float) -> float:
    return 1. + 0.125 * wind_20ft


def calc_crown_spread_dist(crown_rate: float, elapsed: float) -> float:
    return crown_rate * elapsed


def calc_crown_fire_area(spread_dist: float, lw_ratio: float) -> float:
    """Elliptical crown fire area (ft2) from the forward spread distance."""
    if lw_ratio < SMIDGEN:
        return 0.
    return np.pi * spread_dist * spread_dist / (4. * lw_ratio)


def calc_crown_fire_perimeter(spread_dist: float, lw_ratio: float) -> float:
    if lw_ratio < SMIDGEN:
        return 0.
    return 0.5 * np.pi * spread_dist * (1. + 1. / lw_ratio)


def calc_power_of_fire(crown_intensity: float) -> float:
    return crown_intensity / 129.


def calc_power_of_wind(wind_20ft: float, crown_rate: float) -> float:
    """Byram's power of the wind (ft-lb/s/ft2)."""
    diff = mph_to_ft_min(wind_20ft) - crown_rate
    if diff <= 0.:
        return 0.
    return 0.00106 * (diff / 60.) ** 3


def calc_power_ratio(power_of_fire: float, power_of_wind: float) -> float:
    return 0. if power_of_wind < SMIDGEN else power_of_fire / power_of_wind


def is_wind_driven(power_ratio: float) -> bool:
    return 1.e-5 < power_ratio < 1.
