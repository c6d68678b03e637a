"""Wind adjustment from the 20-ft (or 10-m) open wind down to midflame height.

References:
    - Albini, F. A. and Baughman, R. G. (1979). Estimating windspeeds for
      predicting wildland fire behavior. USDA Forest Service Research Paper
      INT-221.
"""

from dataclasses import dataclass

import numpy as np

from firecalc.utilities.fire_util import SMIDGEN, WindAdjMethod


@dataclass
class WindAdjustment:
    factor: float
    method: int
    crown_fill: float


def calc_crown_fill_portion(canopy_cover: float, crown_ratio: float) -> float:
    """Fraction of the canopy layer volume filled with tree crowns."""
    return canopy_cover * crown_ratio / 3.


def calc_wind_adj_factor(canopy_cover: float, cover_ht: float, crown_ratio: float,
                         fuel_depth: float) -> WindAdjustment:
    """Wind adjustment factor for sheltered or unsheltered surface fuels.

    Fuels are sheltered when the canopy fills more than 5% of its layer and
    trees are present; otherwise the open-fuel logarithmic profile is used
    with the fuel bed depth as roughness height.

    Args:
        canopy_cover (float): canopy cover (fraction)
        cover_ht (float): canopy height (ft)
        crown_ratio (float): crown length over tree height (fraction)
        fuel_depth (float): surface fuel bed depth (ft)

    Returns:
        WindAdjustment: factor, method used and crown fill portion
    """
    fill = calc_crown_fill_portion(canopy_cover, crown_ratio)

    if fill > 0.05 and cover_ht > SMIDGEN:
        waf = 0.555 / (np.sqrt(fill * cover_ht)
                       * np.log((20. + 0.36 * cover_ht) / (0.13 * cover_ht)))
        return WindAdjustment(float(min(waf, 1.)), WindAdjMethod.SHELTERED, fill)

    if fuel_depth < SMIDGEN:
        return WindAdjustment(0., WindAdjMethod.UNSHELTERED, fill)

    waf = 1.83 / np.log((20. + 0.36 * fuel_depth) / (0.13 * fuel_depth))
    return WindAdjustment(float(min(waf, 1.)), WindAdjMethod.UNSHELTERED, fill)


def calc_wind_speed_at_20ft(wind_10m: float) -> float:
    return wind_10m / 1.15


def calc_midflame_wind_speed(wind_20ft: float, waf: float) -> float:
    return wind_20ft * waf
