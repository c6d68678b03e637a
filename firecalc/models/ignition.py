"""Probability of ignition from firebrands (Schroeder 1969) and from
lightning (Latham and Schlieter 1989).
"""

import numpy as np

from firecalc.exceptions import ConfigurationError
from firecalc.utilities.unit_conversions import F_to_C

LIGHTNING_FUEL_TYPES = (
    "Ponderosa pine litter", "Punky wood, rotten, chunky", "Punky wood powder, deep",
    "Punky wood powder, shallow", "Lodgepole pine duff", "Douglas-fir duff",
    "High altitude mixed", "Peat moss",
)

LIGHTNING_CHARGES = ("Negative", "Positive", "Unknown")


def calc_fuel_temperature(air_temp: float, sun_shade: float) -> float:
    """Surface fuel temperature (oF) from air temperature and shading."""
    return air_temp + 25. - 20. * sun_shade


def calc_firebrand_prob(fuel_temp: float, fuel_mois: float) -> float:
    """Probability that a firebrand landing on fine dead fuel ignites it.

    Args:
        fuel_temp (float): fuel temperature (oF)
        fuel_mois (float): fine dead fuel moisture (fraction)
    """
    tc = F_to_C(fuel_temp)
    m = 100. * fuel_mois
    q_ig = 144.51 - 0.26600 * tc - 0.00058 * tc * tc - tc * m + 18.54 * (1. - np.exp(-0.151 * m)) \
        + 6.4 * m
    if q_ig >= 400.:
        return 0.
    x = 0.1 * (400. - q_ig)
    prob = 0.000048 * x ** 4.3 / 50.
    return float(min(1., max(0., prob)))


def calc_lightning_prob(fuel_type: int, duff_depth: float, fuel_mois: float, charge: int) -> float:
    """Probability that a lightning strike ignites the fuel.

    Args:
        fuel_type (int): index into LIGHTNING_FUEL_TYPES
        duff_depth (float): duff depth (in)
        fuel_mois (float): fuel moisture (fraction)
        charge (int): index into LIGHTNING_CHARGES

    Raises:
        ConfigurationError: if the fuel type or charge index is out of range
    """
    if fuel_type < 0 or fuel_type >= len(LIGHTNING_FUEL_TYPES):
        raise ConfigurationError(f"Lightning fuel type index {fuel_type} outside 0..7",
                                 parameter="vIgnitionLightningFuelType")
    if charge < 0 or charge >= len(LIGHTNING_CHARGES):
        raise ConfigurationError(f"Lightning charge index {charge} outside 0..2",
                                 parameter="vWthrLightningStrikeType")

    m = 100. * fuel_mois
    depth = 2.54 * duff_depth

    if fuel_type == 0:
        p_pos = 0.92 * np.exp(-0.087 * m)
        p_neg = 1.04 * np.exp(-0.054 * m)
    elif fuel_type == 1:
        p_pos = 0.44 * np.exp(-0.110 * m)
        p_neg = 0.59 * np.exp(-0.094 * m)
    elif fuel_type == 2:
        p_pos = 0.86 * np.exp(-0.060 * m)
        p_neg = 0.90 * np.exp(-0.056 * m)
    elif fuel_type == 3:
        p_pos = 0.60 * np.exp(-0.011 * m)
        p_neg = 0.73 * np.exp(-0.011 * m)
    elif fuel_type == 4:
        p_pos = 1. / (1. + np.exp(5.13 - 0.68 * depth))
        p_neg = 1. / (1. + np.exp(3.84 - 0.60 * depth))
    elif fuel_type == 5:
        p_pos = 1. / (1. + np.exp(6.69 - 1.39 * depth))
        p_neg = 1. / (1. + np.exp(5.48 - 1.28 * depth))
    elif fuel_type == 6:
        p_pos = 0.62 * np.exp(-0.050 * m)
        p_neg = 0.80 * np.exp(-0.014 * m)
    else:
        p_pos = 0.71 * np.exp(-0.070 * m)
        p_neg = 0.84 * np.exp(-0.060 * m)

    if charge == 0:
        prob = p_neg
    elif charge == 1:
        prob = p_pos
    else:
        prob = 0.2 * p_pos + 0.8 * p_neg

    return float(min(1., max(0., prob)))
