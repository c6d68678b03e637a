"""Crown scorch and post-fire tree mortality.

Bark thickness and the general mortality equation follow FOFEM (Ryan and
Reinhardt 1988). Species with a Hood et al. (2007) crown-injury equation use
that equation instead.

References:
    - Ryan, K. C. and Reinhardt, E. D. (1988). Predicting postfire mortality
      of seven western conifers. Canadian Journal of Forest Research 18.
    - Hood, S. M., Smith, S. L. and Cluck, D. R. (2007). Delayed conifer tree
      mortality following fire in California. USDA Forest Service PSW-GTR-203.
"""

import json
import os
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from firecalc.exceptions import ConfigurationError
from firecalc.utilities.fire_util import SMIDGEN


@dataclass(frozen=True)
class TreeSpecies:
    code: str
    name: str
    bark_coef: float
    hood: Optional[str]


class SpeciesTable:
    _species = None  # class-level cache

    @classmethod
    def load_species(cls):
        if cls._species is None:
            json_path = os.path.join(os.path.dirname(__file__), "species.json")
            with open(json_path, "r") as f:
                data = json.load(f)
            cls._species = tuple(TreeSpecies(**rec) for rec in data["species"])
        return cls._species

    @classmethod
    def codes(cls) -> Tuple[str, ...]:
        return tuple(s.code for s in cls.load_species())

    @classmethod
    def get(cls, index: int, parameter: str = "vTreeSpecies") -> TreeSpecies:
        """Looks up a species by its index.

        Raises:
            ConfigurationError: if the index is out of range
        """
        species = cls.load_species()
        if index < 0 or index >= len(species):
            raise ConfigurationError(f"Species index {index} outside 0..{len(species) - 1}",
                                     parameter=parameter)
        return species[index]


def calc_bark_thickness(species: TreeSpecies, dbh: float) -> float:
    """FOFEM bark thickness (in) from diameter at breast height (in)."""
    return species.bark_coef * dbh


def calc_crown_ratio(crown_base_ht: float, tree_ht: float) -> float:
    if tree_ht < SMIDGEN:
        return 0.
    return min(1., max(0., (tree_ht - crown_base_ht) / tree_ht))


def calc_crown_base_ht(crown_ratio: float, tree_ht: float) -> float:
    return tree_ht * (1. - crown_ratio)


def calc_crown_scorch(crown_ratio: float, scorch_ht: float,
                      tree_ht: float) -> Tuple[float, float, float]:
    """Crown length and volume scorched.

    The crown is treated as a cone; the volume fraction follows from the
    scorched length fraction.

    Returns:
        Tuple[float, float, float]: scorched length (ft), length fraction,
        volume fraction
    """
    crown_leng = tree_ht * crown_ratio
    if crown_leng < SMIDGEN:
        return 0., 0., 0.

    base_ht = tree_ht - crown_leng
    scorch_leng = min(crown_leng, max(0., scorch_ht - base_ht))
    leng_frac = scorch_leng / crown_leng
    vol_frac = scorch_leng * (2. * crown_leng - scorch_leng) / (crown_leng * crown_leng)
    return scorch_leng, leng_frac, vol_frac


def _logistic(x: float) -> float:
    return float(1. / (1. + np.exp(-x)))


def calc_mortality_ryan(bark_thickness: float, crown_vol_scorched: float) -> float:
    """General FOFEM mortality from bark thickness (in) and volume scorched."""
    cvs = 100. * crown_vol_scorched
    x = -1.941 + 6.316 * (1. - np.exp(-bark_thickness)) - 0.000535 * cvs * cvs
    return float(1. / (1. + np.exp(x)))


def calc_mortality_longleaf(bark_thickness: float, crown_vol_scorched: float) -> float:
    x = (0.169 + 5.136 * bark_thickness + 14.492 * bark_thickness ** 2
         - 0.348 * crown_vol_scorched ** 2)
    return float(1. / (1. + np.exp(x)))


def calc_mortality_hood(equation: str, dbh: float, crown_leng_scorched: float,
                        crown_vol_scorched: float) -> float:
    """Hood crown-injury mortality.

    Args:
        equation (str): Hood equation key
        dbh (float): diameter at breast height (in)
        crown_leng_scorched (float): crown length scorched (fraction)
        crown_vol_scorched (float): crown volume scorched (fraction)
    """
    cls = 100. * crown_leng_scorched
    cvs = 100. * crown_vol_scorched
    dbh_cm = 2.54 * dbh

    if equation == "ABICON":
        x = -3.5083 + 0.0956 * cls - 0.00184 * cls ** 2 + 0.000017 * cls ** 3
    elif equation == "ABIGRA":
        x = -1.6950 + 0.2071 * cvs - 0.0047 * cvs ** 2 + 0.000035 * cvs ** 3
    elif equation == "ABIMAG":
        x = -2.3085 + 0.000004059 * cls ** 3
    elif equation == "LAROCC":
        x = -1.6594 + 0.0327 * cvs - 0.0489 * dbh_cm
    elif equation == "LIBDEC":
        x = -4.2466 + 0.000007172 * cls ** 3
    elif equation == "PICENG":
        x = 0.0845 + 0.0445 * cvs
    elif equation == "PINCON":
        x = (-0.3268 + 0.1387 * cvs - 0.0033 * cvs ** 2 + 0.000025 * cvs ** 3
             - 0.0266 * dbh_cm)
    elif equation == "PINLAM":
        x = -2.0588 + 0.000814 * cls ** 2
    elif equation == "PINPON":
        x = -2.7103 + 0.000004093 * cvs ** 3
    elif equation == "PSEMEN":
        x = -2.0346 + 0.0906 * cvs - 0.0022 * cvs ** 2 + 0.000019 * cvs ** 3
    else:
        raise ConfigurationError(f"No Hood mortality equation '{equation}'")

    return _logistic(x)


def calc_mortality_fofem(species: TreeSpecies, bark_thickness: float,
                         crown_vol_scorched: float) -> float:
    if species.code == "PINPAL":
        return calc_mortality_longleaf(bark_thickness, crown_vol_scorched)
    return calc_mortality_ryan(bark_thickness, crown_vol_scorched)


def calc_mortality_fofem_hood(species: TreeSpecies, dbh: float, bark_thickness: float,
                              crown_leng_scorched: float, crown_vol_scorched: float) -> float:
    if species.hood is not None:
        return calc_mortality_hood(species.hood, dbh, crown_leng_scorched, crown_vol_scorched)
    return calc_mortality_fofem(species, bark_thickness, crown_vol_scorched)


def calc_mortality_count(rate: float, tree_count: float) -> float:
    return rate * tree_count
