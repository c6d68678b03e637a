"""Maximum spotting distance from a burning pile, a surface fire or a group
of torching trees (Albini 1979, 1983; Chase 1981, 1984).

Each source lofts firebrands to a height depending on its flame; the flat
terrain distance follows from the 20-ft wind speed and the downwind cover
height, and is then corrected for ridge/valley terrain.

References:
    - Albini, F. A. (1979). Spot fire distance from burning trees, a
      predictive model. USDA Forest Service General Technical Report INT-56.
    - Chase, C. H. (1984). Spotting distance from wind-driven surface fires,
      extensions of equations for pocket calculators. USDA Forest Service
      Research Note INT-346.
"""

from dataclasses import dataclass

import numpy as np

from firecalc.exceptions import ConfigurationError
from firecalc.utilities.fire_util import SMIDGEN

TORCHING_SPECIES = (
    "Engelmann spruce", "Douglas-fir", "Subalpine fir", "Western hemlock",
    "Ponderosa pine", "Lodgepole pine", "Western white pine", "Grand fir",
    "Balsam fir", "Slash pine", "Longleaf pine", "Pond pine", "Shortleaf pine",
    "Loblolly pine",
)

# Flame height and duration coefficients per torching species
_TORCH_A = (15.7, 15.7, 15.7, 15.7, 12.9, 12.9, 12.9, 16.5, 16.5, 2.71, 2.71, 2.71, 2.71, 2.71)
_TORCH_B = (.451, .451, .451, .451, .453, .453, .453, .515, .515, 1.0, 1.0, 1.0, 1.0, 1.0)
_DUR_A = (12.6, 10.7, 10.7, 6.3, 12.6, 12.6, 10.7, 10.7, 10.7, 11.9, 11.9, 7.91, 7.91, 13.5)
_DUR_B = (-.256, -.278, -.278, -.249, -.256, -.256, -.278, -.278, -.278, -.389, -.389,
          -.344, -.344, -.544)

# Firebrand height coefficients keyed by flame ratio class
_BRAND_A = (4.24, 3.64, 2.78, 4.70)
_BRAND_B = (0.332, 0.391, 0.418, 0.000)

SPOT_SOURCES = ("Ridge top", "Midslope, windward", "Valley bottom", "Midslope, leeward")


@dataclass
class SpotResult:
    cover_ht: float         # ft, cover height used
    firebrand_ht: float     # ft
    flat_dist: float        # mi
    dist: float             # mi
    drift: float = 0.       # mi, surface fire only
    flame_ht: float = 0.    # ft, torching trees only
    flame_ratio: float = 0.
    flame_dur: float = 0.


def calc_flat_terrain_distance(firebrand_ht: float, cover_ht: float, wind_20ft: float) -> float:
    """Spotting distance over flat terrain (mi)."""
    if firebrand_ht < SMIDGEN or cover_ht < SMIDGEN:
        return 0.
    ratio = firebrand_ht / cover_ht
    if ratio <= 1.:
        return 0.
    return 0.000718 * wind_20ft * np.sqrt(cover_ht) * (
        0.362 + np.sqrt(ratio) / 2. * np.log(ratio))


def calc_mountain_distance(flat_dist: float, source: int, rv_horz: float, rv_elev: float) -> float:
    """Corrects a flat terrain spotting distance for ridge/valley terrain.

    Args:
        flat_dist (float): flat terrain distance (mi)
        source (int): source location, index into SPOT_SOURCES
        rv_horz (float): ridge to valley horizontal distance (mi)
        rv_elev (float): ridge to valley elevation difference (ft)

    Raises:
        ConfigurationError: if the source location is out of range
    """
    if source < 0 or source >= len(SPOT_SOURCES):
        raise ConfigurationError(f"Spot source index {source} outside 0..3",
                                 parameter="vSpotFireSource")

    if rv_horz < SMIDGEN or rv_elev < SMIDGEN:
        return flat_dist

    a1 = flat_dist / rv_horz
    b1 = rv_elev / (10. * np.pi * rv_horz * 5280.)
    phase = source * np.pi / 2.

    x = a1
    for _ in range(6):
        x = a1 - b1 * (np.cos(np.pi * x - phase) - np.cos(phase))
    return float(x * rv_horz)


def calc_spot_burning_pile(flame_ht: float, cover_ht: float, wind_20ft: float, source: int,
                           rv_horz: float, rv_elev: float) -> SpotResult:
    z = 12.2 * flame_ht
    flat = calc_flat_terrain_distance(z, cover_ht, wind_20ft)
    dist = calc_mountain_distance(flat, source, rv_horz, rv_elev)
    return SpotResult(cover_ht, z, flat, dist)


def calc_spot_surface_fire(flame_length: float, cover_ht: float, wind_20ft: float, source: int,
                           rv_horz: float, rv_elev: float) -> SpotResult:
    """Spotting from a wind-driven surface fire.

    The firebrand height comes from the fireline intensity implied by the
    flame length; firebrands drift while they fall through the canopy.
    """
    ht_used = cover_ht / 2.
    if flame_length < SMIDGEN or wind_20ft < SMIDGEN or ht_used < SMIDGEN:
        return SpotResult(ht_used, 0., 0., 0.)

    fli = (flame_length / 0.45) ** (1. / 0.46)
    z = 1.055 * np.sqrt(fli)
    drift = 0.000278 * wind_20ft * z ** 0.643

    flat = calc_flat_terrain_distance(z, ht_used, wind_20ft)
    if flat > 0.:
        flat += drift
    dist = calc_mountain_distance(flat, source, rv_horz, rv_elev)
    return SpotResult(ht_used, float(z), flat, dist, drift=float(drift))


def calc_spot_torching_trees(species: int, dbh: float, tree_ht: float, tree_count: float,
                             cover_ht: float, wind_20ft: float, source: int,
                             rv_horz: float, rv_elev: float) -> SpotResult:
    """Spotting from a group of torching trees.

    Args:
        species (int): index into TORCHING_SPECIES
        dbh (float): diameter at breast height (in)
        tree_ht (float): torching tree height (ft)
        tree_count (float): number of trees torching together
        cover_ht (float): downwind canopy height (ft)
        wind_20ft (float): 20-ft wind speed (mi/h)
        source (int): source location, index into SPOT_SOURCES
        rv_horz (float): ridge to valley horizontal distance (mi)
        rv_elev (float): ridge to valley elevation difference (ft)

    Raises:
        ConfigurationError: if the species index is out of range
    """
    if species < 0 or species >= len(TORCHING_SPECIES):
        raise ConfigurationError(f"Torching tree species index {species} outside 0..13",
                                 parameter="vTreeSpeciesSpot")

    if dbh < SMIDGEN or tree_count < 1. or tree_ht < SMIDGEN:
        return SpotResult(cover_ht, 0., 0., 0.)

    flame_ht = _TORCH_A[species] * dbh ** _TORCH_B[species] * tree_count ** 0.4
    flame_ratio = tree_ht / flame_ht
    flame_dur = _DUR_A[species] * dbh ** _DUR_B[species] * tree_count ** (-0.2)

    if flame_ratio >= 1.:
        idx = 0
    elif flame_ratio >= 0.5:
        idx = 1
    elif flame_ratio < 0.5 and flame_dur < 3.5:
        idx = 2
    else:
        idx = 3

    z = _BRAND_A[idx] * flame_dur ** _BRAND_B[idx] * flame_ht + tree_ht / 2.

    flat = calc_flat_terrain_distance(z, cover_ht, wind_20ft)
    dist = calc_mountain_distance(flat, source, rv_horz, rv_elev)
    return SpotResult(cover_ht, float(z), flat, dist, flame_ht=float(flame_ht),
                      flame_ratio=float(flame_ratio), flame_dur=float(flame_dur))
