"""Quaking aspen dynamic fuel model (Brown and Simard 1987) and aspen
mortality (Brown and DeByle 1987).

Loads and surface area to volume ratios are interpolated linearly in the
curing level between the tabulated curing classes of each aspen type.
"""

import json
import os
from dataclasses import dataclass

import numpy as np

from firecalc.exceptions import ConfigurationError
from firecalc.models.fuel_models import ParticleArrays
from firecalc.utilities.fire_util import LifeCategory
from firecalc.utilities.unit_conversions import TPA_to_Lbsft2

ASPEN_HEAT = 8000.
ASPEN_STOT = 0.055

ASPEN_SEVERITIES = ("Low", "Moderate or high")


@dataclass
class AspenFuel:
    depth: float
    mext_dead: float
    load_dead1: float
    load_dead10: float
    load_live_herb: float
    load_live_woody: float
    savr_dead1: float
    savr_dead10: float
    savr_live_herb: float
    savr_live_woody: float


class AspenTable:
    _table = None  # class-level cache

    @classmethod
    def load_table(cls) -> dict:
        if cls._table is None:
            json_path = os.path.join(os.path.dirname(__file__), "aspen.json")
            with open(json_path, "r") as f:
                cls._table = json.load(f)
        return cls._table

    @classmethod
    def type_names(cls):
        return tuple(t["name"] for t in cls.load_table()["types"])


def calc_aspen_fuel(type_index: int, curing: float) -> AspenFuel:
    """Aspen fuel bed for one aspen type at a curing level.

    Args:
        type_index (int): aspen type, index into the aspen table
        curing (float): curing level (fraction)

    Raises:
        ConfigurationError: if the type index is out of range

    Returns:
        AspenFuel: depth, extinction moisture, loads (lb/ft2) and SAVRs
    """
    table = AspenTable.load_table()
    types = table["types"]
    if type_index < 0 or type_index >= len(types):
        raise ConfigurationError(f"Aspen type index {type_index} outside 0..{len(types) - 1}",
                                 parameter="vSurfaceFuelAspenType")

    rec = types[type_index]
    x = min(1., max(0., curing))
    xs = table["curing"]

    def interp(key):
        return float(np.interp(x, xs, rec[key]))

    return AspenFuel(
        depth=rec["depth"],
        mext_dead=rec["mext"],
        load_dead1=TPA_to_Lbsft2(interp("load_dead1")),
        load_dead10=TPA_to_Lbsft2(interp("load_dead10")),
        load_live_herb=TPA_to_Lbsft2(interp("load_live_herb")),
        load_live_woody=TPA_to_Lbsft2(interp("load_live_woody")),
        savr_dead1=interp("savr_dead1"),
        savr_dead10=table["savr_dead10"],
        savr_live_herb=table["savr_live_herb"],
        savr_live_woody=interp("savr_live_woody"),
    )


def aspen_particles(load_dead1: float, load_dead10: float, load_live_herb: float,
                    load_live_woody: float, savr_dead1: float, savr_dead10: float,
                    savr_live_herb: float, savr_live_woody: float) -> ParticleArrays:
    p = ParticleArrays.empty(savr=30., heat=ASPEN_HEAT, stot=ASPEN_STOT)

    p.life[:4] = [LifeCategory.DEAD, LifeCategory.DEAD, LifeCategory.HERB, LifeCategory.WOOD]
    p.load[:4] = [load_dead1, load_dead10, load_live_herb, load_live_woody]
    p.savr[:4] = [savr_dead1, savr_dead10, savr_live_herb, savr_live_woody]
    return p


def calc_aspen_mortality(severity: int, flame_length: float, dbh: float) -> float:
    """Probability of aspen mortality.

    Args:
        severity (int): 0 for low severity, 1 for moderate or high
        flame_length (float): flame length (ft)
        dbh (float): diameter at breast height (in)

    Returns:
        float: mortality rate (fraction)
    """
    char_ht = flame_length / 1.8
    if severity == 0:
        x = -4.407 + 0.638 * dbh - 2.134 * char_ht
    else:
        x = -2.157 + 0.218 * dbh - 3.600 * char_ht
    return float(min(1., max(0., 1. / (1. + np.exp(x)))))
