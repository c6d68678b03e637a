"""Palmetto-gallberry dynamic fuel model (Hough and Albini 1978).

Loads are predicted from stand age, palmetto coverage, understory height and
overstory basal area. All loads are lb/ft2.
"""

from dataclasses import dataclass

import numpy as np

from firecalc.models.fuel_models import ParticleArrays
from firecalc.utilities.fire_util import LifeCategory

PALMETTO_MEXT_DEAD = 0.40
PALMETTO_HEAT = 8300.
PALMETTO_STOT = 0.030


@dataclass
class PalmettoLoads:
    depth: float
    dead1: float
    dead10: float
    dead_foliage: float
    litter: float
    live1: float
    live10: float
    live_foliage: float


def _positive(x: float) -> float:
    return max(0., float(x))


def calc_palmetto_loads(age: float, cover: float, height: float,
                        basal_area: float) -> PalmettoLoads:
    """Palmetto-gallberry fuel loads and bed depth.

    Args:
        age (float): years since last rough burn
        cover (float): palmetto coverage (%)
        height (float): average understory height (ft)
        basal_area (float): overstory basal area (ft2/ac)

    Returns:
        PalmettoLoads: bed depth (ft) and the seven component loads
    """
    log_age = np.log(age) if age > 0. else 0.

    return PalmettoLoads(
        depth=2. * height / 3.,
        dead1=_positive(-0.00121 + 0.00379 * log_age + 0.00118 * height * height),
        dead10=_positive(-0.00775 + 0.00021 * cover + 0.00007 * age * age),
        dead_foliage=_positive(0.00221 * age ** 0.51263 * np.exp(0.02482 * cover)),
        litter=_positive((0.03632 + 0.0005336 * basal_area) * (1. - 0.25 ** age)),
        live1=_positive(0.00546 + 0.00092 * age + 0.00212 * height * height),
        live10=_positive(-0.02128 + 0.00014 * age * age + 0.00314 * height * height),
        live_foliage=_positive(-0.0036 + 0.00253 * age + 0.00049 * cover
                               + 0.00282 * height * height),
    )


def palmetto_particles(loads: PalmettoLoads) -> ParticleArrays:
    """Eight particle slots of a palmetto-gallberry fuel bed."""
    p = ParticleArrays.empty(heat=PALMETTO_HEAT, stot=PALMETTO_STOT)

    p.life[:] = [LifeCategory.DEAD, LifeCategory.DEAD, LifeCategory.DEAD,
                 LifeCategory.WOOD, LifeCategory.WOOD, LifeCategory.HERB,
                 LifeCategory.LITTER, LifeCategory.DEAD]
    p.load[:] = [loads.dead1, loads.dead10, loads.dead_foliage, loads.live1,
                 loads.live10, loads.live_foliage, loads.litter, 0.]
    p.savr[:] = [350., 140., 2000., 350., 140., 2000., 2000., 1.]
    p.dens[:] = [30., 30., 30., 46., 46., 46., 30., 32.]
    p.seff[:] = [0.010, 0.010, 0.010, 0.015, 0.015, 0.015, 0.010, 0.010]
    return p
