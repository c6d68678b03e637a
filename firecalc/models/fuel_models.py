"""Fuel model and moisture scenario dictionaries.

Both are read-only catalogs keyed by name and loaded once from the JSON files
shipped beside this module. Loads are stored in tons/acre and moistures in
percent in the JSON files; they are converted to the worksheet's native
lb/ft2 and fraction on load.

Classes:
    - FuelModel: one standard fire behavior fuel model.
    - FuelModelCatalog: name -> FuelModel lookup.
    - MoistureScenario: one named set of fuel moistures.
    - MoistureScenarioCatalog: name -> MoistureScenario lookup.

References:
    - Anderson, H. E. (1982). Aids to Determining Fuel Models for Estimating
      Fire Behavior. USDA Forest Service General Technical Report INT-122.
    - Scott, J. H. and Burgan, R. E. (2005). Standard Fire Behavior Fuel
      Models. USDA Forest Service General Technical Report RMRS-GTR-153.
"""

import json
import os
from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from firecalc.exceptions import ConfigurationError
from firecalc.utilities.fire_util import MAX_PARTS, LifeCategory
from firecalc.utilities.unit_conversions import TPA_to_Lbsft2


@dataclass(frozen=True)
class FuelModel:
    name: str
    number: int
    description: str
    depth: float            # ft
    mext_dead: float        # fraction
    heat_dead: float        # Btu/lb
    heat_live: float        # Btu/lb
    load_dead1: float       # lb/ft2
    load_dead10: float
    load_dead100: float
    load_live_herb: float
    load_live_wood: float
    savr_dead1: float       # ft2/ft3
    savr_live_herb: float
    savr_live_wood: float
    transfer: int           # 0 static, 1 dynamic herbaceous load transfer

    @classmethod
    def from_record(cls, name: str, rec: dict) -> "FuelModel":
        loads = rec["load"]
        savr = rec["savr"]
        return cls(
            name=name,
            number=int(rec["number"]),
            description=rec.get("description", ""),
            depth=float(rec["depth"]),
            mext_dead=float(rec["mext"]) / 100.,
            heat_dead=float(rec.get("heat_dead", 8000.)),
            heat_live=float(rec.get("heat_live", 8000.)),
            load_dead1=TPA_to_Lbsft2(loads[0]),
            load_dead10=TPA_to_Lbsft2(loads[1]),
            load_dead100=TPA_to_Lbsft2(loads[2]),
            load_live_herb=TPA_to_Lbsft2(loads[3]),
            load_live_wood=TPA_to_Lbsft2(loads[4]),
            savr_dead1=float(savr[0]),
            savr_live_herb=float(savr[1]),
            savr_live_wood=float(savr[2]),
            transfer=1 if rec.get("dynamic", False) else 0,
        )


@dataclass(frozen=True)
class MoistureScenario:
    name: str
    description: str
    dead1: float            # fraction
    dead10: float
    dead100: float
    dead1000: float
    live_herb: float
    live_wood: float


class FuelModelCatalog:
    _fuel_models = None  # class-level cache

    @classmethod
    def load_fuel_models(cls) -> Dict[str, FuelModel]:
        if cls._fuel_models is None:
            json_path = os.path.join(os.path.dirname(__file__), "fuel_models.json")
            with open(json_path, "r") as f:
                data = json.load(f)
            cls._fuel_models = {
                name: FuelModel.from_record(name, rec) for name, rec in data["models"].items()
            }
        return cls._fuel_models

    @classmethod
    def get(cls, name: str) -> FuelModel:
        """Looks up a fuel model by name.

        Raises:
            ConfigurationError: if no fuel model has this name
        """
        models = cls.load_fuel_models()
        try:
            return models[name]
        except KeyError:
            raise ConfigurationError(f"Unknown fuel model '{name}'",
                                     parameter="vSurfaceFuelBedModel") from None

    @classmethod
    def names(cls) -> List[str]:
        return list(cls.load_fuel_models())


class MoistureScenarioCatalog:
    _scenarios = None  # class-level cache

    @classmethod
    def load_scenarios(cls) -> Dict[str, MoistureScenario]:
        if cls._scenarios is None:
            json_path = os.path.join(os.path.dirname(__file__), "moisture_scenarios.json")
            with open(json_path, "r") as f:
                data = json.load(f)

            cls._scenarios = {}
            for name, rec in data["scenarios"].items():
                dead, live = rec["dead"], rec["live"]
                cls._scenarios[name] = MoistureScenario(
                    name=name,
                    description=rec.get("description", ""),
                    dead1=dead[0] / 100.,
                    dead10=dead[1] / 100.,
                    dead100=dead[2] / 100.,
                    dead1000=dead[3] / 100.,
                    live_herb=live[0] / 100.,
                    live_wood=live[1] / 100.,
                )
        return cls._scenarios

    @classmethod
    def get(cls, name: str) -> MoistureScenario:
        """Looks up a moisture scenario by name.

        Raises:
            ConfigurationError: if no scenario has this name
        """
        scenarios = cls.load_scenarios()
        try:
            return scenarios[name]
        except KeyError:
            raise ConfigurationError(f"Unknown moisture scenario '{name}'",
                                     parameter="vSurfaceFuelMoisScenario") from None

    @classmethod
    def names(cls) -> List[str]:
        return list(cls.load_scenarios())


@dataclass
class ParticleArrays:
    """Per-particle attributes of the eight fuel bed slots."""
    life: np.ndarray
    load: np.ndarray
    savr: np.ndarray
    heat: np.ndarray
    dens: np.ndarray
    stot: np.ndarray
    seff: np.ndarray

    @classmethod
    def empty(cls, dens: float = 32., stot: float = 0.0555, seff: float = 0.01,
              savr: float = 1., heat: float = 0.) -> "ParticleArrays":
        return cls(
            life=np.full(MAX_PARTS, LifeCategory.DEAD, dtype=int),
            load=np.zeros(MAX_PARTS),
            savr=np.full(MAX_PARTS, savr),
            heat=np.full(MAX_PARTS, heat),
            dens=np.full(MAX_PARTS, dens),
            stot=np.full(MAX_PARTS, stot),
            seff=np.full(MAX_PARTS, seff),
        )


def standard_particles(load_dead1: float, load_dead10: float, load_dead100: float,
                       load_live_herb: float, load_live_wood: float, heat_dead: float,
                       heat_live: float, savr_dead1: float, savr_live_herb: float,
                       savr_live_wood: float) -> ParticleArrays:
    """Particle slots of a standard five-class fuel model.

    Slot 5 holds the dead herbaceous load produced by the load transfer and
    starts empty; slots 6 and 7 are unused.
    """
    p = ParticleArrays.empty()

    p.life[:6] = [LifeCategory.DEAD, LifeCategory.DEAD, LifeCategory.DEAD,
                  LifeCategory.HERB, LifeCategory.WOOD, LifeCategory.DEAD]
    p.load[:6] = [load_dead1, load_dead10, load_dead100, load_live_herb, load_live_wood, 0.]
    p.heat[:6] = [heat_dead, heat_dead, heat_dead, heat_live, heat_live, heat_dead]
    p.savr[:6] = [savr_dead1, 109., 30., savr_live_herb, savr_live_wood, savr_live_herb]
    return p


def model_particles(model: FuelModel) -> ParticleArrays:
    return standard_particles(model.load_dead1, model.load_dead10, model.load_dead100,
                              model.load_live_herb, model.load_live_wood, model.heat_dead,
                              model.heat_live, model.savr_dead1, model.savr_live_herb,
                              model.savr_live_wood)


def calc_cured_herb_fraction(herb_mois: float) -> float:
    """Fraction of the live herbaceous load transferred to dead.

    Fully cured at 30% moisture, fully green at 120%.
    """
    return min(1., max(0., 1.333 - 1.11 * herb_mois))


def calc_time_lag_moisture(life: np.ndarray, savr: np.ndarray, dead1: float, dead10: float,
                           dead100: float, dead1000: float, live_herb: float,
                           live_wood: float) -> np.ndarray:
    """Assigns each particle the moisture of its time-lag or live class.

    Dead particles are binned by surface area to volume ratio; litter takes
    the 100-h moisture.
    """
    mois = np.zeros(len(life))
    for i, (lc, s) in enumerate(zip(life, savr)):
        if lc == LifeCategory.HERB:
            mois[i] = live_herb
        elif lc == LifeCategory.WOOD:
            mois[i] = live_wood
        elif lc == LifeCategory.LITTER:
            mois[i] = dead100
        elif s > 192.:
            mois[i] = dead1
        elif s > 48.:
            mois[i] = dead10
        elif s > 16.:
            mois[i] = dead100
        else:
            mois[i] = dead1000
    return mois
