"""Probability of ignition from firebrands and from lightning."""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.models import ignition


def ignition_firebrand_fuel_mois(calc):
    calc.set("vIgnitionFirebrandFuelMois", calc.get("vSurfaceFuelMoisDead1"))


def ignition_lightning_fuel_mois(calc):
    calc.set("vIgnitionLightningFuelMois", calc.get("vSurfaceFuelMoisDead100"))


def ignition_firebrand_prob(calc):
    calc.set("vIgnitionFirebrandProb",
             ignition.calc_firebrand_prob(calc.get("vSurfaceFuelTemp"),
                                          calc.get("vIgnitionFirebrandFuelMois")))


def ignition_lightning_prob(calc):
    calc.set("vIgnitionLightningProb",
             ignition.calc_lightning_prob(calc.get("vIgnitionLightningFuelType"),
                                          calc.get("vIgnitionLightningDuffDepth"),
                                          calc.get("vIgnitionLightningFuelMois"),
                                          calc.get("vWthrLightningStrikeType")))


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fIgnitionFirebrandFuelMoisFromDead1Hr", ignition_firebrand_fuel_mois,
                     reads=("vSurfaceFuelMoisDead1",), writes=("vIgnitionFirebrandFuelMois",)),
        FunctionNode("fIgnitionLightningFuelMoisFromDead100Hr", ignition_lightning_fuel_mois,
                     reads=("vSurfaceFuelMoisDead100",), writes=("vIgnitionLightningFuelMois",)),
        FunctionNode("fIgnitionFirebrandProb", ignition_firebrand_prob,
                     reads=("vSurfaceFuelTemp", "vIgnitionFirebrandFuelMois"),
                     writes=("vIgnitionFirebrandProb",)),
        FunctionNode("fIgnitionLightningProb", ignition_lightning_prob,
                     reads=("vIgnitionLightningFuelType", "vIgnitionLightningDuffDepth",
                            "vIgnitionLightningFuelMois", "vWthrLightningStrikeType"),
                     writes=("vIgnitionLightningProb",)),
    ]
