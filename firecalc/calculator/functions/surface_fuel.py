"""Surface fuel functions: fuel model lookup, particle arrays, dynamic
palmetto-gallberry and aspen fuels, fuel moistures and the fuel bed
intermediates and heat sink.
"""

from typing import List

import numpy as np

from firecalc.base_classes.function_node import FunctionNode
from firecalc.calculator.declarations import particle_group, particle_names
from firecalc.models.aspen import aspen_particles, calc_aspen_fuel
from firecalc.models.fuel_models import (FuelModelCatalog, MoistureScenarioCatalog,
                                         ParticleArrays, calc_cured_herb_fraction,
                                         calc_time_lag_moisture, standard_particles)
from firecalc.models.palmetto import (PALMETTO_MEXT_DEAD, PalmettoLoads, calc_palmetto_loads,
                                     palmetto_particles)
from firecalc.models.rothermel import FuelBed, calc_heat_sink
from firecalc.models.ignition import calc_fuel_temperature
from firecalc.utilities.fire_util import SMIDGEN

PARTICLE_WRITES = particle_group("Dens", "Heat", "Life", "Load", "Savr", "Seff", "Stot")

# Every cell needed to rebuild the fuel bed from the worksheet
BED_INPUTS = ("vSurfaceFuelBedDepth", "vSurfaceFuelBedMextDead") + PARTICLE_WRITES \
    + ("vSurfaceFuelLoadTransferFraction",)

MOISTURE_CLASSES = (
    "vSurfaceFuelMoisDead1", "vSurfaceFuelMoisDead10", "vSurfaceFuelMoisDead100",
    "vSurfaceFuelMoisDead1000", "vSurfaceFuelMoisLiveHerb", "vSurfaceFuelMoisLiveWood",
)

STANDARD_FUEL = (
    "vSurfaceFuelLoadDead1", "vSurfaceFuelLoadDead10", "vSurfaceFuelLoadDead100",
    "vSurfaceFuelLoadLiveHerb", "vSurfaceFuelLoadLiveWood", "vSurfaceFuelHeatDead",
    "vSurfaceFuelHeatLive", "vSurfaceFuelSavrDead1", "vSurfaceFuelSavrLiveHerb",
    "vSurfaceFuelSavrLiveWood",
)

PALMETTO_LOADS = (
    "vSurfaceFuelPalmettoLoadDead1", "vSurfaceFuelPalmettoLoadDead10",
    "vSurfaceFuelPalmettoLoadDeadFoliage", "vSurfaceFuelPalmettoLoadLitter",
    "vSurfaceFuelPalmettoLoadLive1", "vSurfaceFuelPalmettoLoadLive10",
    "vSurfaceFuelPalmettoLoadLiveFoliage",
)

ASPEN_FUEL = (
    "vSurfaceFuelAspenLoadDead1", "vSurfaceFuelAspenLoadDead10",
    "vSurfaceFuelAspenLoadLiveHerb", "vSurfaceFuelAspenLoadLiveWoody",
    "vSurfaceFuelAspenSavrDead1", "vSurfaceFuelAspenSavrDead10",
    "vSurfaceFuelAspenSavrLiveHerb", "vSurfaceFuelAspenSavrLiveWoody",
)


# ==============================================================================
# Particle array helpers
# ==============================================================================

def read_particles(calc) -> ParticleArrays:
    """Collects the eight particle slots from the worksheet cells."""
    def values(attr):
        return np.array([calc.get(name) for name in particle_names(attr)])

    return ParticleArrays(
        life=values("Life").astype(int),
        load=values("Load"),
        savr=values("Savr"),
        heat=values("Heat"),
        dens=values("Dens"),
        stot=values("Stot"),
        seff=values("Seff"),
    )


def write_particles(calc, particles: ParticleArrays):
    for attr, arr in (("Dens", particles.dens), ("Heat", particles.heat),
                      ("Load", particles.load), ("Savr", particles.savr),
                      ("Seff", particles.seff), ("Stot", particles.stot)):
        for name, val in zip(particle_names(attr), arr):
            calc.set(name, float(val))

    for name, life in zip(particle_names("Life"), particles.life):
        calc.set(name, int(life))


def build_fuel_bed(calc) -> FuelBed:
    p = read_particles(calc)
    return FuelBed(calc.get("vSurfaceFuelBedDepth"), calc.get("vSurfaceFuelBedMextDead"),
                   p.life, p.load, p.savr, p.heat, p.dens, p.stot, p.seff,
                   transfer_fraction=calc.get("vSurfaceFuelLoadTransferFraction"))


# ==============================================================================
# Procedures
# ==============================================================================

def fuel_bed_model(calc):
    model = FuelModelCatalog.get(calc.get("vSurfaceFuelBedModel").strip())

    calc.set("vSurfaceFuelLoadTransferEq", model.transfer)
    calc.set("vSurfaceFuelBedDepth", model.depth)
    calc.set("vSurfaceFuelBedMextDead", model.mext_dead)
    calc.set("vSurfaceFuelHeatDead", model.heat_dead)
    calc.set("vSurfaceFuelHeatLive", model.heat_live)
    calc.set("vSurfaceFuelLoadDead1", model.load_dead1)
    calc.set("vSurfaceFuelLoadDead10", model.load_dead10)
    calc.set("vSurfaceFuelLoadDead100", model.load_dead100)
    calc.set("vSurfaceFuelLoadLiveHerb", model.load_live_herb)
    calc.set("vSurfaceFuelLoadLiveWood", model.load_live_wood)
    calc.set("vSurfaceFuelSavrDead1", model.savr_dead1)
    calc.set("vSurfaceFuelSavrLiveHerb", model.savr_live_herb)
    calc.set("vSurfaceFuelSavrLiveWood", model.savr_live_wood)


def fuel_bed_parms(calc):
    particles = standard_particles(*(calc.get(name) for name in STANDARD_FUEL))
    write_particles(calc, particles)


def fuel_palmetto_model(calc):
    loads = calc_palmetto_loads(calc.get("vSurfaceFuelPalmettoAge"),
                                calc.get("vSurfaceFuelPalmettoCover"),
                                calc.get("vSurfaceFuelPalmettoHeight"),
                                calc.get("vSurfaceFuelPalmettoOverstoryBasalArea"))

    calc.set("vSurfaceFuelBedDepth", loads.depth)
    calc.set("vSurfaceFuelBedMextDead", PALMETTO_MEXT_DEAD)
    calc.set("vSurfaceFuelPalmettoLoadDead1", loads.dead1)
    calc.set("vSurfaceFuelPalmettoLoadDead10", loads.dead10)
    calc.set("vSurfaceFuelPalmettoLoadDeadFoliage", loads.dead_foliage)
    calc.set("vSurfaceFuelPalmettoLoadLitter", loads.litter)
    calc.set("vSurfaceFuelPalmettoLoadLive1", loads.live1)
    calc.set("vSurfaceFuelPalmettoLoadLive10", loads.live10)
    calc.set("vSurfaceFuelPalmettoLoadLiveFoliage", loads.live_foliage)


def fuel_palmetto_parms(calc):
    loads = PalmettoLoads(
        depth=0.,
        dead1=calc.get("vSurfaceFuelPalmettoLoadDead1"),
        dead10=calc.get("vSurfaceFuelPalmettoLoadDead10"),
        dead_foliage=calc.get("vSurfaceFuelPalmettoLoadDeadFoliage"),
        litter=calc.get("vSurfaceFuelPalmettoLoadLitter"),
        live1=calc.get("vSurfaceFuelPalmettoLoadLive1"),
        live10=calc.get("vSurfaceFuelPalmettoLoadLive10"),
        live_foliage=calc.get("vSurfaceFuelPalmettoLoadLiveFoliage"),
    )
    write_particles(calc, palmetto_particles(loads))


def fuel_aspen_model(calc):
    fuel = calc_aspen_fuel(calc.get("vSurfaceFuelAspenType"), calc.get("vSurfaceFuelAspenCuring"))

    calc.set("vSurfaceFuelBedDepth", fuel.depth)
    calc.set("vSurfaceFuelBedMextDead", fuel.mext_dead)
    calc.set("vSurfaceFuelAspenLoadDead1", fuel.load_dead1)
    calc.set("vSurfaceFuelAspenLoadDead10", fuel.load_dead10)
    calc.set("vSurfaceFuelAspenLoadLiveHerb", fuel.load_live_herb)
    calc.set("vSurfaceFuelAspenLoadLiveWoody", fuel.load_live_woody)
    calc.set("vSurfaceFuelAspenSavrDead1", fuel.savr_dead1)
    calc.set("vSurfaceFuelAspenSavrDead10", fuel.savr_dead10)
    calc.set("vSurfaceFuelAspenSavrLiveHerb", fuel.savr_live_herb)
    calc.set("vSurfaceFuelAspenSavrLiveWoody", fuel.savr_live_woody)


def fuel_aspen_parms(calc):
    write_particles(calc, aspen_particles(*(calc.get(name) for name in ASPEN_FUEL)))


def fuel_load_transfer_fraction(calc):
    # Static models never transfer herbaceous load
    if calc.get("vSurfaceFuelLoadTransferEq") == 0:
        fraction = 0.
    else:
        fraction = calc_cured_herb_fraction(calc.get("vSurfaceFuelMoisLiveHerb"))
    calc.set("vSurfaceFuelLoadTransferFraction", fraction)


def fuel_mois_life_class(calc):
    dead = calc.get("vSurfaceFuelMoisLifeDead")
    live = calc.get("vSurfaceFuelMoisLifeLive")
    for name in MOISTURE_CLASSES[:4]:
        calc.set(name, dead)
    for name in MOISTURE_CLASSES[4:]:
        calc.set(name, live)


def fuel_mois_scenario_model(calc):
    scenario = MoistureScenarioCatalog.get(calc.get("vSurfaceFuelMoisScenario").strip())
    for name, val in zip(MOISTURE_CLASSES, (scenario.dead1, scenario.dead10, scenario.dead100,
                                            scenario.dead1000, scenario.live_herb,
                                            scenario.live_wood)):
        calc.set(name, val)


def fuel_mois_time_lag(calc):
    p = read_particles(calc)
    mois = calc_time_lag_moisture(p.life, p.savr, *(calc.get(name) for name in MOISTURE_CLASSES))
    for name, val in zip(particle_names("Mois"), mois):
        calc.set(name, float(val))


def fuel_bed_intermediates(calc):
    bed = build_fuel_bed(calc)

    calc.set("vSurfaceFuelBedBetaRatio", bed.beta_ratio)
    calc.set("vSurfaceFuelBedBulkDensity", bed.bulk_density)
    calc.set("vSurfaceFuelBedDeadFraction", bed.dead_fraction)
    live_fraction = 0. if bed.dead_load + bed.live_load < SMIDGEN else 1. - bed.dead_fraction
    calc.set("vSurfaceFuelBedLiveFraction", live_fraction)
    calc.set("vSurfaceFuelBedPackingRatio", bed.packing_ratio)
    calc.set("vSurfaceFuelBedSigma", bed.sigma)
    calc.set("vSurfaceFuelLoadDeadHerb", bed.dead_herb)
    calc.set("vSurfaceFuelLoadUndeadHerb", bed.undead_herb)
    calc.set("vSurfaceFuelLoadDead", bed.dead_load)
    calc.set("vSurfaceFuelLoadLive", bed.live_load)


def fuel_bed_heat_sink(calc):
    bed = build_fuel_bed(calc)
    hs = calc_heat_sink(bed, [calc.get(name) for name in particle_names("Mois")])

    calc.set("vSurfaceFuelBedHeatSink", hs.heat_sink)
    calc.set("vSurfaceFuelBedMextLive", hs.live_mext)
    calc.set("vSurfaceFuelBedMoisDead", hs.dead_mois)
    calc.set("vSurfaceFuelBedMoisLive", hs.live_mois)


def fuel_temp(calc):
    calc.set("vSurfaceFuelTemp", calc_fuel_temperature(calc.get("vWthrAirTemp"),
                                                       calc.get("vSiteSunShading")))


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fSurfaceFuelBedModel", fuel_bed_model,
                     reads=("vSurfaceFuelBedModel",),
                     writes=("vSurfaceFuelLoadTransferEq", "vSurfaceFuelBedDepth",
                             "vSurfaceFuelBedMextDead") + STANDARD_FUEL),
        FunctionNode("fSurfaceFuelBedParms", fuel_bed_parms,
                     reads=STANDARD_FUEL, writes=PARTICLE_WRITES),
        FunctionNode("fSurfaceFuelPalmettoModel", fuel_palmetto_model,
                     reads=("vSurfaceFuelPalmettoAge", "vSurfaceFuelPalmettoCover",
                            "vSurfaceFuelPalmettoHeight", "vSurfaceFuelPalmettoOverstoryBasalArea"),
                     writes=("vSurfaceFuelBedDepth", "vSurfaceFuelBedMextDead") + PALMETTO_LOADS),
        FunctionNode("fSurfaceFuelPalmettoParms", fuel_palmetto_parms,
                     reads=PALMETTO_LOADS, writes=PARTICLE_WRITES),
        FunctionNode("fSurfaceFuelAspenModel", fuel_aspen_model,
                     reads=("vSurfaceFuelAspenCuring", "vSurfaceFuelAspenType"),
                     writes=("vSurfaceFuelBedDepth", "vSurfaceFuelBedMextDead") + ASPEN_FUEL),
        FunctionNode("fSurfaceFuelAspenParms", fuel_aspen_parms,
                     reads=ASPEN_FUEL, writes=PARTICLE_WRITES),
        FunctionNode("fSurfaceFuelLoadTransferFraction", fuel_load_transfer_fraction,
                     reads=("vSurfaceFuelLoadTransferEq", "vSurfaceFuelMoisLiveHerb"),
                     writes=("vSurfaceFuelLoadTransferFraction",)),
        FunctionNode("fSurfaceFuelMoisLifeClass", fuel_mois_life_class,
                     reads=("vSurfaceFuelMoisLifeDead", "vSurfaceFuelMoisLifeLive"),
                     writes=MOISTURE_CLASSES),
        FunctionNode("fSurfaceFuelMoisScenarioModel", fuel_mois_scenario_model,
                     reads=("vSurfaceFuelMoisScenario",), writes=MOISTURE_CLASSES),
        FunctionNode("fSurfaceFuelMoisTimeLag", fuel_mois_time_lag,
                     reads=MOISTURE_CLASSES + particle_group("Life", "Savr"),
                     writes=particle_names("Mois")),
        FunctionNode("fSurfaceFuelBedIntermediates", fuel_bed_intermediates,
                     reads=BED_INPUTS,
                     writes=("vSurfaceFuelBedBetaRatio", "vSurfaceFuelBedBulkDensity",
                             "vSurfaceFuelBedDeadFraction", "vSurfaceFuelBedLiveFraction",
                             "vSurfaceFuelBedPackingRatio", "vSurfaceFuelBedSigma",
                             "vSurfaceFuelLoadDeadHerb", "vSurfaceFuelLoadUndeadHerb",
                             "vSurfaceFuelLoadDead", "vSurfaceFuelLoadLive")),
        FunctionNode("fSurfaceFuelBedHeatSink", fuel_bed_heat_sink,
                     reads=BED_INPUTS + particle_names("Mois"),
                     writes=("vSurfaceFuelBedHeatSink", "vSurfaceFuelBedMextLive",
                             "vSurfaceFuelBedMoisDead", "vSurfaceFuelBedMoisLive")),
        FunctionNode("fSurfaceFuelTemp", fuel_temp,
                     reads=("vWthrAirTemp", "vSiteSunShading"), writes=("vSurfaceFuelTemp",)),
    ]
