"""Static declaration of every value cell in the worksheet graph.

Each table row gives a cell's name, native units, display decimals and
default value. Discrete cells list their enumerated items and text cells
their default text. :func:`build_cells` creates a fresh set of cells, so every
calculator owns its own storage.

Per-particle fuel attributes are the eight-slot arrays
``vSurfaceFuel<Attr><0..7>``; :func:`particle_names` expands them.
"""

from typing import List, Tuple

from firecalc.base_classes.value_cell import ContinuousCell, DiscreteCell, TextCell, ValueCell
from firecalc.models.aspen import ASPEN_SEVERITIES, AspenTable
from firecalc.models.ignition import LIGHTNING_CHARGES, LIGHTNING_FUEL_TYPES
from firecalc.models.spotting import SPOT_SOURCES, TORCHING_SPECIES
from firecalc.models.tree_mortality import SpeciesTable
from firecalc.utilities.fire_util import (COMPASS_POINTS, MAX_PARTS, ContainDerivedStatus,
                                          CrownFireType)

NO_YES = ("No", "Yes")

LIFE_CATEGORIES = ("Dead", "Herb", "Wood", "Litter")

PARTICLE_ATTRS = ("Dens", "Heat", "Life", "Load", "Mois", "Savr", "Seff", "Stot")


def particle_names(attr: str) -> Tuple[str, ...]:
    """Names of the eight particle cells of one attribute, e.g. ``Load``."""
    return tuple(f"vSurfaceFuel{attr}{i}" for i in range(MAX_PARTS))


def particle_group(*attrs: str) -> Tuple[str, ...]:
    names = []
    for attr in attrs:
        names.extend(particle_names(attr))
    return tuple(names)


# (name, units, decimals, default)
CONTINUOUS = (
    # Containment
    ("vContainAttackBack", "ch", 1, 0.),
    ("vContainAttackDist", "ch", 1, 0.),
    ("vContainAttackHead", "ch", 1, 0.),
    ("vContainAttackPerimeter", "ch", 1, 0.),
    ("vContainAttackSize", "ac", 2, 0.),
    ("vContainCost", "", 0, 0.),
    ("vContainDiagram", "diagram", 0, 0.),
    ("vContainLimitDist", "ch", 0, 1000000.),
    ("vContainLine", "ch", 1, 0.),
    ("vContainPoints", "count", 0, 0.),
    ("vContainReportBack", "ch", 1, 0.),
    ("vContainReportHead", "ch", 1, 0.),
    ("vContainReportRatio", "ratio", 2, 1.),
    ("vContainReportSize", "ac", 2, 0.),
    ("vContainReportSpread", "ch/h", 1, 0.),
    ("vContainResourcesUsed", "count", 0, 0.),
    ("vContainSize", "ac", 2, 0.),
    ("vContainTime", "min", 0, 0.),
    ("vContainXMax", "ch", 1, 0.),
    ("vContainXMin", "ch", 1, 0.),
    ("vContainYMax", "ch", 1, 0.),

    # Crown fire
    ("vCrownFireActiveRatio", "ratio", 2, 0.),
    ("vCrownFireArea", "ac", 1, 0.),
    ("vCrownFireCritCrownSpreadRate", "ft/min", 1, 0.),
    ("vCrownFireCritSurfFireInt", "Btu/ft/s", 0, 0.),
    ("vCrownFireCritSurfFlameLeng", "ft", 1, 0.),
    ("vCrownFireFlameLeng", "ft", 1, 0.),
    ("vCrownFireFuelLoad", "lb/ft2", 3, 0.),
    ("vCrownFireHeatPerUnitArea", "Btu/ft2", 0, 0.),
    ("vCrownFireHeatPerUnitAreaCanopy", "Btu/ft2", 0, 0.),
    ("vCrownFireLengthToWidth", "ratio", 2, 1.),
    ("vCrownFireLineInt", "Btu/ft/s", 0, 0.),
    ("vCrownFirePerimeter", "ft", 0, 0.),
    ("vCrownFirePowerOfFire", "ft-lb/s/ft2", 1, 0.),
    ("vCrownFirePowerOfWind", "ft-lb/s/ft2", 1, 0.),
    ("vCrownFirePowerRatio", "ratio", 2, 0.),
    ("vCrownFireSpreadDist", "ft", 0, 0.),
    ("vCrownFireSpreadMapDist", "in", 2, 0.),
    ("vCrownFireSpreadRate", "ft/min", 1, 0.),
    ("vCrownFireTransRatio", "ratio", 2, 0.),

    # Ignition
    ("vIgnitionFirebrandFuelMois", "fraction", 2, 0.06),
    ("vIgnitionFirebrandProb", "fraction", 2, 0.),
    ("vIgnitionLightningDuffDepth", "in", 1, 1.),
    ("vIgnitionLightningFuelMois", "fraction", 2, 0.10),
    ("vIgnitionLightningProb", "fraction", 2, 0.),

    # Map
    ("vMapContourCount", "count", 0, 0.),
    ("vMapContourInterval", "ft", 0, 40.),
    ("vMapDist", "in", 2, 0.),
    ("vMapFraction", "", 0, 24000.),
    ("vMapScale", "in/mi", 2, 2.64),

    # Safety zone
    ("vSafetyZoneEquipmentArea", "ft2", 0, 300.),
    ("vSafetyZoneEquipmentNumber", "count", 0, 0.),
    ("vSafetyZonePersonnelArea", "ft2", 0, 50.),
    ("vSafetyZonePersonnelNumber", "count", 0, 1.),
    ("vSafetyZoneRadius", "ft", 0, 0.),
    ("vSafetyZoneSepDist", "ft", 0, 0.),
    ("vSafetyZoneSize", "ac", 2, 0.),

    # Site
    ("vSiteAspectDirFromNorth", "deg", 0, 180.),
    ("vSiteElevation", "ft", 0, 0.),
    ("vSiteRidgeToValleyDist", "mi", 2, 0.),
    ("vSiteRidgeToValleyElev", "ft", 0, 0.),
    ("vSiteRidgeToValleyMapDist", "in", 2, 0.),
    ("vSiteSlopeDegrees", "deg", 1, 0.),
    ("vSiteSlopeFraction", "fraction", 2, 0.),
    ("vSiteSlopeReach", "ft", 0, 0.),
    ("vSiteSlopeRise", "ft", 0, 0.),
    ("vSiteSunShading", "fraction", 2, 0.),
    ("vSiteUpslopeDirFromNorth", "deg", 0, 0.),

    # Spotting
    ("vSpotCoverHtBurningPile", "ft", 0, 0.),
    ("vSpotCoverHtSurfaceFire", "ft", 0, 0.),
    ("vSpotCoverHtTorchingTrees", "ft", 0, 0.),
    ("vSpotDistBurningPile", "mi", 2, 0.),
    ("vSpotDistSurfaceFire", "mi", 2, 0.),
    ("vSpotDistTorchingTrees", "mi", 2, 0.),
    ("vSpotFirebrandDriftSurfaceFire", "mi", 2, 0.),
    ("vSpotFirebrandHtBurningPile", "ft", 0, 0.),
    ("vSpotFirebrandHtSurfaceFire", "ft", 0, 0.),
    ("vSpotFirebrandHtTorchingTrees", "ft", 0, 0.),
    ("vSpotFlameDurTorchingTrees", "ratio", 2, 0.),
    ("vSpotFlameHtTorchingTrees", "ft", 1, 0.),
    ("vSpotFlameRatioTorchingTrees", "ratio", 2, 0.),
    ("vSpotFlatDistBurningPile", "mi", 2, 0.),
    ("vSpotFlatDistSurfaceFire", "mi", 2, 0.),
    ("vSpotFlatDistTorchingTrees", "mi", 2, 0.),
    ("vSpotMapDistBurningPile", "in", 2, 0.),
    ("vSpotMapDistSurfaceFire", "in", 2, 0.),
    ("vSpotMapDistTorchingTrees", "in", 2, 0.),
    ("vSpotTorchingTrees", "count", 0, 1.),

    # Surface fire
    ("vSurfaceFireArea", "ac", 2, 0.),
    ("vSurfaceFireCharacteristicsDiagram", "diagram", 0, 0.),
    ("vSurfaceFireDistAtBack", "ft", 0, 0.),
    ("vSurfaceFireDistAtHead", "ft", 0, 0.),
    ("vSurfaceFireDistAtVector", "ft", 0, 0.),
    ("vSurfaceFireEccentricity", "fraction", 2, 0.),
    ("vSurfaceFireEffWindAtHead", "mi/h", 1, 0.),
    ("vSurfaceFireEffWindAtVector", "mi/h", 1, 0.),
    ("vSurfaceFireElapsedTime", "min", 0, 60.),
    ("vSurfaceFireFlameAngleAtVector", "deg", 0, 90.),
    ("vSurfaceFireFlameHtAtVector", "ft", 1, 0.),
    ("vSurfaceFireFlameHtPile", "ft", 1, 0.),
    ("vSurfaceFireFlameLengAtHead", "ft", 1, 0.),
    ("vSurfaceFireFlameLengAtVector", "ft", 1, 0.),
    ("vSurfaceFireHeatPerUnitArea", "Btu/ft2", 0, 0.),
    ("vSurfaceFireHeatSource", "Btu/ft2/min", 0, 0.),
    ("vSurfaceFireLengDist", "ft", 0, 0.),
    ("vSurfaceFireLengMapDist", "in", 2, 0.),
    ("vSurfaceFireLengthToWidth", "ratio", 2, 1.),
    ("vSurfaceFireLineIntAtHead", "Btu/ft/s", 0, 0.),
    ("vSurfaceFireLineIntAtVector", "Btu/ft/s", 0, 0.),
    ("vSurfaceFireMapDistAtBack", "in", 2, 0.),
    ("vSurfaceFireMapDistAtHead", "in", 2, 0.),
    ("vSurfaceFireMapDistAtVector", "in", 2, 0.),
    ("vSurfaceFireMaxDirDiagram", "diagram", 0, 0.),
    ("vSurfaceFireMaxDirFromNorth", "deg", 0, 0.),
    ("vSurfaceFireMaxDirFromUpslope", "deg", 0, 0.),
    ("vSurfaceFireNoWindRate", "ft/min", 2, 0.),
    ("vSurfaceFirePerimeter", "ft", 0, 0.),
    ("vSurfaceFirePropagatingFlux", "fraction", 4, 0.),
    ("vSurfaceFireReactionInt", "Btu/ft2/min", 0, 0.),
    ("vSurfaceFireReactionIntDead", "Btu/ft2/min", 0, 0.),
    ("vSurfaceFireReactionIntLive", "Btu/ft2/min", 0, 0.),
    ("vSurfaceFireResidenceTime", "min", 3, 0.),
    ("vSurfaceFireScorchHtAtVector", "ft", 0, 0.),
    ("vSurfaceFireShapeDiagram", "diagram", 0, 0.),
    ("vSurfaceFireSlopeFactor", "ratio", 3, 0.),
    ("vSurfaceFireSpreadAtBack", "ft/min", 1, 0.),
    ("vSurfaceFireSpreadAtHead", "ft/min", 1, 0.),
    ("vSurfaceFireSpreadAtVector", "ft/min", 1, 0.),
    ("vSurfaceFireVectorBeta", "deg", 0, 0.),
    ("vSurfaceFireVectorDirFromNorth", "deg", 0, 0.),
    ("vSurfaceFireVectorDirFromUpslope", "deg", 0, 0.),
    ("vSurfaceFireWidthDist", "ft", 0, 0.),
    ("vSurfaceFireWidthMapDist", "in", 2, 0.),
    ("vSurfaceFireWindFactor", "ratio", 3, 0.),
    ("vSurfaceFireWindSpeedLimit", "mi/h", 1, 0.),

    # Surface fuel, aspen
    ("vSurfaceFuelAspenCuring", "fraction", 2, 0.5),
    ("vSurfaceFuelAspenLoadDead1", "lb/ft2", 4, 0.),
    ("vSurfaceFuelAspenLoadDead10", "lb/ft2", 4, 0.),
    ("vSurfaceFuelAspenLoadLiveHerb", "lb/ft2", 4, 0.),
    ("vSurfaceFuelAspenLoadLiveWoody", "lb/ft2", 4, 0.),
    ("vSurfaceFuelAspenSavrDead1", "ft2/ft3", 0, 0.),
    ("vSurfaceFuelAspenSavrDead10", "ft2/ft3", 0, 0.),
    ("vSurfaceFuelAspenSavrLiveHerb", "ft2/ft3", 0, 0.),
    ("vSurfaceFuelAspenSavrLiveWoody", "ft2/ft3", 0, 0.),

    # Surface fuel bed
    ("vSurfaceFuelBedBetaRatio", "ratio", 2, 0.),
    ("vSurfaceFuelBedBulkDensity", "lb/ft3", 4, 0.),
    ("vSurfaceFuelBedCoverage1", "fraction", 2, 0.5),
    ("vSurfaceFuelBedDeadFraction", "fraction", 2, 0.),
    ("vSurfaceFuelBedDepth", "ft", 2, 1.),
    ("vSurfaceFuelBedHeatSink", "Btu/ft3", 2, 0.),
    ("vSurfaceFuelBedLiveFraction", "fraction", 2, 0.),
    ("vSurfaceFuelBedMextDead", "fraction", 2, 0.25),
    ("vSurfaceFuelBedMextLive", "fraction", 2, 0.),
    ("vSurfaceFuelBedMoisDead", "fraction", 2, 0.),
    ("vSurfaceFuelBedMoisLive", "fraction", 2, 0.),
    ("vSurfaceFuelBedPackingRatio", "fraction", 5, 0.),
    ("vSurfaceFuelBedSigma", "ft2/ft3", 0, 0.),
    ("vSurfaceFuelHeatDead", "Btu/lb", 0, 8000.),
    ("vSurfaceFuelHeatLive", "Btu/lb", 0, 8000.),
    ("vSurfaceFuelLoadDead", "lb/ft2", 4, 0.),
    ("vSurfaceFuelLoadDead1", "lb/ft2", 4, 0.),
    ("vSurfaceFuelLoadDead10", "lb/ft2", 4, 0.),
    ("vSurfaceFuelLoadDead100", "lb/ft2", 4, 0.),
    ("vSurfaceFuelLoadDeadHerb", "lb/ft2", 4, 0.),
    ("vSurfaceFuelLoadLive", "lb/ft2", 4, 0.),
    ("vSurfaceFuelLoadLiveHerb", "lb/ft2", 4, 0.),
    ("vSurfaceFuelLoadLiveWood", "lb/ft2", 4, 0.),
    ("vSurfaceFuelLoadTransferFraction", "fraction", 2, 0.),
    ("vSurfaceFuelLoadUndeadHerb", "lb/ft2", 4, 0.),

    # Surface fuel moisture
    ("vSurfaceFuelMoisDead1", "fraction", 2, 0.06),
    ("vSurfaceFuelMoisDead10", "fraction", 2, 0.07),
    ("vSurfaceFuelMoisDead100", "fraction", 2, 0.08),
    ("vSurfaceFuelMoisDead1000", "fraction", 2, 0.20),
    ("vSurfaceFuelMoisLifeDead", "fraction", 2, 0.06),
    ("vSurfaceFuelMoisLifeLive", "fraction", 2, 1.0),
    ("vSurfaceFuelMoisLiveHerb", "fraction", 2, 1.0),
    ("vSurfaceFuelMoisLiveWood", "fraction", 2, 1.0),

    # Surface fuel, palmetto-gallberry
    ("vSurfaceFuelPalmettoAge", "yr", 1, 5.),
    ("vSurfaceFuelPalmettoCover", "%", 0, 50.),
    ("vSurfaceFuelPalmettoHeight", "ft", 1, 3.),
    ("vSurfaceFuelPalmettoLoadDead1", "lb/ft2", 4, 0.),
    ("vSurfaceFuelPalmettoLoadDead10", "lb/ft2", 4, 0.),
    ("vSurfaceFuelPalmettoLoadDeadFoliage", "lb/ft2", 4, 0.),
    ("vSurfaceFuelPalmettoLoadLitter", "lb/ft2", 4, 0.),
    ("vSurfaceFuelPalmettoLoadLive1", "lb/ft2", 4, 0.),
    ("vSurfaceFuelPalmettoLoadLive10", "lb/ft2", 4, 0.),
    ("vSurfaceFuelPalmettoLoadLiveFoliage", "lb/ft2", 4, 0.),
    ("vSurfaceFuelPalmettoOverstoryBasalArea", "ft2/ac", 0, 0.),

    ("vSurfaceFuelSavrDead1", "ft2/ft3", 0, 2000.),
    ("vSurfaceFuelSavrLiveHerb", "ft2/ft3", 0, 1500.),
    ("vSurfaceFuelSavrLiveWood", "ft2/ft3", 0, 1500.),
    ("vSurfaceFuelTemp", "oF", 0, 0.),

    # Time
    ("vTimeIntegerDate", "days", 3, 20000101.),
    ("vTimeJulianDate", "days", 3, 0.),

    # Trees and canopy
    ("vTreeBarkThickness", "in", 2, 0.),
    ("vTreeCanopyBulkDens", "lb/ft3", 4, 0.0062),
    ("vTreeCanopyCover", "fraction", 2, 0.),
    ("vTreeCanopyCrownFraction", "fraction", 2, 0.),
    ("vTreeCount", "count", 0, 1.),
    ("vTreeCoverHt", "ft", 0, 0.),
    ("vTreeCoverHtDownwind", "ft", 0, 0.),
    ("vTreeCrownBaseHt", "ft", 0, 10.),
    ("vTreeCrownLengFractionScorchedAtVector", "fraction", 2, 0.),
    ("vTreeCrownLengScorchedAtVector", "ft", 0, 0.),
    ("vTreeCrownRatio", "fraction", 2, 0.5),
    ("vTreeCrownVolScorchedAtVector", "fraction", 2, 0.),
    ("vTreeDbh", "in", 1, 10.),
    ("vTreeFoliarMois", "fraction", 2, 1.0),
    ("vTreeHt", "ft", 0, 60.),
    ("vTreeMortalityCountAtVector", "count", 1, 0.),
    ("vTreeMortalityRateAspenAtVector", "fraction", 2, 0.),
    ("vTreeMortalityRateAtVector", "fraction", 2, 0.),

    # Wind
    ("vWindAdjFactor", "fraction", 2, 1.),
    ("vWindDirFromNorth", "deg", 0, 0.),
    ("vWindDirFromUpslope", "deg", 0, 0.),
    ("vWindSpeedAt10M", "mi/h", 1, 0.),
    ("vWindSpeedAt20Ft", "mi/h", 1, 0.),
    ("vWindSpeedAtMidflame", "mi/h", 1, 0.),

    # Weather
    ("vWthrAirTemp", "oF", 0, 77.),
    ("vWthrCumulusBaseHt", "ft", 0, 0.),
    ("vWthrDewPointTemp", "oF", 0, 40.),
    ("vWthrHeatIndex", "", 0, 0.),
    ("vWthrRelativeHumidity", "%", 0, 0.),
    ("vWthrSummerSimmerIndex", "", 0, 0.),
    ("vWthrWetBulbTemp", "oF", 0, 60.),
    ("vWthrWindChillTemp", "oF", 0, 0.),
)

# (name, units, decimals, default) per particle attribute
PARTICLE_CONTINUOUS = (
    ("Dens", "lb/ft3", 1, 32.),
    ("Heat", "Btu/lb", 0, 8000.),
    ("Load", "lb/ft2", 4, 0.),
    ("Mois", "fraction", 2, 0.),
    ("Savr", "ft2/ft3", 0, 1.),
    ("Seff", "fraction", 3, 0.01),
    ("Stot", "fraction", 4, 0.0555),
)


def _discrete_items():
    """(name, items, default index) for every discrete cell."""
    species = SpeciesTable.codes()
    return (
        ("vContainAttackTactic", ("Head", "Rear"), 0),
        ("vContainStatus", tuple(ContainDerivedStatus.names[i] for i in range(3)), 0),
        ("vCrownFireActiveCrown", NO_YES, 0),
        ("vCrownFireTransToCrown", NO_YES, 0),
        ("vCrownFireType", tuple(CrownFireType.names[i] for i in range(4)), 0),
        ("vCrownFireWindDriven", ("Plume dominated", "Wind driven"), 0),
        ("vIgnitionLightningFuelType", LIGHTNING_FUEL_TYPES, 0),
        ("vSiteAspectDirFromCompass", COMPASS_POINTS, 8),
        ("vSpotFireSource", SPOT_SOURCES, 0),
        ("vSurfaceFireSeverityAspen", ASPEN_SEVERITIES, 0),
        ("vSurfaceFireVectorDirFromCompass", COMPASS_POINTS, 0),
        ("vSurfaceFireWindSpeedFlag", NO_YES, 0),
        ("vSurfaceFuelAspenType", AspenTable.type_names(), 0),
        ("vSurfaceFuelLoadTransferEq", ("Static", "Dynamic"), 0),
        ("vTreeSpecies", species, 0),
        ("vTreeSpeciesMortality", species, 0),
        ("vTreeSpeciesSpot", TORCHING_SPECIES, 0),
        ("vWindAdjMethod", ("Sheltered", "Unsheltered", "Input"), 2),
        ("vWindDirFromCompass", COMPASS_POINTS, 0),
        ("vWthrLightningStrikeType", LIGHTNING_CHARGES, 2),
    )


# (name, default text). Resource lists hold one token per resource.
TEXT = (
    ("vContainResourceArrival", ""),
    ("vContainResourceBaseCost", ""),
    ("vContainResourceDuration", ""),
    ("vContainResourceHourCost", ""),
    ("vContainResourceName", ""),
    ("vContainResourceProd", ""),
    ("vDocDescription", ""),
    ("vDocFireAnalyst", ""),
    ("vDocFireName", ""),
    ("vDocFirePeriod", ""),
    ("vDocRxAdminUnit", ""),
    ("vDocRxName", ""),
    ("vDocRxPreparedBy", ""),
    ("vDocTrainingCourse", ""),
    ("vDocTrainingExercise", ""),
    ("vDocTrainingTrainee", ""),
    ("vSurfaceFuelBedModel", "FM1"),
    ("vSurfaceFuelBedModel1", "FM1"),
    ("vSurfaceFuelBedModel2", "FM10"),
    ("vSurfaceFuelMoisScenario", "D1L1"),
)

# Resource list units; text cells carry them for the trace
_TEXT_UNITS = {
    "vContainResourceArrival": "min",
    "vContainResourceDuration": "min",
    "vContainResourceProd": "ch/h",
}


def build_cells() -> List[ValueCell]:
    """Creates every value cell with its default value."""
    cells: List[ValueCell] = [ContinuousCell(name, units, decimals, default)
                              for name, units, decimals, default in CONTINUOUS]

    for attr, units, decimals, default in PARTICLE_CONTINUOUS:
        for name in particle_names(attr):
            cells.append(ContinuousCell(name, units, decimals, default))

    for name in particle_names("Life"):
        cells.append(DiscreteCell(name, LIFE_CATEGORIES, 0))

    for name, items, default in _discrete_items():
        cells.append(DiscreteCell(name, items, default))

    for name, default in TEXT:
        cells.append(TextCell(name, default, units=_TEXT_UNITS.get(name, "")))

    return cells
