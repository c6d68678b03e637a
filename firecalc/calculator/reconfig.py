"""Module reconfiguration rules.

Each module procedure reads the configuration properties and sets the
activation flag of its functions and the input, output and constant flags of
its cells on a :class:`ConfigurationState`. :func:`reconfigure` always starts
from the graph's default state and runs the procedures in a fixed order, so
the result depends only on the properties and never on a prior configuration.
Later procedures may override flags set by earlier ones.

A procedure whose ``<module>ModuleActive`` property is false returns without
touching anything.
"""

from typing import Callable, List

from firecalc.base_classes.graph import ComputationGraph, ConfigurationState
from firecalc.utilities.config import PropertyDict
from firecalc.utilities.fire_util import WindAdjMethod

TWO_FUEL_OPTIONS = ("surfaceConfFuelAreaWeighted", "surfaceConfFuelHarmonicMean",
                    "surfaceConfFuel2Dimensional")

# Run internally by the two fuel model compositor, once per fuel model
COMPOSITED_FUNCTIONS = (
    "fSurfaceFuelBedModel", "fSurfaceFuelBedParms", "fSurfaceFuelLoadTransferFraction",
    "fSurfaceFuelBedIntermediates", "fSurfaceFireResidenceTime", "fSurfaceFuelMoisLifeClass",
    "fSurfaceFuelMoisScenarioModel", "fSurfaceFuelMoisTimeLag", "fSurfaceFuelBedHeatSink",
    "fSurfaceFirePropagatingFlux", "fSurfaceFireReactionInt", "fSurfaceFireNoWindRate",
    "fWindAdjFactor", "fWindSpeedAt20Ft", "fWindSpeedAtMidflame", "fSurfaceFireSpreadAtHead",
    "fSurfaceFireLineIntAtHead", "fSurfaceFireFlameLengAtHead", "fSurfaceFireLengthToWidth",
    "fSurfaceFireEccentricity", "fSurfaceFireVectorBeta", "fSurfaceFireSpreadAtBeta",
    "fSurfaceFireLineIntAtVector", "fSurfaceFireFlameLengAtVector",
    "fSurfaceFireEffWindAtVector", "fSurfaceFireHeatPerUnitArea",
)

SURFACE_FUNCTIONS = (
    "fSurfaceFireCharacteristicsDiagram", "fSurfaceFireDistAtHead", "fSurfaceFireDistAtVector",
    "fSurfaceFireEccentricity", "fSurfaceFireEffWindAtVector", "fSurfaceFireFlameLengAtHead",
    "fSurfaceFireFlameLengAtVector", "fSurfaceFireMaxDirFromNorth", "fSurfaceFireHeatSource",
    "fSurfaceFireMaxDirDiagram", "fSurfaceFireMapDistAtHead", "fSurfaceFireMapDistAtVector",
    "fSurfaceFireSpreadAtBack", "fSurfaceFireSpreadAtHead", "fSurfaceFireVectorBeta",
    "fSurfaceFireSpreadAtBeta", "fSurfaceFireHeatPerUnitArea", "fSurfaceFireLengthToWidth",
    "fSurfaceFireLineIntAtHead", "fSurfaceFireLineIntAtVector", "fSurfaceFireNoWindRate",
    "fSurfaceFirePropagatingFlux", "fSurfaceFireReactionInt", "fSurfaceFireResidenceTime",
    "fSurfaceFuelBedIntermediates", "fSurfaceFuelBedHeatSink", "fSurfaceFuelMoisTimeLag",
    "fSurfaceFireFlameHtAtVector",
)

# (cell, property) pairs never shown when two fuel models are blended
SINGLE_FUEL_OUTPUTS = (
    ("vSurfaceFireHeatSource", "surfaceCalcFireHeatSource"),
    ("vSurfaceFireReactionIntDead", "surfaceCalcFireReactionIntDead"),
    ("vSurfaceFireReactionIntLive", "surfaceCalcFireReactionIntLive"),
    ("vSurfaceFireMaxDirDiagram", "surfaceCalcFireMaxDirDiagram"),
    ("vSurfaceFireCharacteristicsDiagram", "surfaceCalcFireCharacteristicsDiagram"),
    ("vSurfaceFuelLoadTransferFraction", "surfaceCalcFuelLoadTransferFraction"),
    ("vSurfaceFuelLoadDead", "surfaceCalcFuelLoadDead"),
    ("vSurfaceFuelLoadDeadHerb", "surfaceCalcFuelLoadDeadHerb"),
    ("vSurfaceFuelLoadLive", "surfaceCalcFuelLoadLive"),
    ("vSurfaceFuelLoadUndeadHerb", "surfaceCalcFuelLoadUndeadHerb"),
    ("vSurfaceFuelBedSigma", "surfaceCalcFuelBedSigma"),
    ("vSurfaceFuelBedPackingRatio", "surfaceCalcFuelBedPackingRatio"),
    ("vSurfaceFuelBedBulkDensity", "surfaceCalcFuelBedBulkDensity"),
    ("vSurfaceFuelBedBetaRatio", "surfaceCalcFuelBedBetaRatio"),
    ("vSurfaceFuelBedDeadFraction", "surfaceCalcFuelBedDeadFraction"),
    ("vSurfaceFuelBedLiveFraction", "surfaceCalcFuelBedLiveFraction"),
    ("vSurfaceFuelBedHeatSink", "surfaceCalcFuelBedHeatSink"),
    ("vSurfaceFuelBedMoisDead", "surfaceCalcFuelBedMoisDead"),
    ("vSurfaceFuelBedMoisLive", "surfaceCalcFuelBedMoisLive"),
    ("vSurfaceFuelBedMextLive", "surfaceCalcFuelBedMextLive"),
    ("vSurfaceFireResidenceTime", "surfaceCalcFireResidenceTime"),
    ("vSurfaceFireWindFactor", "surfaceCalcFireWindFactor"),
    ("vSurfaceFireSlopeFactor", "surfaceCalcFireSlopeFactor"),
)

CROWN_FUNCTIONS = (
    "fCrownFireActiveCrown", "fCrownFireActiveRatio", "fCrownFireArea",
    "fCrownFireCritCrownSpreadRate", "fCrownFireCritSurfFireInt", "fCrownFireCritSurfFlameLeng",
    "fCrownFireLengthToWidth", "fCrownFirePerimeter", "fCrownFireSpreadDist",
    "fCrownFireSpreadMapDist", "fCrownFireSpreadRate", "fCrownFireTransToCrown",
    "fCrownFireType", "fCrownFireFlameLeng", "fCrownFireFuelLoad", "fCrownFireHeatPerUnitArea",
    "fCrownFireHeatPerUnitAreaCanopy", "fCrownFireLineInt", "fCrownFirePowerOfFire",
    "fCrownFirePowerOfWind", "fCrownFirePowerRatio", "fCrownFireWindDriven",
)

CROWN_OUTPUTS = (
    ("vCrownFireActiveCrown", "crownCalcActiveCrown"),
    ("vCrownFireActiveRatio", "crownCalcActiveRatio"),
    ("vCrownFireArea", "crownCalcFireArea"),
    ("vCrownFireCritCrownSpreadRate", "crownCalcCriticalCrownSpreadRate"),
    ("vCrownFireCritSurfFireInt", "crownCalcCriticalSurfaceIntensity"),
    ("vCrownFireCritSurfFlameLeng", "crownCalcCriticalSurfaceFlameLeng"),
    ("vCrownFireFlameLeng", "crownCalcFlameLeng"),
    ("vCrownFireFuelLoad", "crownCalcFuelLoad"),
    ("vCrownFireHeatPerUnitArea", "crownCalcHeatPerUnitArea"),
    ("vCrownFireHeatPerUnitAreaCanopy", "crownCalcHeatPerUnitAreaCanopy"),
    ("vCrownFireLengthToWidth", "crownCalcFireLengthToWidth"),
    ("vCrownFireLineInt", "crownCalcFireLineInt"),
    ("vCrownFirePerimeter", "crownCalcFirePerimeter"),
    ("vCrownFirePowerOfFire", "crownCalcPowerOfFire"),
    ("vCrownFirePowerOfWind", "crownCalcPowerOfWind"),
    ("vCrownFirePowerRatio", "crownCalcPowerRatio"),
    ("vCrownFireSpreadDist", "crownCalcCrownSpreadDist"),
    ("vCrownFireSpreadRate", "crownCalcCrownSpreadRate"),
    ("vCrownFireTransRatio", "crownCalcTransitionRatio"),
    ("vCrownFireTransToCrown", "crownCalcTransitionToCrown"),
    ("vCrownFireType", "crownCalcCrownFireType"),
    ("vCrownFireWindDriven", "crownCalcWindDriven"),
)

SIZE_FUNCTIONS = (
    "fSurfaceFireArea", "fSurfaceFireDistAtBack", "fSurfaceFireDistAtHead",
    "fSurfaceFireLengDist", "fSurfaceFireLengMapDist", "fSurfaceFireMapDistAtBack",
    "fSurfaceFireMapDistAtHead", "fSurfaceFirePerimeter", "fSurfaceFireShapeDiagram",
    "fSurfaceFireSpreadAtBack", "fSurfaceFireWidthDist", "fSurfaceFireWidthMapDist",
)

SIZE_OUTPUTS = (
    ("vSurfaceFireArea", "sizeCalcFireArea"),
    ("vSurfaceFireDistAtBack", "sizeCalcFireDistAtBack"),
    ("vSurfaceFireDistAtHead", "sizeCalcFireDistAtFront"),
    ("vSurfaceFireLengthToWidth", "sizeCalcFireLengToWidth"),
    ("vSurfaceFireLengDist", "sizeCalcFireLengDist"),
    ("vSurfaceFirePerimeter", "sizeCalcFirePerimeter"),
    ("vSurfaceFireWidthDist", "sizeCalcFireWidthDist"),
    ("vSurfaceFireShapeDiagram", "sizeCalcFireShapeDiagram"),
)

SIZE_MAP_OUTPUTS = (
    ("vSurfaceFireMapDistAtBack", "sizeCalcFireDistAtBack"),
    ("vSurfaceFireMapDistAtHead", "sizeCalcFireDistAtFront"),
    ("vSurfaceFireLengMapDist", "sizeCalcFireLengDist"),
    ("vSurfaceFireWidthMapDist", "sizeCalcFireWidthDist"),
)

CONTAIN_OUTPUTS = (
    ("vContainLine", "containCalcLine"),
    ("vContainResourcesUsed", "containCalcResourcesUsed"),
    ("vContainSize", "containCalcSize"),
    ("vContainStatus", "containCalcStatus"),
    ("vContainTime", "containCalcTime"),
    ("vContainCost", "containCalcCost"),
    ("vContainDiagram", "containCalcDiagram"),
    ("vContainAttackPerimeter", "containCalcAttackPerimeter"),
    ("vContainAttackSize", "containCalcAttackSize"),
)

SPOT_SOURCES = ("BurningPile", "SurfaceFire", "TorchingTrees")

SPOT_OUTPUTS = (
    ("vSpotDistBurningPile", "spotCalcDistBurningPile"),
    ("vSpotCoverHtBurningPile", "spotCalcCoverHtBurningPile"),
    ("vSpotFirebrandHtBurningPile", "spotCalcFirebrandHtBurningPile"),
    ("vSpotFlatDistBurningPile", "spotCalcFlatDistBurningPile"),
    ("vSpotDistSurfaceFire", "spotCalcDistSurfaceFire"),
    ("vSpotCoverHtSurfaceFire", "spotCalcCoverHtSurfaceFire"),
    ("vSpotFirebrandDriftSurfaceFire", "spotCalcFirebrandDriftSurfaceFire"),
    ("vSpotFirebrandHtSurfaceFire", "spotCalcFirebrandHtSurfaceFire"),
    ("vSpotFlatDistSurfaceFire", "spotCalcFlatDistSurfaceFire"),
    ("vSpotDistTorchingTrees", "spotCalcDistTorchingTrees"),
    ("vSpotCoverHtTorchingTrees", "spotCalcCoverHtTorchingTrees"),
    ("vSpotFlameDurTorchingTrees", "spotCalcFlameDurTorchingTrees"),
    ("vSpotFlameHtTorchingTrees", "spotCalcFlameHtTorchingTrees"),
    ("vSpotFlameRatioTorchingTrees", "spotCalcFlameRatioTorchingTrees"),
    ("vSpotFirebrandHtTorchingTrees", "spotCalcFirebrandHtTorchingTrees"),
    ("vSpotFlatDistTorchingTrees", "spotCalcFlatDistTorchingTrees"),
)

MORTALITY_OUTPUTS = (
    ("vTreeBarkThickness", "mortalityCalcBarkThickness"),
    ("vTreeCrownLengScorchedAtVector", "mortalityCalcTreeCrownLengScorched"),
    ("vTreeCrownVolScorchedAtVector", "mortalityCalcTreeCrownVolScorched"),
    ("vTreeMortalityCountAtVector", "mortalityCalcTreeMortalityCount"),
    ("vTreeMortalityRateAtVector", "mortalityCalcTreeMortalityRate"),
)

WEATHER_OUTPUTS = (
    ("vWthrRelativeHumidity", "weatherCalcWthrRelativeHumidity"),
    ("vWthrCumulusBaseHt", "weatherCalcWthrCumulusBaseHt"),
    ("vWthrHeatIndex", "weatherCalcWthrHeatIndex"),
    ("vWthrSummerSimmerIndex", "weatherCalcWthrSummerSimmerIndex"),
    ("vWthrWindChillTemp", "weatherCalcWthrWindChillTemp"),
)

DOC_GROUPS = (
    ("docDescriptionActive", ("vDocDescription",)),
    ("docRxActive", ("vDocRxAdminUnit", "vDocRxName", "vDocRxPreparedBy")),
    ("docFireActive", ("vDocFireAnalyst", "vDocFireName", "vDocFirePeriod")),
    ("docTrainingActive", ("vDocTrainingCourse", "vDocTrainingExercise",
                           "vDocTrainingTrainee")),
)


def is_two_fuel(prop: PropertyDict) -> bool:
    return any(prop.boolean(name) for name in TWO_FUEL_OPTIONS)


def _activate_all(state: ConfigurationState, names):
    for name in names:
        state.activate(name)


def _outputs(state: ConfigurationState, prop: PropertyDict, pairs):
    for cell, key in pairs:
        state.output(cell, prop.boolean(key))


def _uses_10m_wind(prop: PropertyDict) -> bool:
    return prop.boolean("surfaceConfWindSpeedAt10M") \
        or prop.boolean("surfaceConfWindSpeedAt10MCalc")


# ==============================================================================
# Module procedures
# ==============================================================================

def reconfigure_documentation(state: ConfigurationState, prop: PropertyDict):
    for key, cells in DOC_GROUPS:
        if prop.boolean(key):
            for cell in cells:
                state.user_input(cell)
                state.output(cell)


def _surface_fuel(state: ConfigurationState, prop: PropertyDict) -> bool:
    # Returns True when two fuel models are blended
    if prop.boolean("surfaceConfFuelModels"):
        state.activate("fSurfaceFuelBedParms")
        state.activate("fSurfaceFuelBedModel")

    elif prop.boolean("surfaceConfFuelParms"):
        state.activate("fSurfaceFuelBedParms")

    elif is_two_fuel(prop):
        state.activate("fSurfaceFuelBedWeighted")
        state.user_input("vSurfaceFuelLoadTransferEq", False)
        state.constant("vSurfaceFuelLoadTransferEq")
        return True

    elif prop.boolean("surfaceConfFuelPalmettoGallberry"):
        state.activate("fSurfaceFuelPalmettoModel")
        state.activate("fSurfaceFuelPalmettoParms")
        _outputs(state, prop, [(f"vSurfaceFuelPalmettoLoad{part}", f"surfaceCalcPalmettoLoad{part}")
                               for part in ("Dead1", "Dead10", "DeadFoliage", "Live1", "Live10",
                                            "LiveFoliage", "Litter")])
        state.output("vSurfaceFuelBedDepth", prop.boolean("surfaceCalcPalmettoBedDepth"))

    elif prop.boolean("surfaceConfFuelAspen"):
        state.activate("fSurfaceFuelAspenModel")
        state.activate("fSurfaceFuelAspenParms")
        state.activate("fTreeMortalityRateAspenAtVector")
        # Only the 1-h load and savr, herb load and woody load and savr are shown
        _outputs(state, prop, (
            ("vSurfaceFuelAspenLoadDead1", "surfaceCalcAspenLoadDead1"),
            ("vSurfaceFuelAspenLoadLiveHerb", "surfaceCalcAspenLoadLiveHerb"),
            ("vSurfaceFuelAspenLoadLiveWoody", "surfaceCalcAspenLoadLiveWoody"),
            ("vSurfaceFuelAspenSavrDead1", "surfaceCalcAspenSavrDead1"),
            ("vSurfaceFuelAspenSavrLiveWoody", "surfaceCalcAspenSavrLiveWoody"),
            ("vTreeMortalityRateAspenAtVector", "surfaceCalcAspenMortality"),
        ))
        for cell in ("vSurfaceFuelAspenLoadDead10", "vSurfaceFuelAspenSavrDead10",
                     "vSurfaceFuelAspenSavrLiveHerb", "vSurfaceFuelBedDepth"):
            state.output(cell, False)

    return False


def _surface_wind(state: ConfigurationState, prop: PropertyDict, weighted: bool):
    mode = prop.select("surfaceWindSpeed")

    if mode == "surfaceConfWindSpeedAtMidflame":
        state.constant("vTreeCanopyCrownFraction", value=0.)
        state.constant("vWindAdjFactor", value=1.)
        state.constant("vWindAdjMethod", value=WindAdjMethod.INPUT)
        return

    if mode.startswith("surfaceConfWindSpeedAt10M"):
        state.activate("fWindSpeedAt20Ft")
    state.activate("fWindSpeedAtMidflame")
    state.output("vWindSpeedAtMidflame", prop.boolean("surfaceCalcWindSpeedAtMidflame"))

    if mode.endswith("Calc"):
        state.activate("fWindAdjFactor")
        # Fuel bed depth comes out of the compositor, so it must not be an input
        if weighted:
            state.constant("vSurfaceFuelBedDepth")
        if prop.boolean("crownModuleActive"):
            state.activate("fTreeCrownRatio")
            state.output("vTreeCrownRatio", prop.boolean("surfaceCalcCrownRatio"))
    else:
        state.deactivate("fWindAdjFactor")
        state.constant("vTreeCanopyCrownFraction", value=0.)
        state.constant("vWindAdjMethod", value=WindAdjMethod.INPUT)


def _surface_spread_dir(state: ConfigurationState, prop: PropertyDict):
    if prop.boolean("surfaceConfSpreadDirMax"):
        state.constant("vSurfaceFireVectorDirFromUpslope", value=0.)
        state.constant("vSurfaceFireVectorBeta", value=0.)
        state.deactivate("fSurfaceFireVectorBeta")
        state.output("vSurfaceFireDistAtHead", False)
        _outputs(state, prop, (
            ("vSurfaceFireDistAtVector", "surfaceCalcFireDist"),
            ("vSurfaceFireEffWindAtHead", "surfaceCalcFireEffWind"),
            ("vSurfaceFireFlameLengAtHead", "surfaceCalcFireFlameLeng"),
            ("vSurfaceFireLineIntAtHead", "surfaceCalcFireLineInt"),
            ("vSurfaceFireSpreadAtHead", "surfaceCalcFireSpread"),
        ))
    else:
        if prop.boolean("surfaceConfDegreesWrtNorth"):
            state.activate("fSurfaceFireVectorDirFromUpslope")
        _outputs(state, prop, (
            ("vSurfaceFireDistAtVector", "surfaceCalcFireDist"),
            ("vSurfaceFireEffWindAtVector", "surfaceCalcFireEffWind"),
            ("vSurfaceFireFlameLengAtVector", "surfaceCalcFireFlameLeng"),
            ("vSurfaceFireLineIntAtVector", "surfaceCalcFireLineInt"),
            ("vSurfaceFireSpreadAtVector", "surfaceCalcFireSpread"),
        ))

    if prop.boolean("mapCalcDist"):
        state.activate("fMapScale")
        state.output("vSurfaceFireMapDistAtVector", prop.boolean("surfaceCalcFireDist"))


def _surface_directions(state: ConfigurationState, prop: PropertyDict):
    for cell in ("vWindSpeedAtMidflame", "vWindSpeedAt20Ft", "vWindSpeedAt10M"):
        state.label(cell, "")

    if prop.boolean("surfaceConfWindDirInput"):
        if prop.boolean("surfaceConfDegreesWrtNorth"):
            state.activate("fWindDirFromUpslope")
    else:
        state.constant("vWindDirFromUpslope", value=0.)
        for cell in ("vWindSpeedAtMidflame", "vWindSpeedAt20Ft", "vWindSpeedAt10M"):
            state.label(cell, "Upslope")

    # Also needed by the max direction and fire shape diagrams
    max_dir = prop.boolean("surfaceCalcFireMaxDirFromUpslope") \
        or prop.boolean("surfaceCalcFireMaxDirDiagram") \
        or (prop.boolean("sizeModuleActive") and prop.boolean("sizeCalcFireShapeDiagram"))

    if prop.boolean("surfaceConfDegreesWrtUpslope"):
        state.output("vSurfaceFireMaxDirFromUpslope", max_dir)
    else:
        state.activate("fSiteUpslopeDirFromNorth")
        state.output("vSurfaceFireMaxDirFromNorth", max_dir)

    if prop.boolean("siteConfDirFromCompass"):
        state.activate("fSiteAspectDirFromNorth")
        state.activate("fWindDirFromNorth")
        state.activate("fSurfaceFireVectorDirFromNorth")


def _surface_slope(state: ConfigurationState, prop: PropertyDict):
    if prop.boolean("surfaceConfSlopeInput"):
        if prop.boolean("surfaceConfSlopeDegrees"):
            state.activate("fSiteSlopeFraction")
        return

    state.activate("fMapSlope")
    state.activate("fMapScale")
    state.activate("fSiteSlopeFraction")
    state.output("vSiteSlopeReach", prop.boolean("surfaceCalcSlopeReach"))
    state.output("vSiteSlopeRise", prop.boolean("surfaceCalcSlopeRise"))
    if prop.boolean("surfaceCalcSlopeSteepness"):
        state.output("vSiteSlopeFraction", prop.boolean("surfaceConfSlopeFraction"))
        state.output("vSiteSlopeDegrees", prop.boolean("surfaceConfSlopeDegrees"))


def reconfigure_surface(state: ConfigurationState, prop: PropertyDict):
    """Surface fuel, moisture, wind, direction and slope options.

    When two fuel models are blended the functions listed in
    ``COMPOSITED_FUNCTIONS`` are deactivated at the very end, after the wind
    and moisture rules may have switched some of them back on.

    Args:
        state (ConfigurationState): state being built
        prop (PropertyDict): configuration properties
    """
    if not prop.boolean("surfaceModuleActive"):
        return

    _activate_all(state, SURFACE_FUNCTIONS)
    state.deactivate("fTreeCrownRatio")
    state.constant("vSurfaceFuelLoadDeadHerb")

    weighted = _surface_fuel(state, prop)

    # Load transfer
    if prop.boolean("surfaceConfLoadTransferCalc"):
        state.user_input("vSurfaceFuelLoadTransferFraction", False)
        state.activate("fSurfaceFuelLoadTransferFraction")
    else:
        state.user_input("vSurfaceFuelLoadTransferFraction")
        state.deactivate("fSurfaceFuelLoadTransferFraction")

    if prop.boolean("surfaceConfFuelPalmettoGallberry") or prop.boolean("surfaceConfFuelAspen"):
        state.constant("vSurfaceFuelLoadTransferEq", value=0)
        state.user_input("vSurfaceFuelLoadTransferFraction", False)
        state.activate("fSurfaceFuelLoadTransferFraction")
        state.constant("vSurfaceFuelLoadTransferFraction", value=0.)

    # Moisture
    if prop.boolean("surfaceConfMoisLifeCat"):
        state.activate("fSurfaceFuelMoisLifeClass")
    elif prop.boolean("surfaceConfMoisScenario"):
        state.activate("fSurfaceFuelMoisScenarioModel")

    _surface_wind(state, prop, weighted)
    _surface_spread_dir(state, prop)
    _surface_directions(state, prop)
    _surface_slope(state, prop)

    _outputs(state, prop, (
        ("vSurfaceFireHeatPerUnitArea", "surfaceCalcFireHeatPerUnitArea"),
        ("vSurfaceFireReactionInt", "surfaceCalcFireReactionInt"),
        ("vSurfaceFireWindSpeedFlag", "surfaceCalcFireWindSpeedFlag"),
        ("vSurfaceFireWindSpeedLimit", "surfaceCalcFireWindSpeedLimit"),
        ("vTreeCanopyCrownFraction", "surfaceCalcCrownFillPortion"),
        ("vWindAdjFactor", "surfaceCalcWindAdjFactor"),
        ("vWindAdjMethod", "surfaceCalcWindAdjMethod"),
    ))
    for cell, key in SINGLE_FUEL_OUTPUTS:
        state.output(cell, False if weighted else prop.boolean(key))

    # Only a burnup calculation would use the 1000-h moisture
    state.constant("vSurfaceFuelMoisDead1000", value=0.20)

    if weighted:
        for name in COMPOSITED_FUNCTIONS:
            state.deactivate(name)


def reconfigure_crown(state: ConfigurationState, prop: PropertyDict):
    if not prop.boolean("crownModuleActive"):
        return

    _activate_all(state, CROWN_FUNCTIONS)

    if prop.boolean("surfaceModuleActive"):
        state.activate("fCrownFireTransRatioFromFireIntAtVector")
    else:
        if prop.boolean("crownConfUseFlameLeng"):
            state.activate("fCrownFireTransRatioFromFlameLengAtVector")
        else:
            state.activate("fCrownFireTransRatioFromFireIntAtVector")
        if _uses_10m_wind(prop):
            state.activate("fWindSpeedAt20Ft")

    _outputs(state, prop, CROWN_OUTPUTS)
    if prop.boolean("mapCalcDist"):
        state.activate("fMapScale")
        state.output("vCrownFireSpreadMapDist", prop.boolean("crownCalcCrownSpreadDist"))


def reconfigure_size(state: ConfigurationState, prop: PropertyDict):
    if not prop.boolean("sizeModuleActive"):
        return

    _activate_all(state, SIZE_FUNCTIONS)
    # The compositor already writes these when fuels are blended
    if not (prop.boolean("surfaceModuleActive") and is_two_fuel(prop)):
        state.activate("fSurfaceFireEccentricity")
        state.activate("fSurfaceFireLengthToWidth")

    _outputs(state, prop, SIZE_OUTPUTS)
    if prop.boolean("mapCalcDist"):
        state.activate("fMapScale")
        _outputs(state, prop, SIZE_MAP_OUTPUTS)


def reconfigure_contain(state: ConfigurationState, prop: PropertyDict):
    if not prop.boolean("containModuleActive"):
        return

    single = prop.boolean("containConfResourcesSingle")
    state.activate("fContainFF", not single)
    state.activate("fContainFFSingle", single)
    state.constant("vContainResourceName", single)

    if prop.boolean("containConfLimitDistOn"):
        state.constant("vContainLimitDist", False)
        state.user_input("vContainLimitDist")
    else:
        state.constant("vContainLimitDist")
        state.user_input("vContainLimitDist", False)

    _outputs(state, prop, CONTAIN_OUTPUTS)
    if prop.boolean("containCalcDiagram"):
        state.activate("fContainDiagram")

    # Cost rates are only needed when cost is an output
    costed = prop.boolean("containCalcCost")
    state.constant("vContainResourceBaseCost", not costed)
    state.constant("vContainResourceHourCost", not costed)

    state.activate("fContainFFReportSpread")
    if prop.boolean("surfaceModuleActive"):
        state.activate("fContainFFReportRatio")
    if prop.boolean("sizeModuleActive"):
        state.activate("fContainFFReportRatio")
        state.activate("fContainFFReportSize")


def reconfigure_spot(state: ConfigurationState, prop: PropertyDict):
    if not prop.boolean("spotModuleActive"):
        return

    for source in SPOT_SOURCES:
        state.activate(f"fSpotDist{source}")

    if not prop.boolean("surfaceModuleActive") and _uses_10m_wind(prop):
        state.activate("fWindSpeedAt20Ft")

    _outputs(state, prop, SPOT_OUTPUTS)

    if prop.boolean("mapCalcDist"):
        state.activate("fMapScale")
        state.activate("fSiteRidgeToValleyDist")
        for source in SPOT_SOURCES:
            state.activate(f"fSpotMapDist{source}")
            state.output(f"vSpotMapDist{source}", prop.boolean(f"spotCalcDist{source}"))


def reconfigure_scorch(state: ConfigurationState, prop: PropertyDict):
    if not prop.boolean("scorchModuleActive") or not prop.boolean("scorchCalcScorchHt"):
        return

    state.output("vSurfaceFireScorchHtAtVector")
    if prop.boolean("surfaceModuleActive"):
        state.activate("fSurfaceFireScorchHtFromFliAtVector")
        return

    state.deactivate("fWindSpeedAt20Ft")
    state.deactivate("fWindSpeedAtMidflame")
    state.deactivate("fWindAdjFactor")

    if prop.boolean("scorchConfUseFlameLeng"):
        state.activate("fSurfaceFireScorchHtFromFlameLengAtVector")
    else:
        state.activate("fSurfaceFireScorchHtFromFliAtVector")

    # Surface wind rules apply even though the surface module is off
    mode = prop.select("surfaceWindSpeed")
    if mode == "surfaceConfWindSpeedAtMidflame":
        state.constant("vWindAdjFactor", value=1.)
        state.constant("vWindAdjMethod", value=WindAdjMethod.INPUT)
        return

    if mode.startswith("surfaceConfWindSpeedAt10M"):
        state.activate("fWindSpeedAt20Ft")
    state.activate("fWindSpeedAtMidflame")
    state.output("vWindSpeedAtMidflame", prop.boolean("surfaceCalcWindSpeedAtMidflame"))
    if mode.endswith("Calc"):
        state.activate("fWindAdjFactor")
    else:
        state.constant("vWindAdjMethod", value=WindAdjMethod.INPUT)


def reconfigure_mortality(state: ConfigurationState, prop: PropertyDict):
    if not prop.boolean("mortalityModuleActive"):
        return

    # Crown base height would close a loop through the crown ratio
    state.deactivate("fTreeCrownBaseHt")
    state.activate("fTreeCrownVolScorchedAtVector")
    state.activate("fTreeMortalityCountAtVector")
    state.activate("fTreeMortalityRateFofemHoodAtVector")
    state.activate("fTreeBarkThicknessFofem")

    if prop.boolean("crownModuleActive"):
        state.activate("fTreeCrownRatio")

    _outputs(state, prop, MORTALITY_OUTPUTS)

    if prop.boolean("surfaceModuleActive") and not prop.boolean("scorchModuleActive"):
        state.activate("fSurfaceFireScorchHtFromFliAtVector")


def reconfigure_ignition(state: ConfigurationState, prop: PropertyDict):
    if not prop.boolean("ignitionModuleActive"):
        return

    state.activate("fIgnitionFirebrandProb")
    state.activate("fIgnitionLightningProb")
    state.activate("fSurfaceFuelTemp")

    _outputs(state, prop, (
        ("vIgnitionFirebrandProb", "ignitionCalcIgnitionFirebrandProb"),
        ("vIgnitionLightningProb", "ignitionCalcIgnitionLightningProb"),
        ("vSurfaceFuelTemp", "ignitionCalcFuelTemp"),
    ))

    if prop.boolean("surfaceModuleActive"):
        state.activate("fIgnitionFirebrandFuelMoisFromDead1Hr")
        state.activate("fIgnitionLightningFuelMoisFromDead100Hr")


def reconfigure_weather(state: ConfigurationState, prop: PropertyDict):
    if not prop.boolean("weatherModuleActive"):
        return

    _activate_all(state, ("fWthrRelativeHumidity", "fWthrCumulusBaseHt", "fWthrHeatIndex",
                          "fWthrSummerSimmerIndex", "fWthrWindChillTemp"))

    if prop.boolean("weatherConfHumidityFromWetBulbElev"):
        state.activate("fWthrDewPointTemp")
        state.output("vWthrDewPointTemp", prop.boolean("weatherCalcWthrDewPointTemp"))

    _outputs(state, prop, WEATHER_OUTPUTS)


def reconfigure_safety(state: ConfigurationState, prop: PropertyDict):
    if not prop.boolean("safetyModuleActive"):
        return

    radius = prop.boolean("safetyCalcRadius")
    sep_dist = prop.boolean("safetyCalcSepDist")
    size = prop.boolean("safetyCalcSize")
    state.output("vSafetyZoneRadius", radius)
    state.output("vSafetyZoneSepDist", sep_dist)
    state.output("vSafetyZoneSize", size)

    if radius or sep_dist or size:
        state.activate("fSafetyZoneSepDist")
    if radius or size:
        state.activate("fSafetyZoneRadius")

    if prop.boolean("surfaceModuleActive"):
        # The compositor writes head flame length for blended fuels
        if not is_two_fuel(prop):
            state.activate("fSurfaceFireFlameLengAtHead")
        state.user_input("vSurfaceFireFlameLengAtHead", False)


MODULE_PROCEDURES: List[Callable[[ConfigurationState, PropertyDict], None]] = [
    reconfigure_documentation,
    reconfigure_surface,
    reconfigure_crown,
    reconfigure_size,
    reconfigure_contain,
    reconfigure_spot,
    reconfigure_scorch,
    reconfigure_mortality,
    reconfigure_ignition,
    reconfigure_weather,
    reconfigure_safety,
]


def reconfigure(graph: ComputationGraph, prop: PropertyDict) -> ConfigurationState:
    """Derives every activation and visibility flag from the properties.

    The state is built on a fresh default state and returned without being
    installed; :meth:`ComputationGraph.apply_state` installs it.

    Args:
        graph (ComputationGraph): graph whose names the rules refer to
        prop (PropertyDict): configuration properties

    Raises:
        ConfigurationError: if a rule names an unknown function, cell or
            property, or an option group has no single selection

    Returns:
        ConfigurationState: the derived flags
    """
    state = graph.default_state()
    for procedure in MODULE_PROCEDURES:
        procedure(state, prop)
    return state


def show_init_from_fuel_model_button(state: ConfigurationState) -> bool:
    return state.function_active["fSurfaceFuelBedParms"] \
        and not state.function_active["fSurfaceFuelBedModel"]
