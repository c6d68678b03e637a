"""Surface fire functions built on the Rothermel (1972) spread model.

Spread rates are ft/min, intensities Btu/ft/s and directions degrees
clockwise from upslope unless the cell name says ``FromNorth``.
"""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.calculator.functions.surface_fuel import BED_INPUTS, build_fuel_bed
from firecalc.models import rothermel
from firecalc.models.site import compass_to_degrees
from firecalc.utilities.fire_util import wrap_degrees


def _diagram(name: str):
    # Diagram cells count how many times the diagram was regenerated
    def procedure(calc):
        calc.set(name, calc.get(name) + 1.)
    return procedure


def fire_reaction_int(calc):
    bed = build_fuel_bed(calc)
    total, dead, live = rothermel.calc_reaction_intensity(
        bed, calc.get("vSurfaceFuelBedMoisDead"), calc.get("vSurfaceFuelBedMoisLive"),
        calc.get("vSurfaceFuelBedMextLive")
    )
    calc.set("vSurfaceFireReactionInt", total)
    calc.set("vSurfaceFireReactionIntDead", dead)
    calc.set("vSurfaceFireReactionIntLive", live)


def fire_propagating_flux(calc):
    calc.set("vSurfaceFirePropagatingFlux",
             rothermel.calc_propagating_flux(calc.get("vSurfaceFuelBedSigma"),
                                             calc.get("vSurfaceFuelBedPackingRatio")))


def fire_residence_time(calc):
    calc.set("vSurfaceFireResidenceTime",
             rothermel.calc_residence_time(calc.get("vSurfaceFuelBedSigma")))


def fire_no_wind_rate(calc):
    calc.set("vSurfaceFireNoWindRate",
             rothermel.calc_no_wind_rate(calc.get("vSurfaceFireReactionInt"),
                                         calc.get("vSurfaceFirePropagatingFlux"),
                                         calc.get("vSurfaceFuelBedHeatSink")))


def fire_spread_at_head(calc):
    # Aspen fuels are never capped by the effective wind speed limit
    apply_limit = calc.prop.boolean("surfaceConfWindLimitApplied") \
        and not calc.prop.boolean("surfaceConfFuelAspen")

    head = rothermel.calc_spread_at_head(
        calc.get("vSurfaceFireNoWindRate"),
        calc.get("vSurfaceFireReactionInt"),
        calc.get("vSiteSlopeFraction"),
        calc.get("vWindSpeedAtMidflame"),
        calc.get("vWindDirFromUpslope"),
        calc.get("vSurfaceFuelBedSigma"),
        calc.get("vSurfaceFuelBedPackingRatio"),
        calc.get("vSurfaceFuelBedBetaRatio"),
        apply_limit=apply_limit,
    )
    calc.set("vSurfaceFireSpreadAtHead", head.ros)
    calc.set("vSurfaceFireMaxDirFromUpslope", head.dir_max)
    calc.set("vSurfaceFireEffWindAtHead", head.eff_wind)
    calc.set("vSurfaceFireWindSpeedLimit", head.wind_limit)
    calc.set("vSurfaceFireWindSpeedFlag", int(head.wind_flag))
    calc.set("vSurfaceFireWindFactor", head.wind_factor)
    calc.set("vSurfaceFireSlopeFactor", head.slope_factor)


def fire_eff_wind_at_vector(calc):
    calc.set("vSurfaceFireEffWindAtVector",
             rothermel.calc_eff_wind_at_vector(calc.get("vSurfaceFireNoWindRate"),
                                               calc.get("vSurfaceFireSpreadAtVector"),
                                               calc.get("vSurfaceFuelBedSigma"),
                                               calc.get("vSurfaceFuelBedBetaRatio")))


def fire_length_to_width(calc):
    calc.set("vSurfaceFireLengthToWidth",
             rothermel.calc_length_to_width(calc.get("vSurfaceFireEffWindAtHead")))


def fire_eccentricity(calc):
    calc.set("vSurfaceFireEccentricity",
             rothermel.calc_eccentricity(calc.get("vSurfaceFireLengthToWidth")))


def fire_vector_beta(calc):
    calc.set("vSurfaceFireVectorBeta",
             rothermel.calc_vector_beta(calc.get("vSurfaceFireMaxDirFromUpslope"),
                                        calc.get("vSurfaceFireVectorDirFromUpslope")))


def fire_spread_at_beta(calc):
    calc.set("vSurfaceFireSpreadAtVector",
             rothermel.calc_spread_at_beta(calc.get("vSurfaceFireSpreadAtHead"),
                                           calc.get("vSurfaceFireEccentricity"),
                                           calc.get("vSurfaceFireVectorBeta")))


def fire_spread_at_back(calc):
    calc.set("vSurfaceFireSpreadAtBack",
             rothermel.calc_spread_at_back(calc.get("vSurfaceFireSpreadAtHead"),
                                           calc.get("vSurfaceFireEccentricity")))


def fire_line_int_at_head(calc):
    calc.set("vSurfaceFireLineIntAtHead",
             rothermel.calc_fireline_intensity(calc.get("vSurfaceFireSpreadAtHead"),
                                               calc.get("vSurfaceFireReactionInt"),
                                               calc.get("vSurfaceFireResidenceTime")))


def fire_line_int_at_vector(calc):
    calc.set("vSurfaceFireLineIntAtVector",
             rothermel.calc_fireline_intensity(calc.get("vSurfaceFireSpreadAtVector"),
                                               calc.get("vSurfaceFireReactionInt"),
                                               calc.get("vSurfaceFireResidenceTime")))


def fire_flame_leng_at_head(calc):
    calc.set("vSurfaceFireFlameLengAtHead",
             rothermel.calc_flame_length(calc.get("vSurfaceFireLineIntAtHead")))


def fire_flame_leng_at_vector(calc):
    calc.set("vSurfaceFireFlameLengAtVector",
             rothermel.calc_flame_length(calc.get("vSurfaceFireLineIntAtVector")))


def fire_flame_ht_at_vector(calc):
    calc.set("vSurfaceFireFlameHtAtVector",
             rothermel.calc_flame_height(calc.get("vSurfaceFireFlameLengAtVector"),
                                         calc.get("vSurfaceFireFlameAngleAtVector")))


def fire_heat_per_unit_area(calc):
    calc.set("vSurfaceFireHeatPerUnitArea",
             rothermel.calc_heat_per_unit_area(calc.get("vSurfaceFireReactionInt"),
                                               calc.get("vSurfaceFireResidenceTime")))


def fire_heat_source(calc):
    calc.set("vSurfaceFireHeatSource",
             rothermel.calc_heat_source(calc.get("vSurfaceFireSpreadAtHead"),
                                        calc.get("vSurfaceFuelBedHeatSink")))


def fire_max_dir_from_north(calc):
    deg = wrap_degrees(calc.get("vSiteUpslopeDirFromNorth")
                       + calc.get("vSurfaceFireMaxDirFromUpslope"))
    calc.set("vSurfaceFireMaxDirFromNorth", 0. if deg < 0.5 else deg)


def fire_vector_dir_from_north(calc):
    calc.set("vSurfaceFireVectorDirFromNorth",
             compass_to_degrees(calc.get("vSurfaceFireVectorDirFromCompass")))


def fire_vector_dir_from_upslope(calc):
    deg = calc.get("vSurfaceFireVectorDirFromNorth") - calc.get("vSiteUpslopeDirFromNorth")
    if deg < 0.:
        deg += 360.
    calc.set("vSurfaceFireVectorDirFromUpslope", deg)


def fire_scorch_ht_from_fli_at_vector(calc):
    calc.set("vSurfaceFireScorchHtAtVector",
             rothermel.calc_scorch_height(calc.get("vSurfaceFireLineIntAtVector"),
                                          calc.get("vWindSpeedAtMidflame"),
                                          calc.get("vWthrAirTemp")))


def fire_scorch_ht_from_flame_leng_at_vector(calc):
    fli = rothermel.calc_fireline_intensity_from_flame_length(
        calc.get("vSurfaceFireFlameLengAtVector"))
    calc.set("vSurfaceFireScorchHtAtVector",
             rothermel.calc_scorch_height(fli, calc.get("vWindSpeedAtMidflame"),
                                          calc.get("vWthrAirTemp")))


_SIZE_CELLS = (
    "vSurfaceFireArea", "vSurfaceFireDistAtHead", "vSurfaceFireDistAtBack",
    "vSurfaceFireElapsedTime", "vSurfaceFireLengDist", "vSurfaceFirePerimeter",
    "vSurfaceFireWidthDist", "vSurfaceFireMaxDirFromUpslope", "vWindDirFromUpslope",
)


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fSurfaceFireReactionInt", fire_reaction_int,
                     reads=BED_INPUTS + ("vSurfaceFuelBedMoisDead", "vSurfaceFuelBedMoisLive",
                                         "vSurfaceFuelBedMextLive"),
                     writes=("vSurfaceFireReactionInt", "vSurfaceFireReactionIntDead",
                             "vSurfaceFireReactionIntLive")),
        FunctionNode("fSurfaceFirePropagatingFlux", fire_propagating_flux,
                     reads=("vSurfaceFuelBedPackingRatio", "vSurfaceFuelBedSigma"),
                     writes=("vSurfaceFirePropagatingFlux",)),
        FunctionNode("fSurfaceFireResidenceTime", fire_residence_time,
                     reads=("vSurfaceFuelBedSigma",), writes=("vSurfaceFireResidenceTime",)),
        FunctionNode("fSurfaceFireNoWindRate", fire_no_wind_rate,
                     reads=("vSurfaceFuelBedHeatSink", "vSurfaceFirePropagatingFlux",
                            "vSurfaceFireReactionInt"),
                     writes=("vSurfaceFireNoWindRate",)),
        FunctionNode("fSurfaceFireSpreadAtHead", fire_spread_at_head,
                     reads=("vSurfaceFireNoWindRate", "vSurfaceFireReactionInt",
                            "vSiteSlopeFraction", "vWindSpeedAtMidflame", "vWindDirFromUpslope",
                            "vSurfaceFuelBedSigma", "vSurfaceFuelBedPackingRatio",
                            "vSurfaceFuelBedBetaRatio"),
                     writes=("vSurfaceFireSpreadAtHead", "vSurfaceFireMaxDirFromUpslope",
                             "vSurfaceFireEffWindAtHead", "vSurfaceFireWindSpeedLimit",
                             "vSurfaceFireWindSpeedFlag", "vSurfaceFireWindFactor",
                             "vSurfaceFireSlopeFactor")),
        FunctionNode("fSurfaceFireEffWindAtVector", fire_eff_wind_at_vector,
                     reads=("vSurfaceFireNoWindRate", "vSurfaceFireSpreadAtVector",
                            "vSurfaceFuelBedSigma", "vSurfaceFuelBedBetaRatio"),
                     writes=("vSurfaceFireEffWindAtVector",)),
        FunctionNode("fSurfaceFireLengthToWidth", fire_length_to_width,
                     reads=("vSurfaceFireEffWindAtHead",), writes=("vSurfaceFireLengthToWidth",)),
        FunctionNode("fSurfaceFireEccentricity", fire_eccentricity,
                     reads=("vSurfaceFireLengthToWidth",), writes=("vSurfaceFireEccentricity",)),
        FunctionNode("fSurfaceFireVectorBeta", fire_vector_beta,
                     reads=("vSurfaceFireMaxDirFromUpslope", "vSurfaceFireVectorDirFromUpslope"),
                     writes=("vSurfaceFireVectorBeta",)),
        FunctionNode("fSurfaceFireSpreadAtBeta", fire_spread_at_beta,
                     reads=("vSurfaceFireSpreadAtHead", "vSurfaceFireEccentricity",
                            "vSurfaceFireVectorBeta"),
                     writes=("vSurfaceFireSpreadAtVector",)),
        FunctionNode("fSurfaceFireSpreadAtBack", fire_spread_at_back,
                     reads=("vSurfaceFireSpreadAtHead", "vSurfaceFireEccentricity"),
                     writes=("vSurfaceFireSpreadAtBack",)),
        FunctionNode("fSurfaceFireLineIntAtHead", fire_line_int_at_head,
                     reads=("vSurfaceFireSpreadAtHead", "vSurfaceFireReactionInt",
                            "vSurfaceFireResidenceTime"),
                     writes=("vSurfaceFireLineIntAtHead",)),
        FunctionNode("fSurfaceFireLineIntAtVector", fire_line_int_at_vector,
                     reads=("vSurfaceFireSpreadAtVector", "vSurfaceFireReactionInt",
                            "vSurfaceFireResidenceTime"),
                     writes=("vSurfaceFireLineIntAtVector",)),
        FunctionNode("fSurfaceFireFlameLengAtHead", fire_flame_leng_at_head,
                     reads=("vSurfaceFireLineIntAtHead",), writes=("vSurfaceFireFlameLengAtHead",)),
        FunctionNode("fSurfaceFireFlameLengAtVector", fire_flame_leng_at_vector,
                     reads=("vSurfaceFireLineIntAtVector",),
                     writes=("vSurfaceFireFlameLengAtVector",)),
        FunctionNode("fSurfaceFireFlameHtAtVector", fire_flame_ht_at_vector,
                     reads=("vSurfaceFireFlameLengAtVector", "vSurfaceFireFlameAngleAtVector"),
                     writes=("vSurfaceFireFlameHtAtVector",)),
        FunctionNode("fSurfaceFireHeatPerUnitArea", fire_heat_per_unit_area,
                     reads=("vSurfaceFireReactionInt", "vSurfaceFireResidenceTime"),
                     writes=("vSurfaceFireHeatPerUnitArea",)),
        FunctionNode("fSurfaceFireHeatSource", fire_heat_source,
                     reads=("vSurfaceFireSpreadAtHead", "vSurfaceFuelBedHeatSink"),
                     writes=("vSurfaceFireHeatSource",)),
        FunctionNode("fSurfaceFireMaxDirFromNorth", fire_max_dir_from_north,
                     reads=("vSurfaceFireMaxDirFromUpslope", "vSiteUpslopeDirFromNorth"),
                     writes=("vSurfaceFireMaxDirFromNorth",)),
        FunctionNode("fSurfaceFireVectorDirFromNorth", fire_vector_dir_from_north,
                     reads=("vSurfaceFireVectorDirFromCompass",),
                     writes=("vSurfaceFireVectorDirFromNorth",)),
        FunctionNode("fSurfaceFireVectorDirFromUpslope", fire_vector_dir_from_upslope,
                     reads=("vSurfaceFireVectorDirFromNorth", "vSiteUpslopeDirFromNorth"),
                     writes=("vSurfaceFireVectorDirFromUpslope",)),
        FunctionNode("fSurfaceFireCharacteristicsDiagram",
                     _diagram("vSurfaceFireCharacteristicsDiagram"),
                     reads=("vSurfaceFireCharacteristicsDiagram", "vSurfaceFireSpreadAtHead",
                            "vSurfaceFireHeatPerUnitArea"),
                     writes=("vSurfaceFireCharacteristicsDiagram",)),
        FunctionNode("fSurfaceFireMaxDirDiagram", _diagram("vSurfaceFireMaxDirDiagram"),
                     reads=("vSurfaceFireMaxDirDiagram", "vSurfaceFireMaxDirFromUpslope",
                            "vWindDirFromUpslope"),
                     writes=("vSurfaceFireMaxDirDiagram",)),
        FunctionNode("fSurfaceFireShapeDiagram", _diagram("vSurfaceFireShapeDiagram"),
                     reads=("vSurfaceFireShapeDiagram",) + _SIZE_CELLS,
                     writes=("vSurfaceFireShapeDiagram",)),
        FunctionNode("fSurfaceFireScorchHtFromFliAtVector", fire_scorch_ht_from_fli_at_vector,
                     reads=("vWthrAirTemp", "vWindSpeedAtMidflame", "vSurfaceFireLineIntAtVector"),
                     writes=("vSurfaceFireScorchHtAtVector",)),
        FunctionNode("fSurfaceFireScorchHtFromFlameLengAtVector",
                     fire_scorch_ht_from_flame_leng_at_vector,
                     reads=("vWthrAirTemp", "vWindSpeedAtMidflame",
                            "vSurfaceFireFlameLengAtVector"),
                     writes=("vSurfaceFireScorchHtAtVector",)),
    ]
