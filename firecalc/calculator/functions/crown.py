"""Crown fire functions: Rothermel (1991) crown spread, Van Wagner (1977)
initiation and Scott and Reinhardt (2001) fire type.
"""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.models import crown_model as cm
from firecalc.models.rothermel import calc_fireline_intensity_from_flame_length
from firecalc.models.site import calc_map_distance
from firecalc.utilities.unit_conversions import ft2_to_ac


def crown_spread_rate(calc):
    calc.set("vCrownFireSpreadRate",
             cm.calc_crown_spread_rate(calc.get("vWindSpeedAt20Ft"),
                                       calc.get("vSurfaceFuelMoisDead1"),
                                       calc.get("vSurfaceFuelMoisDead10"),
                                       calc.get("vSurfaceFuelMoisDead100"),
                                       calc.get("vSurfaceFuelMoisLiveWood")))


def crown_crit_surf_fire_int(calc):
    calc.set("vCrownFireCritSurfFireInt",
             cm.calc_critical_surface_intensity(calc.get("vTreeFoliarMois"),
                                                calc.get("vTreeCrownBaseHt")))


def crown_crit_surf_flame_leng(calc):
    calc.set("vCrownFireCritSurfFlameLeng",
             cm.calc_critical_surface_flame_length(calc.get("vCrownFireCritSurfFireInt")))


def crown_crit_crown_spread_rate(calc):
    calc.set("vCrownFireCritCrownSpreadRate",
             cm.calc_critical_crown_spread_rate(calc.get("vTreeCanopyBulkDens")))


def crown_trans_ratio_from_fire_int(calc):
    calc.set("vCrownFireTransRatio",
             cm.calc_transition_ratio(calc.get("vSurfaceFireLineIntAtVector"),
                                      calc.get("vCrownFireCritSurfFireInt")))


def crown_trans_ratio_from_flame_leng(calc):
    fli = calc_fireline_intensity_from_flame_length(calc.get("vSurfaceFireFlameLengAtVector"))
    calc.set("vCrownFireTransRatio",
             cm.calc_transition_ratio(fli, calc.get("vCrownFireCritSurfFireInt")))


def crown_trans_to_crown(calc):
    calc.set("vCrownFireTransToCrown", int(calc.get("vCrownFireTransRatio") >= 1.))


def crown_active_ratio(calc):
    calc.set("vCrownFireActiveRatio",
             cm.calc_active_ratio(calc.get("vCrownFireSpreadRate"),
                                  calc.get("vCrownFireCritCrownSpreadRate")))


def crown_active_crown(calc):
    calc.set("vCrownFireActiveCrown", int(calc.get("vCrownFireActiveRatio") >= 1.))


def crown_fire_type(calc):
    calc.set("vCrownFireType",
             cm.calc_crown_fire_type(calc.get("vCrownFireTransRatio"),
                                     calc.get("vCrownFireActiveRatio")))


def crown_fuel_load(calc):
    calc.set("vCrownFireFuelLoad",
             cm.calc_crown_fuel_load(calc.get("vTreeCanopyBulkDens"), calc.get("vTreeCoverHt"),
                                     calc.get("vTreeCrownBaseHt")))


def crown_heat_per_unit_area_canopy(calc):
    calc.set("vCrownFireHeatPerUnitAreaCanopy",
             cm.calc_canopy_heat_per_unit_area(calc.get("vCrownFireFuelLoad")))


def crown_heat_per_unit_area(calc):
    # Surface fire heat is added to the canopy heat
    calc.set("vCrownFireHeatPerUnitArea",
             calc.get("vCrownFireHeatPerUnitAreaCanopy")
             + calc.get("vSurfaceFireHeatPerUnitArea"))


def crown_line_int(calc):
    calc.set("vCrownFireLineInt",
             cm.calc_crown_fireline_intensity(calc.get("vCrownFireHeatPerUnitArea"),
                                              calc.get("vCrownFireSpreadRate")))


def crown_flame_leng(calc):
    calc.set("vCrownFireFlameLeng", cm.calc_crown_flame_length(calc.get("vCrownFireLineInt")))


def crown_length_to_width(calc):
    calc.set("vCrownFireLengthToWidth",
             cm.calc_crown_length_to_width(calc.get("vWindSpeedAt20Ft")))


def crown_spread_dist(calc):
    calc.set("vCrownFireSpreadDist",
             cm.calc_crown_spread_dist(calc.get("vCrownFireSpreadRate"),
                                       calc.get("vSurfaceFireElapsedTime")))


def crown_spread_map_dist(calc):
    calc.set("vCrownFireSpreadMapDist",
             calc_map_distance(calc.get("vCrownFireSpreadDist"), calc.get("vMapScale")))


def crown_area(calc):
    area = cm.calc_crown_fire_area(calc.get("vCrownFireSpreadDist"),
                                   calc.get("vCrownFireLengthToWidth"))
    calc.set("vCrownFireArea", ft2_to_ac(area))


def crown_perimeter(calc):
    calc.set("vCrownFirePerimeter",
             cm.calc_crown_fire_perimeter(calc.get("vCrownFireSpreadDist"),
                                          calc.get("vCrownFireLengthToWidth")))


def crown_power_of_fire(calc):
    calc.set("vCrownFirePowerOfFire", cm.calc_power_of_fire(calc.get("vCrownFireLineInt")))


def crown_power_of_wind(calc):
    calc.set("vCrownFirePowerOfWind",
             cm.calc_power_of_wind(calc.get("vWindSpeedAt20Ft"),
                                   calc.get("vCrownFireSpreadRate")))


def crown_power_ratio(calc):
    calc.set("vCrownFirePowerRatio",
             cm.calc_power_ratio(calc.get("vCrownFirePowerOfFire"),
                                 calc.get("vCrownFirePowerOfWind")))


def crown_wind_driven(calc):
    calc.set("vCrownFireWindDriven", int(cm.is_wind_driven(calc.get("vCrownFirePowerRatio"))))


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fCrownFireSpreadRate", crown_spread_rate,
                     reads=("vSurfaceFuelMoisDead1", "vSurfaceFuelMoisDead10",
                            "vSurfaceFuelMoisDead100", "vSurfaceFuelMoisLiveWood",
                            "vWindSpeedAt20Ft"),
                     writes=("vCrownFireSpreadRate",)),
        FunctionNode("fCrownFireCritSurfFireInt", crown_crit_surf_fire_int,
                     reads=("vTreeCrownBaseHt", "vTreeFoliarMois"),
                     writes=("vCrownFireCritSurfFireInt",)),
        FunctionNode("fCrownFireCritSurfFlameLeng", crown_crit_surf_flame_leng,
                     reads=("vCrownFireCritSurfFireInt",), writes=("vCrownFireCritSurfFlameLeng",)),
        FunctionNode("fCrownFireCritCrownSpreadRate", crown_crit_crown_spread_rate,
                     reads=("vTreeCanopyBulkDens",), writes=("vCrownFireCritCrownSpreadRate",)),
        FunctionNode("fCrownFireTransRatioFromFireIntAtVector", crown_trans_ratio_from_fire_int,
                     reads=("vSurfaceFireLineIntAtVector", "vCrownFireCritSurfFireInt"),
                     writes=("vCrownFireTransRatio",)),
        FunctionNode("fCrownFireTransRatioFromFlameLengAtVector",
                     crown_trans_ratio_from_flame_leng,
                     reads=("vSurfaceFireFlameLengAtVector", "vCrownFireCritSurfFireInt"),
                     writes=("vCrownFireTransRatio",)),
        FunctionNode("fCrownFireTransToCrown", crown_trans_to_crown,
                     reads=("vCrownFireTransRatio",), writes=("vCrownFireTransToCrown",)),
        FunctionNode("fCrownFireActiveRatio", crown_active_ratio,
                     reads=("vCrownFireSpreadRate", "vCrownFireCritCrownSpreadRate"),
                     writes=("vCrownFireActiveRatio",)),
        FunctionNode("fCrownFireActiveCrown", crown_active_crown,
                     reads=("vCrownFireActiveRatio",), writes=("vCrownFireActiveCrown",)),
        FunctionNode("fCrownFireType", crown_fire_type,
                     reads=("vCrownFireActiveRatio", "vCrownFireTransRatio"),
                     writes=("vCrownFireType",)),
        FunctionNode("fCrownFireFuelLoad", crown_fuel_load,
                     reads=("vTreeCanopyBulkDens", "vTreeCoverHt", "vTreeCrownBaseHt"),
                     writes=("vCrownFireFuelLoad",)),
        FunctionNode("fCrownFireHeatPerUnitAreaCanopy", crown_heat_per_unit_area_canopy,
                     reads=("vCrownFireFuelLoad",), writes=("vCrownFireHeatPerUnitAreaCanopy",)),
        FunctionNode("fCrownFireHeatPerUnitArea", crown_heat_per_unit_area,
                     reads=("vCrownFireHeatPerUnitAreaCanopy", "vSurfaceFireHeatPerUnitArea"),
                     writes=("vCrownFireHeatPerUnitArea",)),
        FunctionNode("fCrownFireLineInt", crown_line_int,
                     reads=("vCrownFireHeatPerUnitArea", "vCrownFireSpreadRate"),
                     writes=("vCrownFireLineInt",)),
        FunctionNode("fCrownFireFlameLeng", crown_flame_leng,
                     reads=("vCrownFireLineInt",), writes=("vCrownFireFlameLeng",)),
        FunctionNode("fCrownFireLengthToWidth", crown_length_to_width,
                     reads=("vWindSpeedAt20Ft",), writes=("vCrownFireLengthToWidth",)),
        FunctionNode("fCrownFireSpreadDist", crown_spread_dist,
                     reads=("vCrownFireSpreadRate", "vSurfaceFireElapsedTime"),
                     writes=("vCrownFireSpreadDist",)),
        FunctionNode("fCrownFireSpreadMapDist", crown_spread_map_dist,
                     reads=("vCrownFireSpreadDist", "vMapScale"),
                     writes=("vCrownFireSpreadMapDist",)),
        FunctionNode("fCrownFireArea", crown_area,
                     reads=("vCrownFireSpreadDist", "vCrownFireLengthToWidth"),
                     writes=("vCrownFireArea",)),
        FunctionNode("fCrownFirePerimeter", crown_perimeter,
                     reads=("vCrownFireSpreadDist", "vCrownFireLengthToWidth"),
                     writes=("vCrownFirePerimeter",)),
        FunctionNode("fCrownFirePowerOfFire", crown_power_of_fire,
                     reads=("vCrownFireLineInt",), writes=("vCrownFirePowerOfFire",)),
        FunctionNode("fCrownFirePowerOfWind", crown_power_of_wind,
                     reads=("vCrownFireSpreadRate", "vWindSpeedAt20Ft"),
                     writes=("vCrownFirePowerOfWind",)),
        FunctionNode("fCrownFirePowerRatio", crown_power_ratio,
                     reads=("vCrownFirePowerOfFire", "vCrownFirePowerOfWind"),
                     writes=("vCrownFirePowerRatio",)),
        FunctionNode("fCrownFireWindDriven", crown_wind_driven,
                     reads=("vCrownFirePowerRatio",), writes=("vCrownFireWindDriven",)),
    ]
