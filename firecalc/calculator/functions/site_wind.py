"""Site, map, wind and calendar functions."""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.models import site, wind


def map_scale(calc):
    calc.set("vMapScale", site.calc_map_scale(calc.get("vMapFraction")))


def map_slope(calc):
    degrees, rise, reach = site.calc_map_slope(calc.get("vMapContourInterval"),
                                               calc.get("vMapContourCount"),
                                               calc.get("vMapFraction"),
                                               calc.get("vMapDist"))
    calc.set("vSiteSlopeDegrees", degrees)
    calc.set("vSiteSlopeRise", rise)
    calc.set("vSiteSlopeReach", reach)


def site_slope_fraction(calc):
    calc.set("vSiteSlopeFraction", site.calc_slope_fraction(calc.get("vSiteSlopeDegrees")))


def site_aspect_dir_from_north(calc):
    calc.set("vSiteAspectDirFromNorth",
             site.compass_to_degrees(calc.get("vSiteAspectDirFromCompass")))


def site_upslope_dir_from_north(calc):
    calc.set("vSiteUpslopeDirFromNorth",
             site.calc_upslope_dir(calc.get("vSiteAspectDirFromNorth")))


def site_ridge_to_valley_dist(calc):
    calc.set("vSiteRidgeToValleyDist",
             site.calc_ridge_to_valley_dist(calc.get("vSiteRidgeToValleyMapDist"),
                                            calc.get("vMapScale")))


def time_julian_date(calc):
    calc.set("vTimeJulianDate", site.calc_julian_date(calc.get("vTimeIntegerDate")))


def wind_adj_factor(calc):
    adj = wind.calc_wind_adj_factor(calc.get("vTreeCanopyCover"), calc.get("vTreeCoverHt"),
                                    calc.get("vTreeCrownRatio"), calc.get("vSurfaceFuelBedDepth"))
    calc.set("vWindAdjFactor", adj.factor)
    calc.set("vWindAdjMethod", adj.method)
    calc.set("vTreeCanopyCrownFraction", adj.crown_fill)


def wind_dir_from_north(calc):
    calc.set("vWindDirFromNorth", site.compass_to_degrees(calc.get("vWindDirFromCompass")))


def wind_dir_from_upslope(calc):
    deg = calc.get("vWindDirFromNorth") - calc.get("vSiteUpslopeDirFromNorth")
    if deg < 0.:
        deg += 360.
    calc.set("vWindDirFromUpslope", deg)


def wind_speed_at_20ft(calc):
    calc.set("vWindSpeedAt20Ft", wind.calc_wind_speed_at_20ft(calc.get("vWindSpeedAt10M")))


def wind_speed_at_midflame(calc):
    calc.set("vWindSpeedAtMidflame",
             wind.calc_midflame_wind_speed(calc.get("vWindSpeedAt20Ft"),
                                           calc.get("vWindAdjFactor")))


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fMapScale", map_scale, reads=("vMapFraction",), writes=("vMapScale",)),
        FunctionNode("fMapSlope", map_slope,
                     reads=("vMapFraction", "vMapContourCount", "vMapContourInterval",
                            "vMapDist"),
                     writes=("vSiteSlopeDegrees", "vSiteSlopeRise", "vSiteSlopeReach")),
        FunctionNode("fSiteSlopeFraction", site_slope_fraction,
                     reads=("vSiteSlopeDegrees",), writes=("vSiteSlopeFraction",)),
        FunctionNode("fSiteAspectDirFromNorth", site_aspect_dir_from_north,
                     reads=("vSiteAspectDirFromCompass",), writes=("vSiteAspectDirFromNorth",)),
        FunctionNode("fSiteUpslopeDirFromNorth", site_upslope_dir_from_north,
                     reads=("vSiteAspectDirFromNorth",), writes=("vSiteUpslopeDirFromNorth",)),
        FunctionNode("fSiteRidgeToValleyDist", site_ridge_to_valley_dist,
                     reads=("vSiteRidgeToValleyMapDist", "vMapScale"),
                     writes=("vSiteRidgeToValleyDist",)),
        FunctionNode("fTimeJulianDate", time_julian_date,
                     reads=("vTimeIntegerDate",), writes=("vTimeJulianDate",)),
        FunctionNode("fWindAdjFactor", wind_adj_factor,
                     reads=("vTreeCanopyCover", "vTreeCoverHt", "vTreeCrownRatio",
                            "vSurfaceFuelBedDepth"),
                     writes=("vTreeCanopyCrownFraction", "vWindAdjFactor", "vWindAdjMethod")),
        FunctionNode("fWindDirFromNorth", wind_dir_from_north,
                     reads=("vWindDirFromCompass",), writes=("vWindDirFromNorth",)),
        FunctionNode("fWindDirFromUpslope", wind_dir_from_upslope,
                     reads=("vSiteUpslopeDirFromNorth", "vWindDirFromNorth"),
                     writes=("vWindDirFromUpslope",)),
        FunctionNode("fWindSpeedAt20Ft", wind_speed_at_20ft,
                     reads=("vWindSpeedAt10M",), writes=("vWindSpeedAt20Ft",)),
        FunctionNode("fWindSpeedAtMidflame", wind_speed_at_midflame,
                     reads=("vWindSpeedAt20Ft", "vWindAdjFactor"),
                     writes=("vWindSpeedAtMidflame",)),
    ]
