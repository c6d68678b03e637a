"""Site, map and calendar helpers.

Map scales are carried as map inches per real mile. A map fraction of
1:24000 therefore has a scale of 63360 / 24000 = 2.64 in/mi.
"""

import datetime
import math
from typing import Tuple

from firecalc.exceptions import ConfigurationError
from firecalc.utilities.fire_util import SMIDGEN, COMPASS_POINTS, wrap_degrees

_INCHES_PER_MILE = 63360.

_MJD_EPOCH = datetime.date(1858, 11, 17)


def calc_map_scale(map_fraction: float) -> float:
    """Map inches per mile from the representative fraction denominator."""
    if map_fraction < SMIDGEN:
        return 0.
    return _INCHES_PER_MILE / map_fraction


def calc_map_distance(dist_ft: float, map_scale: float) -> float:
    """Map inches corresponding to a ground distance in feet."""
    return map_scale * dist_ft / 5280.


def calc_map_slope(contour_interval: float, contour_count: float, map_fraction: float,
                   map_dist: float) -> Tuple[float, float, float]:
    """Slope measured between contour lines on a map.

    Args:
        contour_interval (float): elevation between contours (ft)
        contour_count (float): number of contour intervals crossed
        map_fraction (float): representative fraction denominator
        map_dist (float): horizontal map distance measured (in)

    Returns:
        Tuple[float, float, float]: slope degrees, rise (ft), reach (ft)
    """
    rise = contour_interval * contour_count
    reach = map_dist * map_fraction / 12.
    if reach < SMIDGEN:
        return 0., rise, reach
    return math.degrees(math.atan(rise / reach)), rise, reach


def calc_slope_fraction(slope_degrees: float) -> float:
    return math.tan(math.radians(slope_degrees))


def calc_slope_degrees(slope_fraction: float) -> float:
    return math.degrees(math.atan(slope_fraction))


def compass_to_degrees(index: int) -> float:
    """Azimuth of one of the sixteen compass points.

    Raises:
        ConfigurationError: if the index is outside 0..15
    """
    if index < 0 or index >= len(COMPASS_POINTS):
        raise ConfigurationError(f"Compass point index {index} outside 0..15")
    return 22.5 * index


def calc_upslope_dir(aspect: float) -> float:
    """Upslope direction is opposite the aspect (downslope) direction."""
    return wrap_degrees(aspect + 180.)


def calc_ridge_to_valley_dist(map_dist: float, map_scale: float) -> float:
    """Ridge to valley horizontal distance (mi) from a map measurement (in)."""
    if map_scale < SMIDGEN:
        return 0.
    return map_dist / map_scale


def calc_julian_date(integer_date: float) -> float:
    """Modified Julian date of a YYYYMMDD.fff calendar date.

    The fractional part is the elapsed fraction of the day.

    Raises:
        ConfigurationError: if the integer part is not a valid calendar date
    """
    whole = int(math.floor(integer_date))
    frac = integer_date - whole
    year, rest = divmod(whole, 10000)
    month, day = divmod(rest, 100)
    try:
        date = datetime.date(year, month, day)
    except ValueError as e:
        raise ConfigurationError(f"Invalid calendar date {whole}: {e}",
                                 parameter="vTimeIntegerDate") from e

    hours = frac * 24.
    stamp = datetime.datetime.combine(date, datetime.time()) + datetime.timedelta(hours=hours)
    delta = stamp - datetime.datetime.combine(_MJD_EPOCH, datetime.time())
    return delta.total_seconds() / 86400.
