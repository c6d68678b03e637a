"""Weather indices computed from dry bulb, wet bulb and dew point
temperatures. Temperatures are degrees Fahrenheit, humidity is percent.
"""

import numpy as np

from firecalc.utilities.unit_conversions import F_to_C, C_to_F


def calc_dew_point(dry_bulb: float, wet_bulb: float, elevation: float) -> float:
    """Dew point temperature (oF) from a psychrometer reading.

    Args:
        dry_bulb (float): dry bulb temperature (oF)
        wet_bulb (float): wet bulb temperature (oF)
        elevation (float): site elevation (ft)
    """
    db = F_to_C(dry_bulb)
    wb = F_to_C(wet_bulb)
    if wb >= db:
        return dry_bulb

    if wb < 0.:
        e2 = 6.1115 * np.exp(22.452 * wb / (272.55 + wb))
    else:
        e2 = 6.1121 * np.exp(17.502 * wb / (240.97 + wb))

    pressure = 1013. * np.exp(-0.0000375 * elevation)
    d = 0.66 * (1. + 0.00115 * wb) * (db - wb)
    e3 = max(e2 - d * pressure / 1000., 0.001)

    dew = -240.97 / (1. - 17.502 / np.log(e3 / 6.1121))
    return C_to_F(float(max(dew, -40.)))


def calc_relative_humidity(dry_bulb: float, dew_point: float) -> float:
    """Relative humidity (%) from air and dew point temperatures (oF)."""
    if dew_point >= dry_bulb:
        return 100.
    return float(100. * np.exp(-7469. / (dew_point + 398.) + 7469. / (dry_bulb + 398.)))


def calc_cumulus_base_ht(dry_bulb: float, dew_point: float) -> float:
    """Height (ft) of the cumulus cloud base above the site."""
    return 222. * max(0., dry_bulb - dew_point)


def calc_heat_index(dry_bulb: float, rh: float) -> float:
    """National Weather Service heat index (Rothfusz regression)."""
    t = dry_bulb
    return (-42.379 + 2.04901523 * t + 10.14333127 * rh - 0.22475541 * t * rh
            - 6.83783e-3 * t * t - 5.481717e-2 * rh * rh + 1.22874e-3 * t * t * rh
            + 8.5282e-4 * t * rh * rh - 1.99e-6 * t * t * rh * rh)


def calc_summer_simmer_index(dry_bulb: float, rh: float) -> float:
    return 1.98 * (dry_bulb - (0.55 - 0.0055 * rh) * (dry_bulb - 58.)) - 56.83


def calc_wind_chill(dry_bulb: float, wind_speed: float) -> float:
    """National Weather Service (2001) wind chill temperature (oF).

    Args:
        dry_bulb (float): air temperature (oF)
        wind_speed (float): wind speed (mi/h)
    """
    v = max(0., wind_speed) ** 0.16
    return 35.74 + 0.6215 * dry_bulb - 35.75 * v + 0.4275 * dry_bulb * v
