"""This module contains functions for unit conversions"""

def F_to_C(f_f: float) -> float:
    """Converts from Fahrenheit to Celsius

    Args:
        f_f (float): Fahrenheit

    Returns:
        _type_: float
    """
    g = 5 / 9
    h = 32
    c = g * (f_f - h)

    return c

def C_to_F(f_c: float) -> float:
    """Converts from Celsius to Fahrenheit

    Args:
        f_c (float): Celsius

    Returns:
        _type_: float
    """
    return f_c * 9 / 5 + 32

def m_to_ft(f_m: float) -> float:
    """Converts from meters to feet

    Args:
        f_m (float): meters

    Returns:
        _type_: float
    """
    g = 3.28084
    f = f_m * g

    return f

def ft_to_m(f_ft: float) -> float:
    """Converts from feet to meters

    Args:
        f_ft (float): feet
    Returns:
        _type_: float
    """
    g = 1 / m_to_ft(1)
    f = f_ft * g

    return f

def mph_to_ft_min(f_mph: float) -> float:
    """Converts from miles per hour to ft/min

    Args:
        f_mph (float): mi/h

    Returns:
        float: ft/min
    """
    return f_mph * 88.0

def ft_min_to_mph(f_ft_min: float) -> float:
    """Converts from ft/min to miles per hour

    Args:
        f_ft_min (float): ft/min

    Returns:
        float: mi/h
    """
    return f_ft_min / 88.0

def ft_min_to_ch_h(f_ft_min: float) -> float:
    """Converts from ft/min to chains per hour (1 chain = 66 ft)

    Args:
        f_ft_min (float): ft/min

    Returns:
        float: ch/h
    """
    return f_ft_min * 60. / 66.

def ft_to_mi(f_ft: float) -> float:
    return f_ft / 5280.

def mi_to_ft(f_mi: float) -> float:
    return f_mi * 5280.

def ft2_to_ac(f_ft2: float) -> float:
    """Converts from square feet to acres

    Args:
        f_ft2 (float): ft^2

    Returns:
        float: acres
    """
    return f_ft2 / 43560.

def ch2_to_ac(f_ch2: float) -> float:
    """Converts square chains to acres (10 ch^2 per acre)"""
    return f_ch2 * 0.1

def ac_to_ch2(f_ac: float) -> float:
    return f_ac * 10.

def TPA_to_Lbsft2(f_tpa: float) -> float:
    """Converts from tons/acre to lbs/ft^2

    Args:
        f_tpa (float): tons/acre

    Returns:
        float: lbs/ft^2
    """
    g = 2000 / 43560
    f = f_tpa * g
    return f

def Lbsft2_to_TPA(f_lbsft2: float) -> float:
    g = 1 / TPA_to_Lbsft2(1)
    f = f_lbsft2 * g
    return f

def BTU_ft_s_to_kW_m(f_btu_ft_s: float) -> float:
    """Converts fireline intensity from Btu/ft/s to kW/m

    Args:
        f_btu_ft_s (float): Btu/ft/s

    Returns:
        float: kW/m
    """
    g = 3.46414
    f = f_btu_ft_s * g
    return f

def kW_m_to_BTU_ft_s(f_kw_m: float) -> float:
    g = 1 / BTU_ft_s_to_kW_m(1)
    f = f_kw_m * g
    return f


# Display conversions keyed by (native units, display units). The factor is
# applied as display = native * factor + offset.
_DISPLAY_FACTORS = {
    ("ft", "m"): (0.3048, 0.),
    ("ft", "ch"): (1. / 66., 0.),
    ("ft", "mi"): (1. / 5280., 0.),
    ("mi", "km"): (1.609344, 0.),
    ("mi", "ft"): (5280., 0.),
    ("ch", "m"): (20.1168, 0.),
    ("ch", "ft"): (66., 0.),
    ("ft/min", "ch/h"): (60. / 66., 0.),
    ("ft/min", "m/min"): (0.3048, 0.),
    ("ft/min", "mi/h"): (1. / 88., 0.),
    ("mi/h", "km/h"): (1.609344, 0.),
    ("mi/h", "ft/min"): (88., 0.),
    ("ch/h", "m/min"): (20.1168 / 60., 0.),
    ("ac", "ha"): (0.40468564, 0.),
    ("ac", "ft2"): (43560., 0.),
    ("ft2", "m2"): (0.09290304, 0.),
    ("in", "cm"): (2.54, 0.),
    ("in", "mm"): (25.4, 0.),
    ("lb/ft2", "ton/ac"): (43560. / 2000., 0.),
    ("lb/ft2", "kg/m2"): (4.88243, 0.),
    ("lb/ft3", "kg/m3"): (16.0185, 0.),
    ("Btu/ft/s", "kW/m"): (3.46414, 0.),
    ("Btu/ft2", "kJ/m2"): (11.3566, 0.),
    ("Btu/ft2/min", "kW/m2"): (0.189276, 0.),
    ("Btu/lb", "kJ/kg"): (2.326, 0.),
    ("fraction", "%"): (100., 0.),
    ("oF", "oC"): (5. / 9., -160. / 9.),
    ("min", "h"): (1. / 60., 0.),
}

def display_factor(native: str, display: str):
    """Returns the (factor, offset) pair converting native to display units.

    Args:
        native (str): native unit label
        display (str): display unit label

    Raises:
        KeyError: if no conversion between the two labels is known

    Returns:
        Tuple[float, float]: factor and offset
    """
    if native == display:
        return 1., 0.

    if (native, display) in _DISPLAY_FACTORS:
        return _DISPLAY_FACTORS[(native, display)]

    if (display, native) in _DISPLAY_FACTORS:
        factor, offset = _DISPLAY_FACTORS[(display, native)]
        return 1. / factor, -offset / factor

    raise KeyError(f"No conversion from '{native}' to '{display}'")

def native_to_display(value: float, native: str, display: str) -> float:
    factor, offset = display_factor(native, display)
    return value * factor + offset

def display_to_native(value: float, native: str, display: str) -> float:
    factor, offset = display_factor(native, display)
    return (value - offset) / factor
