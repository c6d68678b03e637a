"""Safety zone size (Butler and Cohen 1998): personnel stay four flame
lengths from the flames, plus the space occupied by people and equipment.
"""

import numpy as np

from firecalc.utilities.unit_conversions import ft2_to_ac


def calc_separation_distance(flame_length: float) -> float:
    return 4. * flame_length


def calc_safety_zone_radius(sep_dist: float, personnel_number: float, personnel_area: float,
                            equipment_number: float, equipment_area: float) -> float:
    """Safety zone radius (ft) around the occupied core."""
    core = personnel_number * personnel_area + equipment_number * equipment_area
    return sep_dist + float(np.sqrt(core / np.pi))


def calc_safety_zone_size(radius: float) -> float:
    """Safety zone area (ac)."""
    return ft2_to_ac(np.pi * radius * radius)
