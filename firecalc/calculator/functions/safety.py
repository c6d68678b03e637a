"""Safety zone separation distance and size (Butler and Cohen 1998)."""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.models import safety


def safety_zone_sep_dist(calc):
    calc.set("vSafetyZoneSepDist",
             safety.calc_separation_distance(calc.get("vSurfaceFireFlameLengAtHead")))


def safety_zone_radius(calc):
    radius = safety.calc_safety_zone_radius(calc.get("vSafetyZoneSepDist"),
                                            calc.get("vSafetyZonePersonnelNumber"),
                                            calc.get("vSafetyZonePersonnelArea"),
                                            calc.get("vSafetyZoneEquipmentNumber"),
                                            calc.get("vSafetyZoneEquipmentArea"))
    calc.set("vSafetyZoneRadius", radius)
    calc.set("vSafetyZoneSize", safety.calc_safety_zone_size(radius))


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fSafetyZoneSepDist", safety_zone_sep_dist,
                     reads=("vSurfaceFireFlameLengAtHead",), writes=("vSafetyZoneSepDist",)),
        FunctionNode("fSafetyZoneRadius", safety_zone_radius,
                     reads=("vSafetyZoneSepDist", "vSafetyZoneEquipmentArea",
                            "vSafetyZoneEquipmentNumber", "vSafetyZonePersonnelArea",
                            "vSafetyZonePersonnelNumber"),
                     writes=("vSafetyZoneRadius", "vSafetyZoneSize")),
    ]
