"""Elliptical fire size after the elapsed time, and the map distances of
the spread distances.
"""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.models import rothermel
from firecalc.models.site import calc_map_distance
from firecalc.utilities.unit_conversions import ft2_to_ac


def _spread_dist(rate_cell: str, dist_cell: str):
    def procedure(calc):
        calc.set(dist_cell, calc.get(rate_cell) * calc.get("vSurfaceFireElapsedTime"))
    return procedure


def _map_dist(dist_cell: str, map_cell: str):
    def procedure(calc):
        calc.set(map_cell, calc_map_distance(calc.get(dist_cell), calc.get("vMapScale")))
    return procedure


def fire_leng_dist(calc):
    calc.set("vSurfaceFireLengDist",
             calc.get("vSurfaceFireDistAtHead") + calc.get("vSurfaceFireDistAtBack"))


def fire_width_dist(calc):
    calc.set("vSurfaceFireWidthDist",
             rothermel.calc_fire_width(calc.get("vSurfaceFireLengDist"),
                                       calc.get("vSurfaceFireLengthToWidth")))


def fire_area(calc):
    area = rothermel.calc_fire_area(calc.get("vSurfaceFireLengDist"),
                                    calc.get("vSurfaceFireWidthDist"))
    calc.set("vSurfaceFireArea", ft2_to_ac(area))


def fire_perimeter(calc):
    calc.set("vSurfaceFirePerimeter",
             rothermel.calc_fire_perimeter(calc.get("vSurfaceFireLengDist"),
                                           calc.get("vSurfaceFireWidthDist")))


_SPREAD_DISTS = (
    ("fSurfaceFireDistAtHead", "vSurfaceFireSpreadAtHead", "vSurfaceFireDistAtHead"),
    ("fSurfaceFireDistAtBack", "vSurfaceFireSpreadAtBack", "vSurfaceFireDistAtBack"),
    ("fSurfaceFireDistAtVector", "vSurfaceFireSpreadAtVector", "vSurfaceFireDistAtVector"),
)

_MAP_DISTS = (
    ("fSurfaceFireMapDistAtHead", "vSurfaceFireDistAtHead", "vSurfaceFireMapDistAtHead"),
    ("fSurfaceFireMapDistAtBack", "vSurfaceFireDistAtBack", "vSurfaceFireMapDistAtBack"),
    ("fSurfaceFireMapDistAtVector", "vSurfaceFireDistAtVector", "vSurfaceFireMapDistAtVector"),
    ("fSurfaceFireLengMapDist", "vSurfaceFireLengDist", "vSurfaceFireLengMapDist"),
    ("fSurfaceFireWidthMapDist", "vSurfaceFireWidthDist", "vSurfaceFireWidthMapDist"),
)


def functions() -> List[FunctionNode]:
    nodes = [
        FunctionNode(name, _spread_dist(rate, dist),
                     reads=("vSurfaceFireElapsedTime", rate), writes=(dist,))
        for name, rate, dist in _SPREAD_DISTS
    ]
    nodes += [
        FunctionNode(name, _map_dist(dist, map_cell),
                     reads=(dist, "vMapScale"), writes=(map_cell,))
        for name, dist, map_cell in _MAP_DISTS
    ]
    nodes += [
        FunctionNode("fSurfaceFireLengDist", fire_leng_dist,
                     reads=("vSurfaceFireDistAtHead", "vSurfaceFireDistAtBack"),
                     writes=("vSurfaceFireLengDist",)),
        FunctionNode("fSurfaceFireWidthDist", fire_width_dist,
                     reads=("vSurfaceFireLengDist", "vSurfaceFireLengthToWidth"),
                     writes=("vSurfaceFireWidthDist",)),
        FunctionNode("fSurfaceFireArea", fire_area,
                     reads=("vSurfaceFireLengDist", "vSurfaceFireWidthDist"),
                     writes=("vSurfaceFireArea",)),
        FunctionNode("fSurfaceFirePerimeter", fire_perimeter,
                     reads=("vSurfaceFireLengDist", "vSurfaceFireWidthDist"),
                     writes=("vSurfaceFirePerimeter",)),
    ]
    return nodes
