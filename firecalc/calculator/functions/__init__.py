"""Function node procedures, one module per worksheet module.

:func:`build_functions` collects every node declared here in a fixed order;
the order is the tie-breaker used when the graph sorts independent functions.
"""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.calculator.functions import (contain, crown, ignition, safety, site_wind, size,
                                           spot, surface_fire, surface_fuel, tree, weather)

MODULES = (site_wind, surface_fuel, surface_fire, size, crown, contain, spot, tree, ignition,
           weather, safety)


def build_functions() -> List[FunctionNode]:
    nodes: List[FunctionNode] = []
    for module in MODULES:
        nodes.extend(module.functions())
    return nodes


__all__ = ["MODULES", "build_functions"]
