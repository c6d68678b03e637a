"""Worksheet calculator: cell declarations, function catalog, reconfiguration
rules, two fuel model compositor and the EqCalc facade.

.. autoclass:: firecalc.calculator.eq_calc.EqCalc
    :members:
"""

from firecalc.calculator.eq_calc import EqCalc, build_graph

__all__ = ["EqCalc", "build_graph"]
