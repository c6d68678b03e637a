"""Core building blocks of the worksheet computation graph.

Classes:
    - ValueCell: Base of the continuous, discrete and text value cells.
    - FunctionNode: Named computation with declared read and write sets.
    - ComputationGraph: Owns every cell and function; plans and evaluates.
    - ConfigurationState: Activation and visibility flags from one reconfiguration.

.. autoclass:: firecalc.base_classes.graph.ComputationGraph
    :members:

.. autoclass:: firecalc.base_classes.graph.ConfigurationState
    :members:
"""

from firecalc.base_classes.value_cell import ValueCell, ContinuousCell, DiscreteCell, TextCell
from firecalc.base_classes.function_node import FunctionNode
from firecalc.base_classes.graph import ComputationGraph, ConfigurationState, EvaluationPlan

__all__ = [
    "ValueCell",
    "ContinuousCell",
    "DiscreteCell",
    "TextCell",
    "FunctionNode",
    "ComputationGraph",
    "ConfigurationState",
    "EvaluationPlan",
]
