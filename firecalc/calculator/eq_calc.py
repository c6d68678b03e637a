"""Worksheet calculator facade.

:class:`EqCalc` owns one computation graph built from the static cell
declarations and the function catalog, a configuration property map and an
optional trace sink. Function procedures receive the EqCalc instance and use
its ``get``/``set`` accessors to read and write cells.

Typical use:

    >>> calc = EqCalc(PropertyDict({"surfaceCalcFireFlameLeng": True}))
    >>> calc.reconfigure()
    >>> calc.set_text("vSurfaceFuelBedModel", "FM4")
    >>> calc.set("vWindSpeedAtMidflame", 5.)
    >>> calc.evaluate()
    >>> calc.get("vSurfaceFireSpreadAtHead")
"""

from typing import Dict, Iterable, List, Optional, Union

from firecalc.base_classes.graph import ComputationGraph, ConfigurationState, EvaluationPlan
from firecalc.base_classes.value_cell import DiscreteCell, TextCell, ValueCell
from firecalc.calculator import compositor, reconfig
from firecalc.calculator.declarations import build_cells
from firecalc.calculator.functions import build_functions
from firecalc.exceptions import ConfigurationError, ValidationError
from firecalc.utilities.config import PropertyDict
from firecalc.utilities.logger import TraceSink

CellValue = Union[float, int, str]


def build_graph() -> ComputationGraph:
    """Creates a graph holding every declared cell and function."""
    return ComputationGraph(build_cells(), build_functions() + compositor.functions())


class EqCalc:
    """Configuration-driven worksheet calculator.

    Args:
        prop (PropertyDict, optional): configuration properties; defaults to
            the built-in defaults
        sink (TraceSink, optional): receives a trace of every evaluation
    """
    def __init__(self, prop: Optional[PropertyDict] = None, sink: Optional[TraceSink] = None):
        self.prop = prop if prop is not None else PropertyDict()
        self.sink = sink
        self.graph = build_graph()
        self._last_plan: Optional[EvaluationPlan] = None

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def cell(self, name: str) -> ValueCell:
        return self.graph.cell(name)

    def get(self, name: str) -> CellValue:
        """Current value of a cell.

        Continuous cells give a float in native units, discrete cells the
        item index and text cells their text.
        """
        return self.graph.cell(name).value

    def set(self, name: str, value: CellValue):
        self.graph.cell(name).update(value)

    def item(self, name: str) -> str:
        return self.graph.discrete(name).item

    def set_item(self, name: str, item_name: str):
        self.graph.discrete(name).set_item(item_name)

    def text(self, name: str) -> str:
        cell = self.graph.cell(name)
        if not isinstance(cell, TextCell):
            raise ValidationError("Value cell does not hold text", name)
        return cell.value

    def set_text(self, name: str, text: str):
        cell = self.graph.cell(name)
        if not isinstance(cell, TextCell):
            raise ValidationError("Value cell does not hold text", name, text)
        cell.update(text)

    def set_inputs(self, values: Dict[str, CellValue]):
        """Sets several cells at once; discrete cells accept an item name."""
        for name, val in values.items():
            cell = self.graph.cell(name)
            if isinstance(cell, DiscreteCell) and isinstance(val, str):
                cell.set_item(val)
            else:
                cell.update(val)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def state(self) -> ConfigurationState:
        return self.graph.state

    def set_properties(self, prop: PropertyDict):
        self.prop = prop

    def reconfigure(self) -> ConfigurationState:
        """Re-derives every flag from the current properties and installs it.

        Raises:
            ConfigurationError: if a rule cannot be resolved
            SimulationError: if called during another pass
        """
        with self.graph.exclusive("reconfigure"):
            state = reconfig.reconfigure(self.graph, self.prop)
            self.graph.apply_state(state)
        self._last_plan = None
        return state

    def is_active(self, name: str) -> bool:
        return self.graph.is_active(name)

    def is_output(self, name: str) -> bool:
        self.graph.cell(name)
        return self.graph.state.is_user_output[name]

    def is_constant(self, name: str) -> bool:
        self.graph.cell(name)
        return self.graph.state.is_constant[name]

    def show_init_from_fuel_model_button(self) -> bool:
        return reconfig.show_init_from_fuel_model_button(self.graph.state)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def plan(self, outputs: Optional[Iterable[str]] = None) -> EvaluationPlan:
        return self.graph.plan(self.prop, outputs)

    def input_names(self, outputs: Optional[Iterable[str]] = None) -> List[str]:
        return self.plan(outputs).inputs

    def output_names(self) -> List[str]:
        return self.graph.state.outputs()

    def evaluate(self, outputs: Optional[Iterable[str]] = None) -> EvaluationPlan:
        """Runs the active functions needed for the outputs.

        Args:
            outputs (Iterable[str], optional): cells to produce; defaults to
                every cell flagged as a user output

        Raises:
            ConfigurationError: on an unresolvable plan or a bad input value
            SimulationError: if called during another pass

        Returns:
            EvaluationPlan: the executed plan
        """
        self._last_plan = self.graph.evaluate(self, self.prop, outputs, self.sink)
        return self._last_plan

    def results(self) -> Dict[str, CellValue]:
        """Output values of the last evaluation, discrete cells by item name."""
        if self._last_plan is None:
            raise ConfigurationError("No evaluation has been run since the last reconfiguration")

        out = {}
        for name in self._last_plan.outputs:
            cell = self.graph.cell(name)
            out[name] = cell.item if isinstance(cell, DiscreteCell) else cell.value
        return out
