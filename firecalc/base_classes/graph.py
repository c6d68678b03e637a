"""Computation graph owning every value cell and function node.

The graph resolves names to handles, holds the single
:class:`ConfigurationState` record produced by the most recent
reconfiguration, and evaluates the active functions needed for the requested
outputs in dependency order.

Evaluation works backwards from the output cells: each needed cell either is
constant, has exactly one active writer (whose reads become needed in turn),
or becomes a user input. The needed writers are then ordered with a
topological sort over their declared read/write sets.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from firecalc.base_classes.function_node import FunctionNode
from firecalc.base_classes.value_cell import ValueCell, DiscreteCell
from firecalc.exceptions import ConfigurationError, SimulationError
from firecalc.utilities.config import PropertyDict
from firecalc.utilities.logger import TraceSink
from firecalc.utilities.logger_schemas import TraceEntry


@dataclass
class ConfigurationState:
    """Every activation and visibility flag of the graph in one record.

    A reconfiguration starts from :meth:`ComputationGraph.default_state` and
    edits a fresh copy, so no flag survives from a previous configuration.
    ``is_user_input`` holds only the flags a rule pinned explicitly; all
    other inputs are derived during planning.
    """
    function_active: Dict[str, bool]
    is_constant: Dict[str, bool]
    is_user_output: Dict[str, bool]
    is_user_input: Dict[str, bool] = field(default_factory=dict)
    constant_values: Dict[str, Union[float, int]] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)

    def _check_function(self, name: str):
        if name not in self.function_active:
            raise ConfigurationError("Unknown function", parameter=name)

    def _check_cell(self, name: str):
        if name not in self.is_constant:
            raise ConfigurationError("Unknown value cell", parameter=name)

    def activate(self, name: str, flag: bool = True):
        self._check_function(name)
        self.function_active[name] = bool(flag)

    def deactivate(self, name: str):
        self.activate(name, False)

    def output(self, name: str, flag: bool = True):
        self._check_cell(name)
        self.is_user_output[name] = bool(flag)

    def user_input(self, name: str, flag: bool = True):
        self._check_cell(name)
        self.is_user_input[name] = bool(flag)

    def constant(self, name: str, flag: bool = True, value: Union[float, int, None] = None):
        """Marks a cell constant (or not), optionally pinning its value."""
        self._check_cell(name)
        self.is_constant[name] = bool(flag)
        if flag and value is not None:
            self.constant_values[name] = value
        elif not flag:
            self.constant_values.pop(name, None)

    def label(self, name: str, text: str):
        self._check_cell(name)
        self.labels[name] = text

    def active_functions(self) -> List[str]:
        return [n for n, f in self.function_active.items() if f]

    def outputs(self) -> List[str]:
        return [n for n, f in self.is_user_output.items() if f]

    def copy(self) -> "ConfigurationState":
        return ConfigurationState(
            function_active=dict(self.function_active),
            is_constant=dict(self.is_constant),
            is_user_output=dict(self.is_user_output),
            is_user_input=dict(self.is_user_input),
            constant_values=dict(self.constant_values),
            labels=dict(self.labels),
        )


@dataclass
class EvaluationPlan:
    functions: List[FunctionNode]
    inputs: List[str]
    outputs: List[str]

    @property
    def function_names(self) -> List[str]:
        return [f.name for f in self.functions]


class ComputationGraph:
    """Owns all value cells and function nodes.

    Args:
        cells (Iterable[ValueCell]): every cell, created once
        functions (Iterable[FunctionNode]): every function, created once
        default_active (Iterable[str]): functions active before any module
            procedure runs

    Raises:
        ConfigurationError: on duplicate names or a function declaring an
            unknown cell
    """
    def __init__(self, cells: Iterable[ValueCell], functions: Iterable[FunctionNode],
                 default_active: Iterable[str] = ()):
        self._cells: Dict[str, ValueCell] = {}
        for cell in cells:
            if cell.name in self._cells:
                raise ConfigurationError("Duplicate value cell", parameter=cell.name)
            self._cells[cell.name] = cell

        self._functions: Dict[str, FunctionNode] = {}
        for func in functions:
            if func.name in self._functions:
                raise ConfigurationError("Duplicate function", parameter=func.name)
            for name in func.all_names():
                if name not in self._cells:
                    raise ConfigurationError(
                        f"Function {func.name} declares an unknown value cell", parameter=name
                    )
            self._functions[func.name] = func

        self._default_active = tuple(default_active)
        for name in self._default_active:
            self.function(name)

        self._state = self.default_state()
        self._busy = False
        self._current_step: Optional[str] = None

    # ------------------------------------------------------------------
    # Name resolution
    # ------------------------------------------------------------------

    @property
    def cells(self) -> Dict[str, ValueCell]:
        return self._cells

    @property
    def functions(self) -> Dict[str, FunctionNode]:
        return self._functions

    def cell(self, name: str) -> ValueCell:
        try:
            return self._cells[name]
        except KeyError:
            raise ConfigurationError("Unknown value cell", parameter=name) from None

    def function(self, name: str) -> FunctionNode:
        try:
            return self._functions[name]
        except KeyError:
            raise ConfigurationError("Unknown function", parameter=name) from None

    def discrete(self, name: str) -> DiscreteCell:
        cell = self.cell(name)
        if not isinstance(cell, DiscreteCell):
            raise ConfigurationError("Value cell is not discrete", parameter=name)
        return cell

    # ------------------------------------------------------------------
    # Configuration state
    # ------------------------------------------------------------------

    def default_state(self) -> ConfigurationState:
        return ConfigurationState(
            function_active={name: name in self._default_active for name in self._functions},
            is_constant={name: False for name in self._cells},
            is_user_output={name: False for name in self._cells},
        )

    @property
    def state(self) -> ConfigurationState:
        return self._state

    def apply_state(self, state: ConfigurationState):
        """Installs a configuration state and writes its constant values."""
        if set(state.function_active) != set(self._functions) \
                or set(state.is_constant) != set(self._cells):
            raise ConfigurationError("Configuration state does not match this graph")

        for name, val in state.constant_values.items():
            if state.is_constant.get(name):
                self._cells[name].update(val)

        self._state = state

    def is_active(self, name: str) -> bool:
        self.function(name)
        return self._state.function_active[name]

    @contextmanager
    def exclusive(self, step: Optional[str] = None):
        """Holds the graph for one reconfiguration or evaluation pass.

        Raises:
            SimulationError: if another pass already holds the graph
        """
        if self._busy:
            raise SimulationError("Recalculation already in progress", step=self._current_step)
        self._busy = True
        self._current_step = step
        try:
            yield self
        finally:
            self._busy = False
            self._current_step = None

    # ------------------------------------------------------------------
    # Planning and evaluation
    # ------------------------------------------------------------------

    def _active_writers(self, prop: PropertyDict) -> Dict[str, List[FunctionNode]]:
        writers: Dict[str, List[FunctionNode]] = {}
        for name, func in self._functions.items():
            if not self._state.function_active[name]:
                continue
            for cell_name in func.effective_writes(prop):
                self.cell(cell_name)
                writers.setdefault(cell_name, []).append(func)
        return writers

    def plan(self, prop: PropertyDict, outputs: Optional[Iterable[str]] = None) -> EvaluationPlan:
        """Finds and orders the active functions needed for the outputs.

        Args:
            prop (PropertyDict): configuration used to resolve
                configuration-dependent read/write sets
            outputs (Iterable[str], optional): cells to produce; defaults to
                every cell flagged as a user output

        Raises:
            ConfigurationError: on an unknown cell, two active writers of a
                needed cell, or a dependency cycle

        Returns:
            EvaluationPlan: ordered functions plus the derived input cells
        """
        state = self._state
        targets = list(outputs) if outputs is not None else state.outputs()
        writers = self._active_writers(prop)

        needed: Dict[str, FunctionNode] = {}
        inputs: List[str] = []
        visited = set()
        stack = list(reversed(targets))

        while stack:
            name = stack.pop()
            if name in visited:
                continue
            visited.add(name)
            self.cell(name)

            if state.is_constant[name]:
                continue

            cell_writers = writers.get(name, [])
            if len(cell_writers) > 1:
                names = ", ".join(w.name for w in cell_writers)
                raise ConfigurationError(f"Value cell has several active writers ({names})",
                                         parameter=name)

            if not cell_writers:
                if state.is_user_input.get(name, True):
                    inputs.append(name)
                continue

            func = cell_writers[0]
            if func.name not in needed:
                needed[func.name] = func
                stack.extend(reversed(func.effective_reads(prop)))

        for name, pinned in state.is_user_input.items():
            if pinned and name not in inputs and not state.is_constant[name]:
                inputs.append(name)

        ordered = self._topological_order(needed, prop)
        return EvaluationPlan(functions=ordered, inputs=inputs, outputs=targets)

    def _topological_order(self, needed: Dict[str, FunctionNode],
                           prop: PropertyDict) -> List[FunctionNode]:
        # Declaration order breaks ties so a plan is reproducible
        names = [n for n in self._functions if n in needed]

        produced_by: Dict[str, str] = {}
        for name in names:
            for cell_name in needed[name].effective_writes(prop):
                produced_by[cell_name] = name

        depends_on: Dict[str, set] = {name: set() for name in names}
        for name in names:
            for cell_name in needed[name].effective_reads(prop):
                src = produced_by.get(cell_name)
                if src is not None and src != name and not self._state.is_constant[cell_name]:
                    depends_on[name].add(src)

        ordered: List[FunctionNode] = []
        done = set()
        remaining = list(names)
        while remaining:
            ready = [n for n in remaining if depends_on[n] <= done]
            if not ready:
                raise ConfigurationError(
                    f"Dependency cycle among active functions: {', '.join(remaining)}"
                )
            for n in ready:
                ordered.append(needed[n])
                done.add(n)
            remaining = [n for n in remaining if n not in done]

        return ordered

    def evaluate(self, calc, prop: PropertyDict, outputs: Optional[Iterable[str]] = None,
                 sink: Optional[TraceSink] = None) -> EvaluationPlan:
        """Executes the needed active functions in dependency order.

        Args:
            calc: facade handed to each function procedure
            prop (PropertyDict): current configuration
            outputs (Iterable[str], optional): cells to produce
            sink (TraceSink, optional): receives one entry per declared
                read and write of each invocation

        Raises:
            SimulationError: if called while another pass holds the graph

        Returns:
            EvaluationPlan: the plan that was executed
        """
        with self.exclusive("evaluate"):
            plan = self.plan(prop, outputs)
            pass_id = sink.start_pass() if sink is not None else 0

            for func in plan.functions:
                self._current_step = func.name
                func(calc)
                if sink is not None:
                    self._trace(sink, pass_id, func, prop)

        return plan

    def _trace(self, sink: TraceSink, pass_id: int, func: FunctionNode, prop: PropertyDict):
        for direction, names in (("i", func.effective_reads(prop)),
                                 ("o", func.effective_writes(prop))):
            for name in names:
                cell = self._cells[name]
                value = cell.item if isinstance(cell, DiscreteCell) else cell.value
                sink.record(TraceEntry(
                    pass_id=pass_id,
                    function=func.name,
                    direction=direction,
                    name=name,
                    value=value,
                    decimals=cell.decimals,
                    units=cell.units,
                ))
