"""Tests for the computation graph.

These tests exercise planning and evaluation on small hand-built graphs:
dependency ordering, constant cells, derived inputs, writer conflicts,
cycles, re-entry and tracing.
"""

import pytest

from firecalc.base_classes.function_node import FunctionNode
from firecalc.base_classes.graph import ComputationGraph, ConfigurationState
from firecalc.base_classes.value_cell import ContinuousCell
from firecalc.exceptions import ConfigurationError, SimulationError
from firecalc.utilities.config import PropertyDict
from firecalc.utilities.logger import MemoryTraceSink


def _copy(src, dst):
    def procedure(calc):
        calc.set(dst, calc.get(src))
    return procedure


def _graph(functions, names=("vA", "vB", "vC")):
    cells = [ContinuousCell(n, "ft", 2, 0.) for n in names]
    return ComputationGraph(cells, functions)


class TestConstruction:
    """Tests for graph construction and name resolution."""

    def test_duplicate_cell(self):
        """Two cells with one name are rejected."""
        with pytest.raises(ConfigurationError):
            ComputationGraph([ContinuousCell("vA"), ContinuousCell("vA")], [])

    def test_duplicate_function(self):
        """Two functions with one name are rejected."""
        f = FunctionNode("fA", _copy("vA", "vB"), ("vA",), ("vB",))
        with pytest.raises(ConfigurationError):
            _graph([f, f])

    def test_function_with_unknown_cell(self):
        """A function declaring an undeclared cell is rejected."""
        f = FunctionNode("fA", _copy("vA", "vZ"), ("vA",), ("vZ",))
        with pytest.raises(ConfigurationError):
            _graph([f])

    def test_unknown_names(self, chain_graph):
        """Unknown cell and function names raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            chain_graph.cell("vNope")
        with pytest.raises(ConfigurationError):
            chain_graph.function("fNope")
        with pytest.raises(ConfigurationError):
            chain_graph.is_active("fNope")

    def test_discrete_lookup(self, chain_graph):
        """discrete() only accepts discrete cells."""
        assert chain_graph.discrete("vFlag").item == "No"
        with pytest.raises(ConfigurationError):
            chain_graph.discrete("vA")


class TestConfigurationState:
    """Tests for the configuration state record."""

    def test_default_state_is_inactive(self, chain_graph):
        """The default state has no active function and no outputs."""
        state = chain_graph.default_state()
        assert state.active_functions() == []
        assert state.outputs() == []

    def test_constant_value_is_written(self, chain_graph):
        """apply_state writes pinned constant values into their cells."""
        state = chain_graph.default_state()
        state.constant("vB", value=9.)
        chain_graph.apply_state(state)
        assert chain_graph.cell("vB").value == 9.

    def test_clearing_constant_drops_value(self, chain_graph):
        """Un-pinning a constant forgets its value."""
        state = chain_graph.default_state()
        state.constant("vB", value=9.)
        state.constant("vB", False)
        assert "vB" not in state.constant_values
        assert state.is_constant["vB"] is False

    def test_copy_is_independent(self, chain_graph):
        """Editing a copy leaves the original untouched."""
        state = chain_graph.default_state()
        dup = state.copy()
        dup.activate("fA")
        dup.output("vD")
        assert not state.function_active["fA"]
        assert not state.is_user_output["vD"]

    def test_unknown_names_rejected(self, chain_graph):
        """Flags can only be set on declared names."""
        state = chain_graph.default_state()
        with pytest.raises(ConfigurationError):
            state.activate("fNope")
        with pytest.raises(ConfigurationError):
            state.output("vNope")

    def test_mismatched_state(self, chain_graph):
        """A state built for another graph is refused."""
        other = ConfigurationState(function_active={"fX": True}, is_constant={},
                                   is_user_output={})
        with pytest.raises(ConfigurationError):
            chain_graph.apply_state(other)


class TestPlanning:
    """Tests for plan construction."""

    def test_topological_order(self, chain_graph):
        """Functions run in dependency order, not declaration order."""
        plan = chain_graph.plan(PropertyDict())
        assert plan.function_names == ["fA", "fB", "fC"]
        assert plan.inputs == ["vA"]
        assert plan.outputs == ["vD"]

    def test_constant_terminates_chain(self, chain_graph):
        """A constant cell is neither computed nor an input."""
        state = chain_graph.state.copy()
        state.constant("vB", value=5.)
        chain_graph.apply_state(state)

        plan = chain_graph.plan(PropertyDict())
        assert plan.function_names == ["fB", "fC"]
        assert plan.inputs == []

    def test_inactive_writer_makes_input(self, chain_graph):
        """A cell whose writer is inactive becomes a user input."""
        state = chain_graph.state.copy()
        state.deactivate("fA")
        chain_graph.apply_state(state)

        plan = chain_graph.plan(PropertyDict())
        assert plan.function_names == ["fB", "fC"]
        assert plan.inputs == ["vB"]

    def test_pinned_non_input(self, chain_graph):
        """A cell pinned as not-an-input is left out of the inputs."""
        state = chain_graph.state.copy()
        state.user_input("vA", False)
        chain_graph.apply_state(state)
        assert chain_graph.plan(PropertyDict()).inputs == []

    def test_pinned_input_always_listed(self, chain_graph):
        """A cell pinned as an input is listed even when not needed."""
        state = chain_graph.state.copy()
        state.user_input("vNote")
        chain_graph.apply_state(state)
        assert "vNote" in chain_graph.plan(PropertyDict()).inputs

    def test_explicit_outputs(self, chain_graph):
        """Only the functions needed for the requested outputs are planned."""
        plan = chain_graph.plan(PropertyDict(), outputs=["vB"])
        assert plan.function_names == ["fA"]

    def test_unknown_output(self, chain_graph):
        """Requesting an undeclared cell raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            chain_graph.plan(PropertyDict(), outputs=["vNope"])

    def test_two_active_writers(self):
        """Two active writers of a needed cell is a configuration error."""
        graph = _graph([
            FunctionNode("f1", _copy("vA", "vC"), ("vA",), ("vC",)),
            FunctionNode("f2", _copy("vB", "vC"), ("vB",), ("vC",)),
        ])
        state = graph.default_state()
        state.activate("f1")
        state.activate("f2")
        state.output("vC")
        graph.apply_state(state)

        with pytest.raises(ConfigurationError, match="several active writers"):
            graph.plan(PropertyDict())

    def test_inactive_second_writer_is_ignored(self):
        """Only active writers count toward the conflict."""
        graph = _graph([
            FunctionNode("f1", _copy("vA", "vC"), ("vA",), ("vC",)),
            FunctionNode("f2", _copy("vB", "vC"), ("vB",), ("vC",)),
        ])
        state = graph.default_state()
        state.activate("f1")
        state.output("vC")
        graph.apply_state(state)
        assert graph.plan(PropertyDict()).function_names == ["f1"]

    def test_cycle(self):
        """A dependency cycle among needed functions is rejected."""
        graph = _graph([
            FunctionNode("f1", _copy("vA", "vB"), ("vA",), ("vB",)),
            FunctionNode("f2", _copy("vB", "vA"), ("vB",), ("vA",)),
        ])
        state = graph.default_state()
        state.activate("f1")
        state.activate("f2")
        state.output("vB")
        graph.apply_state(state)

        with pytest.raises(ConfigurationError, match="cycle"):
            graph.plan(PropertyDict())

    def test_config_dependent_reads(self):
        """config_reads extend the read set from the properties."""
        def extra(prop):
            return ["vB"] if prop.boolean("surfaceConfSpreadDirInput") else []

        graph = _graph([FunctionNode("f1", _copy("vA", "vC"), ("vA",), ("vC",),
                                     config_reads=extra)])
        state = graph.default_state()
        state.activate("f1")
        state.output("vC")
        graph.apply_state(state)

        assert graph.plan(PropertyDict()).inputs == ["vA"]
        prop = PropertyDict({"surfaceConfSpreadDirMax": False,
                             "surfaceConfSpreadDirInput": True})
        assert graph.plan(prop).inputs == ["vA", "vB"]


class TestEvaluation:
    """Tests for plan execution."""

    def test_values_propagate(self, chain_graph, recording_calc):
        """Each function sees the value written by its predecessor."""
        chain_graph.cell("vA").update(1.5)
        chain_graph.evaluate(recording_calc, PropertyDict())
        assert chain_graph.cell("vD").value == pytest.approx(12.)
        assert recording_calc.calls == ["fA", "fB", "fC"]

    def test_reentry_rejected(self, chain_graph):
        """A function starting a second pass raises SimulationError."""
        class ReentrantCalc:
            prop = PropertyDict()
            sink = None
            calls = []

            def get(self, name):
                return chain_graph.cell(name).value

            def set(self, name, value):
                chain_graph.evaluate(self, self.prop)

        with pytest.raises(SimulationError):
            chain_graph.evaluate(ReentrantCalc(), PropertyDict())

    def test_graph_released_after_error(self, chain_graph, recording_calc):
        """The exclusive hold is released when a pass fails."""
        with pytest.raises(ConfigurationError):
            chain_graph.evaluate(recording_calc, PropertyDict(), outputs=["vNope"])
        chain_graph.evaluate(recording_calc, PropertyDict())
        assert recording_calc.calls == ["fA", "fB", "fC"]

    def test_exclusive_reports_step(self, chain_graph):
        """The SimulationError names the step holding the graph."""
        with chain_graph.exclusive("reconfigure"):
            with pytest.raises(SimulationError, match="reconfigure"):
                with chain_graph.exclusive("evaluate"):
                    pass

    def test_trace_entries(self, chain_graph, recording_calc):
        """The sink receives one entry per declared read and write."""
        sink = MemoryTraceSink()
        chain_graph.evaluate(recording_calc, PropertyDict(), sink=sink)

        assert sink.functions_run() == ["fA", "fB", "fC"]
        entries = sink.for_function("fB")
        assert [(e.direction, e.name) for e in entries] == [("i", "vB"), ("o", "vC")]
        assert entries[1].value == pytest.approx(4.)
        assert entries[1].units == "ft"
        assert all(e.pass_id == 1 for e in sink.entries)

    def test_pass_ids_increment(self, chain_graph, recording_calc):
        """Each evaluation gets its own pass id."""
        sink = MemoryTraceSink()
        chain_graph.evaluate(recording_calc, PropertyDict(), sink=sink)
        chain_graph.evaluate(recording_calc, PropertyDict(), sink=sink)
        assert sink.pass_id == 2
        assert sink.functions_run(1) == sink.functions_run(2)
