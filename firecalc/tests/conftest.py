"""Shared pytest fixtures for the firecalc test suite.

This module provides reusable fixtures for testing firecalc components,
including configured calculators, trace sinks, fuel models and small
hand-built graphs.
"""

import pytest

from firecalc.base_classes.function_node import FunctionNode
from firecalc.base_classes.graph import ComputationGraph
from firecalc.base_classes.value_cell import ContinuousCell, DiscreteCell, TextCell
from firecalc.calculator.eq_calc import EqCalc
from firecalc.models.fuel_models import FuelModelCatalog
from firecalc.utilities.config import PropertyDict
from firecalc.utilities.logger import MemoryTraceSink


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def default_props():
    """Provide the built-in default configuration.

    Returns:
        PropertyDict: single fuel model, midflame wind, spread at head.
    """
    return PropertyDict()


@pytest.fixture
def make_props():
    """Factory building a PropertyDict from keyword overrides.

    Returns:
        Callable: ``make_props(**overrides) -> PropertyDict``
    """
    def _make(**overrides):
        return PropertyDict(overrides)
    return _make


@pytest.fixture
def two_fuel_props():
    """Provide an area weighted two fuel model configuration.

    Returns:
        PropertyDict: blended FM1/FM10 style configuration.
    """
    return PropertyDict({
        "surfaceConfFuelModels": False,
        "surfaceConfFuelAreaWeighted": True,
        "surfaceCalcFireFlameLeng": True,
        "surfaceCalcFireLineInt": True,
    })


# ============================================================================
# Calculator Fixtures
# ============================================================================

@pytest.fixture
def memory_sink():
    """Provide an in-memory trace sink."""
    return MemoryTraceSink()


@pytest.fixture
def calc(default_props, memory_sink):
    """Provide a reconfigured calculator with default properties.

    Returns:
        EqCalc: calculator tracing into ``memory_sink``.
    """
    c = EqCalc(default_props, memory_sink)
    c.reconfigure()
    return c


@pytest.fixture
def surface_calc(make_props, memory_sink):
    """Provide a calculator set up for a typical surface run.

    FM1 short grass, 5 mi/h midflame wind, 30% slope, dry dead fuels.
    """
    c = EqCalc(make_props(surfaceCalcFireFlameLeng=True, surfaceCalcFireLineInt=True,
                          surfaceCalcFireHeatPerUnitArea=True,
                          surfaceCalcFireReactionInt=True), memory_sink)
    c.reconfigure()
    c.set_inputs({
        "vSurfaceFuelBedModel": "FM1",
        "vSurfaceFuelMoisDead1": 0.06,
        "vSurfaceFuelMoisDead10": 0.07,
        "vSurfaceFuelMoisDead100": 0.08,
        "vSurfaceFuelMoisLiveHerb": 0.6,
        "vSurfaceFuelMoisLiveWood": 0.9,
        "vWindSpeedAtMidflame": 5.,
        "vSiteSlopeFraction": 0.3,
    })
    return c


# ============================================================================
# Fuel Fixtures
# ============================================================================

@pytest.fixture
def fm1():
    """Provide fuel model 1 (short grass)."""
    return FuelModelCatalog.get("FM1")


@pytest.fixture
def fm4():
    """Provide fuel model 4 (chaparral)."""
    return FuelModelCatalog.get("FM4")


@pytest.fixture
def fm10():
    """Provide fuel model 10 (timber litter and understory)."""
    return FuelModelCatalog.get("FM10")


# ============================================================================
# Small Graph Fixtures
# ============================================================================

class RecordingCalc:
    """Minimal facade for hand-built graphs; records the call order."""

    def __init__(self, graph, prop=None):
        self.graph = graph
        self.prop = prop if prop is not None else PropertyDict()
        self.sink = None
        self.calls = []

    def get(self, name):
        return self.graph.cell(name).value

    def set(self, name, value):
        self.graph.cell(name).update(value)


def _doubler(src, dst, tag):
    def procedure(calc):
        calc.calls.append(tag)
        calc.set(dst, 2. * calc.get(src))
    return procedure


@pytest.fixture
def chain_graph():
    """Provide a three-function chain a -> b -> c -> d.

    ``fC`` is declared first so declaration order differs from dependency
    order.
    """
    cells = [
        ContinuousCell("vA", "ft", 2, 1.),
        ContinuousCell("vB", "ft", 2, 0.),
        ContinuousCell("vC", "ft", 2, 0.),
        ContinuousCell("vD", "ft", 2, 0.),
        DiscreteCell("vFlag", ("No", "Yes"), 0),
        TextCell("vNote", "hello"),
    ]
    functions = [
        FunctionNode("fC", _doubler("vC", "vD", "fC"), reads=("vC",), writes=("vD",)),
        FunctionNode("fA", _doubler("vA", "vB", "fA"), reads=("vA",), writes=("vB",)),
        FunctionNode("fB", _doubler("vB", "vC", "fB"), reads=("vB",), writes=("vC",)),
    ]
    graph = ComputationGraph(cells, functions)
    state = graph.default_state()
    for name in ("fA", "fB", "fC"):
        state.activate(name)
    state.output("vD")
    graph.apply_state(state)
    return graph


@pytest.fixture
def recording_calc(chain_graph):
    """Provide a RecordingCalc bound to ``chain_graph``."""
    return RecordingCalc(chain_graph)
