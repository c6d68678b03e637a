"""Tests for function nodes."""

from unittest.mock import MagicMock

from firecalc.base_classes.function_node import FunctionNode
from firecalc.utilities.config import PropertyDict


class TestFunctionNode:
    """Tests for declared and configuration-dependent read/write sets."""

    def test_static_sets(self):
        """Without config callables the declared sets are used as is."""
        node = FunctionNode("fX", MagicMock(), reads=["vA", "vB"], writes=["vC"])
        prop = PropertyDict()
        assert node.effective_reads(prop) == ("vA", "vB")
        assert node.effective_writes(prop) == ("vC",)
        assert node.all_names() == ("vA", "vB", "vC")

    def test_config_sets_are_appended_once(self):
        """Extra names are appended without duplicating declared ones."""
        node = FunctionNode("fX", MagicMock(), reads=("vA",), writes=("vC",),
                            config_reads=lambda prop: ["vA", "vB"],
                            config_writes=lambda prop: ["vD"])
        prop = PropertyDict()
        assert node.effective_reads(prop) == ("vA", "vB")
        assert node.effective_writes(prop) == ("vC", "vD")

    def test_call_forwards_facade(self):
        """Calling the node runs its procedure with the facade."""
        procedure = MagicMock(return_value=None)
        node = FunctionNode("fX", procedure, reads=(), writes=())
        facade = object()
        node(facade)
        procedure.assert_called_once_with(facade)

    def test_repr(self):
        """repr shows the function name."""
        node = FunctionNode("fX", MagicMock(), reads=(), writes=())
        assert repr(node) == "FunctionNode(fX)"
