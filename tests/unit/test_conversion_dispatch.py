#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_conversion_dispatch.py
"""Unit tests for conversion resolution across conversion maps.

Tests cover:
- Priority resolution regardless of registration order
- First-registered map winning ties
- Factories declining nodes
- Fallback handling of unconverted nodes

"""

import logging

import pytest

from tree2md.ast import ParagraphNode, RootNode, TabNode, TextNode
from tree2md.renderers.markdown import BUILTIN_CONVERSION_MAP, generate_markdown
from tree2md.renderers.markdown.dispatch import Conversion, ConversionDispatcher
from tree2md.renderers.markdown.state import MarkdownSerializationState


def writer(label):
    def apply(node, state):
        state.write(label)

    return apply


def render_with(dispatcher, node):
    state = MarkdownSerializationState(dispatcher)
    state.convert_block(node)
    return state.result


@pytest.mark.unit
class TestConversion:
    """Tests for the Conversion record."""

    def test_default_priority(self):
        """Test priority defaults to 0."""
        assert Conversion(writer("x")).priority == 0

    @pytest.mark.parametrize("priority", [-1, 5])
    def test_priority_out_of_range(self, priority):
        """Test priorities outside 0..4 are rejected."""
        with pytest.raises(ValueError, match="priority"):
            Conversion(writer("x"), priority=priority)


@pytest.mark.unit
class TestPriorityResolution:
    """Tests for picking a conversion among several maps."""

    def test_higher_priority_wins_when_registered_first(self):
        """Test the higher priority wins from the first position."""
        high = {"X": lambda node: Conversion(writer("high"), priority=2)}
        low = {"X": lambda node: Conversion(writer("low"), priority=1)}
        dispatcher = ConversionDispatcher([high, low])
        assert render_with(dispatcher, _XNode()) == "high"

    def test_higher_priority_wins_when_registered_last(self):
        """Test the higher priority wins from the last position."""
        low = {"X": lambda node: Conversion(writer("low"), priority=1)}
        high = {"X": lambda node: Conversion(writer("high"), priority=2)}
        dispatcher = ConversionDispatcher([low, high])
        assert render_with(dispatcher, _XNode()) == "high"

    def test_tie_keeps_first_registered(self):
        """Test equal priorities keep the first map's conversion."""
        first = {"X": lambda node: Conversion(writer("first"), priority=3)}
        second = {"X": lambda node: Conversion(writer("second"), priority=3)}
        dispatcher = ConversionDispatcher([first, second])
        assert render_with(dispatcher, _XNode()) == "first"

    def test_declining_factory_is_skipped(self):
        """Test a factory returning None leaves the next map in charge."""
        declining = {"X": lambda node: None}
        accepting = {"X": lambda node: Conversion(writer("accepted"))}
        dispatcher = ConversionDispatcher([declining, accepting])
        assert render_with(dispatcher, _XNode()) == "accepted"

    def test_duplicate_map_registered_once(self):
        """Test registering the same map twice keeps only the first position."""
        first = {"X": lambda node: Conversion(writer("first"))}
        second = {"X": lambda node: Conversion(writer("second"))}
        dispatcher = ConversionDispatcher([first, second, first])
        assert dispatcher.conversion_maps == (first, second)
        assert render_with(dispatcher, _XNode()) == "first"

    def test_tab_factory_declines_plain_text(self):
        """Test the built-in tab factory only accepts tab nodes."""
        assert BUILTIN_CONVERSION_MAP["tab"](TextNode(text="x")) is None
        assert BUILTIN_CONVERSION_MAP["tab"](TabNode()) is not None

    def test_extra_map_overrides_builtin(self):
        """Test an extra map with priority 1 overrides a built-in conversion."""
        custom = {"paragraph": lambda node: Conversion(writer("custom"), priority=1)}
        to_markdown = generate_markdown(custom)
        assert to_markdown(RootNode(children=[ParagraphNode(children=[TextNode(text="x")])])) == "custom"

    def test_extra_map_at_equal_priority_loses(self):
        """Test an extra map cannot override a built-in at equal priority."""
        custom = {"paragraph": lambda node: Conversion(writer("custom"))}
        to_markdown = generate_markdown(custom)
        assert to_markdown(RootNode(children=[ParagraphNode(children=[TextNode(text="x")])])) == "x"


@pytest.mark.unit
class TestFallback:
    """Tests for nodes without a conversion."""

    def test_unknown_node_produces_nothing(self, caplog):
        """Test unconverted nodes are skipped and logged at debug level."""
        dispatcher = ConversionDispatcher([BUILTIN_CONVERSION_MAP])
        with caplog.at_level(logging.DEBUG, logger="tree2md.renderers.markdown.dispatch"):
            assert render_with(dispatcher, _XNode()) == ""
        assert "No Markdown conversion" in caplog.text

    def test_fallback_receives_unconverted_node(self):
        """Test the fallback handles nodes no map converts."""
        node = _XNode()
        to_markdown = generate_markdown(fallback=lambda n, state: state.write(f"<!-- {n.type} -->"))
        assert to_markdown(RootNode(children=[node])) == "<!-- X -->"


class _XNode(TextNode):
    type = "X"
