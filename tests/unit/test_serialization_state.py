#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_serialization_state.py
"""Unit tests for MarkdownSerializationState.

Tests cover:
- Newline and pending-close spacing primitives
- Delimiter prefixing through write() and text()
- wrap_block delimiter composition
- Inline run buffering and flushing

"""

import pytest

from tree2md.ast import ParagraphNode, QuoteNode, TextNode
from tree2md.renderers.markdown.dispatch import ConversionDispatcher
from tree2md.renderers.markdown.formats import TEXT_FORMAT_SPECS, InlineRun
from tree2md.renderers.markdown.state import MarkdownSerializationState


def make_state() -> MarkdownSerializationState:
    return MarkdownSerializationState(ConversionDispatcher([]))


@pytest.mark.unit
class TestNewlines:
    """Tests for ensure_newline and flush_pending_close."""

    def test_ensure_newline_on_empty_output(self):
        """Test that an empty buffer gets no newline."""
        state = make_state()
        state.ensure_newline()
        assert state.result == ""

    def test_ensure_newline_is_idempotent(self):
        """Test that two calls produce exactly one newline."""
        state = make_state()
        state.write("text")
        state.ensure_newline()
        state.ensure_newline()
        assert state.result == "text\n"

    @pytest.mark.parametrize(
        "size,expected",
        [
            (1, "a\nb"),
            (2, "a\n\nb"),
            (3, "a\n\n\nb"),
        ],
    )
    def test_flush_pending_close_sizes(self, size, expected):
        """Test the number of separator lines per size."""
        state = make_state()
        state.write("a")
        state.close_block(ParagraphNode())
        state.flush_pending_close(size)
        state.write("b")
        assert state.result == expected

    def test_write_flushes_default_spacing(self):
        """Test write() leaves one blank line after a closed block."""
        state = make_state()
        state.write("a")
        state.close_block(ParagraphNode())
        state.write("b")
        assert state.result == "a\n\nb"

    def test_flush_without_pending_close_is_noop(self):
        """Test nothing is written when no block is pending."""
        state = make_state()
        state.write("a")
        state.flush_pending_close(3)
        assert state.result == "a"

    def test_blank_lines_repeat_trimmed_delimiter(self):
        """Test separator lines carry the delimiter without trailing spaces."""
        state = make_state()
        state.delimiter = "> "
        state.write("a")
        state.close_block(ParagraphNode())
        state.write("b")
        assert state.result == "> a\n>\n> b"

    def test_suppression_skips_separator_and_clears(self):
        """Test suppressed blank lines still clear the pending close."""
        state = make_state()
        state.suppress_blank_lines = True
        state.write("a")
        state.close_block(ParagraphNode())
        state.flush_pending_close()
        assert state.pending_close is None
        state.write("b")
        assert state.result == "ab"

    def test_close_drops_pending_block(self):
        """Test close() clears the pending block without output."""
        state = make_state()
        state.write("a")
        state.close_block(ParagraphNode())
        state.close()
        state.write("b")
        assert state.result == "ab"


@pytest.mark.unit
class TestDelimiters:
    """Tests for delimiter handling in write, text and wrap_block."""

    def test_write_prefixes_delimiter_at_line_start(self):
        """Test the delimiter opens new lines only."""
        state = make_state()
        state.delimiter = "  "
        state.write("a")
        state.write("b")
        state.ensure_newline()
        state.write("c")
        assert state.result == "  ab\n  c"

    def test_text_prefixes_every_line(self):
        """Test multi-line text keeps the delimiter per line."""
        state = make_state()
        state.delimiter = "> "
        state.text("one\ntwo\nthree")
        assert state.result == "> one\n> two\n> three"

    def test_wrap_block_writes_first_delimiter(self):
        """Test the first delimiter opens the block and the delimiter continues it."""
        state = make_state()
        node = QuoteNode()

        def body():
            state.write("a")
            state.ensure_newline()
            state.write("b")

        state.wrap_block("   ", "1. ", node, body)
        assert state.result == "1. a\n   b"
        assert state.delimiter == ""
        assert state.pending_close is node

    def test_nested_wrap_blocks_compose_delimiters(self):
        """Test inner lines get the outer then the inner delimiter."""
        state = make_state()
        outer = QuoteNode()
        inner = QuoteNode()

        def inner_body():
            state.text("x\ny")

        def outer_body():
            state.wrap_block("  ", None, inner, inner_body)

        state.wrap_block("> ", None, outer, outer_body)
        lines = state.result.split("\n")
        assert lines == ["> " + "  " + "x", "> " + "  " + "y"]

    def test_wrap_block_restores_delimiter_on_error(self):
        """Test the delimiter is restored when the body raises."""
        state = make_state()

        def body():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            state.wrap_block("> ", None, QuoteNode(), body)
        assert state.delimiter == ""


@pytest.mark.unit
class TestInlineBuffer:
    """Tests for inline run buffering."""

    def test_push_and_peek(self):
        """Test pushed runs are visible through inline_runs."""
        state = make_state()
        run = InlineRun("a")
        state.push_inline_run(run)
        assert state.inline_runs == (run,)

    def test_flush_inline_writes_and_clears(self):
        """Test flushing writes reconciled text and empties the buffer."""
        state = make_state()
        bold = TEXT_FORMAT_SPECS["bold"]
        state.push_inline_run(InlineRun("a", (bold,)))
        state.push_inline_run(InlineRun("b", (bold,)))
        state.flush_inline()
        assert state.result == "**ab**"
        assert state.inline_runs == ()

    def test_get_inline_text_does_not_write(self):
        """Test get_inline_text leaves the output untouched."""
        state = make_state()
        state.push_inline_run(InlineRun("a"))
        assert state.get_inline_text() == "a"
        assert state.result == ""
        state.clear_inline_runs()
        assert state.get_inline_text() == ""

    def test_convert_inline_with_leaf_parent(self):
        """Test a leaf passed as inline region is converted as its only content."""
        seen = []
        dispatcher = ConversionDispatcher([{"text": lambda node: None}])
        dispatcher.fallback = lambda node, state: seen.append(node)
        state = MarkdownSerializationState(dispatcher)
        leaf = TextNode(text="x")
        state.convert_inline(leaf)
        assert seen == [leaf]
