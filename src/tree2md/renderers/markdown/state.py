#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/renderers/markdown/state.py
"""Mutable state of one Markdown serialization pass.

``MarkdownSerializationState`` owns everything that changes while a tree is
walked: the output buffer, the delimiter that prefixes each new line inside
nested blocks, the block waiting for its trailing blank lines, and the
buffer of inline runs not yet reconciled. Conversions only ever touch the
output through ``write()``/``text()``, which is what keeps delimiters and
block spacing consistent.

A state is created per ``generate_markdown(...)(root)`` call and thrown
away once its result has been read.

"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from tree2md.ast.nodes import ElementNode, Node
from tree2md.constants import DEFAULT_BLOCK_SPACING
from tree2md.options.markdown import MarkdownGeneratorOptions
from tree2md.renderers.markdown.dispatch import ConversionDispatcher
from tree2md.renderers.markdown.formats import InlineRun, reconcile_runs

logger = logging.getLogger(__name__)


class MarkdownSerializationState:
    """Output buffer, block delimiters and inline run buffer for one pass.

    Parameters
    ----------
    dispatcher : ConversionDispatcher
        Resolves conversions for the nodes this state converts
    options : MarkdownGeneratorOptions or None, default = None
        Generator options visible to conversions

    """

    def __init__(self, dispatcher: ConversionDispatcher, options: MarkdownGeneratorOptions | None = None):
        """Create an empty state."""
        self.dispatcher = dispatcher
        self.options = options or MarkdownGeneratorOptions()
        self._output: list[str] = []
        self._delimiter: str = ""
        self._pending_close: Optional[Node] = None
        self._suppress_blank_lines: bool = False
        self._inline_runs: list[InlineRun] = []

    # ------------------------------------------------------------------
    # Output buffer
    # ------------------------------------------------------------------

    @property
    def result(self) -> str:
        """Markdown written so far."""
        return "".join(self._output)

    def _append(self, content: str) -> None:
        self._output.append(content)

    def _at_line_start(self) -> bool:
        for chunk in reversed(self._output):
            if chunk:
                return chunk.endswith("\n")
        return True

    @property
    def delimiter(self) -> str:
        """Prefix written at the start of every new line of the active block."""
        return self._delimiter

    @delimiter.setter
    def delimiter(self, value: str) -> None:
        self._delimiter = value

    @property
    def suppress_blank_lines(self) -> bool:
        """Whether the current context forbids bare newlines (e.g. table cells)."""
        return self._suppress_blank_lines

    @suppress_blank_lines.setter
    def suppress_blank_lines(self, value: bool) -> None:
        self._suppress_blank_lines = value

    @property
    def pending_close(self) -> Optional[Node]:
        """The block still waiting for its trailing separator, if any."""
        return self._pending_close

    def ensure_newline(self) -> None:
        """End the current line unless the output is empty or already at a line start."""
        if not self._at_line_start():
            self._append("\n")

    def flush_pending_close(self, size: int = DEFAULT_BLOCK_SPACING) -> None:
        """Write the separator owed by the last closed block.

        Parameters
        ----------
        size : int, default = 2
            Number of line ends between the closed block and what follows:
            1 keeps blocks on adjacent lines, 2 leaves one blank line,
            3 leaves two.

        Notes
        -----
        Blank separator lines repeat the delimiter with trailing whitespace
        stripped, so ``"> "`` yields ``">"`` lines inside a quote. The
        pending marker is cleared even when nothing is written.

        """
        if self._pending_close is not None and not self._suppress_blank_lines:
            self.ensure_newline()
            blank_line = self._delimiter.rstrip()
            for _ in range(1, size):
                self._append(f"{blank_line}\n")
        self._pending_close = None

    def write(self, content: str = "") -> None:
        """Write literal Markdown, honouring block spacing and the delimiter.

        Parameters
        ----------
        content : str, default = ""
            Text to append. Writing nothing still flushes a pending close
            and opens the line with the delimiter.

        """
        self.flush_pending_close()
        if self._delimiter and self._at_line_start():
            self._append(self._delimiter)
        if content:
            self._append(content)

    def text(self, value: str) -> None:
        """Write multi-line text so that every line gets the delimiter."""
        lines = value.split("\n")
        for index, line in enumerate(lines):
            self.write()
            self._append(line)
            if index != len(lines) - 1:
                self._append("\n")

    # ------------------------------------------------------------------
    # Inline runs
    # ------------------------------------------------------------------

    def push_inline_run(self, run: InlineRun) -> None:
        self._inline_runs.append(run)

    @property
    def inline_runs(self) -> Sequence[InlineRun]:
        """Buffered inline runs (read-only view)."""
        return tuple(self._inline_runs)

    def get_inline_text(self) -> str:
        """Return the reconciled text of the buffered runs without writing it."""
        if not self._inline_runs:
            return ""
        return reconcile_runs(self._inline_runs)

    def clear_inline_runs(self) -> None:
        self._inline_runs = []

    def flush_inline(self) -> None:
        """Reconcile the buffered runs, write the result and empty the buffer."""
        self.write(self.get_inline_text())
        self.clear_inline_runs()

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def close_block(self, node: Node) -> None:
        """Mark ``node`` as closed; its separator is written before the next output."""
        self._pending_close = node

    def close(self) -> None:
        """Drop the pending close without writing a separator."""
        self._pending_close = None

    def wrap_block(self, delim: str, first_delim: Optional[str], node: Node, body: Callable[[], None]) -> None:
        """Render ``body`` as a nested block.

        Parameters
        ----------
        delim : str
            Added to the delimiter for every line of the block
        first_delim : str or None
            Marker opening the block (e.g. ``"- "``); ``delim`` when empty
        node : Node
            Block node recorded as pending close afterwards
        body : callable
            Writes the block content

        """
        previous = self._delimiter
        self.write(first_delim or delim)
        self._delimiter = previous + delim
        try:
            body()
        finally:
            self._delimiter = previous
        self.close_block(node)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def convert_block(self, node: Node) -> None:
        """Convert one node with the conversion resolved for it."""
        self.dispatcher.dispatch(node, self)

    def convert_inline(self, parent: Node) -> None:
        """Convert the inline content of ``parent`` as one reconciled region.

        The buffer is flushed before and after, so runs never leak between
        regions. A leaf passed where a container is expected is converted as
        the only inline content of the region.
        """
        self.flush_inline()
        if isinstance(parent, ElementNode):
            for child in parent.children:
                self.convert_block(child)
        else:
            logger.debug("convert_inline() got non-container %r; converting it as sole inline content", parent.type)
            self.convert_block(parent)
        self.flush_inline()

    def convert_children(self, parent: Node) -> None:
        """Convert each child of a block container, without flushing inline runs."""
        if isinstance(parent, ElementNode):
            for child in parent.children:
                self.convert_block(child)
