#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/renderers/markdown/extensions.py
"""Conversions for lists, quotes, code blocks, horizontal rules and tables.

These are ordinary conversion maps built on the public state primitives
(``wrap_block``, ``flush_pending_close``, ``suppress_blank_lines``); the
state itself knows nothing about lists or tables. They are registered right
after the built-in map unless ``include_extensions`` is turned off.

Block spacing used here:

- consecutive list items: ``flush_pending_close(1)``
- a list directly after another list of the same kind:
  ``flush_pending_close(3)`` so the two are not merged when parsed back
- a list after any other block: ``flush_pending_close(1)``

"""

from __future__ import annotations

import logging

from tree2md.ast.nodes import (
    CodeNode,
    ElementNode,
    LineBreakNode,
    ListItemNode,
    ListNode,
    Node,
    ParagraphNode,
    TabNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    get_node_children,
)
from tree2md.constants import SAME_KIND_BLOCK_SPACING, TIGHT_BLOCK_SPACING
from tree2md.renderers.markdown.dispatch import Conversion, ConversionFactory, ConversionFn, ConversionMap
from tree2md.renderers.markdown.state import MarkdownSerializationState

logger = logging.getLogger(__name__)


# ============================================================================
# Lists
# ============================================================================


def list_item_marker(node: ListNode, item: Node, index: int) -> str:
    """Return the marker opening the ``index``-th item of a list."""
    if node.list_type == "number":
        return f"{node.start + index}. "
    if node.list_type == "check":
        checked = isinstance(item, ListItemNode) and bool(item.checked)
        return "- [x] " if checked else "- [ ] "
    return "- "


def _holds_only_nested_list(item: Node) -> bool:
    return isinstance(item, ListItemNode) and len(item.children) == 1 and isinstance(item.children[0], ListNode)


def convert_list(node: Node, state: MarkdownSerializationState) -> None:
    """Write every item of a list, each wrapped in its marker and indentation."""
    if not isinstance(node, ListNode):
        return

    closed = state.pending_close
    if closed is not None and closed.type == node.type:
        state.flush_pending_close(SAME_KIND_BLOCK_SPACING)
    else:
        state.flush_pending_close(TIGHT_BLOCK_SPACING)

    # only items that get a marker advance the numbering
    position = 0
    item_indent = ""
    for index, item in enumerate(node.children):
        if index:
            state.flush_pending_close(TIGHT_BLOCK_SPACING)

        if _holds_only_nested_list(item):
            # nested list sits under the previous item, no marker of its own
            indent = item_indent or " " * len(list_item_marker(node, item, position))
            previous = state.delimiter
            state.delimiter = previous + indent
            try:
                state.convert_block(item.children[0])
            finally:
                state.delimiter = previous
            state.close_block(node)
            continue

        marker = list_item_marker(node, item, position)
        position += 1
        item_indent = " " * len(marker)
        state.wrap_block(item_indent, marker, node, lambda item=item: state.convert_block(item))


def convert_list_item(node: Node, state: MarkdownSerializationState) -> None:
    """Write a list item's inline content, then its blocks on their own lines.

    A leading block other than a list shares the marker line.
    """
    if not isinstance(node, ListItemNode):
        return

    state.flush_inline()
    for index, child in enumerate(node.children):
        if isinstance(child, ElementNode) and not child.is_inline():
            if state.inline_runs:
                state.flush_inline()
            if index or isinstance(child, ListNode):
                state.ensure_newline()
            state.convert_block(child)
        else:
            state.convert_block(child)
    # a trailing nested list leaves its own pending close; writing here would flush it
    if state.inline_runs:
        state.flush_inline()


# ============================================================================
# Quotes, code blocks and rules
# ============================================================================


def convert_quote(node: Node, state: MarkdownSerializationState) -> None:
    state.wrap_block("> ", None, node, lambda: state.convert_inline(node))


def code_block_text(node: CodeNode) -> str:
    """Return the raw source of a code block."""
    parts: list[str] = []
    for child in node.children:
        if isinstance(child, LineBreakNode):
            parts.append("\n")
        elif isinstance(child, TabNode):
            parts.append("\t")
        else:
            parts.append(child.get_text_content())
    return "".join(parts)


def convert_code_block(node: Node, state: MarkdownSerializationState) -> None:
    """Write a fenced code block; every body line keeps the block delimiter."""
    if not isinstance(node, CodeNode):
        return

    state.flush_inline()
    state.write("```" + (node.language or ""))
    state.ensure_newline()
    body = code_block_text(node)
    if body:
        state.text(body)
        state.ensure_newline()
    state.write("```")
    state.close_block(node)


def convert_horizontal_rule(node: Node, state: MarkdownSerializationState) -> None:
    state.write("---")
    state.close_block(node)


# ============================================================================
# Tables
# ============================================================================


def convert_table(node: Node, state: MarkdownSerializationState) -> None:
    """Write a pipe table; the first row is the header row."""
    if not isinstance(node, TableNode) or node.is_empty():
        return

    column_count = max(len(get_node_children(row)) for row in node.children)
    for index, row in enumerate(node.children):
        if index:
            state.ensure_newline()
        state.convert_block(row)
        # short rows get empty cells so every row matches the separator
        for _ in range(column_count - len(get_node_children(row))):
            state.write("  |")
        if index == 0:
            state.ensure_newline()
            state.write("|" + " --- |" * column_count)
    state.close_block(node)


def convert_table_row(node: Node, state: MarkdownSerializationState) -> None:
    if not isinstance(node, TableRowNode):
        return

    state.write("|")
    for cell in node.children:
        state.write(" ")
        state.convert_block(cell)
        state.write(" |")


def convert_table_cell(node: Node, state: MarkdownSerializationState) -> None:
    """Write a cell's content on a single line.

    Blank-line suppression stays on for the whole cell. Paragraphs are
    joined with ``<br>``; other blocks go to the dispatcher fallback.
    """
    if not isinstance(node, TableCellNode):
        return

    suppressed = state.suppress_blank_lines
    state.suppress_blank_lines = True
    try:
        for index, child in enumerate(node.children):
            if isinstance(child, ParagraphNode):
                if index:
                    state.write("<br>")
                state.convert_block(child)
                state.close()
            elif isinstance(child, ElementNode) and not child.is_inline():
                logger.debug("Block %r inside a table cell has no single-line Markdown form", child.type)
                if state.dispatcher.fallback is not None:
                    state.dispatcher.fallback(child, state)
                state.close()
            else:
                state.convert_inline(child)
    finally:
        state.suppress_blank_lines = suppressed


def _element_conversion(node_class: type, fn: ConversionFn) -> ConversionFactory:
    def factory(node: Node) -> Conversion | None:
        return Conversion(fn) if isinstance(node, node_class) else None

    return factory


EXTENSION_CONVERSION_MAP: ConversionMap = {
    "list": _element_conversion(ListNode, convert_list),
    "listitem": _element_conversion(ListItemNode, convert_list_item),
    "quote": lambda node: Conversion(convert_quote),
    "code": _element_conversion(CodeNode, convert_code_block),
    "horizontalrule": lambda node: Conversion(convert_horizontal_rule),
    "table": _element_conversion(TableNode, convert_table),
    "tablerow": _element_conversion(TableRowNode, convert_table_row),
    "tablecell": _element_conversion(TableCellNode, convert_table_cell),
}
