#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/renderers/markdown/conversions.py
"""Built-in conversions for text, line breaks, tabs, paragraphs, links and headings.

Every generator registers ``BUILTIN_CONVERSION_MAP`` first. Each factory
returns a priority-0 ``Conversion`` so extension maps can override any of
them with a higher priority.

"""

from __future__ import annotations

from tree2md.ast.nodes import AutoLinkNode, HeadingNode, LinkNode, Node, ParagraphNode, TabNode, TextNode
from tree2md.renderers.markdown.dispatch import Conversion, ConversionMap
from tree2md.renderers.markdown.formats import TEXT_FORMAT_SPECS, FormatSpec, InlineRun
from tree2md.renderers.markdown.state import MarkdownSerializationState
from tree2md.utils.escape import escape_markdown_context_aware


def text_formats(node: TextNode) -> tuple[FormatSpec, ...]:
    """Return the format specs active on a text node, in nesting order."""
    return tuple(spec for kind, spec in TEXT_FORMAT_SPECS.items() if node.has_format(kind))


def convert_text(node: Node, state: MarkdownSerializationState) -> None:
    if not isinstance(node, TextNode):
        return

    formats = text_formats(node)
    text = node.get_text_content()
    if state.options.escape_special and not node.has_format("code"):
        text = escape_markdown_context_aware(text)
    if state.suppress_blank_lines:
        # single-line contexts are table cells, where a bare pipe starts a new column
        text = escape_markdown_context_aware(text, "table")
    state.push_inline_run(InlineRun(text=text, formats=formats))


def convert_line_break(node: Node, state: MarkdownSerializationState) -> None:
    state.flush_inline()
    if state.suppress_blank_lines:
        state.write("<br>")
    else:
        state.ensure_newline()


def convert_tab(node: Node, state: MarkdownSerializationState) -> None:
    # Markdown has no tab semantics
    state.flush_inline()
    state.write(" " * state.options.tab_width)


def convert_paragraph(node: Node, state: MarkdownSerializationState) -> None:
    """Write a paragraph and leave it pending close.

    Inside contexts that forbid newlines (table cells) the inline content is
    written without closing the block.
    """
    if not isinstance(node, ParagraphNode):
        return

    if state.suppress_blank_lines:
        state.convert_inline(node)
        return

    if node.is_empty():
        state.write(state.options.empty_paragraph)
    else:
        state.convert_inline(node)
    state.close_block(node)


def convert_heading(node: Node, state: MarkdownSerializationState) -> None:
    if not isinstance(node, HeadingNode):
        return

    state.write("#" * node.level + " ")
    state.convert_inline(node)
    state.close_block(node)


def convert_link(node: Node, state: MarkdownSerializationState) -> None:
    """Write ``[text](url)`` or ``[text](url "title")``.

    The link text is reconciled on its own: the surrounding runs are
    flushed first and the link's runs are read back and cleared instead of
    being written. Unlinked autolinks render their children as plain inline
    content.
    """
    if not isinstance(node, LinkNode):
        return

    if isinstance(node, AutoLinkNode) and node.is_unlinked:
        state.convert_children(node)
        return

    state.flush_inline()
    state.convert_children(node)
    text = state.get_inline_text()
    state.clear_inline_runs()

    if node.title:
        state.write(f'[{text}]({node.url} "{node.title}")')
    else:
        state.write(f"[{text}]({node.url})")


def _tab_conversion(node: Node) -> Conversion | None:
    if not isinstance(node, TabNode):
        return None
    return Conversion(convert_tab)


BUILTIN_CONVERSION_MAP: ConversionMap = {
    "text": lambda node: Conversion(convert_text),
    "linebreak": lambda node: Conversion(convert_line_break),
    "tab": _tab_conversion,
    "paragraph": lambda node: Conversion(convert_paragraph),
    "heading": lambda node: Conversion(convert_heading),
    "link": lambda node: Conversion(convert_link),
    "autolink": lambda node: Conversion(convert_link),
}
