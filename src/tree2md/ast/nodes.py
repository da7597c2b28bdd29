#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/ast/nodes.py
"""Node classes for the rich-text document tree.

This module defines the tree the Markdown generator walks. It mirrors the
shape of a rich-text editor state: element nodes own ordered children, text
nodes carry their active formats as a bitmask, and every node exposes a
string ``type`` tag that conversion maps are keyed by.

Node Hierarchy
--------------
Leaf nodes:
    - TextNode, TabNode, CodeHighlightNode
    - LineBreakNode, HorizontalRuleNode

Element nodes (own children):
    - RootNode, ParagraphNode, HeadingNode, QuoteNode, CodeNode
    - LinkNode, AutoLinkNode
    - ListNode, ListItemNode
    - TableNode, TableRowNode, TableCellNode

The generator treats the tree as read-only. Nothing in tree2md mutates a
node after construction.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from tree2md.constants import TEXT_FORMAT_FLAGS, HeadingTag, ListType, TextFormatType


class Node:
    """Base class for all tree nodes.

    Subclasses set the ``type`` class attribute to the tag used by
    serialized trees and by conversion maps.
    """

    type: ClassVar[str] = "node"

    def get_text_content(self) -> str:
        """Return the plain text under this node."""
        return ""


@dataclass
class TextNode(Node):
    """A run of text with its active formats.

    Parameters
    ----------
    text : str, default = ""
        Literal text content
    format : int, default = 0
        Bitmask of active formats (see ``TEXT_FORMAT_FLAGS``)

    """

    type: ClassVar[str] = "text"

    text: str = ""
    format: int = 0

    def has_format(self, format_type: str) -> bool:
        """Return whether the named format is active on this node.

        Parameters
        ----------
        format_type : str
            Format name such as ``"bold"`` or ``"code"``

        Returns
        -------
        bool
            True when the format bit is set, False for unknown names

        """
        flag = TEXT_FORMAT_FLAGS.get(format_type, 0)
        return bool(flag and self.format & flag)

    def get_text_content(self) -> str:
        """Return the text of this run."""
        return self.text

    @classmethod
    def with_formats(cls, text: str, *format_types: TextFormatType) -> TextNode:
        """Build a node from format names instead of a raw bitmask.

        >>> TextNode.with_formats("hi", "bold", "italic").format
        3

        """
        mask = 0
        for format_type in format_types:
            if format_type not in TEXT_FORMAT_FLAGS:
                raise ValueError(f"Unknown text format: {format_type}")
            mask |= TEXT_FORMAT_FLAGS[format_type]
        return cls(text=text, format=mask)


@dataclass
class TabNode(TextNode):
    """A literal tab character."""

    type: ClassVar[str] = "tab"

    text: str = "\t"


@dataclass
class CodeHighlightNode(TextNode):
    """A token inside a code block, tagged by the highlighter."""

    type: ClassVar[str] = "code-highlight"

    highlight_type: Optional[str] = None


@dataclass
class LineBreakNode(Node):
    """A soft line break inside a block."""

    type: ClassVar[str] = "linebreak"

    def get_text_content(self) -> str:
        return "\n"


@dataclass
class HorizontalRuleNode(Node):
    """A thematic break between blocks."""

    type: ClassVar[str] = "horizontalrule"


@dataclass
class ElementNode(Node):
    """A node owning an ordered list of children.

    Parameters
    ----------
    children : list of Node, default = empty list
        Child nodes in document order

    """

    type: ClassVar[str] = "element"

    children: list[Node] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return whether this element has no children."""
        return not self.children

    def is_inline(self) -> bool:
        """Return whether this element lives inside a block's inline content."""
        return False

    def get_text_content(self) -> str:
        return "".join(child.get_text_content() for child in self.children)


@dataclass
class RootNode(ElementNode):
    """Top-level container of a document."""

    type: ClassVar[str] = "root"


@dataclass
class ParagraphNode(ElementNode):
    """A paragraph of inline content."""

    type: ClassVar[str] = "paragraph"


@dataclass
class HeadingNode(ElementNode):
    """A heading block.

    Parameters
    ----------
    tag : {"h1", "h2", "h3", "h4", "h5", "h6"}, default = "h1"
        HTML-style heading tag

    """

    type: ClassVar[str] = "heading"

    tag: HeadingTag = "h1"

    @property
    def level(self) -> int:
        """Heading level derived from the tag (1-6)."""
        return int(self.tag[1:])


@dataclass
class QuoteNode(ElementNode):
    """A block quote holding inline content."""

    type: ClassVar[str] = "quote"


@dataclass
class CodeNode(ElementNode):
    """A code block whose children are text, tab and line break nodes."""

    type: ClassVar[str] = "code"

    language: Optional[str] = None


@dataclass
class LinkNode(ElementNode):
    """A hyperlink wrapping inline content.

    Parameters
    ----------
    url : str, default = ""
        Link target
    title : str or None, default = None
        Optional link title

    """

    type: ClassVar[str] = "link"

    url: str = ""
    title: Optional[str] = None

    def is_inline(self) -> bool:
        return True


@dataclass
class AutoLinkNode(LinkNode):
    """A link created by URL detection.

    ``is_unlinked`` marks a detected URL the user chose not to hyperlink.
    """

    type: ClassVar[str] = "autolink"

    is_unlinked: bool = False


@dataclass
class ListNode(ElementNode):
    """An ordered, unordered or check list of ListItemNode children.

    Parameters
    ----------
    list_type : {"bullet", "number", "check"}, default = "bullet"
        Kind of list
    start : int, default = 1
        First number of an ordered list

    """

    type: ClassVar[str] = "list"

    list_type: ListType = "bullet"
    start: int = 1


@dataclass
class ListItemNode(ElementNode):
    """A single list entry.

    ``checked`` is only meaningful inside check lists.
    """

    type: ClassVar[str] = "listitem"

    checked: Optional[bool] = None
    value: int = 1


@dataclass
class TableNode(ElementNode):
    """A table of TableRowNode children; the first row is the header."""

    type: ClassVar[str] = "table"


@dataclass
class TableRowNode(ElementNode):
    type: ClassVar[str] = "tablerow"


@dataclass
class TableCellNode(ElementNode):
    """A table cell.

    ``header_state`` is a bitmask: 1 for a row header, 2 for a column header.
    """

    type: ClassVar[str] = "tablecell"

    header_state: int = 0


def get_node_children(node: Node) -> list[Node]:
    """Return the children of an element node, or an empty list for leaves."""
    if isinstance(node, ElementNode):
        return node.children
    return []
