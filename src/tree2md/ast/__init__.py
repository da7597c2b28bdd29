#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/ast/__init__.py
"""Document tree module.

The generator consumes a read-only tree of nodes. This package provides the
node classes and the JSON loader/dumper for serialized editor states.

- nodes: node classes and the format bitmask query
- serialization: JSON loading and dumping of trees

Examples
--------
    >>> from tree2md.ast import HeadingNode, ParagraphNode, RootNode, TextNode
    >>> root = RootNode(children=[
    ...     HeadingNode(tag="h1", children=[TextNode(text="Title")]),
    ...     ParagraphNode(children=[TextNode(text="Hello world")]),
    ... ])

"""

from __future__ import annotations

from tree2md.ast.nodes import (
    AutoLinkNode,
    CodeHighlightNode,
    CodeNode,
    ElementNode,
    HeadingNode,
    HorizontalRuleNode,
    LineBreakNode,
    LinkNode,
    ListItemNode,
    ListNode,
    Node,
    ParagraphNode,
    QuoteNode,
    RootNode,
    TabNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TextNode,
    get_node_children,
)
from tree2md.ast.serialization import (
    dict_to_node,
    json_to_tree,
    register_node_type,
    tree_to_dict,
    tree_to_json,
)

__all__ = [
    "AutoLinkNode",
    "CodeHighlightNode",
    "CodeNode",
    "ElementNode",
    "HeadingNode",
    "HorizontalRuleNode",
    "LineBreakNode",
    "LinkNode",
    "ListItemNode",
    "ListNode",
    "Node",
    "ParagraphNode",
    "QuoteNode",
    "RootNode",
    "TabNode",
    "TableCellNode",
    "TableNode",
    "TableRowNode",
    "TextNode",
    "get_node_children",
    "dict_to_node",
    "json_to_tree",
    "register_node_type",
    "tree_to_dict",
    "tree_to_json",
]
