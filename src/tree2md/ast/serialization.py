#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/ast/serialization.py
"""JSON loading and dumping for document trees.

This module converts between node trees and the JSON shape produced by
rich-text editors: every node is an object with a ``type`` tag, element
nodes carry a ``children`` array, and text nodes carry a ``format``
bitmask. A full editor state wraps the root as ``{"root": {...}}``.

Examples
--------
Load an editor state:

    >>> from tree2md.ast.serialization import json_to_tree
    >>> root = json_to_tree('{"root": {"type": "root", "children": ['
    ...     '{"type": "paragraph", "children": [{"type": "text", "text": "hi", "format": 1}]}]}}')
    >>> root.children[0].children[0].has_format("bold")
    True

Dump a tree back to a dict:

    >>> from tree2md.ast.serialization import tree_to_dict
    >>> tree_to_dict(root)["children"][0]["type"]
    'paragraph'

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, Optional, Union

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
)
from tree2md.exceptions import ParsingError

logger = logging.getLogger(__name__)

NodeLoader = Callable[[Mapping[str, Any], list[Node]], Node]

_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_LIST_TYPES = {"bullet", "number", "check"}


def _load_text(data: Mapping[str, Any], children: list[Node]) -> Node:
    return TextNode(text=str(data.get("text", "")), format=int(data.get("format", 0)))


def _load_code_highlight(data: Mapping[str, Any], children: list[Node]) -> Node:
    return CodeHighlightNode(
        text=str(data.get("text", "")),
        format=int(data.get("format", 0)),
        highlight_type=data.get("highlightType"),
    )


def _load_heading(data: Mapping[str, Any], children: list[Node]) -> Node:
    tag = data.get("tag", "h1")
    if tag not in _HEADING_TAGS:
        raise ParsingError(f"Invalid heading tag: {tag!r}", node_type="heading")
    return HeadingNode(children=children, tag=tag)


def _load_link(data: Mapping[str, Any], children: list[Node]) -> Node:
    return LinkNode(children=children, url=str(data.get("url", "")), title=data.get("title") or None)


def _load_autolink(data: Mapping[str, Any], children: list[Node]) -> Node:
    return AutoLinkNode(
        children=children,
        url=str(data.get("url", "")),
        title=data.get("title") or None,
        is_unlinked=bool(data.get("isUnlinked", False)),
    )


def _load_list(data: Mapping[str, Any], children: list[Node]) -> Node:
    list_type = data.get("listType", "bullet")
    if list_type not in _LIST_TYPES:
        raise ParsingError(f"Invalid list type: {list_type!r}", node_type="list")
    return ListNode(children=children, list_type=list_type, start=int(data.get("start", 1)))


def _load_list_item(data: Mapping[str, Any], children: list[Node]) -> Node:
    return ListItemNode(children=children, checked=data.get("checked"), value=int(data.get("value", 1)))


def _load_code(data: Mapping[str, Any], children: list[Node]) -> Node:
    return CodeNode(children=children, language=data.get("language") or None)


def _load_table_cell(data: Mapping[str, Any], children: list[Node]) -> Node:
    return TableCellNode(children=children, header_state=int(data.get("headerState", 0)))


_NODE_LOADERS: dict[str, NodeLoader] = {
    "root": lambda data, children: RootNode(children=children),
    "paragraph": lambda data, children: ParagraphNode(children=children),
    "heading": _load_heading,
    "quote": lambda data, children: QuoteNode(children=children),
    "text": _load_text,
    "tab": lambda data, children: TabNode(format=int(data.get("format", 0))),
    "code-highlight": _load_code_highlight,
    "linebreak": lambda data, children: LineBreakNode(),
    "horizontalrule": lambda data, children: HorizontalRuleNode(),
    "link": _load_link,
    "autolink": _load_autolink,
    "list": _load_list,
    "listitem": _load_list_item,
    "code": _load_code,
    "table": lambda data, children: TableNode(children=children),
    "tablerow": lambda data, children: TableRowNode(children=children),
    "tablecell": _load_table_cell,
}


def register_node_type(node_type: str, loader: NodeLoader) -> None:
    """Register a loader for a custom node type.

    Parameters
    ----------
    node_type : str
        The ``type`` tag as it appears in serialized trees
    loader : callable
        Called with the raw node mapping and its already-loaded children;
        returns the node instance

    """
    _NODE_LOADERS[node_type] = loader


def dict_to_node(data: Mapping[str, Any], strict: bool = True) -> Optional[Node]:
    """Load a single node (and its subtree) from a mapping.

    Parameters
    ----------
    data : Mapping
        Serialized node with a ``type`` key
    strict : bool, default = True
        Raise on unknown node types instead of skipping them

    Returns
    -------
    Node or None
        The loaded node, or None when an unknown node was skipped

    Raises
    ------
    ParsingError
        If the mapping is malformed, or names an unknown type in strict mode

    """
    if not isinstance(data, Mapping):
        raise ParsingError(f"Expected a node object, got {type(data).__name__}")

    node_type = data.get("type")
    if not isinstance(node_type, str):
        raise ParsingError("Node is missing its 'type' field")

    loader = _NODE_LOADERS.get(node_type)
    if loader is None:
        if strict:
            raise ParsingError(f"Unknown node type: {node_type!r}", node_type=node_type)
        logger.warning("Skipping unknown node type: %s", node_type)
        return None

    raw_children = data.get("children", [])
    if not isinstance(raw_children, list):
        raise ParsingError("'children' must be an array", node_type=node_type)

    children: list[Node] = []
    for raw_child in raw_children:
        child = dict_to_node(raw_child, strict=strict)
        if child is not None:
            children.append(child)

    try:
        return loader(data, children)
    except (TypeError, ValueError) as e:
        raise ParsingError(f"Invalid {node_type} node: {e}", node_type=node_type, original_error=e) from e


def json_to_tree(source: Union[str, bytes, Mapping[str, Any]], strict: bool = True) -> Node:
    """Load a document tree from JSON text or an already-decoded mapping.

    Accepts a bare node object or an editor state of the form
    ``{"root": {...}}``.

    Raises
    ------
    ParsingError
        If the JSON is invalid or the tree cannot be loaded

    """
    if isinstance(source, (str, bytes)):
        try:
            data = json.loads(source)
        except json.JSONDecodeError as e:
            raise ParsingError(f"Invalid JSON: {e}", original_error=e) from e
    else:
        data = source

    if isinstance(data, Mapping) and "type" not in data and "root" in data:
        data = data["root"]

    node = dict_to_node(data, strict=strict)
    if node is None:
        raise ParsingError("Document root could not be loaded")
    return node


def tree_to_dict(node: Node) -> dict[str, Any]:
    """Serialize a node and its subtree to a JSON-compatible dict."""
    result: dict[str, Any] = {"type": node.type}

    if isinstance(node, TextNode):
        result["text"] = node.text
        result["format"] = node.format
        if isinstance(node, CodeHighlightNode) and node.highlight_type:
            result["highlightType"] = node.highlight_type
    if isinstance(node, HeadingNode):
        result["tag"] = node.tag
    if isinstance(node, LinkNode):
        result["url"] = node.url
        if node.title:
            result["title"] = node.title
    if isinstance(node, AutoLinkNode):
        result["isUnlinked"] = node.is_unlinked
    if isinstance(node, ListNode):
        result["listType"] = node.list_type
        result["start"] = node.start
    if isinstance(node, ListItemNode):
        result["value"] = node.value
        if node.checked is not None:
            result["checked"] = node.checked
    if isinstance(node, CodeNode) and node.language:
        result["language"] = node.language
    if isinstance(node, TableCellNode):
        result["headerState"] = node.header_state
    if isinstance(node, ElementNode):
        result["children"] = [tree_to_dict(child) for child in node.children]

    return result


def tree_to_json(node: Node, indent: Optional[int] = None) -> str:
    """Serialize a tree as an editor state JSON string."""
    return json.dumps({"root": tree_to_dict(node)}, indent=indent)
