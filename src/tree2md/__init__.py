#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/__init__.py
"""tree2md - serialize rich-text document trees to Markdown.

The generator walks a tree of block and inline nodes and emits Markdown,
reconciling inline formats across neighbouring text runs and stacking
block delimiters for nested lists and quotes. Node types are converted
through pluggable conversion maps.

Examples
--------
    >>> from tree2md import generate_markdown
    >>> from tree2md.ast import ParagraphNode, RootNode, TextNode
    >>> to_markdown = generate_markdown()
    >>> to_markdown(RootNode(children=[ParagraphNode(children=[
    ...     TextNode.with_formats("a", "bold"),
    ...     TextNode.with_formats("b", "bold"),
    ... ])]))
    '**ab**'

"""

from __future__ import annotations

from tree2md.ast.serialization import json_to_tree
from tree2md.exceptions import ParsingError, Tree2MdError, ValidationError
from tree2md.options.markdown import MarkdownGeneratorOptions
from tree2md.renderers.markdown import (
    Conversion,
    ConversionMap,
    MarkdownGenerator,
    MarkdownSerializationState,
    generate_markdown,
)

__version__ = "0.1.0"

__all__ = [
    "Conversion",
    "ConversionMap",
    "MarkdownGenerator",
    "MarkdownGeneratorOptions",
    "MarkdownSerializationState",
    "ParsingError",
    "Tree2MdError",
    "ValidationError",
    "generate_markdown",
    "json_to_tree",
    "__version__",
]
