#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown generation.

This module defines the options read by the Markdown generator and its
conversions.
"""
# src/tree2md/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from tree2md.constants import (
    DEFAULT_EMPTY_PARAGRAPH,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_INCLUDE_EXTENSIONS,
    DEFAULT_LOAD_PLUGINS,
    DEFAULT_TAB_WIDTH,
    DEFAULT_TRAILING_NEWLINE,
)
from tree2md.options.base import BaseRendererOptions


@dataclass(frozen=True)
class MarkdownGeneratorOptions(BaseRendererOptions):
    """Configuration options for tree-to-Markdown generation.

    Parameters
    ----------
    tab_width : int, default 4
        Number of spaces written for a tab node.
    escape_special : bool, default False
        Backslash-escape Markdown special characters in text that is not
        formatted as code.
    include_extensions : bool, default True
        Register the list, quote, code block, horizontal rule and table
        conversions in addition to the built-in ones.
    load_plugins : bool, default False
        Register conversion maps published under the
        ``tree2md.conversion_maps`` entry point group.
    trailing_newline : bool, default False
        End non-empty output with a newline.
    empty_paragraph : str, default "<br>"
        Markup written for a paragraph without children.

    """

    tab_width: int = field(
        default=DEFAULT_TAB_WIDTH,
        metadata={"help": "Number of spaces written for a tab", "type": int, "importance": "core"},
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={"help": "Backslash-escape Markdown special characters in plain text", "importance": "core"},
    )
    include_extensions: bool = field(
        default=DEFAULT_INCLUDE_EXTENSIONS,
        metadata={
            "help": "Convert lists, quotes, code blocks, rules and tables",
            "cli_name": "no-extensions",
            "importance": "core",
        },
    )
    load_plugins: bool = field(
        default=DEFAULT_LOAD_PLUGINS,
        metadata={"help": "Load conversion maps from installed plugins", "importance": "advanced"},
    )
    trailing_newline: bool = field(
        default=DEFAULT_TRAILING_NEWLINE,
        metadata={"help": "End non-empty output with a newline", "importance": "advanced"},
    )
    empty_paragraph: str = field(
        default=DEFAULT_EMPTY_PARAGRAPH,
        metadata={"help": "Markup written for empty paragraphs", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if not isinstance(self.tab_width, int) or isinstance(self.tab_width, bool) or self.tab_width < 0:
            raise ValueError(f"tab_width must be a non-negative integer, got {self.tab_width!r}")
