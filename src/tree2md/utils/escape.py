#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/utils/escape.py
"""Markdown text escaping utilities."""

from __future__ import annotations

# \ ` * _ { } [ ] # can all trigger unintended formatting in running text
MARKDOWN_SPECIAL_CHARS = r"\`*_{}[]#"


def escape_markdown_context_aware(text: str, context: str = "text") -> str:
    r"""Escape markdown with context awareness.

    Parameters
    ----------
    text : str
        Text to escape
    context : {'text', 'table'}, default = 'text'
        Context where text will be used

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown_context_aware("Text with [brackets]", "text")
        'Text with \\[brackets\\]'
        >>> escape_markdown_context_aware("Cell | with | pipes", "table")
        'Cell \\| with \\| pipes'

    """
    if not text:
        return text

    if context == "table":
        return text.replace("|", r"\|")

    return "".join("\\" + char if char in MARKDOWN_SPECIAL_CHARS else char for char in text)
