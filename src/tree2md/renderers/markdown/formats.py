#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/renderers/markdown/formats.py
"""Inline format specs and the run reconciler.

Text nodes are not rendered one at a time. While an inline region (the
content of a paragraph, heading, link...) is visited, every text node pushes
an ``InlineRun`` into the state's buffer. When the region is flushed the
whole buffer goes through ``reconcile_runs`` so that a format shared by
neighbouring runs is opened once and closed once.

Reconciliation diffs the leading prefix of each run's format list against
the previous run's list:

    >>> bold = TEXT_FORMAT_SPECS["bold"]
    >>> italic = TEXT_FORMAT_SPECS["italic"]
    >>> reconcile_runs([InlineRun("a", (bold,)), InlineRun("b", (bold,))])
    '**ab**'
    >>> reconcile_runs([InlineRun("ab", (bold,)), InlineRun("cd", (bold, italic))])
    '**ab*cd***'

A format that is active on runs 1 and 3 but not on run 2 is closed before
run 2 and reopened for run 3.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True)
class FormatSpec:
    """The Markdown (or inline HTML) tags for one text format.

    Parameters
    ----------
    kind : str
        Format name, e.g. ``"bold"``
    open_tag : str
        Tag written where the format starts
    close_tag : str
        Tag written where the format ends
    html_inline : bool, default = False
        Whether the tags are inline HTML rather than Markdown syntax

    Notes
    -----
    Two specs are the same format when ``kind``, ``open_tag`` and
    ``html_inline`` match. ``close_tag`` is derived from the open tag and
    is left out of the comparison.

    """

    kind: str
    open_tag: str
    close_tag: str = field(compare=False)
    html_inline: bool = False


@dataclass(frozen=True)
class InlineRun:
    """Text plus the ordered formats active on it."""

    text: str
    formats: tuple[FormatSpec, ...] = ()


# Order matters: it is the nesting order of the emitted tags.
TEXT_FORMAT_SPECS: dict[str, FormatSpec] = {
    "bold": FormatSpec("bold", "**", "**"),
    "italic": FormatSpec("italic", "*", "*"),
    "strikethrough": FormatSpec("strikethrough", "~~", "~~"),
    "highlight": FormatSpec("highlight", "<mark>", "</mark>", html_inline=True),
    "underline": FormatSpec("underline", "<u>", "</u>", html_inline=True),
    "subscript": FormatSpec("subscript", "<sub>", "</sub>", html_inline=True),
    "superscript": FormatSpec("superscript", "<sup>", "</sup>", html_inline=True),
    "code": FormatSpec("code", "`", "`"),
}


def common_prefix_length(previous: Sequence[FormatSpec], current: Sequence[FormatSpec]) -> int:
    """Return how many leading formats two format lists share, in order."""
    length = 0
    for before, after in zip(previous, current):
        if before != after:
            break
        length += 1
    return length


def reconcile_runs(runs: Sequence[InlineRun]) -> str:
    """Render a sequence of inline runs with minimal, properly nested tags.

    Parameters
    ----------
    runs : sequence of InlineRun
        Runs of one inline region, in document order

    Returns
    -------
    str
        Markdown text for the region; empty for an empty sequence

    """
    parts: list[str] = []
    open_formats: Sequence[FormatSpec] = ()

    for run in runs:
        common = common_prefix_length(open_formats, run.formats)
        parts.extend(spec.close_tag for spec in reversed(open_formats[common:]))
        parts.extend(spec.open_tag for spec in run.formats[common:])
        parts.append(run.text)
        open_formats = run.formats

    parts.extend(spec.close_tag for spec in reversed(open_formats))
    return "".join(parts)
