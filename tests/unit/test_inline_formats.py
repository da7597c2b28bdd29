#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_inline_formats.py
"""Unit tests for inline run reconciliation.

Tests cover:
- Golden outputs for single and shared-format runs
- Opening and closing order for overlapping formats
- FormatSpec equality ignoring the close tag
- Property: tags always balance and nest

"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tree2md.renderers.markdown.formats import (
    TEXT_FORMAT_SPECS,
    FormatSpec,
    InlineRun,
    common_prefix_length,
    reconcile_runs,
)

BOLD = TEXT_FORMAT_SPECS["bold"]
ITALIC = TEXT_FORMAT_SPECS["italic"]
CODE = TEXT_FORMAT_SPECS["code"]
UNDERLINE = TEXT_FORMAT_SPECS["underline"]
STRIKE = TEXT_FORMAT_SPECS["strikethrough"]


@pytest.mark.unit
class TestReconcileRuns:
    """Tests for reconcile_runs golden outputs."""

    def test_empty_sequence(self):
        """Test that no runs give no text."""
        assert reconcile_runs([]) == ""

    def test_plain_run(self):
        """Test a run without formats."""
        assert reconcile_runs([InlineRun("plain")]) == "plain"

    def test_single_bold_run(self):
        """Test a single bold run."""
        assert reconcile_runs([InlineRun("hi", (BOLD,))]) == "**hi**"

    def test_shared_bold_is_merged(self):
        """Test that two bold runs share one pair of tags."""
        runs = [InlineRun("a", (BOLD,)), InlineRun("b", (BOLD,))]
        assert reconcile_runs(runs) == "**ab**"

    def test_bold_then_bold_italic(self):
        """Test a format added on the second run nests inside the shared one."""
        runs = [InlineRun("ab", (BOLD,)), InlineRun("cd", (BOLD, ITALIC))]
        assert reconcile_runs(runs) == "**ab*cd***"

    def test_bold_italic_then_bold(self):
        """Test a trailing format closes before the shared one continues."""
        runs = [InlineRun("ab", (BOLD, ITALIC)), InlineRun("cd", (BOLD,))]
        assert reconcile_runs(runs) == "***ab*cd**"

    def test_plain_between_formatted(self):
        """Test that formatting closes around an unformatted run."""
        runs = [InlineRun("a", (BOLD,)), InlineRun(" b "), InlineRun("c", (ITALIC,))]
        assert reconcile_runs(runs) == "**a** b *c*"

    def test_format_gap_closes_and_reopens(self):
        """Test a format on runs 1 and 3 but not 2 is closed and reopened."""
        runs = [InlineRun("a", (BOLD,)), InlineRun("b", (ITALIC,)), InlineRun("c", (BOLD,))]
        assert reconcile_runs(runs) == "**a***b***c**"

    def test_different_leading_format_reopens_shared(self):
        """Test prefix diffing is order-sensitive."""
        runs = [InlineRun("a", (BOLD, ITALIC)), InlineRun("b", (ITALIC,))]
        assert reconcile_runs(runs) == "***a****b*"

    def test_html_inline_formats(self):
        """Test inline HTML tags close in reverse order."""
        runs = [InlineRun("x", (UNDERLINE,)), InlineRun("y", (UNDERLINE, CODE))]
        assert reconcile_runs(runs) == "<u>x`y`</u>"

    def test_three_runs_sharing_strikethrough(self):
        """Test a contiguous group of three runs gets a single pair."""
        runs = [InlineRun("a", (STRIKE,)), InlineRun("b", (STRIKE, BOLD)), InlineRun("c", (STRIKE,))]
        assert reconcile_runs(runs) == "~~a**b**c~~"


@pytest.mark.unit
class TestFormatSpec:
    """Tests for FormatSpec equality and prefix comparison."""

    def test_close_tag_not_compared(self):
        """Test specs differing only in close tag are the same format."""
        assert FormatSpec("bold", "**", "**") == FormatSpec("bold", "**", "__")

    def test_open_tag_compared(self):
        """Test an alternate open tag makes a distinct format."""
        assert FormatSpec("italic", "*", "*") != FormatSpec("italic", "_", "_")

    def test_html_inline_compared(self):
        """Test the html_inline flag is part of equality."""
        assert FormatSpec("mark", "<mark>", "</mark>") != FormatSpec("mark", "<mark>", "</mark>", html_inline=True)

    def test_separate_instances_merge(self):
        """Test equal specs built separately are treated as one format."""
        first = FormatSpec("italic", "*", "*")
        second = FormatSpec("italic", "*", "*")
        assert reconcile_runs([InlineRun("a", (first,)), InlineRun("b", (second,))]) == "*ab*"

    def test_common_prefix_length(self):
        """Test prefix length stops at the first mismatch."""
        assert common_prefix_length((BOLD, ITALIC, CODE), (BOLD, ITALIC)) == 2
        assert common_prefix_length((BOLD, ITALIC), (ITALIC, BOLD)) == 0
        assert common_prefix_length((), (BOLD,)) == 0

    def test_builtin_nesting_order(self):
        """Test the built-in spec order defines nesting."""
        assert list(TEXT_FORMAT_SPECS) == [
            "bold",
            "italic",
            "strikethrough",
            "highlight",
            "underline",
            "subscript",
            "superscript",
            "code",
        ]


# Text without tag characters so tags can be recovered from the output
_run_text = st.text(alphabet="abcdef ", min_size=1, max_size=5)
_DISTINCT_SPECS = [
    FormatSpec("b", "<b>", "</b>", html_inline=True),
    FormatSpec("i", "<i>", "</i>", html_inline=True),
    FormatSpec("s", "<s>", "</s>", html_inline=True),
]
_format_lists = st.lists(st.sampled_from(_DISTINCT_SPECS), unique=True, max_size=3).map(tuple)
_runs = st.lists(st.builds(InlineRun, _run_text, _format_lists), max_size=8)


def _tag_events(markdown: str) -> list[str]:
    events = []
    index = 0
    while index < len(markdown):
        if markdown[index] == "<":
            end = markdown.index(">", index)
            events.append(markdown[index : end + 1])
            index = end + 1
        else:
            index += 1
    return events


@pytest.mark.unit
@pytest.mark.fuzzing
class TestReconcileProperties:
    """Property-based tests for tag balancing."""

    @given(_runs)
    def test_tags_balance_and_nest(self, runs):
        """Property: every opened tag closes once, last-opened first."""
        stack = []
        for tag in _tag_events(reconcile_runs(runs)):
            if tag.startswith("</"):
                assert stack, "close without open"
                assert stack.pop() == tag.replace("</", "<")
            else:
                stack.append(tag)
        assert stack == []

    @given(_runs)
    def test_text_preserved(self, runs):
        """Property: removing tags gives back the concatenated run text."""
        result = reconcile_runs(runs)
        for spec in _DISTINCT_SPECS:
            result = result.replace(spec.open_tag, "").replace(spec.close_tag, "")
        assert result == "".join(run.text for run in runs)

    @given(_run_text, _run_text, _format_lists)
    def test_identical_formats_share_one_pair(self, first, second, formats):
        """Property: two runs with identical formats open each tag once."""
        result = reconcile_runs([InlineRun(first, formats), InlineRun(second, formats)])
        for spec in formats:
            assert result.count(spec.open_tag) == 1
            assert result.count(spec.close_tag) == 1
