"""Pytest configuration and shared fixtures for the tree2md test suite."""

import os

import pytest

from tree2md.ast import (
    HeadingNode,
    LinkNode,
    ListItemNode,
    ListNode,
    ParagraphNode,
    QuoteNode,
    RootNode,
    TextNode,
)

try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed; property tests skip themselves
    pass


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


@pytest.fixture
def sample_tree() -> RootNode:
    """Provide a small document touching headings, formats, links, lists and quotes.

    Returns
    -------
    RootNode
        Tree rendered by ``sample_markdown``.

    """
    return RootNode(
        children=[
            HeadingNode(tag="h1", children=[TextNode(text="Sample")]),
            ParagraphNode(
                children=[
                    TextNode(text="Some "),
                    TextNode.with_formats("bold", "bold"),
                    TextNode(text=" and a "),
                    LinkNode(url="https://example.com", children=[TextNode(text="link")]),
                    TextNode(text="."),
                ]
            ),
            ListNode(
                list_type="bullet",
                children=[
                    ListItemNode(children=[TextNode(text="one")]),
                    ListItemNode(children=[TextNode(text="two")]),
                ],
            ),
            QuoteNode(children=[TextNode(text="quoted")]),
        ]
    )


@pytest.fixture
def sample_markdown() -> str:
    """Markdown expected for ``sample_tree``."""
    return "# Sample\n\nSome **bold** and a [link](https://example.com).\n- one\n- two\n\n> quoted"
