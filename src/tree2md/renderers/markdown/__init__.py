#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/renderers/markdown/__init__.py
"""Markdown serialization of document trees.

- formats: format specs and the inline run reconciler
- state: output buffer, block delimiters and inline run buffer
- dispatch: conversion maps and priority-based resolution
- conversions: built-in text, line break, tab, paragraph, heading and link conversions
- extensions: list, quote, code block, rule and table conversions
- generator: ``generate_markdown`` and ``MarkdownGenerator``

"""

from tree2md.renderers.markdown.conversions import BUILTIN_CONVERSION_MAP
from tree2md.renderers.markdown.dispatch import (
    Conversion,
    ConversionDispatcher,
    ConversionFactory,
    ConversionFn,
    ConversionMap,
)
from tree2md.renderers.markdown.extensions import EXTENSION_CONVERSION_MAP
from tree2md.renderers.markdown.formats import TEXT_FORMAT_SPECS, FormatSpec, InlineRun, reconcile_runs
from tree2md.renderers.markdown.generator import MarkdownGenerator, generate_markdown
from tree2md.renderers.markdown.state import MarkdownSerializationState

__all__ = [
    "BUILTIN_CONVERSION_MAP",
    "EXTENSION_CONVERSION_MAP",
    "TEXT_FORMAT_SPECS",
    "Conversion",
    "ConversionDispatcher",
    "ConversionFactory",
    "ConversionFn",
    "ConversionMap",
    "FormatSpec",
    "InlineRun",
    "MarkdownGenerator",
    "MarkdownSerializationState",
    "generate_markdown",
    "reconcile_runs",
]
