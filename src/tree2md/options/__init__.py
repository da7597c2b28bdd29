"""Options for tree2md generators."""

from tree2md.options.base import BaseRendererOptions, CloneFrozenMixin
from tree2md.options.markdown import MarkdownGeneratorOptions

__all__ = [
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownGeneratorOptions",
]
