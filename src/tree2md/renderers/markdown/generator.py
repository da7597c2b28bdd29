#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/renderers/markdown/generator.py
"""Markdown generation from document trees.

``generate_markdown`` binds a set of conversion maps once and returns a
function from a root node to Markdown text. Each call of that function runs
with its own ``MarkdownSerializationState``, so the returned function can be
reused freely.

Map registration order (which decides priority ties):

1. ``BUILTIN_CONVERSION_MAP``
2. ``EXTENSION_CONVERSION_MAP`` (when ``include_extensions``)
3. plugin maps from entry points (when ``load_plugins``)
4. maps passed by the caller, in order

Examples
--------
    >>> from tree2md.ast import HeadingNode, RootNode, TextNode
    >>> to_markdown = generate_markdown()
    >>> to_markdown(RootNode(children=[HeadingNode(tag="h2", children=[TextNode(text="Title")])]))
    '## Title'

"""

from __future__ import annotations

from typing import Callable, Optional

from tree2md.ast.nodes import Node
from tree2md.options.markdown import MarkdownGeneratorOptions
from tree2md.plugins import discover_conversion_maps
from tree2md.renderers.base import BaseRenderer
from tree2md.renderers.markdown.conversions import BUILTIN_CONVERSION_MAP
from tree2md.renderers.markdown.dispatch import ConversionDispatcher, ConversionMap, FallbackFn
from tree2md.renderers.markdown.extensions import EXTENSION_CONVERSION_MAP
from tree2md.renderers.markdown.state import MarkdownSerializationState


class MarkdownGenerator(BaseRenderer):
    """Render document trees to Markdown through conversion maps.

    Parameters
    ----------
    options : MarkdownGeneratorOptions or None, default = None
        Generation options
    conversion_maps : tuple of ConversionMap, default = ()
        Extra maps registered after the built-in, extension and plugin maps
    fallback : callable or None, default = None
        Called as ``fallback(node, state)`` for nodes without a conversion

    Examples
    --------
        >>> from tree2md.ast import ParagraphNode, RootNode, TextNode
        >>> generator = MarkdownGenerator()
        >>> generator.render_to_string(RootNode(children=[ParagraphNode(children=[
        ...     TextNode.with_formats("hi", "bold")])]))
        '**hi**'

    """

    def __init__(
        self,
        options: MarkdownGeneratorOptions | None = None,
        conversion_maps: tuple[ConversionMap, ...] = (),
        fallback: Optional[FallbackFn] = None,
    ):
        """Resolve the conversion maps for this generator."""
        BaseRenderer._validate_options_type(options, MarkdownGeneratorOptions, "markdown")
        options = options or MarkdownGeneratorOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownGeneratorOptions = options

        maps: list[ConversionMap] = [BUILTIN_CONVERSION_MAP]
        if options.include_extensions:
            maps.append(EXTENSION_CONVERSION_MAP)
        if options.load_plugins:
            maps.extend(discover_conversion_maps())
        maps.extend(conversion_maps)

        self.dispatcher = ConversionDispatcher(maps, fallback=fallback)

    def create_state(self) -> MarkdownSerializationState:
        """Return a fresh state bound to this generator's maps and options."""
        return MarkdownSerializationState(self.dispatcher, self.options)

    def render_to_string(self, root: Node) -> str:
        """Render the children of ``root`` to Markdown.

        Parameters
        ----------
        root : Node
            Root of the tree; its children are converted in order

        Returns
        -------
        str
            Markdown text

        """
        state = self.create_state()
        state.convert_children(root)
        # runs left over from inline content placed directly under the root
        if state.inline_runs:
            state.flush_inline()
        result = state.result

        if self.options.trailing_newline and result and not result.endswith("\n"):
            result += "\n"
        return result


def generate_markdown(
    *conversion_maps: ConversionMap,
    options: MarkdownGeneratorOptions | None = None,
    fallback: Optional[FallbackFn] = None,
) -> Callable[[Node], str]:
    """Bind conversion maps and return a root-to-Markdown function.

    Parameters
    ----------
    *conversion_maps : ConversionMap
        Extra maps, registered after the built-in ones in the given order
    options : MarkdownGeneratorOptions or None, default = None
        Generation options
    fallback : callable or None, default = None
        Handler for nodes no map converts

    Returns
    -------
    callable
        ``fn(root) -> str``

    """
    generator = MarkdownGenerator(options=options, conversion_maps=conversion_maps, fallback=fallback)
    return generator.render_to_string
