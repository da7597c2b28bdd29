#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/renderers/markdown/dispatch.py
"""Conversion maps and priority-based dispatch.

A conversion map is a plain mapping from a node ``type`` tag to a factory.
The factory receives the node and returns a ``Conversion`` or ``None`` to
decline it. Several maps can be registered; for every node the dispatcher
asks each map in registration order and keeps the conversion with the
strictly highest priority, so the first-registered map wins ties.

Examples
--------
Override paragraphs from a plugin map:

    >>> from tree2md.renderers.markdown.conversions import BUILTIN_CONVERSION_MAP
    >>> def convert_paragraph(node, state):
    ...     state.write("paragraph")
    >>> plugin_map = {"paragraph": lambda node: Conversion(convert_paragraph, priority=1)}
    >>> dispatcher = ConversionDispatcher([BUILTIN_CONVERSION_MAP, plugin_map])

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Optional

from tree2md.ast.nodes import Node
from tree2md.constants import MAX_CONVERSION_PRIORITY, MIN_CONVERSION_PRIORITY

if TYPE_CHECKING:
    from tree2md.renderers.markdown.state import MarkdownSerializationState

logger = logging.getLogger(__name__)

ConversionFn = Callable[[Node, "MarkdownSerializationState"], None]


@dataclass(frozen=True)
class Conversion:
    """A conversion function and the priority it competes with.

    Parameters
    ----------
    apply : callable
        ``apply(node, state)`` writes the node's Markdown through the state
    priority : int, default = 0
        0 to 4; higher wins when several maps handle the same node

    """

    apply: ConversionFn
    priority: int = 0

    def __post_init__(self) -> None:
        """Validate the priority range.

        Raises
        ------
        ValueError
            If priority is outside 0..4

        """
        if not MIN_CONVERSION_PRIORITY <= self.priority <= MAX_CONVERSION_PRIORITY:
            raise ValueError(
                f"priority must be between {MIN_CONVERSION_PRIORITY} and {MAX_CONVERSION_PRIORITY}, "
                f"got {self.priority}"
            )


ConversionFactory = Callable[[Node], Optional[Conversion]]
ConversionMap = Mapping[str, ConversionFactory]
FallbackFn = Callable[[Node, "MarkdownSerializationState"], None]


class ConversionDispatcher:
    """Resolve and apply conversions for nodes across ordered conversion maps.

    The maps are indexed by node type once, at construction. The same map
    object registered twice only counts once, at its first position.

    Parameters
    ----------
    conversion_maps : iterable of ConversionMap
        Maps in registration order
    fallback : callable or None, default = None
        Called as ``fallback(node, state)`` for nodes no map converts.
        Without one, such nodes produce no output.

    """

    def __init__(self, conversion_maps: Iterable[ConversionMap], fallback: Optional[FallbackFn] = None):
        """Index the factories of every map by node type."""
        self._maps: list[ConversionMap] = []
        for conversion_map in conversion_maps:
            if not any(conversion_map is seen for seen in self._maps):
                self._maps.append(conversion_map)

        self._factories: dict[str, list[ConversionFactory]] = {}
        for conversion_map in self._maps:
            for node_type, factory in conversion_map.items():
                self._factories.setdefault(node_type, []).append(factory)

        self.fallback = fallback

    @property
    def conversion_maps(self) -> tuple[ConversionMap, ...]:
        """Registered maps, in registration order."""
        return tuple(self._maps)

    def resolve(self, node: Node) -> Optional[Conversion]:
        """Pick the conversion for a node.

        Parameters
        ----------
        node : Node
            Node to convert

        Returns
        -------
        Conversion or None
            Highest-priority conversion offered for the node's type, or
            None when every map declined or none handles the type

        """
        selected: Optional[Conversion] = None
        for factory in self._factories.get(node.type, ()):
            conversion = factory(node)
            if conversion is None:
                continue
            if selected is None or conversion.priority > selected.priority:
                selected = conversion
        return selected

    def dispatch(self, node: Node, state: MarkdownSerializationState) -> None:
        """Apply the resolved conversion for a node, or the fallback."""
        conversion = self.resolve(node)
        if conversion is not None:
            conversion.apply(node, state)
            return

        if self.fallback is not None:
            self.fallback(node, state)
        else:
            logger.debug("No Markdown conversion for node type %r; skipping", node.type)
