#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/plugins.py
"""Discovery of conversion maps published by installed packages.

A package adds Markdown support for its own node types by exposing a
conversion map under the ``tree2md.conversion_maps`` entry point group::

    [project.entry-points."tree2md.conversion_maps"]
    image = "my_package.markdown:IMAGE_CONVERSION_MAP"

Maps are returned ordered by entry point name so that priority ties
between plugins resolve the same way on every run.

"""

from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Mapping

from tree2md.constants import CONVERSION_MAP_ENTRY_POINT_GROUP
from tree2md.renderers.markdown.dispatch import ConversionMap

logger = logging.getLogger(__name__)


def discover_conversion_maps(group: str = CONVERSION_MAP_ENTRY_POINT_GROUP) -> list[ConversionMap]:
    """Load conversion maps from entry points.

    Entry points that fail to load or do not resolve to a mapping are
    logged and skipped.

    Parameters
    ----------
    group : str, default = "tree2md.conversion_maps"
        Entry point group to scan

    Returns
    -------
    list of ConversionMap
        Loaded maps, ordered by entry point name

    """
    maps: list[ConversionMap] = []
    entry_points = sorted(importlib.metadata.entry_points().select(group=group), key=lambda ep: ep.name)

    for ep in entry_points:
        try:
            conversion_map = ep.load()
        except Exception as e:
            logger.warning(f"Failed to load conversion map entry point '{ep.name}': {e}")
            continue

        if not isinstance(conversion_map, Mapping):
            logger.warning(f"Entry point '{ep.name}' did not return a conversion map, skipping")
            continue

        maps.append(conversion_map)
        logger.debug(f"Discovered conversion map from entry point: {ep.name}")

    logger.info(f"Discovered {len(maps)} conversion map(s) from entry points")
    return maps
