#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/renderers/base.py
"""Base class for tree renderers.

A renderer turns a document tree into a text format. Subclasses implement
``render_to_string``; ``render`` writes that string to a path or stream.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from tree2md.ast.nodes import Node
from tree2md.exceptions import InvalidOptionsError, OutputWriteError
from tree2md.options.base import BaseRendererOptions
from tree2md.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for all tree renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, root: Node) -> str:
        """Render the tree under ``root`` to a string.

        Parameters
        ----------
        root : Node
            Root of the document tree

        Returns
        -------
        str
            Rendered document

        """

    def render(self, root: Node, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the tree and write it to a file path or file-like object.

        Raises
        ------
        OutputWriteError
            If a file path cannot be written

        """
        text = self.render_to_string(root)
        try:
            write_content(text, output)
        except OSError as e:
            raise OutputWriteError(str(output), original_error=e) from e

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
