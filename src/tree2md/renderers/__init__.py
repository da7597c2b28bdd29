"""Renderers turning document trees into text formats."""

from tree2md.renderers.base import BaseRenderer

__all__ = ["BaseRenderer"]
