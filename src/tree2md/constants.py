#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for tree2md library.

This module centralizes the hardcoded values used across tree2md so the
node model, the Markdown generator and the CLI agree on them.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Text Format Bitmask - Format flags carried by text nodes
3. Markdown Generation Defaults - Generator option defaults
4. Configuration and CLI - Config discovery and exit codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HeadingTag = Literal["h1", "h2", "h3", "h4", "h5", "h6"]
ListType = Literal["bullet", "number", "check"]
TextFormatType = Literal[
    "bold",
    "italic",
    "strikethrough",
    "underline",
    "code",
    "subscript",
    "superscript",
    "highlight",
]

# =============================================================================
# Text Format Bitmask
# =============================================================================

# Bit values of the serialized `format` field on text nodes
TEXT_FORMAT_FLAGS: dict[str, int] = {
    "bold": 1,
    "italic": 1 << 1,
    "strikethrough": 1 << 2,
    "underline": 1 << 3,
    "code": 1 << 4,
    "subscript": 1 << 5,
    "superscript": 1 << 6,
    "highlight": 1 << 7,
}

# =============================================================================
# Markdown Generation Defaults
# =============================================================================

DEFAULT_TAB_WIDTH = 4
DEFAULT_ESCAPE_SPECIAL = False
DEFAULT_INCLUDE_EXTENSIONS = True
DEFAULT_LOAD_PLUGINS = False
DEFAULT_TRAILING_NEWLINE = False
DEFAULT_EMPTY_PARAGRAPH = "<br>"

# Number of separator lines flush_pending_close() emits between sibling blocks
DEFAULT_BLOCK_SPACING = 2
TIGHT_BLOCK_SPACING = 1
SAME_KIND_BLOCK_SPACING = 3

MIN_CONVERSION_PRIORITY = 0
MAX_CONVERSION_PRIORITY = 4

CONVERSION_MAP_ENTRY_POINT_GROUP = "tree2md.conversion_maps"

# =============================================================================
# Configuration and CLI
# =============================================================================

CONFIG_ENV_VAR = "TREE2MD_CONFIG"
CONFIG_FILENAMES = [".tree2md.toml", ".tree2md.yaml", ".tree2md.yml", ".tree2md.json"]
PYPROJECT_TOOL_SECTION = "tree2md"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
