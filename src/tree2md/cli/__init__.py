"""Command-line interface for tree2md.

Reads a document tree serialized as JSON (an editor state or a bare node)
and writes its Markdown.

Examples
--------
Convert to stdout::

    $ tree2md state.json

Write to a file::

    $ tree2md state.json --out document.md

Read from stdin and preview with syntax highlighting::

    $ cat state.json | tree2md - --rich

Use a config file::

    $ tree2md state.json --config .tree2md.toml

Configuration files are discovered automatically (``.tree2md.toml``,
``.tree2md.yaml``, ``.tree2md.yml``, ``.tree2md.json`` or ``[tool.tree2md]``
in ``pyproject.toml``); ``TREE2MD_CONFIG`` names a file explicitly.

"""

import argparse
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional

from tree2md import __version__
from tree2md.ast.serialization import json_to_tree
from tree2md.constants import (
    CONFIG_ENV_VAR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from tree2md.exceptions import OutputWriteError, ParsingError, ValidationError
from tree2md.logging_utils import configure_logging
from tree2md.options.markdown import MarkdownGeneratorOptions
from tree2md.renderers.markdown.generator import MarkdownGenerator

logger = logging.getLogger(__name__)


def _option_help(name: str) -> str:
    for f in fields(MarkdownGeneratorOptions):
        if f.name == name:
            return str(f.metadata.get("help", ""))
    return ""


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Option flags default to None so that only flags given on the command
    line override values from a config file.
    """
    parser = argparse.ArgumentParser(
        prog="tree2md",
        description="Convert a JSON document tree to Markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", help="JSON tree file, or '-' to read stdin")
    parser.add_argument("--out", "-o", help="Output file (default: stdout)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", help=f"Config file (default: ${CONFIG_ENV_VAR} or auto-discovery)")
    config_group.add_argument("--no-config", action="store_true", help="Ignore config files")

    markdown_group = parser.add_argument_group("markdown options")
    markdown_group.add_argument("--tab-width", type=int, default=None, help=_option_help("tab_width"))
    markdown_group.add_argument(
        "--escape-special", action="store_true", default=None, help=_option_help("escape_special")
    )
    markdown_group.add_argument(
        "--no-extensions",
        dest="include_extensions",
        action="store_false",
        default=None,
        help="Only use the built-in conversions (no lists, quotes, code blocks, rules or tables)",
    )
    markdown_group.add_argument(
        "--plugins", dest="load_plugins", action="store_true", default=None, help=_option_help("load_plugins")
    )
    markdown_group.add_argument(
        "--trailing-newline", action="store_true", default=None, help=_option_help("trailing_newline")
    )
    markdown_group.add_argument("--empty-paragraph", default=None, help=_option_help("empty_paragraph"))
    markdown_group.add_argument(
        "--lenient", action="store_true", help="Skip unknown node types instead of failing"
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument("--rich", action="store_true", help="Preview the Markdown with rich highlighting")
    output_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    output_group.add_argument("--log-file", help="Also write log records to this file")
    output_group.add_argument("--trace", action="store_true", help="Timestamped log output with logger names")

    return parser


def build_options(parsed_args: argparse.Namespace, config: dict[str, Any]) -> MarkdownGeneratorOptions:
    """Merge config file values and command-line flags into generator options.

    Raises
    ------
    ValidationError
        If the config names an unknown option
    ValueError
        If an option value is out of range

    """
    options = MarkdownGeneratorOptions.from_mapping(config)

    overrides = {}
    for f in fields(MarkdownGeneratorOptions):
        value = getattr(parsed_args, f.name, None)
        if value is not None:
            overrides[f.name] = value
    if overrides:
        options = options.create_updated(**overrides)
    return options


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _print_rich(markdown: str) -> None:
    from rich.console import Console
    from rich.syntax import Syntax

    Console().print(Syntax(markdown, "markdown", word_wrap=True))


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI and return an exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(
        parsed_args.log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        rich_console=parsed_args.rich,
    )

    if not parsed_args.input:
        print("Error: Input file is required", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        config: dict[str, Any] = {}
        if not parsed_args.no_config:
            from tree2md.cli.config import load_config_with_priority

            config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        options = build_options(parsed_args, config)
    except (argparse.ArgumentTypeError, ValidationError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        source = _read_input(parsed_args.input)
    except OSError as e:
        print(f"Error: Cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        root = json_to_tree(source, strict=not parsed_args.lenient)
    except ParsingError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_PARSING_ERROR

    generator = MarkdownGenerator(options)
    logger.debug("Rendering %s with %d conversion map(s)", parsed_args.input, len(generator.dispatcher.conversion_maps))

    if parsed_args.out:
        try:
            generator.render(root, parsed_args.out)
        except OutputWriteError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return EXIT_FILE_ERROR
        logger.info("Wrote %s", parsed_args.out)
        return EXIT_SUCCESS

    markdown = generator.render_to_string(root)
    if parsed_args.rich:
        _print_rich(markdown)
        return EXIT_SUCCESS

    try:
        sys.stdout.write(markdown)
        if markdown and not markdown.endswith("\n"):
            sys.stdout.write("\n")
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    return EXIT_SUCCESS


__all__ = ["build_options", "create_parser", "main"]
