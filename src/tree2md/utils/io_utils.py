#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/utils/io_utils.py
"""I/O utilities for handling output destinations."""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast


def _is_binary_stream(output: object) -> bool:
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO) or isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str], None]) -> StringIO | None:
    """Write text to a path or stream, or wrap it in a StringIO.

    Parameters
    ----------
    content : str
        Text to write, encoded as UTF-8 for binary destinations
    output : str, Path, IO[bytes], IO[str], or None
        Destination; None returns a StringIO holding the content

    Returns
    -------
    StringIO or None
        StringIO when ``output`` is None, otherwise None

    Raises
    ------
    TypeError
        If output type is not supported

    Examples
    --------
        >>> from io import BytesIO
        >>> buffer = BytesIO()
        >>> write_content("# Hello", buffer)
        >>> buffer.getvalue()
        b'# Hello'

    """
    if output is None:
        return StringIO(content)

    if isinstance(output, (str, Path)):
        Path(output).write_text(content, encoding="utf-8")
        return None

    if hasattr(output, "write"):
        if _is_binary_stream(output):
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["write_content"]
