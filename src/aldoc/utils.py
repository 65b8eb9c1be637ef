"""Utility functions for aldoc."""

import re
from pathlib import Path

from .buffer import TextBuffer
from .errors import InvalidLineRangeError, InvalidLocationError


def parse_location(location: str) -> tuple[str, int]:
    """
    Parse a location spec into (path, line).

    Format:
    - path/to/Codeunit.al:42

    Returns:
        Tuple of (path, line), line 1-based.

    Raises:
        InvalidLocationError: If the location format is invalid.
        InvalidLineRangeError: If the line number is < 1.
    """
    match = re.match(r"^(.+):(\d+)$", location)
    if not match:
        raise InvalidLocationError(location, "expected format 'path:line'")

    path = Path(match.group(1)).as_posix()
    line = int(match.group(2))
    if line < 1:
        raise InvalidLineRangeError(line, "line must be >= 1")

    return path, line


def parse_attr_filter(spec: str | None) -> tuple[str, str]:
    """
    Parse an attribute filter like 'name=Customer'.

    Returns:
        Tuple of (attr_name, attr_value); ("", "") when no filter is given.

    Raises:
        InvalidLocationError: If the filter has no '='.
    """
    if not spec:
        return "", ""
    name, sep, value = spec.partition("=")
    if not sep or not name:
        raise InvalidLocationError(spec, "expected attribute filter 'name=value'")
    return name.strip(), value.strip().strip('"')


def line_index(buffer: TextBuffer, line: int) -> int:
    """
    Convert a 1-based line number to a buffer index.

    Raises:
        InvalidLineRangeError: If the line is past the end of the buffer.
    """
    if line < 1 or line > buffer.line_count():
        raise InvalidLineRangeError(
            line, f"buffer has {buffer.line_count()} lines"
        )
    return line - 1
