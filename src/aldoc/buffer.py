"""Read-only text buffer abstraction used by the locator."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .errors import SourceFileNotFoundError


class TextBuffer(Protocol):
    """Protocol for the editor buffer the locator reads from.

    Lines are 0-based, like editor positions. Implementations return one
    consistent snapshot for the duration of a call.
    """

    @property
    def cursor_line(self) -> int:
        """Line the cursor is on."""
        ...

    def get_text(self) -> str:
        """Full buffer text."""
        ...

    def line_at(self, line_no: int) -> str:
        """Text of one line, without its line break."""
        ...

    def line_count(self) -> int:
        """Number of lines in the buffer."""
        ...


def split_lines(text: str) -> list[str]:
    """Split text into lines, dropping '\\r' from CRLF and CR line breaks."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


class StringBuffer:
    """A TextBuffer over an in-memory string."""

    def __init__(self, text: str, cursor_line: int = 0):
        self._text = text
        self._lines = split_lines(text)
        self._cursor_line = cursor_line

    @classmethod
    def from_file(cls, path: str | Path, cursor_line: int = 0) -> StringBuffer:
        """Load a buffer from a source file."""
        path = Path(path)
        if not path.is_file():
            raise SourceFileNotFoundError(str(path))
        return cls(path.read_text(encoding="utf-8-sig"), cursor_line=cursor_line)

    @property
    def cursor_line(self) -> int:
        return self._cursor_line

    def get_text(self) -> str:
        return self._text

    def line_at(self, line_no: int) -> str:
        return self._lines[line_no]

    def line_count(self) -> int:
        return len(self._lines)

