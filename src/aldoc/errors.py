"""Custom exceptions for aldoc.

The documentation core never raises; these are used by the command line and
HTTP surfaces when a request cannot be served at all.
"""


class AldocError(Exception):
    """Base exception for all aldoc errors."""

    pass


class InvalidLocationError(AldocError):
    """Raised when a location spec is invalid."""

    def __init__(self, location: str, reason: str | None = None):
        self.location = location
        msg = f"Invalid location: {location}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class InvalidLineRangeError(AldocError):
    """Raised when a line number is invalid."""

    def __init__(self, line_no: int, reason: str):
        self.line_no = line_no
        super().__init__(f"Invalid line {line_no}: {reason}")


class SourceFileNotFoundError(AldocError):
    """Raised when an AL source file doesn't exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Source file not found: {path}")


class DeclarationNotFoundError(AldocError):
    """Raised when no object or procedure is declared on a line."""

    def __init__(self, line_no: int, line: str):
        self.line_no = line_no
        self.line = line
        super().__init__(
            f"No object or procedure declaration on line {line_no}: {line.strip()!r}"
        )
