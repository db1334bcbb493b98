"""Exceptions raised by sbdice."""


class SbDiceError(Exception):
    """Base class for all sbdice errors."""


class UnsupportedFileError(SbDiceError):
    """Raised when a file extension has no known grammar."""


class ParseError(SbDiceError):
    """Raised when the source does not parse cleanly."""

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.line = line


class MappingError(SbDiceError):
    """Raised when a placeholder mapping file is malformed."""


class DecodeFailure(SbDiceError):
    """Raised when a string literal's text cannot be decoded to a value.

    Never escapes the syntax layer: the parser records the literal with no
    value and the substitution falls back to the empty string.
    """


class ReadError(SbDiceError):
    """Raised when an input file cannot be read as UTF-8 text."""
