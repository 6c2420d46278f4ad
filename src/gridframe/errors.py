"""
Exception hierarchy for field ingestion.

Every error carries the source path identifier (when known) and the
offending column, index, row or key so that a failing file can be
diagnosed from the message alone.
"""

from typing import Any


class GridFrameError(Exception):
    """Base class for all gridframe errors."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        prefix = f"{path}: " if path else ""
        super().__init__(f"{prefix}{message}")


class SchemaError(GridFrameError, ValueError):
    """A requested column or header is missing, or field keys collide."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        column: str | None = None,
    ) -> None:
        self.column = column
        super().__init__(message, path=path)


class RangeError(GridFrameError, IndexError):
    """A reserved column index is out of bounds or used by two roles."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        index: Any = None,
    ) -> None:
        self.index = index
        super().__init__(message, path=path)


class ParseError(GridFrameError, ValueError):
    """A cell cannot be decoded, or a row does not match the column count."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        row: int | None = None,
        column: str | int | None = None,
        text: str | None = None,
    ) -> None:
        self.row = row
        self.column = column
        self.text = text
        super().__init__(message, path=path)


class FieldLookupError(GridFrameError, KeyError):
    """Read-only access to a key that is not present in a GridFrame."""

    def __init__(self, key: Any, *, path: str | None = None) -> None:
        self.key = key
        super().__init__(f"no field named {key!r}", path=path)

    def __str__(self) -> str:
        # KeyError would otherwise render the message with quotes
        return str(self.args[0])


class BuilderConsumedError(GridFrameError, RuntimeError):
    """A GridBuilder was used after build() was called."""


class SourceConsumedError(GridFrameError, RuntimeError):
    """A single-pass tabular source was traversed twice."""
