"""
Exceptions raised by table construction and rendering.

Every condition is raised synchronously by the call that caused it.
"""

from typing import Optional


class TableError(Exception):
    """Base class for all tabprinter errors."""


class InvalidWidth(TableError, ValueError):
    """A column was declared with a width that is not a positive integer."""

    def __init__(self, width: object, header: Optional[str] = None):
        self.width = width
        self.header = header
        where = f" for column '{header}'" if header is not None else ""
        super().__init__(f"Column width must be a positive integer{where}, got {width!r}")


class ColumnCountMismatch(TableError, ValueError):
    """A row's arity disagrees with the table's column count."""

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        if message is None:
            message = f"Row length must match columns: expected {expected} cells, got {actual}"
        super().__init__(message)


class UnknownStyle(TableError, ValueError):
    """A style name does not match any registered style."""


class InvalidColor(TableError, ValueError):
    """A color spec names a color that is not in the ANSI palette.

    Args:
        errors: One message per unknown color.
    """

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class ConfigError(TableError, ValueError):
    """A table configuration failed validation.

    Args:
        errors: Every validation message found in the config.
    """

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("Invalid table config:\n" + "\n".join(f"  - {e}" for e in self.errors))


class RenderIOError(TableError, OSError):
    """The output sink rejected a write during rendering."""
