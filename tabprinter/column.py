"""
Column model: header, fixed width and alignment, plus cell fitting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import InvalidWidth
from .width import has_line_breaking, pad, sanitize, truncate

# Appended to truncated cell text, inside the column width.
DEFAULT_MARKER = '…'


class Alignment(Enum):
    """Text justification within a column."""
    LEFT = 'left'
    CENTER = 'center'
    RIGHT = 'right'

    @classmethod
    def parse(cls, value: Union[str, "Alignment"]) -> "Alignment":
        """Accept an Alignment, its name or value, or a one-letter code ('l', 'c', 'r')."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.value[0]):
                return member
        raise ValueError(f"Unknown alignment: {value!r}. Valid: left, center, right")


def validate_width(width: object, header: Optional[str] = None) -> int:
    """Return ``width`` if it is a positive int, else raise InvalidWidth."""
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise InvalidWidth(width, header)
    return width


def validate_marker(marker: object) -> str:
    """Return ``marker`` if it is a string without control characters.

    Raises:
        ValueError: If the marker is not a string, or contains a control
            character or line separator
    """
    if not isinstance(marker, str):
        raise ValueError(f"truncation_marker must be a string, got {marker!r}")
    if has_line_breaking(marker):
        raise ValueError(f"truncation_marker must not contain control characters, got {marker!r}")
    return marker


@dataclass(frozen=True)
class Column:
    """A table column.

    Args:
        header: Header text
        width: Cell width in display columns (excluding padding and borders)
        alignment: How text is justified inside the cell
    """
    header: str
    width: int
    alignment: Alignment = Alignment.LEFT

    def __post_init__(self):
        validate_width(self.width, self.header)

    def fit(self, value: object, marker: str = DEFAULT_MARKER) -> str:
        """Fit a value to exactly ``width`` display columns.

        Long values are truncated with ``marker`` appended inside the width
        (hard truncation if the marker is empty or wider than the column).
        Short values are padded according to the column's alignment.
        """
        text = sanitize(str(value))
        text = truncate(text, self.width, marker)
        return pad(text, self.width, self.alignment.value)
