"""
Layout engine: turns columns, rows and a style into a LinePlan.

A LinePlan is the structural description of a render: an ordered tuple of
lines, each an ordered tuple of role-tagged segments. Both the plain and
the color renderer consume the same plan, so their layouts cannot diverge.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from .column import DEFAULT_MARKER, Column
from .styles import LineStyle, StyleDef
from .width import display_width

logger = logging.getLogger("tabprinter.layout")


class Role(Enum):
    """What a segment of a line represents; selects its color."""
    BORDER = 'border'
    HEADER = 'header'
    CELL = 'cell'


@dataclass(frozen=True)
class Segment:
    text: str
    role: Role


Line = Tuple[Segment, ...]
LinePlan = Tuple[Line, ...]


def line_text(line: Line) -> str:
    """Plain text of a single line."""
    return ''.join(seg.text for seg in line)


def line_width(columns: Sequence[Column], style: StyleDef, padding: int = 0) -> int:
    """Display width shared by every line of a plan.

    sum(widths) + 2 * padding per column + begin + end + one separator
    between each pair of columns.
    """
    if not columns:
        return 0
    row = style.row
    return (
        sum(c.width + 2 * padding for c in columns)
        + display_width(row.begin)
        + display_width(row.end)
        + display_width(row.sep) * (len(columns) - 1)
    )


def _border(text: str) -> List[Segment]:
    return [Segment(text, Role.BORDER)] if text else []


def _rule(glyphs: LineStyle, widths: Sequence[int]) -> Line:
    """Horizontal rule: hline repeated over each cell, junctions between."""
    segments: List[Segment] = _border(glyphs.begin)
    for i, w in enumerate(widths):
        if i > 0:
            segments.extend(_border(glyphs.sep))
        segments.extend(_border(glyphs.hline * w))
    segments.extend(_border(glyphs.end))
    return tuple(segments)


def _cells(
    glyphs: LineStyle,
    columns: Sequence[Column],
    values: Sequence[object],
    role: Role,
    padding: int,
    marker: str,
) -> Line:
    """Text line: fitted cells framed by the row glyphs."""
    space = ' ' * padding
    segments: List[Segment] = _border(glyphs.begin)
    for i, (column, value) in enumerate(zip(columns, values)):
        if i > 0:
            segments.extend(_border(glyphs.sep))
        segments.append(Segment(space + column.fit(value, marker) + space, role))
    segments.extend(_border(glyphs.end))
    return tuple(segments)


def build_plan(
    columns: Sequence[Column],
    rows: Iterable[Sequence[object]],
    style: StyleDef,
    padding: int = 0,
    marker: str = DEFAULT_MARKER,
) -> LinePlan:
    """Compute the lines of a table.

    Order: top rule (banner styles), header, header separator (styles
    that have one), one line per row, bottom rule (banner styles).
    No columns gives an empty plan; no rows still gives header and rules.

    Args:
        columns: Columns in display order
        rows: Rows of cell values, each as long as ``columns``
        style: Glyphs and flags
        padding: Spaces added on each side of every cell
        marker: Truncation marker passed to Column.fit
    """
    if not columns:
        return ()

    widths = [c.width + 2 * padding for c in columns]
    lines: List[Line] = []

    if style.has_banner:
        lines.append(_rule(style.top, widths))
    lines.append(_cells(style.row, columns, [c.header for c in columns],
                        Role.HEADER, padding, marker))
    if style.has_header_separator:
        lines.append(_rule(style.below_header, widths))
    for row in rows:
        lines.append(_cells(style.row, columns, row, Role.CELL, padding, marker))
    if style.has_banner:
        lines.append(_rule(style.bottom, widths))

    logger.debug("Built plan: %d lines, %d columns, width %d",
                 len(lines), len(columns), line_width(columns, style, padding))
    return tuple(lines)
