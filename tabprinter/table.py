"""
Table model: ordered columns and rows, plus the render entry points.

Example usage:
    from tabprinter import Table, TableStyle, Alignment

    table = Table(TableStyle.ROUND)
    table.add_column("Name", 10, Alignment.LEFT)
    table.add_column("Age", 5, Alignment.RIGHT)
    table.add_row(["Alice", "30"])
    print(table.render_plain(), end="")
"""

import logging
import math
import sys
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .ansi import DEFAULT_PALETTE, Palette, supports_color
from .column import DEFAULT_MARKER, Alignment, Column, validate_marker, validate_width
from .errors import ColumnCountMismatch
from .layout import LinePlan, build_plan, line_width
from .render import flush_sink, render_color, render_plain, write_plan, write_text
from .styles import StyleDef, TableStyle, parse_style, style_definition

logger = logging.getLogger("tabprinter.table")

ColumnKey = Union[int, str]


def _sort_key(value: str) -> Tuple[int, Any]:
    """Numbers compare numerically and come before text."""
    try:
        number = float(value)
    except ValueError:
        return (1, value)
    if math.isnan(number):
        return (1, value)
    return (0, number)


class Table:
    """
    A table of fixed-width columns and string rows.

    Columns and rows are append-only. Sorting, filtering and paging return
    new tables that share the columns and settings.

    Args:
        style: Visual style (TableStyle or its name)
        truncation_marker: Appended to truncated cells; '' hard-truncates
        padding: Spaces on each side of every cell
        page_size: Rows per page for pages()/print_paginated (None = one page)
        palette: Colors for color output; defaults to the style's palette,
            then the default palette
    """

    def __init__(
        self,
        style: Union[TableStyle, str] = TableStyle.SIMPLE,
        *,
        truncation_marker: str = DEFAULT_MARKER,
        padding: int = 0,
        page_size: Optional[int] = None,
        palette: Optional[Palette] = None,
    ):
        if isinstance(padding, bool) or not isinstance(padding, int) or padding < 0:
            raise ValueError(f"padding must be a non-negative integer, got {padding!r}")
        self.style = parse_style(style)
        self.truncation_marker = validate_marker(truncation_marker)
        self.padding = padding
        self.palette = palette
        self.page_size: Optional[int] = None
        if page_size is not None:
            self.set_page_size(page_size)
        self._columns: List[Column] = []
        self._rows: List[Tuple[str, ...]] = []

    def __repr__(self) -> str:
        return (f"Table(style={self.style.value}, columns={len(self._columns)}, "
                f"rows={len(self._rows)})")

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def columns(self) -> Tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def rows(self) -> Tuple[Tuple[str, ...], ...]:
        return tuple(self._rows)

    @property
    def headers(self) -> List[str]:
        return [c.header for c in self._columns]

    @property
    def style_def(self) -> StyleDef:
        return style_definition(self.style)

    @property
    def width(self) -> int:
        """Display width of every rendered line."""
        return line_width(self._columns, self.style_def, self.padding)

    def effective_palette(self) -> Palette:
        """Explicit palette, else the style's own, else the default."""
        return self.palette or self.style_def.palette or DEFAULT_PALETTE

    # --- Construction ---

    def add_column(
        self,
        header: str,
        width: int,
        alignment: Union[Alignment, str] = Alignment.LEFT,
    ) -> Column:
        """Append a column.

        Raises:
            InvalidWidth: If width is not a positive integer
            ColumnCountMismatch: If rows were already added (they would
                become one cell short)
        """
        validate_width(width, header)
        if self._rows:
            raise ColumnCountMismatch(
                len(self._columns), len(self._columns) + 1,
                f"Cannot add column '{header}' after rows: existing rows have "
                f"{len(self._columns)} cells",
            )
        column = Column(str(header), width, Alignment.parse(alignment))
        self._columns.append(column)
        logger.debug("Added column %r (width=%d, %s)", column.header, width,
                     column.alignment.value)
        return column

    def add_row(self, cells: Sequence[Any]) -> None:
        """Append a row of cells; non-string values are converted with str().

        Raises:
            ColumnCountMismatch: If len(cells) differs from the column count
        """
        if isinstance(cells, str):
            raise TypeError("Row must be a sequence of cells, not a string")
        cells = tuple(str(c) for c in cells)
        if len(cells) != len(self._columns):
            raise ColumnCountMismatch(len(self._columns), len(cells))
        self._rows.append(cells)
        logger.debug("Added row %d", len(self._rows))

    def add_rows(self, rows: Iterable[Sequence[Any]]) -> None:
        for row in rows:
            self.add_row(row)

    # --- Rendering ---

    def plan(self) -> LinePlan:
        return build_plan(self._columns, self._rows, self.style_def,
                          self.padding, self.truncation_marker)

    def render_plain(self) -> str:
        """Render as plain text. Color-only styles fall back to their plain glyphs."""
        return render_plain(self.plan())

    def render_color(self, palette: Optional[Palette] = None) -> str:
        """Render with ANSI colors."""
        return render_color(self.plan(), palette or self.effective_palette())

    def write_plain(self, sink: Any) -> None:
        """Write plain text to a sink. Raises RenderIOError on write failure."""
        write_plan(self.plan(), sink)

    def write_color(self, sink: Any, palette: Optional[Palette] = None) -> None:
        """Write ANSI-colored text to a sink. Raises RenderIOError on write failure."""
        write_plan(self.plan(), sink, color=True,
                   palette=palette or self.effective_palette())

    def print(self, sink: Any = None, color: Optional[bool] = None) -> None:
        """Write the table to a sink (default stdout).

        Args:
            sink: Output stream
            color: Force color on/off; None detects terminal support
        """
        sink = sink if sink is not None else sys.stdout
        if color is None:
            color = supports_color(sink)
        if color:
            self.write_color(sink)
        else:
            self.write_plain(sink)

    # --- Derived tables ---

    def _derive(self, rows: Iterable[Tuple[str, ...]]) -> "Table":
        table = Table(
            self.style,
            truncation_marker=self.truncation_marker,
            padding=self.padding,
            page_size=self.page_size,
            palette=self.palette,
        )
        table._columns = list(self._columns)
        table._rows = list(rows)
        return table

    def column_index(self, key: ColumnKey) -> int:
        """Index of a column given its index or header.

        Raises:
            IndexError: If an integer index is out of range
            KeyError: If no column has that header
        """
        if isinstance(key, int) and not isinstance(key, bool):
            if not -len(self._columns) <= key < len(self._columns):
                raise IndexError(f"Column index {key} out of range "
                                 f"(table has {len(self._columns)} columns)")
            return key % len(self._columns)
        headers = self.headers
        if key not in headers:
            raise KeyError(f"No column with header {key!r}. Columns: {headers}")
        return headers.index(key)

    def sorted_by(self, column: ColumnKey, ascending: bool = True) -> "Table":
        """New table with rows sorted by one column.

        Numeric cells sort numerically and come before non-numeric cells
        in both directions; ``ascending`` orders within each group. The
        sort is stable.
        """
        idx = self.column_index(column)
        keyed = [(_sort_key(row[idx]), row) for row in self._rows]
        groups = []
        for group in (0, 1):
            members = [(key, row) for key, row in keyed if key[0] == group]
            members.sort(key=lambda item: item[0][1], reverse=not ascending)
            groups.extend(row for _, row in members)
        return self._derive(groups)

    def filter(self, predicate: Callable[[Tuple[str, ...]], bool]) -> "Table":
        """New table with only the rows for which predicate(row) is true."""
        return self._derive(row for row in self._rows if predicate(row))

    # --- Pagination ---

    def set_page_size(self, page_size: int) -> None:
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ValueError(f"page_size must be a positive integer, got {page_size!r}")
        self.page_size = page_size

    def page_count(self) -> int:
        """Number of pages; a table without rows has one (header-only) page."""
        if self.page_size is None or not self._rows:
            return 1
        return math.ceil(len(self._rows) / self.page_size)

    def pages(self) -> Iterator["Table"]:
        """Yield one derived table per page."""
        size = self.page_size or max(len(self._rows), 1)
        for page in range(self.page_count()):
            yield self._derive(self._rows[page * size:(page + 1) * size])

    def print_paginated(
        self,
        sink: Any = None,
        color: Optional[bool] = None,
        pause: Optional[Callable[[], Any]] = None,
    ) -> None:
        """Print page by page, each preceded by a 'Page i of n' line.

        Args:
            sink: Output stream (default stdout)
            color: Force color on/off; None detects terminal support
            pause: Called between pages (e.g. to wait for Enter)
        """
        sink = sink if sink is not None else sys.stdout
        total = self.page_count()
        for number, page in enumerate(self.pages(), start=1):
            write_text(sink, f"Page {number} of {total}\n")
            page.print(sink, color=color)
            if pause is not None and number < total:
                flush_sink(sink)
                pause()

    # --- CSV ---

    @classmethod
    def from_csv(cls, source: Any, width: int = 10, **kwargs: Any) -> "Table":
        """Build a table from CSV; see csvio.table_from_csv."""
        from .csvio import table_from_csv
        return table_from_csv(source, width=width, **kwargs)

    def to_csv(self, dest: Any) -> None:
        """Write header and rows as CSV; see csvio.table_to_csv."""
        from .csvio import table_to_csv
        table_to_csv(self, dest)
