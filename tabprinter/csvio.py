"""
CSV import/export for tables.

The first CSV record becomes the column headers; every following record
becomes a row.
"""

import csv
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Iterator, Optional, Sequence, Union

from .column import Alignment
from .errors import ColumnCountMismatch
from .styles import TableStyle
from .table import Table

logger = logging.getLogger("tabprinter.csvio")

PathOrFile = Union[str, Path, IO[str]]


@contextmanager
def _open(source: PathOrFile, mode: str) -> Iterator[IO[str]]:
    if isinstance(source, (str, Path)):
        with open(source, mode, newline='', encoding='utf-8') as f:
            yield f
    else:
        yield source


def table_from_csv(
    source: PathOrFile,
    width: int = 10,
    style: Union[TableStyle, str] = TableStyle.SIMPLE,
    alignment: Union[Alignment, str] = Alignment.LEFT,
    widths: Optional[Sequence[int]] = None,
    alignments: Optional[Sequence[Union[Alignment, str]]] = None,
    **table_kwargs: Any,
) -> Table:
    """
    Read a table from CSV.

    Args:
        source: Path or open text file
        width: Width of every column not listed in ``widths``
        style: Table style
        alignment: Alignment of every column not listed in ``alignments``
        widths: Per-column widths, in column order
        alignments: Per-column alignments, in column order
        **table_kwargs: Passed to Table (truncation_marker, padding, ...)

    Returns:
        Table with one column per header field

    Raises:
        InvalidWidth: If a width is not a positive integer
        ColumnCountMismatch: If a record's field count differs from the
            header's (message includes the CSV line number)
    """
    table = Table(style, **table_kwargs)
    with _open(source, 'r') as f:
        reader = csv.reader(f)
        headers = next(reader, None)
        if headers is None:
            return table
        for i, header in enumerate(headers):
            col_width = widths[i] if widths is not None and i < len(widths) else width
            col_align = (alignments[i] if alignments is not None and i < len(alignments)
                         else alignment)
            table.add_column(header, col_width, col_align)
        for record in reader:
            if not record:
                continue
            try:
                table.add_row(record)
            except ColumnCountMismatch as e:
                raise ColumnCountMismatch(
                    e.expected, e.actual,
                    f"CSV line {reader.line_num}: expected {e.expected} fields, got {e.actual}",
                ) from e
    logger.debug("Read %d columns and %d rows from CSV", len(table.columns), len(table))
    return table


def table_to_csv(table: Table, dest: PathOrFile) -> None:
    """Write the header row then every data row as CSV."""
    if isinstance(dest, (str, Path)):
        Path(dest).parent.mkdir(parents=True, exist_ok=True)
    with _open(dest, 'w') as f:
        writer = csv.writer(f)
        writer.writerow(table.headers)
        writer.writerows(table.rows)
