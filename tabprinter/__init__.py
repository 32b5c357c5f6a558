"""
tabprinter: formatted terminal tables with multiple styles and ANSI color.

Columns have caller-specified widths and alignments; each style is a fixed
set of border glyphs. A table is laid out once into a LinePlan and then
rendered as plain text or as ANSI-colored text with the same layout.

Example usage:
    from tabprinter import Table, TableStyle, Alignment

    table = Table(TableStyle.FANCY_GRID, padding=1)
    table.add_column("Name", 10, Alignment.LEFT)
    table.add_column("Age", 5, Alignment.RIGHT)
    table.add_row(["Alice", "30"])
    table.print()                      # color when stdout is a terminal
    text = table.render_plain()        # plain string

CLI usage:
    python -m tabprinter data.csv --style round
"""

from .ansi import (
    ColorSpec,
    Palette,
    DEFAULT_PALETTE,
    strip_ansi,
    supports_color,
)

from .errors import (
    TableError,
    InvalidWidth,
    ColumnCountMismatch,
    UnknownStyle,
    InvalidColor,
    ConfigError,
    RenderIOError,
)

from .styles import (
    TableStyle,
    LineStyle,
    StyleDef,
    parse_style,
    style_definition,
)

from .width import display_width
from .column import Alignment, Column, DEFAULT_MARKER
from .layout import Role, Segment, Line, LinePlan, build_plan, line_width
from .render import render_plain, render_color, write_plan
from .table import Table
from .csvio import table_from_csv, table_to_csv

from .config import (
    TableConfig,
    ColumnSpec,
    load_config,
    save_config,
    validate_config,
)

__all__ = [
    # Colors
    'ColorSpec',
    'Palette',
    'DEFAULT_PALETTE',
    'strip_ansi',
    'supports_color',
    # Errors
    'TableError',
    'InvalidWidth',
    'ColumnCountMismatch',
    'UnknownStyle',
    'InvalidColor',
    'ConfigError',
    'RenderIOError',
    # Styles
    'TableStyle',
    'LineStyle',
    'StyleDef',
    'parse_style',
    'style_definition',
    # Model
    'display_width',
    'Alignment',
    'Column',
    'DEFAULT_MARKER',
    'Table',
    # Layout and rendering
    'Role',
    'Segment',
    'Line',
    'LinePlan',
    'build_plan',
    'line_width',
    'render_plain',
    'render_color',
    'write_plan',
    # CSV
    'table_from_csv',
    'table_to_csv',
    # Config
    'TableConfig',
    'ColumnSpec',
    'load_config',
    'save_config',
    'validate_config',
]

__version__ = '0.1.0'
