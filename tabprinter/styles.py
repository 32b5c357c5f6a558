"""
Registry of table styles.

Each style is a flat, immutable record of glyphs and structural flags.
Adding a style is a pure data change: append to ``TableStyle`` and
``_STYLES``. Existing entries must never change their output.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from .ansi import ColorSpec, Palette
from .errors import UnknownStyle


class TableStyle(Enum):
    """Named visual variants of a table."""
    SIMPLE = 'simple'
    GRID = 'grid'
    FANCY_GRID = 'fancy_grid'
    CLEAN = 'clean'
    ROUND = 'round'
    BANNER = 'banner'
    BLOCK = 'block'
    AMIGA = 'amiga'
    MINIMAL = 'minimal'
    COMPACT = 'compact'
    MARKDOWN = 'markdown'
    DOTTED = 'dotted'
    HEAVY = 'heavy'
    NEON = 'neon'


@dataclass(frozen=True)
class LineStyle:
    """Glyphs for one kind of line.

    For rule lines ``hline`` is repeated across each cell; for the row
    line style it is unused and cells carry the text.
    """
    begin: str = ''
    hline: str = ''
    sep: str = ''
    end: str = ''


@dataclass(frozen=True)
class StyleDef:
    """Glyph set and structural flags of a table style.

    Args:
        top: Rule drawn above the header (when has_banner)
        below_header: Rule drawn between header and data (when has_header_separator)
        bottom: Rule drawn below the last row (when has_banner)
        row: Glyphs framing header and data cells
        has_banner: Emit top and bottom rules
        has_header_separator: Emit the below-header rule
        color_only: The style's look only exists in color output; plain
            output falls back to the glyphs given here
        palette: Colors overriding the renderer's default palette
    """
    top: LineStyle
    below_header: LineStyle
    bottom: LineStyle
    row: LineStyle
    has_banner: bool = True
    has_header_separator: bool = True
    color_only: bool = False
    palette: Optional[Palette] = None


_NO_RULE = LineStyle()

_SIMPLE = StyleDef(
    top=_NO_RULE,
    below_header=_NO_RULE,
    bottom=_NO_RULE,
    row=LineStyle(sep=' '),
    has_banner=False,
    has_header_separator=False,
)

_BOX_ROW = LineStyle('│', '', '│', '│')

_LIGHT_BOX = StyleDef(
    top=LineStyle('┌', '─', '┬', '┐'),
    below_header=LineStyle('├', '─', '┼', '┤'),
    bottom=LineStyle('└', '─', '┴', '┘'),
    row=_BOX_ROW,
)

_HEAVY_BOX = StyleDef(
    top=LineStyle('┏', '━', '┳', '┓'),
    below_header=LineStyle('┣', '━', '╋', '┫'),
    bottom=LineStyle('┗', '━', '┻', '┛'),
    row=LineStyle('┃', '', '┃', '┃'),
)

_STYLES: Dict[TableStyle, StyleDef] = {
    TableStyle.SIMPLE: _SIMPLE,
    TableStyle.GRID: StyleDef(
        top=LineStyle('+', '-', '+', '+'),
        below_header=LineStyle('+', '-', '+', '+'),
        bottom=LineStyle('+', '-', '+', '+'),
        row=LineStyle('|', '', '|', '|'),
    ),
    TableStyle.FANCY_GRID: StyleDef(
        top=LineStyle('╒', '═', '╤', '╕'),
        below_header=LineStyle('╞', '═', '╪', '╡'),
        bottom=LineStyle('╘', '═', '╧', '╛'),
        row=_BOX_ROW,
    ),
    TableStyle.CLEAN: StyleDef(
        top=LineStyle('', '─', ' ', ''),
        below_header=LineStyle('', '─', ' ', ''),
        bottom=LineStyle('', '─', ' ', ''),
        row=LineStyle(sep=' '),
    ),
    TableStyle.ROUND: StyleDef(
        top=LineStyle('╭', '─', '┬', '╮'),
        below_header=LineStyle('├', '─', '┼', '┤'),
        bottom=LineStyle('╰', '─', '┴', '╯'),
        row=_BOX_ROW,
    ),
    TableStyle.BANNER: StyleDef(
        top=LineStyle('╒', '═', '╤', '╕'),
        below_header=LineStyle('╘', '═', '╧', '╛'),
        bottom=LineStyle('╘', '═', '╧', '╛'),
        row=_BOX_ROW,
    ),
    TableStyle.BLOCK: StyleDef(
        top=LineStyle('◢', '■', '■', '◣'),
        below_header=LineStyle(' ', '━', '━', ' '),
        bottom=LineStyle('◥', '■', '■', '◤'),
        row=LineStyle(' ', '', ' ', ' '),
    ),
    # Plain output is the SIMPLE layout; the look comes from the palette.
    TableStyle.AMIGA: StyleDef(
        top=_NO_RULE,
        below_header=_NO_RULE,
        bottom=_NO_RULE,
        row=LineStyle(sep=' '),
        has_banner=False,
        has_header_separator=False,
        color_only=True,
        palette=Palette(
            border=ColorSpec(),
            header=ColorSpec(fg='blue'),
            cell=ColorSpec(fg='white'),
        ),
    ),
    TableStyle.MINIMAL: _LIGHT_BOX,
    TableStyle.COMPACT: _LIGHT_BOX,
    TableStyle.MARKDOWN: StyleDef(
        top=_NO_RULE,
        below_header=LineStyle('|', '-', '|', '|'),
        bottom=_NO_RULE,
        row=LineStyle('|', '', '|', '|'),
        has_banner=False,
    ),
    TableStyle.DOTTED: StyleDef(
        top=LineStyle('.', '.', '.', '.'),
        below_header=LineStyle(':', '.', ':', ':'),
        bottom=LineStyle("'", '.', "'", "'"),
        row=LineStyle(':', '', ':', ':'),
    ),
    TableStyle.HEAVY: _HEAVY_BOX,
    TableStyle.NEON: StyleDef(
        top=_HEAVY_BOX.top,
        below_header=_HEAVY_BOX.below_header,
        bottom=_HEAVY_BOX.bottom,
        row=_HEAVY_BOX.row,
        palette=Palette(
            border=ColorSpec(fg='bright_magenta'),
            header=ColorSpec(fg='bright_cyan', bold=True),
            cell=ColorSpec(fg='bright_green'),
        ),
    ),
}


def parse_style(name: Union[str, TableStyle]) -> TableStyle:
    """Look up a style by name, ignoring case and '-'/'_'/space differences.

    Raises:
        UnknownStyle: If no style has that name
    """
    if isinstance(name, TableStyle):
        return name
    key = str(name).strip().lower().replace('-', '').replace('_', '').replace(' ', '')
    for style in TableStyle:
        if style.value.replace('_', '') == key:
            return style
    raise UnknownStyle(f"Unknown table style: {name!r}. "
                       f"Valid styles: {', '.join(s.value for s in TableStyle)}")


def style_definition(style: Union[str, TableStyle]) -> StyleDef:
    """Return the glyph set and flags for a style.

    Total over ``TableStyle``; strings are resolved with ``parse_style``.
    """
    return _STYLES[parse_style(style)]
