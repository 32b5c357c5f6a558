"""
Renderers that materialize a LinePlan.

render_plain joins segment text; render_color wraps each segment in the
palette color for its role. Stripping ANSI codes from the color output
reproduces the plain output exactly.
"""

import io
import logging
from typing import Any, Optional

from .ansi import DEFAULT_PALETTE, Palette
from .errors import RenderIOError
from .layout import Line, LinePlan, line_text

logger = logging.getLogger("tabprinter.render")


def plain_line(line: Line) -> str:
    return line_text(line) + '\n'


def color_line(line: Line, palette: Palette = DEFAULT_PALETTE) -> str:
    return ''.join(palette.for_role(seg.role).apply(seg.text) for seg in line) + '\n'


def render_plain(plan: LinePlan) -> str:
    """Plain text of a plan, one newline-terminated line per plan line."""
    return ''.join(plain_line(line) for line in plan)


def render_color(plan: LinePlan, palette: Optional[Palette] = None) -> str:
    """ANSI-colored text of a plan."""
    palette = palette or DEFAULT_PALETTE
    return ''.join(color_line(line, palette) for line in plan)


def _is_binary(sink: Any) -> bool:
    if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(sink, 'mode', '')
    return isinstance(mode, str) and 'b' in mode


def write_text(sink: Any, text: str) -> None:
    """Write text to a text or binary sink.

    Raises:
        RenderIOError: If the sink raises OSError or ValueError (e.g. closed)
    """
    try:
        sink.write(text.encode('utf-8') if _is_binary(sink) else text)
    except (OSError, ValueError) as e:
        raise RenderIOError(f"Failed to write table output: {e}") from e


def flush_sink(sink: Any) -> None:
    flush = getattr(sink, 'flush', None)
    if flush is None:
        return
    try:
        flush()
    except (OSError, ValueError) as e:
        raise RenderIOError(f"Failed to flush table output: {e}") from e


def write_plan(
    plan: LinePlan,
    sink: Any,
    color: bool = False,
    palette: Optional[Palette] = None,
) -> None:
    """Write a plan to a sink line by line.

    Args:
        plan: Lines to write
        sink: Text stream (anything with ``write(str)``) or binary stream
            (written UTF-8 encoded)
        color: Emit ANSI colors
        palette: Colors for color output (default palette if None)

    Raises:
        RenderIOError: If the sink rejects a write. Lines already written
            stay written.
    """
    palette = palette or DEFAULT_PALETTE
    logger.debug("Writing %d lines (color=%s)", len(plan), color)
    for line in plan:
        write_text(sink, color_line(line, palette) if color else plain_line(line))
    flush_sink(sink)
