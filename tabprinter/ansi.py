"""
ANSI color primitives for terminal output.

Color is an overlay: every styled span is ``SGR + text + RESET`` so that
stripping escape sequences gives back the plain text byte for byte.
"""

import os
import re
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import InvalidColor

RESET = '\033[0m'

_COLOR_NAMES = ('black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white')

# Foreground SGR codes; background is foreground + 10.
FG_CODES: Dict[str, int] = {name: 30 + i for i, name in enumerate(_COLOR_NAMES)}
FG_CODES.update({f'bright_{name}': 90 + i for i, name in enumerate(_COLOR_NAMES)})

_ANSI_RE = re.compile(r'\033\[[0-9;]*m')


def supports_color(stream: Any = None) -> bool:
    """Detect whether a stream supports ANSI color output.

    Respects NO_COLOR (https://no-color.org/) and FORCE_COLOR env vars.
    Defaults to sys.stdout.
    """
    if os.environ.get('NO_COLOR') is not None:
        return False
    if os.environ.get('FORCE_COLOR') is not None:
        return True
    if stream is None:
        stream = sys.stdout
    if not hasattr(stream, 'isatty'):
        return False
    return stream.isatty()


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from text."""
    return _ANSI_RE.sub('', text)


def color_errors(**colors: Any) -> List[str]:
    """Messages for every keyword value that is not None or a known color."""
    errors = []
    for attr, value in colors.items():
        if value is not None and (not isinstance(value, str) or value not in FG_CODES):
            errors.append(f"Unknown color '{value}' for {attr}. "
                          f"Valid colors: {', '.join(FG_CODES)}")
    return errors


@dataclass(frozen=True)
class ColorSpec:
    """Foreground/background color and attributes for one kind of segment.

    Args:
        fg: Foreground color name (e.g. 'blue', 'bright_cyan') or None
        bg: Background color name or None
        bold: Bold text
        dim: Faint text
        underline: Underlined text

    Raises:
        InvalidColor: If fg or bg is not a known color name
    """
    fg: Optional[str] = None
    bg: Optional[str] = None
    bold: bool = False
    dim: bool = False
    underline: bool = False

    def __post_init__(self):
        errors = color_errors(fg=self.fg, bg=self.bg)
        if errors:
            raise InvalidColor(errors)

    def sgr(self) -> str:
        """Escape sequence that switches this color on, or '' for no color."""
        codes: List[str] = []
        if self.bold:
            codes.append('1')
        if self.dim:
            codes.append('2')
        if self.underline:
            codes.append('4')
        if self.fg is not None:
            codes.append(str(FG_CODES[self.fg]))
        if self.bg is not None:
            codes.append(str(FG_CODES[self.bg] + 10))
        if not codes:
            return ''
        return '\033[' + ';'.join(codes) + 'm'

    def apply(self, text: str) -> str:
        """Wrap text in this color. Empty text and empty specs pass through."""
        seq = self.sgr()
        if not seq or not text:
            return text
        return f"{seq}{text}{RESET}"

    def to_dict(self) -> dict:
        d: Dict[str, Any] = {}
        if self.fg is not None:
            d['fg'] = self.fg
        if self.bg is not None:
            d['bg'] = self.bg
        for flag in ('bold', 'dim', 'underline'):
            if getattr(self, flag):
                d[flag] = True
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "ColorSpec":
        return cls(
            fg=data.get('fg'),
            bg=data.get('bg'),
            bold=bool(data.get('bold', False)),
            dim=bool(data.get('dim', False)),
            underline=bool(data.get('underline', False)),
        )


@dataclass(frozen=True)
class Palette:
    """Colors used for each segment role of a rendered table."""
    border: ColorSpec = field(default_factory=lambda: ColorSpec(dim=True))
    header: ColorSpec = field(default_factory=lambda: ColorSpec(fg='cyan', bold=True))
    cell: ColorSpec = field(default_factory=ColorSpec)

    def for_role(self, role: Any) -> ColorSpec:
        """ColorSpec for a layout role (anything whose ``value`` names a field)."""
        return getattr(self, role.value)

    def to_dict(self) -> dict:
        return {
            'border': self.border.to_dict(),
            'header': self.header.to_dict(),
            'cell': self.cell.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict, base: Optional["Palette"] = None) -> "Palette":
        """Build a palette, taking roles missing from ``data`` from ``base``."""
        base = base or cls()
        return cls(
            border=ColorSpec.from_dict(data['border']) if 'border' in data else base.border,
            header=ColorSpec.from_dict(data['header']) if 'header' in data else base.header,
            cell=ColorSpec.from_dict(data['cell']) if 'cell' in data else base.cell,
        )


DEFAULT_PALETTE = Palette()
