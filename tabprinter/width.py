"""
Display width of text in terminal columns.

All padding and truncation goes through this module so that multi-byte
and double-width characters keep borders aligned.
"""

import unicodedata
from typing import Tuple

# Characters at or above this code point are emoji/pictographs rendered two
# columns wide by most terminals.
_EMOJI_START = 0x1F300

_ZERO_WIDTH_CATEGORIES = ('Mn', 'Me', 'Cf')


def char_width(char: str) -> int:
    """Number of terminal columns occupied by a single character.

    Combining marks and format characters (e.g. zero-width joiner) take no
    space; wide, fullwidth and emoji characters take two. Everything else,
    including East Asian ambiguous characters such as box-drawing glyphs,
    takes one.
    """
    if unicodedata.category(char) in _ZERO_WIDTH_CATEGORIES:
        return 0
    if ord(char) >= _EMOJI_START:
        return 2
    if unicodedata.east_asian_width(char) in ('W', 'F'):
        return 2
    return 1


def display_width(text: str) -> int:
    """Calculate the visible width of a string in terminal columns."""
    return sum(char_width(c) for c in text)


# Control characters and the Unicode line/paragraph separators.
_LINE_BREAKING_CATEGORIES = ('Cc', 'Zl', 'Zp')


def has_line_breaking(text: str) -> bool:
    """True if text contains a control character or U+2028/U+2029."""
    return any(unicodedata.category(c) in _LINE_BREAKING_CATEGORIES for c in text)


def sanitize(text: str) -> str:
    """Replace control characters (tabs, newlines, ...) with single spaces.

    A newline inside a cell would otherwise split the row across lines.
    U+2028 and U+2029 are treated the same way.
    """
    if text.isprintable():
        return text
    return ''.join(
        ' ' if unicodedata.category(c) in _LINE_BREAKING_CATEGORIES else c for c in text
    )


def take_width(text: str, budget: int) -> Tuple[str, int]:
    """Longest prefix of ``text`` that fits in ``budget`` columns.

    Returns:
        Tuple of (prefix, width of prefix). Zero-width characters that
        follow the last kept character are kept with it.
    """
    used = 0
    end = 0
    for i, char in enumerate(text):
        w = char_width(char)
        if used + w > budget:
            break
        used += w
        end = i + 1
    return text[:end], used


def pad(text: str, width: int, align: str = 'left') -> str:
    """Pad ``text`` with spaces to exactly ``width`` columns.

    Text already at or beyond ``width`` is returned unchanged.

    Args:
        text: Text to pad.
        width: Target display width.
        align: 'left' pads on the right, 'right' pads on the left, and
            'center' puts floor(gap / 2) on the left and the rest on the
            right.
    """
    gap = width - display_width(text)
    if gap <= 0:
        return text
    if align == 'right':
        return ' ' * gap + text
    if align == 'center':
        left = gap // 2
        return ' ' * left + text + ' ' * (gap - left)
    return text + ' ' * gap


def truncate(text: str, width: int, marker: str = '') -> str:
    """Cut ``text`` down to at most ``width`` columns.

    When truncation happens and ``marker`` fits in ``width``, the marker is
    appended inside the budget. Text that already fits is returned as is.
    """
    if display_width(text) <= width:
        return text
    marker_width = display_width(marker)
    if marker_width > width:
        marker, marker_width = '', 0
    head, _ = take_width(text, width - marker_width)
    return head + marker
