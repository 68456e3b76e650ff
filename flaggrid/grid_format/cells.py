"""
Cell types and display-width measurement for grid text.

Width convention: one unit per grapheme cluster. A flag (pair of regional
indicator symbols) counts 1, and so does any emoji built from a base plus
variation selectors, skin-tone modifiers, tag characters or ZWJ joins.
"""
import unicodedata
from dataclasses import dataclass

from ..exceptions import MalformedGridError

SENTINEL = '❌ -'

ZWJ = '\u200d'
REGIONAL_INDICATORS = range(0x1F1E6, 0x1F200)
VARIATION_SELECTORS = range(0xFE00, 0xFE10)
SKIN_TONE_MODIFIERS = range(0x1F3FB, 0x1F400)
TAG_CHARACTERS = range(0xE0020, 0xE0080)


@dataclass(frozen=True)
class Country:
    """A cell holding a flag emoji and a country name."""
    emoji: str
    name: str

    def __post_init__(self):
        if display_width(self.emoji) != 1 or ' ' in self.emoji:
            raise ValueError(f"emoji must be a single grapheme: {self.emoji!r}")
        if not self.name.strip():
            raise ValueError('name must not be empty')
        if (self.name != self.name.strip() or '  ' in self.name
                or any(c in self.name for c in '\n\r\t')):
            raise ValueError(f"name must be words joined by single spaces: {self.name!r}")


class EmptyCell:
    """A grid slot without a country."""

    def __repr__(self):
        return 'EMPTY'


EMPTY = EmptyCell()


def _is_extender(code_point: int) -> bool:
    if code_point in VARIATION_SELECTORS:
        return True
    if code_point in SKIN_TONE_MODIFIERS or code_point in TAG_CHARACTERS:
        return True
    return unicodedata.category(chr(code_point)) in ('Mn', 'Me')


def display_width(text: str) -> int:
    """Count grapheme clusters in ``text``."""
    width = 0
    pending_indicator = False
    joined = False
    for char in text:
        code_point = ord(char)
        if char == ZWJ:
            joined = True
            continue
        if joined:
            joined = False
            continue
        if _is_extender(code_point):
            continue
        if code_point in REGIONAL_INDICATORS:
            # Two indicators form one flag
            if pending_indicator:
                pending_indicator = False
                continue
            pending_indicator = True
        else:
            pending_indicator = False
        width += 1
    return width


def render_cell(cell) -> str:
    """Render one cell before padding."""
    if cell is EMPTY:
        return SENTINEL
    if isinstance(cell, Country):
        return f"{cell.emoji} {cell.name}"
    raise MalformedGridError(f"Not a grid cell: {cell!r}")
