"""Bitmap font glyph tables and text width measurement."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

GLYPH_MASK = 0xF800
NEWLINE_GLYPH_ID = 0x07FF
_NO_PREVIOUS_GLYPH = 0xFFFF


@dataclass(frozen=True)
class GlyphInfo:
    """Placement and metrics of one glyph in the font texture."""

    char_id: int
    x0: int = 0
    x1: int = 0
    y0: int = 0
    y1: int = 0
    y_offset: int = 0
    width: int = 0
    kern_id: int = 0


@dataclass(frozen=True)
class GlyphKernPair:
    """Adjustment applied when ``glyph2`` follows ``glyph1``."""

    glyph1: int
    glyph2: int
    kern: int


@dataclass
class Font:
    """A font: glyphs, kerning pairs grouped by second glyph, and a byte-to-glyph table."""

    glyphs: list[GlyphInfo]
    kerns: list[GlyphKernPair] = field(default_factory=list)
    ansi_to_glyph: list[int] = field(default_factory=lambda: [0] * 256)

    def __post_init__(self) -> None:
        if len(self.ansi_to_glyph) != 256:
            raise ValueError("ansi_to_glyph must have 256 entries")

    @property
    def num_glyphs(self) -> int:
        return len(self.glyphs)


def _trunc_div16(value: int) -> int:
    return -((-value) // 16) if value < 0 else value // 16


def _kern_adjust(font: Font, glyph_id: int, prev_glyph: int, interlaced: bool) -> int:
    kern_id = font.glyphs[glyph_id].kern_id
    while 0 <= kern_id < len(font.kerns) and font.kerns[kern_id].glyph2 == glyph_id:
        pair = font.kerns[kern_id]
        if pair.glyph1 == prev_glyph:
            return pair.kern * (16 if interlaced else 8)
        kern_id += 1
    return 0


def _codes(text: str | Sequence[int]) -> list[int]:
    codes = [ord(c) for c in text] if isinstance(text, str) else list(text)
    if 0 in codes:
        codes = codes[: codes.index(0)]
    return codes


def chars_to_glyphs(font: Font, text: str | Sequence[int]) -> list[int]:
    """Map characters to masked glyph codes; text already in glyph form is returned as is."""
    codes = _codes(text)
    if codes and (codes[0] & GLYPH_MASK) == GLYPH_MASK:
        return codes

    result = []
    for char_id in codes:
        glyph_id = NEWLINE_GLYPH_ID
        if char_id != 10:
            glyph_id = next(
                (idx for idx, glyph in enumerate(font.glyphs) if glyph.char_id == char_id), 0
            )
        result.append(glyph_id | GLYPH_MASK)
    return result


def measure_text_w(font: Font, text: str | Sequence[int], n_chars: int, interlaced: bool) -> int:
    """Width in pixels of the first ``n_chars`` characters of a wide string."""
    if n_chars == 0:
        return 0

    width = 0
    prev_glyph = _NO_PREVIOUS_GLYPH
    for code in chars_to_glyphs(font, text)[: max(n_chars, 0)]:
        glyph_id = code & ~GLYPH_MASK
        if glyph_id != NEWLINE_GLYPH_ID:
            glyph_width = font.glyphs[glyph_id].width
            if glyph_id != 0:
                width += _kern_adjust(font, glyph_id, prev_glyph, interlaced)
            width += glyph_width * 16
        prev_glyph = glyph_id
    return _trunc_div16(width)


def measure_text(font: Font, text: str | bytes, interlaced: bool) -> int:
    """Width in pixels of a byte string.

    Each position is measured using the glyph of the first character.
    """
    data = text.encode("latin-1") if isinstance(text, str) else bytes(text)
    data = data.split(b"\0", 1)[0]
    if not data:
        return 0

    glyph_id = font.ansi_to_glyph[data[0]]
    width = 0
    prev_glyph = -1
    for _ in data:
        if glyph_id > 0:
            width += _kern_adjust(font, glyph_id, prev_glyph, interlaced)
            width += font.glyphs[glyph_id].width * 16
        else:
            width += font.glyphs[0].width * 16
        prev_glyph = glyph_id
    return _trunc_div16(width)