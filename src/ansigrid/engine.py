from __future__ import annotations

import enum
import io
import logging
from typing import BinaryIO, Protocol

from ansigrid.charsets import GlyphMap, glyph_to_text
from ansigrid.encoders import AnsiEncoder, TextEncoder, TruecolorEncoder, Xterm256Encoder
from ansigrid.model import Grid, PaletteType

logger = logging.getLogger(__name__)


class Tier(enum.Enum):
    TEXT = "text"
    ANSI = "ansi"
    XTERM256 = "256"
    TRUECOLOR = "truecolor"


class Encoder(Protocol):
    def encode(self, grid: Grid, sink: BinaryIO) -> None:
        """Write the whole grid to sink as a terminal byte stream."""
        ...


def encoder_for(tier: Tier, glyphs: GlyphMap = glyph_to_text) -> Encoder:
    match tier:
        case Tier.TEXT:
            return TextEncoder(glyphs)
        case Tier.ANSI:
            return AnsiEncoder(glyphs)
        case Tier.XTERM256:
            return Xterm256Encoder(glyphs)
        case Tier.TRUECOLOR:
            return TruecolorEncoder(glyphs)
        case _:
            raise ValueError(f"Unknown tier: {tier!r}")


def render(grid: Grid, tier: Tier, sink: BinaryIO, glyphs: GlyphMap = glyph_to_text) -> None:
    if grid.palette_type is PaletteType.NONE:
        # No colour information at all, whatever the terminal can do
        tier = Tier.TEXT
    logger.debug("Rendering %dx%d grid (%s) as %s", grid.columns, grid.rows, grid.palette_type, tier)
    encoder_for(tier, glyphs).encode(grid, sink)


def render_bytes(grid: Grid, tier: Tier, glyphs: GlyphMap = glyph_to_text) -> bytes:
    sink = io.BytesIO()
    render(grid, tier, sink, glyphs)
    return sink.getvalue()
