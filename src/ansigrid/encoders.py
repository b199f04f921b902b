from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from ansigrid.charsets import GlyphMap, glyph_to_text
from ansigrid.colour import ColourMatcher, palette_entry
from ansigrid.errors import PaletteIndexError
from ansigrid.model import BlinkPolicy, Colour, Grid, RGBColor, is_direct
from ansigrid.palettes import ANSI_PALETTE, XTERM256_PALETTE

NEWLINE = b"\n"
RESET = b"\033[0m"
BLINK_ON = b"\033[5m"
BLINK_OFF = b"\033[25m"

DEFAULT_FG = 7
DEFAULT_BG = 0
TRUECOLOR_FG = RGBColor(170, 170, 170)
TRUECOLOR_BG = RGBColor(0, 0, 0)


def sgr(*codes) -> bytes:
    """A single Select Graphic Rendition sequence carrying all codes."""
    return b"\033[" + ";".join(str(code) for code in codes).encode("ascii") + b"m"


@dataclass
class _State:
    fg: int | RGBColor
    bg: int | RGBColor
    blink: bool = False


def _background(grid: Grid, bg: Colour, size: int) -> tuple[Colour, bool]:
    """Split an index-mode background into (colour, blink).

    Indices 8 and up lose their high bit. With blink on that bit becomes the
    blink attribute, with blink off it is dropped. Direct colours never blink.
    size bounds the raw index before any shift.
    """
    if is_direct(bg):
        return bg, False
    if not 0 <= bg < size:
        raise PaletteIndexError(bg, size)
    if bg < 8:
        return bg, False
    return bg - 8, grid.blink is not BlinkPolicy.OFF


class TextEncoder:
    """Glyphs only, one line per row, no escape codes."""

    def __init__(self, glyphs: GlyphMap = glyph_to_text):
        self.glyphs = glyphs

    def encode(self, grid: Grid, sink: BinaryIO) -> None:
        for y in range(grid.rows):
            sink.write(b"".join(self.glyphs(cell.code) for cell in grid.row(y)))
            sink.write(NEWLINE)


class AnsiEncoder:
    """16-colour SGR output. Bright foregrounds use bold, bright backgrounds use blink."""

    palette = ANSI_PALETTE

    def __init__(self, glyphs: GlyphMap = glyph_to_text):
        self.glyphs = glyphs

    def encode(self, grid: Grid, sink: BinaryIO) -> None:
        matcher = ColourMatcher(grid, self.palette)
        state = _State(DEFAULT_FG, DEFAULT_BG)
        sink.write(RESET)
        for y in range(grid.rows):
            for cell in grid.row(y):
                fg = matcher.match(cell.attr.fg)
                bg = matcher.match(cell.attr.bg)
                codes = []
                if fg != state.fg:
                    if fg >= 8 and state.fg < 8:
                        codes.append(1)
                    elif fg < 8 and state.fg >= 8:
                        codes.append(22)
                    codes.append(30 + fg % 8)
                    state.fg = fg
                if bg != state.bg:
                    if bg >= 8 and state.bg < 8:
                        codes.append(5)
                    elif bg < 8 and state.bg >= 8:
                        codes.append(25)
                    codes.append(40 + bg % 8)
                    state.bg = bg
                if codes:
                    sink.write(sgr(*codes))
                sink.write(self.glyphs(cell.code))
            if state.bg != DEFAULT_BG:
                # Stop the background running into the padding after the line
                sink.write(sgr(25, 40) if state.bg >= 8 else sgr(40))
                state.bg = DEFAULT_BG
            sink.write(NEWLINE)
        if (state.fg, state.bg) != (DEFAULT_FG, DEFAULT_BG):
            sink.write(RESET)


class Xterm256Encoder:
    """Indexed 256-colour output, one sequence per changed channel."""

    palette = XTERM256_PALETTE

    def __init__(self, glyphs: GlyphMap = glyph_to_text):
        self.glyphs = glyphs

    def encode(self, grid: Grid, sink: BinaryIO) -> None:
        matcher = ColourMatcher(grid, self.palette)
        state = _State(DEFAULT_FG, DEFAULT_BG)
        sink.write(RESET)
        for y in range(grid.rows):
            for cell in grid.row(y):
                fg = matcher.match(cell.attr.fg)
                bg, blink = _background(grid, cell.attr.bg, len(matcher.lookup))
                bg = matcher.match(bg)
                if fg != state.fg:
                    sink.write(sgr(38, 5, fg))
                    state.fg = fg
                if bg != state.bg:
                    sink.write(sgr(48, 5, bg))
                    state.bg = bg
                if blink != state.blink:
                    sink.write(BLINK_ON if blink else BLINK_OFF)
                    state.blink = blink
                sink.write(self.glyphs(cell.code))
            if state.bg != DEFAULT_BG:
                sink.write(sgr(48, 5, DEFAULT_BG))
                state.bg = DEFAULT_BG
            sink.write(NEWLINE)
        if (state.fg, state.bg, state.blink) != (DEFAULT_FG, DEFAULT_BG, False):
            sink.write(RESET)


class TruecolorEncoder:
    """24-bit output using the grid's own palette, no colour matching."""

    def __init__(self, glyphs: GlyphMap = glyph_to_text):
        self.glyphs = glyphs

    def encode(self, grid: Grid, sink: BinaryIO) -> None:
        state = _State(TRUECOLOR_FG, TRUECOLOR_BG)
        sink.write(RESET)
        sink.write(sgr(38, 2, *state.fg))
        sink.write(sgr(48, 2, *state.bg))
        for y in range(grid.rows):
            for cell in grid.row(y):
                fg = self._rgb(grid, cell.attr.fg)
                bg, blink = _background(grid, cell.attr.bg, len(grid.palette))
                bg = self._rgb(grid, bg)
                if fg != state.fg:
                    sink.write(sgr(38, 2, *fg))
                    state.fg = fg
                if bg != state.bg:
                    sink.write(sgr(48, 2, *bg))
                    state.bg = bg
                if blink != state.blink:
                    sink.write(BLINK_ON if blink else BLINK_OFF)
                    state.blink = blink
                sink.write(self.glyphs(cell.code))
            if state.bg != TRUECOLOR_BG:
                sink.write(sgr(48, 2, *TRUECOLOR_BG))
                state.bg = TRUECOLOR_BG
            sink.write(NEWLINE)
        sink.write(RESET)

    @staticmethod
    def _rgb(grid: Grid, colour: Colour) -> RGBColor:
        if is_direct(colour):
            return colour
        return RGBColor(*palette_entry(grid.palette, colour))
