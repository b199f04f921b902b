from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple


class RGBColor(NamedTuple):
    red: int
    green: int
    blue: int


class LabColor(NamedTuple):
    lightness: float
    a: float
    b: float


Palette = tuple[RGBColor, ...]
LookupTable = tuple[int, ...]

# An int selects a palette slot, an RGBColor is used as-is
Colour = int | RGBColor


class PaletteType(enum.Enum):
    ANSI = "ansi"
    ANSI_WITH_TRUECOLOR = "ansi_with_truecolor"
    BINARY_TEXT = "binary_text"
    CUSTOM = "custom"
    TRUECOLOR = "truecolor"
    NONE = "none"


class BlinkPolicy(enum.Enum):
    ON = "on"
    OFF = "off"


@dataclass(frozen=True)
class Attribute:
    fg: Colour = 7
    bg: Colour = 0


@dataclass(frozen=True)
class Cell:
    code: int
    attr: Attribute = Attribute()


@dataclass(frozen=True)
class Grid:
    """A fully loaded screen of character cells, read-only to the encoders."""

    rows: int
    columns: int
    cells: Sequence[Cell]
    palette: Palette = ()
    palette_type: PaletteType = PaletteType.ANSI
    blink: BlinkPolicy = BlinkPolicy.ON

    def __post_init__(self):
        if self.rows <= 0 or self.columns <= 0:
            raise ValueError(f"Grid dimensions must be positive: {self.rows}x{self.columns}")
        if len(self.cells) != self.rows * self.columns:
            raise ValueError(f"Expected {self.rows * self.columns} cells, got {len(self.cells)}")

    def row(self, y: int) -> Sequence[Cell]:
        start = y * self.columns
        return self.cells[start : start + self.columns]


def is_direct(colour: Colour) -> bool:
    return isinstance(colour, RGBColor)
