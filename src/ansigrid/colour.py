from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from ansigrid.errors import EmptyPaletteError, PaletteIndexError, UnknownPaletteTypeError
from ansigrid.model import Colour, Grid, LabColor, LookupTable, Palette, PaletteType, RGBColor, is_direct

logger = logging.getLogger(__name__)

# sRGB (D65) linear RGB -> XYZ
_RGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ]
)
_D65_WHITE = np.array([95.047, 100.0, 108.883])
_EPSILON = 0.008856


def _srgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert an (N, 3) array of 8-bit sRGB values to (N, 3) CIE Lab."""
    c = np.asarray(rgb, dtype=np.float64) / 255.0
    linear = np.where(c > 0.04045, ((c + 0.055) / 1.055) ** 2.4, c / 12.92)
    # Elementwise rather than matmul so one row converts identically alone or in a batch
    xyz = (linear[:, np.newaxis, :] * 100.0 * _RGB_TO_XYZ).sum(axis=2)
    t = xyz / _D65_WHITE
    f = np.where(t > _EPSILON, np.cbrt(t), 7.787 * t + 16.0 / 116.0)
    lab = np.empty_like(f)
    lab[:, 0] = 116.0 * f[:, 1] - 16.0
    lab[:, 1] = 500.0 * (f[:, 0] - f[:, 1])
    lab[:, 2] = 200.0 * (f[:, 1] - f[:, 2])
    return lab


def rgb_to_lab(colour: RGBColor) -> LabColor:
    lab = _srgb_to_lab(np.array([colour]))[0]
    return LabColor(float(lab[0]), float(lab[1]), float(lab[2]))


def build_lab_palette(palette: Sequence[RGBColor]) -> np.ndarray:
    """Lab form of every palette entry, shape (len(palette), 3), order preserved."""
    if len(palette) == 0:
        return np.empty((0, 3))
    return _srgb_to_lab(np.array(palette))


def nearest_match(colour: LabColor | np.ndarray, candidates: np.ndarray) -> int:
    """Index of the candidate closest to colour by Euclidean Lab distance.

    Ties go to the lowest index.
    """
    candidates = np.asarray(candidates, dtype=np.float64)
    if len(candidates) == 0:
        raise EmptyPaletteError()
    dist = np.sqrt(((candidates - np.asarray(colour, dtype=np.float64)) ** 2).sum(axis=1))
    # argmin returns the first occurrence of the minimum
    return int(np.argmin(dist))


def build_lookup_table(source: Sequence[RGBColor], target: Sequence[RGBColor]) -> LookupTable:
    target_labs = build_lab_palette(target)
    if len(target_labs) == 0:
        raise EmptyPaletteError()
    source_labs = build_lab_palette(source)
    if len(source_labs) == 0:
        return ()
    diff = source_labs[:, np.newaxis, :] - target_labs[np.newaxis, :, :]
    dist = np.sqrt((diff**2).sum(axis=2))
    return tuple(int(i) for i in np.argmin(dist, axis=1))


def lookup_for(grid: Grid, target: Palette) -> LookupTable:
    """Lookup table mapping the grid's index-mode colours into target."""
    match grid.palette_type:
        case PaletteType.ANSI | PaletteType.ANSI_WITH_TRUECOLOR | PaletteType.BINARY_TEXT | PaletteType.CUSTOM:
            return build_lookup_table(grid.palette, target)
        case PaletteType.TRUECOLOR | PaletteType.NONE:
            return build_lookup_table(target, target)
        case _:
            raise UnknownPaletteTypeError(grid.palette_type)


def palette_entry(palette: Sequence, index: int):
    if not 0 <= index < len(palette):
        raise PaletteIndexError(index, len(palette))
    return palette[index]


class ColourMatcher:
    """Resolves cell colours to indices of a fixed target palette for a single render."""

    def __init__(self, grid: Grid, target: Palette):
        self.target_labs = build_lab_palette(target)
        self.lookup = lookup_for(grid, target)
        logger.debug("Lookup table: %d source colours onto %d target colours", len(self.lookup), len(target))
        self._direct: dict[RGBColor, int] = {}

    def match(self, colour: Colour) -> int:
        if is_direct(colour):
            if colour not in self._direct:
                self._direct[colour] = nearest_match(rgb_to_lab(colour), self.target_labs)
            return self._direct[colour]
        return palette_entry(self.lookup, colour)
