import pytest

from ansigrid.model import Attribute, Cell, Grid, PaletteType, RGBColor, is_direct
from ansigrid.palettes import ANSI_PALETTE, XTERM256_PALETTE


def make_cells(n):
    return [Cell(ord("x")) for _ in range(n)]


def test_grid_rows():
    cells = [Cell(c) for c in b"abcdef"]
    grid = Grid(rows=2, columns=3, cells=cells)
    assert [c.code for c in grid.row(0)] == list(b"abc")
    assert [c.code for c in grid.row(1)] == list(b"def")


def test_grid_cell_count_must_match():
    with pytest.raises(ValueError, match="Expected 6 cells, got 5"):
        Grid(rows=2, columns=3, cells=make_cells(5))


@pytest.mark.parametrize("rows, columns", [(0, 3), (3, 0), (-1, 2)])
def test_grid_dimensions_must_be_positive(rows, columns):
    with pytest.raises(ValueError, match="Grid dimensions must be positive"):
        Grid(rows=rows, columns=columns, cells=[])


def test_grid_defaults():
    grid = Grid(rows=1, columns=1, cells=make_cells(1))
    assert grid.palette_type is PaletteType.ANSI
    assert grid.cells[0].attr == Attribute(7, 0)


def test_rgb_colour_is_direct():
    assert is_direct(RGBColor(1, 2, 3))
    assert not is_direct(3)


def test_cells_are_immutable():
    cell = Cell(65, Attribute(1, 2))
    with pytest.raises(AttributeError):
        cell.code = 66


def test_palette_sizes():
    assert len(ANSI_PALETTE) == 16
    assert len(XTERM256_PALETTE) == 256


def test_xterm_palette_layout():
    assert XTERM256_PALETTE[16] == (0, 0, 0)
    assert XTERM256_PALETTE[196] == (0xFF, 0, 0)
    assert XTERM256_PALETTE[231] == (0xFF, 0xFF, 0xFF)
    assert XTERM256_PALETTE[232] == (8, 8, 8)
    assert XTERM256_PALETTE[255] == (0xEE, 0xEE, 0xEE)


def test_ansi_palette_brown():
    assert ANSI_PALETTE[3] == RGBColor(0xAA, 0x55, 0x00)
