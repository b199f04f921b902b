from ansigrid.model import Attribute, BlinkPolicy, Cell, Grid, PaletteType
from ansigrid.palettes import ANSI_PALETTE

ESC = b"\033"


def make_grid(
    attrs,
    columns=None,
    code=ord("A"),
    palette=ANSI_PALETTE,
    palette_type=PaletteType.ANSI,
    blink=BlinkPolicy.ON,
):
    """Build a grid from a flat list of (fg, bg) pairs, one row unless columns is given."""
    if columns is None:
        columns = len(attrs)
    cells = [Cell(code, Attribute(fg, bg)) for fg, bg in attrs]
    return Grid(
        rows=len(cells) // columns,
        columns=columns,
        cells=cells,
        palette=palette,
        palette_type=palette_type,
        blink=blink,
    )
