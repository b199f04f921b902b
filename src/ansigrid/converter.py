import logging
from pathlib import Path

import numpy as np
from PIL import Image

from ansigrid.charsets import UPPER_HALF_BLOCK
from ansigrid.engine import Tier, render_bytes
from ansigrid.model import Attribute, Cell, Grid, PaletteType, RGBColor
from ansigrid.palettes import ANSI_PALETTE

logger = logging.getLogger(__name__)


def _load(image: Image.Image | str | Path) -> Image.Image:
    if not isinstance(image, Image.Image):
        image = Image.open(image)
    return image.convert("RGB")


def image_to_grid(image: Image.Image | str | Path, width: int | None = None) -> Grid | None:
    """Pack an image into upper-half-block cells, two pixel rows per text row.

    The top pixel becomes the foreground and the bottom pixel the background,
    both as direct colours. Returns None if the image is smaller than one cell.
    """
    image = _load(image)

    if width is not None:
        # Half blocks are roughly square, so keep the pixel aspect ratio as-is
        height = max(1, round(image.height * width / image.width))
        logger.debug("Resizing %dx%d image to %dx%d", image.width, image.height, width, height)
        image = image.resize((width, height), Image.LANCZOS)

    cols = image.width
    rows = image.height // 2
    if rows == 0 or cols == 0:
        return None

    arr = np.asarray(image, dtype=np.uint8)[: rows * 2]
    top = arr[0::2].reshape(-1, 3).tolist()
    bottom = arr[1::2].reshape(-1, 3).tolist()
    cells = [Cell(UPPER_HALF_BLOCK, Attribute(RGBColor(*fg), RGBColor(*bg))) for fg, bg in zip(top, bottom)]

    return Grid(
        rows=rows,
        columns=cols,
        cells=cells,
        palette=ANSI_PALETTE,
        palette_type=PaletteType.TRUECOLOR,
    )


def image_to_ansi(
    image: Image.Image | str | Path,
    tier: Tier = Tier.TRUECOLOR,
    width: int | None = None,
) -> bytes:
    grid = image_to_grid(image, width=width)
    if grid is None:
        return b""
    return render_bytes(grid, tier)
