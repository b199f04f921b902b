from ansigrid.model import Palette, RGBColor

# CGA/VGA text mode colours, index order matches SGR 30-37 then the bright set
ANSI_PALETTE: Palette = tuple(
    RGBColor(*rgb)
    for rgb in [
        (0x00, 0x00, 0x00),
        (0xAA, 0x00, 0x00),
        (0x00, 0xAA, 0x00),
        (0xAA, 0x55, 0x00),
        (0x00, 0x00, 0xAA),
        (0xAA, 0x00, 0xAA),
        (0x00, 0xAA, 0xAA),
        (0xAA, 0xAA, 0xAA),
        (0x55, 0x55, 0x55),
        (0xFF, 0x55, 0x55),
        (0x55, 0xFF, 0x55),
        (0xFF, 0xFF, 0x55),
        (0x55, 0x55, 0xFF),
        (0xFF, 0x55, 0xFF),
        (0x55, 0xFF, 0xFF),
        (0xFF, 0xFF, 0xFF),
    ]
)

_XTERM_SYSTEM = [
    (0x00, 0x00, 0x00),
    (0x80, 0x00, 0x00),
    (0x00, 0x80, 0x00),
    (0x80, 0x80, 0x00),
    (0x00, 0x00, 0x80),
    (0x80, 0x00, 0x80),
    (0x00, 0x80, 0x80),
    (0xC0, 0xC0, 0xC0),
    (0x80, 0x80, 0x80),
    (0xFF, 0x00, 0x00),
    (0x00, 0xFF, 0x00),
    (0xFF, 0xFF, 0x00),
    (0x00, 0x00, 0xFF),
    (0xFF, 0x00, 0xFF),
    (0x00, 0xFF, 0xFF),
    (0xFF, 0xFF, 0xFF),
]
_CUBE_LEVELS = (0x00, 0x5F, 0x87, 0xAF, 0xD7, 0xFF)

# 16 system colours, 6x6x6 colour cube (16-231), 24-step greyscale ramp (232-255)
XTERM256_PALETTE: Palette = (
    tuple(RGBColor(*rgb) for rgb in _XTERM_SYSTEM)
    + tuple(RGBColor(r, g, b) for r in _CUBE_LEVELS for g in _CUBE_LEVELS for b in _CUBE_LEVELS)
    + tuple(RGBColor(v, v, v) for v in range(8, 248, 10))
)
