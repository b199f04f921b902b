from collections.abc import Callable

# Graphic glyphs the IBM PC showed for the control range 0x01-0x1F
_CP437_CONTROL = " ☺☻♥♦♣♠•◘○◙♂♀♪♫☼►◄↕‼¶§▬↨↑↓→←∟↔▲▼"

# Code page 437 as printable text, one string per byte value (0x7F is the house glyph)
CP437: tuple[str, ...] = (
    tuple(_CP437_CONTROL)
    + tuple(bytes(range(0x20, 0x7F)).decode("cp437"))
    + ("⌂",)
    + tuple(bytes(range(0x80, 0x100)).decode("cp437"))
)

_CP437_UTF8 = tuple(text.encode("utf-8") for text in CP437)

UPPER_HALF_BLOCK = 0xDF

GlyphMap = Callable[[int], bytes]


def glyph_to_text(code: int) -> bytes:
    """UTF-8 bytes for a code page 437 glyph code."""
    if not 0 <= code <= 0xFF:
        raise ValueError(f"Glyph code out of range: {code}")
    return _CP437_UTF8[code]
