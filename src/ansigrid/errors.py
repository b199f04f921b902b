class RenderError(ValueError):
    """Base class for errors that abort a render."""


class PaletteIndexError(RenderError, IndexError):
    def __init__(self, index: int, size: int):
        super().__init__(f"Palette index {index} out of range for palette of {size} colours")
        self.index = index
        self.size = size


class EmptyPaletteError(RenderError):
    def __init__(self):
        super().__init__("Cannot match against an empty palette")


class UnknownPaletteTypeError(RenderError):
    def __init__(self, palette_type):
        super().__init__(f"Unrecognised palette type: {palette_type!r}")
        self.palette_type = palette_type
