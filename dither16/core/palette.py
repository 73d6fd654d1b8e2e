"""The fixed 16-colour IBGR palette.

Codes pack one bit per primary: bit 0 = red, bit 1 = green, bit 2 = blue,
bit 3 = intensity. Slot 8 (intensity alone) is unused.
"""

from __future__ import annotations

from dataclasses import dataclass

from dither16.core.colour import Colour, InvalidInputError

RESERVED_CODE = 0x08

# Ascending IBGR order. Slot 8 is a placeholder and never produced.
PALETTE: tuple[Colour, ...] = tuple(
    Colour.from_hex(h)
    for h in (
        "#000000", "#800000", "#008000", "#808000",
        "#000080", "#800080", "#008080", "#808080",
        "#123456", "#ff0000", "#00ff00", "#ffff00",
        "#0000ff", "#ff00ff", "#00ffff", "#ffffff",
    )
)

# Perceived intensity per code, darkest first. Slot 8 is unreachable.
INTENSITY_RANK: tuple[int, ...] = (
    1, 3, 4, 7, 2, 5, 6, 8, -1, 10, 11, 14, 9, 12, 13, 15,
)


@dataclass(frozen=True, order=True)
class PaletteCode:
    """A 4-bit palette index with named bit accessors."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidInputError(f"Palette code must be an int, got {self.value!r}")
        if not 0 <= self.value <= 15:
            raise InvalidInputError(f"Palette code out of range 0-15: {self.value}")
        if self.value == RESERVED_CODE:
            raise InvalidInputError("Palette code 0x08 is reserved")

    @classmethod
    def from_bits(cls, red: int, green: int, blue: int, intensity: int) -> PaletteCode:
        return cls(red | green << 1 | blue << 2 | intensity << 3)

    @property
    def red(self) -> int:
        return self.value & 0x01

    @property
    def green(self) -> int:
        return (self.value >> 1) & 0x01

    @property
    def blue(self) -> int:
        return (self.value >> 2) & 0x01

    @property
    def intensity(self) -> int:
        return (self.value >> 3) & 0x01

    @property
    def rank(self) -> int:
        return INTENSITY_RANK[self.value]

    @property
    def colour(self) -> Colour:
        return PALETTE[self.value]

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"PaletteCode(0x{self.value:02x})"


def lookup_palette_colour(code: PaletteCode | int) -> Colour:
    """Return the RGB colour for a palette code."""
    if not isinstance(code, PaletteCode):
        code = PaletteCode(code)
    return code.colour
