"""Colour parsing and symmetry normalization.

Any RGB colour is mapped into tetrahedral space 0 (r >= g >= b) by up to
three pairwise swaps. The swaps are recorded so the palette colours picked
in that space can be mapped back afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


class InvalidInputError(ValueError):
    """Raised for colours or codes the dither algorithm cannot accept."""


def _check_component(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidInputError(
            f"{name} component must be an integer, got {type(value).__name__}"
        )
    value = int(value)
    if not 0 <= value <= 255:
        raise InvalidInputError(f"{name} component out of range 0-255: {value}")
    return value


@dataclass(frozen=True)
class Colour:
    """A 24-bit RGB colour."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "red", _check_component("red", self.red))
        object.__setattr__(self, "green", _check_component("green", self.green))
        object.__setattr__(self, "blue", _check_component("blue", self.blue))

    @classmethod
    def from_hex(cls, text: str) -> Colour:
        """Parse a `#RRGGBB` string (hex digits in either case)."""
        if not isinstance(text, str) or not _HEX_RE.match(text):
            raise InvalidInputError(f"Expected a #RRGGBB colour, got {text!r}")
        return cls(int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16))

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)


ColourLike = Union[Colour, str, Sequence[int]]


def parse_colour(value: ColourLike) -> Colour:
    """Accept a Colour, a hex string, or an (r, g, b) sequence."""
    if isinstance(value, Colour):
        return value
    if isinstance(value, str):
        return Colour.from_hex(value)
    try:
        components = tuple(value)
    except TypeError:
        raise InvalidInputError(
            f"Cannot interpret {type(value).__name__} as a colour"
        ) from None
    if len(components) != 3:
        raise InvalidInputError(
            f"Expected 3 colour components, got {len(components)}"
        )
    return Colour(*components)


@dataclass(frozen=True)
class SwapFlags:
    """Pairwise exchanges applied while normalizing a colour."""

    rb: bool = False
    gb: bool = False
    rg: bool = False


def normalize(colour: Colour) -> tuple[tuple[int, int, int], SwapFlags]:
    """Reorder components so that r >= g >= b.

    The comparisons run R/B, then G/B, then R/G, each on the values left by
    the previous step.
    """
    r, g, b = colour.rgb
    swap_rb = swap_gb = swap_rg = False
    if r < b:
        r, b = b, r
        swap_rb = True
    if g < b:
        g, b = b, g
        swap_gb = True
    if r < g:
        r, g = g, r
        swap_rg = True
    return (r, g, b), SwapFlags(rb=swap_rb, gb=swap_gb, rg=swap_rg)
