"""Placement of a colour-count table onto the 8x8 ordered-dither template."""

from __future__ import annotations

from collections import Counter

import numpy as np

from dither16.core.colour import Colour, InvalidInputError
from dither16.core.palette import PALETTE, RESERVED_CODE, PaletteCode
from dither16.core.table import CELL_COUNT, ColourCountTable

GRID_SIZE = 8

# Row-major threshold per cell. A cell takes the first colour whose
# cumulative count exceeds its threshold.
PATTERN_TEMPLATE = np.array(
    [
        [0, 32, 8, 40, 2, 34, 10, 42],
        [48, 16, 56, 24, 50, 18, 58, 26],
        [12, 44, 4, 36, 14, 46, 6, 38],
        [60, 28, 52, 20, 62, 30, 54, 22],
        [3, 35, 11, 43, 1, 33, 9, 41],
        [51, 19, 59, 27, 49, 17, 57, 25],
        [15, 47, 7, 39, 13, 45, 5, 37],
        [63, 31, 55, 23, 61, 29, 53, 21],
    ],
    dtype=np.uint8,
)
PATTERN_TEMPLATE.setflags(write=False)


class DitherGrid:
    """Immutable 8x8 grid of palette codes, indexed [row, col]."""

    def __init__(self, codes: np.ndarray) -> None:
        raw = np.asarray(codes)
        if raw.shape != (GRID_SIZE, GRID_SIZE):
            raise InvalidInputError(f"Dither grid must be 8x8, got {raw.shape}")
        if raw.min() < 0 or raw.max() > 15 or np.any(raw == RESERVED_CODE):
            raise InvalidInputError("Dither grid codes must be palette codes 0-15, not 8")
        arr = raw.astype(np.uint8)
        arr.setflags(write=False)
        self._codes = arr

    @property
    def codes(self) -> np.ndarray:
        """Read-only (8, 8) uint8 array of palette codes."""
        return self._codes

    def code_at(self, row: int, col: int) -> PaletteCode:
        return PaletteCode(int(self._codes[row, col]))

    def colours(self) -> list[list[Colour]]:
        return [[PALETTE[int(c)] for c in row] for row in self._codes]

    def hex_matrix(self) -> list[list[str]]:
        return [[PALETTE[int(c)].hex for c in row] for row in self._codes]

    def rgb_array(self) -> np.ndarray:
        """(8, 8, 3) uint8 array of palette RGB values."""
        lut = np.array([c.rgb for c in PALETTE], dtype=np.uint8)
        return lut[self._codes]

    def counts(self) -> dict[int, int]:
        """Cells per palette code."""
        return dict(Counter(int(c) for c in self._codes.flat))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DitherGrid):
            return NotImplemented
        return np.array_equal(self._codes, other._codes)

    def __hash__(self) -> int:
        return hash(self._codes.tobytes())

    def __repr__(self) -> str:
        rows = "\n".join(" ".join(f"{int(c):x}" for c in row) for row in self._codes)
        return f"DitherGrid(\n{rows}\n)"


def map_dither_pattern(table: ColourCountTable) -> DitherGrid:
    """Fill the template from a settled table sorted darkest first.

    Each entry raises the running total and claims every free cell whose
    threshold is below it.
    """
    if not table.is_settled:
        raise InvalidInputError(f"Cannot place unsettled counts: {table!r}")
    if table.total != CELL_COUNT:
        raise InvalidInputError(
            f"Colour counts must sum to {CELL_COUNT}, got {table.total}"
        )
    output = np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.uint8)
    assigned = np.zeros((GRID_SIZE, GRID_SIZE), dtype=bool)
    current = 0
    for entry in table:
        current += entry.count
        mask = (PATTERN_TEMPLATE < current) & ~assigned
        output[mask] = entry.code.value
        assigned |= mask
    return DitherGrid(output)
