"""Subspace classification and the fixed-point linear transform.

Tetrahedral space 0 (r >= g >= b) is split into four smaller tetrahedra.
Each one has four palette colours at its vertices and an integer matrix
that turns a position inside it into pixel counts for three of them.
"""

from __future__ import annotations

from enum import IntEnum

from dither16.core.palette import PaletteCode

# Rows are applied as row . (r, g, b) after recentering.
_MATRICES: tuple[tuple[tuple[int, int, int], ...], ...] = (
    ((-2, 0, 0), (2, -2, 0), (0, 0, 2)),
    ((-2, -2, 0), (2, 0, 0), (0, 0, 2)),
    ((1, -1, 0), (1, 1, 0), (0, 0, 2)),
    ((-2, 0, 0), (0, 1, -1), (1, 0, 1)),
)

# (origin, vertex1, vertex2, vertex3)
_VERTICES: tuple[tuple[int, int, int, int], ...] = (
    (0x03, 0x00, 0x01, 0x07),
    (0x03, 0x01, 0x09, 0x07),
    (0x03, 0x09, 0x0B, 0x07),
    (0x09, 0x07, 0x0B, 0x0F),
)


class Subspace(IntEnum):
    S0 = 0
    S1 = 1
    S2 = 2
    S3 = 3

    @property
    def matrix(self) -> tuple[tuple[int, int, int], ...]:
        return _MATRICES[self]

    @property
    def vertices(self) -> tuple[PaletteCode, PaletteCode, PaletteCode, PaletteCode]:
        origin, v1, v2, v3 = _VERTICES[self]
        return (PaletteCode(origin), PaletteCode(v1), PaletteCode(v2), PaletteCode(v3))

    @property
    def origin(self) -> tuple[int, int, int]:
        """Scaled coordinates the transform measures from."""
        if self is Subspace.S3:
            return (64, 0, 0)
        return (32, 32, 0)


def classify_subspace(r: int, g: int, b: int) -> Subspace:
    """Find the subspace of a normalized colour (0-255 components)."""
    if r - 128 < 0:
        return Subspace.S0
    if r - 128 + g - 128 < 0:
        return Subspace.S1
    if r - 128 + b - 128 < 0:
        return Subspace.S2
    return Subspace.S3


def scale_component(a: int) -> int:
    """Scale 0-255 down to 0-64.

    The first halving rounds up, the second truncates: 255 -> 128 -> 64.
    """
    half = a // 2 + a % 2
    return half // 2


def linear_transform(
    subspace: Subspace, r: int, g: int, b: int
) -> tuple[int, int, int]:
    """Pixel counts for vertices 1-3 of `subspace` from scaled (r, g, b)."""
    or_, og, ob = subspace.origin
    r, g, b = r - or_, g - og, b - ob
    return tuple(row[0] * r + row[1] * g + row[2] * b for row in subspace.matrix)
