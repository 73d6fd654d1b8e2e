"""Colour-count tables: which palette colours to use, and how many cells each."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from dither16.core.colour import InvalidInputError, SwapFlags
from dither16.core.palette import PaletteCode
from dither16.core.subspace import Subspace

CELL_COUNT = 64

# The scaler's two rounding steps can leave a vertex one cell short on
# the faces between subspaces, e.g. (130, 126, 0) -> counts (1, -1, 0).
ROUNDING_SLACK = 1


@dataclass(frozen=True)
class ColourCount:
    code: PaletteCode
    count: int


class ColourCountTable:
    """Append-only table of at most four (code, count) entries.

    Counts are nonzero. A freshly built table may hold a count of -1 (see
    ROUNDING_SLACK) until settle_counts() has run.
    """

    CAPACITY = 4

    def __init__(self, entries: Iterable[ColourCount] = ()) -> None:
        self._entries: list[ColourCount] = []
        for entry in entries:
            self.append(entry)

    def append(self, entry: ColourCount) -> None:
        if len(self._entries) >= self.CAPACITY:
            raise InvalidInputError(
                f"Colour-count table holds at most {self.CAPACITY} entries"
            )
        if entry.count == 0 or entry.count < -ROUNDING_SLACK:
            raise InvalidInputError(f"Invalid pixel count {entry.count}")
        self._entries.append(entry)

    @property
    def entries(self) -> tuple[ColourCount, ...]:
        return tuple(self._entries)

    @property
    def total(self) -> int:
        return sum(e.count for e in self._entries)

    @property
    def is_settled(self) -> bool:
        return all(e.count > 0 for e in self._entries)

    def __iter__(self) -> Iterator[ColourCount]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        body = ", ".join(f"0x{e.code.value:02x}:{e.count}" for e in self._entries)
        return f"ColourCountTable([{body}])"


def build_colour_count_table(
    subspace: Subspace, c1: int, c2: int, c3: int
) -> ColourCountTable:
    """Pair each vertex of `subspace` with its pixel count.

    The origin vertex gets whatever the other three leave of the 64 cells.
    Zero counts are left out.
    """
    if min(c1, c2, c3) < -ROUNDING_SLACK or c1 + c2 + c3 > CELL_COUNT:
        raise InvalidInputError(
            f"Pixel counts ({c1}, {c2}, {c3}) out of range for subspace {int(subspace)}"
        )
    origin, v1, v2, v3 = subspace.vertices
    table = ColourCountTable()
    for code, count in (
        (origin, CELL_COUNT - c1 - c2 - c3),
        (v1, c1),
        (v2, c2),
        (v3, c3),
    ):
        if count != 0:
            table.append(ColourCount(code, count))
    return table


def restore_code(code: PaletteCode, flags: SwapFlags) -> PaletteCode:
    """Map a code picked in space 0 back to the caller's colour space.

    Swaps are undone on the colour bits in reverse order: RG, then GB, then
    RB. The intensity bit is untouched.
    """
    r, g, b = code.red, code.green, code.blue
    if flags.rg:
        r, g = g, r
    if flags.gb:
        g, b = b, g
    if flags.rb:
        r, b = b, r
    return PaletteCode.from_bits(r, g, b, code.intensity)


def restore_symmetry(table: ColourCountTable, flags: SwapFlags) -> ColourCountTable:
    return ColourCountTable(
        ColourCount(restore_code(e.code, flags), e.count) for e in table
    )


def sort_by_intensity(table: ColourCountTable) -> ColourCountTable:
    """Order entries darkest first."""
    return ColourCountTable(sorted(table, key=lambda e: e.code.rank))


def settle_counts(table: ColourCountTable) -> ColourCountTable:
    """Replace each count by the number of cells its entry will claim.

    Placement claims every cell below the running total, so an entry only
    gains cells when the total passes its previous high. Entries that gain
    none are dropped. The result is all positive, sums to 64, and places
    exactly the same cells as the input table.
    """
    settled = ColourCountTable()
    running = high = 0
    for entry in table:
        running += entry.count
        reach = min(max(high, running), CELL_COUNT)
        if reach > high:
            settled.append(ColourCount(entry.code, reach - high))
            high = reach
    return settled
