"""Colour to 8x8 dither pattern, after US Patent 5485558 (Windows 3 VGA driver).

normalize -> classify -> scale -> transform -> count table -> restore
symmetry -> sort by intensity -> settle counts -> place on template.
"""

from __future__ import annotations

from dataclasses import dataclass

from dither16.core.colour import Colour, ColourLike, SwapFlags, normalize, parse_colour
from dither16.core.pattern import DitherGrid, map_dither_pattern
from dither16.core.subspace import (
    Subspace,
    classify_subspace,
    linear_transform,
    scale_component,
)
from dither16.core.table import (
    ColourCountTable,
    build_colour_count_table,
    restore_symmetry,
    settle_counts,
    sort_by_intensity,
)


@dataclass(frozen=True)
class DitherTrace:
    """Every intermediate value of one run of the pipeline."""

    colour: Colour
    normalized: tuple[int, int, int]
    flags: SwapFlags
    subspace: Subspace
    scaled: tuple[int, int, int]
    counts: tuple[int, int, int]
    table: ColourCountTable
    grid: DitherGrid


def trace_dither(colour: ColourLike) -> DitherTrace:
    """Run the full pipeline and keep the intermediate results."""
    colour = parse_colour(colour)
    normalized, flags = normalize(colour)
    subspace = classify_subspace(*normalized)
    scaled = tuple(scale_component(a) for a in normalized)
    counts = linear_transform(subspace, *scaled)

    table = build_colour_count_table(subspace, *counts)
    table = restore_symmetry(table, flags)
    table = settle_counts(sort_by_intensity(table))

    return DitherTrace(
        colour=colour,
        normalized=normalized,
        flags=flags,
        subspace=subspace,
        scaled=scaled,
        counts=counts,
        table=table,
        grid=map_dither_pattern(table),
    )


def compute_dither_grid(colour: ColourLike) -> DitherGrid:
    """Compute the 8x8 dither pattern approximating `colour`.

    Args:
        colour: a Colour, an (r, g, b) sequence of 0-255 ints, or a
                `#RRGGBB` string.

    Raises:
        InvalidInputError: if the colour cannot be parsed.
    """
    return trace_dither(colour).grid


def dither_matrix(colour: ColourLike) -> list[list[str]]:
    """Row-major 8x8 matrix of palette hex colours for `colour`."""
    return compute_dither_grid(colour).hex_matrix()
