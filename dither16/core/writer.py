"""Rasterize dither grids with Pillow.

Single patterns are scaled up by an integer pixel size. Swatch sheets put
each solid colour next to its dithered approximation for comparison.
"""

from __future__ import annotations

import base64
import io
from pathlib import Path
from typing import Callable, Iterator

import numpy as np
from PIL import Image

from dither16.core.colour import Colour
from dither16.core.dither import compute_dither_grid
from dither16.core.pattern import GRID_SIZE, DitherGrid

SAVE_FORMATS = {".png": "PNG", ".gif": "GIF", ".bmp": "BMP"}


def _check_px(px: int) -> None:
    if px < 1:
        raise ValueError(f"Pixel size must be at least 1, got {px}")


def grid_to_array(grid: DitherGrid, px: int = 1) -> np.ndarray:
    """(8*px, 8*px, 3) uint8 array with each cell replicated px x px."""
    _check_px(px)
    rgb = grid.rgb_array()
    return np.repeat(np.repeat(rgb, px, axis=0), px, axis=1)


def render_grid_image(grid: DitherGrid, px: int = 1) -> Image.Image:
    """Render a DitherGrid to an 8*px square RGB image."""
    return Image.fromarray(grid_to_array(grid, px))


def to_data_url(grid: DitherGrid, px: int = 1) -> str:
    """PNG data URL of the rendered grid, usable as a CSS background."""
    buf = io.BytesIO()
    render_grid_image(grid, px).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def _format_for(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SAVE_FORMATS:
        raise ValueError(f"Unsupported output format: {suffix}")
    return SAVE_FORMATS[suffix]


def save_grid_image(grid: DitherGrid, output_path: Path, px: int = 1) -> None:
    """Save a rendered grid; format is chosen by file extension."""
    fmt = _format_for(output_path)
    render_grid_image(grid, px).save(str(output_path), format=fmt)


def comparison_colours(step: int = 32) -> Iterator[Colour]:
    """Sample colours on a lattice 0, step, ... 256, clamped to 255.

    With the default step of 32 this yields 9 x 9 x 9 = 729 colours, red
    varying slowest.
    """
    if step < 1:
        raise ValueError(f"Step must be at least 1, got {step}")
    levels = [min(v, 255) for v in range(0, 257, step)]
    for r in levels:
        for g in levels:
            for b in levels:
                yield Colour(r, g, b)


def render_swatch_sheet(
    colours: list[Colour],
    px: int = 4,
    tiles: int = 2,
    columns: int = 9,
    gap: int = 2,
    on_progress: Callable[[int, int], None] | None = None,
) -> Image.Image:
    """Lay out [solid | dithered] pairs for each colour in a grid.

    Args:
        colours: colours to compare.
        px: pixel size of each dither cell.
        tiles: how many pattern repeats each swatch spans per side.
        columns: swatch pairs per row.
        gap: background pixels between swatches.
        on_progress: callback(current_colour, total_colours).
    """
    _check_px(px)
    if not colours:
        raise ValueError("No colours to render")

    side = GRID_SIZE * px * tiles
    pair_w = 2 * side + gap
    rows = (len(colours) + columns - 1) // columns
    sheet_w = columns * (pair_w + gap) + gap
    sheet_h = rows * (side + gap) + gap
    sheet = np.zeros((sheet_h, sheet_w, 3), dtype=np.uint8)

    for i, colour in enumerate(colours):
        row, col = divmod(i, columns)
        x = gap + col * (pair_w + gap)
        y = gap + row * (side + gap)
        sheet[y : y + side, x : x + side] = colour.rgb
        pattern = np.tile(grid_to_array(compute_dither_grid(colour), px), (tiles, tiles, 1))
        sheet[y : y + side, x + side + gap : x + 2 * side + gap] = pattern
        if on_progress:
            on_progress(i + 1, len(colours))

    return Image.fromarray(sheet)


def save_swatch_sheet(
    output_path: Path,
    step: int = 32,
    px: int = 4,
    on_progress: Callable[[int, int], None] | None = None,
) -> int:
    """Render the comparison sheet and save it. Returns the colour count."""
    fmt = _format_for(output_path)
    colours = list(comparison_colours(step))
    sheet = render_swatch_sheet(colours, px=px, on_progress=on_progress)
    sheet.save(str(output_path), format=fmt)
    return len(colours)
