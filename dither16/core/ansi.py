"""Terminal rendering of dither grids with ANSI colour escapes."""

from __future__ import annotations

from enum import Enum

import numpy as np

from dither16.core.pattern import DitherGrid

UPPER_HALF = "▀"
RESET = "\033[0m"


class ColourMode(str, Enum):
    NONE = "none"
    ANSI256 = "256"
    TRUECOLOR = "truecolor"


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Map an RGB color to the nearest ANSI 256-color index.

    Uses the 6x6x6 color cube (indices 16-231) and grayscale ramp (232-255).
    """
    if r == g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return 232 + round((r - 8) / 247 * 23)

    ri = round(r / 255 * 5)
    gi = round(g / 255 * 5)
    bi = round(b / 255 * 5)
    return 16 + 36 * ri + 6 * gi + bi


def _escape(r: int, g: int, b: int, mode: ColourMode, background: bool) -> str:
    layer = 48 if background else 38
    if mode == ColourMode.TRUECOLOR:
        return f"\033[{layer};2;{r};{g};{b}m"
    return f"\033[{layer};5;{rgb_to_ansi256(r, g, b)}m"


def truecolor_fg(r: int, g: int, b: int) -> str:
    return _escape(r, g, b, ColourMode.TRUECOLOR, background=False)


def truecolor_bg(r: int, g: int, b: int) -> str:
    return _escape(r, g, b, ColourMode.TRUECOLOR, background=True)


def _tile(grid: DitherGrid, tile: int) -> tuple[np.ndarray, np.ndarray]:
    if tile < 1:
        raise ValueError(f"Tile count must be at least 1, got {tile}")
    return np.tile(grid.codes, (tile, tile)), np.tile(grid.rgb_array(), (tile, tile, 1))


def render_grid_lines(
    grid: DitherGrid,
    mode: ColourMode = ColourMode.TRUECOLOR,
    tile: int = 1,
) -> list[str]:
    """Render a grid as text lines, repeated `tile` times each way.

    Colour modes draw two pattern rows per line with an upper-half block
    (foreground = upper row, background = lower row). Mode NONE prints one
    hex digit per cell instead.
    """
    codes, rgb = _tile(grid, tile)

    if mode == ColourMode.NONE:
        return ["".join(f"{int(c):x}" for c in row) for row in codes]

    lines: list[str] = []
    for y in range(0, rgb.shape[0], 2):
        parts: list[str] = []
        prev = ""
        for x in range(rgb.shape[1]):
            upper = rgb[y, x]
            lower = rgb[y + 1, x]
            esc = _escape(*map(int, upper), mode, background=False) + _escape(
                *map(int, lower), mode, background=True
            )
            # Avoid repeating the same escape code
            if esc != prev:
                parts.append(esc)
                prev = esc
            parts.append(UPPER_HALF)
        parts.append(RESET)
        lines.append("".join(parts))
    return lines
