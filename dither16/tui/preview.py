"""Swatch and pattern preview widgets for the TUI."""

from __future__ import annotations

import numpy as np
from rich.text import Text
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from dither16.core.ansi import UPPER_HALF
from dither16.core.colour import Colour
from dither16.core.dither import DitherTrace
from dither16.core.pattern import DitherGrid


def grid_to_rich_text(grid: DitherGrid, tile: int = 1) -> Text:
    """Draw a grid with upper-half blocks, two pattern rows per text line."""
    rgb = np.tile(grid.rgb_array(), (tile, tile, 1))
    text = Text()
    for y in range(0, rgb.shape[0], 2):
        if y > 0:
            text.append("\n")
        for x in range(rgb.shape[1]):
            ur, ug, ub = (int(v) for v in rgb[y, x])
            lr, lg, lb = (int(v) for v in rgb[y + 1, x])
            text.append(UPPER_HALF, style=f"rgb({ur},{ug},{ub}) on rgb({lr},{lg},{lb})")
    return text


def solid_rich_text(colour: Colour, width: int, height: int) -> Text:
    r, g, b = colour.rgb
    return Text("\n".join(" " * width for _ in range(height)), style=f"on rgb({r},{g},{b})")


class PatternPreview(Widget):
    """Solid colour beside its tiled dither pattern.

    Terminal cells are about twice as tall as wide, so the half-block
    rendering keeps the pattern square.
    """

    DEFAULT_CSS = """
    PatternPreview {
        width: 1fr;
        height: auto;
        padding: 1;
        background: $surface;
    }

    PatternPreview #preview-content {
        width: auto;
        height: auto;
    }
    """

    class PatternUpdated(Message):
        """Posted when a new colour is displayed."""
        def __init__(self, colour: Colour) -> None:
            super().__init__()
            self.colour = colour

    def __init__(self, tile: int = 4, **kwargs) -> None:
        super().__init__(**kwargs)
        self._tile = tile
        self._trace: DitherTrace | None = None

    def compose(self) -> ComposeResult:
        yield Static("Enter a colour as #RRGGBB.", id="preview-content")

    def update_trace(self, trace: DitherTrace) -> None:
        self._trace = trace
        side = 8 * self._tile
        solid = solid_rich_text(trace.colour, side, side // 2).split("\n")
        pattern = grid_to_rich_text(trace.grid, self._tile).split("\n")

        combined = Text()
        for i, (left, right) in enumerate(zip(solid, pattern)):
            if i > 0:
                combined.append("\n")
            combined.append_text(left)
            combined.append("  ")
            combined.append_text(right)

        self.query_one("#preview-content", Static).update(combined)
        self.post_message(self.PatternUpdated(trace.colour))

    @property
    def trace(self) -> DitherTrace | None:
        return self._trace


class CountTable(Static):
    """Sorted colour-count table for the current colour."""

    DEFAULT_CSS = """
    CountTable {
        width: 34;
        height: auto;
        padding: 1;
        background: $panel;
        border-left: solid $accent;
    }
    """

    def show_trace(self, trace: DitherTrace) -> None:
        text = Text()
        text.append(f"{trace.colour.hex}\n", style="bold")
        text.append(f"subspace {int(trace.subspace)}  scaled {trace.scaled}\n\n")
        for entry in trace.table:
            r, g, b = entry.code.colour.rgb
            text.append("  ", style=f"on rgb({r},{g},{b})")
            text.append(f" 0x{entry.code.value:02x} {entry.code.colour.hex} {entry.count:>2}/64\n")
        self.update(text)
