"""Textual colour picker showing the 16-colour dither for each colour."""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Input, Label, Static

from dither16.core.colour import InvalidInputError
from dither16.core.dither import DitherTrace, trace_dither
from dither16.core.writer import save_grid_image
from dither16.tui.preview import CountTable, PatternPreview


def parse_pixel_size(text: str) -> int:
    """Parse the pixel-size field; empty means 1."""
    text = text.strip()
    if not text:
        return 1
    try:
        px = int(text)
    except ValueError:
        raise ValueError(f"Pixel size must be a whole number, got {text!r}") from None
    if px < 1:
        raise ValueError(f"Pixel size must be at least 1, got {px}")
    return px


class SaveScreen(ModalScreen[tuple[str, int] | None]):
    """Modal screen for saving the current pattern."""

    BINDINGS = [Binding("escape", "cancel", "Cancel", priority=True)]

    DEFAULT_CSS = """
    SaveScreen {
        align: center middle;
    }

    SaveScreen #save-dialog {
        width: 60;
        height: auto;
        background: $surface;
        border: thick $accent;
        padding: 1 2;
    }

    SaveScreen #save-title {
        text-style: bold;
        margin-bottom: 1;
    }

    SaveScreen .button-row {
        margin-top: 1;
        align: center middle;
        height: 3;
    }

    SaveScreen Button {
        margin: 0 1;
    }

    SaveScreen #save-status {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(self, default_path: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self._default_path = default_path

    def action_cancel(self) -> None:
        self.dismiss(None)

    def compose(self) -> ComposeResult:
        with Vertical(id="save-dialog"):
            yield Static("Save Pattern", id="save-title")
            yield Label("Output file path:")
            yield Input(value=self._default_path, placeholder="pattern.png", id="save-path")
            yield Label("Pixel size:")
            yield Input(value="8", placeholder="8", id="px-input", type="integer")
            with Horizontal(classes="button-row"):
                yield Button("Save", variant="primary", id="btn-save")
                yield Button("Cancel", variant="default", id="btn-cancel")
            yield Static("", id="save-status")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            path = self.query_one("#save-path", Input).value
            if not path:
                self.dismiss(None)
                return
            try:
                px = parse_pixel_size(self.query_one("#px-input", Input).value)
            except ValueError as e:
                # Stay open so the size can be corrected
                self.query_one("#save-status", Static).update(f"Error: {e}")
                return
            self.dismiss((path, px))
        elif event.button.id == "btn-cancel":
            self.dismiss(None)


class DitherApp(App):
    """Main TUI application."""

    TITLE = "dither16"
    CSS = """
    #main-area {
        height: 1fr;
        width: 1fr;
    }

    #colour-input {
        margin: 1 1 0 1;
    }

    #status-bar {
        height: 1;
        background: $panel;
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
    ]

    def __init__(self, colour: str | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._initial = colour
        self._trace: DitherTrace | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(value=self._initial or "", placeholder="#RRGGBB", id="colour-input")
        with Horizontal(id="main-area"):
            yield PatternPreview()
            yield CountTable(id="count-table")
        yield Static("Ready", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        if self._initial:
            self._show_colour(self._initial)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "colour-input":
            self._show_colour(event.value.strip())

    def on_input_changed(self, event: Input.Changed) -> None:
        # Update live once a full hex colour has been typed
        if event.input.id == "colour-input" and len(event.value.strip()) == 7:
            self._show_colour(event.value.strip())

    def _show_colour(self, text: str) -> None:
        try:
            trace = trace_dither(text)
        except InvalidInputError as e:
            self._update_status(f"Error: {e}")
            return
        self._trace = trace
        self.query_one(PatternPreview).update_trace(trace)
        self.query_one(CountTable).show_trace(trace)
        self._update_status(f"{trace.colour.hex}: {len(trace.table)} colours")

    def _update_status(self, message: str) -> None:
        self.query_one("#status-bar", Static).update(message)

    def action_save(self) -> None:
        if self._trace is None:
            self._update_status("Nothing to save")
            return
        default = f"dither_{self._trace.colour.hex.lstrip('#')}.png"
        self.push_screen(SaveScreen(default_path=default), self._on_save_result)

    def _on_save_result(self, result: tuple[str, int] | None) -> None:
        if result is None or self._trace is None:
            return
        path, px = result
        try:
            save_grid_image(self._trace.grid, Path(path).resolve(), px=px)
        except (ValueError, OSError) as e:
            self._update_status(f"Save failed: {e}")
            return
        self._update_status(f"Saved to {path}")


def run_app(colour: str | None = None) -> None:
    """Launch the TUI application."""
    app = DitherApp(colour=colour)
    app.run()
