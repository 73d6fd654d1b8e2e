"""Tests for the TUI colour picker."""

import asyncio

import pytest
from PIL import Image
from textual.widgets import Button, Input

from dither16.app import DitherApp, SaveScreen, parse_pixel_size


class TestParsePixelSize:
    def test_number(self):
        assert parse_pixel_size("3") == 3

    def test_empty_defaults_to_one(self):
        assert parse_pixel_size("  ") == 1

    @pytest.mark.parametrize("text", ["-", "+", "1_", "abc"])
    def test_partial_input(self, text):
        with pytest.raises(ValueError, match="whole number"):
            parse_pixel_size(text)

    @pytest.mark.parametrize("text", ["0", "-4"])
    def test_too_small(self, text):
        with pytest.raises(ValueError, match="at least 1"):
            parse_pixel_size(text)


def _save_with_px(tmp_path, px_values):
    """Open the save dialog, try each pixel size in turn, and report back."""
    output = tmp_path / "pattern.png"
    states = []

    async def run():
        app = DitherApp(colour="#801fbe")
        async with app.run_test() as pilot:
            await pilot.press("ctrl+s")
            await pilot.pause()
            for px in px_values:
                screen = app.screen
                screen.query_one("#save-path", Input).value = str(output)
                screen.query_one("#px-input", Input).value = px
                screen.query_one("#btn-save", Button).press()
                await pilot.pause()
                states.append((isinstance(app.screen, SaveScreen), output.exists()))

    asyncio.run(run())
    return output, states


class TestSaveDialog:
    def test_bad_pixel_size_keeps_dialog_open(self, tmp_path):
        _, states = _save_with_px(tmp_path, ["-"])
        assert states == [(True, False)]

    def test_zero_pixel_size_keeps_dialog_open(self, tmp_path):
        _, states = _save_with_px(tmp_path, ["0"])
        assert states == [(True, False)]

    def test_corrected_pixel_size_saves(self, tmp_path):
        output, states = _save_with_px(tmp_path, ["1_", "2"])
        assert states == [(True, False), (False, True)]
        assert Image.open(str(output)).size == (16, 16)
