"""Command-line interface for dither16.

Supports headless subcommands (with JSON output for scripting) and an
interactive TUI colour picker.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path

from dither16.core.ansi import ColourMode
from dither16.core.colour import Colour, InvalidInputError, parse_colour


@dataclass(frozen=True)
class RenderSettings:
    """Output options shared by the rendering subcommands."""

    px: int = 8
    colour_mode: ColourMode = ColourMode.TRUECOLOR
    tile: int = 1

    def __post_init__(self) -> None:
        if self.px < 1:
            raise ValueError(f"--px must be at least 1, got {self.px}")
        if self.tile < 1:
            raise ValueError(f"--tile must be at least 1, got {self.tile}")


def _add_colour_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "colour",
        nargs="+",
        help="Colour as #RRGGBB or three integers R G B (0-255).",
    )


def _add_json_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error (with --json).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dither16",
        description="Windows 3 style 16-colour 8x8 dither patterns.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- grid subcommand ---
    grid = subparsers.add_parser("grid", help="Print the 8x8 pattern for a colour.")
    _add_colour_arg(grid)
    grid.add_argument(
        "--codes",
        action="store_true",
        help="Print palette codes instead of hex colours.",
    )
    _add_json_args(grid)

    # --- show subcommand ---
    show = subparsers.add_parser("show", help="Preview the pattern in the terminal.")
    _add_colour_arg(show)
    show.add_argument(
        "--color",
        choices=[c.value for c in ColourMode],
        default="truecolor",
        help="Color mode (default: truecolor).",
    )
    show.add_argument(
        "--tile",
        type=int,
        default=2,
        help="Repeat the pattern N times each way (default: 2).",
    )

    # --- render subcommand ---
    render = subparsers.add_parser("render", help="Save the pattern as an image.")
    _add_colour_arg(render)
    render.add_argument("-o", "--output", help="Output image (.png, .gif, .bmp).")
    render.add_argument(
        "--px",
        type=int,
        default=8,
        help="Size of each pattern cell in pixels (default: 8).",
    )
    _add_json_args(render)

    # --- swatches subcommand ---
    swatches = subparsers.add_parser(
        "swatches",
        help="Save a sheet comparing solid colours with their patterns.",
    )
    swatches.add_argument("-o", "--output", default="swatches.png", help="Output image.")
    swatches.add_argument(
        "--px",
        type=int,
        default=4,
        help="Size of each pattern cell in pixels (default: 4).",
    )
    swatches.add_argument(
        "--step",
        type=int,
        default=32,
        help="Spacing of sampled component values (default: 32).",
    )
    _add_json_args(swatches)

    # --- tui subcommand ---
    tui = subparsers.add_parser("tui", help="Interactive colour picker.")
    tui.add_argument("colour", nargs="?", help="Initial #RRGGBB colour.")

    return parser


def colour_from_args(values: list[str]) -> Colour:
    """Build a Colour from one hex argument or three integer arguments."""
    if len(values) == 1:
        return parse_colour(values[0])
    if len(values) == 3:
        try:
            components = [int(v) for v in values]
        except ValueError:
            raise InvalidInputError(f"Components must be integers: {' '.join(values)}") from None
        return parse_colour(components)
    raise InvalidInputError(f"Expected #RRGGBB or R G B, got {len(values)} values")


def _json_error(message: str, code: str) -> None:
    """Print JSON error to stderr and exit with code 1."""
    err = {"status": "error", "error": message, "code": code}
    print(json.dumps(err), file=sys.stderr)
    sys.exit(1)


def _fail(args: argparse.Namespace, exc: Exception, code: str) -> None:
    if getattr(args, "json", False):
        if getattr(args, "debug", False):
            import traceback
            traceback.print_exception(exc, file=sys.stderr)
        _json_error(str(exc), code)
    print(f"Error: {exc}", file=sys.stderr)
    sys.exit(1)


def _error_code(exc: Exception) -> str:
    if isinstance(exc, InvalidInputError):
        return "INVALID_INPUT"
    if isinstance(exc, OSError):
        return "WRITE_FAILED"
    if str(exc).startswith("Unsupported output format"):
        return "UNSUPPORTED_FORMAT"
    return "INVALID_ARGUMENT"


def _run_grid(args: argparse.Namespace) -> None:
    from dither16.core.dither import trace_dither

    trace = trace_dither(colour_from_args(args.colour))
    if args.json:
        result = {
            "status": "success",
            "input": trace.colour.hex,
            "normalized": list(trace.normalized),
            "swaps": {"rb": trace.flags.rb, "gb": trace.flags.gb, "rg": trace.flags.rg},
            "subspace": int(trace.subspace),
            "table": [
                {"code": e.code.value, "colour": e.code.colour.hex, "count": e.count}
                for e in trace.table
            ],
            "codes": trace.grid.codes.tolist(),
            "matrix": trace.grid.hex_matrix(),
        }
        print(json.dumps(result, indent=2))
        return

    if args.codes:
        for row in trace.grid.codes:
            print(" ".join(f"{int(c):x}" for c in row))
    else:
        for row in trace.grid.hex_matrix():
            print(" ".join(row))


def _run_show(args: argparse.Namespace) -> None:
    from dither16.core.ansi import render_grid_lines
    from dither16.core.dither import compute_dither_grid

    settings = RenderSettings(colour_mode=ColourMode(args.color), tile=args.tile)
    grid = compute_dither_grid(colour_from_args(args.colour))
    for line in render_grid_lines(grid, settings.colour_mode, settings.tile):
        print(line)


def _run_render(args: argparse.Namespace) -> None:
    from dither16.core.dither import compute_dither_grid
    from dither16.core.writer import save_grid_image

    settings = RenderSettings(px=args.px)
    colour = colour_from_args(args.colour)
    if args.output:
        output_path = Path(args.output).resolve()
    else:
        output_path = Path.cwd() / f"dither_{colour.hex.lstrip('#')}.png"

    grid = compute_dither_grid(colour)
    save_grid_image(grid, output_path, px=settings.px)

    if args.json:
        result = {
            "status": "success",
            "input": colour.hex,
            "output": str(output_path),
            "px": settings.px,
            "size": 8 * settings.px,
        }
        print(json.dumps(result, indent=2))
    else:
        print(f"Saved to {output_path}", file=sys.stderr)


def _run_swatches(args: argparse.Namespace) -> None:
    from dither16.core.writer import save_swatch_sheet

    settings = RenderSettings(px=args.px)
    output_path = Path(args.output).resolve()

    def on_progress(current: int, total: int) -> None:
        if not args.json:
            print(f"\rRendering swatch {current}/{total}...", end="", file=sys.stderr)

    count = save_swatch_sheet(output_path, step=args.step, px=settings.px, on_progress=on_progress)

    if args.json:
        result = {"status": "success", "output": str(output_path), "colours": count}
        print(json.dumps(result, indent=2))
    else:
        print(f"\nSaved to {output_path}", file=sys.stderr)


_COMMANDS = {
    "grid": _run_grid,
    "show": _run_show,
    "render": _run_render,
    "swatches": _run_swatches,
}


def main(argv: list[str] | None = None) -> None:
    """Main entry point.

    Routing:
      dither16 <command> [opts]   → headless subcommand
      dither16 tui [colour]       → TUI
      dither16 #RRGGBB | R G B    → TUI with colour
      dither16                    → TUI
    """
    raw_args = sys.argv[1:] if argv is None else argv
    if raw_args and (raw_args[0] in _COMMANDS or raw_args[0] in ("tui", "-h", "--help")):
        args = _build_parser().parse_args(raw_args)
    else:
        # Bare colour or nothing: launch the TUI
        from dither16.app import run_app

        colour = None
        if len(raw_args) == 3:
            try:
                colour = colour_from_args(raw_args).hex
            except InvalidInputError as e:
                print(f"Error: {e}", file=sys.stderr)
                sys.exit(1)
        elif raw_args:
            colour = raw_args[0]
        run_app(colour=colour)
        return

    if args.command == "tui":
        from dither16.app import run_app
        run_app(colour=args.colour)
        return

    try:
        _COMMANDS[args.command](args)
    except (ValueError, OSError) as e:
        _fail(args, e, _error_code(e))
