"""CLI entry point: ``python -m rastermaster 10 5 -o surface.gcode``"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config.settings import SettingsError, ToolSettings
from .core.params import ParameterError, RasterDirection, SurfacingParams
from .core.toolpath.surfacing import calculate_toolpath
from .core.units import Units
from .core.validate import validate_params
from .gcode.gcode_writer import count_label, fmt
from .gcode.serializer import default_filename, generate_gcode, write_gcode

# CLI option -> SurfacingParams field
_PARAM_OPTIONS = {
    "fudge": "fudge_factor",
    "bit_diameter": "bit_diameter",
    "stepover": "stepover_percent",
    "depth": "total_depth",
    "depth_per_pass": "depth_per_pass",
    "pause_every": "pause_interval",
    "feed": "feed_rate",
    "plunge": "plunge_rate",
    "rpm": "spindle_rpm",
    "retract": "retract_height",
}


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rastermaster",
        description="Generate flycutter surfacing G-code for rectangular stock.",
        epilog="Length and feed defaults are converted when --units mm is given.",
    )
    p.add_argument("width", type=float, help="Stock width (X)")
    p.add_argument("height", type=float, help="Stock height (Y)")
    p.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output G-code file (default: rastermaster-<W>x<H>.gcode)",
    )
    p.add_argument("--stdout", action="store_true",
                   help="Print G-code to stdout instead of writing a file")
    p.add_argument(
        "--units", choices=["inch", "mm"], default="inch",
        help="Working units (default: inch)",
    )

    # Stock / strategy
    p.add_argument("--fudge", type=float, default=None,
                   help="Margin added on every side of the stock (default: 0.25 in)")
    p.add_argument("--direction", choices=["x", "y"], default="x",
                   help="Axis the cutting strokes run along (default: x)")
    p.add_argument("--skim", action="store_true",
                   help="Add a Z=0 skim pass before the depth passes")
    depth = p.add_mutually_exclusive_group()
    depth.add_argument("--depth", type=float, default=None,
                       help="Total depth to remove (default: 0.01 in)")
    depth.add_argument("--passes", type=int, default=None,
                       help="Number of full depth passes (alternative to --depth)")
    p.add_argument("--depth-per-pass", type=float, default=None,
                   help="Depth removed per pass (default: 0.01 in)")
    p.add_argument("--pause-every", type=int, default=None,
                   help="Pause (M0) after every N passes; 0 disables")

    # Tool / feeds and speeds
    p.add_argument("--bit-diameter", type=float, default=None,
                   help="Cutter diameter (default: 1.25 in)")
    p.add_argument("--stepover", type=float, default=None,
                   help="Stepover as percent of bit diameter (default: 50)")
    p.add_argument("--feed", type=float, default=None,
                   help="Cutting feed rate (default: 125 in/min)")
    p.add_argument("--plunge", type=float, default=None,
                   help="Plunge feed rate (default: 12 in/min)")
    p.add_argument("--rpm", type=float, default=None,
                   help="Spindle RPM (default: 18000)")
    p.add_argument("--retract", type=float, default=None,
                   help="Retract height above stock (default: 0.125 in)")

    # Tool settings
    p.add_argument("--tool-settings", type=Path, default=None,
                   help="Load tool settings from a JSON file")
    p.add_argument("--tool-url", default=None,
                   help="Load tool settings from a shared #tool= link")
    p.add_argument("--save-tool-settings", type=Path, default=None,
                   help="Save the resulting tool settings to a JSON file")
    p.add_argument("--print-tool-url", action="store_true",
                   help="Print a shareable #tool= link for the tool settings")

    p.add_argument("-v", "--verbose", action="store_true",
                   help="Debug logging")
    return p


def build_params(args: argparse.Namespace) -> SurfacingParams:
    """Defaults, then loaded tool settings, then explicit options."""
    params = SurfacingParams.for_units(
        Units(args.units),
        stock_width=args.width,
        stock_height=args.height,
        raster_direction=RasterDirection(args.direction),
        skim_pass=args.skim,
    )

    tool: ToolSettings | None = None
    if args.tool_settings is not None:
        tool = ToolSettings.load(args.tool_settings)
        if tool is None:
            raise SettingsError(f"Tool settings file not found: {args.tool_settings}")
    if args.tool_url is not None:
        tool = ToolSettings.from_url_fragment(args.tool_url)
    if tool is not None:
        params = tool.apply(params)

    overrides = {
        field: getattr(args, option)
        for option, field in _PARAM_OPTIONS.items()
        if getattr(args, option) is not None
    }
    params = replace(params, **overrides)
    if args.passes is not None:
        params = params.with_num_passes(args.passes)
    return params


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        params = build_params(args)
    except (ParameterError, SettingsError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    result = validate_params(params)
    if result.has_errors:
        print("INVALID PARAMETERS:", file=sys.stderr)
        for message in result.errors:
            print(f"  ERROR: {message}", file=sys.stderr)
        return 1
    # stdout carries the program itself with --stdout
    info = sys.stderr if args.stdout else sys.stdout
    for message in result.warnings:
        print(f"  Warning: {message}", file=info)

    tool = ToolSettings.from_params(params)
    if args.save_tool_settings is not None:
        tool.save(args.save_tool_settings)
        print(f"Saved tool settings to {args.save_tool_settings}", file=info)
    if args.print_tool_url:
        print(tool.to_url_fragment(), file=info)

    toolpath = calculate_toolpath(params)
    print(
        f"Toolpath: {count_label(len(toolpath.passes), 'pass')} x "
        f"{count_label(toolpath.line_count, 'line')}, "
        f"stepover {fmt(params.stepover)} {params.units.label()}",
        file=info,
    )

    if args.stdout:
        sys.stdout.write(generate_gcode(toolpath))
        return 0

    output: Path = args.output or Path(default_filename(params))
    write_gcode(toolpath, output)
    print(f"Wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
