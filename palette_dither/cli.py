#!/usr/bin/env python3
"""
palette_dither.cli
Quantise an image to a small colour grid rendered with a fixed palette.

Usage:
  palette-dither INPUT [-o OUTPUT] --grid 64|64x48 --algorithm NAME --palette NAME
                 [--palette-dir DIR] [--gamma G] [--denoise SIGMA]
                 [--preview] [--display-size N] [--workers N] [--debug]
  palette-dither --list [--palette-dir DIR]

Input:
  Any Pillow-readable image. Alpha is preserved.

Output:
  PNG. If OUTPUT is omitted, writes <stem>_dither.png next to INPUT. With
  --preview the grid is upscaled onto a square canvas of --display-size.

Notes:
  Unknown algorithm names fall back to "Standard"; unknown palette names fall
  back to the default built-in palette.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import List, Optional

from .algorithms import DEFAULT_ALGORITHM, algorithm_names
from .core_types import rgb_to_hex
from .image_io import EngineError, file_to_data_url, save_image_rgba, upscale_center
from .palette_data import DEFAULT_PALETTE, load_palette_library
from .pipeline import DEFAULT_DISPLAY_SIZE, RenderRequest, render_grid, resolve_request_palette
from .utils import (
    colour_usage_report,
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    log,
    print_banner,
    print_config_line,
)


def _default_workers() -> int:
    """Leave a core free for the system; returns a sensible worker count."""
    n = os.cpu_count() or 2
    return max(1, n - 1)


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to the input image (optional with --list)
        output: optional Path for the PNG
        grid: "64" or "64x48"
        algorithm / palette / palette_dir
        gamma / denoise: optional pre-quantisation adjustments
        preview / display_size: upscale output for display
        workers: threads for row-independent algorithms
        list: print algorithms and palettes, then exit
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="palette-dither",
        description="Render an image as a limited-palette pixel grid.",
    )
    parser.add_argument("src", type=Path, nargs="?", help="Input image")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output PNG")
    parser.add_argument("--grid", default="64", help='Grid size, "N" or "WxH".')
    parser.add_argument(
        "--algorithm", default=DEFAULT_ALGORITHM, help="Algorithm name (see --list)."
    )
    parser.add_argument(
        "--palette", default=DEFAULT_PALETTE, help="Palette name (see --list)."
    )
    parser.add_argument(
        "--palette-dir",
        type=Path,
        default=None,
        help="Folder of .gpl/.toml/.hex palette files.",
    )
    parser.add_argument("--gamma", type=float, default=None, help="Tone gamma.")
    parser.add_argument(
        "--denoise", type=float, default=None, help="Gaussian denoise sigma."
    )
    parser.add_argument(
        "--preview", action="store_true", help="Upscale onto a square display canvas."
    )
    parser.add_argument(
        "--display-size",
        type=int,
        default=DEFAULT_DISPLAY_SIZE,
        help="Preview canvas size in pixels.",
    )
    parser.add_argument(
        "--workers", type=int, default=_default_workers(), help="Internal workers"
    )
    parser.add_argument(
        "--list", action="store_true", help="List algorithms and palettes and exit."
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def _print_catalogue(palette_dir: Optional[Path]) -> None:
    print_banner("Algorithms")
    for name in algorithm_names():
        log(f"  {name}")
    print_banner("Palettes")
    for p in load_palette_library(palette_dir):
        swatch = " ".join(rgb_to_hex(c) for c in p.colors)
        log(f"  {p.name} ({len(p)}): {swatch}")


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns a process exit code."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    if args.list:
        _print_catalogue(args.palette_dir)
        return 0

    src: Optional[Path] = args.src
    if src is None:
        error("an input image is required (or use --list)")
        return 2
    if not src.is_file():
        error(f"not found: {src}")
        return 2

    t_start = time.perf_counter()
    out_path = args.output or src.with_name(f"{src.stem}_dither.png")
    print_banner(src.name)

    try:
        req = RenderRequest(
            image_data_url=file_to_data_url(src),
            grid_value=args.grid,
            algorithm=args.algorithm,
            palette_name=args.palette,
            palette_dir=args.palette_dir,
            tone_gamma=args.gamma,
            denoise_sigma=args.denoise,
            display_size=args.display_size,
            workers=args.workers,
            debug=args.debug,
        )
        palette = resolve_request_palette(req)
        print_config_line(
            "run",
            [
                ("Grid", args.grid),
                ("Algorithm", args.algorithm),
                ("Palette", palette.name),
                ("Workers", args.workers),
            ],
            debug=False,
        )
        grid = render_grid(req)
    except EngineError as e:
        error(str(e))
        return 1

    out = upscale_center(grid, args.display_size) if args.preview else grid
    try:
        written = save_image_rgba(out_path, out)
    except OSError as e:
        error(f"cannot write {out_path}: {e}")
        return 1

    name_of = {rgb_to_hex(c): f"#{i}" for i, c in enumerate(palette.colors)}
    log(f"Wrote {written.name} | grid={grid.shape[1]}x{grid.shape[0]} | palette_size={len(palette)}")
    log("Colours used:")
    for hex_code, slot, count in colour_usage_report(grid, name_of):
        log(f"  {hex_code}  {slot}: {count:,}")
    log(f"Total time {format_total_duration_compact(time.perf_counter() - t_start)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
