# palette_dither/utils.py
from __future__ import annotations

"""
Shared utilities for palette_dither.

Includes time formatting, row partitioning and the row-parallel pixel runner
used by the stateless passes, colour usage reporting, and tidy logging.
"""

import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Mapping, Tuple

import numpy as np

from .core_types import RGBTuple, U8Image, rgb_to_hex

# (x, y, r, g, b) -> replacement RGB
PixelPick = Callable[[int, int, int, int, int], RGBTuple]

# Below this many rows a threaded run is not worth the pool start-up.
PARALLEL_MIN_ROWS = 32


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Row-parallel pixel runner


def split_rows_into_parts(height: int, parts: int) -> List[Tuple[int, int]]:
    """Partition range [0, height) into ~parts contiguous [start, end) row spans."""
    parts = max(1, int(parts))
    step = max(1, (height + parts - 1) // parts)
    return [(start, min(start + step, height)) for start in range(0, height, step)]


def _map_row_span(pixels: U8Image, pick: PixelPick, start: int, end: int) -> None:
    width = int(pixels.shape[1])
    for y in range(start, end):
        row = pixels[y]
        for x in range(width):
            r, g, b = int(row[x, 0]), int(row[x, 1]), int(row[x, 2])
            c = pick(x, y, r, g, b)
            row[x, 0] = c[0]
            row[x, 1] = c[1]
            row[x, 2] = c[2]


def map_pixels(pixels: U8Image, pick: PixelPick, workers: int = 1) -> None:
    """
    Replace the RGB of every pixel with pick(x, y, r, g, b), in place.

    Only for passes where each output pixel depends on its own input alone:
    row spans are handed to threads that write disjoint rows. Alpha is not
    touched.
    """
    height = int(pixels.shape[0])
    if workers <= 1 or height < PARALLEL_MIN_ROWS:
        _map_row_span(pixels, pick, 0, height)
        return

    chunks = split_rows_into_parts(height, workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_map_row_span, pixels, pick, s, e) for s, e in chunks]
        for f in futures:
            f.result()


# Reporting


def colour_usage_report(
    rgba: U8Image, name_of: Mapping[str, str] | None = None
) -> List[Tuple[str, str, int]]:
    """
    Count colours among visible pixels (alpha > 0).

    Returns a list of (hex, name, count) sorted by count descending.
    """
    name_of = name_of or {}
    visible_mask = rgba[..., 3] > 0
    if not np.any(visible_mask):
        return []
    flat = rgba[..., :3][visible_mask].reshape(-1, 3)
    uniques, counts = np.unique(flat, axis=0, return_counts=True)
    report: List[Tuple[str, str, int]] = []
    for rgb_row, count in sorted(zip(uniques, counts), key=lambda x: -int(x[1])):
        hex_str = rgb_to_hex((int(rgb_row[0]), int(rgb_row[1]), int(rgb_row[2])))
        report.append((hex_str, name_of.get(hex_str, "?"), int(count)))
    return report


# Pretty logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live progress printing in terminals that expose .reconfigure().
    """
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1,234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [render] Grid: 64x64  Algorithm: Stucki  Palette: Cozy 8  Workers: 4
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "PixelPick",
    "PARALLEL_MIN_ROWS",
    # formatting
    "format_seconds_compact",
    "format_total_duration_compact",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    # rows
    "split_rows_into_parts",
    "map_pixels",
    # reporting
    "colour_usage_report",
    # logging
    "enable_line_buffered_stdout",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
