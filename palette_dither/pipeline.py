# palette_dither/pipeline.py
from __future__ import annotations

"""
Render pipeline around the quantisation engines.

  decode -> resize to grid -> denoise -> tone gamma -> algorithm
         -> (preview: integer upscale onto a square canvas) -> PNG data URL

The engine call is the only step that touches palette colours; everything
else is Pillow/numpy glue. Each render owns its grid and palette.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .adjust import apply_denoise, apply_tone_gamma
from .algorithms import DEFAULT_ALGORITHM, apply_algorithm, is_data_parallel, resolve_algorithm
from .core_types import Palette, RGBTuple, U8Image, coerce_to_rgb_tuple
from .image_io import decode_data_url, encode_png_data_url, resize_to_grid, upscale_center
from .palette_data import DEFAULT_PALETTE, resolve_palette
from .utils import debug_log, format_seconds_compact, print_config_line

DEFAULT_DISPLAY_SIZE = 560
DEFAULT_GRID = 64


@dataclass
class RenderRequest:
    """One render. `palette_colors`, when given, overrides `palette_name`."""

    image_data_url: str
    grid_width: int = DEFAULT_GRID
    grid_height: int = DEFAULT_GRID
    grid_value: Optional[str] = None
    algorithm: str = DEFAULT_ALGORITHM
    palette_name: Optional[str] = None
    palette_colors: Optional[Sequence[RGBTuple]] = None
    palette_dir: Optional[Path] = None
    tone_gamma: Optional[float] = None
    denoise_sigma: Optional[float] = None
    display_size: Optional[int] = None
    workers: int = 1
    debug: bool = False


def parse_grid_value(value: str) -> Optional[Tuple[int, int]]:
    """'64' -> (64, 64); '32x24' -> (32, 24); anything else -> None."""
    s = value.strip().lower()
    if "x" in s:
        a, _sep, b = s.partition("x")
        try:
            return (max(1, int(a.strip())), max(1, int(b.strip())))
        except ValueError:
            return None
    try:
        n = max(1, int(s))
    except ValueError:
        return None
    return (n, n)


def resolve_grid(req: RenderRequest) -> Tuple[int, int]:
    """Grid value string wins when it parses; otherwise width/height (min 1)."""
    if req.grid_value:
        parsed = parse_grid_value(req.grid_value)
        if parsed is not None:
            return parsed
    return (max(1, int(req.grid_width)), max(1, int(req.grid_height)))


def resolve_request_palette(req: RenderRequest) -> Palette:
    if req.palette_colors is not None:
        colors = tuple(coerce_to_rgb_tuple(c) for c in req.palette_colors)
        return Palette(name=req.palette_name or "custom", colors=colors)
    return resolve_palette(req.palette_name or DEFAULT_PALETTE, req.palette_dir)


def render_grid(req: RenderRequest) -> U8Image:
    """Decode, prepare and quantise; returns the uint8 (H,W,4) grid."""
    t0 = time.perf_counter()
    src = decode_data_url(req.image_data_url)
    grid_w, grid_h = resolve_grid(req)
    grid = resize_to_grid(src, grid_w, grid_h)
    grid = apply_denoise(grid, req.denoise_sigma)
    apply_tone_gamma(grid, req.tone_gamma)

    palette = resolve_request_palette(req)
    kind = resolve_algorithm(req.algorithm)
    workers = max(1, int(req.workers)) if is_data_parallel(kind) else 1
    if req.debug:
        print_config_line(
            "render",
            [
                ("Grid", f"{grid_w}x{grid_h}"),
                ("Algorithm", req.algorithm),
                ("Palette", palette.name),
                ("Colours", len(palette)),
                ("Workers", workers),
            ],
            debug=True,
        )

    t1 = time.perf_counter()
    apply_algorithm(grid, palette.colors, kind, workers=workers)
    if req.debug:
        debug_log(
            f"prep={format_seconds_compact(t1 - t0)}  "
            f"quantise={format_seconds_compact(time.perf_counter() - t1)}"
        )
    return grid


def render_base_png(req: RenderRequest) -> str:
    """Quantised grid at grid resolution as a PNG data URL."""
    return encode_png_data_url(render_grid(req))


def render_preview_png(req: RenderRequest) -> str:
    """Quantised grid upscaled for display as a PNG data URL."""
    grid = render_grid(req)
    size = req.display_size or DEFAULT_DISPLAY_SIZE
    return encode_png_data_url(upscale_center(grid, size))


__all__ = [
    "DEFAULT_DISPLAY_SIZE",
    "DEFAULT_GRID",
    "RenderRequest",
    "parse_grid_value",
    "resolve_grid",
    "resolve_request_palette",
    "render_grid",
    "render_base_png",
    "render_preview_png",
]
