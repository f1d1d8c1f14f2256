# palette_dither/diffusion/engine.py
from __future__ import annotations

"""
Kernel-driven error diffusion.

Two buffers:
  working : full RGB copy of the grid. Reads come from here, so every pixel
            sees the error pushed onto it by pixels visited earlier.
  pixels  : the caller's grid. Each pixel is written once, when it is
            finalised, and never touched again.

Error is spread with integer arithmetic: each tap adds
trunc(error * weight / denominator) and the result is clamped to 0..255.
"""

from typing import List, Sequence

from ..core_types import Metric, RGBTuple, U8Image, assert_u8_rgba
from ..kernels import DiffusionKernel
from ..matcher import PaletteMatcher


def _trunc_div(num: int, den: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(num) // den
    return q if num >= 0 else -q


def _add_clamped(value: int, delta: int) -> int:
    v = value + delta
    return 0 if v < 0 else 255 if v > 255 else v


def diffuse(
    pixels: U8Image,
    palette: Sequence[RGBTuple],
    kernel: DiffusionKernel,
    *,
    metric: Metric = "ciede2000",
) -> None:
    """
    Quantise `pixels` (uint8 H,W,4) in place with `kernel`.

    Strictly sequential: rows top to bottom; serpentine kernels flip direction
    and mirror their taps on odd rows. Alpha is never modified.
    """
    assert_u8_rgba(pixels)
    if len(palette) == 0:
        return

    matcher = PaletteMatcher(palette, metric)
    height, width = int(pixels.shape[0]), int(pixels.shape[1])
    working: List[List[List[int]]] = pixels[..., :3].tolist()
    den = kernel.denominator

    for y in range(height):
        xs = range(width) if kernel.left_to_right(y) else range(width - 1, -1, -1)
        taps = kernel.offsets_for_row(y)
        row = working[y]
        for x in xs:
            r, g, b = row[x]
            chosen = matcher.nearest((r, g, b))
            pixels[y, x, 0] = chosen[0]
            pixels[y, x, 1] = chosen[1]
            pixels[y, x, 2] = chosen[2]

            err_r = r - chosen[0]
            err_g = g - chosen[1]
            err_b = b - chosen[2]
            if err_r == 0 and err_g == 0 and err_b == 0:
                continue

            for dx, dy, w in taps:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height:
                    q = working[ny][nx]
                    q[0] = _add_clamped(q[0], _trunc_div(err_r * w, den))
                    q[1] = _add_clamped(q[1], _trunc_div(err_g * w, den))
                    q[2] = _add_clamped(q[2], _trunc_div(err_b * w, den))


__all__ = ["diffuse"]
