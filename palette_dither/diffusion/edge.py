# palette_dither/diffusion/edge.py
from __future__ import annotations

"""
Edge-aware error diffusion (Sobel variant).

Floyd-Steinberg taps in raster order, but each tap weight is scaled by up to
EDGE_STEER_MAX when its offset lines up with the local edge tangent. The
gradient comes from a 3x3 Sobel on the luma of the working buffer, so it
already includes error diffused from earlier pixels. Error is kept as float
and truncated to a byte after clamping.
"""

import math
from typing import List, Sequence, Tuple

from ..colour_convert import luminance
from ..core_types import RGBTuple, U8Image, assert_u8_rgba, clamp_byte
from ..matcher import PaletteMatcher

# Gradient magnitude (luma 0..1 units) below which no steering is applied.
EDGE_MAG_MIN = 0.01

# Upper bound on the steering multiplier.
EDGE_STEER_MAX = 2.0

EDGE_TAPS: Tuple[Tuple[int, int, float], ...] = (
    (1, 0, 7.0 / 16.0),
    (-1, 1, 3.0 / 16.0),
    (0, 1, 5.0 / 16.0),
    (1, 1, 1.0 / 16.0),
)


def sobel_at(working: List[List[List[int]]], x: int, y: int) -> Tuple[float, float]:
    """(gx, gy) of normalised luma at (x, y). Out-of-bounds samples read 0."""
    height = len(working)
    width = len(working[0]) if height else 0

    def get(ix: int, iy: int) -> float:
        if ix < 0 or iy < 0 or ix >= width or iy >= height:
            return 0.0
        r, g, b = working[iy][ix]
        return luminance(r, g, b) / 255.0

    tl, tc, tr = get(x - 1, y - 1), get(x, y - 1), get(x + 1, y - 1)
    ml, mr = get(x - 1, y), get(x + 1, y)
    bl, bc, br = get(x - 1, y + 1), get(x, y + 1), get(x + 1, y + 1)
    gx = -tl + tr - 2.0 * ml + 2.0 * mr - bl + br
    gy = -tl - 2.0 * tc - tr + bl + 2.0 * bc + br
    return gx, gy


def steer_factor(dx: int, dy: int, gx: float, gy: float) -> float:
    """Weight multiplier for a tap at (dx, dy) given the local gradient."""
    if math.hypot(gx, gy) <= EDGE_MAG_MIN:
        return 1.0
    # tangent is the gradient rotated by 90 degrees
    tx, ty = -gy, gx
    proj = abs(dx * tx + dy * ty)
    return min(1.0 + proj, EDGE_STEER_MAX)


def edge_dither(
    pixels: U8Image,
    palette: Sequence[RGBTuple],
    *,
    threshold: float = 0.0,
) -> None:
    """
    Edge-steered diffusion in place. Pixels whose CIEDE2000 distance to the
    nearest entry is within `threshold` are written without spreading error.
    """
    assert_u8_rgba(pixels)
    if len(palette) == 0:
        return

    matcher = PaletteMatcher(palette, "ciede2000")
    height, width = int(pixels.shape[0]), int(pixels.shape[1])
    working: List[List[List[int]]] = pixels[..., :3].tolist()

    for y in range(height):
        for x in range(width):
            r, g, b = working[y][x]
            chosen, dist = matcher.nearest_with_distance((r, g, b))
            pixels[y, x, 0] = chosen[0]
            pixels[y, x, 1] = chosen[1]
            pixels[y, x, 2] = chosen[2]
            if dist <= threshold:
                continue

            gx, gy = sobel_at(working, x, y)
            err = (
                float(r - chosen[0]),
                float(g - chosen[1]),
                float(b - chosen[2]),
            )
            for dx, dy, base_w in EDGE_TAPS:
                nx, ny = x + dx, y + dy
                if nx < 0 or ny < 0 or nx >= width or ny >= height:
                    continue
                wgt = base_w * steer_factor(dx, dy, gx, gy)
                q = working[ny][nx]
                for c in range(3):
                    q[c] = clamp_byte(q[c] + err[c] * wgt)


__all__ = ["EDGE_MAG_MIN", "EDGE_STEER_MAX", "EDGE_TAPS", "sobel_at", "steer_factor", "edge_dither"]
