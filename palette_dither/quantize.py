# palette_dither/quantize.py
from __future__ import annotations

"""
Nearest-colour passes (no dithering).

  Standard : CIEDE2000
  Enhanced : weighted Lab (2 dL^2 + 4 da^2 + db^2)
  Artistic : contrast stretch around mid-grey, then Lab Euclidean

Every output pixel depends only on its own input, so rows may be split
across worker threads.
"""

from typing import Sequence

from .core_types import Metric, RGBTuple, U8Image, assert_u8_rgba, clamp_byte
from .matcher import PaletteMatcher
from .utils import map_pixels

ARTISTIC_CONTRAST = 1.2


def boost_contrast(value: int, factor: float) -> int:
    """Stretch a channel away from 128 by `factor`, clamped to a byte."""
    return clamp_byte((value - 128) * factor + 128.0)


def quantize_nearest(
    pixels: U8Image,
    palette: Sequence[RGBTuple],
    metric: Metric = "ciede2000",
    *,
    contrast: float = 1.0,
    workers: int = 1,
) -> None:
    """Map every pixel to its nearest palette colour, in place."""
    assert_u8_rgba(pixels)
    if len(palette) == 0:
        return
    matcher = PaletteMatcher(palette, metric)

    if contrast == 1.0:

        def pick(x: int, y: int, r: int, g: int, b: int) -> RGBTuple:
            return matcher.nearest((r, g, b))

    else:

        def pick(x: int, y: int, r: int, g: int, b: int) -> RGBTuple:
            return matcher.nearest(
                (
                    boost_contrast(r, contrast),
                    boost_contrast(g, contrast),
                    boost_contrast(b, contrast),
                )
            )

    map_pixels(pixels, pick, workers)


__all__ = ["ARTISTIC_CONTRAST", "boost_contrast", "quantize_nearest"]
