# palette_dither/ordered/dual.py
from __future__ import annotations

"""
Dual-colour pass: bright pixels (brightness > 0.5) take the Lab-nearest
palette colour, the rest take the second-nearest. Stateless, no threshold.
"""

from typing import Sequence

from ..colour_convert import brightness
from ..core_types import RGBTuple, U8Image, assert_u8_rgba
from ..matcher import PaletteMatcher
from ..utils import map_pixels

BRIGHTNESS_SPLIT = 0.5


def dual_color(
    pixels: U8Image, palette: Sequence[RGBTuple], *, workers: int = 1
) -> None:
    assert_u8_rgba(pixels)
    if len(palette) == 0:
        return
    matcher = PaletteMatcher(palette, "lab")

    def pick(x: int, y: int, r: int, g: int, b: int) -> RGBTuple:
        c1, c2 = matcher.two_nearest((r, g, b))
        return c1 if brightness(r, g, b) > BRIGHTNESS_SPLIT else c2

    map_pixels(pixels, pick, workers)


__all__ = ["BRIGHTNESS_SPLIT", "dual_color"]
