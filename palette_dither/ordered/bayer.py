# palette_dither/ordered/bayer.py
from __future__ import annotations

"""
Matrix thresholding between the two nearest palette colours.

This is a brightness gate, not index-based ordered dithering: per pixel the
two Lab-nearest entries are found, and the second one is used only when

    cell < |br - br1|  and  |br - br2| < 1.5 * |br - br1|

where cell is the matrix value at (x mod N, y mod N) scaled to [0, 1).
"""

from typing import Dict, Sequence, Tuple

from ..colour_convert import brightness
from ..core_types import RGBTuple, U8Image, assert_u8_rgba
from ..matcher import PaletteMatcher
from ..utils import map_pixels

Matrix = Tuple[Tuple[int, ...], ...]

BAYER_2X2: Matrix = (
    (0, 2),
    (3, 1),
)

BAYER_4X4: Matrix = (
    (0, 8, 2, 10),
    (12, 4, 14, 6),
    (3, 11, 1, 9),
    (15, 7, 13, 5),
)

BAYER_8X8: Matrix = (
    (0, 48, 12, 60, 3, 51, 15, 63),
    (32, 16, 44, 28, 35, 19, 47, 31),
    (8, 56, 4, 52, 11, 59, 7, 55),
    (40, 24, 36, 20, 43, 27, 39, 23),
    (2, 50, 14, 62, 1, 49, 13, 61),
    (34, 18, 46, 30, 33, 17, 45, 29),
    (10, 58, 6, 54, 9, 57, 5, 53),
    (42, 26, 38, 22, 41, 25, 37, 21),
)

BAYER_MATRICES: Dict[int, Matrix] = {2: BAYER_2X2, 4: BAYER_4X4, 8: BAYER_8X8}

# Second-nearest must be within this factor of the nearest's brightness gap.
SECOND_GAP_RATIO = 1.5


def matrix_threshold(matrix: Matrix, x: int, y: int) -> float:
    """Matrix cell at (x mod N, y mod N) scaled to [0, 1)."""
    n = len(matrix)
    return matrix[y % n][x % n] / float(n * n)


def bayer_dither(
    pixels: U8Image,
    palette: Sequence[RGBTuple],
    matrix_size: int = 4,
    *,
    workers: int = 1,
) -> None:
    """Brightness-gated two-colour matrix dithering, in place."""
    assert_u8_rgba(pixels)
    if len(palette) == 0:
        return
    matrix = BAYER_MATRICES.get(matrix_size, BAYER_4X4)
    matcher = PaletteMatcher(palette, "lab")

    def pick(x: int, y: int, r: int, g: int, b: int) -> RGBTuple:
        c1, c2 = matcher.two_nearest((r, g, b))
        br = brightness(r, g, b)
        diff1 = abs(br - brightness(*c1))
        diff2 = abs(br - brightness(*c2))
        cell = matrix_threshold(matrix, x, y)
        if cell < diff1 and diff2 < diff1 * SECOND_GAP_RATIO:
            return c2
        return c1

    map_pixels(pixels, pick, workers)


__all__ = [
    "Matrix",
    "BAYER_2X2",
    "BAYER_4X4",
    "BAYER_8X8",
    "BAYER_MATRICES",
    "matrix_threshold",
    "bayer_dither",
]
