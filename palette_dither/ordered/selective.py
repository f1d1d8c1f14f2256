# palette_dither/ordered/selective.py
from __future__ import annotations

"""
Threshold-gated selection between the two nearest colours (Lab distance).

A pixel whose nearest distance d1 is within the threshold takes the nearest
colour. Beyond it, a secondary signal in [0, 1] is compared against
d1 / (d1 + d2): the second-nearest colour wins when the signal is larger.
No error is propagated, so both passes are safe to split by rows.
"""

from typing import Callable, Sequence

from ..core_types import RGBTuple, U8Image, assert_u8_rgba
from ..matcher import PaletteMatcher
from ..utils import map_pixels
from .bayer import Matrix, matrix_threshold

ORDERED_SELECTIVE_THRESHOLD = 25.0
RANDOMIZED_SELECTIVE_THRESHOLD = 30.0
RANDOM_SEED = 12345

ORDERED_8X8: Matrix = (
    (0, 32, 8, 40, 2, 34, 10, 42),
    (48, 16, 56, 24, 50, 18, 58, 26),
    (12, 44, 4, 36, 14, 46, 6, 38),
    (60, 28, 52, 20, 62, 30, 54, 22),
    (3, 35, 11, 43, 1, 33, 9, 41),
    (51, 19, 59, 27, 49, 17, 57, 25),
    (15, 47, 7, 39, 13, 45, 5, 37),
    (63, 31, 55, 23, 61, 29, 53, 21),
)

_U32 = 0xFFFFFFFF
_I31 = 0x7FFFFFFF


def hash_noise(x: int, y: int, seed: int) -> float:
    """Deterministic per-pixel noise in [0, 1] from 32-bit wrapping integer math."""
    n = (x * 73 + y * 37 + seed) & _U32
    n ^= (n << 13) & _U32
    inner = (n * 15731 + 789221) & _U32
    n = (n - ((n * inner + 1376312589) & _U32)) & _U32
    return (n & _I31) / float(_I31)


def distance_ratio(d1: float, d2: float) -> float:
    """d1 / (d1 + d2), or 0.5 when both are zero."""
    total = d1 + d2
    return d1 / total if total > 0.0 else 0.5


def _selective(
    pixels: U8Image,
    palette: Sequence[RGBTuple],
    threshold: float,
    signal: Callable[[int, int], float],
    workers: int,
) -> None:
    assert_u8_rgba(pixels)
    if len(palette) == 0:
        return
    matcher = PaletteMatcher(palette, "lab")

    def pick(x: int, y: int, r: int, g: int, b: int) -> RGBTuple:
        c1, d1, c2, d2 = matcher.two_nearest_with_distances((r, g, b))
        if d1 > threshold and signal(x, y) > distance_ratio(d1, d2):
            return c2
        return c1

    map_pixels(pixels, pick, workers)


def ordered_selective(
    pixels: U8Image,
    palette: Sequence[RGBTuple],
    threshold: float = ORDERED_SELECTIVE_THRESHOLD,
    *,
    workers: int = 1,
) -> None:
    """Selective pass with an 8x8 ordered matrix as the secondary signal."""
    _selective(
        pixels,
        palette,
        threshold,
        lambda x, y: matrix_threshold(ORDERED_8X8, x, y),
        workers,
    )


def randomized_selective(
    pixels: U8Image,
    palette: Sequence[RGBTuple],
    threshold: float = RANDOMIZED_SELECTIVE_THRESHOLD,
    *,
    seed: int = RANDOM_SEED,
    workers: int = 1,
) -> None:
    """Selective pass with hashed per-pixel noise as the secondary signal."""
    _selective(
        pixels,
        palette,
        threshold,
        lambda x, y: hash_noise(x, y, seed),
        workers,
    )


__all__ = [
    "ORDERED_SELECTIVE_THRESHOLD",
    "RANDOMIZED_SELECTIVE_THRESHOLD",
    "RANDOM_SEED",
    "ORDERED_8X8",
    "hash_noise",
    "distance_ratio",
    "ordered_selective",
    "randomized_selective",
]
