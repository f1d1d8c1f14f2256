"""
Stateless two-colour passes.

Provides:
  bayer_dither(pixels, palette, matrix_size=4, *, workers=1)
  ordered_selective(pixels, palette, threshold=25.0, *, workers=1)
  randomized_selective(pixels, palette, threshold=30.0, *, seed=12345, workers=1)
  dual_color(pixels, palette, *, workers=1)

Each pass only ever chooses between the two Lab-nearest palette entries of a
pixel and never propagates error, so rows can be processed in parallel.
"""

from .bayer import BAYER_MATRICES, bayer_dither, matrix_threshold
from .dual import dual_color
from .selective import hash_noise, ordered_selective, randomized_selective

__all__ = [
    "BAYER_MATRICES",
    "bayer_dither",
    "matrix_threshold",
    "dual_color",
    "hash_noise",
    "ordered_selective",
    "randomized_selective",
]
