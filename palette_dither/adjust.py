# palette_dither/adjust.py
from __future__ import annotations

"""
Pre-quantisation adjustments applied to the working grid.

  apply_denoise(rgba, sigma)    Gaussian blur, skipped for sigma <= 0.01
  apply_tone_gamma(rgba, gamma) per-channel power curve, alpha untouched
"""

from typing import Optional

import numpy as np
from PIL import Image, ImageFilter

from .core_types import U8Image

DENOISE_MIN_SIGMA = 0.01
GAMMA_EPS = 0.001
GAMMA_FLOOR = 0.05


def apply_denoise(rgba: U8Image, sigma: Optional[float]) -> U8Image:
    """Return a blurred copy, or the input itself when no blur applies."""
    if sigma is None or sigma <= DENOISE_MIN_SIGMA:
        return rgba
    im = Image.fromarray(np.ascontiguousarray(rgba))
    return np.array(im.filter(ImageFilter.GaussianBlur(radius=float(sigma))), dtype=np.uint8)


def apply_tone_gamma(rgba: U8Image, gamma: Optional[float]) -> None:
    """
    In place: c' = (c/255) ** (1/gamma) * 255, truncated to a byte.
    Gamma above 1 brightens mid-tones. No-op when gamma is ~1.
    """
    if gamma is None or abs(gamma - 1.0) <= GAMMA_EPS:
        return
    inv = 1.0 / max(gamma, GAMMA_FLOOR)
    rgb = rgba[..., :3].astype(np.float32) / 255.0
    out = np.clip(np.power(rgb, inv) * 255.0, 0.0, 255.0)
    rgba[..., :3] = out.astype(np.uint8)


__all__ = ["DENOISE_MIN_SIGMA", "apply_denoise", "apply_tone_gamma"]
