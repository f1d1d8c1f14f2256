# palette_dither/colour_convert.py
from __future__ import annotations

"""
Colour conversions and metrics (sRGB, D65).

Exports:
  rgb_to_lab(r, g, b)
  lab_distance(lab1, lab2)
  lab_distance_enhanced(lab1, lab2)
  delta_e2000_pair(lab1, lab2)
  distance_fn(metric)
  brightness(r, g, b)
  luminance(r, g, b)"""

import math
from typing import Callable, Dict, Sequence

import numpy as np
from numpy.typing import NDArray

from .core_types import LabTuple, Metric

LabLike = Sequence[float] | NDArray[np.floating]

# Reference white (D65)
XN, YN, ZN = 0.95047, 1.00000, 1.08883

# Lab companding: cube root above EPS, linear segment below
LAB_EPS = 0.008856
LAB_KAPPA = 7.787


# sRGB to linear


def _srgb_to_linear(u: float) -> float:
    return ((u + 0.055) / 1.055) ** 2.4 if u > 0.04045 else u / 12.92


def _lab_f(t: float) -> float:
    return t ** (1.0 / 3.0) if t > LAB_EPS else LAB_KAPPA * t + 16.0 / 116.0


# sRGB to Lab (D65)


def rgb_to_lab(r: int, g: int, b: int) -> LabTuple:
    """
    sRGB bytes to CIE Lab (D65). Scalar reference implementation; every
    palette match in the engines goes through this formula.
    """
    rl = _srgb_to_linear(r / 255.0)
    gl = _srgb_to_linear(g / 255.0)
    bl = _srgb_to_linear(b / 255.0)

    # Linear RGB -> XYZ (D65)
    X = 0.4124564 * rl + 0.3575761 * gl + 0.1804375 * bl
    Y = 0.2126729 * rl + 0.7151522 * gl + 0.0721750 * bl
    Z = 0.0193339 * rl + 0.1191920 * gl + 0.9503041 * bl

    fx = _lab_f(X / XN)
    fy = _lab_f(Y / YN)
    fz = _lab_f(Z / ZN)

    return (116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))


# Plain metrics


def lab_distance(lab1: LabLike, lab2: LabLike) -> float:
    """Euclidean distance in Lab (CIE76)."""
    dl = float(lab1[0]) - float(lab2[0])
    da = float(lab1[1]) - float(lab2[1])
    db = float(lab1[2]) - float(lab2[2])
    return math.sqrt(dl * dl + da * da + db * db)


def lab_distance_enhanced(lab1: LabLike, lab2: LabLike) -> float:
    """Weighted Lab distance; a* counts 4x and L* 2x against b*."""
    dl = float(lab1[0]) - float(lab2[0])
    da = float(lab1[1]) - float(lab2[1])
    db = float(lab1[2]) - float(lab2[2])
    return math.sqrt(2.0 * dl * dl + 4.0 * da * da + db * db)


# CIEDE2000


def delta_e2000_pair(lab1: LabLike, lab2: LabLike) -> float:
    """
    CIEDE2000 distance between two Lab colours (kL = kC = kH = 1).
    Scalar reference implementation.
    """
    L1, a1, b1 = float(lab1[0]), float(lab1[1]), float(lab1[2])
    L2, a2, b2 = float(lab2[0]), float(lab2[1]), float(lab2[2])

    C1 = math.hypot(a1, b1)
    C2 = math.hypot(a2, b2)
    C_bar = 0.5 * (C1 + C2)
    G = 0.5 * (1.0 - math.sqrt((C_bar**7) / (C_bar**7 + 25.0**7)))

    a1p = (1.0 + G) * a1
    a2p = (1.0 + G) * a2
    C1p = math.hypot(a1p, b1)
    C2p = math.hypot(a2p, b2)

    def _hue(a_val: float, b_val: float) -> float:
        if a_val == 0.0 and b_val == 0.0:
            return 0.0
        ang = math.degrees(math.atan2(b_val, a_val))
        return ang + 360.0 if ang < 0.0 else ang

    h1p = _hue(a1p, b1)
    h2p = _hue(a2p, b2)

    dLp = L2 - L1
    dCp = C2p - C1p

    # Zero chroma on either side: hue is undefined, force the difference to 0
    achromatic = C1p * C2p == 0.0

    dhp = h2p - h1p
    if achromatic:
        dhp = 0.0
    elif dhp > 180.0:
        dhp -= 360.0
    elif dhp < -180.0:
        dhp += 360.0

    dHp = 2.0 * math.sqrt(C1p * C2p) * math.sin(math.radians(dhp / 2.0))

    L_bar = 0.5 * (L1 + L2)
    C_bar_p = 0.5 * (C1p + C2p)

    if achromatic:
        h_bar_p = h1p + h2p
    else:
        h_sum = h1p + h2p
        h_diff = abs(h1p - h2p)
        if h_diff <= 180.0:
            h_bar_p = 0.5 * h_sum
        elif h_sum < 360.0:
            h_bar_p = 0.5 * (h_sum + 360.0)
        else:
            h_bar_p = 0.5 * (h_sum - 360.0)

    T = (
        1.0
        - 0.17 * math.cos(math.radians(h_bar_p - 30.0))
        + 0.24 * math.cos(math.radians(2.0 * h_bar_p))
        + 0.32 * math.cos(math.radians(3.0 * h_bar_p + 6.0))
        - 0.20 * math.cos(math.radians(4.0 * h_bar_p - 63.0))
    )

    d_theta = 30.0 * math.exp(-(((h_bar_p - 275.0) / 25.0) ** 2.0))
    R_c = 2.0 * math.sqrt((C_bar_p**7) / (C_bar_p**7 + 25.0**7))

    S_l = 1.0 + (0.015 * ((L_bar - 50.0) ** 2.0)) / math.sqrt(
        20.0 + ((L_bar - 50.0) ** 2.0)
    )
    S_c = 1.0 + 0.045 * C_bar_p
    S_h = 1.0 + 0.015 * C_bar_p * T
    R_t = -math.sin(math.radians(2.0 * d_theta)) * R_c

    kL = kC = kH = 1.0
    dE = math.sqrt(
        (dLp / (kL * S_l)) ** 2
        + (dCp / (kC * S_c)) ** 2
        + (dHp / (kH * S_h)) ** 2
        + R_t * (dCp / (kC * S_c)) * (dHp / (kH * S_h))
    )
    return float(dE)


_METRICS: Dict[str, Callable[[LabLike, LabLike], float]] = {
    "ciede2000": delta_e2000_pair,
    "lab": lab_distance,
    "enhanced": lab_distance_enhanced,
}


def distance_fn(metric: Metric) -> Callable[[LabLike, LabLike], float]:
    """Look up a distance function by metric name."""
    try:
        return _METRICS[metric]
    except KeyError:
        raise ValueError(f"unknown metric {metric!r}") from None


# Brightness


def brightness(r: int, g: int, b: int) -> float:
    """Perceived brightness (BT.601 weights) normalised to 0..1."""
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255.0


def luminance(r: int, g: int, b: int) -> float:
    """Relative luminance (Rec.709 weights) on the 0..255 scale."""
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


__all__ = [
    "rgb_to_lab",
    "lab_distance",
    "lab_distance_enhanced",
    "delta_e2000_pair",
    "distance_fn",
    "brightness",
    "luminance",
]
