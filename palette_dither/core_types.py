# palette_dither/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import Literal, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
LabTuple = Tuple[float, float, float]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 4) RGBA working grid

Metric = Literal["ciede2000", "lab", "enhanced"]

# Value objects


@dataclass(frozen=True)
class Palette:
    """Named, ordered palette. Order decides ties between equal distances."""

    name: str
    colors: Tuple[RGBTuple, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.colors)

    def is_empty(self) -> bool:
        return len(self.colors) == 0


# Small helpers


def clamp_byte(value: float) -> int:
    """Clamp to [0, 255] and truncate toward zero."""
    if value < 0.0:
        return 0
    if value > 255.0:
        return 255
    return int(value)


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse 'rrggbb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if s.startswith("#"):
        s = s[1:]
    if len(s) != 6:
        raise ValueError(f"hex must be '#rrggbb', got {hex_str!r}")
    try:
        return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
    except ValueError:
        raise ValueError(f"invalid hex colour {hex_str!r}") from None


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if len(value) < 3:  # type: ignore[arg-type]
        raise ValueError("sequence too small for RGB")
    v = value  # type: ignore[assignment]
    return (int(v[0]), int(v[1]), int(v[2]))


def assert_u8_rgba(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,4) grid and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) RGBA grid")
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "LabTuple",
    "HexStr",
    "U8Image",
    "Metric",
    # value objects
    "Palette",
    # helpers
    "clamp_byte",
    "rgb_to_hex",
    "hex_to_rgb",
    "coerce_to_rgb_tuple",
    "assert_u8_rgba",
]
