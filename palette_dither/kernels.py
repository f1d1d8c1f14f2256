# palette_dither/kernels.py
from __future__ import annotations

"""
Error-diffusion kernel table.

Each kernel lists forward taps (dx, dy, weight) for a left-to-right pass, a
shared denominator, and whether rows alternate direction (serpentine). On odd
rows of a serpentine kernel every dx is mirrored.

  Floyd-Steinberg      /16  raster
  Atkinson             /8   raster   (taps sum to 6/8; 2/8 of the error is dropped)
  Stucki               /42  serpentine
  Burkes               /32  serpentine
  Sierra (3-row)       /32  serpentine
  Two-Row Sierra       /16  serpentine
  Sierra Lite          /4   serpentine
  Jarvis-Judice-Ninke  /48  serpentine
"""

from dataclasses import dataclass
from typing import Dict, Tuple

Tap = Tuple[int, int, int]  # (dx, dy, weight numerator)


@dataclass(frozen=True)
class DiffusionKernel:
    name: str
    taps: Tuple[Tap, ...]
    denominator: int
    serpentine: bool = False

    def left_to_right(self, y: int) -> bool:
        """Scan direction for row y."""
        return (not self.serpentine) or (y % 2 == 0)

    def offsets_for_row(self, y: int) -> Tuple[Tap, ...]:
        """Taps as applied on row y (dx mirrored on right-to-left rows)."""
        if self.left_to_right(y):
            return self.taps
        return tuple((-dx, dy, w) for dx, dy, w in self.taps)

    @property
    def weight_sum(self) -> int:
        return sum(w for _dx, _dy, w in self.taps)


FLOYD_STEINBERG = DiffusionKernel(
    "Floyd-Steinberg",
    ((1, 0, 7), (-1, 1, 3), (0, 1, 5), (1, 1, 1)),
    16,
)

ATKINSON = DiffusionKernel(
    "Atkinson",
    ((1, 0, 1), (2, 0, 1), (-1, 1, 1), (0, 1, 1), (1, 1, 1), (0, 2, 1)),
    8,
)

# Row 0:      .  .  X  8  4
# Row 1:      2  4  8  4  2
# Row 2:      1  2  4  2  1
STUCKI = DiffusionKernel(
    "Stucki",
    (
        (1, 0, 8), (2, 0, 4),
        (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
        (-2, 2, 1), (-1, 2, 2), (0, 2, 4), (1, 2, 2), (2, 2, 1),
    ),
    42,
    serpentine=True,
)

BURKES = DiffusionKernel(
    "Burkes",
    (
        (1, 0, 8), (2, 0, 4),
        (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
    ),
    32,
    serpentine=True,
)

SIERRA = DiffusionKernel(
    "Sierra",
    (
        (1, 0, 5), (2, 0, 3),
        (-2, 1, 2), (-1, 1, 4), (0, 1, 5), (1, 1, 4), (2, 1, 2),
        (-1, 2, 2), (0, 2, 3), (1, 2, 2),
    ),
    32,
    serpentine=True,
)

TWO_ROW_SIERRA = DiffusionKernel(
    "Two-Row Sierra",
    (
        (1, 0, 4), (2, 0, 3),
        (-2, 1, 1), (-1, 1, 2), (0, 1, 3), (1, 1, 2), (2, 1, 1),
    ),
    16,
    serpentine=True,
)

SIERRA_LITE = DiffusionKernel(
    "Sierra Lite",
    ((1, 0, 2), (-1, 1, 1), (0, 1, 1)),
    4,
    serpentine=True,
)

# Row 0:      .  .  X  7  5
# Row 1:      3  5  7  5  3
# Row 2:      1  3  5  3  1
JARVIS_JUDICE_NINKE = DiffusionKernel(
    "Jarvis-Judice-Ninke",
    (
        (1, 0, 7), (2, 0, 5),
        (-2, 1, 3), (-1, 1, 5), (0, 1, 7), (1, 1, 5), (2, 1, 3),
        (-2, 2, 1), (-1, 2, 3), (0, 2, 5), (1, 2, 3), (2, 2, 1),
    ),
    48,
    serpentine=True,
)

KERNELS: Dict[str, DiffusionKernel] = {
    k.name: k
    for k in (
        FLOYD_STEINBERG,
        ATKINSON,
        STUCKI,
        BURKES,
        SIERRA,
        TWO_ROW_SIERRA,
        SIERRA_LITE,
        JARVIS_JUDICE_NINKE,
    )
}


def offsets_for_row(kernel: DiffusionKernel, y: int) -> Tuple[Tap, ...]:
    """Convenience wrapper around DiffusionKernel.offsets_for_row()."""
    return kernel.offsets_for_row(y)


__all__ = [
    "Tap",
    "DiffusionKernel",
    "FLOYD_STEINBERG",
    "ATKINSON",
    "STUCKI",
    "BURKES",
    "SIERRA",
    "TWO_ROW_SIERRA",
    "SIERRA_LITE",
    "JARVIS_JUDICE_NINKE",
    "KERNELS",
    "offsets_for_row",
]
