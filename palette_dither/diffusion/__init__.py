"""
Error-diffusion API.

Provides:
  diffuse(pixels, palette, kernel, *, metric="ciede2000") -> None
    Quantise a uint8 (H,W,4) grid in place with a kernel from
    palette_dither.kernels.

  edge_dither(pixels, palette, *, threshold=0.0) -> None
    Floyd-Steinberg taps steered along Sobel edge tangents.

Notes:
  - Both passes are strictly sequential and never modify alpha.
  - An empty palette leaves the grid untouched.
"""

from .edge import edge_dither
from .engine import diffuse

__all__ = ["diffuse", "edge_dither"]
