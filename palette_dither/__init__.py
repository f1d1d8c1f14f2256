# palette_dither/__init__.py
"""
palette_dither package.

Purpose:
  Render an image as a small colour grid drawn with a fixed palette, the way
  limited-palette display hardware would. See palette_dither.cli for the CLI.

Public API:
  apply_algorithm : run one named algorithm over a uint8 (H,W,4) grid in place.
  algorithms      : closed algorithm set and name lookup.
  colour_convert  : sRGB -> Lab and the three distance metrics.
  matcher         : nearest / two-nearest palette lookup.
  kernels         : error-diffusion kernel table.
  diffusion       : kernel-driven and edge-aware error diffusion.
  ordered         : matrix, selective and dual-colour passes.
  palette_data    : built-in palettes and palette files.
  pipeline        : data-URL render requests (decode, resize, adjust, encode).
  utils           : shared helpers (row splitting, reporting, logging).

Quick start:
  from palette_dither import apply_algorithm, get_palette_by_name
  apply_algorithm(grid, get_palette_by_name("Cozy 8").colors, "Stucki")
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import algorithms
from . import colour_convert
from . import core_types
from . import diffusion
from . import kernels
from . import matcher
from . import ordered
from . import palette_data
from . import pipeline
from . import utils

from .algorithms import apply_algorithm, resolve_algorithm  # noqa: E402,F401
from .core_types import Palette  # noqa: E402,F401
from .palette_data import get_palette_by_name  # noqa: E402,F401
from .pipeline import RenderRequest, render_base_png, render_preview_png  # noqa: E402,F401

__all__ = [
    "__version__",
    "algorithms",
    "colour_convert",
    "core_types",
    "diffusion",
    "kernels",
    "matcher",
    "ordered",
    "palette_data",
    "pipeline",
    "utils",
    "apply_algorithm",
    "resolve_algorithm",
    "Palette",
    "get_palette_by_name",
    "RenderRequest",
    "render_base_png",
    "render_preview_png",
]
