# palette_dither/image_io.py
from __future__ import annotations

import base64
import binascii
import io
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import U8Image

"""
Image I/O helpers (RGBA in sRGB), data-URL codec and grid resize utilities.
"""


class EngineError(Exception):
    """Raised by the render pipeline for input it cannot decode or encode."""


class UnsupportedDataUrl(EngineError):
    def __init__(self, reason: str = "unsupported image data url"):
        super().__init__(reason)


def _to_rgba_array(im: Image.Image) -> U8Image:
    im = ImageOps.exif_transpose(im)
    return np.array(im.convert("RGBA"), dtype=np.uint8)


def decode_data_url(data_url: str) -> U8Image:
    """'data:image/<type>;base64,<payload>' -> uint8 (H,W,4)."""
    header, sep, payload = data_url.partition(",")
    if not sep or "base64" not in header:
        raise UnsupportedDataUrl()
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise UnsupportedDataUrl("invalid base64 payload") from None
    try:
        with Image.open(io.BytesIO(raw)) as im:
            return _to_rgba_array(im)
    except (UnidentifiedImageError, OSError) as e:
        raise EngineError(f"cannot decode image: {e}") from e


def encode_png_data_url(rgba: U8Image) -> str:
    """uint8 (H,W,4) -> 'data:image/png;base64,...'."""
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(rgba)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def load_image_rgba(path: Path) -> U8Image:
    try:
        with Image.open(path) as im:
            return _to_rgba_array(im)
    except (UnidentifiedImageError, OSError) as e:
        raise EngineError(f"cannot read {path.name}: {e}") from e


def save_image_rgba(path: Path, rgba: U8Image) -> Path:
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    Image.fromarray(np.ascontiguousarray(rgba)).save(path)
    return path


def file_to_data_url(path: Path) -> str:
    """Read any Pillow-readable file and re-encode it as a PNG data URL."""
    return encode_png_data_url(load_image_rgba(path))


def resize_to_grid(rgba: U8Image, grid_w: int, grid_h: int) -> U8Image:
    """Exact nearest-neighbour resize to the working grid."""
    grid_w, grid_h = max(1, int(grid_w)), max(1, int(grid_h))
    if rgba.shape[1] == grid_w and rgba.shape[0] == grid_h:
        return rgba.copy()
    im = Image.fromarray(np.ascontiguousarray(rgba))
    im2 = im.resize((grid_w, grid_h), resample=Image.Resampling.NEAREST)
    return np.array(im2, dtype=np.uint8)


def upscale_center(rgba: U8Image, display_size: int) -> U8Image:
    """
    Integer nearest-neighbour upscale (same factor on both axes, at least 1),
    centred on a transparent display_size square canvas.
    """
    max_dim = max(1, int(display_size))
    h, w = int(rgba.shape[0]), int(rgba.shape[1])
    factor = max(1, min(max(1, max_dim // w), max(1, max_dim // h)))
    scaled = np.repeat(np.repeat(rgba, factor, axis=0), factor, axis=1)

    canvas = np.zeros((max_dim, max_dim, 4), dtype=np.uint8)
    sh, sw = scaled.shape[0], scaled.shape[1]
    off_y = max(0, (max_dim - sh) // 2)
    off_x = max(0, (max_dim - sw) // 2)
    ch, cw = min(sh, max_dim - off_y), min(sw, max_dim - off_x)
    canvas[off_y : off_y + ch, off_x : off_x + cw] = scaled[:ch, :cw]
    return canvas


__all__ = [
    "EngineError",
    "UnsupportedDataUrl",
    "decode_data_url",
    "encode_png_data_url",
    "load_image_rgba",
    "save_image_rgba",
    "file_to_data_url",
    "resize_to_grid",
    "upscale_center",
]
