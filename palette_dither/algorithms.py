# palette_dither/algorithms.py
from __future__ import annotations

"""
Algorithm selection.

Exports:
- NearestOnly, ErrorDiffusion, OrderedBayer, SelectiveThreshold,
  DualColorByBrightness, AlgorithmKind
- ALGORITHMS: display name -> AlgorithmKind
- resolve_algorithm(name) -> AlgorithmKind
- algorithm_names() -> list[str]
- apply_algorithm(pixels, palette, name_or_kind, *, workers=1) -> None

Notes:
- Unknown names resolve to "Standard" (CIEDE2000 nearest), which cannot fail.
- `workers` is only honoured by the row-independent passes; diffusion always
  runs sequentially.
"""

from dataclasses import dataclass
from typing import Dict, List, Literal, Sequence, Union

from .core_types import Metric, RGBTuple, U8Image, assert_u8_rgba
from .diffusion import diffuse, edge_dither
from .kernels import (
    ATKINSON,
    BURKES,
    FLOYD_STEINBERG,
    JARVIS_JUDICE_NINKE,
    SIERRA,
    SIERRA_LITE,
    STUCKI,
    TWO_ROW_SIERRA,
    DiffusionKernel,
)
from .ordered import bayer_dither, dual_color, ordered_selective, randomized_selective
from .ordered.selective import (
    ORDERED_SELECTIVE_THRESHOLD,
    RANDOMIZED_SELECTIVE_THRESHOLD,
)
from .quantize import ARTISTIC_CONTRAST, quantize_nearest

SelectiveMode = Literal["ordered", "randomized", "edge"]

DEFAULT_ALGORITHM = "Standard"


@dataclass(frozen=True)
class NearestOnly:
    metric: Metric = "ciede2000"
    contrast: float = 1.0


@dataclass(frozen=True)
class ErrorDiffusion:
    kernel: DiffusionKernel


@dataclass(frozen=True)
class OrderedBayer:
    matrix_size: int = 4


@dataclass(frozen=True)
class SelectiveThreshold:
    mode: SelectiveMode
    threshold: float


@dataclass(frozen=True)
class DualColorByBrightness:
    pass


AlgorithmKind = Union[
    NearestOnly, ErrorDiffusion, OrderedBayer, SelectiveThreshold, DualColorByBrightness
]

STANDARD = NearestOnly("ciede2000")

ALGORITHMS: Dict[str, AlgorithmKind] = {
    "Standard": STANDARD,
    "Enhanced": NearestOnly("enhanced"),
    "Artistic": NearestOnly("lab", contrast=ARTISTIC_CONTRAST),
    # thresholded, but both branches take the Lab-nearest colour
    "Selective": NearestOnly("lab"),
    "Floyd-Steinberg": ErrorDiffusion(FLOYD_STEINBERG),
    "Floyd–Steinberg": ErrorDiffusion(FLOYD_STEINBERG),
    "Atkinson": ErrorDiffusion(ATKINSON),
    "Stucki": ErrorDiffusion(STUCKI),
    "Burkes": ErrorDiffusion(BURKES),
    "Sierra": ErrorDiffusion(SIERRA),
    "Two-Row Sierra": ErrorDiffusion(TWO_ROW_SIERRA),
    "Sierra Lite": ErrorDiffusion(SIERRA_LITE),
    "Jarvis-Judice-Ninke": ErrorDiffusion(JARVIS_JUDICE_NINKE),
    "Jarvis, Judice, and Ninke": ErrorDiffusion(JARVIS_JUDICE_NINKE),
    "Bayer": OrderedBayer(4),
    "Bayer 2x2": OrderedBayer(2),
    "Bayer 4x4": OrderedBayer(4),
    "Bayer 8x8": OrderedBayer(8),
    "Ordered Selective": SelectiveThreshold("ordered", ORDERED_SELECTIVE_THRESHOLD),
    "Randomized Selective": SelectiveThreshold(
        "randomized", RANDOMIZED_SELECTIVE_THRESHOLD
    ),
    "Edge Dithering": SelectiveThreshold("edge", 0.0),
    "Dual Color Dithering": DualColorByBrightness(),
}


def resolve_algorithm(name: str) -> AlgorithmKind:
    """Name -> algorithm; unknown names fall back to Standard."""
    return ALGORITHMS.get(name.strip(), STANDARD)


def algorithm_names() -> List[str]:
    """Display names in table order."""
    return list(ALGORITHMS)


def is_data_parallel(kind: AlgorithmKind) -> bool:
    """True when each output pixel depends on its own input pixel only."""
    if isinstance(kind, ErrorDiffusion):
        return False
    if isinstance(kind, SelectiveThreshold):
        return kind.mode != "edge"
    return True


def apply_algorithm(
    pixels: U8Image,
    palette: Sequence[RGBTuple],
    algorithm: Union[str, AlgorithmKind],
    *,
    workers: int = 1,
) -> None:
    """Run exactly one engine over `pixels` (uint8 H,W,4) in place."""
    assert_u8_rgba(pixels)
    kind = resolve_algorithm(algorithm) if isinstance(algorithm, str) else algorithm
    if len(palette) == 0:
        return

    if isinstance(kind, NearestOnly):
        quantize_nearest(
            pixels, palette, kind.metric, contrast=kind.contrast, workers=workers
        )
    elif isinstance(kind, ErrorDiffusion):
        diffuse(pixels, palette, kind.kernel)
    elif isinstance(kind, OrderedBayer):
        bayer_dither(pixels, palette, kind.matrix_size, workers=workers)
    elif isinstance(kind, SelectiveThreshold):
        if kind.mode == "ordered":
            ordered_selective(pixels, palette, kind.threshold, workers=workers)
        elif kind.mode == "randomized":
            randomized_selective(pixels, palette, kind.threshold, workers=workers)
        else:
            edge_dither(pixels, palette, threshold=kind.threshold)
    elif isinstance(kind, DualColorByBrightness):
        dual_color(pixels, palette, workers=workers)
    else:
        quantize_nearest(pixels, palette, workers=workers)


__all__ = [
    "SelectiveMode",
    "DEFAULT_ALGORITHM",
    "NearestOnly",
    "ErrorDiffusion",
    "OrderedBayer",
    "SelectiveThreshold",
    "DualColorByBrightness",
    "AlgorithmKind",
    "STANDARD",
    "ALGORITHMS",
    "resolve_algorithm",
    "algorithm_names",
    "is_data_parallel",
    "apply_algorithm",
]
