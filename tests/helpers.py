from typing import Sequence, Tuple

import numpy as np

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GREY = (128, 128, 128)


def solid_grid(width: int, height: int, rgba: Tuple[int, int, int, int]) -> np.ndarray:
    grid = np.empty((height, width, 4), dtype=np.uint8)
    grid[...] = rgba
    return grid


def grid_from_colours(
    rows: Sequence[Sequence[Tuple[int, int, int]]], alpha: int = 255
) -> np.ndarray:
    arr = np.array(rows, dtype=np.uint8)
    out = np.empty(arr.shape[:2] + (4,), dtype=np.uint8)
    out[..., :3] = arr
    out[..., 3] = alpha
    return out


def colours_in(grid: np.ndarray) -> set:
    return {tuple(int(v) for v in px) for px in grid[..., :3].reshape(-1, 3)}
