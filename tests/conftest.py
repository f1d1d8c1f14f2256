import numpy as np
import pytest

from palette_dither.palette_data import get_palette_by_name


@pytest.fixture
def noisy_grid() -> np.ndarray:
    """12x10 RGBA grid with random colours and random alpha."""
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(10, 12, 4), dtype=np.uint8)


@pytest.fixture
def cozy_palette():
    return get_palette_by_name("Cozy 8").colors
