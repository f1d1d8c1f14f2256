import numpy as np
import pytest

from palette_dither.matcher import two_nearest
from palette_dither.ordered import (
    BAYER_MATRICES,
    bayer_dither,
    dual_color,
    hash_noise,
    matrix_threshold,
    ordered_selective,
    randomized_selective,
)
from palette_dither.ordered.selective import ORDERED_8X8, distance_ratio
from palette_dither.quantize import quantize_nearest

from .helpers import BLACK, GREY, WHITE, colours_in, grid_from_colours, solid_grid


@pytest.mark.parametrize("size", [2, 4, 8])
def test_matrices_are_permutations(size):
    values = sorted(v for row in BAYER_MATRICES[size] for v in row)
    assert values == list(range(size * size))


def test_ordered_8x8_is_permutation():
    assert sorted(v for row in ORDERED_8X8 for v in row) == list(range(64))


def test_bayer_4x4_tiles_with_period_4():
    m = BAYER_MATRICES[4]
    for y in range(8):
        for x in range(8):
            t = matrix_threshold(m, x, y)
            assert 0.0 <= t < 1.0
            assert t == matrix_threshold(m, x + 4, y)
            assert t == matrix_threshold(m, x, y + 4)


def test_bayer_output_is_periodic_over_periodic_input():
    rng = np.random.default_rng(11)
    tile = rng.integers(0, 256, size=(4, 4, 4), dtype=np.uint8)
    grid = np.tile(tile, (3, 3, 1))
    bayer_dither(grid, [BLACK, GREY, WHITE, (200, 30, 30)], 4)
    np.testing.assert_array_equal(grid[:, 0:4], grid[:, 4:8])
    np.testing.assert_array_equal(grid[0:4], grid[4:8])


@pytest.mark.parametrize("size", [2, 4, 8, 5])
def test_bayer_picks_one_of_two_nearest(size, noisy_grid, cozy_palette):
    src = noisy_grid.copy()
    bayer_dither(noisy_grid, cozy_palette, size)
    np.testing.assert_array_equal(noisy_grid[..., 3], src[..., 3])
    for y in range(src.shape[0]):
        for x in range(src.shape[1]):
            pair = two_nearest(tuple(int(v) for v in src[y, x, :3]), cozy_palette, "lab")
            assert tuple(int(v) for v in noisy_grid[y, x, :3]) in pair


def test_bayer_unknown_size_falls_back_to_4x4(noisy_grid, cozy_palette):
    a = noisy_grid.copy()
    bayer_dither(noisy_grid, cozy_palette, 5)
    bayer_dither(a, cozy_palette, 4)
    np.testing.assert_array_equal(noisy_grid, a)


def test_hash_noise_is_deterministic_and_bounded():
    values = [hash_noise(x, y, 12345) for y in range(16) for x in range(16)]
    assert values == [hash_noise(x, y, 12345) for y in range(16) for x in range(16)]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert len(set(values)) > 200
    assert hash_noise(3, 4, 1) != hash_noise(3, 4, 2)


def test_distance_ratio():
    assert distance_ratio(0.0, 0.0) == 0.5
    assert distance_ratio(1.0, 3.0) == pytest.approx(0.25)


def test_selective_large_threshold_is_lab_nearest(noisy_grid, cozy_palette):
    expected = noisy_grid.copy()
    quantize_nearest(expected, cozy_palette, "lab")
    ordered_selective(noisy_grid, cozy_palette, threshold=1e9)
    np.testing.assert_array_equal(noisy_grid, expected)


def test_selective_zero_threshold_mixes_two_nearest():
    # 128 sits between black and white, so the pattern must use both
    grid = solid_grid(8, 8, (118, 118, 118, 255))
    randomized_selective(grid, [BLACK, WHITE], threshold=0.0)
    assert colours_in(grid) == {BLACK, WHITE}
    grid = solid_grid(8, 8, (118, 118, 118, 255))
    ordered_selective(grid, [BLACK, WHITE], threshold=0.0)
    assert colours_in(grid) == {BLACK, WHITE}


def test_randomized_selective_seed_changes_pattern():
    a = solid_grid(16, 16, (118, 118, 118, 255))
    b = a.copy()
    randomized_selective(a, [BLACK, WHITE], threshold=0.0, seed=1)
    randomized_selective(b, [BLACK, WHITE], threshold=0.0, seed=2)
    assert not np.array_equal(a, b)


def test_dual_color_splits_on_brightness():
    grid = grid_from_colours([[(220, 220, 220), (40, 40, 40)]])
    dual_color(grid, [BLACK, GREY, WHITE])
    # bright -> nearest, dark -> second nearest
    assert tuple(grid[0, 0, :3]) == WHITE
    assert tuple(grid[0, 1, :3]) == GREY


@pytest.mark.parametrize(
    "run",
    [
        lambda g, p, w: bayer_dither(g, p, 8, workers=w),
        lambda g, p, w: ordered_selective(g, p, 0.0, workers=w),
        lambda g, p, w: randomized_selective(g, p, 0.0, workers=w),
        lambda g, p, w: dual_color(g, p, workers=w),
    ],
)
def test_threaded_rows_match_sequential(run, cozy_palette):
    rng = np.random.default_rng(5)
    grid = rng.integers(0, 256, size=(48, 20, 4), dtype=np.uint8)
    seq = grid.copy()
    run(seq, cozy_palette, 1)
    run(grid, cozy_palette, 4)
    np.testing.assert_array_equal(grid, seq)


def test_empty_palette_identity(noisy_grid):
    before = noisy_grid.copy()
    bayer_dither(noisy_grid, [])
    ordered_selective(noisy_grid, [])
    randomized_selective(noisy_grid, [])
    dual_color(noisy_grid, [])
    np.testing.assert_array_equal(noisy_grid, before)
