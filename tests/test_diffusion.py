import numpy as np
import pytest

from palette_dither.diffusion import diffuse, edge_dither
from palette_dither.diffusion.edge import EDGE_STEER_MAX, sobel_at, steer_factor
from palette_dither.kernels import ATKINSON, FLOYD_STEINBERG, KERNELS, SIERRA_LITE

from .helpers import BLACK, WHITE, colours_in, grid_from_colours, solid_grid


def _palette_image(palette, width=9, height=7):
    rng = np.random.default_rng(3)
    idx = rng.integers(0, len(palette), size=(height, width))
    rows = [[palette[i] for i in row] for row in idx.tolist()]
    return grid_from_colours(rows)


@pytest.mark.parametrize("name", sorted(KERNELS))
def test_palette_image_is_unchanged(name, cozy_palette):
    grid = _palette_image(cozy_palette)
    before = grid.copy()
    diffuse(grid, cozy_palette, KERNELS[name])
    np.testing.assert_array_equal(grid, before)


@pytest.mark.parametrize("name", sorted(KERNELS))
def test_alpha_untouched_and_outputs_in_palette(name, noisy_grid, cozy_palette):
    alpha = noisy_grid[..., 3].copy()
    diffuse(noisy_grid, cozy_palette, KERNELS[name])
    np.testing.assert_array_equal(noisy_grid[..., 3], alpha)
    assert colours_in(noisy_grid) <= set(cozy_palette)


def test_empty_palette_is_identity(noisy_grid):
    before = noisy_grid.copy()
    diffuse(noisy_grid, [], FLOYD_STEINBERG)
    np.testing.assert_array_equal(noisy_grid, before)


def test_error_reaches_next_pixel():
    # 100 maps to black; 100 + 100*7//16 = 143 then maps to white
    grid = grid_from_colours([[(100, 100, 100), (100, 100, 100)]])
    diffuse(grid, [BLACK, WHITE], FLOYD_STEINBERG)
    assert tuple(grid[0, 0, :3]) == BLACK
    assert tuple(grid[0, 1, :3]) == WHITE


def test_mid_grey_floyd_steinberg_averages_out():
    grid = solid_grid(100, 100, (128, 128, 128, 255))
    diffuse(grid, [BLACK, WHITE], FLOYD_STEINBERG)
    white = np.all(grid[..., :3] == 255, axis=-1).mean()
    assert colours_in(grid) <= {BLACK, WHITE}
    assert abs(white - 0.5) < 0.05


def test_atkinson_drops_part_of_the_error():
    fs = solid_grid(40, 40, (200, 200, 200, 255))
    atk = fs.copy()
    diffuse(fs, [BLACK, WHITE], FLOYD_STEINBERG)
    diffuse(atk, [BLACK, WHITE], ATKINSON)
    # losing 2/8 of each error pushes light greys further toward white
    assert (atk[..., 0] == 255).mean() >= (fs[..., 0] == 255).mean()


def test_serpentine_odd_row_runs_right_to_left():
    # row 0 is exact black, so only row 1 carries error. Scanned from x=3
    # down to 0 with the mirrored (-1, 0, 2/4) tap:
    #   x=3: 100 -> black, +50 left     x=2: 150 -> white, -52 left
    #   x=1:  48 -> black, +24 left     x=0: 124 -> white
    grey = (100, 100, 100)
    grid = grid_from_colours([[BLACK] * 4, [grey] * 4])
    diffuse(grid, [BLACK, WHITE], SIERRA_LITE, metric="lab")
    assert [tuple(int(v) for v in px) for px in grid[0, :, :3]] == [BLACK] * 4
    assert [tuple(int(v) for v in px) for px in grid[1, :, :3]] == [WHITE, BLACK, WHITE, BLACK]


def test_raster_odd_row_runs_left_to_right():
    grey = (100, 100, 100)
    grid = grid_from_colours([[BLACK] * 4, [grey] * 4])
    diffuse(grid, [BLACK, WHITE], FLOYD_STEINBERG, metric="lab")
    # x=0: 100 -> black, +43 right; x=1: 143 -> white, -49 right; x=2: 51 -> black, +22 right; x=3: 122 -> white
    assert [tuple(int(v) for v in px) for px in grid[1, :, :3]] == [BLACK, WHITE, BLACK, WHITE]


def test_serpentine_is_deterministic():
    a = solid_grid(17, 5, (90, 140, 60, 255))
    b = a.copy()
    diffuse(a, [BLACK, WHITE, (0, 255, 0)], SIERRA_LITE)
    diffuse(b, [BLACK, WHITE, (0, 255, 0)], SIERRA_LITE)
    np.testing.assert_array_equal(a, b)


def test_rejects_non_rgba():
    with pytest.raises(TypeError):
        diffuse(np.zeros((4, 4, 3), dtype=np.uint8), [BLACK], FLOYD_STEINBERG)


# Edge dithering


def test_sobel_flat_region_is_zero():
    working = [[[80, 80, 80] for _x in range(5)] for _y in range(5)]
    gx, gy = sobel_at(working, 2, 2)
    assert gx == pytest.approx(0.0)
    assert gy == pytest.approx(0.0)


def test_sobel_vertical_edge_has_horizontal_gradient():
    working = [[[0, 0, 0] if x < 2 else [255, 255, 255] for x in range(5)] for _y in range(5)]
    gx, gy = sobel_at(working, 2, 2)
    assert gx > 0.0
    assert gy == pytest.approx(0.0)


def test_steer_factor_bounds():
    assert steer_factor(1, 0, 0.0, 0.0) == 1.0
    assert steer_factor(1, 0, 0.005, 0.0) == 1.0
    # gradient along x: tangent is along y
    assert steer_factor(0, 1, 4.0, 0.0) == EDGE_STEER_MAX
    assert steer_factor(1, 0, 4.0, 0.0) == 1.0
    assert 1.0 < steer_factor(0, 1, 0.5, 0.0) < EDGE_STEER_MAX


def test_edge_dither_palette_image_unchanged(cozy_palette):
    grid = _palette_image(cozy_palette)
    before = grid.copy()
    edge_dither(grid, cozy_palette)
    np.testing.assert_array_equal(grid, before)


def test_edge_dither_alpha_and_membership(noisy_grid, cozy_palette):
    alpha = noisy_grid[..., 3].copy()
    edge_dither(noisy_grid, cozy_palette)
    np.testing.assert_array_equal(noisy_grid[..., 3], alpha)
    assert colours_in(noisy_grid) <= set(cozy_palette)


def test_edge_dither_threshold_disables_diffusion():
    flat = grid_from_colours([[(100, 100, 100)] * 4])
    edge_dither(flat, [BLACK, WHITE], threshold=1000.0)
    assert colours_in(flat) == {BLACK}
