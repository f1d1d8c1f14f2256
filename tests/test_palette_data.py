import pytest

from palette_dither.core_types import hex_to_rgb, rgb_to_hex
from palette_dither.palette_data import (
    BUILTIN_PALETTES,
    DEFAULT_PALETTE,
    build_palette,
    built_in_palettes,
    get_palette_by_name,
    load_palette_file,
    load_palette_library,
    resolve_palette,
)


def test_hex_helpers():
    assert hex_to_rgb("#FF8000") == (255, 128, 0)
    assert hex_to_rgb("00ff7f") == (0, 255, 127)
    assert rgb_to_hex((255, 128, 0)) == "#ff8000"
    for bad in ("#fff", "zzzzzz", "#1234567"):
        with pytest.raises(ValueError):
            hex_to_rgb(bad)


def test_build_palette_skips_bad_entries():
    p = build_palette("x", ["#000000", "nope", "ffffff"])
    assert p.colors == ((0, 0, 0), (255, 255, 255))
    assert len(p) == 2
    assert not p.is_empty()
    assert build_palette("empty", []).is_empty()


def test_builtins():
    palettes = built_in_palettes()
    assert [p.name for p in palettes] == [name for name, _ in BUILTIN_PALETTES]
    assert palettes[0].name == DEFAULT_PALETTE
    assert get_palette_by_name("Black & White").colors == ((0, 0, 0), (255, 255, 255))
    assert get_palette_by_name("no such palette") == palettes[0]


def test_gpl_file(tmp_path):
    path = tmp_path / "warm.gpl"
    path.write_text(
        "GIMP Palette\nName: Warm\nColumns: 4\n#\n255 0 0 Red\n 255 128 0\tOrange\n300 0 0 bad\n",
        encoding="utf-8",
    )
    p = load_palette_file(path)
    assert p is not None
    assert p.name == "Warm"
    assert p.colors == ((255, 0, 0), (255, 128, 0))


def test_toml_file(tmp_path):
    path = tmp_path / "mixed.toml"
    path.write_text(
        'name = "Mixed"\ncolors = ["#102030", [1, 2, 3], "bad", [999, 0, 0]]\n',
        encoding="utf-8",
    )
    p = load_palette_file(path)
    assert p is not None
    assert p.name == "Mixed"
    assert p.colors == ((16, 32, 48), (1, 2, 3))


def test_malformed_toml_is_skipped(tmp_path, capsys):
    path = tmp_path / "broken.toml"
    path.write_text("name = \n", encoding="utf-8")
    assert load_palette_file(path) is None
    assert "broken.toml" in capsys.readouterr().out


@pytest.mark.parametrize(
    "body",
    [
        'colors = [["a", "b", "c"]]\n',
        "colors = 5\n",
        'colors = "#ffffff"\n',
        "colors = [[1.5, 2, 3], [true, 0, 0], {r = 1}]\n",
    ],
)
def test_wrong_shape_toml_yields_none(tmp_path, body):
    path = tmp_path / "odd.toml"
    path.write_text(body, encoding="utf-8")
    assert load_palette_file(path) is None


def test_toml_keeps_good_entries_next_to_bad_ones(tmp_path):
    path = tmp_path / "partly.toml"
    path.write_text('colors = [["x", 1, 2], [4, 5, 6]]\n', encoding="utf-8")
    p = load_palette_file(path)
    assert p is not None
    assert p.colors == ((4, 5, 6),)


def test_library_survives_wrong_shape_toml(tmp_path):
    (tmp_path / "bad.toml").write_text('colors = [["a", "b", "c"]]\n', encoding="utf-8")
    (tmp_path / "num.toml").write_text("colors = 5\n", encoding="utf-8")
    (tmp_path / "good.hex").write_text("010203\n", encoding="utf-8")
    names = [p.name for p in load_palette_library(tmp_path)]
    assert "good" in names
    assert "bad" not in names
    assert "num" not in names


def test_hex_file_uses_stem_as_name(tmp_path):
    path = tmp_path / "pico.hex"
    path.write_text("000000\n#1D2B53\n0x7e2553\n; comment\n\n", encoding="utf-8")
    p = load_palette_file(path)
    assert p is not None
    assert p.name == "pico"
    assert p.colors == ((0, 0, 0), (29, 43, 83), (126, 37, 83))


def test_unknown_or_empty_files(tmp_path):
    other = tmp_path / "notes.md"
    other.write_text("#000000\n", encoding="utf-8")
    assert load_palette_file(other) is None
    empty = tmp_path / "empty.hex"
    empty.write_text("\n", encoding="utf-8")
    assert load_palette_file(empty) is None


def test_library_deduplicates_names(tmp_path):
    (tmp_path / "a.hex").write_text("112233\n", encoding="utf-8")
    (tmp_path / "b.gpl").write_text("GIMP Palette\nName: a\n1 1 1\n", encoding="utf-8")
    (tmp_path / "c.gpl").write_text(
        "GIMP Palette\nName: Black & White\n5 5 5\n", encoding="utf-8"
    )
    library = load_palette_library(tmp_path)
    names = [p.name for p in library]
    assert names.count("a") == 1
    assert names.count("Black & White") == 1
    by_name = {p.name: p for p in library}
    assert by_name["a"].colors == ((17, 34, 51),)
    assert by_name["Black & White"].colors == ((0, 0, 0), (255, 255, 255))


def test_resolve_palette(tmp_path):
    (tmp_path / "mine.hex").write_text("abcdef\n", encoding="utf-8")
    assert resolve_palette("mine", tmp_path).colors == ((171, 205, 239),)
    assert resolve_palette("Cozy 8").name == "Cozy 8"
    assert resolve_palette("missing", tmp_path).name == DEFAULT_PALETTE
    assert resolve_palette("mine", tmp_path / "absent").name == DEFAULT_PALETTE
