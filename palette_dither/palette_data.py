# palette_dither/palette_data.py
from __future__ import annotations

"""
Palette definitions, builders and on-disk palette files.

Exports:
  BUILTIN_PALETTES: list[tuple[str, list[str]]]   # [(name, [hex, ...]), ...]
  DEFAULT_PALETTE: str
  build_palette(name, hexes) -> Palette
  built_in_palettes() -> list[Palette]
  get_palette_by_name(name) -> Palette
  load_palette_file(path) -> Palette | None      # .gpl, .toml, .hex, .txt
  load_palette_library(palette_dir) -> list[Palette]
  resolve_palette(name, palette_dir=None) -> Palette
"""

import tomllib
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .core_types import Palette, RGBTuple, hex_to_rgb
from .utils import warn

DEFAULT_PALETTE = "Flying Tiger"

PALETTE_SUFFIXES = {".gpl", ".toml", ".hex", ".txt"}

BUILTIN_PALETTES: List[Tuple[str, List[str]]] = [
    (
        "Flying Tiger",
        [
            "#000000", "#ffffff", "#ff0000", "#00ff00", "#0000ff",
            "#ffff00", "#ffa500", "#800080", "#ff69b4", "#00ffff",
        ],
    ),
    ("Black & White", ["#000000", "#ffffff"]),
    (
        "Cozy 8",
        [
            "#2e294e", "#541388", "#f1e9da", "#ffd400",
            "#d90368", "#0081a7", "#00afb9", "#fed9b7",
        ],
    ),
    (
        "Retro Gaming",
        [
            "#0f0f23", "#262b44", "#3e4a5c", "#5a6988",
            "#738699", "#8ea3b0", "#a4c0c7", "#c0dddd",
        ],
    ),
    (
        "Sunset Vibes",
        [
            "#2d1b69", "#11296b", "#0f4c75", "#3282b8",
            "#bbe1fa", "#ff6b6b", "#ffa726", "#ffcc02",
        ],
    ),
    (
        "Forest Dreams",
        [
            "#1a3a2e", "#16423c", "#0f3460", "#533a71",
            "#6a994e", "#a7c957", "#f2e8cf", "#bc4749",
        ],
    ),
]


def build_palette(name: str, hexes: Sequence[str]) -> Palette:
    """Build a Palette from hex strings; entries that do not parse are skipped."""
    colors: List[RGBTuple] = []
    for hx in hexes:
        try:
            colors.append(hex_to_rgb(hx))
        except ValueError:
            continue
    return Palette(name=name, colors=tuple(colors))


def built_in_palettes() -> List[Palette]:
    return [build_palette(name, hexes) for name, hexes in BUILTIN_PALETTES]


def get_palette_by_name(name: str) -> Palette:
    """Built-in palette by name; unknown names give the first built-in."""
    palettes = built_in_palettes()
    for p in palettes:
        if p.name == name:
            return p
    return palettes[0]


# Palette files


def _parse_gpl(text: str) -> Tuple[Optional[str], List[RGBTuple]]:
    """GIMP palette: 'Name:' header plus 'R G B [label]' rows."""
    name: Optional[str] = None
    colors: List[RGBTuple] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or line == "GIMP Palette":
            continue
        if line.startswith("Name:"):
            name = line[len("Name:") :].strip() or None
            continue
        if line.startswith("Columns:"):
            continue
        parts = line.split()
        if len(parts) < 3 or not all(p.isdigit() for p in parts[:3]):
            continue
        r, g, b = (int(parts[0]), int(parts[1]), int(parts[2]))
        if max(r, g, b) > 255:
            continue
        colors.append((r, g, b))
    return name, colors


def _parse_hex_text(text: str) -> List[RGBTuple]:
    """One colour per line: 'rrggbb', '#rrggbb' or '0xrrggbb'. Comments fail to parse and are skipped."""
    colors: List[RGBTuple] = []
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("0x"):
            line = line[2:]
        if not line:
            continue
        try:
            colors.append(hex_to_rgb(line[:7] if line.startswith("#") else line[:6]))
        except ValueError:
            continue
    return colors


def _parse_toml(text: str) -> Tuple[Optional[str], List[RGBTuple]]:
    """TOML: name = "..." and colors = ["#rrggbb", ...] (or [[r, g, b], ...])."""
    data = tomllib.loads(text)
    name = data.get("name")
    entries = data.get("colors", [])
    colors: List[RGBTuple] = []
    if not isinstance(entries, list):
        return (str(name) if name else None), colors
    for entry in entries:
        if isinstance(entry, str):
            try:
                colors.append(hex_to_rgb(entry))
            except ValueError:
                continue
        elif isinstance(entry, list) and len(entry) >= 3:
            if not all(isinstance(v, int) and not isinstance(v, bool) for v in entry[:3]):
                continue
            r, g, b = entry[0], entry[1], entry[2]
            if all(0 <= v <= 255 for v in (r, g, b)):
                colors.append((r, g, b))
    return (str(name) if name else None), colors


def load_palette_file(path: Path) -> Optional[Palette]:
    """
    Load one palette file. Returns None for unknown suffixes, unreadable or
    malformed files, and files with no usable colours.
    """
    suffix = path.suffix.lower()
    if suffix not in PALETTE_SUFFIXES:
        return None
    try:
        text = path.read_text(encoding="utf-8", errors="ignore")
        if suffix == ".gpl":
            name, colors = _parse_gpl(text)
        elif suffix == ".toml":
            name, colors = _parse_toml(text)
        else:
            name, colors = None, _parse_hex_text(text)
    except (OSError, tomllib.TOMLDecodeError) as e:
        warn(f"skipping palette file {path.name}: {e}")
        return None
    if not colors:
        return None
    return Palette(name=name or path.stem, colors=tuple(colors))


def load_palette_library(palette_dir: Optional[Path]) -> List[Palette]:
    """
    Built-ins followed by palette files found in palette_dir (sorted by file
    name). Names are de-duplicated; the first palette with a name wins.
    """
    palettes = built_in_palettes()
    if palette_dir is None or not palette_dir.is_dir():
        return palettes

    seen: Dict[str, Palette] = {p.name: p for p in palettes}
    for entry in sorted(palette_dir.iterdir(), key=lambda p: p.name.lower()):
        if not entry.is_file():
            continue
        palette = load_palette_file(entry)
        if palette is None or palette.name in seen:
            continue
        seen[palette.name] = palette
        palettes.append(palette)
    return palettes


def resolve_palette(name: str, palette_dir: Optional[Path] = None) -> Palette:
    """Palette by name from the library; falls back to the default built-in."""
    for p in load_palette_library(palette_dir):
        if p.name == name:
            return p
    return get_palette_by_name(DEFAULT_PALETTE)


__all__ = [
    "DEFAULT_PALETTE",
    "BUILTIN_PALETTES",
    "build_palette",
    "built_in_palettes",
    "get_palette_by_name",
    "load_palette_file",
    "load_palette_library",
    "resolve_palette",
]
