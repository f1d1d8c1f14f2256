# palette_dither/matcher.py
from __future__ import annotations

"""
Nearest and two-nearest palette lookup.

Linear scan with a strict "<" comparison, so the first palette entry with the
minimal distance wins ties and palette order stays observable.

Exports:
  PaletteMatcher(colors, metric)
  nearest(color, palette, metric)
  two_nearest(color, palette, metric)
"""

import math
from typing import Dict, List, Sequence, Tuple

from .colour_convert import distance_fn, rgb_to_lab
from .core_types import LabTuple, Metric, RGBTuple

TwoNearest = Tuple[RGBTuple, float, RGBTuple, float]


class PaletteMatcher:
    """
    Palette lookup bound to one metric.

    Palette Lab rows are computed once. Results are memoised per source RGB,
    so a matcher should live no longer than one render call.
    """

    def __init__(self, colors: Sequence[RGBTuple], metric: Metric = "ciede2000"):
        self.colors: List[RGBTuple] = [
            (int(c[0]), int(c[1]), int(c[2])) for c in colors
        ]
        self.metric = metric
        self._dist = distance_fn(metric)
        self._labs: List[LabTuple] = [rgb_to_lab(*c) for c in self.colors]
        self._best: Dict[RGBTuple, Tuple[RGBTuple, float]] = {}
        self._two: Dict[RGBTuple, TwoNearest] = {}

    def __len__(self) -> int:
        return len(self.colors)

    def nearest_with_distance(self, rgb: RGBTuple) -> Tuple[RGBTuple, float]:
        """Nearest palette colour and its distance. Empty palette echoes rgb."""
        hit = self._best.get(rgb)
        if hit is not None:
            return hit
        if not self.colors:
            return (rgb, 0.0)

        lab = rgb_to_lab(*rgb)
        best = self.colors[0]
        best_d = math.inf
        for colour, pal_lab in zip(self.colors, self._labs):
            d = self._dist(lab, pal_lab)
            if d < best_d:
                best_d = d
                best = colour
        self._best[rgb] = (best, best_d)
        return best, best_d

    def nearest(self, rgb: RGBTuple) -> RGBTuple:
        return self.nearest_with_distance(rgb)[0]

    def two_nearest_with_distances(self, rgb: RGBTuple) -> TwoNearest:
        """
        (best, d1, second, d2) in a single pass.

        A candidate beating the best demotes the old best to second. With a
        single-entry palette second == best and d2 is inf.
        """
        hit = self._two.get(rgb)
        if hit is not None:
            return hit
        if not self.colors:
            return (rgb, 0.0, rgb, 0.0)

        lab = rgb_to_lab(*rgb)
        best1 = best2 = self.colors[0]
        d1 = d2 = math.inf
        for colour, pal_lab in zip(self.colors, self._labs):
            d = self._dist(lab, pal_lab)
            if d < d1:
                d2, best2 = d1, best1
                d1, best1 = d, colour
            elif d < d2:
                d2, best2 = d, colour
        out = (best1, d1, best2, d2)
        self._two[rgb] = out
        return out

    def two_nearest(self, rgb: RGBTuple) -> Tuple[RGBTuple, RGBTuple]:
        c1, _d1, c2, _d2 = self.two_nearest_with_distances(rgb)
        return c1, c2


def nearest(
    color: RGBTuple, palette: Sequence[RGBTuple], metric: Metric = "ciede2000"
) -> RGBTuple:
    """One-shot nearest lookup; build a PaletteMatcher for repeated use."""
    return PaletteMatcher(palette, metric).nearest(tuple(color))  # type: ignore[arg-type]


def two_nearest(
    color: RGBTuple, palette: Sequence[RGBTuple], metric: Metric = "lab"
) -> Tuple[RGBTuple, RGBTuple]:
    """One-shot (best, second_best) lookup."""
    return PaletteMatcher(palette, metric).two_nearest(tuple(color))  # type: ignore[arg-type]


__all__ = ["PaletteMatcher", "TwoNearest", "nearest", "two_nearest"]
