"""Nearest-color lookup against an ordered palette."""
from __future__ import annotations

from typing import Sequence

from .color_codec import unpack
from .whitelist import PaletteError


def distance_sq(r: int, g: int, b: int, color: int) -> int:
    wr, wg, wb = unpack(color)
    return (r - wr) ** 2 + (g - wg) ** 2 + (b - wb) ** 2


def closest(r: int, g: int, b: int, palette: Sequence[int]) -> int:
    """Return the entry of ``palette`` nearest to ``(r, g, b)``.

    Distance is squared Euclidean in RGB. On ties the earliest palette entry wins.
    """

    if not palette:
        raise PaletteError("Cannot match against an empty palette")
    best = palette[0]
    best_diff = distance_sq(r, g, b, best)
    for color in palette[1:]:
        diff = distance_sq(r, g, b, color)
        if diff < best_diff:
            best = color
            best_diff = diff
    return best
