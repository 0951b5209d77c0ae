"""Hit counting and ranking of whitelist colors."""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence


HitCounts = Dict[int, int]


def new_hit_counts(whitelist: Sequence[int]) -> HitCounts:
    return {color: 0 for color in whitelist}


def merge_hit_counts(whitelist: Sequence[int], parts: Iterable[HitCounts]) -> HitCounts:
    """Sum independently collected counts into a fresh mapping.

    Every part must only contain whitelist colors.
    """

    merged = new_hit_counts(whitelist)
    for part in parts:
        for color, hits in part.items():
            if color not in merged:
                raise KeyError(f"Color #{color:06x} is not in the whitelist")
            merged[color] += hits
    return merged


def rank(hit_counts: HitCounts, whitelist: Sequence[int]) -> List[int]:
    """Order ``whitelist`` by descending hits, keeping whitelist order on ties."""

    # sorted() is stable, so equal counts (zero included) keep their position
    return sorted(whitelist, key=lambda color: -hit_counts[color])
