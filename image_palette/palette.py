"""Dominant-color palette of an image, ranked against a whitelist."""
from __future__ import annotations

import json
import logging
import math
import operator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Sequence, Tuple

from .aggregator import HitCounts, new_hit_counts, rank
from .color_codec import ColorTuple, to_hex_string, to_rgb_string, unpack
from .sampler import count_hits, grid_size
from .sources import PixelSource, open_pixel_source
from .whitelist import DEFAULT_WHITELIST, ensure_whitelist


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PaletteOptions:
    precision: int = 10  # sample every Nth pixel along each axis
    palette_length: int = 5
    whitelist: Sequence[int] = DEFAULT_WHITELIST

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 1:
            raise ValueError(f"precision must be a positive integer, got {self.precision!r}")
        if (
            isinstance(self.palette_length, bool)
            or not isinstance(self.palette_length, int)
            or self.palette_length < 0
        ):
            raise ValueError(f"palette_length must be a non-negative integer, got {self.palette_length!r}")
        self.whitelist = ensure_whitelist(self.whitelist)


def _coerce_length(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        # accepts numpy integers as well as int
        value = operator.index(value)
    except TypeError:
        pass
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = int(value)
    if not isinstance(value, int) or value < 0:
        return None
    return value


class ImagePalette:
    """Ranks the whitelist colors of ``source`` by how often they were sampled.

    The sampling pass runs once in the constructor; every accessor afterwards is a
    pure read of the ranked palette. Accessors take an optional length; anything
    that is not a non-negative count falls back to ``palette_length``.
    """

    def __init__(self, source: PixelSource, options: PaletteOptions | None = None) -> None:
        self.options = options or PaletteOptions()
        self.width = source.width
        self.height = source.height
        whitelist = tuple(self.options.whitelist)
        counts = new_hit_counts(whitelist)
        self.sampled = count_hits(source, self.options.precision, whitelist, counts)
        self._hit_counts: HitCounts = counts
        self._ranked: Tuple[int, ...] = tuple(rank(counts, whitelist))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "palette.rank grid=%s counted=%s top=%s",
                grid_size(self.width, self.height, self.options.precision),
                self.sampled,
                [to_hex_string(c) for c in self._ranked[: self.options.palette_length]],
            )

    @classmethod
    def from_path(
        cls,
        path: Path | str,
        options: PaletteOptions | None = None,
        *,
        backend: str | None = None,
    ) -> "ImagePalette":
        return cls(open_pixel_source(Path(path), backend), options)

    @property
    def whitelist(self) -> Tuple[int, ...]:
        return tuple(self.options.whitelist)

    @property
    def hit_counts(self) -> Dict[int, int]:
        return dict(self._hit_counts)

    @property
    def ranked(self) -> Tuple[int, ...]:
        return self._ranked

    def top_colors(self, length: Any = None) -> List[int]:
        count = _coerce_length(length)
        if count is None:
            count = self.options.palette_length
        return list(self._ranked[:count])

    int_colors = top_colors

    def rgb_colors(self, length: Any = None) -> List[ColorTuple]:
        return [unpack(color) for color in self.top_colors(length)]

    def hex_string_colors(self, length: Any = None) -> List[str]:
        return [to_hex_string(color) for color in self.top_colors(length)]

    def rgb_string_colors(self, length: Any = None) -> List[str]:
        return [to_rgb_string(rgb) for rgb in self.rgb_colors(length)]

    def colors(self, length: Any = None) -> List[str]:
        """Alias of :meth:`hex_string_colors`."""

        return self.hex_string_colors(length)

    def to_json(self, length: Any = None) -> str:
        return json.dumps(self.hex_string_colors(length))

    def __iter__(self) -> Iterator[str]:
        return iter(self.colors())

    def __len__(self) -> int:
        return len(self.top_colors())

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return (
            f"ImagePalette(size={self.width}x{self.height}, "
            f"precision={self.options.precision}, colors={self.colors()})"
        )
