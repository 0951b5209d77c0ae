"""Grid sampling of a pixel source and classification of each sample."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from .aggregator import HitCounts
from .matcher import closest
from .sources import PixelSource


logger = logging.getLogger(__name__)

TRANSPARENT_ALPHA = 0


@dataclass(slots=True, frozen=True)
class Sample:
    rgba: int
    r: int
    g: int
    b: int

    @property
    def alpha(self) -> int:
        return (self.rgba >> 24) & 0xFF


def _check_precision(precision: int) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 1:
        raise ValueError(f"precision must be a positive integer, got {precision!r}")
    return precision


def grid_size(width: int, height: int, precision: int) -> int:
    """Number of coordinates visited for a ``width`` x ``height`` image."""

    step = _check_precision(precision)
    return (-(-width // step)) * (-(-height // step))


def iter_grid(width: int, height: int, precision: int) -> Iterator[Tuple[int, int]]:
    """Yield sampled ``(x, y)`` pairs, x outer and y inner, both ascending."""

    step = _check_precision(precision)
    for x in range(0, width, step):
        for y in range(0, height, step):
            yield x, y


def is_transparent(sample: Sample) -> bool:
    # only the fully transparent alpha is skipped, partial alpha is classified
    return sample.alpha == TRANSPARENT_ALPHA


def sample_pixels(source: PixelSource, precision: int) -> Iterator[Sample]:
    for x, y in iter_grid(source.width, source.height, precision):
        r, g, b, a = source.pixel_at(x, y)
        yield Sample(rgba=(a << 24) | (r << 16) | (g << 8) | b, r=r, g=g, b=b)


def count_hits(
    source: PixelSource,
    precision: int,
    whitelist: Sequence[int],
    hit_counts: HitCounts,
) -> int:
    """Classify every opaque sample of ``source`` into ``hit_counts``.

    Returns the number of samples that were counted.
    """

    counted = 0
    skipped = 0
    for sample in sample_pixels(source, precision):
        if is_transparent(sample):
            skipped += 1
            continue
        hit_counts[closest(sample.r, sample.g, sample.b, whitelist)] += 1
        counted += 1
    logger.debug(
        "palette.sample size=%sx%s precision=%s counted=%s transparent=%s",
        source.width,
        source.height,
        precision,
        counted,
        skipped,
    )
    return counted
