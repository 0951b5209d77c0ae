import math

import numpy as np
import pytest

from image_palette.aggregator import new_hit_counts
from image_palette.sampler import Sample, count_hits, grid_size, is_transparent, iter_grid
from image_palette.sources import ArrayPixelSource
from image_palette.whitelist import DEFAULT_WHITELIST


@pytest.mark.parametrize(
    "width,height,precision",
    [(10, 10, 3), (7, 5, 2), (1, 1, 1), (5, 5, 10), (100, 37, 10), (4, 9, 1)],
)
def test_grid_size_matches_ceil_formula(width, height, precision):
    expected = math.ceil(width / precision) * math.ceil(height / precision)
    assert grid_size(width, height, precision) == expected
    assert len(list(iter_grid(width, height, precision))) == expected


def test_grid_is_column_major():
    assert list(iter_grid(2, 3, 1)) == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
    assert list(iter_grid(5, 5, 3)) == [(0, 0), (0, 3), (3, 0), (3, 3)]


@pytest.mark.parametrize("precision", [0, -1, 1.5, True])
def test_invalid_precision_is_rejected(precision):
    with pytest.raises(ValueError):
        list(iter_grid(4, 4, precision))


def test_each_coordinate_read_once(recording_source):
    source = recording_source(3, 2)
    counts = new_hit_counts(DEFAULT_WHITELIST)
    counted = count_hits(source, 1, DEFAULT_WHITELIST, counts)
    assert counted == 6
    assert source.calls == [(0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1)]
    assert counts[0x000000] == 6


def test_transparency_only_skips_zero_alpha():
    assert is_transparent(Sample(rgba=0x00FFFFFF, r=255, g=255, b=255))
    assert not is_transparent(Sample(rgba=0x01FFFFFF, r=255, g=255, b=255))
    assert not is_transparent(Sample(rgba=0xFF000000, r=0, g=0, b=0))


def test_partially_transparent_pixels_are_counted(recording_source):
    source = recording_source(2, 2, rgba=(204, 0, 0, 1))
    counts = new_hit_counts(DEFAULT_WHITELIST)
    assert count_hits(source, 1, DEFAULT_WHITELIST, counts) == 4
    assert counts[0xCC0000] == 4


def test_fully_transparent_pixels_are_skipped(recording_source):
    source = recording_source(2, 2, rgba=(204, 0, 0, 0))
    counts = new_hit_counts(DEFAULT_WHITELIST)
    assert count_hits(source, 1, DEFAULT_WHITELIST, counts) == 0
    assert len(source.calls) == 4
    assert sum(counts.values()) == 0


@pytest.mark.parametrize("precision", [1, 2, 3, 7])
def test_hit_total_equals_opaque_samples(precision):
    rng = np.random.default_rng(1234)
    data = rng.integers(0, 256, size=(23, 17, 4), dtype=np.uint8)
    data[..., 3][rng.random((23, 17)) < 0.3] = 0
    counts = new_hit_counts(DEFAULT_WHITELIST)
    counted = count_hits(ArrayPixelSource(data), precision, DEFAULT_WHITELIST, counts)
    expected = int(np.count_nonzero(data[::precision, ::precision, 3]))
    assert counted == expected
    assert sum(counts.values()) == expected
    assert set(counts) == set(DEFAULT_WHITELIST)
