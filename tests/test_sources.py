from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from image_palette.sources import (
    ArrayPixelSource,
    BackendUnavailableError,
    PillowPixelSource,
    open_pixel_source,
    select_backend,
)


def test_pillow_source_converts_rgb_to_opaque_rgba():
    source = PillowPixelSource(Image.new("RGB", (3, 2), (10, 20, 30)))
    assert (source.width, source.height) == (3, 2)
    assert source.pixel_at(2, 1) == (10, 20, 30, 255)


def test_pillow_source_keeps_alpha():
    source = PillowPixelSource(Image.new("RGBA", (1, 1), (1, 2, 3, 0)))
    assert source.pixel_at(0, 0) == (1, 2, 3, 0)


def test_array_source_indexes_by_x_then_y():
    data = np.zeros((2, 3, 3), dtype=np.uint8)
    data[1, 2] = (7, 8, 9)
    source = ArrayPixelSource(data)
    assert (source.width, source.height) == (3, 2)
    assert source.pixel_at(2, 1) == (7, 8, 9, 255)
    assert source.pixel_at(0, 0) == (0, 0, 0, 255)


@pytest.mark.parametrize("shape", [(4, 4), (4, 4, 2), (4, 4, 5)])
def test_array_source_rejects_bad_shapes(shape):
    with pytest.raises(ValueError):
        ArrayPixelSource(np.zeros(shape, dtype=np.uint8))


def test_array_source_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        ArrayPixelSource(np.full((1, 1, 3), 300, dtype=np.int32))


def test_select_backend():
    assert select_backend(Path("photo.PNG")) == "pillow"
    assert select_backend(Path("frame.npy")) == "numpy"
    assert select_backend(Path("frame.npy"), "Pillow") == "pillow"
    with pytest.raises(BackendUnavailableError):
        select_backend(Path("photo.png"), "gd")


def test_open_pixel_source_reads_png(tmp_path):
    path = tmp_path / "red.png"
    Image.new("RGB", (4, 3), (204, 0, 0)).save(path)
    source = open_pixel_source(path)
    assert isinstance(source, PillowPixelSource)
    assert (source.width, source.height) == (4, 3)
    assert source.pixel_at(3, 2) == (204, 0, 0, 255)


def test_open_pixel_source_reads_npy(tmp_path):
    path = tmp_path / "frame.npy"
    np.save(path, np.full((2, 2, 4), 9, dtype=np.uint8))
    source = open_pixel_source(path)
    assert isinstance(source, ArrayPixelSource)
    assert source.pixel_at(1, 1) == (9, 9, 9, 9)


def test_open_pixel_source_propagates_decode_errors(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(OSError):
        open_pixel_source(path)
