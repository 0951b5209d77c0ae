from __future__ import annotations

from typing import List, Tuple

import pytest
from PIL import Image

from image_palette.sources import PillowPixelSource


class RecordingSource:
    """Solid-color source that remembers every coordinate it was asked for."""

    def __init__(self, width: int, height: int, rgba=(0, 0, 0, 255)) -> None:
        self.width = width
        self.height = height
        self.rgba = rgba
        self.calls: List[Tuple[int, int]] = []

    def pixel_at(self, x: int, y: int):
        self.calls.append((x, y))
        return self.rgba


@pytest.fixture
def solid_source():
    def _make(color, size=(2, 2)):
        return PillowPixelSource(Image.new("RGBA", size, color))

    return _make


@pytest.fixture
def recording_source():
    return RecordingSource
