"""Pixel sources: decoded images exposing ``width``, ``height`` and ``pixel_at``."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Protocol, Tuple

import numpy as np
from PIL import Image


logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]


class BackendUnavailableError(RuntimeError):
    """Raised when no decode backend can handle a requested image."""


class PixelSource(Protocol):
    width: int
    height: int

    def pixel_at(self, x: int, y: int) -> RGBA:
        ...


class PillowPixelSource:
    """Wraps a Pillow image, converted to RGBA once up front."""

    def __init__(self, image: Image.Image) -> None:
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self._image = image
        self._pixels = image.load()
        self.width, self.height = image.size

    @classmethod
    def open(cls, path: Path) -> "PillowPixelSource":
        with Image.open(path) as img:
            img.load()
            logger.debug("source.pillow open path=%s mode=%s size=%s", path, img.mode, img.size)
            return cls(img.convert("RGBA"))

    def pixel_at(self, x: int, y: int) -> RGBA:
        return self._pixels[x, y]


class ArrayPixelSource:
    """Wraps a ``(height, width, 3|4)`` uint8 array; RGB arrays are fully opaque."""

    def __init__(self, array: np.ndarray) -> None:
        data = np.asarray(array)
        if data.ndim != 3 or data.shape[2] not in (3, 4):
            raise ValueError(f"Expected an HxWx3 or HxWx4 array, got shape {data.shape}")
        if data.dtype != np.uint8:
            if data.size and (data.min() < 0 or data.max() > 255):
                raise ValueError("Array values must be within 0-255")
            data = data.astype(np.uint8)
        if data.shape[2] == 3:
            alpha = np.full(data.shape[:2] + (1,), 255, dtype=np.uint8)
            data = np.concatenate([data, alpha], axis=2)
        self._data = data
        self.height, self.width = data.shape[:2]

    @classmethod
    def open(cls, path: Path) -> "ArrayPixelSource":
        data = np.load(path, allow_pickle=False)
        logger.debug("source.array open path=%s shape=%s dtype=%s", path, data.shape, data.dtype)
        return cls(data)

    def pixel_at(self, x: int, y: int) -> RGBA:
        r, g, b, a = self._data[y, x]
        return int(r), int(g), int(b), int(a)


BACKENDS: Dict[str, Callable[[Path], PixelSource]] = {
    "pillow": PillowPixelSource.open,
    "numpy": ArrayPixelSource.open,
}


def select_backend(path: Path, preferred: str | None = None) -> str:
    """Pick the backend name used to decode ``path``.

    ``preferred`` forces a backend; otherwise ``.npy`` files go to numpy and
    everything else to Pillow.
    """

    if preferred is not None:
        name = preferred.strip().lower()
        if name not in BACKENDS:
            raise BackendUnavailableError(
                f"Unknown backend {preferred!r}; available: {', '.join(sorted(BACKENDS))}"
            )
        return name
    return "numpy" if path.suffix.lower() == ".npy" else "pillow"


def open_pixel_source(path: Path, backend: str | None = None) -> PixelSource:
    name = select_backend(path, backend)
    logger.debug("source.open path=%s backend=%s", path, name)
    return BACKENDS[name](path)
