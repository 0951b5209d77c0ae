"""Input expansion for batch palette extraction."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

_IMAGE_EXTENSIONS = {
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".bmp",
    ".webp",
    ".tif",
    ".tiff",
    ".npy",
}


def expand_inputs(inputs: Iterable[Path], recursive: bool) -> List[Path]:
    """Resolve files and folders into a flat list of image files.

    Files are taken as given; folders contribute their image files in sorted order.
    """

    files: List[Path] = []
    for path in inputs:
        path = path.expanduser()
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            candidates = path.rglob("*") if recursive else path.glob("*")
            files.extend(
                candidate
                for candidate in sorted(candidates)
                if candidate.is_file() and candidate.suffix.lower() in _IMAGE_EXTENSIONS
            )
        else:
            raise FileNotFoundError(path)
    return files
