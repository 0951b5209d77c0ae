"""Reference palettes that sampled pixels are classified against."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .color_codec import ColorError, hex_to_rgb, pack


Whitelist = Tuple[int, ...]

DEFAULT_WHITELIST: Whitelist = (
    0x660000, 0x990000, 0xCC0000, 0xCC3333, 0xEA4C88, 0x993399,
    0x663399, 0x333399, 0x0066CC, 0x0099CC, 0x66CCCC, 0x77CC33,
    0x669900, 0x336600, 0x666600, 0x999900, 0xCCCC33, 0xFFFF00,
    0xFFCC33, 0xFF9900, 0xFF6600, 0xCC6633, 0x996633, 0x663300,
    0x000000, 0x999999, 0xCCCCCC, 0xFFFFFF, 0xE7D8B1, 0xFDADC7,
    0x424153, 0xABBCDA, 0xF5DD01,
)


class PaletteError(RuntimeError):
    """Raised when a palette is empty or malformed."""


def ensure_whitelist(colors: Iterable[int]) -> Whitelist:
    """Return ``colors`` as an immutable whitelist, validating every entry.

    Duplicates are rejected because hit counts are keyed by color and a repeated
    entry could never be matched (the earlier one always wins ties).
    """

    whitelist = tuple(colors)
    if not whitelist:
        raise PaletteError("Whitelist must contain at least one color")
    seen = set()
    for color in whitelist:
        if isinstance(color, bool) or not isinstance(color, int):
            raise PaletteError(f"Whitelist entries must be packed integers, got {color!r}")
        if color < 0 or color > 0xFFFFFF:
            raise PaletteError(f"Whitelist entry out of range: {color:#x}")
        if color in seen:
            raise PaletteError(f"Duplicate whitelist entry: #{color:06x}")
        seen.add(color)
    return whitelist


def parse_hex_whitelist(values: Sequence[str]) -> Whitelist:
    colors: List[int] = []
    for value in values:
        if not value.strip():
            continue
        try:
            colors.append(pack(*hex_to_rgb(value)))
        except ColorError as exc:
            raise PaletteError(str(exc)) from exc
    return ensure_whitelist(colors)


def read_act_whitelist(path: Path) -> Whitelist:
    """Load an Adobe ACT palette file (<=256 colors) as a whitelist.

    The 772-byte variant stores the used color count in bytes 768-769; when
    present only that many entries are kept.
    """

    data = path.read_bytes()
    count = 256
    if len(data) == 772:
        count = int.from_bytes(data[768:770], "big") or 256
        data = data[:768]
    if len(data) % 3 != 0:
        raise PaletteError("ACT palette length must be divisible by 3")
    colors: List[int] = []
    for i in range(0, min(len(data), count * 3), 3):
        color = pack(data[i], data[i + 1], data[i + 2])
        if color not in colors:
            colors.append(color)
    return ensure_whitelist(colors)
