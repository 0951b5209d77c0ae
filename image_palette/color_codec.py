"""Conversions between packed 24-bit colors, RGB tuples and display strings."""
from __future__ import annotations

from typing import Tuple


ColorTuple = Tuple[int, int, int]


class ColorError(ValueError):
    """Raised when a channel or color value is outside its valid range."""


def _check_channel(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ColorError(f"{name} channel must be an integer, got {value!r}")
    if value < 0 or value > 255:
        raise ColorError(f"{name} channel out of range 0-255: {value}")
    return value


def pack(r: int, g: int, b: int) -> int:
    """Pack three 0-255 channels into a single ``0xRRGGBB`` integer."""

    return (
        _check_channel("red", r) << 16
        | _check_channel("green", g) << 8
        | _check_channel("blue", b)
    )


def unpack(color: int) -> ColorTuple:
    return ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


def to_hex_string(color: int) -> str:
    return f"#{color & 0xFFFFFF:06x}"


def to_rgb_string(rgb: ColorTuple) -> str:
    r, g, b = rgb
    return f"rgb({r},{g},{b})"


def hex_to_rgb(value: str) -> ColorTuple:
    value = value.strip()
    if value.startswith("#"):
        value = value[1:]
    if len(value) != 6:
        raise ColorError("Expected hex RGB in the form RRGGBB")
    try:
        r = int(value[0:2], 16)
        g = int(value[2:4], 16)
        b = int(value[4:6], 16)
    except ValueError as exc:
        raise ColorError(f"Invalid hex color {value!r}") from exc
    return (r, g, b)
