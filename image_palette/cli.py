"""Command-line interface for extracting dominant-color palettes."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, Dict, List

from PIL import Image, UnidentifiedImageError

from .color_codec import ColorError
from .debug_log import setup_debug_logging
from .file_scanner import expand_inputs
from .palette import ImagePalette, PaletteOptions
from .sources import BACKENDS, BackendUnavailableError
from .whitelist import DEFAULT_WHITELIST, PaletteError, parse_hex_whitelist, read_act_whitelist


_FORMATTERS: Dict[str, Callable[[ImagePalette, int], str]] = {
    "hex": lambda palette, n: " ".join(palette.hex_string_colors(n)),
    "rgb": lambda palette, n: " ".join(",".join(map(str, rgb)) for rgb in palette.rgb_colors(n)),
    "int": lambda palette, n: " ".join(str(color) for color in palette.int_colors(n)),
    "rgb-string": lambda palette, n: " ".join(palette.rgb_string_colors(n)),
    "json": lambda palette, n: palette.to_json(n),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract dominant colors from images")
    parser.add_argument("inputs", nargs="+", type=Path, help="Input files or folders")
    parser.add_argument(
        "--precision",
        type=int,
        default=10,
        help="Sample every Nth pixel along each axis (1 scans every pixel)",
    )
    parser.add_argument(
        "--length", type=int, default=5, help="Number of colors to print per image"
    )
    parser.add_argument(
        "--format",
        choices=tuple(_FORMATTERS),
        default="hex",
        help="Output representation of each color",
    )
    parser.add_argument(
        "--recursive", action="store_true", help="Descend into subfolders"
    )
    parser.add_argument(
        "--backend",
        choices=tuple(sorted(BACKENDS)),
        default=None,
        help="Force a decode backend (default: by file extension)",
    )
    whitelist_group = parser.add_mutually_exclusive_group()
    whitelist_group.add_argument(
        "--palette-act",
        type=Path,
        default=None,
        help="ACT palette file to use as the color whitelist",
    )
    whitelist_group.add_argument(
        "--colors",
        default=None,
        help="Comma-separated hex colors to use as the whitelist",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log debug output to stderr"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_debug_logging(verbose=args.verbose)

    whitelist = DEFAULT_WHITELIST
    if args.palette_act:
        try:
            whitelist = read_act_whitelist(args.palette_act)
        except (OSError, PaletteError, ColorError) as exc:
            parser.error(f"Failed to read palette: {exc}")
    elif args.colors:
        try:
            whitelist = parse_hex_whitelist(args.colors.split(","))
        except PaletteError as exc:
            parser.error(f"Invalid --colors value: {exc}")

    try:
        options = PaletteOptions(
            precision=args.precision,
            palette_length=args.length,
            whitelist=whitelist,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        input_files = expand_inputs(args.inputs, args.recursive)
    except FileNotFoundError as exc:
        parser.error(f"Input path not found: {exc}")

    if not input_files:
        parser.error("No image files found")

    formatter = _FORMATTERS[args.format]
    failures: List[Path] = []
    for file_path in input_files:
        try:
            palette = ImagePalette.from_path(file_path, options, backend=args.backend)
        except (
            OSError,
            EOFError,
            UnidentifiedImageError,
            Image.DecompressionBombError,
            ValueError,
            BackendUnavailableError,
        ) as exc:
            failures.append(file_path)
            print(f"[FAIL] {file_path}: {exc}")
            continue
        print(f"{file_path.name}: {formatter(palette, options.palette_length)}")

    if failures:
        print(f"{len(failures)} of {len(input_files)} file(s) failed.")
    return 0 if not failures else 1


if __name__ == "__main__":
    raise SystemExit(main())
