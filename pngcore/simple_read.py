"""Command that loads a PNG, prints its properties and saves a copy."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .core import ColorType, load_file
from .errors import PngCoreError

COPY_FILE = "copy.png"

_COLOR_NAMES = {
    ColorType.GRAYSCALE: "Grayscale",
    ColorType.RGB: "RGB",
    ColorType.INDEXED: "Indexed color",
    ColorType.GRAYSCALE_ALPHA: "Grayscale with alpha",
    ColorType.RGBA: "RGBA",
}

_CHANNELS = {
    ColorType.RGB: 3,
    ColorType.RGBA: 4,
    ColorType.GRAYSCALE_ALPHA: 2,
}


def describe_color_type(color_type: int) -> str:
    """Human-readable name of a PNG colour type."""
    try:
        return _COLOR_NAMES[ColorType(color_type)]
    except ValueError:
        return f"Unknown ({color_type})"


def _channels(color_type: int) -> int:
    try:
        return _CHANNELS.get(ColorType(color_type), 1)
    except ValueError:
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        prog = sys.argv[0] if sys.argv and sys.argv[0] else "simple_read"
        print(f"Usage: {prog} <png_file>")
        return 1
    filename = args[0]

    print(f"Loading PNG file: {filename}")
    try:
        png = load_file(filename)
    except PngCoreError as exc:
        print(
            f"Error loading PNG: {exc.message} (code: {int(exc.code)})",
            file=sys.stderr,
        )
        return 1

    width, height = png.width, png.height
    bit_depth, color_type = png.bit_depth, png.color_type

    print("\nPNG Properties:")
    print(f"  Width: {width} pixels")
    print(f"  Height: {height} pixels")
    print(f"  Bit depth: {bit_depth}")
    print(f"  Color type: {describe_color_type(color_type)}")

    print(f"\nPNG validation: {'PASSED' if png.validate() else 'FAILED'}")

    print("\nExtracting pixel data...")
    try:
        pixels = png.get_raw_data()
    except PngCoreError:
        print("Failed to extract pixel data", file=sys.stderr)
    else:
        print(f"Successfully extracted {len(pixels)} bytes of pixel data")
        row_bytes = width * _channels(color_type) * (bit_depth // 8)
        expected_size = height * (row_bytes + 1)
        matches = "yes" if len(pixels) == expected_size else "no"
        print(f"Expected size: {expected_size} bytes (matches: {matches})")
        print("\nFirst 16 bytes of pixel data:")
        print("".join(f"{byte:02X} " for byte in pixels[:16]))

    print("\nChecking chunks:")
    for name in ("IHDR", "IDAT"):
        chunk = png.get_chunk(name)
        if chunk is not None:
            print(f"  {name}: {chunk.length} bytes, CRC: 0x{chunk.crc:08X}")

    print(f"\nSaving copy as '{COPY_FILE}'...")
    try:
        png.save(COPY_FILE)
    except PngCoreError as exc:
        print(f"Error saving copy: {exc.message}", file=sys.stderr)
    else:
        print("Successfully saved copy")

    print("\nDone!")
    return 0


if __name__ == "__main__":
    sys.exit(main())