"""High-level PNG API: loading, saving, creating and inspecting images."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from os import PathLike

from .crc import crc
from .errors import ErrorCode, PngCoreError
from .png import SimplePng, deflate_idat, new_simple_png, parse_raw, write_png_file
from .raw import RawChunk, is_png_buf, load_raw_png
from .zutil import Z_DEFAULT_COMPRESSION, mem_deflate, mem_inflate

MAX_CHUNK_SIZE = 10000
DEFAULT_BUFFER_SIZE = 1048576

_VALID_BIT_DEPTHS = frozenset({1, 2, 4, 8, 16})


class ColorType(IntEnum):
    """PNG colour types."""

    GRAYSCALE = 0
    RGB = 2
    INDEXED = 3
    GRAYSCALE_ALPHA = 4
    RGBA = 6


_VALID_COLOR_TYPES = frozenset(int(member) for member in ColorType)


@dataclass(frozen=True)
class Chunk:
    """A chunk of a PNG as it would be written: type, data and CRC."""

    type: bytes
    data: bytes
    crc: int

    @property
    def length(self) -> int:
        return len(self.data)

    @classmethod
    def _from_raw(cls, raw: RawChunk) -> Chunk:
        return cls(raw.type, raw.data, raw.crc)


def _chunk_type(chunk_type: str | bytes) -> bytes:
    if isinstance(chunk_type, str):
        return chunk_type.encode("latin-1")
    return bytes(chunk_type)


@dataclass
class Png:
    """A PNG image made of one IHDR, one IDAT and one IEND chunk."""

    internal: SimplePng

    @property
    def width(self) -> int:
        return self.internal.ihdr.width if self.internal.ihdr else 0

    @property
    def height(self) -> int:
        return self.internal.ihdr.height if self.internal.ihdr else 0

    @property
    def bit_depth(self) -> int:
        return self.internal.ihdr.bit_depth if self.internal.ihdr else 0

    @property
    def color_type(self) -> int:
        return self.internal.ihdr.color_type if self.internal.ihdr else 0

    @property
    def crc_error(self) -> PngCoreError | None:
        """The CRC mismatch met while loading, if any."""
        return self.internal.crc_error

    def get_raw_data(self) -> bytes:
        """Return the decompressed image data, filter bytes included."""
        if self.internal.idat is None:
            raise PngCoreError(ErrorCode.ERR, "PNG has no image data")
        return mem_inflate(self.internal.idat.data)

    def set_raw_data(self, data: bytes) -> None:
        """Compress *data* and store it as the image data."""
        if not data:
            raise PngCoreError(ErrorCode.ERR, "Invalid data or size")
        deflate_idat(bytes(data), self.internal)

    def validate(self) -> bool:
        """True if all chunks are present and the header values are legal."""
        png = self.internal
        if png.ihdr is None or png.idat is None or png.iend is None:
            return False
        ihdr = png.ihdr
        if ihdr.width == 0 or ihdr.height == 0:
            return False
        return ihdr.bit_depth in _VALID_BIT_DEPTHS and ihdr.color_type in _VALID_COLOR_TYPES

    def get_chunk(self, chunk_type: str | bytes) -> Chunk | None:
        """Return the IHDR, IDAT or IEND chunk; ``None`` for any other type."""
        part = {
            b"IHDR": self.internal.ihdr,
            b"IDAT": self.internal.idat,
            b"IEND": self.internal.iend,
        }.get(_chunk_type(chunk_type))
        if part is None:
            return None
        return Chunk._from_raw(part.to_raw())

    def save(self, filename: str | PathLike[str]) -> None:
        """Write the image to *filename*."""
        save_file(self, filename)


def load_buffer(buffer: bytes | None) -> Png:
    """Parse a PNG held in memory.

    A CRC mismatch does not raise; the returned image is then incomplete
    and its ``crc_error`` describes the mismatch.
    """
    if not buffer:
        raise PngCoreError(ErrorCode.ERR, "Invalid buffer or size")
    raw = load_raw_png(bytes(buffer), 0)
    return Png(parse_raw(raw))


def load_file(filename: str | PathLike[str] | None) -> Png:
    """Read and parse a PNG file."""
    if filename is None:
        raise PngCoreError(ErrorCode.IO, "Filename is NULL")
    try:
        with open(filename, "rb") as fp:
            buffer = fp.read()
    except OSError as exc:
        raise PngCoreError(ErrorCode.IO, f"Failed to open file: {filename}") from exc
    return load_buffer(buffer)


def save_file(png: Png | None, filename: str | PathLike[str] | None) -> None:
    """Write *png* to *filename*."""
    if png is None or filename is None:
        raise PngCoreError(ErrorCode.ERR, "Invalid PNG or filename")
    write_png_file(filename, png.internal)


def create(width: int, height: int, bit_depth: int, color_type: int) -> Png:
    """Create an image with the given header and no image data."""
    simple = new_simple_png()
    ihdr = simple.ihdr
    ihdr.width = width
    ihdr.height = height
    ihdr.bit_depth = bit_depth
    ihdr.color_type = color_type
    ihdr.compression = 0
    ihdr.filter = 0
    ihdr.interlace = 0
    return Png(simple)


def is_png_buffer(buf: bytes) -> bool:
    """True if *buf* starts with the PNG signature."""
    return is_png_buf(buf, 0)


def inflate(src: bytes) -> bytes:
    """Decompress a zlib stream."""
    return mem_inflate(src)


def deflate(src: bytes, level: int = Z_DEFAULT_COMPRESSION) -> bytes:
    """Compress *src* into a zlib stream at *level*."""
    return mem_deflate(src, level)


def crc32(buf: bytes) -> int:
    """Return the PNG CRC-32 of *buf*."""
    return crc(buf)