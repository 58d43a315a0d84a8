"""Parsed PNG structures and conversion to and from raw chunks."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike

from .crc import crc
from .errors import ErrorCode, PngCoreError
from .raw import DATA_IHDR_SIZE, RawChunk, RawPng
from .zutil import Z_DEFAULT_COMPRESSION, mem_deflate, mem_inflate

_U32 = 0xFFFFFFFF
_U8 = 0xFF


@dataclass
class Ihdr:
    """Image header: dimensions and sample format."""

    width: int = 0
    height: int = 0
    bit_depth: int = 0
    color_type: int = 0
    compression: int = 0
    filter: int = 0
    interlace: int = 0
    crc: int = 0
    crc_ok: bool = True

    def to_raw(self) -> RawChunk:
        """Encode as an IHDR chunk with a freshly computed CRC."""
        data = (
            (self.width & _U32).to_bytes(4, "big")
            + (self.height & _U32).to_bytes(4, "big")
            + bytes(
                value & _U8
                for value in (
                    self.bit_depth,
                    self.color_type,
                    self.compression,
                    self.filter,
                    self.interlace,
                )
            )
        )
        chunk = RawChunk(b"IHDR", data)
        chunk.crc = chunk.compute_crc()
        return chunk


@dataclass
class Idat:
    """A single IDAT chunk holding the compressed image data."""

    data: bytes = b""
    crc: int = 0
    crc_ok: bool = True

    @property
    def length(self) -> int:
        return len(self.data)

    def to_raw(self) -> RawChunk:
        """Encode as an IDAT chunk with a freshly computed CRC."""
        chunk = RawChunk(b"IDAT", self.data)
        chunk.crc = chunk.compute_crc()
        return chunk


@dataclass
class Iend:
    """The image trailer."""

    crc: int = 0

    def to_raw(self) -> RawChunk:
        """Encode as an empty IEND chunk with its CRC."""
        return RawChunk(b"IEND", b"", crc(b"IEND"))


@dataclass
class SimplePng:
    """A PNG made of one IHDR, one IDAT and one IEND chunk.

    A part is ``None`` when parsing stopped early because of a CRC
    mismatch; ``crc_error`` then describes the mismatch.
    """

    ihdr: Ihdr | None = None
    idat: Idat | None = None
    iend: Iend | None = None
    crc_error: PngCoreError | None = field(default=None, compare=False)

    def to_raw(self) -> RawPng:
        """Convert every part into its raw chunk."""
        if self.ihdr is None or self.idat is None or self.iend is None:
            raise PngCoreError(ErrorCode.ERR, "PNG is incomplete")
        return RawPng([self.ihdr.to_raw(), self.idat.to_raw(), self.iend.to_raw()])

    def to_bytes(self) -> bytes:
        """Serialise the whole file, signature included."""
        return self.to_raw().to_bytes()


def new_simple_png() -> SimplePng:
    """Return an empty PNG with zeroed header and no image data."""
    return SimplePng(Ihdr(), Idat(), Iend())


def _check_type(raw_chunk: RawChunk | None, expected: bytes) -> RawChunk:
    name = expected.decode("ascii")
    if raw_chunk is None:
        raise PngCoreError(ErrorCode.WRONG_CHUNK, f"{name} chunk is NULL")
    if raw_chunk.type != expected:
        got = raw_chunk.type.decode("latin-1")
        raise PngCoreError(
            ErrorCode.WRONG_CHUNK, f"Expected {name} chunk, got {got}"
        )
    return raw_chunk


def _crc_error(name: str, raw_chunk: RawChunk) -> PngCoreError:
    return PngCoreError(
        ErrorCode.CRC_MISMATCH,
        f"{name} chunk CRC error: computed {raw_chunk.compute_crc():X}, "
        f"expected {raw_chunk.crc:X}",
    )


def parse_ihdr(raw_chunk: RawChunk | None) -> Ihdr:
    """Decode an IHDR chunk; ``crc_ok`` tells whether its CRC matched."""
    chunk = _check_type(raw_chunk, b"IHDR")
    data = chunk.data
    if len(data) < DATA_IHDR_SIZE:
        raise PngCoreError(ErrorCode.ERR, "IHDR chunk data too short")
    return Ihdr(
        width=int.from_bytes(data[0:4], "big"),
        height=int.from_bytes(data[4:8], "big"),
        bit_depth=data[8],
        color_type=data[9],
        compression=data[10],
        filter=data[11],
        interlace=data[12],
        crc=chunk.crc,
        crc_ok=chunk.compute_crc() == chunk.crc,
    )


def parse_idat(raw_chunk: RawChunk | None) -> Idat:
    """Decode an IDAT chunk; ``crc_ok`` tells whether its CRC matched."""
    chunk = _check_type(raw_chunk, b"IDAT")
    return Idat(
        data=bytes(chunk.data),
        crc=chunk.crc,
        crc_ok=chunk.compute_crc() == chunk.crc,
    )


def parse_iend(raw_chunk: RawChunk | None) -> Iend:
    """Decode an IEND chunk."""
    chunk = _check_type(raw_chunk, b"IEND")
    return Iend(crc=chunk.crc)


def parse_raw(raw_png: RawPng) -> SimplePng:
    """Parse the three raw chunks into a :class:`SimplePng`.

    A wrong chunk type raises. A CRC mismatch is not fatal: parsing stops
    and the partly filled PNG is returned with ``crc_error`` set.
    """
    png = SimplePng()
    png.ihdr = parse_ihdr(raw_png.chunks[0])
    if not png.ihdr.crc_ok:
        png.crc_error = _crc_error("IHDR", raw_png.chunks[0])
        return png
    png.idat = parse_idat(raw_png.chunks[1])
    if not png.idat.crc_ok:
        png.crc_error = _crc_error("IDAT", raw_png.chunks[1])
        return png
    png.iend = parse_iend(raw_png.chunks[2])
    return png


def write_png_file(filename: str | PathLike[str], png: SimplePng | None) -> None:
    """Write *png* as a complete PNG file."""
    if png is None:
        raise PngCoreError(ErrorCode.ERR, "PNG is NULL")
    payload = png.to_bytes()
    try:
        with open(filename, "wb") as fp:
            fp.write(payload)
    except OSError as exc:
        raise PngCoreError(ErrorCode.ERR, f"Failed to open file {filename}") from exc


def write_file(path: str | PathLike[str] | None, data: bytes | None) -> None:
    """Write *data* to *path* unchanged."""
    if path is None:
        raise PngCoreError(ErrorCode.IO, "file name is null")
    if data is None:
        raise PngCoreError(ErrorCode.IO, "input data is null")
    try:
        with open(path, "wb") as fp:
            fp.write(bytes(data))
    except OSError as exc:
        raise PngCoreError(ErrorCode.IO, f"Failed to write file {path}") from exc


def inflate_idat(raw_png: RawPng) -> bytes:
    """Decompress the IDAT data of *raw_png*."""
    return mem_inflate(raw_png.chunks[1].data)


def deflate_idat(src: bytes, png: SimplePng) -> int:
    """Compress *src* into the IDAT of *png*; return the compressed length."""
    compressed = mem_deflate(bytes(src), Z_DEFAULT_COMPRESSION)
    if png.idat is None:
        png.idat = Idat()
    png.idat.data = compressed
    return len(compressed)