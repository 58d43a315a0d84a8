"""Unparsed PNG chunks: reading them from a buffer and writing them back."""

from __future__ import annotations

from dataclasses import dataclass, field

from .crc import crc
from .errors import ErrorCode, PngCoreError

PNG_SIG = b"\x89PNG\r\n\x1a\n"
PNG_SIG_SIZE = 8
CHUNK_LEN_SIZE = 4
CHUNK_TYPE_SIZE = 4
CHUNK_CRC_SIZE = 4
DATA_IHDR_SIZE = 13


@dataclass
class RawChunk:
    """A chunk as stored in the file: type, data and the stored CRC."""

    type: bytes
    data: bytes = b""
    crc: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            self.type = self.type.encode("latin-1")
        self.type = bytes(self.type)
        if len(self.type) != CHUNK_TYPE_SIZE:
            raise ValueError("chunk type must be exactly 4 bytes")
        self.data = bytes(self.data)

    @property
    def length(self) -> int:
        return len(self.data)

    def compute_crc(self) -> int:
        """CRC over the chunk type and data."""
        return crc(self.type + self.data)

    def to_bytes(self) -> bytes:
        """Serialise as length, type, data and CRC, big-endian."""
        return (
            self.length.to_bytes(CHUNK_LEN_SIZE, "big")
            + self.type
            + self.data
            + (self.crc & 0xFFFFFFFF).to_bytes(CHUNK_CRC_SIZE, "big")
        )


@dataclass
class RawPng:
    """The first three chunks of a PNG: IHDR, IDAT and IEND."""

    chunks: list[RawChunk] = field(default_factory=list)

    @property
    def ihdr(self) -> RawChunk:
        return self.chunks[0]

    @property
    def idat(self) -> RawChunk:
        return self.chunks[1]

    @property
    def iend(self) -> RawChunk:
        return self.chunks[2]

    def to_bytes(self) -> bytes:
        """Serialise with the PNG signature followed by every chunk."""
        return PNG_SIG + b"".join(chunk.to_bytes() for chunk in self.chunks)


def is_png(buf: bytes) -> bool:
    """True if *buf* starts with the PNG signature."""
    return len(buf) >= PNG_SIG_SIZE and bytes(buf[:PNG_SIG_SIZE]) == PNG_SIG


def is_png_buf(buf: bytes, offset: int = 0) -> bool:
    """True if the PNG signature appears at *offset* in *buf*."""
    if buf is None or offset + PNG_SIG_SIZE > len(buf):
        return False
    return is_png(buf[offset : offset + PNG_SIG_SIZE])


def load_raw_chunk(buf: bytes, offset: int = 0) -> RawChunk:
    """Read one chunk starting at *offset*."""
    if buf is None:
        raise PngCoreError(ErrorCode.ERR, "Buffer is NULL")
    view = bytes(buf)
    if offset + CHUNK_LEN_SIZE + CHUNK_TYPE_SIZE > len(view):
        raise PngCoreError(ErrorCode.ERR, "Buffer too small for chunk header")
    length = int.from_bytes(view[offset : offset + CHUNK_LEN_SIZE], "big")
    pos = offset + CHUNK_LEN_SIZE
    chunk_type = view[pos : pos + CHUNK_TYPE_SIZE]
    pos += CHUNK_TYPE_SIZE
    if pos + length + CHUNK_CRC_SIZE > len(view):
        raise PngCoreError(ErrorCode.ERR, "Buffer too small for chunk data and CRC")
    data = view[pos : pos + length]
    pos += length
    stored_crc = int.from_bytes(view[pos : pos + CHUNK_CRC_SIZE], "big")
    return RawChunk(chunk_type, data, stored_crc)


def load_raw_png(buf: bytes, offset: int = 0) -> RawPng:
    """Read the signature and the first three chunks starting at *offset*."""
    if buf is None:
        raise PngCoreError(ErrorCode.ERR, "Buffer is NULL")
    view = bytes(buf)
    if offset + PNG_SIG_SIZE > len(view):
        raise PngCoreError(ErrorCode.ERR, "Buffer too small for PNG signature")
    if not is_png(view[offset : offset + PNG_SIG_SIZE]):
        raise PngCoreError(ErrorCode.NOT_PNG, "Not a PNG file")
    pos = offset + PNG_SIG_SIZE
    chunks = []
    for _ in range(3):
        chunk = load_raw_chunk(view, pos)
        chunks.append(chunk)
        pos += CHUNK_LEN_SIZE + CHUNK_TYPE_SIZE + chunk.length + CHUNK_CRC_SIZE
    return RawPng(chunks)