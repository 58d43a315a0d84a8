"""In-memory deflate and inflate of zlib streams."""

from __future__ import annotations

import zlib

from .errors import ErrorCode, PngCoreError

ZLIB_CHUNK = 16384

Z_OK = 0
Z_STREAM_END = 1
Z_NEED_DICT = 2
Z_STREAM_ERROR = -2
Z_DATA_ERROR = -3
Z_MEM_ERROR = -4
Z_VERSION_ERROR = -6
Z_DEFAULT_COMPRESSION = -1


def zerr_message(ret: int) -> str:
    """Describe a zlib return code."""
    messages = {
        Z_STREAM_ERROR: "invalid compression level",
        Z_DATA_ERROR: "invalid or incomplete deflate data",
        Z_MEM_ERROR: "out of memory",
        Z_VERSION_ERROR: "zlib version mismatch!",
    }
    return messages.get(ret, f"zlib returns err {ret}!")


def mem_deflate(source: bytes, level: int = Z_DEFAULT_COMPRESSION) -> bytes:
    """Compress *source* into a complete zlib stream at the given level."""
    try:
        compressor = zlib.compressobj(level)
    except (zlib.error, ValueError) as exc:
        raise PngCoreError(ErrorCode.ERR, zerr_message(Z_STREAM_ERROR)) from exc
    return compressor.compress(bytes(source)) + compressor.flush(zlib.Z_FINISH)


def mem_inflate(source: bytes) -> bytes:
    """Decompress one zlib stream from *source*.

    Data after the end of the stream is ignored; a stream that does not
    reach its end is an error.
    """
    decompressor = zlib.decompressobj()
    try:
        out = decompressor.decompress(bytes(source))
    except zlib.error as exc:
        raise PngCoreError(ErrorCode.ERR, zerr_message(Z_DATA_ERROR)) from exc
    if not decompressor.eof:
        raise PngCoreError(ErrorCode.ERR, zerr_message(Z_DATA_ERROR))
    return out