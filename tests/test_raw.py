import zlib

import pytest

from pngcore.errors import ErrorCode, PngCoreError
from pngcore.raw import (
    PNG_SIG,
    RawChunk,
    RawPng,
    is_png,
    is_png_buf,
    load_raw_chunk,
    load_raw_png,
)


def _chunk(kind, data):
    chunk = RawChunk(kind, data)
    chunk.crc = chunk.compute_crc()
    return chunk


def _sample_png():
    ihdr = _chunk(b"IHDR", (4).to_bytes(4, "big") + (2).to_bytes(4, "big") + bytes([8, 6, 0, 0, 0]))
    idat = _chunk(b"IDAT", zlib.compress(bytes(2 * (4 * 4 + 1))))
    iend = _chunk(b"IEND", b"")
    return RawPng([ihdr, idat, iend])


def test_serialised_png_starts_with_signature():
    data = _sample_png().to_bytes()
    assert data[:8] == bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


def test_iend_wire_bytes():
    assert _chunk(b"IEND", b"").to_bytes() == bytes.fromhex("0000000049454e44ae426082")


def test_chunk_crc_matches_zlib():
    chunk = RawChunk(b"IDAT", b"payload")
    assert chunk.compute_crc() == zlib.crc32(b"IDATpayload")


def test_chunk_type_from_str():
    assert RawChunk("IHDR").type == b"IHDR"


def test_chunk_type_wrong_length():
    with pytest.raises(ValueError):
        RawChunk(b"IDA")


def test_is_png():
    assert is_png(PNG_SIG + b"rest")
    assert not is_png(PNG_SIG[:7])
    assert not is_png(b"GIF89a\x00\x00")


def test_is_png_buf_with_offset():
    buf = b"xx" + PNG_SIG
    assert is_png_buf(buf, 2)
    assert not is_png_buf(buf, 0)
    assert not is_png_buf(buf, 3)
    assert not is_png_buf(None)


def test_round_trip():
    png = _sample_png()
    data = png.to_bytes()
    loaded = load_raw_png(data)
    assert loaded == png
    assert loaded.to_bytes() == data


def test_chunk_accessors():
    loaded = load_raw_png(_sample_png().to_bytes())
    assert loaded.ihdr.type == b"IHDR"
    assert loaded.idat.type == b"IDAT"
    assert loaded.iend.type == b"IEND"
    assert loaded.ihdr.length == 13
    assert loaded.iend.data == b""


def test_load_with_offset():
    png = _sample_png()
    assert load_raw_png(b"junk" + png.to_bytes(), 4) == png


def test_trailing_data_ignored():
    png = _sample_png()
    assert load_raw_png(png.to_bytes() + b"extra") == png


def test_load_raw_chunk_reads_stored_crc():
    chunk = RawChunk(b"tEXt", b"abc", 0x12345678)
    loaded = load_raw_chunk(chunk.to_bytes())
    assert loaded.crc == 0x12345678
    assert loaded.data == b"abc"


def test_signature_too_short():
    with pytest.raises(PngCoreError) as info:
        load_raw_png(PNG_SIG[:4])
    assert info.value.code == ErrorCode.ERR
    assert info.value.message == "Buffer too small for PNG signature"


def test_not_a_png():
    with pytest.raises(PngCoreError) as info:
        load_raw_png(b"\x00" * 64)
    assert info.value.code == ErrorCode.NOT_PNG


def test_missing_chunk_header():
    data = _sample_png().to_bytes()
    without_iend = data[:-12]
    with pytest.raises(PngCoreError) as info:
        load_raw_png(without_iend)
    assert info.value.message == "Buffer too small for chunk header"


def test_truncated_chunk_data():
    data = _sample_png().to_bytes()
    with pytest.raises(PngCoreError) as info:
        load_raw_png(data[: len(PNG_SIG) + 8 + 5])
    assert info.value.code == ErrorCode.ERR
    assert info.value.message == "Buffer too small for chunk data and CRC"


def test_load_raw_chunk_none():
    with pytest.raises(PngCoreError) as info:
        load_raw_chunk(None)
    assert info.value.message == "Buffer is NULL"