import zlib

import pytest

from pngcore.crc import crc, make_crc_table, update_crc


def test_table_has_256_entries():
    table = make_crc_table()
    assert len(table) == 256
    assert table[0] == 0


def test_table_known_entry():
    assert make_crc_table()[1] == 0x77073096


def test_iend_crc_is_png_constant():
    assert crc(b"IEND") == 0xAE426082


def test_standard_check_value():
    assert crc(b"123456789") == 0xCBF43926


def test_empty_buffer():
    assert crc(b"") == 0


@pytest.mark.parametrize(
    "data",
    [b"a", b"IHDR" + bytes(13), bytes(range(256)), b"hello world" * 50],
)
def test_matches_standard_crc32(data):
    assert crc(data) == zlib.crc32(data)


def test_update_crc_is_incremental():
    first, second = b"IDAT", bytes(range(100))
    running = update_crc(0xFFFFFFFF, first)
    running = update_crc(running, second)
    assert running ^ 0xFFFFFFFF == crc(first + second)


def test_accepts_bytearray_and_memoryview():
    data = b"chunk data"
    assert crc(bytearray(data)) == crc(data)
    assert crc(memoryview(data)) == crc(data)


def test_result_fits_in_32_bits():
    assert 0 <= crc(bytes(range(256)) * 4) <= 0xFFFFFFFF