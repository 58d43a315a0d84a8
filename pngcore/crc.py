"""CRC-32 as used by PNG chunks."""

from __future__ import annotations

from functools import lru_cache

_POLY = 0xEDB88320
_MASK = 0xFFFFFFFF


@lru_cache(maxsize=None)
def make_crc_table() -> tuple[int, ...]:
    """Return the table of CRCs of all 8-bit messages."""
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = _POLY ^ (c >> 1) if c & 1 else c >> 1
        table.append(c)
    return tuple(table)


def update_crc(crc: int, buf: bytes) -> int:
    """Update a running CRC with the bytes of *buf*.

    The CRC should start as all ones; the final value is its complement.
    """
    table = make_crc_table()
    c = crc & _MASK
    for byte in bytes(buf):
        c = table[(c ^ byte) & 0xFF] ^ (c >> 8)
    return c


def crc(buf: bytes) -> int:
    """Return the CRC of the bytes in *buf*."""
    return update_crc(_MASK, buf) ^ _MASK