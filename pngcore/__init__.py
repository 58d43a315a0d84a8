"""Read, write, check and assemble simple three-chunk PNG images."""

__version__ = "1.0.0"

__all__ = [
    "buffer",
    "concurrent",
    "core",
    "crc",
    "errors",
    "network",
    "paster2",
    "png",
    "raw",
    "simple_read",
    "zutil",
]