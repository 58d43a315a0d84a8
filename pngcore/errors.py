"""Error codes and the exception raised throughout the package."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes reported by PNG operations."""

    SUCCESS = 0
    ERR = 1
    NOT_PNG = 2
    CRC_MISMATCH = 3
    NOT_IMPLEMENTED = 4
    WRONG_CHUNK = 5
    MEMORY = 6
    IO = 7
    NETWORK = 8


_ERROR_STRINGS = {
    ErrorCode.SUCCESS: "Success",
    ErrorCode.ERR: "General error",
    ErrorCode.NOT_PNG: "Not a PNG file",
    ErrorCode.CRC_MISMATCH: "CRC mismatch",
    ErrorCode.NOT_IMPLEMENTED: "Not implemented",
    ErrorCode.WRONG_CHUNK: "Wrong chunk type",
    ErrorCode.MEMORY: "Memory allocation failed",
    ErrorCode.IO: "I/O error",
    ErrorCode.NETWORK: "Network error",
}


def error_string(code: int) -> str:
    """Return the human-readable description of an error code."""
    try:
        return _ERROR_STRINGS[ErrorCode(code)]
    except ValueError:
        return "Unknown error"


class PngCoreError(Exception):
    """Raised when a PNG operation fails; carries an :class:`ErrorCode`."""

    def __init__(self, code: ErrorCode | int, message: str | None = None) -> None:
        try:
            self.code: ErrorCode | int = ErrorCode(code)
        except ValueError:
            self.code = code
        self.message = message if message is not None else error_string(code)
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"