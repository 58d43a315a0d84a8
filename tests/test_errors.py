import pytest

from pngcore.errors import ErrorCode, PngCoreError, error_string


@pytest.mark.parametrize(
    "code, text",
    [
        (ErrorCode.SUCCESS, "Success"),
        (ErrorCode.ERR, "General error"),
        (ErrorCode.NOT_PNG, "Not a PNG file"),
        (ErrorCode.CRC_MISMATCH, "CRC mismatch"),
        (ErrorCode.NOT_IMPLEMENTED, "Not implemented"),
        (ErrorCode.WRONG_CHUNK, "Wrong chunk type"),
        (ErrorCode.MEMORY, "Memory allocation failed"),
        (ErrorCode.IO, "I/O error"),
        (ErrorCode.NETWORK, "Network error"),
    ],
)
def test_error_string_known_codes(code, text):
    assert error_string(code) == text


def test_error_string_accepts_plain_int():
    assert error_string(2) == "Not a PNG file"


@pytest.mark.parametrize("code", [-1, 9, 100])
def test_error_string_unknown(code):
    assert error_string(code) == "Unknown error"


def test_exception_default_message_from_code():
    exc = PngCoreError(ErrorCode.IO)
    assert exc.code is ErrorCode.IO
    assert exc.message == "I/O error"
    assert str(exc) == "I/O error"


def test_exception_custom_message():
    exc = PngCoreError(ErrorCode.ERR, "Buffer is NULL")
    assert exc.message == "Buffer is NULL"
    assert str(exc) == "Buffer is NULL"


def test_exception_int_code_becomes_enum():
    exc = PngCoreError(5, "bad")
    assert exc.code is ErrorCode.WRONG_CHUNK


def test_exception_int_code_default_message():
    exc = PngCoreError(2)
    assert exc.code == ErrorCode.NOT_PNG
    assert exc.message == "Not a PNG file"
    assert str(exc) == "Not a PNG file"