"""Fetching image fragments over HTTP."""

from __future__ import annotations

import re
import urllib.error
import urllib.request
from dataclasses import dataclass
from email.message import Message

from .errors import ErrorCode, PngCoreError

FRAGMENT_HEADER = "X-Ece252-Fragment: "
USER_AGENT = "libpngcore/1.0"

_ATOI = re.compile(r"\s*([+-]?\d+)")


@dataclass
class HttpResponse:
    """Body and raw header block of an HTTP response.

    ``seq`` is the fragment sequence number taken from the headers, or -1
    when the response carried none.
    """

    data: bytes = b""
    header: bytes = b""
    seq: int = -1

    @property
    def size(self) -> int:
        return len(self.data)


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def parse_fragment_header(line: str | bytes) -> int | None:
    """Return the sequence number of a fragment header line, else ``None``."""
    if isinstance(line, (bytes, bytearray)):
        line = bytes(line).decode("latin-1")
    if len(line) > len(FRAGMENT_HEADER) and line.startswith(FRAGMENT_HEADER):
        return _atoi(line[len(FRAGMENT_HEADER):])
    return None


def _build_response(
    status: int, reason: str, version: int | None, headers: Message | None, body: bytes
) -> HttpResponse:
    version = version or 11
    lines = [f"HTTP/{version // 10}.{version % 10} {status} {reason}\r\n"]
    if headers is not None:
        lines.extend(f"{name}: {value}\r\n" for name, value in headers.items())
    lines.append("\r\n")
    seq = -1
    for line in lines:
        found = parse_fragment_header(line)
        if found is not None:
            seq = found
    header = "".join(lines).encode("latin-1", errors="replace")
    return HttpResponse(data=bytes(body), header=header, seq=seq)


def http_get(url: str | None) -> HttpResponse:
    """Fetch *url* and return its body, headers and fragment number.

    HTTP error statuses still yield a response; only a failed transfer
    raises :class:`PngCoreError` with ``ErrorCode.NETWORK``.
    """
    if url is None:
        raise PngCoreError(ErrorCode.NETWORK, "URL is null")
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(request) as resp:
            body = resp.read()
            return _build_response(resp.status, resp.reason, resp.version, resp.headers, body)
    except urllib.error.HTTPError as exc:
        with exc:
            body = exc.read()
        return _build_response(exc.code, str(exc.reason), None, exc.headers, body)
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise PngCoreError(ErrorCode.NETWORK, f"request to {url} failed: {exc}") from exc


def fetch_url(url: str | None) -> HttpResponse:
    """Fetch *url*; see :func:`http_get`."""
    return http_get(url)