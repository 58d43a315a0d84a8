"""Fetching image fragments with producers and consumers and assembling them."""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from .buffer import BufferEntry, CircularBuffer
from .core import ColorType, Png, create
from .errors import ErrorCode, PngCoreError
from .network import HttpResponse, http_get
from .png import deflate_idat, inflate_idat
from .raw import load_raw_png

URL_ENDPOINT = "http://ece252-1.uwaterloo.ca:2530/image"
TOTAL_IMAGES = 50
STRIP_WIDTH = 400
STRIP_HEIGHT = 6
INF_SIZE = STRIP_HEIGHT * (STRIP_WIDTH * 4 + 1)
BUF_SIZE = 1048576
MAX_FETCH_ATTEMPTS = 3


def fragment_url(image_num: int, part: int) -> str:
    """URL of fragment *part* of image *image_num*."""
    return f"{URL_ENDPOINT}?img={image_num}&part={part}"


@dataclass
class ConcurrentConfig:
    """Settings for a :class:`ConcurrentProcessor`."""

    buffer_size: int
    num_producers: int
    num_consumers: int
    consumer_delay: int
    image_num: int


class ConcurrentProcessor:
    """Fetches all fragments of an image through a bounded buffer.

    Producer threads fetch fragments and put them into the buffer; consumer
    threads take them out, inflate their image data and place it at the
    fragment's position in the assembled image.
    """

    def __init__(
        self,
        config: ConcurrentConfig,
        fetch: Callable[[str], HttpResponse] | None = None,
    ) -> None:
        if config.buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        self.config = config
        self._fetch = fetch if fetch is not None else http_get
        self._idat_buf = bytearray(BUF_SIZE)
        self._start_time = 0.0
        self._end_time = 0.0
        self._reset()

    def _reset(self) -> None:
        self._buffer = CircularBuffer(self.config.buffer_size)
        self._mutex = threading.Lock()
        self._empty = threading.Semaphore(self.config.buffer_size)
        self._filled = threading.Semaphore(0)
        self._stop = threading.Event()
        self._error: PngCoreError | None = None
        self._produced = 0
        self._consumed = 0
        self._next_entry = 0

    @property
    def inflated(self) -> bytes:
        """The assembled, decompressed image data of all fragments."""
        return bytes(self._idat_buf[: INF_SIZE * TOTAL_IMAGES])

    def _abort(self, error: PngCoreError) -> None:
        with self._mutex:
            if self._error is None:
                self._error = error
        self._stop.set()
        for _ in range(self.config.num_consumers):
            self._filled.release()
        for _ in range(self.config.num_producers):
            self._empty.release()

    def _fetch_entry(self, producer_id: int, entry_num: int) -> BufferEntry | None:
        url = fragment_url(self.config.image_num, entry_num)
        for _ in range(MAX_FETCH_ATTEMPTS):
            if self._stop.is_set():
                return None
            try:
                response = self._fetch(url)
            except PngCoreError as exc:
                self._abort(exc)
                return None
            if response.seq == entry_num:
                try:
                    return BufferEntry(response.data, entry_num)
                except ValueError as exc:
                    self._abort(PngCoreError(ErrorCode.ERR, str(exc)))
                    return None
            print(
                f"Producer {producer_id}: Failed to get entry {entry_num}",
                file=sys.stderr,
            )
        self._abort(
            PngCoreError(ErrorCode.NETWORK, f"Failed to get entry {entry_num}")
        )
        return None

    def _producer(self, producer_id: int) -> None:
        while not self._stop.is_set():
            with self._mutex:
                if self._produced >= TOTAL_IMAGES:
                    return
                entry_num = self._next_entry
                self._next_entry += 1
                self._produced += 1
            self._empty.acquire()
            if self._stop.is_set():
                return
            entry = self._fetch_entry(producer_id, entry_num)
            if entry is None:
                return
            self._buffer.add(entry)
            self._filled.release()

    def _store(self, consumer_id: int, entry: BufferEntry) -> None:
        try:
            raw = load_raw_png(entry.data, 0)
        except PngCoreError:
            print(
                f"Consumer {consumer_id}: Failed to parse PNG for entry "
                f"{entry.sequence_num}",
                file=sys.stderr,
            )
            return
        offset = entry.sequence_num * INF_SIZE
        if offset + INF_SIZE >= BUF_SIZE:
            return
        try:
            data = inflate_idat(raw)
        except PngCoreError as exc:
            print(
                f"mem_inf failed for img {entry.sequence_num}. {exc.message}",
                file=sys.stderr,
            )
            return
        data = data[: BUF_SIZE - offset]
        self._idat_buf[offset : offset + len(data)] = data

    def _consumer(self, consumer_id: int) -> None:
        delay = self.config.consumer_delay / 1000.0
        while True:
            with self._mutex:
                done = self._consumed >= TOTAL_IMAGES
            if done or self._stop.is_set():
                self._filled.release()
                return
            self._filled.acquire()
            entry = self._buffer.get()
            if entry is None:
                continue
            self._empty.release()
            if delay > 0:
                time.sleep(delay)
            self._store(consumer_id, entry)
            with self._mutex:
                self._consumed += 1

    def run(self) -> None:
        """Fetch and assemble every fragment; raise if fetching failed."""
        self._reset()
        self._start_time = time.perf_counter()
        threads = [
            threading.Thread(target=self._producer, args=(i,), daemon=True)
            for i in range(self.config.num_producers)
        ] + [
            threading.Thread(target=self._consumer, args=(i,), daemon=True)
            for i in range(self.config.num_consumers)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self._end_time = time.perf_counter()
        if self._error is not None:
            raise self._error

    def get_result(self) -> Png:
        """Return the assembled image as a PNG."""
        result = create(STRIP_WIDTH, STRIP_HEIGHT * TOTAL_IMAGES, 8, ColorType.RGBA)
        deflate_idat(self.inflated, result.internal)
        return result

    def elapsed(self) -> float:
        """Seconds taken by the last :meth:`run`."""
        return self._end_time - self._start_time