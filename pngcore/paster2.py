"""Command that fetches all fragments of an image concurrently into all.png."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence

from .concurrent import ConcurrentConfig, ConcurrentProcessor
from .errors import PngCoreError

OUTPUT_FILE = "all.png"

_USAGE_LINES = (
    "  b: buffer size (1-50)",
    "  p: number of producers (1-20)",
    "  c: number of consumers (1-20)",
    "  x: consumer delay in ms (0-1000)",
    "  n: image number (1-3)",
)

_LIMITS = (
    ("buffer_size", 1, 50, "buffer size must be between 1 and 50"),
    ("num_producers", 1, 20, "number of producers must be between 1 and 20"),
    ("num_consumers", 1, 20, "number of consumers must be between 1 and 20"),
    ("consumer_delay", 0, 1000, "consumer delay must be between 0 and 1000 ms"),
    ("image_num", 1, 3, "image number must be between 1 and 3"),
)

_ATOI = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _usage(prog: str) -> str:
    return "\n".join([f"Usage: {prog} <b> <p> <c> <x> <n>", *_USAGE_LINES])


def parse_args(argv: Sequence[str]) -> ConcurrentConfig:
    """Turn the five command arguments into a validated configuration.

    Raises :class:`ValueError` with a description of the first bad value.
    """
    if len(argv) != len(_LIMITS):
        raise ValueError(f"expected {len(_LIMITS)} arguments, got {len(argv)}")
    values = {}
    for text, (name, low, high, message) in zip(argv, _LIMITS):
        value = _atoi(text)
        if not low <= value <= high:
            raise ValueError(message)
        values[name] = value
    return ConcurrentConfig(**values)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    prog = sys.argv[0] if sys.argv and sys.argv[0] else "paster2"
    if len(args) != len(_LIMITS):
        print(_usage(prog))
        return 1
    try:
        config = parse_args(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("Configuration:")
    print(f"  Buffer size: {config.buffer_size}")
    print(f"  Producers: {config.num_producers}")
    print(f"  Consumers: {config.num_consumers}")
    print(f"  Consumer delay: {config.consumer_delay} ms")
    print(f"  Image number: {config.image_num}")
    print()

    print("Creating concurrent processor...")
    try:
        processor = ConcurrentProcessor(config)
    except ValueError:
        print("Error: Failed to create concurrent processor", file=sys.stderr)
        return 1

    print("Starting concurrent PNG fetching...")
    try:
        processor.run()
    except PngCoreError:
        print("Error: Failed to run concurrent processing", file=sys.stderr)
        return 1

    print("Assembling final PNG...")
    try:
        result = processor.get_result()
    except PngCoreError:
        print("Error: Failed to get assembled PNG", file=sys.stderr)
        return 1

    print(f"Saving result to {OUTPUT_FILE}...")
    try:
        result.save(OUTPUT_FILE)
    except PngCoreError as exc:
        print(f"Error saving PNG: {exc.message}", file=sys.stderr)
        return 1

    print(f"\npaster2 execution time: {processor.elapsed():.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())