# pngcore

A small PNG toolkit for simple PNG files made of one `IHDR`, one `IDAT` and
one `IEND` chunk. It reads and writes such files, checks chunk CRCs,
compresses and decompresses the image data, and can assemble a full image
from 50 strips fetched over HTTP by a pool of producer and consumer threads.

It uses only the standard library.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Commands

### Inspecting a PNG file

```
pngcore-simple-read image.png
```

Prints the width, height, bit depth and colour type of the image, whether it
passes validation, the size of the decompressed image data compared with the
size expected from the header, its first 16 bytes in hex, and the length and
CRC of the `IHDR` and `IDAT` chunks. A copy of the image is then written to
`copy.png` in the current directory. The exit status is 1 when the wrong
number of arguments is given or the file cannot be loaded.

### Assembling an image from strips

```
pngcore-paster2 <b> <p> <c> <x> <n>
```

| Argument | Meaning                          | Range  |
|----------|----------------------------------|--------|
| `b`      | circular buffer size             | 1–50   |
| `p`      | number of producer threads       | 1–20   |
| `c`      | number of consumer threads       | 1–20   |
| `x`      | consumer delay in milliseconds   | 0–1000 |
| `n`      | image number                     | 1–3    |

Producers download the 50 strips of the chosen image from a fixed image
server (each strip is a small PNG whose response carries an
`X-Ece252-Fragment` header with its sequence number) and place them in a
bounded buffer. Consumers take them out, decompress each strip's image data
into its place in the final 400×300 RGBA image, and the result is written to
`all.png`. The elapsed time is printed at the end. A strip whose fragment
number does not match is retried up to three times; after that, or on a
failed transfer, the run stops with exit status 1.

Both commands can also be started as `python -m pngcore.simple_read` and
`python -m pngcore.paster2`.

## Library use

```python
from pngcore.core import load_file, save_file
from pngcore.errors import PngCoreError

try:
    png = load_file("image.png")
except PngCoreError as exc:
    print("could not load:", exc.code, exc.message)
else:
    print(png.width, png.height, png.bit_depth, png.color_type)
    if png.validate():
        pixels = png.get_raw_data()   # filter byte + pixel bytes per row
        print(len(pixels), "bytes of image data")
    ihdr = png.get_chunk("IHDR")      # Chunk with type, data, crc, length
    save_file(png, "copy.png")        # or png.save("copy.png")
```

A CRC mismatch does not raise when loading: parsing stops at the bad chunk,
the later parts are left out, and `png.crc_error` describes the mismatch.
`validate()` is then false.

Other helpers in `pngcore.core`:

- `create(width, height, bit_depth, color_type)` builds an image with no
  image data; fill it with `Png.set_raw_data(data)`, which compresses it.
- `load_buffer(buffer)` parses a PNG held in memory;
  `is_png_buffer(buf)` checks for the PNG signature.
- `inflate(src)` and `deflate(src, level)` decompress and compress zlib
  streams.
- `crc32(buf)` computes the PNG chunk CRC.
- `ColorType` names the PNG colour types.

Errors are raised as `PngCoreError`, which carries an `ErrorCode` and a
message; `pngcore.errors.error_string(code)` gives the short description of
a code.

The lower layers can be used directly:

- `pngcore.raw`: `RawChunk`, `RawPng`, `load_raw_png`, `load_raw_chunk`,
  `is_png`, `is_png_buf`.
- `pngcore.png`: the parsed `Ihdr`, `Idat`, `Iend` and `SimplePng`,
  `parse_raw`, `write_png_file`, `inflate_idat`, `deflate_idat`.
- `pngcore.crc` and `pngcore.zutil`: the CRC table and zlib helpers.
- `pngcore.network`: `http_get` / `fetch_url`, returning an `HttpResponse`
  with the body, the header block and the fragment sequence number.
- `pngcore.buffer`: `BufferEntry` and the thread-safe, bounded
  `CircularBuffer`.
- `pngcore.concurrent`: `ConcurrentConfig` and `ConcurrentProcessor`, whose
  `run()`, `get_result()` and `elapsed()` do the strip assembly. A custom
  `fetch` callable can be passed in place of `http_get`.

## What it does not do

Only the first three chunks of a file are read, and they must be `IHDR`,
`IDAT` and `IEND` in that order; files with several `IDAT` chunks, a
palette or ancillary chunks are not handled. Image data is compressed and
decompressed as a whole, but scanline filters are not undone and pixels are
not decoded, so there is no conversion between pixel formats.