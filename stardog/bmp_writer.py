"""Encoding of uncompressed 24-bit BMP images."""

from __future__ import annotations

from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from stardog.bitmap_header import BITS_PER_PIXEL, BitmapHeader, UnsupportedBitDepthError
from stardog.pixel import Pixel


def encode_bitmap(header: BitmapHeader, pixels: Iterable[Pixel]) -> bytes:
    """Encode ``header`` and a flat list of ``rows * columns`` pixels as a bitmap.

    Pixels are written row by row in the order given, each as blue, green,
    red, and every row is padded with zero bytes to a multiple of four.
    """
    if header.bits_per_pixel != BITS_PER_PIXEL:
        raise UnsupportedBitDepthError(header.bits_per_pixel)
    pixels = list(pixels)
    expected = header.rows * header.columns
    if len(pixels) != expected:
        raise ValueError(
            f"a {header.rows}x{header.columns} bitmap needs {expected} pixels, "
            f"got {len(pixels)}"
        )

    padding = bytes(header.row_padding)
    parts = [header.to_bytes()]
    columns = header.columns
    for start in range(0, len(pixels), columns or 1):
        row = pixels[start:start + columns]
        parts.extend(pixel.to_bgr() for pixel in row)
        parts.append(padding)
    return b"".join(parts)


def write_bitmap(path: str | PathLike, header: BitmapHeader, pixels: Iterable[Pixel]) -> None:
    """Encode the bitmap and write it to ``path``."""
    Path(path).write_bytes(encode_bitmap(header, pixels))