"""Decoding of uncompressed 24-bit BMP images."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from stardog.bitmap_header import HEADER_SIZE, BitmapHeader, TruncatedBitmapError
from stardog.pixel import Pixel


def decode_bitmap(data: bytes) -> tuple[BitmapHeader, list[Pixel]]:
    """Decode a 24-bit bitmap into its header and its pixels.

    Pixel data is read straight after the 54-byte header, row by row in file
    order, and each row's padding is skipped. The pixels come back as one flat
    list of ``rows * columns`` entries.
    """
    data = bytes(data)
    header = BitmapHeader.from_bytes(data)
    if header.rows == 0 or header.columns == 0:
        return header, []

    row_size = header.bytes_per_row
    end = HEADER_SIZE + header.rows * row_size
    if len(data) < end:
        raise TruncatedBitmapError(
            f"pixel data needs {end - HEADER_SIZE} bytes, "
            f"got {max(len(data) - HEADER_SIZE, 0)}"
        )

    width = header.columns * Pixel.SIZE
    pixels: list[Pixel] = []
    for start in range(HEADER_SIZE, end, row_size):
        row = data[start:start + width]
        pixels.extend(
            Pixel(red=red, green=green, blue=blue)
            for blue, green, red in zip(row[0::3], row[1::3], row[2::3])
        )
    return header, pixels


def read_bitmap(path: str | PathLike) -> tuple[BitmapHeader, list[Pixel]]:
    """Read and decode the bitmap file at ``path``."""
    return decode_bitmap(Path(path).read_bytes())