"""An in-memory 24-bit bitmap with pixel lookup by row and column or by UV."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from stardog.bitmap_header import BitmapHeader
from stardog.bmp_reader import decode_bitmap
from stardog.bmp_writer import encode_bitmap
from stardog.pixel import Pixel


@dataclass
class BmpImage:
    """A bitmap header together with its ``rows * columns`` pixels, row by row."""

    header: BitmapHeader
    pixels: list[Pixel] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.pixels = list(self.pixels)
        expected = self.header.rows * self.header.columns
        if len(self.pixels) != expected:
            raise ValueError(
                f"a {self.header.rows}x{self.header.columns} image needs "
                f"{expected} pixels, got {len(self.pixels)}"
            )

    @property
    def rows(self) -> int:
        return self.header.rows

    @property
    def columns(self) -> int:
        return self.header.columns

    @classmethod
    def from_bytes(cls, data: bytes) -> BmpImage:
        """Decode a complete bitmap file held in memory."""
        header, pixels = decode_bitmap(data)
        return cls(header=header, pixels=pixels)

    @classmethod
    def load(cls, path: str | PathLike) -> BmpImage:
        """Read and decode the bitmap file at ``path``."""
        return cls.from_bytes(Path(path).read_bytes())

    def to_bytes(self) -> bytes:
        """Encode the image as a bitmap file."""
        return encode_bitmap(self.header, self.pixels)

    def save(self, path: str | PathLike) -> None:
        """Write the image to ``path`` as a bitmap file."""
        Path(path).write_bytes(self.to_bytes())

    def pixel_at(self, row: int, column: int) -> Pixel:
        """Return the pixel at ``row``, ``column``.

        Indices past the last row or column are clamped to it.
        """
        if self.rows == 0 or self.columns == 0:
            raise IndexError("the image has no pixels")
        if row < 0 or column < 0:
            raise IndexError(f"negative pixel position ({row}, {column})")
        row = min(row, self.rows - 1)
        column = min(column, self.columns - 1)
        return self.pixels[row * self.columns + column]

    def pixel_at_uv(self, u: float, v: float) -> Pixel:
        """Return the pixel at texture coordinates ``u`` (rows) and ``v`` (columns).

        Coordinates are taken as absolute values. A coordinate above 1 has
        the next whole number subtracted from it; a position that then falls
        before the start lands on the last row or column, as does anything
        at or past the end.
        """
        u = abs(u)
        v = abs(v)
        if u > 1.0:
            u -= math.ceil(u)
        if v > 1.0:
            v -= math.ceil(v)
        row = self._position(u, self.rows)
        column = self._position(v, self.columns)
        return self.pixel_at(row, column)

    @staticmethod
    def _position(coordinate: float, size: int) -> int:
        index = int(coordinate * size)
        if index < 0:
            # Out-of-range positions wrap to the far end and are clamped there.
            return max(size - 1, 0)
        return index