"""The 54-byte header at the start of an uncompressed 24-bit BMP file."""

from __future__ import annotations

import struct
from dataclasses import dataclass

_HEADER_FORMAT = struct.Struct("<2sIHHIIIIHHIIIIII")

HEADER_SIZE = _HEADER_FORMAT.size
INFO_HEADER_SIZE = 40
BITS_PER_PIXEL = 24
DEFAULT_PIXELS_PER_METER = 2880


class BitmapError(ValueError):
    """Raised when bitmap data cannot be decoded."""


class NotABitmapError(BitmapError):
    """The 'BM' tag is missing."""

    def __init__(self, message: str = "File is not a BMP file - 'BM' tag not present"):
        super().__init__(message)


class UnsupportedBitDepthError(BitmapError):
    """The bitmap is not 24 bits per pixel."""

    def __init__(self, bits_per_pixel: int):
        super().__init__(f"Not a 24 Bit bitmap format ({bits_per_pixel} bits per pixel)")
        self.bits_per_pixel = bits_per_pixel


class TruncatedBitmapError(BitmapError):
    """The data ends before the bitmap does."""


def read_row_padding(columns: int) -> int:
    """Return the bytes that pad a row of ``columns`` pixels to a multiple of four."""
    if columns < 0:
        raise ValueError(f"column count must not be negative, got {columns}")
    bytes_per_row = columns * 3
    if columns % 4 != 0:
        bytes_per_row = (bytes_per_row // 4) * 4 + 4
    return bytes_per_row - 3 * columns


@dataclass
class BitmapHeader:
    """File and info header fields of a bitmap."""

    file_size: int = 0
    reserved1: int = 0
    reserved2: int = 0
    offset_in_bits: int = HEADER_SIZE
    header_size: int = INFO_HEADER_SIZE
    columns: int = 0
    rows: int = 0
    planes: int = 1
    bits_per_pixel: int = BITS_PER_PIXEL
    compression: int = 0
    image_size: int = 0
    pixels_per_meter_x: int = 0
    pixels_per_meter_y: int = 0
    lookup_table_entries: int = 0
    important_colours: int = 0

    SIZE = HEADER_SIZE

    @property
    def row_padding(self) -> int:
        return read_row_padding(self.columns)

    @property
    def bytes_per_row(self) -> int:
        return self.columns * 3 + self.row_padding

    @classmethod
    def from_bytes(cls, data: bytes) -> BitmapHeader:
        """Decode the header at the start of ``data``.

        As with the original loader, the data is only rejected as not being a
        bitmap when neither of the two signature letters matches.
        """
        data = bytes(data)
        if len(data) < 2:
            raise TruncatedBitmapError(f"need {HEADER_SIZE} header bytes, got {len(data)}")
        if data[0:1] != b"B" and data[1:2] != b"M":
            raise NotABitmapError()
        if len(data) < HEADER_SIZE:
            raise TruncatedBitmapError(f"need {HEADER_SIZE} header bytes, got {len(data)}")

        (_signature, file_size, reserved1, reserved2, offset, header_size,
         columns, rows, planes, bits_per_pixel, compression, image_size,
         ppm_x, ppm_y, lut_entries, important) = _HEADER_FORMAT.unpack_from(data)

        if bits_per_pixel != BITS_PER_PIXEL:
            raise UnsupportedBitDepthError(bits_per_pixel)

        return cls(
            file_size=file_size,
            reserved1=reserved1,
            reserved2=reserved2,
            offset_in_bits=offset,
            header_size=header_size,
            columns=columns,
            rows=rows,
            planes=planes,
            bits_per_pixel=bits_per_pixel,
            compression=compression,
            image_size=image_size,
            pixels_per_meter_x=ppm_x,
            pixels_per_meter_y=ppm_y,
            lookup_table_entries=lut_entries,
            important_colours=important,
        )

    def to_bytes(self) -> bytes:
        """Encode the header, always with the 'BM' tag."""
        return _HEADER_FORMAT.pack(
            b"BM",
            self.file_size,
            self.reserved1,
            self.reserved2,
            self.offset_in_bits,
            self.header_size,
            self.columns,
            self.rows,
            self.planes,
            self.bits_per_pixel,
            self.compression,
            self.image_size,
            self.pixels_per_meter_x,
            self.pixels_per_meter_y,
            self.lookup_table_entries,
            self.important_colours,
        )

    @classmethod
    def for_size(cls, rows: int, columns: int) -> BitmapHeader:
        """Build the header of a new 24-bit image of the given size."""
        if rows < 0 or columns < 0:
            raise ValueError(f"image size must not be negative, got {rows}x{columns}")
        header = cls(
            columns=columns,
            rows=rows,
            image_size=rows * columns * 3,
            pixels_per_meter_x=DEFAULT_PIXELS_PER_METER,
            pixels_per_meter_y=DEFAULT_PIXELS_PER_METER,
        )
        header.file_size = rows * header.bytes_per_row + HEADER_SIZE
        return header