import pytest

from stardog.bitmap_header import (
    HEADER_SIZE,
    BitmapHeader,
    NotABitmapError,
    TruncatedBitmapError,
    UnsupportedBitDepthError,
)
from stardog.bmp_reader import decode_bitmap, read_bitmap
from stardog.pixel import Pixel


def _build(rows, columns, pixels, padding_byte=b"\x00"):
    header = BitmapHeader.for_size(rows, columns)
    body = bytearray()
    for r in range(rows):
        for c in range(columns):
            body += pixels[r * columns + c].to_bgr()
        body += padding_byte * header.row_padding
    return header, header.to_bytes() + bytes(body)


def _sample_pixels(count):
    return [Pixel(red=i % 256, green=(i * 7) % 256, blue=(i * 13) % 256) for i in range(count)]


@pytest.mark.parametrize("rows,columns", [(1, 1), (2, 3), (3, 4), (4, 5), (2, 2)])
def test_round_trip(rows, columns):
    pixels = _sample_pixels(rows * columns)
    header, data = _build(rows, columns, pixels)
    decoded_header, decoded = decode_bitmap(data)
    assert decoded == pixels
    assert decoded_header == header


def test_bytes_are_blue_green_red():
    header = BitmapHeader.for_size(1, 1)
    data = header.to_bytes() + b"\x01\x02\x03" + b"\x00"
    _, pixels = decode_bitmap(data)
    assert pixels == [Pixel(red=3, green=2, blue=1)]


def test_padding_content_is_ignored():
    pixels = _sample_pixels(6)
    _, data = _build(2, 3, pixels, padding_byte=b"\xff")
    _, decoded = decode_bitmap(data)
    assert decoded == pixels


def test_empty_image_has_no_pixels():
    header = BitmapHeader.for_size(0, 0)
    decoded_header, pixels = decode_bitmap(header.to_bytes())
    assert pixels == []
    assert decoded_header.rows == 0


def test_not_a_bitmap():
    header = BitmapHeader.for_size(1, 1)
    data = b"XY" + header.to_bytes()[2:] + b"\x00" * 4
    with pytest.raises(NotABitmapError):
        decode_bitmap(data)


def test_wrong_bit_depth():
    header = BitmapHeader.for_size(1, 1)
    header.bits_per_pixel = 32
    with pytest.raises(UnsupportedBitDepthError):
        decode_bitmap(header.to_bytes() + b"\x00" * 8)


def test_truncated_pixel_data():
    pixels = _sample_pixels(4)
    _, data = _build(2, 2, pixels)
    with pytest.raises(TruncatedBitmapError):
        decode_bitmap(data[:-1])


def test_truncated_header():
    header = BitmapHeader.for_size(1, 1)
    with pytest.raises(TruncatedBitmapError):
        decode_bitmap(header.to_bytes()[: HEADER_SIZE - 1])


def test_read_bitmap_from_file(tmp_path):
    pixels = _sample_pixels(12)
    header, data = _build(3, 4, pixels)
    path = tmp_path / "image.bmp"
    path.write_bytes(data)
    decoded_header, decoded = read_bitmap(path)
    assert decoded == pixels
    assert decoded_header.columns == header.columns


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_bitmap(tmp_path / "missing.bmp")