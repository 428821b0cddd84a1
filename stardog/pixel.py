"""Colour values as stored in 24-bit and 32-bit bitmaps."""

from __future__ import annotations

from dataclasses import dataclass


def _check_channel(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be in 0..255, got {value}")


@dataclass(frozen=True)
class Pixel:
    """A 24-bit colour; the default is black."""

    red: int = 0
    green: int = 0
    blue: int = 0

    SIZE = 3

    def __post_init__(self) -> None:
        _check_channel("red", self.red)
        _check_channel("green", self.green)
        _check_channel("blue", self.blue)

    def to_bgr(self) -> bytes:
        """Return the three bytes in the order a bitmap stores them."""
        return bytes((self.blue, self.green, self.red))

    @classmethod
    def from_bgr(cls, data: bytes) -> Pixel:
        """Build a pixel from three bytes in blue, green, red order."""
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise ValueError(f"a pixel needs {cls.SIZE} bytes, got {len(data)}")
        blue, green, red = data
        return cls(red=red, green=green, blue=blue)


@dataclass(frozen=True)
class RGBAPixel:
    """A 32-bit colour; alpha defaults to 1 when not given."""

    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 1

    def __post_init__(self) -> None:
        _check_channel("red", self.red)
        _check_channel("green", self.green)
        _check_channel("blue", self.blue)
        _check_channel("alpha", self.alpha)

    @classmethod
    def from_pixel(cls, pixel: Pixel, alpha: int = 1) -> RGBAPixel:
        """Extend a 24-bit pixel with an alpha channel."""
        return cls(red=pixel.red, green=pixel.green, blue=pixel.blue, alpha=alpha)