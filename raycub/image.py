"""In-memory 32-bit pixel images and colour conversion for shallow visuals."""

from __future__ import annotations

from collections.abc import Sequence

_PIXEL_MASK = 0xFFFFFFFF


def convert_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Turn a 0xRRGGBB colour into a pixel value for a display of ``depth`` bits.

    Colours pass through unchanged at 24 bits or more. Below that, each
    channel is cut down to the width of its mask and moved to its offset.
    ``shifts`` holds six numbers: red offset, red width, green offset, green
    width, blue offset, blue width.
    """
    if depth >= 24:
        return color
    if len(shifts) != 6:
        raise ValueError("shifts must hold six values")
    red_off, red_bits, green_off, green_bits, blue_off, blue_bits = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_bits)) << red_off)
        + ((green >> (16 - green_bits)) << green_off)
        + ((blue >> (16 - blue_bits)) << blue_off)
    )


class Image:
    """A width by height grid of 32-bit pixels, all black when created."""

    bits_per_pixel = 32
    endian = 0

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: list[int] = [0] * (width * height)

    @property
    def line_length(self) -> int:
        """Number of bytes in one row of the image."""
        return self.width * (self.bits_per_pixel // 8)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> int:
        """Return the 32-bit value stored at (x, y)."""
        return self.pixels[self._offset(x, y)]

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store the low 32 bits of ``color`` at (x, y)."""
        self.pixels[self._offset(x, y)] = color & _PIXEL_MASK

    def fill(self, color: int) -> None:
        """Set every pixel to ``color``."""
        self.pixels = [color & _PIXEL_MASK] * (self.width * self.height)

    def row(self, y: int) -> list[int]:
        """Return a copy of row ``y``."""
        if not 0 <= y < self.height:
            raise IndexError(f"row {y} outside image of height {self.height}")
        start = y * self.width
        return self.pixels[start:start + self.width]

    def __repr__(self) -> str:
        return f"Image({self.width}, {self.height})"