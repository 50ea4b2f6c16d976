"""Floating-point RGB image buffer."""

from __future__ import annotations

from .imageio import quantize
from .vecmath import Vec3

_SRGB_THRESHOLD = 0.0031308


def _srgb_channel(value: float) -> float:
    if value < _SRGB_THRESHOLD:
        return 12.92 * value
    return 1.055 * value ** (1.0 / 2.4) - 0.055


def linear_to_srgb(rgb: Vec3) -> Vec3:
    """Convert a linear RGB colour to sRGB."""
    return Vec3(_srgb_channel(rgb.x), _srgb_channel(rgb.y), _srgb_channel(rgb.z))


class Image:
    """A width x height grid of linear RGB floats stored row by row."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("image dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = [0.0] * (3 * width * height)

    def _index(self, i: int, j: int) -> int:
        if not (0 <= i < self.width and 0 <= j < self.height):
            raise IndexError(f"pixel ({i}, {j}) outside {self.width}x{self.height} image")
        return 3 * (i + self.width * j)

    @property
    def pixels(self) -> list[float]:
        """A copy of the flat RGB data."""
        return list(self._pixels)

    def get_pixel(self, i: int, j: int) -> Vec3:
        idx = self._index(i, j)
        return Vec3(*self._pixels[idx : idx + 3])

    def set_pixel(self, i: int, j: int, color: Vec3) -> None:
        idx = self._index(i, j)
        self._pixels[idx : idx + 3] = [color.x, color.y, color.z]

    def add_pixel(self, i: int, j: int, color: Vec3) -> None:
        idx = self._index(i, j)
        self._pixels[idx] += color.x
        self._pixels[idx + 1] += color.y
        self._pixels[idx + 2] += color.z

    def clear(self) -> None:
        """Set every pixel to black."""
        self._pixels = [0.0] * len(self._pixels)

    def divide(self, k: float) -> None:
        """Divide every channel by k."""
        self._pixels = [value / k for value in self._pixels]

    def post_process(self) -> None:
        """Convert the whole image from linear RGB to sRGB."""
        self._pixels = [_srgb_channel(value) for value in self._pixels]

    def to_bytes(self) -> bytes:
        """Return 8-bit RGB data, row by row."""
        return bytes(quantize(value) for value in self._pixels)