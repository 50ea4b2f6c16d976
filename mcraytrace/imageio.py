"""Writing images to PPM and PNG files."""

from __future__ import annotations

import math
import os
from typing import TYPE_CHECKING

from PIL import Image as PILImage

if TYPE_CHECKING:
    from .image import Image


def quantize(value: float) -> int:
    """Map a [0, 1] channel value to an 8-bit integer, truncating and clamping."""
    if math.isnan(value):
        return 0
    return int(min(max(255.0 * value, 0.0), 255.0))


def write_ppm(path: str | os.PathLike[str], image: Image) -> None:
    """Write the image as an ASCII (P3) PPM file."""
    data = image.to_bytes()
    with open(path, "w", encoding="ascii") as file:
        file.write("P3\n")
        file.write(f"{image.width} {image.height}\n")
        file.write("255\n")
        for offset in range(0, len(data), 3):
            r, g, b = data[offset : offset + 3]
            file.write(f"{r} {g} {b}\n")


def write_png(path: str | os.PathLike[str], image: Image) -> None:
    """Write the image as an 8-bit RGB PNG file."""
    picture = PILImage.frombytes("RGB", (image.width, image.height), image.to_bytes())
    picture.save(path, format="PNG")