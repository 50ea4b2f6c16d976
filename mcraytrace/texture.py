"""RGBA textures sampled by texture coordinates."""

from __future__ import annotations

import logging
import os
from typing import Sequence

from PIL import Image as PILImage

from .vecmath import Vec2

logger = logging.getLogger(__name__)

RGBA = tuple[float, float, float, float]


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


class Texture:
    """A width x height grid of RGBA colours with channels in [0, 1]."""

    def __init__(self, width: int, height: int, data: Sequence[RGBA]) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("texture dimensions must be positive")
        if len(data) != width * height:
            raise ValueError(f"expected {width * height} texels, got {len(data)}")
        self.width = width
        self.height = height
        self._data: list[RGBA] = [tuple(texel) for texel in data]  # type: ignore[misc]

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> Texture:
        """Load an image file as an RGBA texture."""
        logger.info("[Texture] loading %s", os.fspath(path))
        try:
            with PILImage.open(path) as picture:
                rgba = picture.convert("RGBA")
                width, height = rgba.size
                raw = rgba.tobytes()
        except (OSError, ValueError) as exc:
            logger.error("%s", exc)
            raise OSError(f"failed to load {os.fspath(path)}") from exc

        data = [
            (raw[k] / 255.0, raw[k + 1] / 255.0, raw[k + 2] / 255.0, raw[k + 3] / 255.0)
            for k in range(0, len(raw), 4)
        ]
        return cls(width, height, data)

    def fetch(self, texcoord: Vec2) -> RGBA:
        """Return the nearest texel for coordinates clamped to [0, 1]."""
        i = min(int(self.width * _clamp01(texcoord.x)), self.width - 1)
        j = min(int(self.height * _clamp01(texcoord.y)), self.height - 1)
        return self._data[i + self.width * j]