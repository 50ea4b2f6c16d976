"""Pinhole camera producing primary rays."""

from __future__ import annotations

import logging

from .core import Ray
from .vecmath import Vec2, Vec3

logger = logging.getLogger(__name__)

_WORLD_UP = Vec3(0.0, 1.0, 0.0)


class Camera:
    """A pinhole camera looking along `forward`; `focal_length` scales the image plane distance."""

    def __init__(self, origin: Vec3, forward: Vec3, focal_length: float = 1.0) -> None:
        self.origin = origin
        self.forward = forward
        self.focal_length = focal_length
        self.right = forward.cross(_WORLD_UP).normalized()
        self.up = self.right.cross(forward).normalized()

        logger.info("[Camera] Origin: (%s, %s, %s)", origin.x, origin.y, origin.z)
        logger.info("[Camera] Forward: (%s, %s, %s)", forward.x, forward.y, forward.z)
        logger.info("[Camera] Right: (%s, %s, %s)", self.right.x, self.right.y, self.right.z)
        logger.info("[Camera] Up: (%s, %s, %s)", self.up.x, self.up.y, self.up.z)

    def sample_ray(self, ndc: Vec2) -> Ray:
        """Return the ray through normalized device coordinates in [-1, 1]^2."""
        direction = self.right * ndc.x + self.up * ndc.y + self.forward * self.focal_length
        return Ray(self.origin, direction.normalized())