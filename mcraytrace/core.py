"""Rays, hit records and surface materials."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .vecmath import Vec2, Vec3

if TYPE_CHECKING:
    from .primitive import Primitive
    from .texture import Texture


@dataclass
class Ray:
    """A ray with a valid hit interval [tmin, tmax]."""

    origin: Vec3
    direction: Vec3
    tmin: float = 0.0
    tmax: float = 1e9

    def at(self, t: float) -> Vec3:
        """Return the point at distance t along the ray."""
        return self.origin + self.direction * t


@dataclass
class HitInfo:
    """Details of a ray-surface intersection."""

    t: float
    position: Vec3
    normal: Vec3
    texcoord: Vec2 = field(default_factory=Vec2)
    primitive: Primitive | None = None


@dataclass
class Material:
    """Diffuse, specular and emission colours with optional textures."""

    kd: Vec3 = field(default_factory=Vec3)
    kd_tex: Texture | None = None
    ks: Vec3 = field(default_factory=Vec3)
    ks_tex: Texture | None = None
    ke: Vec3 = field(default_factory=Vec3)
    ke_tex: Texture | None = None
    roughness: float = 1.0