"""Scene primitives (shape plus material) and ray intersectors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Iterable

from .core import HitInfo, Material, Ray
from .shape import Shape


@dataclass(frozen=True, eq=False)
class Primitive:
    """A shape paired with the material covering it."""

    shape: Shape
    material: Material

    def intersect(self, ray: Ray) -> HitInfo | None:
        """Return the hit with this primitive recorded on it, or None."""
        hit = self.shape.intersect(ray)
        if hit is None:
            return None
        hit.primitive = self
        return hit

    def has_emission(self) -> bool:
        """Whether any emission component is positive."""
        ke = self.material.ke
        return ke.x > 0.0 or ke.y > 0.0 or ke.z > 0.0


class Intersector(ABC):
    """Finds the closest intersection of a ray with a set of primitives."""

    @abstractmethod
    def intersect(self, ray: Ray) -> HitInfo | None:
        """Return the closest hit, or None when the ray escapes."""


class LinearIntersector(Intersector):
    """Tests every primitive in turn; O(N) per ray."""

    def __init__(self, primitives: Iterable[Primitive]) -> None:
        self._primitives = tuple(primitives)

    def __len__(self) -> int:
        return len(self._primitives)

    def intersect(self, ray: Ray) -> HitInfo | None:
        probe = replace(ray)
        closest: HitInfo | None = None
        for primitive in self._primitives:
            hit = primitive.intersect(probe)
            if hit is not None:
                probe.tmax = hit.t
                closest = hit
        return closest