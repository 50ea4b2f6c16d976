"""Geometric shapes that can be hit by rays."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .core import HitInfo, Ray
from .vecmath import Vec2, Vec3

_EPS = 1e-6


class Shape(ABC):
    """A surface that reports its first intersection with a ray."""

    @abstractmethod
    def intersect(self, ray: Ray) -> HitInfo | None:
        """Return the hit within [ray.tmin, ray.tmax], or None."""


@dataclass(frozen=True)
class Sphere(Shape):
    """A sphere given by centre and radius."""

    center: Vec3
    radius: float

    def intersect(self, ray: Ray) -> HitInfo | None:
        oc = ray.origin - self.center
        b = ray.direction.dot(oc)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - c
        if discriminant < 0:
            return None

        root = math.sqrt(discriminant)
        t = -b - root
        if t < ray.tmin or t > ray.tmax:
            t = -b + root
            if t < ray.tmin or t > ray.tmax:
                return None

        position = ray.at(t)
        return HitInfo(t=t, position=position, normal=(position - self.center).normalized())


@dataclass(frozen=True)
class Triangle(Shape):
    """A triangle with per-vertex normals and texture coordinates."""

    v0: Vec3
    v1: Vec3
    v2: Vec3
    n0: Vec3
    n1: Vec3
    n2: Vec3
    t0: Vec2
    t1: Vec2
    t2: Vec2

    def intersect(self, ray: Ray) -> HitInfo | None:
        # Möller–Trumbore
        e0 = self.v1 - self.v0
        e1 = self.v2 - self.v0
        h = ray.direction.cross(e1)
        a = e0.dot(h)
        if -_EPS < a < _EPS:
            return None

        f = 1.0 / a
        s = ray.origin - self.v0
        u = f * s.dot(h)
        if u < 0.0 or u > 1.0:
            return None

        q = s.cross(e0)
        v = f * ray.direction.dot(q)
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * e1.dot(q)
        if t < ray.tmin or t > ray.tmax:
            return None

        w = 1.0 - u - v
        return HitInfo(
            t=t,
            position=self.v0 * w + self.v1 * u + self.v2 * v,
            normal=self.n0 * w + self.n1 * u + self.n2 * v,
            texcoord=self.t0 * w + self.t1 * u + self.t2 * v,
        )