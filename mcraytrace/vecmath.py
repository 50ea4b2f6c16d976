"""Small immutable 2D/3D vectors and tangent-space helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator


@dataclass(frozen=True, slots=True)
class Vec2:
    """A 2D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vec2:
        return self.__mul__(scalar)


@dataclass(frozen=True, slots=True)
class Vec3:
    """A 3D vector of floats; `*` and `/` accept a scalar or a Vec3 (per component)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, Real):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: Vec3 | float) -> Vec3:
        return self.__mul__(other)

    def __truediv__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, Real):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Return the unit vector in this direction."""
        length = self.length()
        if length == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return self / length

    def max_component(self) -> float:
        return max(self.x, self.y, self.z)


def spherical_to_cartesian(phi: float, theta: float) -> Vec3:
    """Convert spherical angles to a unit vector with y as the polar axis."""
    sin_theta = math.sin(theta)
    return Vec3(math.cos(phi) * sin_theta, math.cos(theta), math.sin(phi) * sin_theta)


def orthonormal_basis(normal: Vec3) -> tuple[Vec3, Vec3]:
    """Build (tangent, bitangent) perpendicular to a unit normal (Duff et al. 2017)."""
    sign = math.copysign(1.0, normal.z)
    a = -1.0 / (sign + normal.z)
    b = normal.x * normal.y * a
    tangent = Vec3(1.0 + sign * normal.x * normal.x * a, sign * b, -sign * normal.x)
    bitangent = Vec3(b, sign + normal.y * normal.y * a, -normal.y)
    return tangent, bitangent


def world_to_local(v: Vec3, t: Vec3, n: Vec3, b: Vec3) -> Vec3:
    """Express a world-space vector in the (t, n, b) frame."""
    return Vec3(v.dot(t), v.dot(n), v.dot(b))


def local_to_world(v: Vec3, t: Vec3, n: Vec3, b: Vec3) -> Vec3:
    """Map a (t, n, b)-frame vector back to world space."""
    return Vec3(
        v.x * t.x + v.y * n.x + v.z * b.x,
        v.x * t.y + v.y * n.y + v.z * b.y,
        v.x * t.z + v.y * n.z + v.z * b.z,
    )