"""Reflection models evaluated in tangent space, where +y is the surface normal."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .core import HitInfo
from .sampler import sample_cosine_weighted_hemisphere
from .vecmath import Vec2, Vec3

_NORMAL = Vec3(0.0, 1.0, 0.0)


def cos_theta(w: Vec3) -> float:
    """Cosine between a tangent-space direction and the normal."""
    return w.y


def cos2_theta(w: Vec3) -> float:
    """Squared cosine between a tangent-space direction and the normal."""
    return w.y * w.y


def abs_cos_theta(w: Vec3) -> float:
    """Absolute cosine between a tangent-space direction and the normal."""
    return abs(w.y)


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Mirror v about the axis n."""
    return -v + n * (2.0 * v.dot(n))


@dataclass(frozen=True)
class BxDFSample:
    """A sampled incident direction with the BxDF value and its pdf."""

    direction: Vec3
    f: Vec3
    pdf: float


class BxDF(ABC):
    """A scattering function that can importance-sample incident directions."""

    @abstractmethod
    def sample_direction(self, u: Vec2, wo: Vec3) -> BxDFSample:
        """Sample an incident direction for view direction wo using u in [0, 1)^2."""


@dataclass(frozen=True)
class Lambert(BxDF):
    """Ideal diffuse reflection."""

    albedo: Vec3 = Vec3()

    def sample_direction(self, u: Vec2, wo: Vec3) -> BxDFSample:
        wi = sample_cosine_weighted_hemisphere(u)
        return BxDFSample(
            direction=wi,
            f=self.albedo / math.pi,
            pdf=abs_cos_theta(wi) / math.pi,
        )


@dataclass(frozen=True)
class IdealSpecularReflection(BxDF):
    """Perfect mirror reflection."""

    albedo: Vec3 = Vec3()

    def sample_direction(self, u: Vec2, wo: Vec3) -> BxDFSample:
        wi = reflect(wo, _NORMAL)
        return BxDFSample(direction=wi, f=self.albedo / abs_cos_theta(wi), pdf=1.0)


class LambertOnly(BxDF):
    """A BSDF made of a single Lambert lobe coloured by the hit material."""

    def __init__(self, info: HitInfo) -> None:
        if info.primitive is None:
            raise ValueError("hit has no primitive to take a material from")
        material = info.primitive.material
        kd = material.kd
        if material.kd_tex is not None:
            r, g, b, _ = material.kd_tex.fetch(info.texcoord)
            kd = Vec3(r, g, b)
        self._lambert = Lambert(kd)

    @property
    def albedo(self) -> Vec3:
        return self._lambert.albedo

    def sample_direction(self, u: Vec2, wo: Vec3) -> BxDFSample:
        return self._lambert.sample_direction(u, wo)