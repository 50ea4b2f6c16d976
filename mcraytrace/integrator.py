"""Estimators of the radiance arriving along a ray."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .bxdf import LambertOnly, abs_cos_theta
from .core import Ray
from .primitive import Intersector
from .sampler import Sampler
from .vecmath import Vec3, local_to_world, orthonormal_basis, world_to_local

RAY_EPS = 0.01
DEFAULT_SKY = Vec3(1.0, 1.0, 1.0)


class Integrator(ABC):
    """Computes incoming radiance for a primary ray."""

    @abstractmethod
    def integrate(self, ray: Ray, intersector: Intersector, sampler: Sampler) -> Vec3:
        """Return the radiance estimate along ray."""


class PathTracing(Integrator):
    """Unidirectional path tracer with Russian roulette and a constant sky."""

    def __init__(self, max_depth: int, sky: Vec3 = DEFAULT_SKY) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must not be negative")
        self.max_depth = max_depth
        self.sky = sky

    def integrate(self, ray: Ray, intersector: Intersector, sampler: Sampler) -> Vec3:
        radiance = Vec3()
        throughput = Vec3(1.0, 1.0, 1.0)
        origin, direction = ray.origin, ray.direction

        for _ in range(self.max_depth):
            survival = throughput.max_component()
            if sampler.next_1d() > survival or survival <= 0.0:
                break
            throughput = throughput / survival

            hit = intersector.intersect(Ray(origin, direction, ray.tmin, ray.tmax))
            if hit is None:
                radiance = radiance + throughput * self.sky
                break

            if hit.primitive is None:
                raise ValueError("intersector returned a hit without a primitive")
            if hit.primitive.has_emission():
                radiance = radiance + throughput * hit.primitive.material.ke
                break

            tangent, bitangent = orthonormal_basis(hit.normal)
            bsdf = LambertOnly(hit)
            wo = world_to_local(-direction, tangent, hit.normal, bitangent)
            sample = bsdf.sample_direction(sampler.next_2d(), wo)
            if sample.pdf <= 0.0:
                break

            throughput = throughput * sample.f * (abs_cos_theta(sample.direction) / sample.pdf)
            origin = hit.position + hit.normal * RAY_EPS
            direction = local_to_world(sample.direction, tangent, hit.normal, bitangent)

        return radiance