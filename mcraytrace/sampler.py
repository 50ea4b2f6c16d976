"""PCG32 random sampler and hemisphere sampling routines."""

from __future__ import annotations

import math

from .vecmath import Vec2, Vec3, spherical_to_cartesian

_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1
_MULTIPLIER = 6364136223846793005
_INCREMENT = 0xDEADBEEF
_WARM_UP = 10


class Sampler:
    """Deterministic PCG32 (XSH RR) generator of uniform samples in [0, 1)."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK64
        self._inc = _INCREMENT
        for _ in range(_WARM_UP):
            self.next_1d()

    def next_u32(self) -> int:
        """Return the next 32-bit unsigned integer."""
        old = self._state
        self._state = (old * _MULTIPLIER + (self._inc | 1)) & _MASK64
        xorshifted = (((old >> 18) ^ old) >> 27) & _MASK32
        rot = old >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & _MASK32

    def next_1d(self) -> float:
        """Return a uniform float in [0, 1)."""
        return self.next_u32() / 4294967296.0

    def next_2d(self) -> Vec2:
        """Return two successive uniform floats as a Vec2."""
        x = self.next_1d()
        y = self.next_1d()
        return Vec2(x, y)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def sample_hemisphere(u: Vec2) -> Vec3:
    """Uniformly sample a direction on the +y hemisphere."""
    theta = math.acos(_clamp(1.0 - u.x, -1.0, 1.0))
    phi = 2.0 * math.pi * u.y
    return spherical_to_cartesian(phi, theta)


def sample_cosine_weighted_hemisphere(u: Vec2) -> Vec3:
    """Sample a direction on the +y hemisphere with density proportional to cos(theta)."""
    theta = 0.5 * math.acos(_clamp(1.0 - 2.0 * u.x, -1.0, 1.0))
    phi = 2.0 * math.pi * u.y
    return spherical_to_cartesian(phi, theta)