"""
2D Vector Math

Small value type shared by the motion controller, the chain solver and the
renderer. Every operation returns a new Vec2; nothing mutates in place.

Normalising is always guarded: a zero-length vector never divides, it falls
back to a fixed direction instead, so non-finite values can't leak into the
joint array.
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple, Iterable


@dataclass
class Vec2:
    """2D point / vector in canvas coordinates (y grows downward)"""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vec2':
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> 'Vec2':
        return self.__mul__(scalar)

    def __neg__(self) -> 'Vec2':
        return Vec2(-self.x, -self.y)

    @property
    def length(self) -> float:
        return float(np.hypot(self.x, self.y))

    @property
    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance_to(self, other: 'Vec2') -> float:
        return (other - self).length

    def normalized(self, fallback: 'Vec2' = None) -> 'Vec2':
        """
        Unit vector in the same direction.

        A zero vector returns `fallback` (straight up by default).
        """
        l = self.length
        if l > 0.0:
            return Vec2(self.x / l, self.y / l)
        return (fallback if fallback is not None else UP).copy()

    def with_length(self, length: float, fallback: 'Vec2' = None) -> 'Vec2':
        """Rescale to the given magnitude (direction from `normalized`)"""
        return self.normalized(fallback) * length

    def dot(self, other: 'Vec2') -> float:
        return self.x * other.x + self.y * other.y

    def lerp(self, other: 'Vec2', t: float) -> 'Vec2':
        return Vec2(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t
        )

    def clamped(self, min_x: float, min_y: float, max_x: float, max_y: float) -> 'Vec2':
        """Constrain each coordinate to a rectangle"""
        return Vec2(
            min(max(self.x, min_x), max_x),
            min(max(self.y, min_y), max_y)
        )

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.x) and np.isfinite(self.y))

    def copy(self) -> 'Vec2':
        return Vec2(self.x, self.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_int_tuple(self) -> Tuple[int, int]:
        return (int(round(self.x)), int(round(self.y)))

    @staticmethod
    def from_angle(angle: float, length: float = 1.0) -> 'Vec2':
        return Vec2(float(np.cos(angle)) * length, float(np.sin(angle)) * length)

    @staticmethod
    def from_iterable(values: Iterable[float]) -> 'Vec2':
        x, y = values
        return Vec2(float(x), float(y))


# Screen-space "straight up" (canvas y axis points down)
UP = Vec2(0.0, -1.0)
