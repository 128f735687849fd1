"""Point and segment value types.

Both are frozen dataclasses: a query builds them once and nothing mutates
them afterwards. Arithmetic is component-wise, mirroring the small vector
helpers the solvers need (difference, scaling, translation).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

__all__ = ['Point', 'Segment', 'SegmentPair']


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> 'Point':
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> 'Point':
        return Point(self.x / divisor, self.y / divisor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def squared_length(self) -> float:
        return self.x * self.x + self.y * self.y

    def manhattan_length(self) -> float:
        return abs(self.x) + abs(self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


@dataclass(frozen=True)
class Segment:
    """Directed segment from ``p1`` to ``p2``.

    Endpoint order fixes the parameterization ``p1 + t * (p2 - p1)`` but not
    the geometric relation reported by the solvers.
    """
    p1: Point
    p2: Point

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> 'Segment':
        return cls(Point(float(x1), float(y1)), Point(float(x2), float(y2)))

    @property
    def dx(self) -> float:
        return self.p2.x - self.p1.x

    @property
    def dy(self) -> float:
        return self.p2.y - self.p1.y

    def direction(self) -> Point:
        return self.p2 - self.p1

    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    def point_at(self, t: float) -> Point:
        return self.p1 + self.direction() * t

    def midpoint(self) -> Point:
        return (self.p1 + self.p2) / 2

    def is_finite(self) -> bool:
        return self.p1.is_finite() and self.p2.is_finite()

    def is_zero_length(self) -> bool:
        return self.p1 == self.p2

    def coords(self) -> Tuple[float, float, float, float]:
        return (self.p1.x, self.p1.y, self.p2.x, self.p2.y)


@dataclass(frozen=True)
class SegmentPair:
    """The two operands of one intersection query."""
    first: Segment
    second: Segment

    @classmethod
    def from_coords(cls, coords: Sequence[float]) -> 'SegmentPair':
        if len(coords) != 8:
            raise ValueError(f"expected 8 coordinates, got {len(coords)}")
        return cls(Segment.from_coords(*coords[:4]), Segment.from_coords(*coords[4:]))

    def swapped(self) -> 'SegmentPair':
        return SegmentPair(self.second, self.first)

    def coords(self) -> Tuple[float, ...]:
        return self.first.coords() + self.second.coords()
