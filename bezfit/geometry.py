"""Planar points, vectors, lines, rays and segments."""

from __future__ import annotations

import math
from dataclasses import dataclass

_NUMBER = (int, float)


@dataclass(frozen=True)
class Point:
    """A point in the plane, also used as a displacement vector."""

    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        if not isinstance(scalar, _NUMBER):
            return NotImplemented
        return Point(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Point:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Point:
        if not isinstance(scalar, _NUMBER):
            return NotImplemented
        return Point(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def dot(self, other: Point) -> float:
        """Scalar product with another vector."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: Point) -> float:
        """Z component of the cross product with another vector."""
        return self.x * other.y - self.y * other.x

    def squared_length(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Point:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return Point(0.0, 0.0)
        return self / length


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def squared_distance(a: Point, b: Point) -> float:
    return (a - b).squared_length()


@dataclass(frozen=True)
class Line:
    """An infinite line through ``point`` with direction ``direction``."""

    point: Point
    direction: Point

    def __post_init__(self) -> None:
        if self.direction.squared_length() == 0.0:
            raise ValueError("a line needs a non-zero direction")

    def to_vector(self) -> Point:
        return self.direction

    def projection(self, p: Point) -> Point:
        """Orthogonal projection of ``p`` onto the line."""
        d = self.direction
        s = (p - self.point).dot(d) / d.squared_length()
        return self.point + d * s


@dataclass(frozen=True)
class Ray:
    """A half-line starting at ``source`` going in ``direction``."""

    source: Point
    direction: Point

    def to_vector(self) -> Point:
        return self.direction


@dataclass(frozen=True)
class Segment:
    """A straight segment from ``source`` to ``target``."""

    source: Point
    target: Point

    def squared_length(self) -> float:
        return squared_distance(self.source, self.target)

    def length(self) -> float:
        return math.sqrt(self.squared_length())

    def supporting_line(self) -> Line:
        return Line(self.source, self.target - self.source)


def projection(seg: Segment, p: Point) -> Point:
    """The point of ``seg`` closest to ``p``."""
    squared_length = seg.squared_length()
    if squared_length == 0.0:
        return seg.source
    q = seg.supporting_line().projection(p)
    s = (q - seg.source).dot(seg.target - seg.source) / squared_length
    if s < 0:
        return seg.source
    if s > 1:
        return seg.target
    return q