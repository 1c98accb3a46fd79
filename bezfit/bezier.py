"""Cubic Bézier curves and splines made of them."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import pairwise
from typing import Iterator

from .geometry import Point, Segment

_ROOT_EPS = 1e-12
_DEDUP_EPS = 1e-9
_STRAIGHT_EPS = 1e-9


@dataclass(frozen=True)
class CurvePoint:
    """A point on a curve together with its parameter."""

    t: float
    point: Point


@dataclass(frozen=True)
class SplinePoint:
    """A point on a spline: curve index, parameter and position."""

    index: int
    t: float
    point: Point


def _quadratic_roots(a: float, b: float, c: float) -> list[float]:
    if abs(a) < 1e-14:
        if abs(b) < 1e-14:
            return []
        return [-c / b]
    disc = b * b - 4 * a * c
    if disc < 0:
        return []
    sq = disc ** 0.5
    return [(-b - sq) / (2 * a), (-b + sq) / (2 * a)]


def _bisect(f, lo: float, hi: float) -> float:
    flo = f(lo)
    for _ in range(200):
        mid = (lo + hi) / 2
        fmid = f(mid)
        if fmid == 0.0 or hi - lo < 1e-16:
            return mid
        if (fmid < 0) == (flo < 0):
            lo, flo = mid, fmid
        else:
            hi = mid
    return (lo + hi) / 2


def _unit_roots(bernstein: list[float], reference: float) -> list[float] | None:
    """Roots in [0, 1] of a cubic given by Bernstein coefficients.

    Returns None when the polynomial vanishes identically.
    """
    scale = max(abs(c) for c in bernstein)
    if scale <= _ROOT_EPS * reference or scale == 0.0:
        return None
    b0, b1, b2, b3 = (c / scale for c in bernstein)
    a0 = b0
    a1 = 3 * (b1 - b0)
    a2 = 3 * (b0 - 2 * b1 + b2)
    a3 = b3 - 3 * b2 + 3 * b1 - b0

    def f(t: float) -> float:
        return ((a3 * t + a2) * t + a1) * t + a0

    critical = [t for t in _quadratic_roots(3 * a3, 2 * a2, a1) if 0.0 < t < 1.0]
    knots = sorted({0.0, 1.0, *critical})
    roots: list[float] = []
    for lo, hi in pairwise(knots):
        flo, fhi = f(lo), f(hi)
        if abs(flo) <= _ROOT_EPS:
            roots.append(lo)
        elif abs(fhi) > _ROOT_EPS and flo * fhi < 0:
            roots.append(_bisect(f, lo, hi))
    if abs(f(1.0)) <= _ROOT_EPS:
        roots.append(1.0)
    return _dedup(roots)


def _dedup(values: list[float]) -> list[float]:
    result: list[float] = []
    for v in sorted(values):
        if not result or v - result[-1] > _DEDUP_EPS:
            result.append(v)
    return result


@dataclass(frozen=True)
class CubicBezierCurve:
    """A cubic Bézier curve given by its four control points."""

    source: Point
    control1: Point
    control2: Point
    target: Point

    @classmethod
    def from_endpoints(cls, source: Point, target: Point) -> CubicBezierCurve:
        """A straight curve with uniformly spaced control points."""
        d = target - source
        return cls(source, source + d / 3.0, source + d * (2.0 / 3.0), target)

    @property
    def control_points(self) -> tuple[Point, Point, Point, Point]:
        return (self.source, self.control1, self.control2, self.target)

    def evaluate(self, t: float) -> Point:
        u = 1.0 - t
        return (
            self.source * (u * u * u)
            + self.control1 * (3.0 * u * u * t)
            + self.control2 * (3.0 * u * t * t)
            + self.target * (t * t * t)
        )

    def derivative(self, t: float) -> Point:
        u = 1.0 - t
        return (
            (self.control1 - self.source) * (3.0 * u * u)
            + (self.control2 - self.control1) * (6.0 * u * t)
            + (self.target - self.control2) * (3.0 * t * t)
        )

    def derivative2(self, t: float) -> Point:
        u = 1.0 - t
        first = self.control2 - self.control1 * 2.0 + self.source
        second = self.target - self.control2 * 2.0 + self.control1
        return first * (6.0 * u) + second * (6.0 * t)

    def tangent(self, t: float) -> Point:
        """Unit direction of travel at parameter ``t``."""
        d = self.derivative(t)
        if d.squared_length() > 0.0:
            return d.normalized()
        if t <= 0.5:
            fallbacks = (self.control2 - self.source, self.target - self.source)
        else:
            fallbacks = (self.target - self.control1, self.target - self.source)
        for candidate in fallbacks:
            if candidate.squared_length() > 0.0:
                return candidate.normalized()
        return Point(0.0, 0.0)

    def sample_points(self, n: int) -> list[Point]:
        """Points at ``n + 1`` evenly spaced parameters, endpoints included."""
        if n < 1:
            raise ValueError("need at least one sampling interval")
        return [self.evaluate(i / n) for i in range(n + 1)]

    def is_straight(self) -> bool:
        """Whether all control points lie on the line through the endpoints."""
        d = self.target - self.source
        sq = d.squared_length()
        if sq == 0.0:
            return self.control1 == self.source and self.control2 == self.source
        tol = _STRAIGHT_EPS * sq
        return all(abs((c - self.source).cross(d)) <= tol for c in (self.control1, self.control2))

    def _solve(self, direction: Point, origin: Point) -> list[float] | None:
        coeffs = [direction.dot(p - origin) for p in self.control_points]
        extent = max((p - origin).length() for p in self.control_points)
        return _unit_roots(coeffs, direction.length() * max(extent, 1e-300))

    def _locate(self, point: Point) -> list[float]:
        for axis in (Point(1.0, 0.0), Point(0.0, 1.0)):
            roots = self._solve(axis, point)
            if roots is not None:
                break
        else:
            return [0.0] if self.source == point else []
        scale = max(1.0, max(p.length() for p in self.control_points))
        return [t for t in roots if (self.evaluate(t) - point).length() <= 1e-7 * scale]

    def intersections(self, segment: Segment) -> list[CurvePoint]:
        """Points where the curve meets ``segment``, ordered by parameter."""
        d = segment.target - segment.source
        sq = d.squared_length()
        if sq == 0.0:
            return [CurvePoint(t, self.evaluate(t)) for t in self._locate(segment.source)]
        normal = Point(-d.y, d.x)
        roots = self._solve(normal, segment.source)
        if roots is None:
            # The curve runs along the segment's supporting line.
            candidates = [0.0, 1.0]
            for end in (segment.source, segment.target):
                candidates.extend(self._solve(d, end) or [])
            roots = _dedup(candidates)
        result = []
        for t in roots:
            pt = self.evaluate(t)
            s = d.dot(pt - segment.source) / sq
            if -_ROOT_EPS <= s <= 1.0 + _ROOT_EPS:
                result.append(CurvePoint(t, pt))
        return result


@dataclass
class CubicBezierSpline:
    """A sequence of cubic Bézier curves."""

    curves: list[CubicBezierCurve] = field(default_factory=list)

    def append_curve(self, curve: CubicBezierCurve) -> None:
        self.curves.append(curve)

    def curve(self, index: int) -> CubicBezierCurve:
        return self.curves[index]

    def num_curves(self) -> int:
        return len(self.curves)

    def position(self, index: int, t: float) -> Point:
        return self.curves[index].evaluate(t)

    def intersections(self, segment: Segment) -> list[SplinePoint]:
        return [
            SplinePoint(index, cp.t, cp.point)
            for index, curve in enumerate(self.curves)
            for cp in curve.intersections(segment)
        ]

    def __len__(self) -> int:
        return len(self.curves)

    def __iter__(self) -> Iterator[CubicBezierCurve]:
        return iter(self.curves)