"""Least-squares fitting of cubic Bézier curves to point sequences."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import accumulate, pairwise

from .bezier import CubicBezierCurve, CubicBezierSpline
from .geometry import Point, midpoint

_DEFAULT_MAX_RECURSION = 10
_DEFAULT_ITERATIONS = 10


def _b0(u: float) -> float:
    t = 1.0 - u
    return t * t * t


def _b1(u: float) -> float:
    t = 1.0 - u
    return 3.0 * u * t * t


def _b2(u: float) -> float:
    t = 1.0 - u
    return 3.0 * u * u * t


def _b3(u: float) -> float:
    return u * u * u


def chord_length_parameterize(points: Sequence[Point]) -> list[float]:
    """Parameters in [0, 1] proportional to the cumulative chord length."""
    if not points:
        return []
    lengths = [0.0, *accumulate((b - a).length() for a, b in pairwise(points))]
    total = lengths[-1]
    if total == 0.0:
        return [0.0] * len(lengths)
    return [0.0] + [value / total for value in lengths[1:]]


def _left_tangent(points: Sequence[Point]) -> Point:
    return (points[1] - points[0]).normalized()


def _right_tangent(points: Sequence[Point]) -> Point:
    return (points[-2] - points[-1]).normalized()


def _center_tangent(points: Sequence[Point], center: int) -> Point:
    v1 = points[center - 1] - points[center]
    v2 = points[center] - points[center + 1]
    return ((v1 + v2) / 2.0).normalized()


def _max_error(
    points: Sequence[Point], curve: CubicBezierCurve, u: Sequence[float]
) -> tuple[float, int]:
    """Largest squared deviation of the interior points and where it occurs."""
    split = (len(points) - 1) // 2
    max_dist = 0.0
    for i in range(1, len(points) - 1):
        d2 = (curve.evaluate(u[i]) - points[i]).squared_length()
        if d2 >= max_dist:
            max_dist = d2
            split = i
    return max_dist, split


def _newton_raphson(curve: CubicBezierCurve, p: Point, u: float) -> float:
    q = curve.evaluate(u)
    q1 = curve.derivative(u)
    q2 = curve.derivative2(u)
    diff = q - p
    numerator = diff.dot(q1)
    denominator = q1.dot(q1) + diff.dot(q2)
    if denominator == 0.0:
        return u
    return min(1.0, max(0.0, u - numerator / denominator))


def _reparameterize(
    points: Sequence[Point], u: Sequence[float], curve: CubicBezierCurve
) -> list[float]:
    return [_newton_raphson(curve, p, ui) for p, ui in zip(points, u)]


def generate_bezier(
    points: Sequence[Point],
    u: Sequence[float],
    start_tangent: Point,
    end_tangent: Point,
) -> CubicBezierCurve:
    """Fit one cubic to ``points`` at parameters ``u`` with fixed end tangents."""
    if len(points) < 2 or len(u) != len(points):
        raise ValueError("need at least two points and one parameter per point")
    if len(points) == 3:
        a, b, c = points
        ua, ub, uc = u
        return generate_bezier(
            [a, midpoint(a, b), b, midpoint(b, c), c],
            [ua, (ua + ub) / 2, ub, (ub + uc) / 2, uc],
            start_tangent,
            end_tangent,
        )

    p0, p3 = points[0], points[-1]
    c00 = c01 = c11 = 0.0
    x0 = x1 = 0.0
    for p, ui in zip(points, u):
        a0 = start_tangent * _b1(ui)
        a1 = end_tangent * _b2(ui)
        c00 += a0.dot(a0)
        c01 += a0.dot(a1)
        c11 += a1.dot(a1)
        b0, b1, b2, b3 = _b0(ui), _b1(ui), _b2(ui), _b3(ui)
        tmp = p - (p0 * b0 + p0 * b1 + p3 * b2 + p3 * b3)
        x0 += a0.dot(tmp)
        x1 += a1.dot(tmp)

    det = c00 * c11 - c01 * c01
    alpha_l = alpha_r = 0.0
    if det != 0.0:
        alpha_l = (x0 * c11 - x1 * c01) / det
        alpha_r = (c00 * x1 - c01 * x0) / det

    seg_length = (p3 - p0).length()
    epsilon = 1.0e-6 * seg_length
    if alpha_l < epsilon or alpha_r < epsilon:
        dist = seg_length / 3.0
        return CubicBezierCurve(p0, p0 + start_tangent * dist, p3 + end_tangent * dist, p3)
    return CubicBezierCurve(p0, p0 + start_tangent * alpha_l, p3 + end_tangent * alpha_r, p3)


def _fit_recursive(
    points: Sequence[Point],
    start_tangent: Point,
    end_tangent: Point,
    allowed_error: float,
    max_recursion: int = _DEFAULT_MAX_RECURSION,
    iterations: int = _DEFAULT_ITERATIONS,
) -> Iterator[CubicBezierCurve]:
    first, last = points[0], points[-1]
    if len(points) == 2:
        dist = (last - first).length() / 3.0
        yield CubicBezierCurve(first, first + start_tangent * dist, last + end_tangent * dist, last)
        return

    u = chord_length_parameterize(points)
    curve = generate_bezier(points, u, start_tangent, end_tangent)
    error, split = _max_error(points, curve, u)
    if error < allowed_error:
        yield curve
        return

    for _ in range(iterations):
        u_prime = _reparameterize(points, u, curve)
        curve = generate_bezier(points, u_prime, start_tangent, end_tangent)
        error, split = _max_error(points, curve, u_prime)
        if error < allowed_error:
            yield curve
            return
        u = u_prime

    if max_recursion == 0:
        yield curve
        return

    center = _center_tangent(points, split)
    yield from _fit_recursive(
        points[: split + 1], start_tangent, center, allowed_error, max_recursion - 1
    )
    yield from _fit_recursive(
        points[split:], -center, end_tangent, allowed_error, max_recursion - 1
    )


def _check_points(points: Sequence[Point]) -> list[Point]:
    pts = list(points)
    if len(pts) < 2:
        raise ValueError("at least two points are needed")
    return pts


def fit_spline(
    points: Sequence[Point],
    max_squared_error: float,
    start_tangent: Point | None = None,
    end_tangent: Point | None = None,
    reparameterization_iterations: int = _DEFAULT_ITERATIONS,
) -> CubicBezierSpline:
    """Fit a spline whose squared deviation from the points stays below the bound.

    Without explicit tangents, the end tangents follow the first and last chords.
    """
    pts = _check_points(points)
    t1 = _left_tangent(pts) if start_tangent is None else start_tangent.normalized()
    t2 = _right_tangent(pts) if end_tangent is None else end_tangent.normalized()
    return CubicBezierSpline(
        list(
            _fit_recursive(
                pts, t1, t2, max_squared_error, _DEFAULT_MAX_RECURSION, reparameterization_iterations
            )
        )
    )


def fit_curve(
    points: Sequence[Point],
    start_tangent: Point | None = None,
    end_tangent: Point | None = None,
    reparameterization_iterations: int = _DEFAULT_ITERATIONS,
) -> CubicBezierCurve:
    """Fit a single cubic to the points."""
    pts = _check_points(points)
    if start_tangent is None or end_tangent is None:
        if len(pts) == 2:
            return CubicBezierCurve.from_endpoints(pts[0], pts[1])
        t1, t2 = _left_tangent(pts), _right_tangent(pts)
        allowed = 0.0
    else:
        t1, t2 = start_tangent.normalized(), end_tangent.normalized()
        allowed = 0.001
    return next(_fit_recursive(pts, t1, t2, allowed, 0, reparameterization_iterations))


def fit_two_curves(
    points: Sequence[Point], reparameterization_iterations: int = _DEFAULT_ITERATIONS
) -> CubicBezierSpline:
    """Fit the points with one cubic, or two if a single one does not fit exactly."""
    pts = _check_points(points)
    return CubicBezierSpline(
        list(
            _fit_recursive(
                pts, _left_tangent(pts), _right_tangent(pts), 0.0, 1, reparameterization_iterations
            )
        )
    )