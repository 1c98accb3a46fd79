import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bezfit.bezier import CubicBezierCurve
from bezfit.geometry import Point
from bezfit.schneider import (
    chord_length_parameterize,
    fit_curve,
    fit_spline,
    fit_two_curves,
    generate_bezier,
)


def _close(a: Point, b: Point, tol: float = 1e-9) -> bool:
    return (a - b).length() <= tol


def _semicircle(n: int = 20, radius: float = 10.0) -> list[Point]:
    return [
        Point(radius * math.cos(math.pi * i / (n - 1)), radius * math.sin(math.pi * i / (n - 1)))
        for i in range(n)
    ]


def test_chord_length_endpoints_and_monotone():
    pts = [Point(0, 0), Point(1, 0), Point(1, 2), Point(4, 6)]
    u = chord_length_parameterize(pts)
    assert len(u) == len(pts)
    assert u[0] == 0.0
    assert u[-1] == pytest.approx(1.0)
    assert all(a < b for a, b in zip(u, u[1:]))


def test_chord_length_proportional_to_distance():
    pts = [Point(0, 0), Point(2, 0), Point(4, 0)]
    u = chord_length_parameterize(pts)
    assert u[1] == pytest.approx(0.5)


def test_chord_length_coincident_points_are_zero():
    pts = [Point(1, 1)] * 4
    assert chord_length_parameterize(pts) == [0.0, 0.0, 0.0, 0.0]


def test_generate_bezier_keeps_endpoints():
    pts = _semicircle(8)
    u = chord_length_parameterize(pts)
    curve = generate_bezier(pts, u, Point(0, 1), Point(0, 1))
    assert curve.source == pts[0]
    assert curve.target == pts[-1]


def test_generate_bezier_rejects_mismatched_parameters():
    with pytest.raises(ValueError):
        generate_bezier([Point(0, 0), Point(1, 1)], [0.0], Point(1, 0), Point(-1, 0))


def test_fit_spline_two_points_is_straight():
    a, b = Point(0, 0), Point(3, 3)
    spline = fit_spline([a, b], 0.1)
    assert spline.num_curves() == 1
    curve = spline.curve(0)
    expected = CubicBezierCurve.from_endpoints(a, b)
    for got, want in zip(curve.control_points, expected.control_points):
        assert _close(got, want)


def test_fit_spline_rejects_single_point():
    with pytest.raises(ValueError):
        fit_spline([Point(0, 0)], 0.1)


def test_fit_curve_rejects_empty():
    with pytest.raises(ValueError):
        fit_curve([])


def test_fit_spline_approximates_semicircle():
    pts = _semicircle()
    spline = fit_spline(pts, 0.01)
    assert spline.curve(0).source == pts[0]
    assert spline.curve(len(spline) - 1).target == pts[-1]
    for prev, nxt in zip(spline, list(spline)[1:]):
        assert _close(prev.target, nxt.source)
    samples = [p for curve in spline for p in curve.sample_points(400)]
    for p in pts:
        assert min((p - s).length() for s in samples) <= 0.25


def test_fit_spline_respects_given_tangents():
    pts = _semicircle(10)
    start, end = Point(0, 5), Point(0, 5)
    spline = fit_spline(pts, 0.01, start, end)
    first = spline.curve(0)
    last = spline.curve(len(spline) - 1)
    d1 = first.control1 - first.source
    d2 = last.control2 - last.target
    assert abs(d1.cross(start)) <= 1e-9 * max(1.0, d1.length())
    assert d1.dot(start) > 0
    assert abs(d2.cross(end)) <= 1e-9 * max(1.0, d2.length())
    assert d2.dot(end) > 0


def test_fit_curve_two_points_uses_endpoints():
    a, b = Point(1, 2), Point(4, -1)
    assert fit_curve([a, b]) == CubicBezierCurve.from_endpoints(a, b)


def test_fit_curve_collinear_points_is_straight():
    pts = [Point(0, 0), Point(1, 1), Point(2, 2), Point(5, 5)]
    curve = fit_curve(pts)
    assert curve.source == pts[0]
    assert curve.target == pts[-1]
    assert curve.is_straight()


def test_fit_curve_reproduces_sampled_cubic():
    original = CubicBezierCurve(Point(0, 0), Point(1, 3), Point(4, 3), Point(5, 0))
    pts = original.sample_points(30)
    curve = fit_curve(pts, original.tangent(0), -original.tangent(1))
    for t in (0.25, 0.5, 0.75):
        assert (curve.evaluate(t) - original.evaluate(t)).length() < 0.05


def test_fit_two_curves_gives_at_most_two_connected_curves():
    pts = _semicircle(15)
    spline = fit_two_curves(pts)
    assert 1 <= len(spline) <= 2
    assert spline.curve(0).source == pts[0]
    assert spline.curve(len(spline) - 1).target == pts[-1]
    if len(spline) == 2:
        assert spline.curve(0).target == spline.curve(1).source


@settings(max_examples=50, deadline=None)
@given(
    st.lists(
        st.tuples(
            st.floats(min_value=0.5, max_value=5.0),
            st.floats(min_value=-5.0, max_value=5.0),
        ),
        min_size=2,
        max_size=15,
    )
)
def test_fit_spline_chain_invariant(steps):
    pts = []
    x = 0.0
    for dx, y in steps:
        x += dx
        pts.append(Point(x, y))
    spline = fit_spline(pts, 0.5)
    curves = list(spline)
    assert curves[0].source == pts[0]
    assert curves[-1].target == pts[-1]
    for prev, nxt in zip(curves, curves[1:]):
        assert prev.target == nxt.source
    endpoints = {c.source for c in curves} | {curves[-1].target}
    assert endpoints <= set(pts)