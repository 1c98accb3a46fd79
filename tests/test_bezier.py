import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bezfit.bezier import CubicBezierCurve, CubicBezierSpline
from bezfit.geometry import Point, Segment

ARCH = CubicBezierCurve(Point(0.0, 0.0), Point(0.0, 1.0), Point(1.0, 1.0), Point(1.0, 0.0))


def close(a, b, tol=1e-7):
    return math.isclose(a.x, b.x, abs_tol=tol) and math.isclose(a.y, b.y, abs_tol=tol)


def test_from_endpoints_is_straight_and_interpolates():
    s, t = Point(1.0, 2.0), Point(7.0, -4.0)
    curve = CubicBezierCurve.from_endpoints(s, t)
    assert curve.evaluate(0.0) == s
    assert curve.evaluate(1.0) == t
    assert curve.is_straight()


def test_arch_is_not_straight():
    assert not ARCH.is_straight()


def test_evaluate_endpoints_are_exact():
    assert ARCH.evaluate(0.0) == ARCH.source
    assert ARCH.evaluate(1.0) == ARCH.target


@given(st.floats(min_value=0.01, max_value=0.99))
def test_derivative_matches_finite_difference(t):
    h = 1e-6
    approx = (ARCH.evaluate(t + h) - ARCH.evaluate(t - h)) / (2 * h)
    d = ARCH.derivative(t)
    assert math.isclose(d.x, approx.x, abs_tol=1e-5)
    assert math.isclose(d.y, approx.y, abs_tol=1e-5)


@given(st.floats(min_value=0.01, max_value=0.99))
def test_second_derivative_matches_finite_difference(t):
    h = 1e-6
    approx = (ARCH.derivative(t + h) - ARCH.derivative(t - h)) / (2 * h)
    d2 = ARCH.derivative2(t)
    assert math.isclose(d2.x, approx.x, abs_tol=1e-4)
    assert math.isclose(d2.y, approx.y, abs_tol=1e-4)


def test_derivative_at_ends_points_to_control_points():
    assert ARCH.derivative(0.0) == (ARCH.control1 - ARCH.source) * 3.0
    assert ARCH.derivative(1.0) == (ARCH.target - ARCH.control2) * 3.0


def test_tangent_is_unit_and_follows_first_leg():
    tangent = ARCH.tangent(0.0)
    assert math.isclose(tangent.length(), 1.0)
    assert tangent == (ARCH.control1 - ARCH.source).normalized()


def test_tangent_falls_back_when_control_point_coincides():
    curve = CubicBezierCurve(Point(0.0, 0.0), Point(0.0, 0.0), Point(2.0, 0.0), Point(3.0, 0.0))
    assert curve.tangent(0.0) == (curve.control2 - curve.source).normalized()


@pytest.mark.parametrize("n", [1, 2, 5, 17])
def test_sample_points_count_and_endpoints(n):
    pts = ARCH.sample_points(n)
    assert len(pts) == n + 1
    assert pts[0] == ARCH.source
    assert pts[-1] == ARCH.target


def test_sample_points_rejects_zero():
    with pytest.raises(ValueError):
        ARCH.sample_points(0)


def test_horizontal_segment_crosses_arch_twice():
    seg = Segment(Point(-1.0, 0.5), Point(2.0, 0.5))
    hits = ARCH.intersections(seg)
    assert len(hits) == 2
    assert hits[0].t < hits[1].t
    for hit in hits:
        assert math.isclose(hit.point.y, seg.source.y, abs_tol=1e-9)
        assert close(ARCH.evaluate(hit.t), hit.point)


def test_segment_too_short_misses():
    seg = Segment(Point(0.4, 0.5), Point(0.6, 0.5))
    assert ARCH.intersections(seg) == []


def test_segment_above_arch_misses():
    seg = Segment(Point(-1.0, 5.0), Point(2.0, 5.0))
    assert ARCH.intersections(seg) == []


def test_collinear_overlap_reports_overlap_ends():
    curve = CubicBezierCurve.from_endpoints(Point(0.0, 0.0), Point(4.0, 0.0))
    seg = Segment(Point(2.0, 0.0), Point(6.0, 0.0))
    hits = curve.intersections(seg)
    xs = [h.point.x for h in hits]
    assert all(h.point.y == 0.0 for h in hits)
    assert all(seg.source.x - 1e-9 <= x <= curve.target.x + 1e-9 for x in xs)
    assert any(math.isclose(x, seg.source.x) for x in xs)
    assert any(math.isclose(x, curve.target.x) for x in xs)


def test_degenerate_segment_on_curve_is_found():
    point = ARCH.evaluate(0.3)
    hits = ARCH.intersections(Segment(point, point))
    assert any(math.isclose(h.t, 0.3, abs_tol=1e-6) for h in hits)


def test_spline_collects_curves():
    other = CubicBezierCurve.from_endpoints(ARCH.target, Point(2.0, 0.0))
    spline = CubicBezierSpline()
    spline.append_curve(ARCH)
    spline.append_curve(other)
    assert len(spline) == spline.num_curves() == 2
    assert list(spline) == [ARCH, other]
    assert spline.curve(1) == other
    assert spline.position(1, 1.0) == other.target


def test_spline_curve_out_of_range():
    with pytest.raises(IndexError):
        CubicBezierSpline().curve(0)


def test_spline_intersections_carry_index():
    other = CubicBezierCurve(Point(1.0, 0.0), Point(1.0, 1.0), Point(2.0, 1.0), Point(2.0, 0.0))
    spline = CubicBezierSpline([ARCH, other])
    hits = spline.intersections(Segment(Point(-1.0, 0.5), Point(3.0, 0.5)))
    assert sorted({h.index for h in hits}) == [0, 1]
    for h in hits:
        assert close(spline.position(h.index, h.t), h.point)