"""Voronoi edges between graph sites and how close they come to them."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Union

from .geometry import Line, Point, Ray, Segment, midpoint, projection, squared_distance
from .utils import Rectangle

DEFAULT_EPSILON = 1e-7
_PARABOLA_STEP = 0.01


@dataclass(frozen=True)
class Site:
    """A site of a segment Voronoi diagram: either a point or a segment."""

    point: Optional[Point] = None
    segment: Optional[Segment] = None

    def __post_init__(self) -> None:
        if (self.point is None) == (self.segment is None):
            raise ValueError("a site is either a point or a segment")

    @classmethod
    def from_point(cls, point: Point) -> Site:
        return cls(point=point)

    @classmethod
    def from_segment(cls, segment: Segment) -> Site:
        return cls(segment=segment)

    def is_point(self) -> bool:
        return self.point is not None

    def is_segment(self) -> bool:
        return self.segment is not None

    @property
    def source(self) -> Point:
        if self.segment is None:
            raise ValueError("a point site has no source")
        return self.segment.source

    @property
    def target(self) -> Point:
        if self.segment is None:
            raise ValueError("a point site has no target")
        return self.segment.target


@dataclass(frozen=True)
class ParabolaSegment:
    """The part of a parabola with given focus and directrix between ``p1`` and ``p2``."""

    focus: Point
    directrix: Line
    p1: Point
    p2: Point

    def __post_init__(self) -> None:
        if self._focus_distance() == 0.0:
            raise ValueError("the focus must not lie on the directrix")

    def _unit(self) -> Point:
        return self.directrix.to_vector().normalized()

    def _focus_distance(self) -> float:
        return (self.focus - self.directrix.projection(self.focus)).length()

    def parameter(self, p: Point) -> float:
        """Signed position of the projection of ``p`` along the directrix."""
        return (self.directrix.projection(p) - self.directrix.point).dot(self._unit())

    def point_at(self, s: float) -> Point:
        """The parabola point whose projection lies at position ``s``."""
        unit = self._unit()
        focus_proj = self.directrix.projection(self.focus)
        d = self._focus_distance()
        normal = (self.focus - focus_proj) / d
        offset = s - self.parameter(self.focus)
        height = (offset * offset + d * d) / (2.0 * d)
        return self.directrix.point + unit * s + normal * height

    def generate_points(self, step: float) -> list[Point]:
        """Points from ``p1`` to ``p2`` spaced about ``step`` apart along the directrix."""
        if step <= 0:
            raise ValueError("step must be positive")
        s1 = self.parameter(self.p1)
        s2 = self.parameter(self.p2)
        count = max(1, math.ceil(abs(s2 - s1) / step))
        interior = [self.point_at(s1 + (s2 - s1) * i / count) for i in range(1, count)]
        return [self.p1, *interior, self.p2]


VoronoiEdge = Union[Segment, Line, Ray, ParabolaSegment]


def edge_length(edge: VoronoiEdge) -> float:
    """Length of a Voronoi edge; unbounded edges are infinitely long."""
    if isinstance(edge, Segment):
        return edge.length()
    if isinstance(edge, ParabolaSegment):
        points = edge.generate_points(_PARABOLA_STEP)
        return sum(math.dist((a.x, a.y), (b.x, b.y)) for a, b in zip(points, points[1:]))
    if isinstance(edge, (Line, Ray)):
        return math.inf
    raise TypeError(f"not a Voronoi edge: {edge!r}")


def _point_of(site: Site) -> Point:
    if site.point is None:
        raise ValueError("expected a point site")
    return site.point


def _segment_site(p: Site, q: Site) -> Segment:
    for site in (p, q):
        if site.segment is not None:
            return site.segment
    raise ValueError("expected a segment site")


def _closer_end(a: Point, da2: float, b: Point, db2: float) -> tuple[float, Point]:
    if da2 < db2:
        return math.sqrt(da2), a
    return math.sqrt(db2), b


def min_dist(edge: VoronoiEdge, p: Site, q: Site) -> tuple[float, Point]:
    """Smallest distance to its sites attained on ``edge``, and where."""
    if isinstance(edge, Segment):
        if p.is_point() and q.is_point():
            pp, qp = _point_of(p), _point_of(q)
            m = midpoint(pp, qp)
            v = edge.target - edge.source
            dot = (m - edge.source).dot(v)
            if 0 <= dot <= v.dot(v):
                return math.sqrt(squared_distance(pp, qp)) / 2.0, m
            return _closer_end(
                edge.source, squared_distance(edge.source, pp),
                edge.target, squared_distance(edge.target, pp),
            )
        seg = _segment_site(p, q)
        return _closer_end(
            edge.source, squared_distance(edge.source, projection(seg, edge.source)),
            edge.target, squared_distance(edge.target, projection(seg, edge.target)),
        )
    if isinstance(edge, ParabolaSegment):
        directrix = edge.directrix
        focus = edge.focus
        focus_proj = directrix.projection(focus)
        dir_v = directrix.to_vector()
        start_proj = directrix.projection(edge.p1)
        end_proj = directrix.projection(edge.p2)
        start_dot = (start_proj - directrix.point).dot(dir_v)
        end_dot = (end_proj - directrix.point).dot(dir_v)
        focus_dot = (focus_proj - directrix.point).dot(dir_v)
        if (start_dot > focus_dot or end_dot > focus_dot) and (
            start_dot < focus_dot or end_dot < focus_dot
        ):
            return math.sqrt(squared_distance(focus, focus_proj)) / 2.0, midpoint(focus, focus_proj)
        return _closer_end(
            edge.p1, squared_distance(edge.p1, start_proj),
            edge.p2, squared_distance(edge.p2, end_proj),
        )
    if isinstance(edge, Line):
        pp, qp = _point_of(p), _point_of(q)
        return math.sqrt(squared_distance(pp, qp)) / 2.0, midpoint(pp, qp)
    if isinstance(edge, Ray):
        pp, qp = _point_of(p), _point_of(q)
        m = midpoint(pp, qp)
        if (m - edge.source).dot(edge.to_vector()) >= 0:
            return math.sqrt(squared_distance(m, pp)), m
        return math.sqrt(squared_distance(edge.source, pp)), edge.source
    raise TypeError(f"not a Voronoi edge: {edge!r}")


def _clip_to_disk(seg: Segment, center: Point, radius: float) -> Optional[Segment]:
    d = seg.target - seg.source
    f = seg.source - center
    a = d.dot(d)
    r2 = radius * radius
    if a == 0.0:
        return seg if f.dot(f) <= r2 else None
    b = 2.0 * f.dot(d)
    c = f.dot(f) - r2
    disc = b * b - 4.0 * a * c
    if disc < 0:
        return None
    root = math.sqrt(disc)
    t0 = max(0.0, (-b - root) / (2.0 * a))
    t1 = min(1.0, (-b + root) / (2.0 * a))
    if t0 > t1:
        return None
    start = seg.source if t0 == 0.0 else seg.source + d * t0
    end = seg.target if t1 == 1.0 else seg.source + d * t1
    return Segment(start, end)


def _clip_parabola(ps: ParabolaSegment, dist: float) -> Optional[ParabolaSegment]:
    d = ps._focus_distance()
    reach = 2.0 * d * dist - d * d
    if reach < 0:
        return None
    half_width = math.sqrt(reach)
    s_focus = ps.parameter(ps.focus)
    s1, s2 = ps.parameter(ps.p1), ps.parameter(ps.p2)
    lo, hi = s_focus - half_width, s_focus + half_width
    c1 = min(max(s1, lo), hi)
    c2 = min(max(s2, lo), hi)
    if not (min(s1, s2) <= c1 <= max(s1, s2)) or c1 == c2 and not (lo <= s1 <= hi):
        return None
    if max(min(s1, s2), lo) > min(max(s1, s2), hi):
        return None
    new_p1 = ps.p1 if c1 == s1 else ps.point_at(c1)
    new_p2 = ps.p2 if c2 == s2 else ps.point_at(c2)
    return ParabolaSegment(ps.focus, ps.directrix, new_p1, new_p2)


def within_dist(edge: VoronoiEdge, p: Site, q: Site, dist: float) -> Optional[VoronoiEdge]:
    """The part of ``edge`` that lies within ``dist`` of its sites, if any."""
    if min_dist(edge, p, q)[0] > dist:
        return None
    if isinstance(edge, Segment):
        if not (math.isfinite(edge.source.x) and math.isfinite(edge.target.x)):
            return None
        if p.is_point() and q.is_point():
            return _clip_to_disk(edge, _point_of(p), dist)
        seg = _segment_site(p, q)
        s_dist2 = squared_distance(edge.source, projection(seg, edge.source))
        t_dist2 = squared_distance(edge.target, projection(seg, edge.target))
        larger, smaller = max(s_dist2, t_dist2), min(s_dist2, t_dist2)
        if larger < dist * dist:
            return edge
        if smaller > dist * dist:
            return None
        if larger == smaller:
            return edge
        source_closest = s_dist2 < t_dist2
        narrow = edge.source if source_closest else edge.target
        wide = edge.target if source_closest else edge.source
        factor = (dist - math.sqrt(smaller)) / (math.sqrt(larger) - math.sqrt(smaller))
        return Segment(narrow, narrow + (wide - narrow) * factor)
    if isinstance(edge, ParabolaSegment):
        if not (p.is_point() or q.is_point()):
            raise ValueError("a parabolic edge needs a point site")
        return _clip_parabola(edge, dist)
    if isinstance(edge, (Line, Ray)):
        return edge
    raise TypeError(f"not a Voronoi edge: {edge!r}")


def site_projection(edge: VoronoiEdge, site: Site) -> Union[Point, Segment]:
    """The part of ``site`` that lies opposite ``edge``."""
    if site.point is not None:
        return site.point
    seg = site.segment
    assert seg is not None
    if isinstance(edge, Segment):
        line = seg.supporting_line()
        return Segment(line.projection(edge.source), line.projection(edge.target))
    if isinstance(edge, ParabolaSegment):
        if math.isnan(edge.p1.x) or math.isnan(edge.p2.x):
            return Segment(Point(0.0, 0.0), Point(1.0, 0.0))
        line = seg.supporting_line()
        return Segment(line.projection(edge.p1), line.projection(edge.p2))
    if isinstance(edge, (Line, Ray)):
        return seg
    raise TypeError(f"not a Voronoi edge: {edge!r}")


def lies_on_bbox(point: Point, bbox: Rectangle, eps: float = DEFAULT_EPSILON) -> bool:
    """Whether ``point`` lies within ``eps`` of one of the box's side lines."""
    return (
        abs(point.x - bbox.xmin) < eps
        or abs(point.x - bbox.xmax) < eps
        or abs(point.y - bbox.ymin) < eps
        or abs(point.y - bbox.ymax) < eps
    )


def sites_adjacent(p: Site, q: Site) -> bool:
    """Whether the two sites touch: shared segment endpoints or a point at an endpoint."""
    if p.is_segment() and q.is_segment():
        return (
            p.source == q.source
            or p.target == q.target
            or p.source == q.target
            or p.target == q.source
        )
    if p.is_point() and q.is_segment():
        return p.point == q.source or p.point == q.target
    if p.is_segment() and q.is_point():
        return p.source == q.point or p.target == q.point
    return False


def component_too_short(edges: Iterable[VoronoiEdge], required_length: float) -> bool:
    """Whether the total length of the edges stays below ``required_length``."""
    return sum(edge_length(edge) for edge in edges) < required_length