"""Bounding boxes, overlap tests and small list helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence, TypeVar

from .bezier import CubicBezierCurve, CubicBezierSpline
from .geometry import Point, Segment

T = TypeVar("T")


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle."""

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self) -> None:
        if self.xmin > self.xmax or self.ymin > self.ymax:
            raise ValueError("rectangle minimum exceeds its maximum")

    def sides(self) -> tuple[Segment, Segment, Segment, Segment]:
        """The left, bottom, right and top sides."""
        bl = Point(self.xmin, self.ymin)
        br = Point(self.xmax, self.ymin)
        tr = Point(self.xmax, self.ymax)
        tl = Point(self.xmin, self.ymax)
        return (Segment(tl, bl), Segment(bl, br), Segment(br, tr), Segment(tr, tl))


def box_of_three(a: Point, b: Point, c: Point) -> Rectangle:
    return box_of_points([a, b, c])


def box_of_triangles(t1: Sequence[Point], t2: Sequence[Point]) -> Rectangle:
    return box_of_points([*t1[:3], *t2[:3]])


def box_of_points(points: Iterable[Point]) -> Rectangle:
    """Bounding box of the points; an empty input gives the zero box."""
    pts = list(points)
    if not pts:
        return Rectangle(0, 0, 0, 0)
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    return Rectangle(min(xs), min(ys), max(xs), max(ys))


def box_of_elements(elements: Iterable[Any]) -> Rectangle:
    """Bounding box of the ``point`` attributes of the elements."""
    return box_of_points(e.point for e in elements)


def encloses(larger: Rectangle, smaller: Rectangle) -> bool:
    return (
        larger.xmin <= smaller.xmin
        and larger.ymin <= smaller.ymin
        and larger.xmax >= smaller.xmax
        and larger.ymax >= smaller.ymax
    )


def disjoint(a: Rectangle, b: Rectangle) -> bool:
    return a.xmax < b.xmin or a.xmin > b.xmax or a.ymax < b.ymin or a.ymin > b.ymax


def contains(rect: Rectangle, pt: Point, prec: float = 0) -> bool:
    return (
        rect.xmin - prec <= pt.x <= rect.xmax + prec
        and rect.ymin - prec <= pt.y <= rect.ymax + prec
    )


def same_point(a: Point, b: Point, prec: float = 0) -> bool:
    return a.x - prec <= b.x <= a.x + prec and a.y - prec <= b.y <= a.y + prec


def overlaps_segment(rect: Rectangle, seg: Segment) -> bool:
    """Whether the segment meets the closed rectangle."""
    p0 = seg.source
    d = seg.target - p0
    t0, t1 = 0.0, 1.0
    for p, q in (
        (-d.x, p0.x - rect.xmin),
        (d.x, rect.xmax - p0.x),
        (-d.y, p0.y - rect.ymin),
        (d.y, rect.ymax - p0.y),
    ):
        if p == 0:
            if q < 0:
                return False
            continue
        r = q / p
        if p < 0:
            t0 = max(t0, r)
        else:
            t1 = min(t1, r)
        if t0 > t1:
            return False
    return True


def overlaps_curve(rect: Rectangle, curve: CubicBezierCurve) -> bool:
    """Whether the curve crosses the rectangle or lies inside it."""
    if any(curve.intersections(side) for side in rect.sides()):
        return True
    return contains(rect, curve.evaluate(0.5))


def overlaps_spline(rect: Rectangle, spline: CubicBezierSpline) -> bool:
    """Whether the spline crosses the rectangle or lies inside it."""
    if any(spline.intersections(side) for side in rect.sides()):
        return True
    return contains(rect, spline.position(0, 0.5))


def list_remove(elt: T, items: list[T]) -> bool:
    """Remove the first occurrence of ``elt``; report whether one was found."""
    try:
        items.remove(elt)
    except ValueError:
        return False
    return True


def swap_remove(index: int, items: list[T]) -> T | None:
    """Remove ``items[index]`` by moving the last element into its place.

    Returns the element now at ``index``, or None if the last one was removed.
    """
    if index == len(items) - 1:
        items.pop()
        return None
    items[index] = items[-1]
    items.pop()
    return items[index]


def list_replace(old: T, new: T, items: list[T]) -> None:
    """Replace the first element that is ``old`` by ``new``."""
    for i, item in enumerate(items):
        if item is old:
            items[i] = new
            return
    raise ValueError("element not in list")