# bezfit

Geometry tools for simplifying curved map boundaries. The package is pure Python and has no runtime dependencies.

## Modules

- `bezfit.geometry` provides a frozen `Point` class that also serves as a vector. It supports `+`, `-`, scalar `*` and `/`, negation, `dot`, `cross`, `squared_length`, `length` and `normalized`. Normalizing the zero vector gives the zero vector. The module also has `Line` (with `projection` and `to_vector`), `Ray`, `Segment` (with `length`, `squared_length` and `supporting_line`), and the functions `midpoint`, `squared_distance` and `projection`. `projection` returns the point of a segment closest to a given point.
- `bezfit.bezier` provides two classes:
  - `CubicBezierCurve` has `from_endpoints`, `evaluate`, `derivative`, `derivative2`, `tangent`, `sample_points`, `is_straight` and `intersections`. `intersections` finds where the curve meets a `Segment` and returns `CurvePoint`s ordered by parameter.
  - `CubicBezierSpline` is a list of curves. It has `append_curve`, `curve`, `num_curves`, `position`, `intersections` (which returns `SplinePoint`s), `len()` and iteration.
- `bezfit.schneider` fits cubic Béziers to point sequences by least squares. It refines parameters with Newton–Raphson steps and splits recursively at the worst-fitting point. It provides:
  - `fit_spline(points, max_squared_error, start_tangent=None, end_tangent=None, reparameterization_iterations=10)`. If you leave a tangent out, it follows the first or last chord.
  - `fit_curve(points, start_tangent=None, end_tangent=None, reparameterization_iterations=10)`, which returns one curve. Given only two points and no tangents, it returns a straight curve.
  - `fit_two_curves(points, reparameterization_iterations=10)`, which returns a single curve, or two curves if one does not fit exactly.
  - `chord_length_parameterize(points)` and `generate_bezier(points, u, start_tangent, end_tangent)`.

  Every fitting function raises `ValueError` when given fewer than two points.
- `bezfit.utils` provides an axis-aligned `Rectangle` with `sides()`, which returns the sides as segments. It also has:
  - the bounding-box builders `box_of_points`, `box_of_three`, `box_of_triangles` and `box_of_elements`. `box_of_elements` uses each element's `point` attribute.
  - the tests `encloses`, `disjoint`, `contains` and `same_point`, which take an optional tolerance.
  - the overlap tests `overlaps_segment`, `overlaps_curve` and `overlaps_spline`.
  - the list helpers `list_remove`, `swap_remove` and `list_replace`. `list_replace` matches by identity and raises `ValueError` when nothing matches.
- `bezfit.voronoi` works with Voronoi edges between sites that are points or segments. The module has:
  - `Site` and `ParabolaSegment`. A `ParabolaSegment` is defined by its focus and directrix, and its `generate_points` samples the arc.
  - `edge_length`, which is infinite for `Line` and `Ray` edges.
  - `min_dist`, which gives the smallest distance from the edge to its sites and the point where it is reached.
  - `within_dist`, which returns the part of the edge within a given distance of its sites.
  - `site_projection`, `lies_on_bbox`, `sites_adjacent` and `component_too_short`.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Example

```python
from bezfit.geometry import Point
from bezfit.schneider import fit_spline

points = [Point(0, 0), Point(1, 2), Point(3, 3), Point(5, 2), Point(6, 0)]
spline = fit_spline(points, 0.01)
for curve in spline:
    print(curve.evaluate(0.5))
```

You can also pass the end tangents explicitly. They are normalized before use:

```python
spline = fit_spline(points, 0.01, Point(1, 1), Point(1, -1))
```

## What it does not do

- The package does not build Voronoi diagrams or Delaunay graphs. `bezfit.voronoi` only analyses edges and sites that you supply.
- It has no graph structure. It cannot turn a network of Bézier edges into a polyline graph and back.
- It does not move vertices apart to enforce a minimum distance.
- It has no command-line tool, no file input or output, and no rendering.

## Running the tests

```
pytest
```