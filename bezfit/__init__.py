"""Bézier curve fitting, rectangle helpers and Voronoi-edge distance geometry."""

__version__ = "0.0.1"
__all__ = ["geometry", "bezier", "schneider", "utils", "voronoi"]