"""Polygon utilities: containment, bounding boxes and areas.

Polygons are sequences of points, implicitly closed. Containment uses the
even-odd ray-casting rule so that it works on any simple or self-touching
loop without triangulation.
"""

from __future__ import annotations

import math
from typing import List, Sequence

from shapely.geometry import Polygon

from .. import config
from ..core.model import Bounds, Point, inner_bounds


def point_in_polygon(p: Point, poly: Sequence[Point]) -> bool:
    """Check if a point lies inside a polygon (even-odd rule).

    Args:
        p: The point to test.
        poly: Polygon vertices, implicitly closed.

    Returns:
        True if the point is inside, False otherwise. Points exactly on an
        edge may fall either way.
    """
    inside = False
    n = len(poly)
    j = n - 1
    for i in range(n):
        xi, yi = poly[i].x, poly[i].y
        xj, yj = poly[j].x, poly[j].y
        if (yi > p.y) != (yj > p.y) and p.x < (xj - xi) * (p.y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def expand_quad(corners: Sequence[Point], tol: float) -> List[Point]:
    """Push each corner outward by ``tol`` along the ray from the centroid."""
    cx = sum(c.x for c in corners) / len(corners)
    cy = sum(c.y for c in corners) / len(corners)
    expanded = []
    for c in corners:
        dx = c.x - cx
        dy = c.y - cy
        d = math.hypot(dx, dy)
        if d < config.DIRECTION_EPSILON:
            expanded.append(c)
            continue
        expanded.append(Point(c.x + dx / d * tol, c.y + dy / d * tol))
    return expanded


def point_in_quad(p: Point, corners: Sequence[Point], tol: float) -> bool:
    """Point-in-polygon against a quad grown radially by ``tol``."""
    return point_in_polygon(p, expand_quad(corners, tol))


def bounds(loop: Sequence[Point]) -> Bounds:
    """Bounding box of a polygon."""
    return inner_bounds(tuple(loop))


def rect(x0: float, y0: float, x1: float, y1: float) -> List[Point]:
    """Axis-aligned rectangle as a 4-point polygon."""
    return [Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1)]


def polygon_area(loop: Sequence[Point]) -> float:
    """Unsigned area of a polygon in square millimetres.

    Returns 0.0 for degenerate loops (fewer than 3 points).
    """
    if len(loop) < 3:
        return 0.0
    return Polygon([(p.x, p.y) for p in loop]).area
