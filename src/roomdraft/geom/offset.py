"""Wall offset projection.

Derives the outer face of the walls from the clockwise inner loop by pushing
each edge's line outward by the wall thickness and intersecting neighbours.
"""

from __future__ import annotations

from typing import Tuple

from .. import config
from ..core.model import Loop, Point
from .segments import outward_normal


def _axis_dir(a: Point, b: Point) -> Point:
    """Direction of ``a -> b`` snapped to the dominant axis."""
    dx = b.x - a.x
    dy = b.y - a.y
    if abs(dx) >= abs(dy):
        return Point(_sign(dx), 0.0)
    return Point(0.0, _sign(dy))


def _sign(v: float) -> float:
    if v > 0:
        return 1.0
    if v < 0:
        return -1.0
    return 0.0


def _intersect_lines(p1: Point, p2: Point, p3: Point, p4: Point) -> Point:
    """Intersection of the infinite lines p1-p2 and p3-p4.

    Near-parallel lines fall back to ``p2``.
    """
    den = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
    if abs(den) < config.DIRECTION_EPSILON:
        return Point(p2.x, p2.y)

    c12 = p1.x * p2.y - p1.y * p2.x
    c34 = p3.x * p4.y - p3.y * p4.x
    px = (c12 * (p3.x - p4.x) - (p1.x - p2.x) * c34) / den
    py = (c12 * (p3.y - p4.y) - (p1.y - p2.y) * c34) / den
    return Point(px, py)


def _shift(p: Point, n: Point, t: float) -> Point:
    return Point(p.x + n.x * t, p.y + n.y * t)


def _offset_corner(prev: Point, curr: Point, nxt: Point, t: float) -> Point:
    n1 = outward_normal(_axis_dir(prev, curr))
    n2 = outward_normal(_axis_dir(curr, nxt))
    return _intersect_lines(
        _shift(prev, n1, t), _shift(curr, n1, t),
        _shift(curr, n2, t), _shift(nxt, n2, t),
    )


def offset_ortho_loop(loop: Loop, thickness: float) -> Loop:
    """Offset a clockwise orthogonal loop outward.

    Each edge's line is moved by ``thickness`` along its outward normal
    ``(dy, -dx)`` and every outer vertex is the intersection of the two
    adjacent offset lines. Collinear neighbours (a straight-through vertex)
    have no intersection; the vertex is then pushed along its
    edge normal.

    Args:
        loop: Clockwise inner loop.
        thickness: Wall thickness in millimetres. Zero returns the input.

    Returns:
        The outer loop, with the same vertex count as ``loop``.
    """
    n = len(loop)
    if n < 3:
        return tuple(loop)

    out = []
    for i in range(n):
        out.append(_offset_corner(loop[(i - 1 + n) % n], loop[i], loop[(i + 1) % n], thickness))
    return tuple(out)


def wall_ring(loop: Loop, thickness: float) -> Tuple[Loop, Loop]:
    """Outer and inner loops of the wall cross-section (the inner is the hole)."""
    return offset_ortho_loop(loop, thickness), tuple(loop)
