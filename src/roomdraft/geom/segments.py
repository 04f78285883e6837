"""Wall segment helpers.

Segment ``i`` of a loop runs from vertex ``i`` to vertex ``(i + 1) % n``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from .. import config
from ..core.model import Loop, Point, Room

Axis = Literal["x", "y"]


@dataclass(frozen=True)
class SegmentHit:
    """Closest wall segment to a query point.

    Attributes:
        seg_index: Index of the hit segment.
        t: Parameter of the closest point along the segment, in [0, 1].
        dist_mm: Distance from the query point to the segment.
        point: Closest point on the segment.
    """

    seg_index: int
    t: float
    dist_mm: float
    point: Point


def seg_endpoints(loop: Loop, seg_index: int) -> Tuple[Point, Point]:
    n = len(loop)
    return loop[seg_index], loop[(seg_index + 1) % n]


def room_seg_endpoints(room: Room, seg_index: int) -> Tuple[Point, Point]:
    return seg_endpoints(room.inner_loop, seg_index)


def seg_length(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def seg_dir(a: Point, b: Point) -> Point:
    """Unit direction from ``a`` to ``b``; +X for a zero-length segment."""
    l = seg_length(a, b)
    if l < config.DIRECTION_EPSILON:
        return Point(1.0, 0.0)
    return Point((b.x - a.x) / l, (b.y - a.y) / l)


def outward_normal(direction: Point) -> Point:
    """Outward normal of a clockwise loop edge: (dy, -dx)."""
    return Point(direction.y, -direction.x)


def is_horizontal(a: Point, b: Point) -> bool:
    """Orientation test used by the loop editor (ties count as horizontal)."""
    return abs(a.y - b.y) <= abs(a.x - b.x)


def seg_line_coord(loop: Loop, seg_index: int) -> Tuple[Axis, float]:
    """Axis and coordinate of the wall line a segment lies on.

    A horizontal segment lies on a ``y`` line, a vertical one on an ``x`` line.
    """
    a, b = seg_endpoints(loop, seg_index)
    if abs(b.x - a.x) >= abs(b.y - a.y):
        return "y", (a.y + b.y) * 0.5
    return "x", (a.x + b.x) * 0.5


def closest_point_on_segment(p: Point, a: Point, b: Point) -> Tuple[float, Point]:
    """Project ``p`` onto segment ``ab``, clamped to the segment.

    Returns:
        ``(t, point)``. A degenerate segment yields ``(0.0, a)``.
    """
    abx = b.x - a.x
    aby = b.y - a.y
    ab_len2 = abx * abx + aby * aby
    if ab_len2 < config.DIRECTION_EPSILON:
        return 0.0, a

    t = ((p.x - a.x) * abx + (p.y - a.y) * aby) / ab_len2
    t = max(0.0, min(1.0, t))
    return t, Point(a.x + t * abx, a.y + t * aby)


def hit_test_segment(room: Room, p: Point, tolerance_mm: float) -> Optional[SegmentHit]:
    """Find the inner loop segment closest to ``p`` within tolerance.

    Args:
        room: The room whose inner loop is searched.
        p: Query point in world space.
        tolerance_mm: Maximum accepted distance.

    Returns:
        The closest segment hit, or None if no segment is close enough.
    """
    loop = room.inner_loop
    n = len(loop)
    if n < 2:
        return None

    best: Optional[SegmentHit] = None
    for i in range(n):
        a, b = seg_endpoints(loop, i)
        t, cp = closest_point_on_segment(p, a, b)
        d = math.hypot(p.x - cp.x, p.y - cp.y)
        if d <= tolerance_mm and (best is None or d < best.dist_mm):
            best = SegmentHit(seg_index=i, t=t, dist_mm=d, point=cp)
    return best


def clamp_opening_t(t: float, width_mm: float, seg_len: float) -> Optional[float]:
    """Clamp ``t`` so a centred span of ``width_mm`` stays on the segment.

    Returns:
        The clamped parameter, or None unless the span fits strictly inside
        the segment (an opening exactly as wide as its wall has no valid t).
    """
    if seg_len < config.DIRECTION_EPSILON:
        return None
    half = width_mm / 2 / seg_len
    min_t = half
    max_t = 1 - half
    if max_t <= min_t:
        return None
    return max(min_t, min(max_t, t))
