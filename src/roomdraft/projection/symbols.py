"""Door and window symbols for plan and elevation views."""

from __future__ import annotations

import math
from typing import List, Tuple

from .. import config
from ..core.model import ElevationView, Point, Room, WallOpening
from ..entities.openings import elevation_rect, plan_rect
from ..geom.vec2 import add, dot, midpoint, perp, scale
from .primitives import Fill, Line, Polygon, Polyline, Primitive, Stroke

BLACK = "rgb(0, 0, 0)"
WHITE = "rgb(255, 255, 255)"

FRAME_STROKE = Stroke(BLACK, 5.0)
WHITE_FILL = Fill(WHITE)
WINDOW_RECT_STROKE = Stroke(WHITE, 1.0)
DOOR_RECT_STROKE = Stroke(WHITE, 5.0)
THIN_STROKE = Stroke(BLACK, 1.0)
GLASS_STROKE = Stroke(BLACK, 3.0)
SLIDING_STROKE = Stroke("rgba(0,0,0,0.5)", 1.0, (20.0, 20.0))
SLIDING_ARROW_STROKE = Stroke("rgba(0,0,0,0.5)", 2.0)
POCKET_STROKE = Stroke("rgba(0,0,0,0.4)", 1.0, (15.0, 10.0))
POCKET_ARROW_STROKE = Stroke("rgba(0,0,0,0.6)", 2.0)
SWING_STROKE = Stroke("rgb(182, 182, 182)", 1.0, (30.0, 30.0))

Frame = Tuple[Point, Point, Point, Point, Point, Point]


def _local_frame(room: Room, opening: WallOpening) -> Frame:
    """Corners ordered in the wall's (along, across) frame.

    Returns:
        ``(c0, c1, c2, c3, t, n)`` where c0/c1 are the inner-left and
        inner-right corners, c2/c3 the outer-right and outer-left ones,
        ``t`` the wall tangent and ``n`` the outward normal.
    """
    r = plan_rect(room, opening)
    n = r.normal
    t = perp(n)
    proj = [(p, dot(p, t), dot(p, n)) for p in r.corners]
    s_min = min(q[1] for q in proj)
    s_max = max(q[1] for q in proj)
    u_min = min(q[2] for q in proj)
    u_max = max(q[2] for q in proj)

    def near(s: float, u: float) -> Point:
        return min(proj, key=lambda q: (q[1] - s) ** 2 + (q[2] - u) ** 2)[0]

    return near(s_min, u_min), near(s_max, u_min), near(s_max, u_max), near(s_min, u_max), t, n


def arc_points(center: Point, radius: float, start: float, end: float) -> Tuple[Point, ...]:
    steps = config.ARC_SEGMENTS
    pts = []
    for i in range(steps + 1):
        a = start + (end - start) * (i / steps)
        pts.append(Point(center.x + radius * math.cos(a), center.y + radius * math.sin(a)))
    return tuple(pts)


def _angle(v: Point) -> float:
    return math.atan2(v.y, v.x)


def _neg(v: Point) -> Point:
    return Point(-v.x, -v.y)


def _frame_prims(c0: Point, c1: Point, c2: Point, c3: Point, rect_stroke: Stroke) -> List[Primitive]:
    return [
        Polygon(outer=(c0, c1, c2, c3), fill=WHITE_FILL, stroke_outer=rect_stroke),
        Line(c0, c3, FRAME_STROKE),
        Line(c1, c2, FRAME_STROKE),
    ]


def window_plan_symbol(room: Room, opening: WallOpening) -> List[Primitive]:
    c0, c1, c2, c3, _, n = _local_frame(room, opening)
    prims = _frame_prims(c0, c1, c2, c3, WINDOW_RECT_STROKE)

    style = opening.window_style or "single-leaf"
    mid_in = midpoint(c0, c1)
    mid_out = midpoint(c3, c2)
    if style == "double-leaf":
        prims.append(Line(mid_in, mid_out, FRAME_STROKE))
    elif style == "fixed":
        prims.append(Line(c0, c2, THIN_STROKE))
        prims.append(Line(c1, c3, THIN_STROKE))
    elif style == "sliding":
        prims.append(Line(mid_in, mid_out, SLIDING_STROKE))

    for frac in (0.4, 0.6):
        off = scale(n, room.wall_thickness * frac)
        prims.append(Line(add(c0, off), add(c1, off), GLASS_STROKE))
    return prims


def _swing(hinge: Point, radius: float, start: float, end: float, panel_at_end: bool) -> List[Primitive]:
    arc = arc_points(hinge, radius, start, end)
    panel_tip = arc[-1] if panel_at_end else arc[0]
    return [Polyline(pts=arc, stroke=SWING_STROKE), Line(hinge, panel_tip, SWING_STROKE)]


def door_plan_symbol(room: Room, opening: WallOpening) -> List[Primitive]:
    c0, c1, c2, c3, t, n = _local_frame(room, opening)
    prims = _frame_prims(c0, c1, c2, c3, DOOR_RECT_STROKE)

    style = opening.door_style or "single-leaf"
    leaf = opening.door_leaf_side or "left"
    outside = (opening.door_swing_direction or "inside") == "outside"
    w = opening.width_mm
    mid_in = midpoint(c0, c1)
    mid_out = midpoint(c3, c2)

    if style == "single-leaf":
        if leaf == "left":
            hinge = c3 if outside else c0
            t_angle = _angle(t)
        else:
            hinge = c2 if outside else c1
            t_angle = _angle(_neg(t))
        n_angle = _angle(n) if outside else _angle(_neg(n))
        prims.extend(_swing(hinge, w, n_angle, t_angle, panel_at_end=False))
    elif style == "double-leaf":
        left_hinge, right_hinge = (c3, c2) if outside else (c0, c1)
        n_angle = _angle(n) if outside else _angle(_neg(n))
        prims.extend(_swing(left_hinge, w / 2, n_angle, _angle(t), panel_at_end=True))
        prims.extend(_swing(right_hinge, w / 2, n_angle, _angle(_neg(t)), panel_at_end=True))
        prims.append(Line(mid_in, mid_out, FRAME_STROKE))
    elif style == "sliding":
        prims.append(Line(mid_in, mid_out, SLIDING_STROKE))
        prims.append(Line(c1, add(c1, scale(t, w * 0.15)), SLIDING_ARROW_STROKE))
    elif style == "pocket":
        prims.append(Line(mid_in, mid_out, POCKET_STROKE))
        centre = Point((c0.x + c1.x + c2.x + c3.x) / 4, (c0.y + c1.y + c2.y + c3.y) / 4)
        prims.append(Line(centre, add(centre, scale(t, w * 0.25)), POCKET_ARROW_STROKE))
    return prims


def opening_plan_symbol(room: Room, opening: WallOpening) -> List[Primitive]:
    if opening.opening_type == "window":
        return window_plan_symbol(room, opening)
    if opening.opening_type == "door":
        return door_plan_symbol(room, opening)
    raise TypeError(f"Unknown opening type: {opening.opening_type}")


def opening_elevation_symbol(room: Room, opening: WallOpening, view: ElevationView) -> List[Primitive]:
    """Filled rectangle plus style marks; empty if the wall does not face ``view``."""
    r = elevation_rect(room, opening, view)
    if r is None:
        return []

    outer = (Point(r.x0, r.y0), Point(r.x1, r.y0), Point(r.x1, r.y1), Point(r.x0, r.y1))
    prims: List[Primitive] = [Polygon(outer=outer, fill=WHITE_FILL, stroke_outer=FRAME_STROKE)]

    mid_x = (r.x0 + r.x1) / 2
    mullion = (Point(mid_x, r.y0), Point(mid_x, r.y1))
    style = opening.window_style if opening.opening_type == "window" else opening.door_style
    style = style or "single-leaf"

    if style == "double-leaf":
        prims.append(Line(*mullion, FRAME_STROKE))
    elif style == "sliding":
        prims.append(Line(*mullion, SLIDING_STROKE))
    elif style == "fixed":
        prims.append(Line(outer[0], outer[2], THIN_STROKE))
        prims.append(Line(outer[1], outer[3], THIN_STROKE))
    return prims
