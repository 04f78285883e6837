"""Opening placement and snap engine.

Doors and windows share one algorithm family: they are attached to a wall
segment by ``(wall_seg_index, t)`` with ``t`` at the opening's centre, and
their half-width envelope must stay on the segment. They differ only in
their defaults (see ``PROFILES``): doors sit on the floor and cannot be
dragged vertically, windows carry a sill height.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, replace
from typing import Dict, Literal, Optional, Tuple

from .. import config
from ..core.model import (
    ElevationView,
    OpeningType,
    Point,
    Room,
    WallAttachment,
    WallOpening,
)
from ..geom.elevation import segment_elevation_span
from ..geom.polygon import point_in_quad
from ..geom.segments import clamp_opening_t, outward_normal, room_seg_endpoints, seg_dir, seg_length

logger = logging.getLogger(__name__)

Side = Literal["left", "right"]


@dataclass(frozen=True)
class OpeningProfile:
    """Per-type defaults for a wall opening."""

    opening_type: OpeningType
    width_mm: float
    height_mm: float
    sill_height_mm: float
    sill_draggable: bool
    dim_left_seg: int
    dim_right_seg: int
    dim_height_seg: int
    dim_sill_seg: Optional[int] = None


PROFILES: Dict[str, OpeningProfile] = {
    "door": OpeningProfile(
        opening_type="door",
        width_mm=config.DOOR_WIDTH_MM,
        height_mm=config.DOOR_HEIGHT_MM,
        sill_height_mm=0.0,
        sill_draggable=False,
        dim_left_seg=config.DOOR_DIM_LEFT_SEG,
        dim_right_seg=config.DOOR_DIM_RIGHT_SEG,
        dim_height_seg=config.DOOR_DIM_ELEV_HEIGHT_SEG,
    ),
    "window": OpeningProfile(
        opening_type="window",
        width_mm=config.WINDOW_WIDTH_MM,
        height_mm=config.WINDOW_HEIGHT_MM,
        sill_height_mm=config.WINDOW_SILL_MM,
        sill_draggable=True,
        dim_left_seg=config.WINDOW_DIM_LEFT_SEG,
        dim_right_seg=config.WINDOW_DIM_RIGHT_SEG,
        dim_height_seg=config.WINDOW_DIM_ELEV_HEIGHT_SEG,
        dim_sill_seg=config.WINDOW_DIM_ELEV_SILL_SEG,
    ),
}


@dataclass(frozen=True)
class SnapResult:
    """Valid placement of an opening centre on a wall segment."""

    wall_seg_index: int
    t: float
    point: Point


@dataclass(frozen=True)
class PlanRect:
    """Plan footprint of an opening.

    ``corners`` are ordered inner-left, inner-right, outer-right, outer-left
    relative to the segment direction.
    """

    corners: Tuple[Point, Point, Point, Point]
    center: Point
    direction: Point
    normal: Point


@dataclass(frozen=True)
class ElevationRect:
    """Elevation footprint; ``y`` grows from the ceiling (0) to the floor (H)."""

    x0: float
    y0: float
    x1: float
    y1: float

    def contains(self, p: Point, tol: float = 0.0) -> bool:
        return (
            self.x0 - tol <= p.x <= self.x1 + tol
            and self.y0 - tol <= p.y <= self.y1 + tol
        )


@dataclass(frozen=True)
class EdgeDistances:
    """Clear distances from each wall end to the nearest opening edge."""

    left_dist: float
    right_dist: float
    left_pt: Point
    right_pt: Point
    opening_left_pt: Point
    opening_right_pt: Point


def profile_for(opening: WallOpening) -> OpeningProfile:
    try:
        return PROFILES[opening.opening_type]
    except KeyError:
        raise TypeError(f"Unknown opening type: {opening.opening_type}") from None


def effective_sill(opening: WallOpening) -> float:
    """Stored sill height, or the type's default when unset."""
    if opening.sill_height_mm is not None:
        return opening.sill_height_mm
    return profile_for(opening).sill_height_mm


def snap_to_wall(room: Room, world_pt: Point, width_mm: float, tolerance_mm: float) -> Optional[SnapResult]:
    """Snap a world point to the closest valid opening position.

    Every segment is scanned: the point is projected onto the segment, the
    parameter is clamped so the half-width envelope stays inside [0, 1],
    and the closest segment within ``tolerance_mm`` wins. Segments shorter
    than 1mm or narrower than the opening are skipped.

    Args:
        room: The room to snap against.
        world_pt: Candidate point in world space.
        width_mm: Width of the opening being placed.
        tolerance_mm: Maximum accepted distance from the wall.

    Returns:
        The snap result, or None if no segment qualifies.
    """
    loop = room.inner_loop
    n = len(loop)
    best: Optional[SnapResult] = None
    best_dist = math.inf

    for i in range(n):
        a, b = loop[i], loop[(i + 1) % n]
        abx = b.x - a.x
        aby = b.y - a.y
        ab_len2 = abx * abx + aby * aby
        if ab_len2 < config.MIN_SEGMENT_LENGTH_SQ:
            continue

        raw_t = ((world_pt.x - a.x) * abx + (world_pt.y - a.y) * aby) / ab_len2
        t = clamp_opening_t(raw_t, width_mm, math.sqrt(ab_len2))
        if t is None:
            continue

        p = Point(a.x + t * abx, a.y + t * aby)
        dist = math.hypot(world_pt.x - p.x, world_pt.y - p.y)
        if dist <= tolerance_mm and dist < best_dist:
            best = SnapResult(wall_seg_index=i, t=t, point=p)
            best_dist = dist

    if best is None:
        logger.debug("No wall accepts a %.0fmm opening near (%.1f, %.1f)", width_mm, world_pt.x, world_pt.y)
    return best


def plan_rect(room: Room, opening: WallOpening) -> PlanRect:
    """Rectangle spanning the opening width along the wall and the wall
    thickness along the outward normal."""
    a, b = room_seg_endpoints(room, opening.attach.wall_seg_index)
    d = seg_dir(a, b)
    n = outward_normal(d)
    t = opening.attach.t
    hw = opening.width_mm / 2
    th = room.wall_thickness

    cx = a.x + t * (b.x - a.x)
    cy = a.y + t * (b.y - a.y)

    corners = (
        Point(cx - d.x * hw, cy - d.y * hw),
        Point(cx + d.x * hw, cy + d.y * hw),
        Point(cx + d.x * hw + n.x * th, cy + d.y * hw + n.y * th),
        Point(cx - d.x * hw + n.x * th, cy - d.y * hw + n.y * th),
    )
    return PlanRect(corners=corners, center=Point(cx, cy), direction=d, normal=n)


def elevation_rect(room: Room, opening: WallOpening, view: ElevationView) -> Optional[ElevationRect]:
    """Opening rectangle on an elevation, or None if its wall does not face it."""
    span = segment_elevation_span(room, opening.attach.wall_seg_index, view)
    if span is None:
        return None

    start_h, seg_len = span
    center_h = start_h + opening.attach.t * seg_len
    hw = opening.width_mm / 2
    sill = effective_sill(opening)
    h = room.wall_height

    return ElevationRect(
        x0=center_h - hw,
        y0=h - sill - opening.height_mm,
        x1=center_h + hw,
        y1=h - sill,
    )


def edge_distances(room: Room, opening: WallOpening) -> EdgeDistances:
    a, b = room_seg_endpoints(room, opening.attach.wall_seg_index)
    s_len = seg_length(a, b)
    hw = opening.width_mm / 2
    center = opening.attach.t * s_len
    d = seg_dir(a, b)

    return EdgeDistances(
        left_dist=max(0.0, center - hw),
        right_dist=max(0.0, s_len - center - hw),
        left_pt=a,
        right_pt=b,
        opening_left_pt=Point(a.x + d.x * (center - hw), a.y + d.y * (center - hw)),
        opening_right_pt=Point(a.x + d.x * (center + hw), a.y + d.y * (center + hw)),
    )


def reposition_by_dim(room: Room, opening: WallOpening, side: Side, new_dist_mm: float) -> WallOpening:
    """Move an opening so its clear distance to one wall end is ``new_dist_mm``.

    The centre is clamped so the opening stays on its segment; a zero-length
    segment parks the opening at ``t = 0.5``.
    """
    a, b = room_seg_endpoints(room, opening.attach.wall_seg_index)
    s_len = seg_length(a, b)
    hw = opening.width_mm / 2

    if side == "left":
        center = new_dist_mm + hw
    else:
        center = s_len - new_dist_mm - hw
    center = max(hw, min(s_len - hw, center))

    t = center / s_len if s_len > 0 else 0.5
    return replace(opening, attach=replace(opening.attach, t=t))


def drag_sill(room: Room, opening: WallOpening, world_y: float) -> WallOpening:
    """Sill height for a pointer at elevation ``world_y`` (ceiling at 0).

    Clamped to ``[0, H - height]`` and rounded to ``SILL_ROUNDING_MM``.
    Openings whose profile does not allow sill dragging are returned as is.
    """
    if not profile_for(opening).sill_draggable:
        return opening
    h = room.wall_height
    sill = max(0.0, min(h - opening.height_mm, h - world_y))
    step = config.SILL_ROUNDING_MM
    sill = round(sill / step) * step
    return replace(opening, sill_height_mm=sill)


def _openings(room: Room, opening_type: Optional[OpeningType]):
    for entity in room.entities.values():
        if not isinstance(entity, WallOpening):
            continue
        if opening_type is not None and entity.opening_type != opening_type:
            continue
        yield entity


def hit_test_openings(
    room: Room,
    world_pt: Point,
    tolerance_mm: float,
    opening_type: Optional[OpeningType] = None,
) -> Optional[str]:
    """ID of the first opening whose grown plan quad contains ``world_pt``."""
    for opening in _openings(room, opening_type):
        if point_in_quad(world_pt, plan_rect(room, opening).corners, tolerance_mm):
            return opening.id
    return None


def hit_test_openings_elevation(
    room: Room,
    view: ElevationView,
    world_pt: Point,
    tolerance_mm: float,
    opening_type: Optional[OpeningType] = None,
) -> Optional[str]:
    """ID of the first opening whose elevation rectangle contains ``world_pt``."""
    for opening in _openings(room, opening_type):
        r = elevation_rect(room, opening, view)
        if r is not None and r.contains(world_pt, tolerance_mm):
            return opening.id
    return None


def new_opening_id(opening_type: OpeningType) -> str:
    return f"{opening_type}-{uuid.uuid4().hex[:8]}"


def new_opening(
    opening_type: OpeningType,
    attach: WallAttachment,
    width_mm: Optional[float] = None,
    height_mm: Optional[float] = None,
    sill_height_mm: Optional[float] = None,
    **style,
) -> WallOpening:
    """Build an opening with the type's defaults filled in.

    Args:
        opening_type: ``"door"`` or ``"window"``.
        attach: Where the opening sits.
        width_mm: Width; defaults to the profile's width.
        height_mm: Height; defaults to the profile's height.
        sill_height_mm: Sill; doors are always placed on the floor.
        **style: Style tags (``window_style``, ``door_style``,
            ``door_leaf_side``, ``door_swing_direction``).

    Raises:
        TypeError: If ``opening_type`` is not a known opening type.
    """
    if opening_type not in PROFILES:
        raise TypeError(f"Unknown opening type: {opening_type}")
    profile = PROFILES[opening_type]
    if not profile.sill_draggable or sill_height_mm is None:
        sill_height_mm = profile.sill_height_mm
    return WallOpening(
        id=new_opening_id(opening_type),
        attach=attach,
        opening_type=opening_type,
        width_mm=width_mm if width_mm is not None else profile.width_mm,
        height_mm=height_mm if height_mm is not None else profile.height_mm,
        sill_height_mm=sill_height_mm,
        **style,
    )


def place_opening(
    room: Room,
    world_pt: Point,
    opening_type: OpeningType,
    tolerance_mm: float,
    **params,
) -> Optional[WallOpening]:
    """Snap a new opening onto the nearest wall.

    Returns:
        The new (not yet added) opening, or None when no wall accepts it.
    """
    width = params.get("width_mm")
    if width is None:
        width = PROFILES[opening_type].width_mm
        params["width_mm"] = width
    snap = snap_to_wall(room, world_pt, width, tolerance_mm)
    if snap is None:
        return None
    return new_opening(opening_type, WallAttachment(wall_seg_index=snap.wall_seg_index, t=snap.t), **params)


def with_opening(room: Room, opening: WallOpening) -> Room:
    """Room with ``opening`` added or replaced under its id."""
    entities = dict(room.entities)
    entities[opening.id] = opening
    return replace(room, entities=entities)


def move_opening_to(room: Room, opening: WallOpening, world_pt: Point, tolerance_mm: float) -> Optional[WallOpening]:
    """Re-snap an existing opening to a new point; None if no wall accepts it."""
    snap = snap_to_wall(room, world_pt, opening.width_mm, tolerance_mm)
    if snap is None:
        return None
    return replace(opening, attach=WallAttachment(wall_seg_index=snap.wall_seg_index, t=snap.t))
