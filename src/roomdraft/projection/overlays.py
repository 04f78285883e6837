"""Auto-dimension overlays for opening placement and selection."""

from __future__ import annotations

from typing import List

from .. import config
from ..core.model import ElevationView, Point, Room, WallOpening
from ..entities.openings import edge_distances, effective_sill, elevation_rect, plan_rect, profile_for
from .primitives import Dimension, Fill, Polygon, Polyline, Primitive, Stroke

PREVIEW_FILL = Fill("rgba(59,130,246,0.12)")
PREVIEW_STROKE = Stroke("rgba(59,130,246,0.7)", 2.0, (15.0, 10.0))
PREVIEW_DIM_STROKE = Stroke("rgba(59,130,246,0.6)", 0.8, (8.0, 8.0))
SELECTION_DIM_STROKE = Stroke("rgba(0,0,0,0.7)", 1.0)
HIGHLIGHT_STROKE = Stroke("rgba(59,130,246,0.8)", 2.0)


def _opening_dim(seg_index: int, a: Point, b: Point, value: float, stroke: Stroke, side: str = "out") -> Dimension:
    return Dimension(
        seg_index=seg_index,
        a=a,
        b=b,
        text=f"{round(value)}",
        offset_mm=config.OPENING_DIM_OFFSET_MM,
        side=side,
        stroke=stroke,
        text_size_mm=config.OPENING_DIM_TEXT_SIZE_MM,
        arrow_size_mm=config.OPENING_DIM_ARROW_SIZE_MM,
    )


def _edge_dims(room: Room, opening: WallOpening, left_seg: int, right_seg: int, stroke: Stroke) -> List[Primitive]:
    dims = edge_distances(room, opening)
    prims: List[Primitive] = []
    if dims.left_dist > config.MIN_DIM_DISPLAY_MM:
        prims.append(_opening_dim(left_seg, dims.left_pt, dims.opening_left_pt, dims.left_dist, stroke))
    if dims.right_dist > config.MIN_DIM_DISPLAY_MM:
        prims.append(_opening_dim(right_seg, dims.opening_right_pt, dims.right_pt, dims.right_dist, stroke))
    return prims


def placement_preview(room: Room, opening: WallOpening) -> List[Primitive]:
    """Dashed candidate outline plus its clear distances to the wall ends."""
    prims: List[Primitive] = [
        Polygon(outer=plan_rect(room, opening).corners, fill=PREVIEW_FILL, stroke_outer=PREVIEW_STROKE)
    ]
    prims.extend(
        _edge_dims(room, opening, config.WALL_HEIGHT_DIM_SEG, config.WALL_HEIGHT_DIM_SEG, PREVIEW_DIM_STROKE)
    )
    return prims


def plan_selection(room: Room, opening: WallOpening) -> List[Primitive]:
    """Editable edge distances and a highlight for a selected opening."""
    profile = profile_for(opening)
    prims = _edge_dims(room, opening, profile.dim_left_seg, profile.dim_right_seg, SELECTION_DIM_STROKE)
    prims.append(Polyline(pts=plan_rect(room, opening).corners, stroke=HIGHLIGHT_STROKE, closed=True))
    return prims


def elevation_selection(room: Room, opening: WallOpening, view: ElevationView) -> List[Primitive]:
    """Editable sill/height dimensions and a highlight on an elevation."""
    r = elevation_rect(room, opening, view)
    if r is None:
        return []

    profile = profile_for(opening)
    h = room.wall_height
    prims: List[Primitive] = []

    sill = effective_sill(opening)
    if profile.dim_sill_seg is not None and sill > config.MIN_DIM_DISPLAY_MM:
        prims.append(_opening_dim(profile.dim_sill_seg, Point(r.x1, h), Point(r.x1, r.y1), sill, SELECTION_DIM_STROKE))

    if opening.height_mm > config.MIN_DIM_DISPLAY_MM:
        prims.append(
            _opening_dim(
                profile.dim_height_seg,
                Point(r.x0, r.y0),
                Point(r.x0, r.y1),
                opening.height_mm,
                SELECTION_DIM_STROKE,
                side="in",
            )
        )

    outline = (Point(r.x0, r.y0), Point(r.x1, r.y0), Point(r.x1, r.y1), Point(r.x0, r.y1))
    prims.append(Polyline(pts=outline, stroke=HIGHLIGHT_STROKE, closed=True))
    return prims
