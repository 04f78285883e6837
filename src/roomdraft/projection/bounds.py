"""World-space extents of each view, used to fit the viewport."""

from __future__ import annotations

from .. import config
from ..core.model import Bounds, Room, ViewKind, inner_bounds
from ..geom.elevation import elevation_frame


def world_bounds(view: ViewKind, room: Room) -> Bounds:
    th = room.wall_thickness
    if view == "plan":
        b = inner_bounds(room.inner_loop)
        pad = th + config.PLAN_MARGIN_MM
        return Bounds(b.min_x - pad, b.min_y - pad, b.max_x + pad, b.max_y + pad)

    _, total_len = elevation_frame(room.inner_loop, view)
    margin = config.ELEVATION_MARGIN_MM
    return Bounds(-th - margin, -margin, total_len + th + margin, room.wall_height + margin)
