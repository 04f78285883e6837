"""Scene derivation: the ordered primitive list of each view.

Plan:      hatch fills, wall ring, segment dimensions, opening symbols.
Elevation: hatch fills, face outline, return dividers, dimension chain,
           opening elevations, wall-height dimension.
"""

from __future__ import annotations

from typing import Optional

from .. import config
from ..core.model import ElevationView, HatchAssignment, Point, Room, ViewKind, WallOpening
from ..geom.elevation import elevation_dimension_chain, elevation_frame, find_elevation_returns
from ..geom.offset import offset_ortho_loop
from ..geom.segments import seg_endpoints, seg_length
from ..hatch.zones import build_hatch_fills
from .primitives import Dimension, DraftScene, Line, Polygon, Stroke
from .symbols import opening_elevation_symbol, opening_plan_symbol


def outline_stroke(room: Room) -> Stroke:
    width = config.DEFAULT_WALL_STROKE_MM
    if room.wall_config is not None and room.wall_config.stroke_width_mm is not None:
        width = room.wall_config.stroke_width_mm
    return Stroke(config.OUTLINE_COLOR, width)


def segment_label(room: Room, seg_index: int) -> str:
    """Override text of a segment, or its rounded length."""
    text = room.dim_text.get(seg_index)
    if text is not None:
        return text
    a, b = seg_endpoints(room.inner_loop, seg_index)
    return f"{round(seg_length(a, b))}"


def derive_plan_scene(
    room: Room,
    preview_zone_id: Optional[str] = None,
    preview_config: Optional[HatchAssignment] = None,
) -> DraftScene:
    scene = DraftScene()
    scene.primitives.extend(build_hatch_fills("plan", room, preview_zone_id, preview_config))

    inner = room.inner_loop
    stroke = outline_stroke(room)
    scene.primitives.append(
        Polygon(
            outer=offset_ortho_loop(inner, room.wall_thickness),
            holes=(inner,),
            stroke_outer=stroke,
            stroke_holes=stroke,
        )
    )

    for i in range(len(inner)):
        a, b = seg_endpoints(inner, i)
        scene.primitives.append(Dimension(seg_index=i, a=a, b=b, text=segment_label(room, i), side=config.DIM_SIDE))

    for entity in room.entities.values():
        if isinstance(entity, WallOpening):
            scene.primitives.extend(opening_plan_symbol(room, entity))
    return scene


def derive_elevation_scene(
    view: ElevationView,
    room: Room,
    preview_zone_id: Optional[str] = None,
    preview_config: Optional[HatchAssignment] = None,
) -> DraftScene:
    scene = DraftScene()
    scene.primitives.extend(build_hatch_fills(view, room, preview_zone_id, preview_config))

    h = room.wall_height
    origin_h, total_len = elevation_frame(room.inner_loop, view)
    face = (Point(0, 0), Point(total_len, 0), Point(total_len, h), Point(0, h))
    scene.primitives.append(Polygon(outer=face, stroke_outer=outline_stroke(room)))

    return_stroke = Stroke(config.RETURN_LINE_COLOR, 1.5)
    for pos in find_elevation_returns(room.inner_loop, view, origin_h, total_len):
        scene.primitives.append(Line(Point(pos, 0), Point(pos, h), return_stroke))

    for link in elevation_dimension_chain(room, view):
        scene.primitives.append(
            Dimension(
                seg_index=link.seg_index,
                a=Point(link.start_h, h),
                b=Point(link.end_h, h),
                text=link.text,
                side="out",
            )
        )

    for entity in room.entities.values():
        if isinstance(entity, WallOpening):
            scene.primitives.extend(opening_elevation_symbol(room, entity, view))

    scene.primitives.append(
        Dimension(
            seg_index=config.WALL_HEIGHT_DIM_SEG,
            a=Point(total_len, h),
            b=Point(total_len, 0),
            text=f"{round(h)}",
            side="out",
        )
    )
    return scene


def derive_scene(
    view: ViewKind,
    room: Room,
    preview_zone_id: Optional[str] = None,
    preview_config: Optional[HatchAssignment] = None,
) -> DraftScene:
    """Primitive list of ``view`` derived from ``room``.

    Args:
        view: ``"plan"`` or one of the four elevations.
        room: The room to project.
        preview_zone_id: Hatch zone currently hovered with a pattern.
        preview_config: Pattern being previewed on that zone.

    Returns:
        The ordered scene.
    """
    if view == "plan":
        return derive_plan_scene(room, preview_zone_id, preview_config)
    return derive_elevation_scene(view, room, preview_zone_id, preview_config)
