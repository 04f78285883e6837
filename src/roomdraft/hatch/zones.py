"""Hatch zone geometry, hit testing and fill resolution.

Zones are derived from the room on every call and identified by stable
string ids (``plan:floor``, ``plan:wall``, ``north:wall-left``,
``north:face:0``...). Hatch assignments in ``Room.hatches`` are keyed by
these ids.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from .. import config
from ..core.model import ElevationView, HatchAssignment, Loop, Point, Room, ViewKind
from ..geom.elevation import elevation_frame, find_elevation_returns
from ..geom.offset import offset_ortho_loop
from ..geom.polygon import point_in_polygon, rect
from .patterns import DEFAULT_WALL_HATCH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HatchZone:
    """A fillable region of one view.

    Attributes:
        id: Derived zone identifier.
        label: Human-readable name.
        outer: Outer boundary.
        holes: Boundaries excluded from the zone.
        is_wall: Wall cross-section zones carry a fixed fill.
    """

    id: str
    label: str
    outer: Loop
    holes: Tuple[Loop, ...] = field(default_factory=tuple)
    is_wall: bool = False


@dataclass(frozen=True)
class HatchFill:
    """Hatch fill descriptor handed to the renderer."""

    zone_id: str
    outer: Loop
    holes: Tuple[Loop, ...]
    config: HatchAssignment

    kind = "hatch-fill"


def _plan_zones(room: Room) -> List[HatchZone]:
    inner = room.inner_loop
    outer = offset_ortho_loop(inner, room.wall_thickness)
    return [
        HatchZone(id="plan:floor", label="Floor", outer=inner),
        HatchZone(id="plan:wall", label="Wall section", outer=outer, holes=(inner,), is_wall=True),
    ]


def _elevation_zones(view: ElevationView, room: Room) -> List[HatchZone]:
    th = room.wall_thickness
    h = room.wall_height
    origin_h, total_len = elevation_frame(room.inner_loop, view)

    zones = [
        HatchZone(id=f"{view}:wall-left", label="Left section", outer=tuple(rect(-th, 0, 0, h)), is_wall=True),
        HatchZone(
            id=f"{view}:wall-right",
            label="Right section",
            outer=tuple(rect(total_len, 0, total_len + th, h)),
            is_wall=True,
        ),
    ]

    dividers = [0.0, *find_elevation_returns(room.inner_loop, view, origin_h, total_len), total_len]
    for i in range(len(dividers) - 1):
        x0, x1 = dividers[i], dividers[i + 1]
        if x1 - x0 < config.MIN_SECTION_MM:
            continue
        zones.append(HatchZone(id=f"{view}:face:{i}", label=f"Face {i + 1}", outer=tuple(rect(x0, 0, x1, h))))
    return zones


def get_hatch_zones(view: ViewKind, room: Room) -> List[HatchZone]:
    """Fillable zones of a view, in hit-test order."""
    if view == "plan":
        return _plan_zones(room)
    return _elevation_zones(view, room)


def hit_test_zone(world_pt: Point, zones: Sequence[HatchZone]) -> Optional[HatchZone]:
    """First zone containing ``world_pt`` outside all of its holes."""
    for zone in zones:
        if not point_in_polygon(world_pt, zone.outer):
            continue
        if any(point_in_polygon(world_pt, hole) for hole in zone.holes):
            continue
        return zone
    return None


def default_wall_hatch(room: Room) -> HatchAssignment:
    if room.wall_config is not None and room.wall_config.wall_hatch is not None:
        return room.wall_config.wall_hatch
    return DEFAULT_WALL_HATCH


def resolve_fill(
    zone: HatchZone,
    room: Room,
    preview_zone_id: Optional[str] = None,
    preview_config: Optional[HatchAssignment] = None,
) -> Optional[HatchAssignment]:
    """Fill of a zone, by priority.

    A hover preview wins (opacity capped at ``PREVIEW_MAX_OPACITY``), then
    the fixed wall fill for wall zones, then the user's assignment (pattern
    ``"none"`` suppresses), otherwise no fill.
    """
    if preview_zone_id == zone.id and preview_config is not None:
        return replace(preview_config, opacity=min(preview_config.opacity, config.PREVIEW_MAX_OPACITY))
    if zone.is_wall:
        return default_wall_hatch(room)
    assigned = room.hatches.get(zone.id)
    if assigned is None or assigned.pattern_id == "none":
        return None
    return assigned


def build_hatch_fills(
    view: ViewKind,
    room: Room,
    preview_zone_id: Optional[str] = None,
    preview_config: Optional[HatchAssignment] = None,
) -> List[HatchFill]:
    fills = []
    for zone in get_hatch_zones(view, room):
        fill = resolve_fill(zone, room, preview_zone_id, preview_config)
        if fill is None:
            continue
        fills.append(HatchFill(zone_id=zone.id, outer=zone.outer, holes=zone.holes, config=fill))
    return fills


def assign_hatch(room: Room, view: ViewKind, zone_id: str, assignment: Optional[HatchAssignment]) -> Room:
    """Assign (or clear with ``None``) the hatch of a zone.

    Wall zones and ids not derived from the current room are left untouched.
    """
    zone = next((z for z in get_hatch_zones(view, room) if z.id == zone_id), None)
    if zone is None:
        logger.debug("Unknown hatch zone %s in %s view", zone_id, view)
        return room
    if zone.is_wall:
        logger.debug("Hatch zone %s has a fixed fill", zone_id)
        return room

    hatches = dict(room.hatches)
    if assignment is None:
        if zone_id not in hatches:
            return room
        del hatches[zone_id]
    else:
        hatches[zone_id] = assignment
    return replace(room, hatches=hatches)
