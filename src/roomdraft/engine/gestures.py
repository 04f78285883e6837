"""Pointer gesture state machine.

``Idle -> Dragging(start, target, origin) -> Committed | Cancelled``

While dragging, every pointer move recomputes the room from the snapshot
captured at press time plus the current pointer position, then previews
it. Releasing commits ``(start, present)`` as exactly one history entry;
cancelling restores the snapshot without touching the undo stacks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .. import config
from ..core.model import Point, Room, ViewKind, WallOpening
from ..core.validators import is_simple_loop
from ..entities.openings import (
    drag_sill,
    hit_test_openings,
    hit_test_openings_elevation,
    move_opening_to,
    profile_for,
    with_opening,
)
from ..geom.ortho_edit import apply_segment_offset, insert_vertex_on_segment
from ..geom.segments import hit_test_segment, is_horizontal, room_seg_endpoints
from .history import RoomStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WallSegmentTarget:
    seg_index: int
    horizontal: bool


@dataclass(frozen=True)
class OpeningPlanTarget:
    entity_id: str
    snap_tolerance_mm: float


@dataclass(frozen=True)
class OpeningSillTarget:
    entity_id: str


DragTarget = Union[WallSegmentTarget, OpeningPlanTarget, OpeningSillTarget]


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    """An in-flight drag.

    Attributes:
        start: Room snapshot captured at press time.
        target: What is being dragged.
        origin: Pointer position at press time (world mm).
    """

    start: Room
    target: DragTarget
    origin: Point


@dataclass(frozen=True)
class Committed:
    before: Room
    after: Room


@dataclass(frozen=True)
class Cancelled:
    start: Room


GestureState = Union[Idle, Dragging, Committed, Cancelled]


def tolerance_from_scale(scale: float, px: float = config.HIT_TOLERANCE_PX) -> float:
    """Convert a screen-pixel tolerance to millimetres at a viewport scale (px per mm)."""
    return px / scale


DEFAULT_TOLERANCE_MM = tolerance_from_scale(1.0)


def drag_geometry(start: Room, target: DragTarget, origin: Point, point: Point) -> Optional[Room]:
    """Room for a drag from ``origin`` to ``point``, computed from ``start`` only.

    Returns:
        The dragged room, or None when the pointer position yields no valid
        placement (the previous preview should then stay on screen).

    Raises:
        TypeError: If ``target`` is not a known drag target.
    """
    if isinstance(target, WallSegmentTarget):
        delta = point.y - origin.y if target.horizontal else point.x - origin.x
        return apply_segment_offset(start, target.seg_index, delta)

    if isinstance(target, (OpeningPlanTarget, OpeningSillTarget)):
        opening = start.entities.get(target.entity_id)
        if not isinstance(opening, WallOpening):
            return None
        if isinstance(target, OpeningPlanTarget):
            moved = move_opening_to(start, opening, point, target.snap_tolerance_mm)
        else:
            moved = drag_sill(start, opening, point.y)
        if moved is None:
            return None
        return with_opening(start, moved)

    raise TypeError(f"Unknown drag target: {type(target).__name__}")


class GestureController:
    """Turns pointer events into previews and committed history steps.

    Args:
        store: The store whose history receives previews and commits.
    """

    def __init__(self, store: RoomStore):
        self.store = store
        self.state: GestureState = Idle()

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    def press(
        self,
        view: ViewKind,
        point: Point,
        tolerance_mm: float = DEFAULT_TOLERANCE_MM,
        shift: bool = False,
    ) -> GestureState:
        """Start a gesture at ``point``.

        In plan view, shift on a wall inserts a vertex (one committed step),
        an opening under the pointer starts an opening drag and a wall
        starts a wall drag. In an elevation, a window starts a sill drag.
        A press while a drag is in flight is ignored; that drag must be
        released or cancelled first.
        """
        if self.is_dragging:
            logger.debug("Ignoring press during an active drag")
            return self.state

        room = self.store.room

        if view == "plan":
            seg_hit = hit_test_segment(room, point, tolerance_mm)
            if shift:
                if seg_hit is None:
                    return self.state
                after = insert_vertex_on_segment(room, seg_hit.seg_index, seg_hit.point)
                self.store.commit_snapshot(room, after)
                self.state = Committed(before=room, after=after)
                return self.state

            opening_id = hit_test_openings(room, point, tolerance_mm)
            if opening_id is not None:
                target = OpeningPlanTarget(opening_id, tolerance_mm * config.SNAP_TOLERANCE_FACTOR)
                self.state = Dragging(start=room, target=target, origin=point)
                return self.state

            if seg_hit is not None:
                a, b = room_seg_endpoints(room, seg_hit.seg_index)
                target = WallSegmentTarget(seg_hit.seg_index, is_horizontal(a, b))
                self.state = Dragging(start=room, target=target, origin=point)
            return self.state

        opening_id = hit_test_openings_elevation(room, view, point, tolerance_mm)
        if opening_id is None:
            return self.state
        if not profile_for(room.entities[opening_id]).sill_draggable:
            logger.debug("Opening %s cannot be dragged vertically", opening_id)
            return self.state
        self.state = Dragging(start=room, target=OpeningSillTarget(opening_id), origin=point)
        return self.state

    def move(self, point: Point) -> GestureState:
        state = self.state
        if not isinstance(state, Dragging):
            return state
        after = drag_geometry(state.start, state.target, state.origin, point)
        if after is not None:
            self.store.preview(lambda _: after)
        return state

    def release(self) -> GestureState:
        state = self.state
        if not isinstance(state, Dragging):
            return state
        after = self.store.room
        self.store.commit_snapshot(state.start, after)
        if after is not state.start and not is_simple_loop(after):
            logger.warning("Room %s has a self-intersecting inner loop after the drag", after.id)
        self.state = Committed(before=state.start, after=after)
        return self.state

    def cancel(self) -> GestureState:
        state = self.state
        if not isinstance(state, Dragging):
            return state
        self.store.replace_room(state.start)
        self.state = Cancelled(start=state.start)
        return self.state
