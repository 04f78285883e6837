"""Named operations on rooms.

Each operation validates its parameters in ``precheck`` and builds an
undoable ``Command`` against the room it is given. Operations are
registered by name so that edits can be described as plain dicts, for
example ``{"op": "set_segment_length", "seg_index": 0, "length": 3000}``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional, Protocol, Tuple

from .. import config
from ..core.model import OPENING_TYPES, VIEW_KINDS, Point, Room, WallOpening
from ..core.validators import InvalidRoom
from ..entities.openings import move_opening_to, place_opening, reposition_by_dim, with_opening
from ..hatch.patterns import default_config_for
from ..io.parser import hatch_from_dict
from .commands import (
    Command,
    add_entity_command,
    assign_hatch_command,
    dimension_edit_command,
    edit_dimension_text_command,
    insert_vertex_command,
    move_wall_line_command,
    offset_segment_command,
    remove_entity_command,
    set_segment_length_command,
    set_wall_height_command,
    update_entity_command,
)
from .gestures import DEFAULT_TOLERANCE_MM

SNAP_TOLERANCE_MM = DEFAULT_TOLERANCE_MM * config.SNAP_TOLERANCE_FACTOR


class Operation(Protocol):
    """Protocol for room operations.

    All operations must implement this interface to be compatible
    with the operation registry and the api entry points.
    """

    def precheck(self, room: Room, **kwargs: Any) -> bool:
        """Validate that the operation can be built for the room.

        Raises:
            ValueError: If a parameter is missing or names nothing in the room.
        """
        ...

    def command(self, room: Room, **kwargs: Any) -> Command:
        """Build the undoable command for the room."""
        ...


class _RoomOp:
    """Shared parameter checks."""

    name = ""
    required: Tuple[str, ...] = ()

    def precheck(self, room: Room, **kwargs: Any) -> bool:
        missing = [p for p in self.required if p not in kwargs]
        if missing:
            raise ValueError(f"Operation '{self.name}' is missing parameter(s): {', '.join(missing)}")
        if "seg_index" in self.required:
            _check_segment(room, kwargs["seg_index"])
        if "entity_id" in self.required:
            _check_opening(room, kwargs["entity_id"])
        return True

    def command(self, room: Room, **kwargs: Any) -> Command:
        raise NotImplementedError


def _check_segment(room: Room, seg_index: Any) -> None:
    if not isinstance(seg_index, int) or not 0 <= seg_index < len(room.inner_loop):
        raise ValueError(f"Segment {seg_index!r} does not exist")


def _check_opening(room: Room, entity_id: str) -> WallOpening:
    entity = room.entities.get(entity_id)
    if not isinstance(entity, WallOpening):
        raise ValueError(f"Opening '{entity_id}' does not exist")
    return entity


def _noop(name: str, room: Room) -> Command:
    return Command(name, room, room)


class MoveWallLineOp(_RoomOp):
    """Move every vertex on the wall line ``axis == coord`` by ``delta``."""

    name = "move_wall_line"
    required = ("axis", "coord", "delta")

    def precheck(self, room: Room, **kwargs: Any) -> bool:
        super().precheck(room, **kwargs)
        if kwargs["axis"] not in ("x", "y"):
            raise ValueError(f"Axis must be 'x' or 'y', got {kwargs['axis']!r}")
        return True

    def command(self, room: Room, axis: str, coord: float, delta: float, **kwargs: Any) -> Command:
        return move_wall_line_command(room, axis, float(coord), float(delta))


class SetSegmentLengthOp(_RoomOp):
    name = "set_segment_length"
    required = ("seg_index", "length")

    def command(self, room: Room, seg_index: int, length: float, **kwargs: Any) -> Command:
        return set_segment_length_command(room, seg_index, float(length))


class EditDimensionTextOp(_RoomOp):
    name = "edit_dimension_text"
    required = ("seg_index", "text")

    def command(self, room: Room, seg_index: int, text: str, **kwargs: Any) -> Command:
        return edit_dimension_text_command(room, seg_index, str(text))


class CommitDimensionEditOp(_RoomOp):
    """Route an edited dimension label (wall, wall height or opening sentinel)."""

    name = "commit_dimension_edit"
    required = ("seg_index", "raw")

    def precheck(self, room: Room, **kwargs: Any) -> bool:
        missing = [p for p in self.required if p not in kwargs]
        if missing:
            raise ValueError(f"Operation '{self.name}' is missing parameter(s): {', '.join(missing)}")
        return True

    def command(self, room: Room, seg_index: int, raw: str, entity_id: Optional[str] = None, **kwargs: Any) -> Command:
        cmd = dimension_edit_command(room, int(seg_index), str(raw), entity_id)
        return cmd if cmd is not None else _noop("edit-dimension-text", room)


class InsertVertexOp(_RoomOp):
    name = "insert_vertex"
    required = ("seg_index", "x", "y")

    def command(self, room: Room, seg_index: int, x: float, y: float, **kwargs: Any) -> Command:
        return insert_vertex_command(room, seg_index, Point(float(x), float(y)))


class OffsetSegmentOp(_RoomOp):
    """Drag one segment perpendicular to itself (returns created as needed)."""

    name = "offset_segment"
    required = ("seg_index", "delta")

    def command(self, room: Room, seg_index: int, delta: float, **kwargs: Any) -> Command:
        return offset_segment_command(room, seg_index, float(delta))


class PlaceOpeningOp(_RoomOp):
    name = "place_opening"
    required = ("opening_type", "x", "y")

    def precheck(self, room: Room, **kwargs: Any) -> bool:
        super().precheck(room, **kwargs)
        if kwargs["opening_type"] not in OPENING_TYPES:
            raise ValueError(f"Unknown opening type: {kwargs['opening_type']}")
        return True

    def command(
        self,
        room: Room,
        opening_type: str,
        x: float,
        y: float,
        tolerance_mm: float = SNAP_TOLERANCE_MM,
        **params: Any,
    ) -> Command:
        opening = place_opening(room, Point(float(x), float(y)), opening_type, float(tolerance_mm), **params)
        if opening is None:
            return _noop("add-entity", room)
        return add_entity_command(room, opening)


class MoveOpeningOp(_RoomOp):
    name = "move_opening"
    required = ("entity_id", "x", "y")

    def command(
        self, room: Room, entity_id: str, x: float, y: float, tolerance_mm: float = SNAP_TOLERANCE_MM, **kwargs: Any
    ) -> Command:
        opening = room.entities[entity_id]
        moved = move_opening_to(room, opening, Point(float(x), float(y)), float(tolerance_mm))
        if moved is None:
            return _noop("update-entity", room)
        return update_entity_command(room, moved)


class RepositionOpeningOp(_RoomOp):
    """Set the clear distance between an opening and one end of its wall."""

    name = "reposition_opening"
    required = ("entity_id", "side", "distance")

    def precheck(self, room: Room, **kwargs: Any) -> bool:
        super().precheck(room, **kwargs)
        if kwargs["side"] not in ("left", "right"):
            raise ValueError(f"Side must be 'left' or 'right', got {kwargs['side']!r}")
        return True

    def command(self, room: Room, entity_id: str, side: str, distance: float, **kwargs: Any) -> Command:
        opening = room.entities[entity_id]
        return update_entity_command(room, reposition_by_dim(room, opening, side, float(distance)))


class SetSillHeightOp(_RoomOp):
    name = "set_sill_height"
    required = ("entity_id", "sill_mm")

    def command(self, room: Room, entity_id: str, sill_mm: float, **kwargs: Any) -> Command:
        opening = room.entities[entity_id]
        if opening.opening_type != "window":
            return _noop("update-entity", room)
        sill = max(0.0, min(room.wall_height - opening.height_mm, float(sill_mm)))
        return Command("update-entity", room, with_opening(room, replace(opening, sill_height_mm=sill)))


class RemoveEntityOp(_RoomOp):
    name = "remove_entity"
    required = ("entity_id",)

    def precheck(self, room: Room, **kwargs: Any) -> bool:
        if "entity_id" not in kwargs:
            raise ValueError(f"Operation '{self.name}' is missing parameter(s): entity_id")
        if kwargs["entity_id"] not in room.entities:
            raise ValueError(f"Entity '{kwargs['entity_id']}' does not exist")
        return True

    def command(self, room: Room, entity_id: str, **kwargs: Any) -> Command:
        return remove_entity_command(room, entity_id)


class AssignHatchOp(_RoomOp):
    """Assign a pattern to a hatch zone.

    ``hatch`` gives a full assignment; otherwise ``pattern_id`` picks the
    pattern's default configuration. ``pattern_id=None`` clears the zone.
    """

    name = "assign_hatch"
    required = ("view", "zone_id")

    def precheck(self, room: Room, **kwargs: Any) -> bool:
        super().precheck(room, **kwargs)
        if kwargs["view"] not in VIEW_KINDS:
            raise ValueError(f"Unknown view: {kwargs['view']}")
        if "hatch" not in kwargs and "pattern_id" not in kwargs:
            raise ValueError("Operation 'assign_hatch' needs 'hatch' or 'pattern_id'")
        return True

    def command(
        self,
        room: Room,
        view: str,
        zone_id: str,
        pattern_id: Optional[str] = None,
        hatch: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> Command:
        if hatch is not None:
            try:
                assignment = hatch_from_dict(hatch)
            except InvalidRoom as e:
                raise ValueError(str(e)) from e
        elif pattern_id is not None:
            assignment = default_config_for(pattern_id)
        else:
            assignment = None
        return assign_hatch_command(room, view, zone_id, assignment)


class SetWallHeightOp(_RoomOp):
    name = "set_wall_height"
    required = ("height_mm",)

    def command(self, room: Room, height_mm: float, **kwargs: Any) -> Command:
        return set_wall_height_command(room, float(height_mm))


# Operation registry
_OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        MoveWallLineOp(),
        SetSegmentLengthOp(),
        EditDimensionTextOp(),
        CommitDimensionEditOp(),
        InsertVertexOp(),
        OffsetSegmentOp(),
        PlaceOpeningOp(),
        MoveOpeningOp(),
        RepositionOpeningOp(),
        SetSillHeightOp(),
        RemoveEntityOp(),
        AssignHatchOp(),
        SetWallHeightOp(),
    )
}


def register_operation(name: str, operation: Operation) -> None:
    """Make a room edit available under ``name`` in operation dicts.

    Registering an existing name replaces that edit.
    """
    _OPERATIONS[name] = operation


def get_operation(name: str) -> Operation:
    """Look up the room edit an operation dict names.

    Raises:
        KeyError: If no room edit is registered under ``name``.
    """
    try:
        return _OPERATIONS[name]
    except KeyError:
        raise KeyError(f"No room edit named '{name}'; known edits: {', '.join(list_operations())}") from None


def list_operations() -> List[str]:
    """Names of the registered room edits, sorted."""
    return sorted(_OPERATIONS)
