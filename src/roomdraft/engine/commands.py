"""Undoable commands.

A command is built against the room it will be executed on: ``before`` and
``after`` are computed once at construction time, so ``do``/``undo`` are
constant-time and never recompute geometry.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

from .. import config
from ..core.model import Entity, HatchAssignment, Point, Room, ViewKind, WallOpening
from ..entities.openings import effective_sill, reposition_by_dim, with_opening
from ..geom.ortho_edit import (
    apply_move_wall_line,
    apply_segment_length,
    apply_segment_offset,
    insert_vertex_on_segment,
)
from ..geom.segments import Axis
from ..hatch.zones import assign_hatch

logger = logging.getLogger(__name__)

COMMAND_NAMES = (
    "move-wall-line",
    "set-segment-length",
    "edit-dimension-text",
    "insert-vertex",
    "offset-segment",
    "replace-room",
    "add-entity",
    "update-entity",
    "remove-entity",
    "assign-hatch",
    "set-wall-height",
)


@dataclass(frozen=True)
class Command:
    """A named room transition.

    Attributes:
        name: Command name, one of ``COMMAND_NAMES``.
        before: Room the command was built against.
        after: Resulting room; ``after is before`` marks a no-op.
    """

    name: str
    before: Room
    after: Room

    def do(self, room: Room) -> Room:
        return self.after

    def undo(self, room: Room) -> Room:
        return self.before

    @property
    def is_noop(self) -> bool:
        return self.after is self.before


def parse_positive(raw: str) -> Optional[float]:
    """Parse user-entered dimension text; None unless it is a finite number > 0."""
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def move_wall_line_command(before: Room, axis: Axis, coord: float, delta: float) -> Command:
    return Command("move-wall-line", before, apply_move_wall_line(before, axis, coord, delta))


def set_segment_length_command(before: Room, seg_index: int, new_len: float) -> Command:
    return Command("set-segment-length", before, apply_segment_length(before, seg_index, new_len))


def edit_dimension_text_command(before: Room, seg_index: int, text: str) -> Command:
    if before.dim_text.get(seg_index) == text:
        return Command("edit-dimension-text", before, before)
    dim_text = dict(before.dim_text)
    dim_text[seg_index] = text
    return Command("edit-dimension-text", before, replace(before, dim_text=dim_text))


def commit_dimension_edit_command(before: Room, seg_index: int, raw: str) -> Command:
    """Store the trimmed label on a wall segment and apply it if it is a length.

    Non-numeric or non-positive text is kept as a plain label override.
    """
    cleaned = raw.strip()
    after = edit_dimension_text_command(before, seg_index, cleaned).after

    length = parse_positive(cleaned)
    if length is not None:
        after = apply_segment_length(after, seg_index, length)
    else:
        logger.debug("Dimension text %r on segment %d is a label only", cleaned, seg_index)
    return Command("edit-dimension-text", before, after)


def insert_vertex_command(before: Room, seg_index: int, point: Point) -> Command:
    return Command("insert-vertex", before, insert_vertex_on_segment(before, seg_index, point))


def offset_segment_command(before: Room, seg_index: int, delta: float) -> Command:
    return Command("offset-segment", before, apply_segment_offset(before, seg_index, delta))


def replace_room_command(before: Room, after: Room) -> Command:
    return Command("replace-room", before, after)


def add_entity_command(before: Room, entity: Entity) -> Command:
    entities = dict(before.entities)
    entities[entity.id] = entity
    return Command("add-entity", before, replace(before, entities=entities))


def update_entity_command(before: Room, entity: Entity) -> Command:
    if before.entities.get(entity.id) == entity:
        return Command("update-entity", before, before)
    entities = dict(before.entities)
    entities[entity.id] = entity
    return Command("update-entity", before, replace(before, entities=entities))


def remove_entity_command(before: Room, entity_id: str) -> Command:
    if entity_id not in before.entities:
        return Command("remove-entity", before, before)
    entities = {k: v for k, v in before.entities.items() if k != entity_id}
    return Command("remove-entity", before, replace(before, entities=entities))


def set_wall_height_command(before: Room, height_mm: float) -> Command:
    height = max(config.MIN_WALL_HEIGHT_MM, height_mm)
    if height == before.wall_height:
        return Command("set-wall-height", before, before)
    return Command("set-wall-height", before, replace(before, wall_height=height))


def assign_hatch_command(
    before: Room, view: ViewKind, zone_id: str, assignment: Optional[HatchAssignment]
) -> Command:
    return Command("assign-hatch", before, assign_hatch(before, view, zone_id, assignment))


_WINDOW_DIMS = (
    config.WINDOW_DIM_LEFT_SEG,
    config.WINDOW_DIM_RIGHT_SEG,
    config.WINDOW_DIM_ELEV_SILL_SEG,
    config.WINDOW_DIM_ELEV_HEIGHT_SEG,
)
_DOOR_DIMS = (
    config.DOOR_DIM_LEFT_SEG,
    config.DOOR_DIM_RIGHT_SEG,
    config.DOOR_DIM_ELEV_HEIGHT_SEG,
)
_LEFT_DIMS = (config.WINDOW_DIM_LEFT_SEG, config.DOOR_DIM_LEFT_SEG)
_RIGHT_DIMS = (config.WINDOW_DIM_RIGHT_SEG, config.DOOR_DIM_RIGHT_SEG)


def _edit_opening(room: Room, opening: WallOpening, seg_index: int, value: float) -> WallOpening:
    h = room.wall_height
    if seg_index in _LEFT_DIMS:
        return reposition_by_dim(room, opening, "left", value)
    if seg_index in _RIGHT_DIMS:
        return reposition_by_dim(room, opening, "right", value)
    if seg_index == config.WINDOW_DIM_ELEV_SILL_SEG:
        return replace(opening, sill_height_mm=max(0.0, min(h - opening.height_mm, value)))
    if seg_index == config.WINDOW_DIM_ELEV_HEIGHT_SEG:
        max_h = h - effective_sill(opening)
        return replace(opening, height_mm=max(config.MIN_OPENING_HEIGHT_MM, min(max_h, value)))
    return replace(opening, height_mm=max(config.MIN_OPENING_HEIGHT_MM, min(h, value)))


def dimension_edit_command(
    room: Room, seg_index: int, raw: str, selected_entity_id: Optional[str] = None
) -> Optional[Command]:
    """Route an edited dimension label to the edit it stands for.

    Args:
        room: Current room.
        seg_index: Segment index of the edited dimension; negative values are
            sentinels for opening dimensions (-2000.., -3000..) and the
            wall height (-1).
        raw: Text typed by the user.
        selected_entity_id: Opening the sentinel dimensions belong to.

    Returns:
        The command to execute, or None when the edit is ignored (no
        selected opening, or non-numeric input on a sentinel dimension).
    """
    if seg_index in _WINDOW_DIMS or seg_index in _DOOR_DIMS:
        entity = room.entities.get(selected_entity_id) if selected_entity_id else None
        if not isinstance(entity, WallOpening):
            logger.debug("Opening dimension %d edited without a selected opening", seg_index)
            return None
        value = parse_positive(raw)
        if value is None:
            logger.debug("Ignoring non-numeric opening dimension %r", raw)
            return None
        return Command("update-entity", room, with_opening(room, _edit_opening(room, entity, seg_index, value)))

    if seg_index == config.WALL_HEIGHT_DIM_SEG:
        value = parse_positive(raw)
        if value is None:
            logger.debug("Ignoring non-numeric wall height %r", raw)
            return None
        return set_wall_height_command(room, value)

    if seg_index < 0 or seg_index >= len(room.inner_loop):
        logger.debug("Dimension index %d does not name a segment", seg_index)
        return None
    return commit_dimension_edit_command(room, seg_index, raw)
