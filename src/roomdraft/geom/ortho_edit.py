"""Orthogonal loop editing.

This module provides the edits applied to a room's inner loop while keeping
every edge axis-aligned: moving a whole wall line, setting a segment length,
splitting a segment with a new vertex and dragging a single segment out of a
straight run (which creates orthogonal "returns").

Every edit that moves a segment's endpoints also invalidates that segment's
dimension override, and wall-attached entities are carried over to the new
segment indices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .. import config
from ..core.model import Entity, Loop, Point, Room
from .segments import Axis, clamp_opening_t, is_horizontal, seg_endpoints, seg_length

logger = logging.getLogger(__name__)

# Global parameters for algorithm sensitivity
EPSILON = config.EPSILON  # Tolerance for wall-line matching


@dataclass(frozen=True)
class LoopEdit:
    """Result of a loop edit.

    Attributes:
        loop: The edited loop.
        moved_vertex_idxs: Indices (in the edited loop) of vertices that were
            moved or inserted.
        seg_map: Old segment index -> new segment index. Empty when the
            vertex count did not change (identity mapping).
    """

    loop: Loop
    moved_vertex_idxs: Tuple[int, ...]
    seg_map: Mapping[int, int] = field(default_factory=dict)


def _nearly_equal(a: float, b: float, eps: float = EPSILON) -> bool:
    return abs(a - b) <= eps


def _seg_is_horizontal(loop: Loop, seg_index: int) -> bool:
    a, b = seg_endpoints(loop, seg_index)
    return is_horizontal(a, b)


def vertex_is_corner(loop: Loop, v_idx: int) -> bool:
    """Check if a vertex joins a horizontal and a vertical segment."""
    n = len(loop)
    if n < 3:
        return False

    prev_is_h = _seg_is_horizontal(loop, (v_idx - 1 + n) % n)
    next_is_h = _seg_is_horizontal(loop, v_idx)
    return prev_is_h != next_is_h


def vertices_on_line(loop: Loop, axis: Axis, coord: float, eps: float = EPSILON) -> List[int]:
    """Indices of every vertex lying on the wall line ``axis == coord``."""
    idxs = []
    for i, v in enumerate(loop):
        c = v.x if axis == "x" else v.y
        if _nearly_equal(c, coord, eps):
            idxs.append(i)
    return idxs


def translate_vertices(loop: Loop, idxs: Iterable[int], dx: float, dy: float) -> Loop:
    """Return a copy of ``loop`` with the given vertices translated."""
    targets = set(idxs)
    return tuple(
        Point(p.x + dx, p.y + dy) if i in targets else p
        for i, p in enumerate(loop)
    )


def move_wall_line(loop: Loop, axis: Axis, coord: float, delta: float) -> LoopEdit:
    """Move every vertex on a wall line by ``delta`` along that axis.

    This is the basic rectangle resize: moving one wall moves the whole
    straight run of collinear vertices at that coordinate.

    Args:
        loop: The loop to edit.
        axis: ``"x"`` for a vertical wall line, ``"y"`` for a horizontal one.
        coord: Coordinate of the wall line on that axis.
        delta: Translation along the same axis.

    Returns:
        The edited loop and the indices of the moved vertices.
    """
    idxs = vertices_on_line(loop, axis, coord)
    dx = delta if axis == "x" else 0.0
    dy = delta if axis == "y" else 0.0
    return LoopEdit(loop=translate_vertices(loop, idxs, dx, dy), moved_vertex_idxs=tuple(idxs))


def set_segment_length(loop: Loop, seg_index: int, new_len: float) -> LoopEdit:
    """Move the far endpoint's wall line so the segment gets ``new_len``.

    The segment keeps its direction (sign preserved); the delta is applied
    through ``move_wall_line`` so the whole perpendicular wall follows.
    """
    n = len(loop)
    if n < 2:
        return LoopEdit(loop=loop, moved_vertex_idxs=())

    a, b = seg_endpoints(loop, seg_index)
    if abs(b.x - a.x) >= abs(b.y - a.y):
        sign = 1.0 if b.x - a.x >= 0 else -1.0
        target_bx = a.x + sign * new_len
        return move_wall_line(loop, "x", b.x, target_bx - b.x)

    sign = 1.0 if b.y - a.y >= 0 else -1.0
    target_by = a.y + sign * new_len
    return move_wall_line(loop, "y", b.y, target_by - b.y)


def offset_segment_with_returns(loop: Loop, seg_index: int, delta: float) -> LoopEdit:
    """Offset only one segment perpendicular to itself.

    Two return vertices are inserted by default (A' after A, B' before B),
    except where an endpoint is already a corner: that corner is moved
    instead of getting a new return vertex.

    - middle segment B-C: ``A-B-B'-C'-C-D``
    - end segment A-B where A is a corner: ``A(moved)-B'-B-C-D``

    Args:
        loop: The loop to edit.
        seg_index: Index of the segment to offset.
        delta: Perpendicular offset (along y for horizontal segments,
            along x for vertical ones).

    Returns:
        The edited loop, the new indices of moved/inserted vertices and the
        old-to-new segment index map.
    """
    n = len(loop)
    if n < 2:
        return LoopEdit(loop=loop, moved_vertex_idxs=())

    a_idx = seg_index
    b_idx = (seg_index + 1) % n
    a, b = loop[a_idx], loop[b_idx]

    if _seg_is_horizontal(loop, seg_index):
        a_off = Point(a.x, a.y + delta)
        b_off = Point(b.x, b.y + delta)
    else:
        a_off = Point(a.x + delta, a.y)
        b_off = Point(b.x + delta, b.y)

    a_is_corner = vertex_is_corner(loop, a_idx)
    b_is_corner = vertex_is_corner(loop, b_idx)

    out: List[Point] = []
    moved: List[int] = []
    slot: Dict[int, int] = {}  # old vertex index -> index of its slot in `out`
    dragged_start = 0

    for i, v in enumerate(loop):
        if i == a_idx:
            if a_is_corner:
                slot[i] = len(out)
                dragged_start = len(out)
                moved.append(len(out))
                out.append(a_off)
            else:
                slot[i] = len(out)
                out.append(v)
                dragged_start = len(out)
                moved.append(len(out))
                out.append(a_off)
            continue

        if i == b_idx:
            if b_is_corner:
                slot[i] = len(out)
                moved.append(len(out))
                out.append(b_off)
            else:
                moved.append(len(out))
                out.append(b_off)
                slot[i] = len(out)
                out.append(v)
            continue

        slot[i] = len(out)
        out.append(v)

    seg_map = {k: slot[k] for k in range(n) if k != seg_index}
    seg_map[seg_index] = dragged_start
    return LoopEdit(loop=tuple(out), moved_vertex_idxs=tuple(moved), seg_map=seg_map)


def moved_vertices_to_touched_segments(loop_len: int, moved_vertex_idxs: Iterable[int]) -> Set[int]:
    """Segments having at least one endpoint in the moved set."""
    moved = set(moved_vertex_idxs)
    touched = set()
    for i in range(loop_len):
        if i in moved or (i + 1) % loop_len in moved:
            touched.add(i)
    return touched


def clear_dim_overrides(room: Room, moved_vertex_idxs: Iterable[int], keep_segs: Iterable[int] = ()) -> Room:
    """Delete dimension overrides of segments touched by moved vertices.

    Args:
        room: The room after its loop was edited in place (same vertex count).
        moved_vertex_idxs: Indices of the vertices that moved.
        keep_segs: Segment indices whose override must survive, e.g. the
            segment whose length the user is typing.

    Returns:
        A room with stale overrides removed (the same object if nothing changed).
    """
    if not room.dim_text:
        return room

    touched = moved_vertices_to_touched_segments(len(room.inner_loop), moved_vertex_idxs)
    keep = set(keep_segs)
    stale = [seg for seg in touched if seg in room.dim_text and seg not in keep]
    if not stale:
        return room

    dim_text = {k: v for k, v in room.dim_text.items() if k not in stale}
    return replace(room, dim_text=dim_text)


def _reattach_entities(
    entities: Mapping[str, Entity],
    new_loop: Loop,
    seg_map: Mapping[int, int],
) -> Dict[str, Entity]:
    """Move entities to their new segment indices, re-clamping their position.

    Entities whose segment disappeared or became narrower than the entity are
    dropped together with the edit.
    """
    out: Dict[str, Entity] = {}
    for entity_id, entity in entities.items():
        old_idx = entity.attach.wall_seg_index
        if old_idx not in seg_map:
            logger.debug("Dropping %s: segment %d no longer exists", entity_id, old_idx)
            continue
        new_idx = seg_map[old_idx]
        a, b = seg_endpoints(new_loop, new_idx)
        t = clamp_opening_t(entity.attach.t, entity.width_mm, seg_length(a, b))
        if t is None:
            logger.debug("Dropping %s: segment %d is narrower than the entity", entity_id, new_idx)
            continue
        if t == entity.attach.t and new_idx == old_idx:
            out[entity_id] = entity
            continue
        out[entity_id] = replace(entity, attach=replace(entity.attach, wall_seg_index=new_idx, t=t))
    return out


def _apply_in_place_edit(room: Room, edit: LoopEdit, keep_segs: Iterable[int] = ()) -> Room:
    """Build the room for an edit that moved vertices without inserting any."""
    if edit.loop == room.inner_loop:
        return room

    n = len(edit.loop)
    identity = {k: k for k in range(n)}
    next_room = replace(
        room,
        inner_loop=edit.loop,
        entities=_reattach_entities(room.entities, edit.loop, identity),
    )
    return clear_dim_overrides(next_room, edit.moved_vertex_idxs, keep_segs)


def apply_move_wall_line(room: Room, axis: Axis, coord: float, delta: float) -> Room:
    """Move a wall line on a room and invalidate the touched overrides."""
    if len(room.inner_loop) < 2 or abs(delta) < EPSILON:
        return room
    edit = move_wall_line(room.inner_loop, axis, coord, delta)
    if not edit.moved_vertex_idxs:
        logger.debug("No vertex on wall line %s=%s", axis, coord)
        return room
    return _apply_in_place_edit(room, edit)


def apply_segment_length(room: Room, seg_index: int, new_len: float) -> Room:
    """Set a segment's length, keeping the segment's own override.

    Args:
        room: The room to modify.
        seg_index: Index of the segment to resize.
        new_len: Requested length in millimetres; must be positive.

    Returns:
        A new Room, or the input room unchanged when the request is invalid.
    """
    n = len(room.inner_loop)
    if n < 2 or not 0 <= seg_index < n or not new_len > 0:
        logger.debug("Rejected segment length %r for segment %r", new_len, seg_index)
        return room

    edit = set_segment_length(room.inner_loop, seg_index, new_len)
    return _apply_in_place_edit(room, edit, keep_segs=(seg_index,))


def insert_vertex_on_segment(room: Room, seg_index: int, point: Point) -> Room:
    """Split a segment with a new vertex (used to start L-shaped rooms).

    The point is assumed to lie on the segment. Dimension overrides below
    the split are kept, the split segment's own override is dropped and the
    ones above are shifted by one. Entities on the split segment move to
    whichever half holds their centre.

    Args:
        room: The room to modify.
        seg_index: Index of the segment to split.
        point: Position of the new vertex.

    Returns:
        A new Room with one more vertex, or the input room unchanged when
        the segment is degenerate or the point coincides with an endpoint.
    """
    loop = room.inner_loop
    n = len(loop)
    if n < 2 or not 0 <= seg_index < n:
        return room

    a, b = seg_endpoints(loop, seg_index)
    seg_len = seg_length(a, b)
    if seg_len < EPSILON or seg_length(a, point) < EPSILON or seg_length(point, b) < EPSILON:
        logger.debug("Rejected vertex insertion on degenerate split of segment %d", seg_index)
        return room

    # Segment i (i -> i+1) gets the new vertex after i; the closing segment
    # (n-1 -> 0) appends it at the end.
    insert_idx = n if seg_index == n - 1 else seg_index + 1
    new_loop = loop[:insert_idx] + (Point(point.x, point.y),) + loop[insert_idx:]

    dim_text: Dict[int, str] = {}
    for k, v in room.dim_text.items():
        if k < seg_index:
            dim_text[k] = v
        elif seg_index < k < n:
            dim_text[k + 1] = v

    seg_map = {k: (k if k < seg_index else k + 1) for k in range(n) if k != seg_index}
    first_len = seg_length(a, point)
    second_len = seg_length(point, b)
    entities: Dict[str, Entity] = {}
    for entity_id, entity in room.entities.items():
        k = entity.attach.wall_seg_index
        if k != seg_index:
            entities.update(_reattach_entities({entity_id: entity}, new_loop, seg_map))
            continue
        centre = entity.attach.t * seg_len
        if centre <= first_len:
            new_idx, t = seg_index, centre / first_len
        else:
            new_idx, t = seg_index + 1, (centre - first_len) / second_len
        moved = replace(entity, attach=replace(entity.attach, wall_seg_index=new_idx, t=t))
        entities.update(_reattach_entities({entity_id: moved}, new_loop, {new_idx: new_idx}))

    return replace(room, inner_loop=new_loop, dim_text=dim_text, entities=entities)


def apply_segment_offset(room: Room, seg_index: int, delta: float) -> Room:
    """Drag one wall segment perpendicular to itself.

    If the segment is the only one on its wall line, the whole line moves
    (rectangle resize). Otherwise only the segment moves and orthogonal
    returns are created so that its collinear neighbours stay put.

    Args:
        room: The room to modify (the drag's starting snapshot).
        seg_index: Index of the dragged segment.
        delta: Perpendicular displacement (y for horizontal segments, x for
            vertical ones).

    Returns:
        A new Room, or the input room unchanged for a null drag.
    """
    loop = room.inner_loop
    n = len(loop)
    if n < 2 or not 0 <= seg_index < n or abs(delta) < EPSILON:
        return room

    a, b = seg_endpoints(loop, seg_index)
    horizontal = is_horizontal(a, b)
    axis: Axis = "y" if horizontal else "x"
    coord = a.y if horizontal else a.x

    if len(vertices_on_line(loop, axis, coord)) <= 2:
        return apply_move_wall_line(room, axis, coord, delta)

    edit = offset_segment_with_returns(loop, seg_index, delta)
    b_idx = (seg_index + 1) % n
    moved_corners = [i for i in (seg_index, b_idx) if vertex_is_corner(loop, i)]
    stale = moved_vertices_to_touched_segments(n, moved_corners) | {seg_index}

    dim_text = {
        edit.seg_map[k]: v
        for k, v in room.dim_text.items()
        if k in edit.seg_map and k not in stale
    }
    return replace(
        room,
        inner_loop=edit.loop,
        dim_text=dim_text,
        entities=_reattach_entities(room.entities, edit.loop, edit.seg_map),
    )
