"""Structural validation for rooms.

These checks run at the boundaries of the engine (loading a document,
reporting in the CLI). The editing algorithms themselves never raise for
user-driven input; they return the room unchanged instead.
"""

from __future__ import annotations

from typing import List

from shapely.geometry import LinearRing

from .. import config
from .model import Fixture, Room, WallOpening


class InvalidRoom(ValueError):
    """Raised when a room violates the model's structural invariants."""

    pass


def validate_orthogonal(room: Room) -> bool:
    """Validate that every edge of the inner loop is axis-aligned.

    Args:
        room: The room to validate.

    Returns:
        True if every edge (including the closing edge) is horizontal or
        vertical within tolerance, False otherwise.
    """
    loop = room.inner_loop
    n = len(loop)
    for i in range(n):
        a = loop[i]
        b = loop[(i + 1) % n]
        if abs(a.x - b.x) > config.EPSILON and abs(a.y - b.y) > config.EPSILON:
            return False
    return True


def validate_dimensions(room: Room) -> bool:
    """Validate loop size and positive wall dimensions."""
    return (
        len(room.inner_loop) >= 3
        and room.wall_thickness > 0
        and room.wall_height > 0
    )


def validate_attachments(room: Room) -> bool:
    """Validate that every entity is attached to an existing segment.

    Openings must additionally keep their half-width envelope inside the
    segment, i.e. they may not hang off either end.
    """
    n = len(room.inner_loop)
    for entity in room.entities.values():
        if not 0 <= entity.attach.wall_seg_index < n:
            return False
        if isinstance(entity, WallOpening):
            a = room.inner_loop[entity.attach.wall_seg_index]
            b = room.inner_loop[(entity.attach.wall_seg_index + 1) % n]
            seg_len = ((b.x - a.x) ** 2 + (b.y - a.y) ** 2) ** 0.5
            if seg_len <= 0:
                return False
            half = entity.width_mm / 2 / seg_len
            if entity.attach.t - half < -config.EPSILON or entity.attach.t + half > 1 + config.EPSILON:
                return False
        elif isinstance(entity, Fixture):
            if not 0 <= entity.attach.t <= 1:
                return False
        else:
            raise TypeError(f"Unknown entity type: {type(entity).__name__}")
    return True


def is_simple_loop(room: Room) -> bool:
    """Check whether the inner loop is free of self-intersections.

    Edits are allowed to produce self-intersecting loops (for example when a
    return is dragged through the opposite wall); this check only reports it.
    """
    if len(room.inner_loop) < 3:
        return False
    ring = LinearRing([(p.x, p.y) for p in room.inner_loop])
    return ring.is_simple


def collect_problems(room: Room) -> List[str]:
    """Describe every structural problem found in a room."""
    problems = []
    if not validate_dimensions(room):
        problems.append("room needs at least 3 vertices and positive wall thickness/height")
    if not validate_orthogonal(room):
        problems.append("inner loop has non axis-aligned edges")
    if not validate_attachments(room):
        problems.append("an entity is attached outside its wall segment")
    return problems


def validate_all(room: Room) -> None:
    """Run all structural validators.

    Args:
        room: The room to validate.

    Raises:
        InvalidRoom: If any validator fails.
    """
    problems = collect_problems(room)
    if problems:
        raise InvalidRoom("; ".join(problems))
