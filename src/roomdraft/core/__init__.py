"""Core data models for room drafting."""

from .model import (
    Bounds,
    Fixture,
    HatchAssignment,
    HatchPair,
    Point,
    Room,
    WallAttachment,
    WallConfig,
    WallOpening,
    create_default_room,
    inner_bounds,
)
from .validators import InvalidRoom, is_simple_loop, validate_all

__all__ = [
    "Bounds",
    "Fixture",
    "HatchAssignment",
    "HatchPair",
    "InvalidRoom",
    "Point",
    "Room",
    "WallAttachment",
    "WallConfig",
    "WallOpening",
    "create_default_room",
    "inner_bounds",
    "is_simple_loop",
    "validate_all",
]
