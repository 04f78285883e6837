"""Core data models for room drafting.

This module defines the immutable data structures used to represent a room:
its orthogonal inner boundary loop, wall-attached entities, dimension
overrides and hatch assignments. Every edit produces a new ``Room`` value;
nothing here is mutated in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple, Union

from .. import config

OpeningType = Literal["door", "window"]
WindowStyle = Literal["single-leaf", "double-leaf", "fixed", "sliding"]
DoorStyle = Literal["single-leaf", "double-leaf", "sliding", "pocket"]
DoorLeafSide = Literal["left", "right"]
DoorSwingDirection = Literal["inside", "outside"]
FixtureType = Literal["wc", "vanity", "shower", "custom"]
ViewKind = Literal["plan", "north", "south", "east", "west"]
ElevationView = Literal["north", "south", "east", "west"]

OPENING_TYPES = ("door", "window")
WINDOW_STYLES = ("single-leaf", "double-leaf", "fixed", "sliding")
DOOR_STYLES = ("single-leaf", "double-leaf", "sliding", "pocket")
DOOR_LEAF_SIDES = ("left", "right")
DOOR_SWING_DIRECTIONS = ("inside", "outside")
FIXTURE_TYPES = ("wc", "vanity", "shower", "custom")
VIEW_KINDS = ("plan", "north", "south", "east", "west")
ELEVATION_VIEWS = ("north", "south", "east", "west")


@dataclass(frozen=True)
class Point:
    """Represents a 2D point in world space.

    Attributes:
        x: The x-coordinate in millimetres.
        y: The y-coordinate in millimetres (screen convention, grows downward).
    """

    x: float
    y: float


Loop = Tuple[Point, ...]


@dataclass(frozen=True)
class WallAttachment:
    """Position of an entity along a wall segment.

    Attributes:
        wall_seg_index: Index of segment i -> i+1 (wrapping) on the inner loop.
        t: Parameter along the segment, 0 at its start and 1 at its end.
        offset_from_wall_mm: Perpendicular distance from the wall centreline.
            Positive is to the left of the segment direction.
    """

    wall_seg_index: int
    t: float
    offset_from_wall_mm: Optional[float] = None


@dataclass(frozen=True)
class WallOpening:
    """Represents a door or window cut into a wall segment.

    Attributes:
        id: Unique identifier for the opening.
        attach: Where the opening's centre sits on its wall segment.
        opening_type: Either ``"door"`` or ``"window"``.
        width_mm: Opening width along the wall.
        height_mm: Opening height.
        sill_height_mm: Height of the opening's bottom edge above the floor.
            ``None`` falls back to the opening type's default sill.
        window_style: Drawing style for windows.
        door_style: Drawing style for doors.
        door_leaf_side: Hinge side for doors.
        door_swing_direction: Whether the door leaf swings into or out of the room.
    """

    id: str
    attach: WallAttachment
    opening_type: OpeningType
    width_mm: float
    height_mm: float
    sill_height_mm: Optional[float] = None
    window_style: Optional[WindowStyle] = None
    door_style: Optional[DoorStyle] = None
    door_leaf_side: Optional[DoorLeafSide] = None
    door_swing_direction: Optional[DoorSwingDirection] = None

    kind = "wall-opening"


@dataclass(frozen=True)
class Fixture:
    """Represents a fixture (WC, vanity, shower...) placed against a wall.

    Attributes:
        id: Unique identifier for the fixture.
        attach: Where the fixture sits on its wall segment.
        fixture_type: Fixture category.
        width_mm: Width along the wall.
        depth_mm: Depth into the room.
        rotation_deg: Optional rotation about the fixture centre.
    """

    id: str
    attach: WallAttachment
    fixture_type: FixtureType
    width_mm: float
    depth_mm: float
    rotation_deg: Optional[float] = None

    kind = "fixture"


Entity = Union[WallOpening, Fixture]
ENTITY_KINDS = ("wall-opening", "fixture")


@dataclass(frozen=True)
class HatchPair:
    """Pair-line option: each stripe is drawn as two lines ``gap_mm`` apart."""

    enabled: bool
    gap_mm: float


@dataclass(frozen=True)
class HatchAssignment:
    """Fill configuration assigned to a hatch zone.

    Attributes:
        pattern_id: Pattern identifier; ``"none"`` suppresses any fill.
        color: Stroke colour of the pattern lines.
        bg_color: Background colour behind the pattern.
        spacing_mm: Distance between stripes.
        line_width_mm: Stroke width of the pattern lines.
        angle_deg: Stripe angle for angled patterns.
        opacity: Overall opacity in [0, 1].
        tile_length_mm: Tile length for tiled patterns (rectangle, brick...).
        tile_width_mm: Tile width for tiled patterns.
        pair: Optional pair-line option.
    """

    pattern_id: str
    color: str
    bg_color: str
    spacing_mm: float
    line_width_mm: float
    angle_deg: float
    opacity: float = 1.0
    tile_length_mm: Optional[float] = None
    tile_width_mm: Optional[float] = None
    pair: Optional[HatchPair] = None


@dataclass(frozen=True)
class WallConfig:
    """Display overrides for the walls.

    Attributes:
        stroke_width_mm: Outline weight of the wall ring and elevation face.
        wall_hatch: Replaces the built-in default wall cross-section hatch.
    """

    stroke_width_mm: Optional[float] = None
    wall_hatch: Optional[HatchAssignment] = None


@dataclass(frozen=True)
class Room:
    """Represents a single room, the sole source of truth for every view.

    Attributes:
        id: Opaque identifier.
        inner_loop: Clear interior boundary, clockwise, implicitly closed.
            Every edge (including the closing one) is axis-aligned.
        wall_thickness: Wall thickness in millimetres.
        wall_height: Wall height in millimetres.
        dim_text: Mapping of segment index to a user-entered dimension label.
            An entry is only valid while its segment's endpoints are unchanged.
        entities: Mapping of entity ID to WallOpening or Fixture objects.
        hatches: Mapping of derived hatch zone ID to its fill assignment.
        wall_config: Optional display overrides.
    """

    id: str
    inner_loop: Loop
    wall_thickness: float
    wall_height: float
    dim_text: Mapping[int, str] = field(default_factory=dict)
    entities: Mapping[str, Entity] = field(default_factory=dict)
    hatches: Mapping[str, HatchAssignment] = field(default_factory=dict)
    wall_config: Optional[WallConfig] = None


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def create_default_room() -> Room:
    """Create the default rectangular room used when a session starts."""
    x0 = 0.0
    y0 = 0.0
    width = config.DEFAULT_ROOM_WIDTH_MM
    depth = config.DEFAULT_ROOM_DEPTH_MM

    return Room(
        id=config.DEFAULT_ROOM_ID,
        inner_loop=(
            Point(x0, y0),
            Point(x0 + width, y0),
            Point(x0 + width, y0 + depth),
            Point(x0, y0 + depth),
        ),
        wall_thickness=config.DEFAULT_WALL_THICKNESS_MM,
        wall_height=config.DEFAULT_WALL_HEIGHT_MM,
    )


def inner_bounds(loop: Loop) -> Bounds:
    """Bounding box of a loop of points."""
    return Bounds(
        min_x=min(p.x for p in loop),
        min_y=min(p.y for p in loop),
        max_x=max(p.x for p in loop),
        max_y=max(p.y for p in loop),
    )
