"""Hatch zones, fill resolution and assignment."""

from dataclasses import replace

from roomdraft.core.model import Point, WallConfig
from roomdraft.hatch.patterns import (
    DEFAULT_WALL_HATCH,
    HATCH_PATTERNS,
    PATTERN_IDS,
    default_config_for,
    get_pattern,
)
from roomdraft.hatch.zones import (
    assign_hatch,
    build_hatch_fills,
    get_hatch_zones,
    hit_test_zone,
    resolve_fill,
)


def _zone(view, room, zone_id):
    return next(z for z in get_hatch_zones(view, room) if z.id == zone_id)


def test_pattern_catalogue():
    assert len(HATCH_PATTERNS) == 13
    assert PATTERN_IDS[0] == "none"
    assert get_pattern("brick").default.tile_length_mm == 300
    assert get_pattern("missing") is None
    assert default_config_for("missing").pattern_id == "none"
    assert get_pattern("arch-cut-wall").default.pair.enabled


def test_plan_zones(default_room):
    zones = get_hatch_zones("plan", default_room)
    assert [z.id for z in zones] == ["plan:floor", "plan:wall"]
    assert not zones[0].is_wall
    assert zones[1].is_wall
    assert zones[1].holes == (default_room.inner_loop,)


def test_hit_test_zone(default_room):
    zones = get_hatch_zones("plan", default_room)
    assert hit_test_zone(Point(1000, 1000), zones).id == "plan:floor"
    assert hit_test_zone(Point(-45, 1000), zones).id == "plan:wall"
    assert hit_test_zone(Point(-500, 1000), zones) is None


def test_elevation_zones_split_at_returns(notched_room):
    ids = [z.id for z in get_hatch_zones("north", notched_room)]
    assert ids == ["north:wall-left", "north:wall-right", "north:face:0", "north:face:1"]

    face = _zone("north", notched_room, "north:face:1")
    assert face.outer[0] == Point(1000, 0)
    assert face.outer[2] == Point(2560, 2400)


def test_rectangle_elevation_has_one_face(default_room):
    ids = [z.id for z in get_hatch_zones("east", default_room)]
    assert ids == ["east:wall-left", "east:wall-right", "east:face:0"]


def test_wall_zones_use_fixed_fill(default_room):
    wall = _zone("plan", default_room, "plan:wall")
    assert resolve_fill(wall, default_room) == DEFAULT_WALL_HATCH

    custom = default_config_for("brick")
    room = replace(default_room, wall_config=WallConfig(wall_hatch=custom))
    assert resolve_fill(wall, room) == custom


def test_fill_priority(default_room):
    floor = _zone("plan", default_room, "plan:floor")
    assert resolve_fill(floor, default_room) is None

    brick = default_config_for("brick")
    room = assign_hatch(default_room, "plan", "plan:floor", brick)
    assert resolve_fill(floor, room) == brick

    preview = resolve_fill(floor, room, "plan:floor", default_config_for("grid"))
    assert preview.pattern_id == "grid"
    assert preview.opacity == 0.5

    cleared = assign_hatch(room, "plan", "plan:floor", default_config_for("none"))
    assert resolve_fill(floor, cleared) is None


def test_assign_hatch_ignores_wall_and_unknown_zones(default_room):
    brick = default_config_for("brick")
    assert assign_hatch(default_room, "plan", "plan:wall", brick) is default_room
    assert assign_hatch(default_room, "north", "north:face:7", brick) is default_room


def test_assign_hatch_none_clears(default_room):
    room = assign_hatch(default_room, "north", "north:face:0", default_config_for("dots"))
    assert "north:face:0" in room.hatches
    cleared = assign_hatch(room, "north", "north:face:0", None)
    assert "north:face:0" not in cleared.hatches
    assert assign_hatch(default_room, "north", "north:face:0", None) is default_room


def test_build_hatch_fills(default_room):
    fills = build_hatch_fills("plan", default_room)
    assert [f.zone_id for f in fills] == ["plan:wall"]

    room = assign_hatch(default_room, "plan", "plan:floor", default_config_for("grid"))
    fills = build_hatch_fills("plan", room)
    assert [f.zone_id for f in fills] == ["plan:floor", "plan:wall"]
    assert fills[0].kind == "hatch-fill"
