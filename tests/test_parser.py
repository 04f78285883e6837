"""JSON document loading and saving."""

import json
from dataclasses import replace

import pytest
from conftest import make_window

from roomdraft.core.model import Fixture, HatchPair, Point, WallAttachment, WallConfig
from roomdraft.core.validators import InvalidRoom, collect_problems, is_simple_loop, validate_all
from roomdraft.hatch.patterns import default_config_for
from roomdraft.io.parser import (
    entity_from_dict,
    hatch_from_dict,
    load_room,
    room_from_dict,
    room_to_dict,
    save_room,
)


@pytest.fixture
def furnished_room(default_room):
    fixture = Fixture(
        id="wc-1",
        attach=WallAttachment(wall_seg_index=1, t=0.3, offset_from_wall_mm=20),
        fixture_type="wc",
        width_mm=380,
        depth_mm=600,
    )
    return replace(
        default_room,
        dim_text={0: "2.56 m"},
        entities={"w1": make_window(window_style="double-leaf"), "wc-1": fixture},
        hatches={"plan:floor": default_config_for("arch-cut-wall")},
        wall_config=WallConfig(stroke_width_mm=3),
    )


def test_document_shape(furnished_room):
    data = room_to_dict(furnished_room)
    assert data["dim_text"] == {"0": "2.56 m"}
    assert data["inner_loop"][1] == {"x": 2560.0, "y": 0.0}
    assert data["entities"]["w1"]["kind"] == "wall-opening"
    assert "door_style" not in data["entities"]["w1"]
    assert data["entities"]["wc-1"]["attach"]["offset_from_wall_mm"] == 20
    assert data["hatches"]["plan:floor"]["pair"] == {"enabled": True, "gap_mm": 20}
    assert data["wall_config"] == {"stroke_width_mm": 3}


def test_save_and_load(tmp_path, furnished_room):
    path = tmp_path / "nested" / "room.json"
    save_room(furnished_room, str(path))
    loaded = load_room(str(path))
    assert loaded == furnished_room
    assert loaded.hatches["plan:floor"].pair == HatchPair(enabled=True, gap_mm=20)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_room(str(tmp_path / "missing.json"))


def test_load_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_room(str(path))


def test_unknown_entity_kind_is_rejected():
    with pytest.raises(InvalidRoom, match="unknown entity kind"):
        entity_from_dict("x", {"kind": "stair"})


def test_unknown_style_is_rejected():
    data = {
        "kind": "wall-opening",
        "attach": {"wall_seg_index": 0, "t": 0.5},
        "opening_type": "window",
        "width_mm": 900,
        "height_mm": 1200,
        "window_style": "gothic",
    }
    with pytest.raises(InvalidRoom, match="window_style"):
        entity_from_dict("w", data)


def test_missing_field_is_rejected(default_room):
    data = room_to_dict(default_room)
    del data["wall_height"]
    with pytest.raises(InvalidRoom, match="wall_height"):
        room_from_dict(data)


def test_non_orthogonal_loop_is_rejected(default_room):
    data = room_to_dict(default_room)
    data["inner_loop"][2] = {"x": 2500, "y": 2070}
    with pytest.raises(InvalidRoom, match="axis-aligned"):
        room_from_dict(data)


def test_opening_hanging_off_its_wall_is_rejected(default_room):
    data = room_to_dict(replace(default_room, entities={"w1": make_window(t=0.1)}))
    with pytest.raises(InvalidRoom, match="outside"):
        room_from_dict(data)


def test_invalid_room_is_a_value_error():
    assert issubclass(InvalidRoom, ValueError)


def test_hatch_defaults():
    hatch = hatch_from_dict(
        {"pattern_id": "grid", "color": "#000", "bg_color": "#fff", "spacing_mm": 100, "line_width_mm": 1, "angle_deg": 0}
    )
    assert hatch.opacity == 1.0
    assert hatch.pair is None


def test_validators(default_room, notched_room):
    validate_all(default_room)
    assert collect_problems(notched_room) == []
    assert is_simple_loop(notched_room)

    crossed = replace(
        default_room,
        inner_loop=(Point(0, 0), Point(200, 0), Point(200, 100), Point(100, 100), Point(100, -100), Point(0, -100)),
    )
    assert collect_problems(crossed) == []
    assert not is_simple_loop(crossed)

    flat = replace(default_room, wall_thickness=0)
    assert collect_problems(flat) == ["room needs at least 3 vertices and positive wall thickness/height"]
