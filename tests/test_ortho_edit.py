"""Orthogonal loop edits and their bookkeeping of overrides and entities."""

from dataclasses import replace

import pytest
from conftest import make_rect, make_window

from roomdraft.core.model import Point
from roomdraft.core.validators import is_simple_loop, validate_orthogonal
from roomdraft.geom.ortho_edit import (
    apply_move_wall_line,
    apply_segment_length,
    apply_segment_offset,
    insert_vertex_on_segment,
    move_wall_line,
    offset_segment_with_returns,
    set_segment_length,
    vertex_is_corner,
    vertices_on_line,
)

LABELS = {0: "a", 1: "b", 2: "c", 3: "d"}


def test_move_wall_line_moves_the_whole_line(default_room):
    edit = move_wall_line(default_room.inner_loop, "x", 2560, 100)
    assert edit.moved_vertex_idxs == (1, 2)
    assert edit.loop[1] == Point(2660, 0)
    assert edit.loop[2] == Point(2660, 2070)
    assert edit.loop[0] == default_room.inner_loop[0]


def test_move_wall_line_round_trip(default_room):
    moved = apply_move_wall_line(default_room, "y", 2070, 250)
    back = apply_move_wall_line(moved, "y", 2320, -250)
    assert back.inner_loop == default_room.inner_loop


def test_move_wall_line_without_vertices_is_a_noop(default_room):
    assert apply_move_wall_line(default_room, "x", 1234, 100) is default_room
    assert apply_move_wall_line(default_room, "x", 0, 0) is default_room


@pytest.mark.parametrize(
    "seg_index, length, expected",
    [
        (0, 3000, {1: Point(3000, 0), 2: Point(3000, 2070)}),
        (1, 2500, {2: Point(2560, 2500), 3: Point(0, 2500)}),
        (2, 3000, {0: Point(-440, 0), 3: Point(-440, 2070)}),
    ],
)
def test_set_segment_length_moves_far_wall_line(default_room, seg_index, length, expected):
    edit = set_segment_length(default_room.inner_loop, seg_index, length)
    for idx, point in expected.items():
        assert edit.loop[idx] == point


def test_segment_length_keeps_own_override_and_clears_touched(default_room):
    room = replace(default_room, dim_text=dict(LABELS))
    after = apply_segment_length(room, 0, 3000)
    assert dict(after.dim_text) == {0: "a", 3: "d"}
    assert validate_orthogonal(after)


def test_segment_length_rejects_non_positive(default_room):
    assert apply_segment_length(default_room, 0, 0) is default_room
    assert apply_segment_length(default_room, 0, -10) is default_room
    assert apply_segment_length(default_room, 9, 1000) is default_room


def test_segment_length_reclamps_openings(default_room):
    room = replace(default_room, entities={"w1": make_window(t=0.7)})
    after = apply_segment_length(room, 0, 1500)
    window = after.entities["w1"]
    assert window.attach.wall_seg_index == 0
    assert window.attach.t == pytest.approx(0.6)


def test_segment_length_drops_openings_that_no_longer_fit(window_room):
    after = apply_segment_length(window_room, 0, 1000)
    assert "w1" not in after.entities


def test_corner_detection(notched_room):
    loop = notched_room.inner_loop
    assert all(vertex_is_corner(loop, i) for i in range(len(loop)))

    with_mid = insert_vertex_on_segment(notched_room, 4, Point(1500, 2070)).inner_loop
    assert not vertex_is_corner(with_mid, 5)


def test_insert_vertex_remaps_overrides(default_room):
    room = replace(default_room, dim_text=dict(LABELS))
    after = insert_vertex_on_segment(room, 1, Point(2560, 1000))
    assert len(after.inner_loop) == 5
    assert after.inner_loop[2] == Point(2560, 1000)
    assert dict(after.dim_text) == {0: "a", 3: "c", 4: "d"}


def test_insert_vertex_on_closing_segment_appends(default_room):
    room = replace(default_room, dim_text=dict(LABELS))
    after = insert_vertex_on_segment(room, 3, Point(0, 1000))
    assert after.inner_loop[-1] == Point(0, 1000)
    assert after.inner_loop[:4] == default_room.inner_loop
    assert dict(after.dim_text) == {0: "a", 1: "b", 2: "c"}


def test_insert_vertex_at_endpoint_is_rejected(default_room):
    assert insert_vertex_on_segment(default_room, 0, Point(0, 0)) is default_room
    assert insert_vertex_on_segment(default_room, 0, Point(2560, 0)) is default_room


def test_insert_vertex_moves_entity_to_half_holding_its_centre(default_room):
    room = replace(default_room, entities={"w1": make_window(t=0.75, width=600)})
    after = insert_vertex_on_segment(room, 0, Point(1000, 0))
    window = after.entities["w1"]
    assert window.attach.wall_seg_index == 1
    assert window.attach.t == pytest.approx(920 / 1560)


def test_offset_segment_with_returns_inserts_return_vertex(default_room):
    loop = insert_vertex_on_segment(default_room, 0, Point(1000, 0)).inner_loop
    edit = offset_segment_with_returns(loop, 1, -300)
    assert edit.loop == (
        Point(0, 0),
        Point(1000, 0),
        Point(1000, -300),
        Point(2560, -300),
        Point(2560, 2070),
        Point(0, 2070),
    )
    assert edit.moved_vertex_idxs == (2, 3)
    assert edit.seg_map == {0: 0, 1: 2, 2: 3, 3: 4, 4: 5}


def test_offset_middle_segment_creates_two_returns():
    room = make_rect(3000, 2000)
    room = insert_vertex_on_segment(room, 0, Point(1000, 0))
    room = insert_vertex_on_segment(room, 1, Point(2000, 0))
    after = apply_segment_offset(room, 1, -200)
    assert after.inner_loop[:6] == (
        Point(0, 0),
        Point(1000, 0),
        Point(1000, -200),
        Point(2000, -200),
        Point(2000, 0),
        Point(3000, 0),
    )
    assert len(after.inner_loop) == 8
    assert validate_orthogonal(after)
    assert is_simple_loop(after)


def test_segment_offset_drops_stale_overrides(default_room):
    room = insert_vertex_on_segment(default_room, 0, Point(1000, 0))
    room = replace(room, dim_text={0: "a", 1: "b", 2: "c", 3: "d", 4: "e"})
    after = apply_segment_offset(room, 1, -300)
    assert dict(after.dim_text) == {0: "a", 4: "d", 5: "e"}
    assert validate_orthogonal(after)


def test_segment_offset_on_rectangle_moves_wall_line(default_room):
    after = apply_segment_offset(default_room, 0, -100)
    assert len(after.inner_loop) == 4
    assert after.inner_loop[0] == Point(0, -100)
    assert after.inner_loop[1] == Point(2560, -100)


def test_segment_offset_keeps_entities_on_dragged_segment(default_room):
    room = insert_vertex_on_segment(default_room, 0, Point(1000, 0))
    room = replace(room, entities={"w1": make_window(seg_index=1, t=0.5, width=600)})
    after = apply_segment_offset(room, 1, -300)
    window = after.entities["w1"]
    assert window.attach.wall_seg_index == 2
    assert window.attach.t == 0.5


def test_null_offset_is_a_noop(default_room):
    assert apply_segment_offset(default_room, 0, 0) is default_room


def test_vertices_on_line(notched_room):
    assert vertices_on_line(notched_room.inner_loop, "y", 0) == [0, 1]
    assert vertices_on_line(notched_room.inner_loop, "x", 2560) == [3, 4]


def test_insert_vertex_on_first_segment_shifts_later_overrides(default_room):
    room = replace(default_room, dim_text=dict(LABELS))
    after = insert_vertex_on_segment(room, 0, Point(1250, 0))
    assert len(after.inner_loop) == 5
    assert dict(after.dim_text) == {2: "b", 3: "c", 4: "d"}
