"""Commands, undo/redo history and the room store."""

from dataclasses import replace

import pytest
from conftest import make_door, make_window

from roomdraft import config
from roomdraft.core.model import Point
from roomdraft.engine import history as hist
from roomdraft.engine.commands import (
    Command,
    add_entity_command,
    commit_dimension_edit_command,
    dimension_edit_command,
    edit_dimension_text_command,
    parse_positive,
    remove_entity_command,
    set_segment_length_command,
    set_wall_height_command,
    update_entity_command,
)
from roomdraft.engine.history import History, RoomStore
from roomdraft.entities.openings import elevation_rect


def test_execute_undo_redo_round_trip(default_room):
    h0 = History(present=default_room)
    h1 = hist.execute(h0, set_wall_height_command(default_room, 2600))
    assert h1.present.wall_height == 2600
    assert h1.can_undo and not h1.can_redo

    h2 = hist.undo(h1)
    assert h2.present is default_room
    assert h2.can_redo

    h3 = hist.redo(h2)
    assert h3.present is h1.present
    assert not h3.can_redo


def test_noop_command_leaves_history_untouched(default_room):
    h0 = History(present=default_room)
    assert hist.execute(h0, set_wall_height_command(default_room, 2400)) is h0


def test_execute_after_undo_clears_future(default_room):
    h = hist.execute(History(present=default_room), set_wall_height_command(default_room, 2600))
    h = hist.undo(h)
    h = hist.execute(h, set_wall_height_command(h.present, 2700))
    assert not h.can_redo
    assert hist.redo(h) is h


def test_undo_and_redo_on_empty_stacks(default_room):
    h = History(present=default_room)
    assert hist.undo(h) is h
    assert hist.redo(h) is h


def test_preview_then_commit_snapshot_is_one_step(default_room):
    h = History(present=default_room)
    h = hist.preview(h, lambda r: replace(r, wall_height=2500))
    h = hist.preview(h, lambda r: replace(r, wall_height=2600))
    assert not h.can_undo

    h = hist.commit_snapshot(h, default_room, h.present)
    assert len(h.past) == 1
    assert hist.undo(h).present is default_room


def test_commit_snapshot_of_unchanged_room_is_a_noop(default_room):
    h = History(present=default_room)
    assert hist.commit_snapshot(h, default_room, default_room) is h


def test_room_store(default_room):
    store = RoomStore(default_room)
    store.execute(set_segment_length_command(store.room, 0, 3000))
    assert store.room.inner_loop[1] == Point(3000, 0)
    store.undo()
    assert store.room is default_room
    assert store.can_redo
    store.redo()
    assert store.can_undo


def test_room_store_defaults_to_default_room():
    assert RoomStore().room.id == "room-1"


def test_command_do_undo(default_room):
    cmd = set_wall_height_command(default_room, 2600)
    assert cmd.do(default_room) is cmd.after
    assert cmd.undo(cmd.after) is default_room
    assert not cmd.is_noop
    assert Command("replace-room", default_room, default_room).is_noop


@pytest.mark.parametrize(
    "raw, value",
    [("3000", 3000.0), ("  2500.5 ", 2500.5), ("abc", None), ("0", None), ("-5", None), ("inf", None), ("nan", None)],
)
def test_parse_positive(raw, value):
    assert parse_positive(raw) == value


def test_wall_height_is_clamped(default_room):
    assert set_wall_height_command(default_room, 50).after.wall_height == 100


def test_edit_dimension_text(default_room):
    after = edit_dimension_text_command(default_room, 1, "2.07 m").after
    assert after.dim_text == {1: "2.07 m"}
    assert after.inner_loop == default_room.inner_loop


def test_commit_dimension_edit_applies_numeric_text(default_room):
    after = commit_dimension_edit_command(default_room, 0, " 3000 ").after
    assert after.dim_text[0] == "3000"
    assert after.inner_loop[1] == Point(3000, 0)


def test_commit_dimension_edit_keeps_labels(default_room):
    after = commit_dimension_edit_command(default_room, 0, "kitchen").after
    assert after.dim_text[0] == "kitchen"
    assert after.inner_loop == default_room.inner_loop


def test_entity_commands(default_room):
    window = make_window()
    added = add_entity_command(default_room, window).after
    assert added.entities == {"w1": window}

    assert update_entity_command(added, window).is_noop
    moved = replace(window, attach=replace(window.attach, t=0.4))
    assert update_entity_command(added, moved).after.entities["w1"].attach.t == 0.4

    assert remove_entity_command(added, "w1").after.entities == {}
    assert remove_entity_command(added, "nope").is_noop


def test_opening_dimension_edits(default_room):
    room = replace(default_room, entities={"w1": make_window(width=900), "d1": make_door(seg_index=2)})

    cmd = dimension_edit_command(room, -2000, "500", "w1")
    assert cmd.after.entities["w1"].attach.t == pytest.approx(950 / 2560)

    cmd = dimension_edit_command(room, -2002, "5000", "w1")
    assert cmd.after.entities["w1"].sill_height_mm == 1200

    cmd = dimension_edit_command(room, -2003, "20", "w1")
    assert cmd.after.entities["w1"].height_mm == 100

    cmd = dimension_edit_command(room, -3002, "2100", "d1")
    assert cmd.after.entities["d1"].height_mm == 2100


def test_ignored_dimension_edits(default_room):
    room = replace(default_room, entities={"w1": make_window()})
    assert dimension_edit_command(room, -2000, "500") is None
    assert dimension_edit_command(room, -2000, "wide", "w1") is None
    assert dimension_edit_command(room, -1, "tall") is None
    assert dimension_edit_command(room, 9, "3000") is None


def test_wall_height_dimension_edit(default_room):
    assert dimension_edit_command(default_room, -1, "2600").after.wall_height == 2600
    assert dimension_edit_command(default_room, -1, "10").after.wall_height == 100


def test_n_executes_then_n_undos_restore_the_start(default_room):
    commands = [
        lambda r: set_wall_height_command(r, 2600),
        lambda r: set_segment_length_command(r, 1, 2500),
        lambda r: commit_dimension_edit_command(r, 0, "3100"),
        lambda r: add_entity_command(r, make_window(seg_index=2)),
    ]
    h = History(present=default_room)
    for build in commands:
        h = hist.execute(h, build(h.present))
    assert len(h.past) == len(commands)

    for _ in commands:
        h = hist.undo(h)
    assert h.present == default_room
    assert not h.can_undo


def test_window_height_edit_respects_the_default_sill(default_room):
    room = replace(default_room, entities={"w1": make_window(sill=None)})
    window = dimension_edit_command(room, config.WINDOW_DIM_ELEV_HEIGHT_SEG, "2400", "w1").after.entities["w1"]
    assert window.height_mm == 1500
    rect = elevation_rect(room, window, "north")
    assert rect.y0 == 0
    assert rect.y1 == 1500


def test_unchanged_dimension_text_is_a_noop(default_room):
    room = replace(default_room, dim_text={1: "2.07 m"})
    assert edit_dimension_text_command(room, 1, "2.07 m").is_noop

    h = History(present=room)
    assert hist.execute(h, edit_dimension_text_command(room, 1, "2.07 m")) is h
    assert not edit_dimension_text_command(room, 1, "2.1 m").is_noop
