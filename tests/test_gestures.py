"""Drag gestures: previews, single-step commits and cancellation."""

from dataclasses import replace

import pytest
from conftest import make_door, make_window

from roomdraft.core.model import Point
from roomdraft.engine.gestures import (
    Cancelled,
    DEFAULT_TOLERANCE_MM,
    Committed,
    Dragging,
    GestureController,
    Idle,
    OpeningPlanTarget,
    WallSegmentTarget,
    drag_geometry,
    tolerance_from_scale,
)
from roomdraft.engine.history import RoomStore


def test_tolerance_from_scale():
    assert tolerance_from_scale(0.5) == 20
    assert tolerance_from_scale(2, px=4) == 2


def test_wall_drag_previews_then_commits_one_step(default_room):
    store = RoomStore(default_room)
    gestures = GestureController(store)

    state = gestures.press("plan", Point(1000, 0), tolerance_mm=10)
    assert state == Dragging(start=default_room, target=WallSegmentTarget(0, True), origin=Point(1000, 0))

    gestures.move(Point(1000, -100))
    gestures.move(Point(1000, -300))
    assert store.room.inner_loop[0] == Point(0, -300)
    assert not store.can_undo

    state = gestures.release()
    assert isinstance(state, Committed)
    assert len(store.history.past) == 1

    store.undo()
    assert store.room is default_room


def test_cancel_restores_the_snapshot(default_room):
    store = RoomStore(default_room)
    gestures = GestureController(store)
    gestures.press("plan", Point(2560, 1000), tolerance_mm=10)
    gestures.move(Point(2800, 1000))
    assert store.room.inner_loop[1] == Point(2800, 0)

    assert gestures.cancel() == Cancelled(start=default_room)
    assert store.room is default_room
    assert not store.can_undo
    assert not gestures.is_dragging


def test_release_without_movement_records_nothing(default_room):
    store = RoomStore(default_room)
    gestures = GestureController(store)
    gestures.press("plan", Point(1000, 0), tolerance_mm=10)
    gestures.release()
    assert not store.can_undo


def test_shift_press_inserts_a_vertex(default_room):
    store = RoomStore(default_room)
    gestures = GestureController(store)
    state = gestures.press("plan", Point(1000, 4), tolerance_mm=10, shift=True)
    assert isinstance(state, Committed)
    assert store.room.inner_loop[1] == Point(1000, 0)
    assert len(store.history.past) == 1


def test_press_on_empty_space_stays_idle(default_room):
    gestures = GestureController(RoomStore(default_room))
    assert gestures.press("plan", Point(1000, 1000), tolerance_mm=10) == Idle()
    assert gestures.move(Point(0, 0)) == Idle()
    assert gestures.release() == Idle()


def test_opening_drag_resnaps(window_room):
    store = RoomStore(window_room)
    gestures = GestureController(store)
    state = gestures.press("plan", Point(1280, -45), tolerance_mm=10)
    assert state.target == OpeningPlanTarget("w1", 300)

    gestures.move(Point(1800, 0))
    gestures.release()
    window = store.room.entities["w1"]
    assert window.attach.t == pytest.approx(1800 / 2560)
    assert len(store.history.past) == 1


def test_failed_snap_keeps_previous_preview(window_room):
    store = RoomStore(window_room)
    gestures = GestureController(store)
    gestures.press("plan", Point(1280, -45), tolerance_mm=10)
    gestures.move(Point(1800, 0))
    gestures.move(Point(1280, 1000))
    assert store.room.entities["w1"].attach.t == pytest.approx(1800 / 2560)


def test_sill_drag_in_elevation(window_room):
    store = RoomStore(window_room)
    gestures = GestureController(store)
    gestures.press("north", Point(1280, 1000), tolerance_mm=10)
    gestures.move(Point(1280, 1700))
    gestures.release()
    assert store.room.entities["w1"].sill_height_mm == 700


def test_doors_do_not_start_sill_drags(default_room):
    room = replace(default_room, entities={"d1": make_door()})
    gestures = GestureController(RoomStore(room))
    assert gestures.press("north", Point(1280, 1000), tolerance_mm=10) == Idle()


def test_drag_geometry_depends_only_on_start_and_pointer(default_room):
    target = WallSegmentTarget(0, True)
    origin = Point(1000, 0)
    first = drag_geometry(default_room, target, origin, Point(1000, -200))
    second = drag_geometry(default_room, target, origin, Point(1000, -200))
    assert first == second
    assert first.inner_loop[0] == Point(0, -200)


def test_drag_geometry_on_missing_opening(default_room):
    assert drag_geometry(default_room, OpeningPlanTarget("gone", 300), Point(0, 0), Point(1, 1)) is None


def test_drag_geometry_rejects_unknown_targets(default_room):
    with pytest.raises(TypeError):
        drag_geometry(default_room, object(), Point(0, 0), Point(1, 1))


def test_second_window_is_selected_by_elevation_hit(default_room):
    room = replace(
        default_room,
        entities={"w1": make_window(t=0.25, width=600), "w2": make_window(t=0.75, width=600, entity_id="w2")},
    )
    gestures = GestureController(RoomStore(room))
    state = gestures.press("north", Point(1920, 1000), tolerance_mm=10)
    assert state.target.entity_id == "w2"


def test_default_tolerance_is_in_millimetres(default_room):
    gestures = GestureController(RoomStore(default_room))
    assert DEFAULT_TOLERANCE_MM == tolerance_from_scale(1.0)
    assert isinstance(gestures.press("plan", Point(1000, 5)), Dragging)


def test_press_during_a_drag_is_ignored(default_room):
    store = RoomStore(default_room)
    gestures = GestureController(store)
    first = gestures.press("plan", Point(1280, 0), tolerance_mm=10)
    gestures.move(Point(1280, -300))

    assert gestures.press("plan", Point(0, 2000), tolerance_mm=10) is first
    assert gestures.press("plan", Point(1000, 0), tolerance_mm=10, shift=True) is first
    assert len(store.room.inner_loop) == 4

    gestures.release()
    assert len(store.history.past) == 1
    store.undo()
    assert store.room is default_room


def test_release_and_cancel_after_commit_change_nothing(default_room):
    store = RoomStore(default_room)
    gestures = GestureController(store)
    gestures.press("plan", Point(1000, 0), tolerance_mm=10)
    gestures.move(Point(1000, -200))
    committed = gestures.release()
    history = store.history

    assert gestures.release() is committed
    assert gestures.cancel() is committed
    assert gestures.move(Point(1000, -500)) is committed
    assert store.history is history


def test_cancel_twice_keeps_the_start(default_room):
    store = RoomStore(default_room)
    gestures = GestureController(store)
    gestures.press("plan", Point(2560, 1000), tolerance_mm=10)
    gestures.move(Point(2800, 1000))
    cancelled = gestures.cancel()
    assert gestures.cancel() is cancelled
    assert store.room is default_room


def test_new_gesture_after_commit_is_a_separate_step(default_room):
    store = RoomStore(default_room)
    gestures = GestureController(store)
    gestures.press("plan", Point(1000, 0), tolerance_mm=10)
    gestures.move(Point(1000, -200))
    gestures.release()
    after_first = store.room

    gestures.press("plan", Point(2560, 1000), tolerance_mm=10)
    gestures.move(Point(2700, 1000))
    gestures.release()
    assert len(store.history.past) == 2

    store.undo()
    assert store.room is after_first
