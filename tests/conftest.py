"""Shared room fixtures."""

from dataclasses import replace

import pytest

from roomdraft.core.model import Point, Room, WallAttachment, WallOpening, create_default_room


def make_rect(width, depth, thickness=90.0, height=2400.0, **kwargs):
    return Room(
        id="r",
        inner_loop=(Point(0, 0), Point(width, 0), Point(width, depth), Point(0, depth)),
        wall_thickness=thickness,
        wall_height=height,
        **kwargs,
    )


def make_window(seg_index=0, t=0.5, width=1200.0, height=1200.0, sill=900.0, entity_id="w1", **style):
    return WallOpening(
        id=entity_id,
        attach=WallAttachment(wall_seg_index=seg_index, t=t),
        opening_type="window",
        width_mm=width,
        height_mm=height,
        sill_height_mm=sill,
        **style,
    )


def make_door(seg_index=0, t=0.5, width=820.0, entity_id="d1", **style):
    return WallOpening(
        id=entity_id,
        attach=WallAttachment(wall_seg_index=seg_index, t=t),
        opening_type="door",
        width_mm=width,
        height_mm=2040.0,
        sill_height_mm=0.0,
        **style,
    )


@pytest.fixture
def default_room():
    return create_default_room()


@pytest.fixture
def rect_room():
    """2500 x 4000 rectangle."""
    return make_rect(2500.0, 4000.0)


@pytest.fixture
def notched_room():
    """Default room with the right part of the north wall pushed out by 300."""
    return Room(
        id="notch",
        inner_loop=(
            Point(0, 0),
            Point(1000, 0),
            Point(1000, -300),
            Point(2560, -300),
            Point(2560, 2070),
            Point(0, 2070),
        ),
        wall_thickness=90.0,
        wall_height=2400.0,
    )


@pytest.fixture
def window_room(default_room):
    return replace(default_room, entities={"w1": make_window()})
