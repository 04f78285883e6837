"""Outer wall loop derived from the inner loop."""

import pytest

from roomdraft.core.model import Point
from roomdraft.geom.offset import offset_ortho_loop, wall_ring

RECT = (Point(0, 0), Point(2500, 0), Point(2500, 4000), Point(0, 4000))


def _as_tuples(loop):
    return [(pytest.approx(p.x), pytest.approx(p.y)) for p in loop]


def test_rectangle_offset():
    outer = offset_ortho_loop(RECT, 90)
    assert [(p.x, p.y) for p in outer] == _as_tuples(
        [Point(-90, -90), Point(2590, -90), Point(2590, 4090), Point(-90, 4090)]
    )


def test_zero_thickness_returns_the_inner_loop():
    outer = offset_ortho_loop(RECT, 0)
    assert [(p.x, p.y) for p in outer] == _as_tuples(RECT)


def test_l_shape_offset_keeps_vertex_count(notched_room):
    outer = offset_ortho_loop(notched_room.inner_loop, 100)
    assert len(outer) == len(notched_room.inner_loop)
    assert (outer[1].x, outer[1].y) == (pytest.approx(900), pytest.approx(-100))
    assert (outer[2].x, outer[2].y) == (pytest.approx(900), pytest.approx(-400))


def test_collinear_vertex_is_pushed_along_its_normal():
    loop = (Point(0, 0), Point(1000, 0), Point(2500, 0), Point(2500, 4000), Point(0, 4000))
    outer = offset_ortho_loop(loop, 90)
    assert (outer[1].x, outer[1].y) == (pytest.approx(1000), pytest.approx(-90))


def test_degenerate_loop_is_returned_unchanged():
    loop = (Point(0, 0), Point(10, 0))
    assert offset_ortho_loop(loop, 90) == loop


def test_wall_ring():
    outer, inner = wall_ring(RECT, 90)
    assert inner == RECT
    assert len(outer) == 4
