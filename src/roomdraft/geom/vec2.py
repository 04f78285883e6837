"""2D vector algebra on Point values."""

from __future__ import annotations

import math

from .. import config
from ..core.model import Point


def dot(a: Point, b: Point) -> float:
    return a.x * b.x + a.y * b.y


def perp(v: Point) -> Point:
    """Rotate 90 degrees counterclockwise: (x, y) -> (-y, x)."""
    return Point(-v.y, v.x)


def add(a: Point, b: Point) -> Point:
    return Point(a.x + b.x, a.y + b.y)


def sub(a: Point, b: Point) -> Point:
    return Point(a.x - b.x, a.y - b.y)


def scale(v: Point, s: float) -> Point:
    return Point(v.x * s, v.y * s)


def length(v: Point) -> float:
    return math.hypot(v.x, v.y)


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def normalize(v: Point) -> Point:
    """Unit vector in the direction of ``v``; +X for a zero vector."""
    l = length(v)
    if l < config.DIRECTION_EPSILON:
        return Point(1.0, 0.0)
    return Point(v.x / l, v.y / l)


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)
