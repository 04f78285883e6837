"""Plan to elevation projection.

For a clockwise inner loop in Y-down coordinates the outward normal of a
directed edge ``A -> B`` tells which cardinal elevation it belongs to:

    edge going +X -> normal (0, -1) -> north
    edge going -X -> normal (0, +1) -> south
    edge going +Y -> normal (+1, 0) -> east
    edge going -Y -> normal (-1, 0) -> west

Elevation coordinates put ``x`` along the face (0 at the loop's minimum on
the face axis) and ``y`` downward from the ceiling (0) to the floor (H).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .. import config
from ..core.model import ElevationView, Loop, Room, inner_bounds
from .segments import seg_endpoints


@dataclass(frozen=True)
class FacingSegment:
    """A wall segment projected onto an elevation face.

    Attributes:
        seg_index: Index of the segment on the inner loop.
        start_h: Left end along the face.
        end_h: Right end along the face.
    """

    seg_index: int
    start_h: float
    end_h: float

    @property
    def length(self) -> float:
        return self.end_h - self.start_h


@dataclass(frozen=True)
class DimensionLink:
    """One entry of an elevation dimension chain."""

    seg_index: int
    start_h: float
    end_h: float
    text: str


def is_north_south(view: ElevationView) -> bool:
    return view in ("north", "south")


def edge_faces_direction(loop: Loop, edge_idx: int, view: ElevationView) -> bool:
    """Check whether edge ``edge_idx`` faces the given elevation.

    An edge is horizontal only if ``|dx| > |dy|`` strictly, so a
    zero-length edge counts as vertical and never faces north or south.
    """
    a, b = seg_endpoints(loop, edge_idx)
    dx = b.x - a.x
    dy = b.y - a.y
    horizontal = abs(dx) > abs(dy)

    if view == "north":
        return horizontal and dx > 0
    if view == "south":
        return horizontal and dx < 0
    if view == "east":
        return not horizontal and dy > 0
    if view == "west":
        return not horizontal and dy < 0
    raise ValueError(f"Unknown elevation view: {view}")


def elevation_frame(loop: Loop, view: ElevationView) -> Tuple[float, float]:
    """Origin and face length of an elevation.

    Returns:
        ``(origin_h, face_length)``: the loop's minimum and extent on the
        world axis the face runs along (x for north/south, y for east/west).
    """
    b = inner_bounds(loop)
    if is_north_south(view):
        return b.min_x, b.width
    return b.min_y, b.height


def face_length(room: Room, view: ElevationView) -> float:
    return elevation_frame(room.inner_loop, view)[1]


def find_elevation_returns(loop: Loop, view: ElevationView, origin_h: float, total_len: float) -> List[float]:
    """Positions of return walls along an elevation face.

    A return is an edge perpendicular to the face whose previous or next
    edge faces the view. Positions within ``RETURN_TOLERANCE_MM`` of either
    face end are ignored; the rest are rounded to 0.1mm, deduplicated and
    sorted.

    Args:
        loop: Clockwise inner loop.
        view: Target elevation.
        origin_h: Face origin on the world axis (see ``elevation_frame``).
        total_len: Face length.

    Returns:
        Sorted return positions in elevation coordinates.
    """
    n = len(loop)
    ns = is_north_south(view)
    tol = config.RETURN_TOLERANCE_MM
    seen = set()

    for i in range(n):
        a, b = seg_endpoints(loop, i)
        horizontal = abs(b.x - a.x) > abs(b.y - a.y)
        is_return = (not horizontal) if ns else horizontal
        if not is_return:
            continue

        if not edge_faces_direction(loop, (i - 1 + n) % n, view) and not edge_faces_direction(loop, (i + 1) % n, view):
            continue

        pos = (a.x if ns else a.y) - origin_h
        if tol < pos < total_len - tol:
            seen.add(round(pos * 10) / 10)

    return sorted(seen)


def room_elevation_returns(room: Room, view: ElevationView) -> List[float]:
    origin_h, total_len = elevation_frame(room.inner_loop, view)
    return find_elevation_returns(room.inner_loop, view, origin_h, total_len)


def facing_segments(loop: Loop, view: ElevationView) -> List[FacingSegment]:
    """Segments facing ``view``, sorted left to right along the face."""
    origin_h, _ = elevation_frame(loop, view)
    ns = is_north_south(view)
    out = []
    for i in range(len(loop)):
        if not edge_faces_direction(loop, i, view):
            continue
        a, b = seg_endpoints(loop, i)
        ca, cb = (a.x, b.x) if ns else (a.y, b.y)
        out.append(FacingSegment(seg_index=i, start_h=min(ca, cb) - origin_h, end_h=max(ca, cb) - origin_h))
    out.sort(key=lambda s: s.start_h)
    return out


def elevation_dimension_chain(room: Room, view: ElevationView) -> List[DimensionLink]:
    """Left-to-right dimension chain along the bottom of an elevation.

    Each link carries the segment's override text if one is stored,
    otherwise its rounded length.
    """
    chain = []
    for seg in facing_segments(room.inner_loop, view):
        text = room.dim_text.get(seg.seg_index)
        if text is None:
            text = f"{round(seg.length)}"
        chain.append(DimensionLink(seg_index=seg.seg_index, start_h=seg.start_h, end_h=seg.end_h, text=text))
    return chain


def segment_elevation_span(room: Room, seg_index: int, view: ElevationView) -> Optional[Tuple[float, float]]:
    """``(start_h, seg_length)`` of a segment on an elevation it faces, else None."""
    loop = room.inner_loop
    if not 0 <= seg_index < len(loop) or not edge_faces_direction(loop, seg_index, view):
        return None
    origin_h, _ = elevation_frame(loop, view)
    a, b = seg_endpoints(loop, seg_index)
    ns = is_north_south(view)
    a_h = (a.x if ns else a.y) - origin_h
    b_h = (b.x if ns else b.y) - origin_h
    return min(a_h, b_h), abs(b_h - a_h)
