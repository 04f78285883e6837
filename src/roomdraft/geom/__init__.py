"""Geometry for orthogonal rooms.

This module provides vector and polygon helpers, the orthogonal loop
editor, the wall offset projector and the plan to elevation projector.
"""

from .elevation import edge_faces_direction, elevation_dimension_chain, find_elevation_returns
from .offset import offset_ortho_loop
from .ortho_edit import (
    apply_segment_offset,
    insert_vertex_on_segment,
    move_wall_line,
    offset_segment_with_returns,
    set_segment_length,
)
from .polygon import point_in_polygon, polygon_area

__all__ = [
    "apply_segment_offset",
    "edge_faces_direction",
    "elevation_dimension_chain",
    "find_elevation_returns",
    "insert_vertex_on_segment",
    "move_wall_line",
    "offset_ortho_loop",
    "offset_segment_with_returns",
    "point_in_polygon",
    "polygon_area",
    "set_segment_length",
]
