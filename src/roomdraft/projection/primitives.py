"""Drawable primitives handed to the rendering backend.

The renderer is a pure consumer of these values: every geometric decision
is made while deriving the scene.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple, Union

from .. import config
from ..core.model import Loop, Point
from ..hatch.zones import HatchFill

DimSide = Literal["in", "out"]


@dataclass(frozen=True)
class Stroke:
    color: str
    width_mm: float
    dash_mm: Optional[Tuple[float, ...]] = None


@dataclass(frozen=True)
class Fill:
    color: str


@dataclass(frozen=True)
class Line:
    a: Point
    b: Point
    stroke: Stroke

    kind = "line"


@dataclass(frozen=True)
class Polyline:
    pts: Loop
    stroke: Stroke
    closed: bool = False
    fill: Optional[Fill] = None

    kind = "polyline"


@dataclass(frozen=True)
class Text:
    at: Point
    text: str
    size_mm: float
    color: str
    angle_deg: Optional[float] = None

    kind = "text"


@dataclass(frozen=True)
class Polygon:
    outer: Loop
    holes: Tuple[Loop, ...] = field(default_factory=tuple)
    fill: Optional[Fill] = None
    stroke_outer: Optional[Stroke] = None
    stroke_holes: Optional[Stroke] = None

    kind = "polygon"


@dataclass(frozen=True)
class Dimension:
    """Dimension annotation between two points.

    Attributes:
        seg_index: Wall segment index, or a negative sentinel for opening
            and wall-height dimensions (routes label edits).
        a: Start point.
        b: End point.
        offset_mm: Distance from ``a-b`` to the dimension line.
        side: Which side of ``a-b`` the line is drawn on.
        text: Label.
    """

    seg_index: int
    a: Point
    b: Point
    text: str
    offset_mm: float = config.DIM_OFFSET_MM
    side: DimSide = "in"
    stroke: Stroke = Stroke(config.DIM_COLOR, 1.0)
    text_size_mm: float = config.DIM_TEXT_SIZE_MM
    arrow_size_mm: float = config.DIM_ARROW_SIZE_MM

    kind = "dimension"


Primitive = Union[Line, Polyline, Text, Polygon, Dimension, HatchFill]


@dataclass
class DraftScene:
    """Ordered primitive list of one view."""

    primitives: List[Primitive] = field(default_factory=list)

    def of_kind(self, kind: str) -> List[Primitive]:
        return [p for p in self.primitives if p.kind == kind]
