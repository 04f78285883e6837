"""Hatch pattern catalogue and default configurations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.model import HatchAssignment, HatchPair

_GREY = "rgb(122, 122, 122)"
_WHITE = "#ffffff"


@dataclass(frozen=True)
class HatchPattern:
    id: str
    name: str
    default: HatchAssignment


def _pattern(
    pattern_id: str,
    name: str,
    spacing_mm: float = 80,
    line_width_mm: float = 1,
    angle_deg: float = 0,
    color: str = _GREY,
    bg_color: str = _WHITE,
    tile: Optional[Tuple[float, float]] = None,
    pair: Optional[HatchPair] = None,
) -> HatchPattern:
    return HatchPattern(
        id=pattern_id,
        name=name,
        default=HatchAssignment(
            pattern_id=pattern_id,
            color=color,
            bg_color=bg_color,
            spacing_mm=spacing_mm,
            line_width_mm=line_width_mm,
            angle_deg=angle_deg,
            opacity=1.0,
            tile_length_mm=tile[0] if tile else None,
            tile_width_mm=tile[1] if tile else None,
            pair=pair,
        ),
    )


HATCH_PATTERNS: Tuple[HatchPattern, ...] = (
    _pattern("none", "None", spacing_mm=0, line_width_mm=0, color="transparent", bg_color="transparent"),
    _pattern("solid", "Solid", spacing_mm=0, line_width_mm=0, color="rgba(0,0,0,0.15)"),
    _pattern("diagonal-right", "Diagonal right", angle_deg=45),
    _pattern("diagonal-left", "Diagonal left", angle_deg=135),
    _pattern(
        "arch-cut-wall",
        "Wall cut (architectural)",
        spacing_mm=60,
        angle_deg=45,
        color="rgb(126, 126, 126)",
        pair=HatchPair(enabled=True, gap_mm=20),
    ),
    _pattern("crosshatch", "Cross hatch", angle_deg=45),
    _pattern("horizontal", "Horizontal"),
    _pattern("vertical", "Vertical", angle_deg=90),
    _pattern("grid", "Grid", spacing_mm=100),
    _pattern("dots", "Dots", spacing_mm=60, line_width_mm=2),
    _pattern("rectangle", "Rectangle", spacing_mm=100, tile=(600, 300)),
    _pattern("brick", "Brick", spacing_mm=120, tile=(300, 100)),
    _pattern("herringbone", "Herringbone", tile=(80, 40)),
)

_BY_ID: Dict[str, HatchPattern] = {p.id: p for p in HATCH_PATTERNS}
PATTERN_IDS = tuple(_BY_ID)

# Fixed fill of the wall cross-section zones
DEFAULT_WALL_HATCH = HatchAssignment(
    pattern_id="diagonal-right",
    color="rgba(0,0,0,0.25)",
    bg_color=_WHITE,
    spacing_mm=40,
    line_width_mm=0.8,
    angle_deg=45,
    opacity=1.0,
)


def get_pattern(pattern_id: str) -> Optional[HatchPattern]:
    return _BY_ID.get(pattern_id)


def default_config_for(pattern_id: str) -> HatchAssignment:
    """Default configuration of a pattern; unknown ids fall back to ``none``."""
    pattern = _BY_ID.get(pattern_id, HATCH_PATTERNS[0])
    return pattern.default
