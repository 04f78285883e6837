"""Hatch patterns and fillable zones."""

from .patterns import DEFAULT_WALL_HATCH, HATCH_PATTERNS, default_config_for
from .zones import HatchZone, get_hatch_zones, hit_test_zone

__all__ = ["DEFAULT_WALL_HATCH", "HATCH_PATTERNS", "HatchZone", "default_config_for", "get_hatch_zones", "hit_test_zone"]
