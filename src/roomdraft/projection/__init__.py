"""Derivation of drawable primitive lists for the plan and elevation views."""

from .bounds import world_bounds
from .scene import derive_scene

__all__ = ["derive_scene", "world_bounds"]
