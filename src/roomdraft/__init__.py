"""Room Draft - an orthogonal room drafting engine.

A single orthogonal room polygon is the source of truth; plan and elevation
views, openings, hatch zones and undo/redo history are derived from it.
"""

__version__ = "0.1.0"
__author__ = "Marco"

from .core.model import Point, Room, WallOpening, create_default_room
from .engine.history import History, RoomStore

__all__ = ["History", "Point", "Room", "RoomStore", "WallOpening", "create_default_room"]
