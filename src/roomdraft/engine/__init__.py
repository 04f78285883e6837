"""Engine module for room editing.

This module provides undoable commands, the history store, the gesture
state machine and the dict-based operation API.
"""

from .api import apply, apply_operations, apply_to_history
from .gestures import GestureController
from .history import History, RoomStore

__all__ = ["GestureController", "History", "RoomStore", "apply", "apply_operations", "apply_to_history"]
