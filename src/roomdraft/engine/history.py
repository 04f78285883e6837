"""Command history with preview/commit semantics.

``History`` is an immutable value; the transition functions return a new
history (or the same one for a no-op). ``RoomStore`` holds the current
history and is the only mutable object in the engine; it is passed
explicitly to whatever needs it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Tuple

from ..core.model import Room, create_default_room
from .commands import Command


@dataclass(frozen=True)
class History:
    """Undo/redo state.

    Attributes:
        present: Current room.
        past: Earlier rooms, oldest first.
        future: Undone rooms, next redo first.
    """

    present: Room
    past: Tuple[Room, ...] = field(default_factory=tuple)
    future: Tuple[Room, ...] = field(default_factory=tuple)

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)


def execute(history: History, command: Command) -> History:
    before = history.present
    after = command.do(before)
    if after is before:
        return history
    return History(present=after, past=history.past + (before,), future=())


def undo(history: History) -> History:
    if not history.past:
        return history
    return History(
        present=history.past[-1],
        past=history.past[:-1],
        future=(history.present,) + history.future,
    )


def redo(history: History) -> History:
    if not history.future:
        return history
    return History(
        present=history.future[0],
        past=history.past + (history.present,),
        future=history.future[1:],
    )


def preview(history: History, updater: Callable[[Room], Room]) -> History:
    """Replace ``present`` without touching the undo stacks."""
    return replace(history, present=updater(history.present))


def commit_snapshot(history: History, before: Room, after: Room) -> History:
    """Record a whole gesture as one undoable step from ``before`` to ``after``."""
    if after is before:
        return history
    return History(present=after, past=history.past + (before,), future=())


def replace_present(history: History, room: Room) -> History:
    return replace(history, present=room)


class RoomStore:
    """Holds the history of one editing session.

    Example:
        >>> from roomdraft.engine.commands import set_wall_height_command
        >>> store = RoomStore()
        >>> store.execute(set_wall_height_command(store.room, 2600))
        >>> store.undo()
    """

    def __init__(self, room: Optional[Room] = None):
        self.history = History(present=room if room is not None else create_default_room())

    @property
    def room(self) -> Room:
        return self.history.present

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def execute(self, command: Command) -> None:
        self.history = execute(self.history, command)

    def undo(self) -> None:
        self.history = undo(self.history)

    def redo(self) -> None:
        self.history = redo(self.history)

    def preview(self, updater: Callable[[Room], Room]) -> None:
        self.history = preview(self.history, updater)

    def commit_snapshot(self, before: Room, after: Room) -> None:
        self.history = commit_snapshot(self.history, before, after)

    def replace_room(self, room: Room) -> None:
        self.history = replace_present(self.history, room)
