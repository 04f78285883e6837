"""Core API for room operations.

This module provides the main interface for applying dict-described
operations to rooms and to an undo history.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..core.model import Room
from . import history as hist
from .commands import Command
from .history import History
from .ops import get_operation

logger = logging.getLogger(__name__)

HISTORY_OPS = ("undo", "redo")


def build_command(room: Room, operation: dict) -> Command:
    """Build the undoable command described by ``operation``.

    Args:
        room: The room the command is built against.
        operation: Dictionary with an ``op`` (or ``type``) field naming a
            registered operation, plus its parameters.

    Returns:
        The command.

    Raises:
        ValueError: If the operation type is missing or not recognized, or
            a parameter is missing or invalid.
    """
    operation_type = operation.get("op") or operation.get("type")

    if operation_type is None:
        raise ValueError("Operation must have an 'op' or 'type' field")

    try:
        op = get_operation(operation_type)
    except KeyError:
        raise ValueError(f"Unknown operation type: {operation_type}") from None

    # Extract operation parameters (exclude 'op' and 'type' fields)
    params = {k: v for k, v in operation.items() if k not in ("op", "type")}

    op.precheck(room, **params)
    try:
        return op.command(room, **params)
    except TypeError as e:
        raise ValueError(f"Invalid parameters for '{operation_type}': {e}") from e


def apply(room: Room, operation: dict) -> Room:
    """Apply an operation to a room and return the resulting room.

    Rejected edits (e.g. a snap that finds no wall) return ``room`` itself.

    Raises:
        ValueError: If the operation type is not recognized or its
            parameters are invalid.
    """
    return build_command(room, operation).after


def apply_to_history(history: History, operation: dict) -> History:
    """Execute one operation (or ``undo``/``redo``) on a history."""
    operation_type = operation.get("op") or operation.get("type")
    if operation_type == "undo":
        return hist.undo(history)
    if operation_type == "redo":
        return hist.redo(history)

    command = build_command(history.present, operation)
    if command.is_noop:
        logger.debug("Operation %s left the room unchanged", operation_type)
    return hist.execute(history, command)


def apply_operations(history: History, operations: Iterable[dict]) -> History:
    """Apply operations in order; each effective one becomes one history entry.

    Raises:
        ValueError: On the first invalid operation. Earlier operations are
            not applied to the caller's history since histories are values.
    """
    for i, operation in enumerate(operations):
        try:
            history = apply_to_history(history, operation)
        except ValueError as e:
            raise ValueError(f"Operation {i}: {e}") from e
    return history
