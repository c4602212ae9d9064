"""
Primitive taxi actions.

The learners keep one rule set per action, so every action has a stable
index in ``range(NUM_ACTIONS)``.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class Actions(str, Enum):
    """All primitive actions, in index order."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    PICK_UP = "pick_up"
    DROP_OFF = "drop_off"

    def to_index(self) -> int:
        return _ACTION_ORDER.index(self)

    @classmethod
    def from_index(cls, index: int) -> Optional["Actions"]:
        """Inverse of ``to_index``. Returns None for an out-of-range index."""
        if 0 <= index < len(_ACTION_ORDER):
            return _ACTION_ORDER[index]
        return None

    def movement(self) -> Optional[Tuple[int, int]]:
        """Grid offset ``(dx, dy)`` for movement actions, None otherwise."""
        return _MOVEMENT.get(self)

    def __str__(self) -> str:
        return self.value


_ACTION_ORDER = tuple(Actions)

_MOVEMENT = {
    Actions.NORTH: (0, -1),
    Actions.SOUTH: (0, 1),
    Actions.EAST: (1, 0),
    Actions.WEST: (-1, 0),
}

NUM_ACTIONS = len(_ACTION_ORDER)
