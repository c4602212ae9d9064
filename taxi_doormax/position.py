from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A grid cell. ``y`` grows southward, ``(0, 0)`` is the north-west corner."""
    x: int
    y: int

    @classmethod
    def coerce(cls, value) -> "Position":
        """Accept either a Position or an ``(x, y)`` pair."""
        if isinstance(value, Position):
            return value
        x, y = value
        return cls(int(x), int(y))

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"
