"""
Taxi world: grid size, walls, fixed positions and action costs.

Worlds are described with a text grid. Cells sit on odd lines and odd
columns; the characters between them are walls when they are not blank::

    ┌───┬─────┐
    │R .│. . .│
    │   │     │
    │. .│G . .│
    └───┴─────┘

A cell is either ``.`` or a single letter naming a fixed position (a place
where the passenger can wait or be delivered).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any

from .actions import Actions
from .position import Position

logger = logging.getLogger(__name__)


class WorldError(ValueError):
    """Raised when a world description cannot be parsed."""
    pass


@dataclass
class Costs:
    """
    Rewards handed out by the world.

    Attributes:
        movement: Reward for every movement action, blocked or not
        miss_pickup: Reward for a PickUp away from the waiting passenger
        miss_dropoff: Reward for a DropOff of a riding passenger off destination
        empty_dropoff: Reward for a DropOff with nobody in the taxi
    """
    movement: float = -1.0
    miss_pickup: float = -10.0
    miss_dropoff: float = -10.0
    empty_dropoff: float = -10.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Costs":
        """
        Build from a mapping; unknown keys are ignored.

        Raises:
            WorldError: If ``data`` is not a mapping or a known key has a
                non-numeric value
        """
        if not isinstance(data, dict):
            raise WorldError(f"Costs must be a mapping, got {data!r}")
        values = {}
        for key, value in data.items():
            if key not in cls.__dataclass_fields__:
                continue
            try:
                values[key] = float(value)
            except (TypeError, ValueError) as e:
                raise WorldError(f"Invalid cost {key}={value!r}") from e
        return cls(**values)


@dataclass(frozen=True)
class Wall:
    north: bool = False
    south: bool = False
    east: bool = False
    west: bool = False


@dataclass
class World:
    """
    Parsed taxi world.

    Attributes:
        width: Number of columns
        height: Number of rows
        costs: Reward table
        walls: Row-major wall description, ``walls[y][x]``
        fixed_positions: Fixed-position id -> cell, in reading order
    """
    width: int
    height: int
    costs: Costs = field(default_factory=Costs)
    walls: List[List[Wall]] = field(default_factory=list)
    fixed_positions: Dict[str, Position] = field(default_factory=dict)
    source_lines: List[str] = field(default_factory=list, repr=False)

    @classmethod
    def build_from_str(cls, source: str, costs: Optional[Costs] = None) -> "World":
        """
        Parse a world from its text grid.

        Args:
            source: Text grid, one line per row of characters
            costs: Reward table (defaults to ``Costs()``)

        Returns:
            The parsed World

        Raises:
            WorldError: If the grid is ragged, too small, or has unknown
                cell characters or duplicate fixed-position ids
        """
        lines = source.split("\n")
        while lines and lines[-1] == "":
            lines.pop()

        if len(lines) < 3 or len(lines) % 2 == 0:
            raise WorldError(f"World needs an odd number of lines (>= 3), got {len(lines)}")

        line_width = len(lines[0])
        for index, line in enumerate(lines):
            if len(line) != line_width:
                raise WorldError(
                    f"Line {index} has length {len(line)}, expected {line_width}"
                )
        if line_width < 3 or line_width % 2 == 0:
            raise WorldError(f"World lines need an odd length (>= 3), got {line_width}")

        width = (line_width - 1) // 2
        height = (len(lines) - 1) // 2

        walls: List[List[Wall]] = []
        fixed_positions: Dict[str, Position] = {}

        for y in range(height):
            row_line = lines[2 * y + 1]
            row: List[Wall] = []
            for x in range(width):
                column = 2 * x + 1
                cell = row_line[column]

                if cell.isalpha():
                    if cell in fixed_positions:
                        raise WorldError(f"Duplicate fixed position '{cell}'")
                    fixed_positions[cell] = Position(x, y)
                elif cell != ".":
                    raise WorldError(
                        f"Unexpected character '{cell}' at ({x},{y})"
                    )

                row.append(Wall(
                    north=lines[2 * y][column] != " ",
                    south=lines[2 * y + 2][column] != " ",
                    east=row_line[column + 1] != " ",
                    west=row_line[column - 1] != " ",
                ))
            walls.append(row)

        world = cls(
            width=width,
            height=height,
            costs=costs or Costs(),
            walls=walls,
            fixed_positions=fixed_positions,
            source_lines=lines,
        )
        logger.debug(
            f"Built {width}x{height} world with fixed positions "
            f"{''.join(fixed_positions)}"
        )
        return world

    def contains(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def get_wall(self, position: Position) -> Wall:
        return self.walls[position.y][position.x]

    def is_blocked(self, position: Position, action: Actions) -> bool:
        """True if a movement ``action`` from ``position`` cannot leave the cell."""
        offset = action.movement()
        if offset is None:
            return False

        wall = self.get_wall(position)
        if action == Actions.NORTH and wall.north:
            return True
        if action == Actions.SOUTH and wall.south:
            return True
        if action == Actions.EAST and wall.east:
            return True
        if action == Actions.WEST and wall.west:
            return True

        return not self.contains(position.offset(*offset))

    @property
    def fixed_ids(self) -> List[str]:
        return list(self.fixed_positions)

    def num_fixed_positions(self) -> int:
        return len(self.fixed_positions)

    def get_fixed_position(self, fixed_id: str) -> Optional[Position]:
        return self.fixed_positions.get(fixed_id)

    def get_fixed_id(self, position: Position) -> Optional[str]:
        """Id of the fixed position at ``position``, if there is one."""
        for fixed_id, fixed_position in self.fixed_positions.items():
            if fixed_position == position:
                return fixed_id
        return None

    def display_strings(self) -> List[str]:
        """The grid lines this world was built from."""
        return list(self.source_lines)
