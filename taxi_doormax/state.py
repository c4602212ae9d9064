"""
Taxi state and its dynamics.

A State is an immutable value: applying an action returns the reward and a
new State. ``passenger is None`` means the passenger is riding in the taxi.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Union

from .actions import Actions
from .position import Position
from .world import World


class StateError(ValueError):
    """Raised when a state does not fit its world."""
    pass


@dataclass(frozen=True)
class State:
    """
    Full taxi state.

    Attributes:
        taxi: Taxi cell
        passenger: Fixed-position id where the passenger waits, None if riding
        destination: Fixed-position id the passenger wants to reach
    """
    taxi: Position
    passenger: Optional[str]
    destination: str

    @classmethod
    def build(
        cls,
        world: World,
        taxi_pos: Union[Position, Tuple[int, int]],
        passenger: Optional[str],
        destination: str,
    ) -> "State":
        """
        Build a state, checking it against ``world``.

        Raises:
            StateError: If the taxi is off the grid or an id is not one of
                the world's fixed positions
        """
        taxi = Position.coerce(taxi_pos)
        if not world.contains(taxi):
            raise StateError(f"Invalid taxi position {taxi}")

        if passenger is not None and world.get_fixed_position(passenger) is None:
            raise StateError(f"Invalid passenger location {passenger!r}")

        if world.get_fixed_position(destination) is None:
            raise StateError(f"Invalid destination {destination!r}")

        return cls(taxi=taxi, passenger=passenger, destination=destination)

    def passenger_in_taxi(self) -> bool:
        return self.passenger is None

    def at_destination(self) -> bool:
        """True once the passenger has been delivered."""
        return self.passenger == self.destination

    def apply_action(self, world: World, action: Actions) -> Tuple[float, "State"]:
        """
        Apply ``action`` in ``world``.

        Returns:
            (reward, resulting state)
        """
        costs = world.costs
        offset = action.movement()

        if offset is not None:
            if world.is_blocked(self.taxi, action):
                return costs.movement, self
            return costs.movement, replace(self, taxi=self.taxi.offset(*offset))

        if action == Actions.PICK_UP:
            if (
                self.passenger is not None
                and world.get_fixed_position(self.passenger) == self.taxi
            ):
                return 0.0, replace(self, passenger=None)
            return costs.miss_pickup, self

        # DropOff
        if self.passenger is not None:
            return costs.empty_dropoff, self
        if world.get_fixed_position(self.destination) == self.taxi:
            return 0.0, replace(self, passenger=self.destination)
        return costs.miss_dropoff, self

    def display(self, world: World) -> str:
        """Render the world grid with this state drawn on it."""
        lines: List[List[str]] = [list(line) for line in world.display_strings()]

        for position in world.fixed_positions.values():
            lines[2 * position.y + 1][2 * position.x + 1] = "."

        def mark(position: Position, char: str) -> None:
            lines[2 * position.y + 1][2 * position.x + 1] = char

        mark(world.get_fixed_position(self.destination), "d")
        if self.passenger is not None:
            mark(world.get_fixed_position(self.passenger), "p")
        mark(self.taxi, "T" if self.passenger is None else "t")

        return "".join("".join(line) + "\n" for line in lines)

    def __str__(self) -> str:
        passenger = "taxi" if self.passenger is None else self.passenger
        return f"State(taxi={self.taxi}, passenger={passenger}, destination={self.destination})"
