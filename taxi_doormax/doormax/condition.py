"""
Condition snapshot for rule matching.

A Condition is the set of literals the rule learners look at. It is
computed fresh from a (world, state) pair and never mutated; the action is
not part of it because every action has its own rule sets.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Hashable, Mapping, Optional

from ..actions import Actions
from ..state import State
from ..world import World

Literal = Hashable


@dataclass(frozen=True)
class Condition:
    """
    Literals describing the taxi's surroundings.

    Attributes:
        touch_north: Moving north is blocked by a wall or the grid edge
        touch_south: Moving south is blocked
        touch_east: Moving east is blocked
        touch_west: Moving west is blocked
        on_passenger: The waiting passenger is in the taxi's cell
        on_destination: The taxi stands on the destination
        passenger_in_taxi: The passenger is riding
        taxi_location: Fixed-position id under the taxi, if any
    """
    touch_north: bool
    touch_south: bool
    touch_east: bool
    touch_west: bool
    on_passenger: bool
    on_destination: bool
    passenger_in_taxi: bool
    taxi_location: Optional[str] = None

    @classmethod
    def from_state(cls, world: World, state: State) -> "Condition":
        taxi = state.taxi
        passenger_position = (
            None if state.passenger is None
            else world.get_fixed_position(state.passenger)
        )

        return cls(
            touch_north=world.is_blocked(taxi, Actions.NORTH),
            touch_south=world.is_blocked(taxi, Actions.SOUTH),
            touch_east=world.is_blocked(taxi, Actions.EAST),
            touch_west=world.is_blocked(taxi, Actions.WEST),
            on_passenger=passenger_position == taxi,
            on_destination=world.get_fixed_position(state.destination) == taxi,
            passenger_in_taxi=state.passenger is None,
            taxi_location=world.get_fixed_id(taxi),
        )

    def literals(self) -> Dict[str, Literal]:
        """Literal name -> value, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __getitem__(self, name: str) -> Literal:
        if name not in _LITERAL_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def satisfies(self, required: Mapping[str, Literal]) -> bool:
        """True if every required literal holds with the required value."""
        return all(self[name] == value for name, value in required.items())

    def differences(self, other: "Condition") -> Dict[str, Literal]:
        """Literals whose value in ``other`` differs from this condition."""
        return {
            name: getattr(other, name)
            for name in _LITERAL_NAMES
            if getattr(self, name) != getattr(other, name)
        }

    def __str__(self) -> str:
        return format_literals(self.literals())


_LITERAL_NAMES = tuple(f.name for f in fields(Condition))


def format_literals(literals: Mapping[str, Literal]) -> str:
    """Compact rendering used by the learner dumps."""
    parts = []
    for name, value in literals.items():
        if value is True:
            parts.append(name)
        elif value is False:
            parts.append(f"!{name}")
        else:
            parts.append(f"{name}={value}")
    return "[" + " ".join(parts) + "]"
