"""
Attribute effects.

Each effect kind watches one state attribute. The class classifies an
observed transition (``generate_effects``) and an instance applies a learned
change to a state (``apply``). The set of attributes is closed; ``Attribute``
names them and ``EFFECT_TYPES`` maps each to its effect class.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Type

from ..state import State, StateError
from ..world import World


class EffectError(Exception):
    """Raised when applying an effect produces an invalid state."""
    pass


class Effect(ABC):
    """Base class for learned attribute changes."""

    @classmethod
    @abstractmethod
    def generate_effects(cls, old_state: State, new_state: State) -> Optional["Effect"]:
        """The observed change, or None if the attribute did not change."""

    @abstractmethod
    def apply(self, world: World, state: State) -> State:
        """
        Apply this change to ``state``.

        Raises:
            EffectError: If the resulting state does not fit ``world``
        """


def _rebuild(world: World, state: State, taxi, passenger: Optional[str]) -> State:
    try:
        return State.build(world, taxi, passenger, state.destination)
    except StateError as e:
        raise EffectError(str(e)) from e


@dataclass(frozen=True)
class TaxiColumnEffect(Effect):
    """Change of the taxi's x coordinate."""
    delta: int

    @classmethod
    def generate_effects(cls, old_state: State, new_state: State) -> Optional["TaxiColumnEffect"]:
        delta = new_state.taxi.x - old_state.taxi.x
        return cls(delta) if delta else None

    def apply(self, world: World, state: State) -> State:
        return _rebuild(world, state, state.taxi.offset(self.delta, 0), state.passenger)

    def __str__(self) -> str:
        return f"x{self.delta:+d}"


@dataclass(frozen=True)
class TaxiRowEffect(Effect):
    """Change of the taxi's y coordinate."""
    delta: int

    @classmethod
    def generate_effects(cls, old_state: State, new_state: State) -> Optional["TaxiRowEffect"]:
        delta = new_state.taxi.y - old_state.taxi.y
        return cls(delta) if delta else None

    def apply(self, world: World, state: State) -> State:
        return _rebuild(world, state, state.taxi.offset(0, self.delta), state.passenger)

    def __str__(self) -> str:
        return f"y{self.delta:+d}"


@dataclass(frozen=True)
class PassengerEffect(Effect):
    """New passenger location; ``location=None`` means now inside the taxi."""
    location: Optional[str]

    @classmethod
    def generate_effects(cls, old_state: State, new_state: State) -> Optional["PassengerEffect"]:
        if old_state.passenger == new_state.passenger:
            return None
        return cls(new_state.passenger)

    def apply(self, world: World, state: State) -> State:
        return _rebuild(world, state, state.taxi, self.location)

    def __str__(self) -> str:
        return "passenger=taxi" if self.location is None else f"passenger={self.location}"


class Attribute(str, Enum):
    """State attributes with their own rule sets."""

    TAXI_COLUMN = "taxi_column"
    TAXI_ROW = "taxi_row"
    PASSENGER = "passenger"


EFFECT_TYPES: Dict[Attribute, Type[Effect]] = {
    Attribute.TAXI_COLUMN: TaxiColumnEffect,
    Attribute.TAXI_ROW: TaxiRowEffect,
    Attribute.PASSENGER: PassengerEffect,
}
