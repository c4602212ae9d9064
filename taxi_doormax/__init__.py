"""Taxi domain with a DOORMAX-style factored model learner."""

from .actions import Actions, NUM_ACTIONS
from .position import Position
from .state import State, StateError
from .world import Costs, Wall, World, WorldError

__version__ = "0.1.0"

__all__ = [
    "Actions",
    "NUM_ACTIONS",
    "Position",
    "State",
    "StateError",
    "Costs",
    "Wall",
    "World",
    "WorldError",
]
