"""
Run configuration.

Load exploration runs from YAML or JSON files so worlds, costs and trial
budgets can be changed without modifying code.
"""
from __future__ import annotations

import os
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, Optional, Any

import yaml

from .logging_config import LOG_LEVELS
from .world import Costs, World

logger = logging.getLogger(__name__)


STANDARD_WORLD = """\
┌───┬─────┐
│R .│. . G│
│   │     │
│. .│. . .│
│         │
│. . . . .│
│         │
│.│. .│. .│
│ │   │   │
│Y│. .│B .│
└─┴───┴───┘
"""

SMALL_WORLD = """\
┌─┬───┐
│R│. G│
│ │   │
│. . .│
│     │
│Y B .│
└─────┘
"""


def _standard_costs() -> Dict[str, float]:
    return {
        "movement": -1.0,
        "miss_pickup": -10.0,
        "miss_dropoff": -10.0,
        "empty_dropoff": -11.0,
    }


@dataclass
class RunConfig:
    """
    Configuration for an exploration run.

    Attributes:
        world: Text grid of the world
        costs: Reward table, keyed like ``Costs`` fields
        max_trials: Number of trials (episodes) to run
        max_trial_steps: Step budget per trial
        seed: PRNG seed for the explorer (None = random)
        report: Print the learned rules after the run
        log_level: Logging level name
    """
    world: str = STANDARD_WORLD
    costs: Dict[str, float] = field(default_factory=_standard_costs)
    max_trials: int = 100
    max_trial_steps: int = 200
    seed: Optional[int] = None
    report: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        self.max_trials = max(1, int(self.max_trials))
        self.max_trial_steps = max(1, int(self.max_trial_steps))
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.log_level!r}")

    def build_world(self) -> World:
        """Parse ``world`` with ``costs``. Raises WorldError on a bad grid."""
        return World.build_from_str(self.world, Costs.from_dict(self.costs))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        """Create from dictionary."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def save(self, path: str) -> None:
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: str) -> Optional["RunConfig"]:
        """Load config from JSON or YAML file."""
        if not os.path.exists(path):
            logger.warning(f"Config file not found: {path}")
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()

            if path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)

            return cls.from_dict(data or {})

        except (OSError, yaml.YAMLError, json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            return None


class RunPresets:
    """Pre-configured runs."""

    @staticmethod
    def standard() -> RunConfig:
        """The classic 5x5 taxi world."""
        return RunConfig()

    @staticmethod
    def small(seed: int = 42) -> RunConfig:
        """Small 3x3 world, deterministic, for quick checks."""
        return RunConfig(
            world=SMALL_WORLD,
            max_trials=20,
            max_trial_steps=100,
            seed=seed,
        )
