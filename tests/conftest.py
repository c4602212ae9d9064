import logging

import pytest

from taxi_doormax.world import World, Costs
from taxi_doormax.doormax import Condition


# R at (0,0), G at (2,1), Y at (1,3), B at (3,3)
LEARNING_WORLD = (
    "┌───┬─────┐\n"
    "│R .│. . .│\n"
    "│   │     │\n"
    "│. .│G . .│\n"
    "│         │\n"
    "│. . . . .│\n"
    "│         │\n"
    "│.│Y .│B .│\n"
    "│ │   │   │\n"
    "│.│. .│. .│\n"
    "└─┴───┴───┘\n"
)

PLAIN_WORLD = (
    "┌───┬─────┐\n"
    "│. .│. . .│\n"
    "│   │     │\n"
    "│. .│. . .│\n"
    "│         │\n"
    "│. . . . .│\n"
    "│ ┌─      │\n"
    "│.│. .│. .│\n"
    "│ │   │   │\n"
    "│.│. .│. .│\n"
    "└─┴───┴───┘\n"
)


@pytest.fixture
def world():
    """The world used by the learner scenarios."""
    return World.build_from_str(LEARNING_WORLD, Costs())


def make_condition(**overrides) -> Condition:
    """A condition with every literal false unless overridden."""
    literals = dict(
        touch_north=False,
        touch_south=False,
        touch_east=False,
        touch_west=False,
        on_passenger=False,
        on_destination=False,
        passenger_in_taxi=False,
        taxi_location=None,
    )
    literals.update(overrides)
    return Condition(**literals)


@pytest.fixture
def restore_logging():
    """Undo configure_logging side effects on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    logger_class = logging.getLoggerClass()
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    logging.setLoggerClass(logger_class)
