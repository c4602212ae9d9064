"""
Tests for attribute effects.
"""
import pytest

from taxi_doormax.actions import Actions
from taxi_doormax.doormax import (
    Attribute,
    EFFECT_TYPES,
    EffectError,
    PassengerEffect,
    TaxiColumnEffect,
    TaxiRowEffect,
)
from taxi_doormax.position import Position
from taxi_doormax.state import State


class TestGenerateEffects:
    """Classifying observed transitions."""

    def test_east_move(self, world):
        old = State.build(world, (1, 2), "R", "B")
        _, new = old.apply_action(world, Actions.EAST)

        assert TaxiColumnEffect.generate_effects(old, new) == TaxiColumnEffect(1)
        assert TaxiRowEffect.generate_effects(old, new) is None
        assert PassengerEffect.generate_effects(old, new) is None

    def test_north_move(self, world):
        old = State.build(world, (1, 2), "R", "B")
        _, new = old.apply_action(world, Actions.NORTH)

        assert TaxiColumnEffect.generate_effects(old, new) is None
        assert TaxiRowEffect.generate_effects(old, new) == TaxiRowEffect(-1)

    def test_blocked_move_has_no_effect(self, world):
        old = State.build(world, (1, 1), "R", "B")
        _, new = old.apply_action(world, Actions.EAST)
        assert TaxiColumnEffect.generate_effects(old, new) is None

    def test_pickup_and_dropoff(self, world):
        waiting = State.build(world, (0, 0), "R", "B")
        _, riding = waiting.apply_action(world, Actions.PICK_UP)
        assert PassengerEffect.generate_effects(waiting, riding) == PassengerEffect(None)

        at_destination = State.build(world, (3, 3), None, "B")
        _, delivered = at_destination.apply_action(world, Actions.DROP_OFF)
        assert PassengerEffect.generate_effects(at_destination, delivered) == PassengerEffect("B")

    def test_effects_compare_by_value(self):
        assert TaxiColumnEffect(1) == TaxiColumnEffect(1)
        assert TaxiColumnEffect(1) != TaxiColumnEffect(-1)
        assert PassengerEffect(None) != PassengerEffect("R")
        assert len({TaxiRowEffect(1), TaxiRowEffect(1)}) == 1


class TestApply:
    """Applying learned effects to states."""

    def test_apply_column(self, world):
        state = State.build(world, (1, 2), "R", "B")
        assert TaxiColumnEffect(1).apply(world, state).taxi == Position(2, 2)

    def test_apply_row(self, world):
        state = State.build(world, (1, 2), "R", "B")
        assert TaxiRowEffect(1).apply(world, state).taxi == Position(1, 3)

    def test_apply_passenger(self, world):
        state = State.build(world, (0, 0), "R", "B")
        riding = PassengerEffect(None).apply(world, state)
        assert riding.passenger_in_taxi()
        assert riding.taxi == state.taxi
        assert riding.destination == "B"

    def test_out_of_bounds_raises(self, world):
        state = State.build(world, (4, 2), "R", "B")
        with pytest.raises(EffectError, match=r"\(5,2\)"):
            TaxiColumnEffect(1).apply(world, state)

    def test_unknown_location_raises(self, world):
        state = State.build(world, (0, 0), "R", "B")
        with pytest.raises(EffectError):
            PassengerEffect("Z").apply(world, state)


def test_every_attribute_has_an_effect_type():
    assert set(EFFECT_TYPES) == set(Attribute)
    assert EFFECT_TYPES[Attribute.TAXI_COLUMN] is TaxiColumnEffect
    assert EFFECT_TYPES[Attribute.TAXI_ROW] is TaxiRowEffect
    assert EFFECT_TYPES[Attribute.PASSENGER] is PassengerEffect


def test_str():
    assert str(TaxiColumnEffect(1)) == "x+1"
    assert str(TaxiRowEffect(-1)) == "y-1"
    assert str(PassengerEffect(None)) == "passenger=taxi"
    assert str(PassengerEffect("G")) == "passenger=G"
