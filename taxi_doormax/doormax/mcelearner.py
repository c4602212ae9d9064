"""
Conditioned-effect learners.

``CELearner`` owns the rules for one (action, attribute) pair: each rule is a
ConditionLearner plus the effect it produces. ``MCELearner`` keeps one
CELearner per action for every attribute and composes their answers into a
full next-state prediction.

Prediction is three-valued. ``None`` means the model does not know and the
caller should explore; a returned state is a confident answer, including
"nothing changes" when no rule matches.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from ..actions import Actions, NUM_ACTIONS
from ..state import State, StateError
from ..world import World
from .condition import Condition
from .condition_learner import ConditionLearner, MatchResult
from .effect import Attribute, Effect, EffectError, EFFECT_TYPES

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Effect)


@dataclass(frozen=True)
class RuleConflict:
    """
    Description of a rule-set reset.

    Attributes:
        first: Rendering of the first overlapping rule
        second: Rendering of the second overlapping rule
        discarded: Number of rules thrown away
        action: Action the rule set belongs to, when known
        attribute: Attribute the rule set belongs to, when known
    """
    first: str
    second: str
    discarded: int
    action: Optional[Actions] = None
    attribute: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "first": self.first,
            "second": self.second,
            "discarded": self.discarded,
            "action": self.action.value if self.action else None,
            "attribute": self.attribute,
        }


def find_overlap(learners: List[Tuple[ConditionLearner, Any]]) -> Optional[Tuple[int, int]]:
    """Indices of the first pair of rules whose conditions overlap."""
    for i in range(len(learners) - 1):
        for j in range(i + 1, len(learners)):
            if learners[i][0].overlaps(learners[j][0]):
                return i, j
    return None


def log_conflict(conflict: RuleConflict) -> None:
    logger.warning(
        f"Rule conflict: {conflict.first} overlaps {conflict.second}, "
        f"discarded {conflict.discarded} rules",
        extra={
            "subsystem": "doormax",
            "event_type": "rule_conflict",
            "extra_data": conflict.to_dict(),
        },
    )


class CELearner(Generic[E]):
    """
    Rules for one action and one state attribute.

    Rule conditions are kept pairwise non-overlapping; when an update makes
    two of them overlap, every rule is discarded and learning starts over.
    """

    def __init__(
        self,
        effect_type: Type[E],
        action: Optional[Actions] = None,
        attribute: Optional[str] = None,
    ):
        self.effect_type = effect_type
        self.action = action
        self.attribute = attribute
        self._rules: List[Tuple[ConditionLearner, E]] = []
        self.reset_count = 0

    @property
    def rules(self) -> Tuple[Tuple[ConditionLearner, E], ...]:
        return tuple(self._rules)

    def predict(self, world: World, state: State, condition: Condition) -> Optional[State]:
        """
        Predict the state after this rule set's attribute is updated.

        Returns:
            None if any rule cannot tell whether it applies or two matching
            rules disagree; the changed state if a rule matches; ``state``
            itself if no rule matches.

        Raises:
            EffectError: If a learned effect cannot be applied to ``state``
        """
        result: Optional[State] = None

        for condition_learner, effect in self._rules:
            match = condition_learner.predict(condition)
            if match == MatchResult.UNKNOWN:
                return None
            if match == MatchResult.NO_MATCH:
                continue

            predicted = effect.apply(world, state)
            if result is None:
                result = predicted
            elif result != predicted:
                return None

        return state if result is None else result

    def apply_experience(
        self,
        condition: Condition,
        old_state: State,
        new_state: State,
    ) -> Optional[RuleConflict]:
        """
        Learn from one observed transition.

        Returns:
            The conflict that reset this rule set, if one was found
        """
        observed = self.effect_type.generate_effects(old_state, new_state)

        if observed is None:
            for condition_learner, _ in self._rules:
                condition_learner.apply_experience(condition, False)
            return None

        found = False
        for condition_learner, effect in self._rules:
            if effect == observed:
                condition_learner.apply_experience(condition, True)
                found = True
            else:
                condition_learner.apply_experience(condition, False)

        if not found:
            condition_learner = ConditionLearner()
            condition_learner.apply_experience(condition, True)
            for other, _ in self._rules:
                condition_learner.remove_overlap(other)
            self._rules.append((condition_learner, observed))
            logger.debug(f"New rule {condition_learner} => {observed} for {self._label()}")
            return None

        overlap = find_overlap(self._rules)
        if overlap is None:
            return None

        i, j = overlap
        conflict = RuleConflict(
            first=self._render(i),
            second=self._render(j),
            discarded=len(self._rules),
            action=self.action,
            attribute=self.attribute,
        )
        self._rules = []
        self.reset_count += 1
        log_conflict(conflict)
        return conflict

    def _render(self, index: int) -> str:
        condition_learner, effect = self._rules[index]
        return f"{condition_learner} => {effect}"

    def _label(self) -> str:
        return f"{self.attribute or self.effect_type.__name__}/{self.action or '-'}"

    def describe(self) -> str:
        """One-line dump of the rules."""
        return "{" + ", ".join(self._render(i) for i in range(len(self._rules))) + "}"

    def __len__(self) -> int:
        return len(self._rules)


class MCELearner:
    """
    Full transition model: per action, one CELearner per attribute.

    The attributes are the taxi column, the taxi row and the passenger
    location; the destination never changes.
    """

    def __init__(self):
        self._learners: Dict[Attribute, List[CELearner]] = {
            attribute: [
                CELearner(effect_type, Actions.from_index(i), attribute.value)
                for i in range(NUM_ACTIONS)
            ]
            for attribute, effect_type in EFFECT_TYPES.items()
        }

    def learner_for(self, attribute: Attribute, action: Actions) -> CELearner:
        return self._learners[attribute][action.to_index()]

    def predict(self, world: World, state: State, action: Actions) -> Optional[State]:
        """
        Predict the state reached by taking ``action`` in ``state``.

        Returns:
            The predicted state, or None if any attribute is unknown

        Raises:
            EffectError: If the learned effects compose into an invalid state
        """
        condition = Condition.from_state(world, state)
        index = action.to_index()

        column = self._learners[Attribute.TAXI_COLUMN][index].predict(world, state, condition)
        if column is None:
            return None
        row = self._learners[Attribute.TAXI_ROW][index].predict(world, state, condition)
        if row is None:
            return None
        passenger = self._learners[Attribute.PASSENGER][index].predict(world, state, condition)
        if passenger is None:
            return None

        try:
            return State.build(
                world,
                (column.taxi.x, row.taxi.y),
                passenger.passenger,
                state.destination,
            )
        except StateError as e:
            raise EffectError(str(e)) from e

    def apply_experience(
        self,
        world: World,
        state: State,
        action: Actions,
        new_state: State,
    ) -> List[RuleConflict]:
        """Update every attribute's rules for ``action``; returns any resets."""
        condition = Condition.from_state(world, state)
        index = action.to_index()

        conflicts = []
        for attribute in Attribute:
            conflict = self._learners[attribute][index].apply_experience(
                condition, state, new_state
            )
            if conflict is not None:
                conflicts.append(conflict)
        return conflicts

    @property
    def reset_count(self) -> int:
        return sum(
            learner.reset_count
            for learners in self._learners.values()
            for learner in learners
        )

    def __str__(self) -> str:
        lines = []
        for attribute in Attribute:
            lines.append(f"{attribute.value}:")
            for learner in self._learners[attribute]:
                lines.append(f"{learner.action} - {learner.describe()}")
            lines.append("")
        return "\n".join(lines)
