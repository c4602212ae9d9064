"""
Reward rule learners.

Same rule machinery as the transition learners, but the "effect" is the
scalar reward. Rewards have no natural default, so a condition that no rule
matches is unknown rather than "no change"; ``status`` tells the unknown
cases apart for callers that want finer exploration signals.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from ..actions import Actions, NUM_ACTIONS
from ..state import State
from ..world import World
from .condition import Condition
from .condition_learner import ConditionLearner, MatchResult
from .mcelearner import RuleConflict, find_overlap, log_conflict

logger = logging.getLogger(__name__)


class RewardStatus(str, Enum):
    """Why a reward prediction is or is not available."""

    KNOWN = "known"
    NO_RULES = "no_rules"            # nothing learned yet for this action
    NO_MATCH = "no_match"            # rules exist, none applies here
    UNDETERMINED = "undetermined"    # a rule cannot tell whether it applies
    CONFLICT = "conflict"            # matching rules disagree


class RewardLearner:
    """Reward rules for a single action."""

    def __init__(self, action: Optional[Actions] = None):
        self.action = action
        self._rules: List[Tuple[ConditionLearner, float]] = []
        self.reset_count = 0

    @property
    def rules(self) -> Tuple[Tuple[ConditionLearner, float], ...]:
        return tuple(self._rules)

    def evaluate(self, condition: Condition) -> Tuple[RewardStatus, Optional[float]]:
        """Status and, when KNOWN, the predicted reward for ``condition``."""
        if not self._rules:
            return RewardStatus.NO_RULES, None

        result: Optional[float] = None
        for condition_learner, reward in self._rules:
            match = condition_learner.predict(condition)
            if match == MatchResult.UNKNOWN:
                return RewardStatus.UNDETERMINED, None
            if match == MatchResult.NO_MATCH:
                continue

            if result is None:
                result = reward
            elif result != reward:
                return RewardStatus.CONFLICT, None

        if result is None:
            return RewardStatus.NO_MATCH, None
        return RewardStatus.KNOWN, result

    def predict(self, condition: Condition) -> Optional[float]:
        return self.evaluate(condition)[1]

    def status(self, condition: Condition) -> RewardStatus:
        return self.evaluate(condition)[0]

    def apply_experience(self, condition: Condition, reward: float) -> Optional[RuleConflict]:
        """
        Learn from one observed reward.

        A reward not seen before starts a new rule. If the new rule overlaps
        an existing one, the existing rules are discarded and the new rule
        kept; if an existing rule was generalized into an overlap, the whole
        set is discarded.

        Returns:
            The conflict that caused a reset, if any
        """
        found = False
        for condition_learner, learned_reward in self._rules:
            if reward == learned_reward:
                condition_learner.apply_experience(condition, True)
                found = True
            else:
                condition_learner.apply_experience(condition, False)

        if not found:
            condition_learner = ConditionLearner()
            condition_learner.apply_experience(condition, True)
            for other, _ in self._rules:
                condition_learner.remove_overlap(other)

            conflict = None
            for other, other_reward in self._rules:
                if condition_learner.overlaps(other):
                    conflict = RuleConflict(
                        first=f"{condition_learner} => {reward}",
                        second=f"{other} => {other_reward}",
                        discarded=len(self._rules),
                        action=self.action,
                        attribute="reward",
                    )
                    break

            if conflict is not None:
                self._rules = []
                self.reset_count += 1
                log_conflict(conflict)

            self._rules.append((condition_learner, reward))
            return conflict

        overlap = find_overlap(self._rules)
        if overlap is None:
            return None

        i, j = overlap
        conflict = RuleConflict(
            first=f"{self._rules[i][0]} => {self._rules[i][1]}",
            second=f"{self._rules[j][0]} => {self._rules[j][1]}",
            discarded=len(self._rules),
            action=self.action,
            attribute="reward",
        )
        self._rules = []
        self.reset_count += 1
        log_conflict(conflict)
        return conflict

    def describe(self) -> str:
        return "{" + ", ".join(f"{c} => {r}" for c, r in self._rules) + "}"

    def __len__(self) -> int:
        return len(self._rules)


class MultiRewardLearner:
    """Reward model: one RewardLearner per action."""

    def __init__(self):
        self._learners = [RewardLearner(Actions.from_index(i)) for i in range(NUM_ACTIONS)]

    def learner_for(self, action: Actions) -> RewardLearner:
        return self._learners[action.to_index()]

    def predict(self, world: World, state: State, action: Actions) -> Optional[float]:
        condition = Condition.from_state(world, state)
        return self._learners[action.to_index()].predict(condition)

    def status(self, world: World, state: State, action: Actions) -> RewardStatus:
        condition = Condition.from_state(world, state)
        return self._learners[action.to_index()].status(condition)

    def apply_experience(
        self,
        world: World,
        state: State,
        action: Actions,
        reward: float,
    ) -> Optional[RuleConflict]:
        condition = Condition.from_state(world, state)
        return self._learners[action.to_index()].apply_experience(condition, reward)

    @property
    def reset_count(self) -> int:
        return sum(learner.reset_count for learner in self._learners)

    def __str__(self) -> str:
        lines = ["reward:"]
        for learner in self._learners:
            lines.append(f"{learner.action} - {learner.describe()}")
        lines.append("")
        return "\n".join(lines)
