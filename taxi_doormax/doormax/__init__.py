"""
DOORMAX-style model learning for the taxi domain.

Learns, from experience, per-action rules of the form
"condition => effect" for each state attribute and "condition => reward",
and answers "what will happen" with a three-valued contract:

- a predicted state or reward when the rules determine it
- "no change" when no transition rule applies
- None (unknown) when the evidence is insufficient, which planners treat
  as a reason to explore

Design:
- Conditions are conjunctions of fixed literals (walls, passenger, destination)
- Hypotheses only generalize; negative examples never tighten them
- Rules of one rule set never overlap; an overlap discards the whole set
"""

from .condition import Condition, format_literals
from .condition_learner import ConditionLearner, MatchResult
from .effect import (
    Attribute,
    Effect,
    EffectError,
    EFFECT_TYPES,
    PassengerEffect,
    TaxiColumnEffect,
    TaxiRowEffect,
)
from .mcelearner import CELearner, MCELearner, RuleConflict
from .reward_learner import MultiRewardLearner, RewardLearner, RewardStatus


__all__ = [
    # Conditions
    "Condition",
    "format_literals",
    "ConditionLearner",
    "MatchResult",

    # Effects
    "Attribute",
    "Effect",
    "EffectError",
    "EFFECT_TYPES",
    "PassengerEffect",
    "TaxiColumnEffect",
    "TaxiRowEffect",

    # Transition model
    "CELearner",
    "MCELearner",
    "RuleConflict",

    # Reward model
    "MultiRewardLearner",
    "RewardLearner",
    "RewardStatus",
]
