"""
Conjunctive condition learner.

Keeps the most specific conjunction of literals consistent with every
positive example seen so far. The hypothesis starts unseeded (no examples,
predictions are UNKNOWN), is seeded by the first positive example to all of
that example's literals, and from then on only generalizes: a literal that a
positive example contradicts is dropped and never comes back.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional

from .condition import Condition, Literal, format_literals

logger = logging.getLogger(__name__)


class MatchResult(str, Enum):
    """Three-valued answer of a condition learner."""

    UNKNOWN = "unknown"
    MATCH = "match"
    NO_MATCH = "no_match"


class ConditionLearner:
    """
    Version-space style learner for one rule's condition.

    Attributes:
        positive_count: Positive examples applied
        negative_count: Negative examples applied
        boundary_conflicts: Negative examples the hypothesis still matched
    """

    def __init__(self):
        self._truth: Optional[Dict[str, Literal]] = None
        self.positive_count = 0
        self.negative_count = 0
        self.boundary_conflicts = 0

    @property
    def seeded(self) -> bool:
        """True once a positive example has been recorded."""
        return self._truth is not None

    @property
    def required(self) -> Optional[Dict[str, Literal]]:
        """Copy of the required literals, None before the first positive example."""
        if self._truth is None:
            return None
        return dict(self._truth)

    def predict(self, condition: Condition) -> MatchResult:
        if self._truth is None:
            return MatchResult.UNKNOWN
        if condition.satisfies(self._truth):
            return MatchResult.MATCH
        return MatchResult.NO_MATCH

    def apply_experience(self, condition: Condition, matched: bool) -> None:
        """
        Record one example.

        A positive example seeds or generalizes the hypothesis. A negative
        example never tightens it; one that the hypothesis still matches is
        counted as a boundary conflict.

        Args:
            condition: Observed condition
            matched: Whether the rule's effect was observed under ``condition``
        """
        if matched:
            self.positive_count += 1
            if self._truth is None:
                self._truth = condition.literals()
            else:
                self._truth = {
                    name: value
                    for name, value in self._truth.items()
                    if condition[name] == value
                }
            return

        self.negative_count += 1
        if self._truth is not None and condition.satisfies(self._truth):
            self.boundary_conflicts += 1
            logger.debug(
                f"Negative example {condition} matches hypothesis {self}",
                extra={"subsystem": "doormax", "event_type": "boundary_conflict"},
            )

    def overlaps(self, other: "ConditionLearner") -> bool:
        """
        True if some condition could satisfy both hypotheses.

        Unseeded learners overlap nothing.
        """
        if self._truth is None or other._truth is None:
            return False

        for name, value in self._truth.items():
            if name in other._truth and other._truth[name] != value:
                return False
        return True

    def remove_overlap(self, other: "ConditionLearner") -> None:
        """Drop every literal ``other`` requires with the same value."""
        if self._truth is None or other._truth is None:
            return

        self._truth = {
            name: value
            for name, value in self._truth.items()
            if other._truth.get(name, _MISSING) != value
        }

    def __str__(self) -> str:
        if self._truth is None:
            return "?"
        if not self._truth:
            return "*"
        return format_literals(self._truth)

    def __repr__(self) -> str:
        return f"ConditionLearner({self})"


_MISSING = object()
