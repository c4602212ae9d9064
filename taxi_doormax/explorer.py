"""
Random-walk experience collection.

Drives the transition and reward learners with uniformly random actions.
This is not a planner: it only produces experience and reports how much of
what it saw the learned model can now predict.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .actions import Actions
from .doormax import MCELearner, MultiRewardLearner
from .state import State
from .world import World, WorldError

logger = logging.getLogger(__name__)


@dataclass
class Experience:
    """One observed step."""
    state: State
    action: Actions
    reward: float
    new_state: State


@dataclass
class ExplorationReport:
    """
    Summary of an exploration run.

    Attributes:
        trials: Trials run
        steps: Total steps taken
        deliveries: Trials that ended with the passenger delivered
        transition_resets: Transition rule sets discarded on conflict
        reward_resets: Reward rule sets discarded on conflict
        unknown_transitions: Visited (state, action) pairs whose transition is unknown
        wrong_transitions: Visited pairs predicted with a wrong next state
        unknown_rewards: Visited pairs whose reward is unknown
        wrong_rewards: Visited pairs predicted with a wrong reward
        evaluated: Distinct visited pairs evaluated
    """
    trials: int = 0
    steps: int = 0
    deliveries: int = 0
    transition_resets: int = 0
    reward_resets: int = 0
    unknown_transitions: int = 0
    wrong_transitions: int = 0
    unknown_rewards: int = 0
    wrong_rewards: int = 0
    evaluated: int = 0

    def summary(self) -> str:
        return (
            f"{self.trials} trials, {self.steps} steps, {self.deliveries} deliveries; "
            f"resets: {self.transition_resets} transition / {self.reward_resets} reward; "
            f"of {self.evaluated} visited pairs: "
            f"{self.unknown_transitions} unknown / {self.wrong_transitions} wrong transitions, "
            f"{self.unknown_rewards} unknown / {self.wrong_rewards} wrong rewards"
        )


class RandomExplorer:
    """
    Feeds experience from random walks into a transition and a reward model.

    Args:
        world: World to explore
        seed: PRNG seed, None for a random seed
        transitions: Transition model to train (a fresh one by default)
        rewards: Reward model to train (a fresh one by default)
    """

    def __init__(
        self,
        world: World,
        seed: Optional[int] = None,
        transitions: Optional[MCELearner] = None,
        rewards: Optional[MultiRewardLearner] = None,
    ):
        self.world = world
        self.rng = random.Random(seed)
        self.transitions = transitions if transitions is not None else MCELearner()
        self.rewards = rewards if rewards is not None else MultiRewardLearner()
        self.history: List[Experience] = []
        self.last_state: Optional[State] = None

    def random_state(self) -> State:
        """A random start state with the passenger waiting away from the destination."""
        fixed_ids = self.world.fixed_ids
        if not fixed_ids:
            raise WorldError("World has no fixed positions to explore")
        taxi = (
            self.rng.randrange(self.world.width),
            self.rng.randrange(self.world.height),
        )
        passenger = self.rng.choice(fixed_ids)
        destinations = [i for i in fixed_ids if i != passenger] or fixed_ids
        destination = self.rng.choice(destinations)
        return State.build(self.world, taxi, passenger, destination)

    def step(self, state: State) -> Experience:
        """Take one random action from ``state`` and learn from it."""
        action = self.rng.choice(list(Actions))
        reward, new_state = state.apply_action(self.world, action)

        self.transitions.apply_experience(self.world, state, action, new_state)
        self.rewards.apply_experience(self.world, state, action, reward)

        experience = Experience(state, action, reward, new_state)
        self.history.append(experience)
        return experience

    def run_trial(self, max_steps: int, start: Optional[State] = None) -> int:
        """
        Walk until the passenger is delivered or ``max_steps`` is reached.

        Returns:
            Number of steps taken
        """
        state = start if start is not None else self.random_state()
        steps = 0
        while steps < max_steps and not state.at_destination():
            state = self.step(state).new_state
            steps += 1
        self.last_state = state
        return steps

    def run(self, trials: int, max_trial_steps: int) -> ExplorationReport:
        """
        Run ``trials`` random trials and evaluate the model on what was seen.

        The learners keep what earlier runs taught them; ``history`` and the
        report cover this run only.
        """
        self.history = []
        report = ExplorationReport()

        for trial in range(trials):
            steps = self.run_trial(max_trial_steps)
            report.trials += 1
            report.steps += steps
            if self.last_state is not None and self.last_state.at_destination():
                report.deliveries += 1
            logger.debug(f"Trial {trial} finished after {steps} steps")

        report.transition_resets = self.transitions.reset_count
        report.reward_resets = self.rewards.reset_count
        self.evaluate(report)

        logger.info(
            report.summary(),
            extra={"subsystem": "explorer", "event_type": "run_end"},
        )
        return report

    def evaluate(self, report: ExplorationReport) -> ExplorationReport:
        """Score the current model on every distinct visited (state, action)."""
        seen = set()
        for experience in self.history:
            key = (experience.state, experience.action)
            if key in seen:
                continue
            seen.add(key)
            report.evaluated += 1

            predicted = self.transitions.predict(self.world, experience.state, experience.action)
            if predicted is None:
                report.unknown_transitions += 1
            elif predicted != experience.new_state:
                report.wrong_transitions += 1

            reward = self.rewards.predict(self.world, experience.state, experience.action)
            if reward is None:
                report.unknown_rewards += 1
            elif reward != experience.reward:
                report.wrong_rewards += 1

        return report
