"""Tabular Markov Decision Process exposed as a decision-process oracle."""

from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Set, Tuple

import numpy as np

from .decision_process import DecisionProcess
from .reward import RewardConfig, failure_indicator_reward

State = Hashable
Action = Hashable


def _sample(dist: Dict, rng: np.random.Generator):
    """Draw a key from a {outcome -> probability} mapping."""
    outcomes = list(dist.keys())
    probs = np.array([dist[o] for o in outcomes], dtype=float)
    probs = probs / probs.sum()
    return outcomes[rng.choice(len(outcomes), p=probs)]


@dataclass
class MDP(DecisionProcess):
    """
    Finite Markov Decision Process with a native (non-adversarial) policy.

    states         : list of all states
    actions_map    : mapping from state -> list of enabled actions
    P              : mapping (s, a) -> {s' -> P(s' | s, a)}
    policy         : mapping s -> {a -> probability the native policy takes a}
    initial        : mapping s -> initial probability
    failure_states : states that count as failure (absorbing)
    terminal_states: states that end an episode (failure states are added)
    feature_fn     : s -> feature vector
    reward_config  : reward for entering failure/terminal/other states
    """
    states: List[State]
    actions_map: Dict[State, List[Action]]
    P: Dict[Tuple[State, Action], Dict[State, float]]
    policy: Dict[State, Dict[Action, float]]
    initial: Dict[State, float]
    failure_states: Set[State]
    feature_fn: Callable[[State], np.ndarray]
    terminal_states: Set[State] = field(default_factory=set)
    reward_config: RewardConfig = field(default_factory=RewardConfig)

    def __post_init__(self):
        self.terminal_states = set(self.terminal_states) | set(self.failure_states)
        for s in self.states:
            if s in self.terminal_states:
                continue
            for a in self.actions_map.get(s, []):
                if (s, a) not in self.P:
                    raise ValueError(f"Missing transition for state {s!r}, action {a!r}")

    def actions(self, state: State) -> List[Action]:
        return self.actions_map.get(state, [])

    def generative_step(
        self,
        state: State,
        action: Action,
        rng: np.random.Generator
    ) -> Tuple[State, float]:
        next_state = _sample(self.P[(state, action)], rng)
        reward = failure_indicator_reward(
            self.reward_config,
            is_failure=next_state in self.failure_states,
            is_terminal=next_state in self.terminal_states,
        )
        return next_state, reward

    def action_probability(self, state: State, action: Action) -> float:
        return self.policy.get(state, {}).get(action, 0.0)

    def initial_state(self, rng: np.random.Generator) -> State:
        return _sample(self.initial, rng)

    def is_terminal(self, state: State) -> bool:
        return state in self.terminal_states

    def feature(self, state: State) -> np.ndarray:
        return np.asarray(self.feature_fn(state), dtype=float)
