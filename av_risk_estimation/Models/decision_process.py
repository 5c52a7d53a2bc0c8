"""Decision-process oracle interface consumed by the importance-sampling evaluator."""

from abc import ABC, abstractmethod
from typing import Hashable, Sequence, Tuple

import numpy as np

State = Hashable
Action = Hashable


class DecisionProcess(ABC):
    """Base class for the external decision-process oracle.

    The evaluator only needs to enumerate actions, draw generative
    transitions, query the native (non-adversarial) action probabilities
    and map states to fixed-length feature vectors.
    """

    @abstractmethod
    def actions(self, state: State) -> Sequence[Action]:
        """Return the finite, ordered sequence of legal actions at `state`."""
        pass

    @abstractmethod
    def generative_step(
        self,
        state: State,
        action: Action,
        rng: np.random.Generator
    ) -> Tuple[State, float]:
        """Sample one transition, returning (next_state, reward)."""
        pass

    @abstractmethod
    def action_probability(self, state: State, action: Action) -> float:
        """Probability that the native policy takes `action` at `state`."""
        pass

    @abstractmethod
    def initial_state(self, rng: np.random.Generator) -> State:
        """Sample a state from the initial-state distribution."""
        pass

    @abstractmethod
    def is_terminal(self, state: State) -> bool:
        pass

    @abstractmethod
    def feature(self, state: State) -> np.ndarray:
        """Map a state to the feature vector consumed by the linear model."""
        pass

    @property
    def feature_dim(self) -> int:
        """Length of the feature vector, probed from a deterministic initial state."""
        state = self.initial_state(np.random.default_rng(0))
        return int(np.asarray(self.feature(state), dtype=float).size)
