"""Data structures for importance-sampled Monte Carlo rollouts."""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import numpy as np


@dataclass
class RolloutTrace:
    """Record of a single episode, aligned by timestep.

    Entry t describes the decision taken at the t-th visited non-terminal
    state; the state reached at the end of the episode has no entry.

    Attributes
    ----------
    features : list of np.ndarray
        Feature vector of the state at each step
    actions : list
        Action sampled at each step
    rewards : list of float
        Reward received after each step
    rho : list of float
        Per-step importance ratio p(a | s) / q(a | s)
    pf_estimates : list of float
        Baseline failure-probability estimate at each visited state
    truncated : bool
        Whether the episode hit the step limit before a terminal state
    """
    features: List[np.ndarray] = field(default_factory=list)
    actions: List[Any] = field(default_factory=list)
    rewards: List[float] = field(default_factory=list)
    rho: List[float] = field(default_factory=list)
    pf_estimates: List[float] = field(default_factory=list)
    truncated: bool = False

    @property
    def num_steps(self) -> int:
        return len(self.actions)

    @property
    def returns(self) -> np.ndarray:
        """G[t]: sum of rewards from t to the end of the episode."""
        rewards = np.asarray(self.rewards, dtype=float)
        return np.cumsum(rewards[::-1])[::-1]

    @property
    def weights(self) -> np.ndarray:
        """W[t]: product of importance ratios from t to the end of the episode."""
        rho = np.asarray(self.rho, dtype=float)
        return np.cumprod(rho[::-1])[::-1]


@dataclass
class TrainingBatch:
    """Flattened rollouts of one evaluation iteration.

    All arrays are aligned with the rows of X.

    Attributes
    ----------
    X : np.ndarray
        Feature matrix, shape (n, d)
    actions : list
        Sampled actions
    rewards, returns, rho, weights, pf_estimates : np.ndarray
        Per-step rewards, returns G, importance ratios, cumulative
        weights W and baseline estimates
    episode_lengths : list of int
        Number of rows contributed by each episode
    num_truncated : int
        Number of episodes cut off by the step limit
    """
    X: np.ndarray
    actions: List[Any]
    rewards: np.ndarray
    returns: np.ndarray
    rho: np.ndarray
    weights: np.ndarray
    pf_estimates: np.ndarray
    episode_lengths: List[int] = field(default_factory=list)
    num_truncated: int = 0

    @classmethod
    def from_traces(cls, traces: List[RolloutTrace], dim: int) -> "TrainingBatch":
        """Concatenate per-episode traces into one batch."""
        nonempty = [t for t in traces if t.num_steps > 0]
        if nonempty:
            X = np.vstack([np.vstack(t.features) for t in nonempty])
        else:
            X = np.zeros((0, dim))

        def flat(values) -> np.ndarray:
            arrays = [np.asarray(v, dtype=float) for v in values]
            return np.concatenate(arrays) if arrays else np.zeros(0)

        actions = []
        for t in nonempty:
            actions.extend(t.actions)

        return cls(
            X=X,
            actions=actions,
            rewards=flat(t.rewards for t in nonempty),
            returns=flat(t.returns for t in nonempty),
            rho=flat(t.rho for t in nonempty),
            weights=flat(t.weights for t in nonempty),
            pf_estimates=flat(t.pf_estimates for t in nonempty),
            episode_lengths=[t.num_steps for t in traces],
            num_truncated=sum(1 for t in traces if t.truncated),
        )

    @property
    def num_episodes(self) -> int:
        return len(self.episode_lengths)

    @property
    def num_samples(self) -> int:
        return self.X.shape[0]

    @property
    def episode_start_indices(self) -> List[int]:
        """Row index of the first step of each episode (zero-step episodes excluded)."""
        starts = []
        offset = 0
        for length in self.episode_lengths:
            if length > 0:
                starts.append(offset)
            offset += length
        return starts

    def targets(self) -> np.ndarray:
        """Regression targets W * G - pf_estimate for the correction model."""
        return self.weights * self.returns - self.pf_estimates


@dataclass
class FailureProbabilityEstimate:
    """Importance-sampled estimate of the failure probability from the initial state.

    Attributes
    ----------
    estimate : float
        Mean of the per-episode weighted returns W[0] * G[0]
    std_error : float
        Standard error of the mean
    confidence_interval : tuple of float
        Normal-approximation interval at `confidence`
    confidence : float
        Confidence level of the interval
    num_episodes : int
        Number of episodes used
    """
    estimate: float
    std_error: float
    confidence_interval: Tuple[float, float]
    confidence: float
    num_episodes: int

    def __str__(self) -> str:
        low, high = self.confidence_interval
        lines = [
            "Failure Probability Estimate",
            "=" * 40,
            f"Episodes: {self.num_episodes}",
            f"Estimate: {self.estimate:.6g}",
            f"Std Error: {self.std_error:.3g}",
            f"{self.confidence:.0%} CI: [{low:.6g}, {high:.6g}]",
        ]
        return "\n".join(lines)


@dataclass
class ConvergenceResult:
    """Error of a policy's value estimates across evaluation iterations.

    Attributes
    ----------
    name : str
        Label of the evaluated estimator
    episodes_per_iteration : int
        Episodes simulated between measurements
    errors : list of float
        Mean squared error against ground truth, before the first
        iteration and after each iteration
    ideal_error : float or None
        Error of the best linear correction for the same baseline
    """
    name: str
    episodes_per_iteration: int
    errors: List[float] = field(default_factory=list)
    ideal_error: Optional[float] = None

    @property
    def final_error(self) -> float:
        return self.errors[-1] if self.errors else float("nan")
