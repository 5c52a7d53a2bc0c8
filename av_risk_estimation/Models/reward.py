"""Reward definitions for adversarial failure-seeking processes."""

from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass
class RewardConfig:
    """Reward for processes whose return is the failure indicator.

    failure_reward   : reward collected on entering a failure state
    terminal_penalty : reward on reaching a terminal state without failure
    step_reward      : reward for every other transition
    """
    failure_reward: float = 1.0
    terminal_penalty: float = 0.0
    step_reward: float = 0.0


def failure_indicator_reward(
    config: RewardConfig,
    is_failure: bool,
    is_terminal: bool
) -> float:
    """Reward of a transition into a state with the given flags."""
    if is_failure:
        return config.failure_reward
    if is_terminal:
        return config.terminal_penalty
    return config.step_reward


@dataclass
class ShapedRewardConfig:
    """Reward shaping for adversarial stress testing of roadway scenes.

    distance_weight  : weight on the minimum distance between the ego
                       vehicle and the adversaries
    terminal_penalty : replaces the reward when an episode terminates
                       without a collision (e.g. a vehicle exits the scene)
    """
    distance_weight: float = 0.1
    terminal_penalty: float = -10000.0


def shaped_reward(
    config: ShapedRewardConfig,
    action_log_likelihoods: Sequence[float],
    min_distance: float,
    is_terminal: bool,
    is_failure: bool
) -> float:
    """Mean action log-likelihood minus a distance penalty.

    Parameters
    ----------
    config : ShapedRewardConfig
        Reward parameters
    action_log_likelihoods : sequence of float
        Log-likelihood of each agent's action under its driver model
    min_distance : float
        Minimum distance from the ego vehicle to any other agent in the
        next state
    is_terminal : bool
        Whether the next state is terminal
    is_failure : bool
        Whether the next state is a collision

    Returns
    -------
    float
        Shaped reward
    """
    if is_terminal and not is_failure:
        return config.terminal_penalty

    log_likelihoods = np.asarray(action_log_likelihoods, dtype=float)
    reward = float(np.mean(log_likelihoods)) if log_likelihoods.size else 0.0
    return reward - config.distance_weight * min_distance
