"""Decision-process models."""

from .decision_process import DecisionProcess
from .mdp import MDP
from .reward import (
    RewardConfig,
    ShapedRewardConfig,
    failure_indicator_reward,
    shaped_reward,
)

__all__ = [
    "DecisionProcess",
    "MDP",
    "RewardConfig",
    "ShapedRewardConfig",
    "failure_indicator_reward",
    "shaped_reward",
]
