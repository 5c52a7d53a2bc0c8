"""Random-walk corridor: a pedestrian drifts toward a collision zone or an exit.

Positions 0..size. Position 0 is a collision, position `size` leaves the
scene. The native policy steps left with probability `left_probability`.
"""

from typing import Hashable, List

import numpy as np

from ...Models import MDP, RewardConfig

State = Hashable
LEFT = "left"
RIGHT = "right"


def walk_states(size: int) -> List[int]:
    return list(range(size + 1))


def walk_feature(state: int, size: int) -> np.ndarray:
    return np.array([1.0, state / size])


def build_random_walk(
    size: int = 10,
    left_probability: float = 0.5,
    start: int = None,
    reward_config: RewardConfig = None
) -> MDP:
    """Build the corridor MDP with features [1, x / size]."""
    if size < 2:
        raise ValueError(f"size must be >= 2, got {size}")
    if not 0 <= left_probability <= 1:
        raise ValueError(f"left_probability must be in [0, 1], got {left_probability}")
    if start is None:
        start = size // 2
    if not 0 < start < size:
        raise ValueError(f"start must be in (0, {size}), got {start}")

    actions = {}
    P = {}
    policy = {}
    for s in range(1, size):
        actions[s] = [LEFT, RIGHT]
        P[(s, LEFT)] = {s - 1: 1.0}
        P[(s, RIGHT)] = {s + 1: 1.0}
        policy[s] = {LEFT: left_probability, RIGHT: 1.0 - left_probability}

    return MDP(
        states=walk_states(size),
        actions_map=actions,
        P=P,
        policy=policy,
        initial={start: 1.0},
        failure_states={0},
        feature_fn=lambda s: walk_feature(s, size),
        terminal_states={size},
        reward_config=reward_config if reward_config is not None else RewardConfig(),
    )


def walk_failure_probability(state: int, size: int, left_probability: float) -> float:
    """Gambler's ruin probability of reaching 0 before `size` from `state`."""
    if state <= 0:
        return 1.0
    if state >= size:
        return 0.0
    p = left_probability
    q = 1.0 - p
    if p == 0:
        return 0.0
    if q == 0:
        return 1.0
    if np.isclose(p, q):
        return 1.0 - state / size
    r = p / q
    return (r ** state - r ** size) / (1.0 - r ** size)
