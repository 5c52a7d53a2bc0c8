"""Absorbing chain: an agent advances along a chain and may crash at every step."""

from typing import Hashable, List

import numpy as np

from ...Models import MDP, RewardConfig

State = Hashable
FAIL = "FAIL"
CONTINUE = "continue"
CRASH = "crash"


def chain_states(length: int, with_fail: bool = True) -> List[State]:
    """Return positions 0..length-1, optionally followed by FAIL."""
    states = list(range(length))
    if with_fail:
        states.append(FAIL)
    return states


def chain_feature(state: State) -> np.ndarray:
    """Constant feature: the correction is a single offset."""
    return np.ones(1)


def build_absorbing_chain(
    length: int = 2,
    crash_probability: float = 0.3,
    start: int = 0,
    reward_config: RewardConfig = None
) -> MDP:
    """Build the chain MDP.

    Positions 0..length-2 are decision states with actions CONTINUE
    (to the next position) and CRASH (to FAIL). Position length-1 is the
    absorbing goal. Transitions are deterministic; the native policy
    crashes with probability `crash_probability`.
    """
    if length < 2:
        raise ValueError(f"length must be >= 2, got {length}")
    if not 0 <= crash_probability <= 1:
        raise ValueError(f"crash_probability must be in [0, 1], got {crash_probability}")
    if not 0 <= start < length:
        raise ValueError(f"start must be in [0, {length}), got {start}")

    goal = length - 1
    actions = {}
    P = {}
    policy = {}
    for s in range(goal):
        actions[s] = [CONTINUE, CRASH]
        P[(s, CONTINUE)] = {s + 1: 1.0}
        P[(s, CRASH)] = {FAIL: 1.0}
        policy[s] = {CONTINUE: 1.0 - crash_probability, CRASH: crash_probability}

    return MDP(
        states=chain_states(length),
        actions_map=actions,
        P=P,
        policy=policy,
        initial={start: 1.0},
        failure_states={FAIL},
        feature_fn=chain_feature,
        terminal_states={goal},
        reward_config=reward_config if reward_config is not None else RewardConfig(),
    )


def chain_failure_probability(state: State, length: int, crash_probability: float) -> float:
    """Probability of reaching FAIL from `state` under the native policy."""
    if state == FAIL:
        return 1.0
    remaining = length - 1 - state
    return 1.0 - (1.0 - crash_probability) ** remaining
