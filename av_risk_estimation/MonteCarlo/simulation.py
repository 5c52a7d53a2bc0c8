"""Monte Carlo rollouts under the importance-sampling policy.

This module provides the low-level functions for simulating episodes and
collecting the importance-weighted returns used to fit the correction model.
"""

from typing import List, Optional
import warnings

import numpy as np
from tqdm import trange

from ..exceptions import EpisodeTimeoutWarning
from .data_structures import RolloutTrace, TrainingBatch
from .is_policy import ISPolicy


def rollout_episode(
    policy: ISPolicy,
    rng: np.random.Generator,
    max_steps: int = 1000
) -> RolloutTrace:
    """Simulate one episode from the initial-state distribution.

    Parameters
    ----------
    policy : ISPolicy
        Sampling policy; its corrective model is only read
    rng : np.random.Generator
        Random source for initial state, action sampling and transitions
    max_steps : int
        Step limit; longer episodes are truncated with a warning

    Returns
    -------
    RolloutTrace
        Per-step record of the episode
    """
    process = policy.process
    trace = RolloutTrace()

    s = process.initial_state(rng)
    steps = 0
    while not process.is_terminal(s):
        if steps >= max_steps:
            trace.truncated = True
            break

        trace.pf_estimates.append(policy.estimate(process, s))
        trace.features.append(process.feature(s))

        a, prob = policy.action(s, rng)
        trace.actions.append(a)
        trace.rho.append(process.action_probability(s, a) / prob)

        s, r = process.generative_step(s, a, rng)
        trace.rewards.append(r)
        steps += 1

    if trace.truncated:
        warnings.warn(f"Episode timeout at {max_steps} steps", EpisodeTimeoutWarning)

    return trace


def run_rollouts(
    policy: ISPolicy,
    num_episodes: int,
    rng: np.random.Generator,
    max_steps: int = 1000,
    verbose: bool = False
) -> List[RolloutTrace]:
    """Simulate `num_episodes` independent episodes."""
    if num_episodes < 0:
        raise ValueError(f"num_episodes must be non-negative, got {num_episodes}")

    traces = []
    for _ in trange(num_episodes, desc="Rolling out episodes", disable=not verbose):
        traces.append(rollout_episode(policy, rng, max_steps=max_steps))
    return traces


def rollout(
    policy: ISPolicy,
    num_episodes: int,
    max_steps: int = 1000,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    verbose: bool = False
) -> TrainingBatch:
    """Simulate episodes and flatten them into a training batch.

    Parameters
    ----------
    policy : ISPolicy
        Sampling policy
    num_episodes : int
        Number of episodes to simulate
    max_steps : int
        Step limit per episode
    rng : np.random.Generator, optional
        Random source. Created from `seed` if not given.
    seed : int, optional
        Seed used when `rng` is not given
    verbose : bool
        Show a progress bar over episodes

    Returns
    -------
    TrainingBatch
        Features, actions, rewards, returns, ratios, weights and baseline
        estimates of every step, concatenated across episodes
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    traces = run_rollouts(policy, num_episodes, rng, max_steps=max_steps, verbose=verbose)
    batch = TrainingBatch.from_traces(traces, policy.corrective_model.dim)

    if verbose and batch.num_truncated:
        print(f"   {batch.num_truncated}/{num_episodes} episodes timed out at {max_steps} steps")

    return batch
