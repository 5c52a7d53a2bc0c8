"""Monte Carlo policy evaluation with an online-fit linear correction."""

from typing import Callable, Optional

import numpy as np
from scipy.stats import norm

from ..Estimation.linear_model import LinearModel
from .data_structures import FailureProbabilityEstimate, TrainingBatch
from .is_policy import ISPolicy
from .simulation import rollout, run_rollouts


def mc_policy_eval(
    policy: ISPolicy,
    max_iterations: int,
    episodes_per_iteration: int,
    max_steps: int = 1000,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    verbose: bool = True,
    callback: Optional[Callable[[int, ISPolicy, TrainingBatch], None]] = None
) -> LinearModel:
    """Fit the policy's corrective model from importance-sampled rollouts.

    Each iteration rolls out `episodes_per_iteration` episodes with the
    current model, then fits the model to the residuals
    y = W * G - pf_estimate. The model is not modified while an
    iteration's episodes are being simulated. No convergence check is
    performed; use `callback` to track progress externally.

    Parameters
    ----------
    policy : ISPolicy
        Policy whose corrective model is fit in place
    max_iterations : int
        Number of rollout/fit iterations
    episodes_per_iteration : int
        Episodes simulated per iteration
    max_steps : int
        Step limit per episode
    rng : np.random.Generator, optional
        Random source shared across iterations. Created from `seed` if
        not given.
    seed : int, optional
        Seed used when `rng` is not given
    verbose : bool
        Print progress
    callback : callable, optional
        Called as callback(iteration, policy, batch) after each fit

    Returns
    -------
    LinearModel
        The fitted corrective model
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    model = policy.corrective_model
    for iteration in range(1, max_iterations + 1):
        if verbose:
            print(f"iteration: {iteration}")

        batch = rollout(
            policy,
            episodes_per_iteration,
            max_steps=max_steps,
            rng=rng,
            verbose=verbose
        )

        if batch.num_samples > 0:
            model.fit(batch.X, batch.targets())
        elif verbose:
            print("   No non-terminal states visited; skipping fit")

        if callback is not None:
            callback(iteration, policy, batch)

    return model


def estimate_failure_probability(
    policy: ISPolicy,
    num_episodes: int,
    max_steps: int = 1000,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    confidence: float = 0.95,
    verbose: bool = False
) -> FailureProbabilityEstimate:
    """Importance-sampled estimate of the failure probability from the initial state.

    Each episode contributes its weighted return W[0] * G[0]; episodes
    that start in a terminal state contribute zero.

    Parameters
    ----------
    policy : ISPolicy
        Sampling policy
    num_episodes : int
        Number of episodes (must be positive)
    max_steps : int
        Step limit per episode
    rng : np.random.Generator, optional
        Random source. Created from `seed` if not given.
    seed : int, optional
        Seed used when `rng` is not given
    confidence : float
        Confidence level of the normal-approximation interval
    verbose : bool
        Show a progress bar over episodes

    Returns
    -------
    FailureProbabilityEstimate
    """
    if num_episodes < 1:
        raise ValueError(f"num_episodes must be positive, got {num_episodes}")
    if not 0 < confidence < 1:
        raise ValueError(f"confidence must be in (0, 1), got {confidence}")
    if rng is None:
        rng = np.random.default_rng(seed)

    traces = run_rollouts(policy, num_episodes, rng, max_steps=max_steps, verbose=verbose)
    samples = np.array([
        t.weights[0] * t.returns[0] if t.num_steps > 0 else 0.0
        for t in traces
    ])

    estimate = float(np.mean(samples))
    if num_episodes > 1:
        std_error = float(np.std(samples, ddof=1) / np.sqrt(num_episodes))
    else:
        std_error = 0.0
    z = norm.ppf(0.5 + confidence / 2)

    return FailureProbabilityEstimate(
        estimate=estimate,
        std_error=std_error,
        confidence_interval=(estimate - z * std_error, estimate + z * std_error),
        confidence=confidence,
        num_episodes=num_episodes,
    )
