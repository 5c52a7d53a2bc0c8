"""Comparison of failure-probability estimators against ground truth.

For a process small enough to enumerate, tracks the mean squared error of
an ISPolicy's value estimates over the states while its corrective model
is being fit, and compares it to the best error any linear correction of
the same baseline could reach.
"""

from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..Estimation.baselines import EstimateFunction
from ..Estimation.linear_model import LinearModel
from ..Models.decision_process import DecisionProcess
from ..MonteCarlo.data_structures import ConvergenceResult
from ..MonteCarlo.evaluator import mc_policy_eval
from ..MonteCarlo.is_policy import ISPolicy


def mse(estimates, truth) -> float:
    """Mean squared error between two equal-length sequences."""
    estimates = np.asarray(estimates, dtype=float)
    truth = np.asarray(truth, dtype=float)
    if estimates.shape != truth.shape:
        raise ValueError(f"Shape mismatch: {estimates.shape} vs {truth.shape}")
    return float(np.mean((estimates - truth) ** 2))


def policy_values(policy: ISPolicy, states: Sequence[Any]) -> np.ndarray:
    return np.array([policy.value(s) for s in states])


def ideal_model_error(
    policy: ISPolicy,
    states: Sequence[Any],
    ground_truth: Sequence[float]
) -> float:
    """Error of the least-squares linear correction of the policy's baseline.

    A fresh model is fit directly on the residuals ground_truth - estimate
    over `states`; the policy's own model is left untouched.
    """
    process = policy.process
    X = np.vstack([process.feature(s) for s in states])
    estimates = np.array([policy.estimate(process, s) for s in states])

    ideal_model = LinearModel(policy.corrective_model.dim)
    ideal_model.fit(X, np.asarray(ground_truth, dtype=float) - estimates)
    return mse(estimates + ideal_model.forward(X), ground_truth)


def track_convergence(
    policy: ISPolicy,
    states: Sequence[Any],
    ground_truth: Sequence[float],
    num_iterations: int,
    episodes_per_iteration: int,
    name: str = "policy",
    max_steps: int = 1000,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    verbose: bool = True
) -> ConvergenceResult:
    """Fit the policy one iteration at a time, recording MSE after each.

    Parameters
    ----------
    policy : ISPolicy
        Policy to evaluate; its corrective model is fit in place
    states : sequence
        States on which the error is measured
    ground_truth : sequence of float
        True failure probability of each state
    num_iterations : int
        Number of evaluation iterations
    episodes_per_iteration : int
        Episodes simulated per iteration
    name : str
        Label stored in the result
    max_steps : int
        Step limit per episode
    rng : np.random.Generator, optional
        Random source. Created from `seed` if not given.
    seed : int, optional
        Seed used when `rng` is not given
    verbose : bool
        Print progress

    Returns
    -------
    ConvergenceResult
        num_iterations + 1 errors (including before the first iteration)
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    if verbose:
        print(f"Evaluating policy: {name}")

    result = ConvergenceResult(
        name=name,
        episodes_per_iteration=episodes_per_iteration,
        ideal_error=ideal_model_error(policy, states, ground_truth),
    )

    for i in range(num_iterations):
        if verbose:
            print(f"    Evaluating policy after iteration {i}")
        result.errors.append(mse(policy_values(policy, states), ground_truth))
        mc_policy_eval(
            policy,
            1,
            episodes_per_iteration,
            max_steps=max_steps,
            rng=rng,
            verbose=False
        )

    if verbose:
        print(f"    Evaluating policy after iteration {num_iterations}")
    result.errors.append(mse(policy_values(policy, states), ground_truth))

    return result


def compare_estimators(
    process: DecisionProcess,
    named_estimates: Dict[str, EstimateFunction],
    states: Sequence[Any],
    ground_truth: Sequence[float],
    num_iterations: int,
    episodes_per_iteration: int,
    max_steps: int = 1000,
    seed: Optional[int] = None,
    verbose: bool = True
) -> List[ConvergenceResult]:
    """Track convergence of one fresh ISPolicy per baseline estimate.

    Every policy starts from a zero corrective model and gets its own
    random source derived from `seed`.
    """
    seeds = np.random.SeedSequence(seed).spawn(len(named_estimates))
    results = []
    for (name, estimate), child_seed in zip(named_estimates.items(), seeds):
        policy = ISPolicy(process, LinearModel(process.feature_dim), estimate)
        results.append(track_convergence(
            policy,
            states,
            ground_truth,
            num_iterations,
            episodes_per_iteration,
            name=name,
            max_steps=max_steps,
            rng=np.random.default_rng(child_seed),
            verbose=verbose,
        ))
    return results
