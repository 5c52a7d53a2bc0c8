"""Policy-evaluation experiment runner.

Compares baseline failure-probability estimators by the error of their
importance-sampled, linearly corrected value estimates over the states of
a case study, then reports the importance-sampled failure probability from
the initial state for each.

Usage:
    python -m av_risk_estimation.experiments.run_policy_eval_experiment <config_module>

Example:
    python -m av_risk_estimation.experiments.run_policy_eval_experiment configs.random_walk_prelim
"""

import importlib
import inspect
import os
import sys
import time
from typing import Any, Dict

import numpy as np

from .experiment_io import build_metadata, save_experiment_results
from .configs.base_config import PolicyEvalExperimentConfig

from ..Estimation import ConstantEstimate, LinearModel, zero_estimate
from ..Evaluation import compare_estimators
from ..MonteCarlo import (
    ISPolicy,
    estimate_failure_probability,
    mc_policy_eval,
    plot_convergence,
)


# ============================================================
# Helpers
# ============================================================

def _ground_truth_kwargs(config: PolicyEvalExperimentConfig) -> Dict[str, Any]:
    """The subset of process kwargs accepted by the ground-truth function."""
    params = inspect.signature(config.ground_truth_fn).parameters
    return {k: v for k, v in config.process_kwargs.items() if k in params}


def build_estimates(config: PolicyEvalExperimentConfig) -> Dict[str, Any]:
    estimates = {"none": zero_estimate}
    for name, value in config.constant_baselines.items():
        estimates[name] = ConstantEstimate(value)
    return estimates


def run_experiment(config: PolicyEvalExperimentConfig, verbose: bool = True) -> Dict[str, Any]:
    """Run the comparison described by `config` and return a results dict."""
    process = config.build_process_fn(**config.process_kwargs)

    states = config.eval_states or [s for s in process.states if not process.is_terminal(s)]
    gt_kwargs = _ground_truth_kwargs(config)
    ground_truth = np.array([config.ground_truth_fn(s, **gt_kwargs) for s in states])

    estimates = build_estimates(config)
    convergence = compare_estimators(
        process,
        estimates,
        states,
        ground_truth,
        config.num_iterations,
        config.episodes_per_iteration,
        max_steps=config.max_steps,
        seed=config.seed,
        verbose=verbose,
    )

    # Final failure-probability estimate with a policy fit from scratch
    rng = np.random.default_rng(config.seed)
    initial = process.initial_state(rng)
    failure_estimates = {}
    for name, estimate in estimates.items():
        policy = ISPolicy(process, LinearModel(process.feature_dim), estimate)
        mc_policy_eval(
            policy,
            config.num_iterations,
            config.episodes_per_iteration,
            max_steps=config.max_steps,
            rng=rng,
            verbose=False,
        )
        failure_estimates[name] = estimate_failure_probability(
            policy,
            config.estimate_episodes,
            max_steps=config.max_steps,
            rng=rng,
            confidence=config.confidence,
        )
        if verbose:
            print(f"\n{name}:")
            print(failure_estimates[name])

    return {
        "states": list(states),
        "ground_truth": ground_truth,
        "initial_state": initial,
        "initial_ground_truth": config.ground_truth_fn(initial, **gt_kwargs),
        "convergence": convergence,
        "failure_estimates": failure_estimates,
    }


def print_report(results: Dict[str, Any], case_study_name: str):
    print("\n" + "=" * 70)
    print(f"POLICY EVALUATION REPORT: {case_study_name.upper()}")
    print("=" * 70)
    print(f"Initial state: {results['initial_state']!r}  "
          f"ground truth pf = {results['initial_ground_truth']:.6g}")
    print(f"\n{'Estimator':<20} {'MSE (start)':>12} {'MSE (final)':>12} {'MSE (ideal)':>12} {'IS estimate':>12}")
    for conv in results["convergence"]:
        est = results["failure_estimates"][conv.name]
        print(f"{conv.name:<20} {conv.errors[0]:>12.4g} {conv.final_error:>12.4g} "
              f"{conv.ideal_error:>12.4g} {est.estimate:>12.4g}")


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    # Import config
    config_module_name = sys.argv[1]
    try:
        config_module = importlib.import_module(
            f".{config_module_name}", package="av_risk_estimation.experiments"
        )
        config = config_module.config
    except (ImportError, AttributeError) as e:
        print(f"Error loading config: {e}")
        sys.exit(1)

    print("=" * 70)
    print(f"POLICY EVALUATION EXPERIMENT: {config.case_study_name.upper()}")
    print(f"Iterations: {config.num_iterations}, Episodes/iteration: "
          f"{config.episodes_per_iteration}, Seed: {config.seed}")
    print("=" * 70)

    t0 = time.time()
    results = run_experiment(config)
    total_time = time.time() - t0
    print(f"\nTotal time: {total_time:.1f}s")

    print_report(results, config.case_study_name)

    metadata = build_metadata(config, extra={"total_time_s": total_time})
    save_experiment_results(config.results_path, results, metadata)
    print(f"\nResults saved to {config.results_path}")

    if config.figure_path:
        os.makedirs(os.path.dirname(config.figure_path) or ".", exist_ok=True)
        plot_convergence(results["convergence"], save_path=config.figure_path, show=False)

    print("\n" + "=" * 70)
    print("EXPERIMENT COMPLETE")
    print("=" * 70)


if __name__ == "__main__":
    main()
