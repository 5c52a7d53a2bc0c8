"""Importance-Sampling Monte Carlo Evaluation of Failure Probabilities.

This package estimates rare-event (failure) probabilities of a decision
process by adaptive importance sampling. A failure-seeking policy samples
actions in proportion to their native probability times the estimated
failure probability of their successor; the estimate is a baseline plus a
linear correction that is refit online from importance-weighted returns.

Modules
-------
is_policy
    ISPolicy: value estimates and failure-seeking action sampling
simulation
    Episode rollouts and flattening into training batches
evaluator
    Policy-evaluation loop and importance-sampled failure estimates
visualization
    Convergence plots
data_structures
    RolloutTrace, TrainingBatch, FailureProbabilityEstimate and
    ConvergenceResult dataclasses
"""

# Data structures
from .data_structures import (
    RolloutTrace,
    TrainingBatch,
    FailureProbabilityEstimate,
    ConvergenceResult,
)

# Policy
from .is_policy import ISPolicy

# Core simulation
from .simulation import rollout_episode, run_rollouts, rollout

# High-level API
from .evaluator import mc_policy_eval, estimate_failure_probability

# Visualization
from .visualization import plot_convergence

__all__ = [
    # Data structures
    "RolloutTrace",
    "TrainingBatch",
    "FailureProbabilityEstimate",
    "ConvergenceResult",
    # Policy
    "ISPolicy",
    # Core simulation
    "rollout_episode",
    "run_rollouts",
    "rollout",
    # High-level API
    "mc_policy_eval",
    "estimate_failure_probability",
    # Visualization
    "plot_convergence",
]
