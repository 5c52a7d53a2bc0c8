"""Base configuration classes for experiments."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List


@dataclass
class PolicyEvalExperimentConfig:
    """Configuration for importance-sampled policy-evaluation experiments."""

    # Case study
    case_study_name: str
    build_process_fn: Callable
    ground_truth_fn: Callable

    # Experiment parameters
    seed: int
    num_iterations: int
    episodes_per_iteration: int
    max_steps: int

    # Baseline estimators to compare: name -> constant estimate.
    # "none" always uses the zero estimate.
    constant_baselines: Dict[str, float] = field(default_factory=dict)

    # Final importance-sampled estimate from the initial state
    estimate_episodes: int = 1000
    confidence: float = 0.95

    # Output
    results_path: str = "./data/policy_eval_results.json"
    figure_path: str = ""

    # Optional build_process kwargs (also passed to ground_truth_fn)
    process_kwargs: dict = None

    # States at which the error is measured; all non-terminal states if empty
    eval_states: List = field(default_factory=list)

    def __post_init__(self):
        if self.process_kwargs is None:
            self.process_kwargs = {}
