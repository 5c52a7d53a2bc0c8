"""Preliminary policy-evaluation configuration for the random-walk corridor."""

from .base_config import PolicyEvalExperimentConfig
from ...CaseStudies.RandomWalk import build_random_walk, walk_failure_probability


config = PolicyEvalExperimentConfig(
    case_study_name="random_walk",
    build_process_fn=build_random_walk,
    ground_truth_fn=walk_failure_probability,
    seed=42,
    num_iterations=15,
    episodes_per_iteration=100,
    max_steps=500,
    constant_baselines={"constant 0.1": 0.1, "constant 0.5": 0.5},
    estimate_episodes=1000,
    results_path="./data/prelim/policy_eval_random_walk.json",
    figure_path="./images/prelim/random_walk_convergence.pdf",
    process_kwargs={"size": 8, "left_probability": 0.3},
)
