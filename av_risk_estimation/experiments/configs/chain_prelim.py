"""Preliminary policy-evaluation configuration for the absorbing chain."""

from .base_config import PolicyEvalExperimentConfig
from ...CaseStudies.AbsorbingChain import build_absorbing_chain, chain_failure_probability


config = PolicyEvalExperimentConfig(
    case_study_name="absorbing_chain",
    build_process_fn=build_absorbing_chain,
    ground_truth_fn=chain_failure_probability,
    seed=0,
    num_iterations=10,
    episodes_per_iteration=50,
    max_steps=100,
    constant_baselines={"constant 0.5": 0.5},
    estimate_episodes=500,
    results_path="./data/prelim/policy_eval_chain.json",
    process_kwargs={"length": 4, "crash_probability": 0.05},
)
