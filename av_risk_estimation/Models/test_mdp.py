"""Tests for the tabular MDP and reward definitions."""

import pytest
import numpy as np

from .mdp import MDP
from .reward import (
    RewardConfig,
    ShapedRewardConfig,
    failure_indicator_reward,
    shaped_reward,
)


def make_mdp(reward_config=None):
    """Two-step crossing: wait or go, going may collide."""
    return MDP(
        states=["start", "crossing", "collision", "across"],
        actions_map={"start": ["wait", "go"], "crossing": ["go"]},
        P={
            ("start", "wait"): {"start": 1.0},
            ("start", "go"): {"crossing": 1.0},
            ("crossing", "go"): {"collision": 0.25, "across": 0.75},
        },
        policy={"start": {"wait": 0.4, "go": 0.6}, "crossing": {"go": 1.0}},
        initial={"start": 1.0},
        failure_states={"collision"},
        terminal_states={"across"},
        feature_fn=lambda s: [1.0, float(s == "crossing")],
        reward_config=reward_config if reward_config is not None else RewardConfig(),
    )


class TestMDP:

    def test_interface(self):
        mdp = make_mdp()
        rng = np.random.default_rng(0)
        assert mdp.initial_state(rng) == "start"
        assert mdp.actions("start") == ["wait", "go"]
        assert mdp.actions("collision") == []
        assert mdp.action_probability("start", "go") == 0.6
        assert mdp.action_probability("start", "fly") == 0.0
        assert mdp.is_terminal("collision")
        assert mdp.is_terminal("across")
        assert not mdp.is_terminal("crossing")
        assert mdp.feature_dim == 2
        assert np.allclose(mdp.feature("crossing"), [1.0, 1.0])

    def test_generative_step_frequencies(self):
        mdp = make_mdp()
        rng = np.random.default_rng(1)
        n = 4000
        outcomes = [mdp.generative_step("crossing", "go", rng) for _ in range(n)]
        collisions = sum(1 for s, _ in outcomes if s == "collision")
        assert collisions / n == pytest.approx(0.25, abs=0.03)
        for s, r in outcomes:
            assert r == (1.0 if s == "collision" else 0.0)

    def test_deterministic_step(self):
        mdp = make_mdp()
        s, r = mdp.generative_step("start", "go", np.random.default_rng(0))
        assert s == "crossing"
        assert r == 0.0

    def test_terminal_penalty_is_configurable(self):
        mdp = make_mdp(RewardConfig(terminal_penalty=-5.0))
        rng = np.random.default_rng(2)
        rewards = {s: r for s, r in (mdp.generative_step("crossing", "go", rng) for _ in range(200))}
        assert rewards["across"] == -5.0
        assert rewards["collision"] == 1.0

    def test_missing_transition_rejected(self):
        with pytest.raises(ValueError):
            MDP(
                states=[0, 1],
                actions_map={0: ["a"]},
                P={},
                policy={0: {"a": 1.0}},
                initial={0: 1.0},
                failure_states={1},
                feature_fn=lambda s: [1.0],
            )


class TestRewards:

    def test_failure_indicator_reward(self):
        config = RewardConfig()
        assert failure_indicator_reward(config, is_failure=True, is_terminal=True) == 1.0
        assert failure_indicator_reward(config, is_failure=False, is_terminal=True) == 0.0
        assert failure_indicator_reward(config, is_failure=False, is_terminal=False) == 0.0

    def test_shaped_reward(self):
        config = ShapedRewardConfig()
        r = shaped_reward(config, [-1.0, -3.0], min_distance=10.0,
                          is_terminal=False, is_failure=False)
        assert r == pytest.approx(-2.0 - 1.0)

    def test_shaped_reward_terminal_without_failure(self):
        assert shaped_reward(ShapedRewardConfig(), [-1.0], 2.0,
                             is_terminal=True, is_failure=False) == -10000.0
        config = ShapedRewardConfig(terminal_penalty=-50.0)
        assert shaped_reward(config, [-1.0], 2.0, is_terminal=True, is_failure=False) == -50.0

    def test_shaped_reward_collision_keeps_likelihood(self):
        config = ShapedRewardConfig(distance_weight=0.5)
        r = shaped_reward(config, [-2.0], 0.0, is_terminal=True, is_failure=True)
        assert r == pytest.approx(-2.0)
