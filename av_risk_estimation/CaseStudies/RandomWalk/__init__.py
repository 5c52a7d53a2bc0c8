"""Random-walk corridor case study with a gambler's-ruin ground truth."""

from .random_walk import (
    walk_states,
    walk_feature,
    build_random_walk,
    walk_failure_probability,
    LEFT,
    RIGHT,
)

__all__ = [
    'walk_states',
    'walk_feature',
    'build_random_walk',
    'walk_failure_probability',
    'LEFT',
    'RIGHT',
]
