"""Exceptions and warning categories for failure-probability evaluation."""


class DimensionMismatch(ValueError):
    """Feature or target shapes are inconsistent with a model's dimension."""


class InvalidCombinationStyle(ValueError):
    """A subproblem combination style could not be recognised."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"unrecognized combination style: {value!r}")


class EpisodeTimeoutWarning(RuntimeWarning):
    """An episode was truncated at the step limit before reaching a terminal state."""


class DegenerateWeightsWarning(RuntimeWarning):
    """Every enumerated action received zero sampling weight."""
