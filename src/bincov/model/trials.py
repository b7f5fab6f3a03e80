"""Binomial sample generation."""

import numpy as np

from bincov.core.entities import Condition, TrialOutcome


class TrialGenerator:
    """Draws Binomial(n, p) samples one Bernoulli trial at a time.

    Each sample consumes exactly ``num_trials`` uniforms from the stream,
    in order, so results depend only on the seed and the condition.
    """

    def __init__(self, condition: Condition) -> None:
        self.condition = condition

    def draw(self, rng: np.random.Generator) -> TrialOutcome:
        """Simulate one sample and count the successes."""
        uniforms = rng.random(self.condition.num_trials)
        num_successes = int(np.count_nonzero(uniforms < self.condition.p))
        return TrialOutcome(self.condition, num_successes)


def create_rng(seed: int) -> np.random.Generator:
    """Fresh random stream for one condition."""
    return np.random.default_rng(seed)
