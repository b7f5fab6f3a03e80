"""Data model for the coverage simulation.

These types are used across the codebase and kept free of numerical
dependencies to avoid circular imports.
"""

import numbers
from dataclasses import dataclass

from bincov.core.errors import ConfigurationError


@dataclass(frozen=True)
class Condition:
    """One experiment configuration.

    Attributes:
        p: True success probability, strictly between 0 and 1.
        num_trials: Number of Bernoulli trials per simulated sample.
        confidence_level: Nominal confidence level of the intervals.
    """
    p: float
    num_trials: int
    confidence_level: float

    def __post_init__(self) -> None:
        if not 0.0 < self.p < 1.0:
            raise ConfigurationError(f"p must lie in (0, 1), got {self.p}")
        if isinstance(self.num_trials, bool) or not isinstance(self.num_trials, numbers.Integral):
            raise ConfigurationError(
                f"num_trials must be an integer, got {self.num_trials!r}"
            )
        if self.num_trials <= 0:
            raise ConfigurationError(
                f"num_trials must be positive, got {self.num_trials}"
            )
        if not 0.0 < self.confidence_level < 1.0:
            raise ConfigurationError(
                f"confidence_level must lie in (0, 1), got {self.confidence_level}"
            )

    def __str__(self) -> str:
        return (
            f"Condition: p = {self.p:.4f}, {self.num_trials} trials, "
            f"{self.confidence_level:.3f} confidence level"
        )


@dataclass(frozen=True)
class TrialOutcome:
    """Result of one simulated binomial sample."""
    condition: Condition
    num_successes: int

    def __post_init__(self) -> None:
        if not 0 <= self.num_successes <= self.condition.num_trials:
            raise ValueError(
                f"num_successes must lie in [0, {self.condition.num_trials}], "
                f"got {self.num_successes}"
            )


@dataclass(frozen=True)
class Interval:
    """A confidence interval for a binomial proportion.

    Bounds are not forced into [0, 1]; the normal approximation can
    legitimately produce bounds outside it.
    """
    lower_bound: float
    upper_bound: float
    confidence_level: float

    @property
    def center(self) -> float:
        return (self.lower_bound + self.upper_bound) / 2.0

    @property
    def width(self) -> float:
        return self.upper_bound - self.lower_bound

    def contains(self, p: float) -> bool:
        """Closed-interval membership test."""
        return self.lower_bound <= p <= self.upper_bound
