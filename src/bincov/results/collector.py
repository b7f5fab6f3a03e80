"""Coverage accumulation for one estimator within one condition.

Accumulators are immutable values folded over trial outcomes:

    acc = CoverageAccumulator(label=estimator.label)
    for outcome in outcomes:
        acc = acc.combine(evaluate_outcome(estimator, outcome))
"""

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol, Tuple

from bincov.core.entities import Condition, Interval, TrialOutcome
from bincov.core.errors import NumericalDomainError

logger = logging.getLogger(__name__)

Timer = Callable[[], float]


class IntervalEstimator(Protocol):
    """Anything exposing the estimator contract."""

    @property
    def label(self) -> str: ...

    def create_interval(
        self, num_trials: int, num_successes: int, confidence_level: float
    ) -> Interval: ...


@dataclass(frozen=True)
class OutcomeEvaluation:
    """What one estimator made of one trial outcome.

    Attributes:
        covered: Whether the interval contained the true p. False on failure.
        failed: The estimator raised NumericalDomainError.
        elapsed_ms: Time spent inside the estimator call (0 when untimed).
    """
    covered: bool
    failed: bool = False
    elapsed_ms: float = 0.0


def timed_interval(
    estimator: IntervalEstimator, outcome: TrialOutcome, timer: Timer
) -> Tuple[Interval, float]:
    """Call the estimator for an outcome and measure the call in milliseconds."""
    condition = outcome.condition
    begin = timer()
    interval = estimator.create_interval(
        condition.num_trials, outcome.num_successes, condition.confidence_level
    )
    return interval, (timer() - begin) * 1000.0


def evaluate_outcome(
    estimator: IntervalEstimator,
    outcome: TrialOutcome,
    timer: Optional[Timer] = time.perf_counter,
) -> OutcomeEvaluation:
    """Check whether the estimator's interval for an outcome covers p.

    NumericalDomainError is caught here and reported as a failed
    evaluation. Time is only recorded for calls that return an interval.
    Pass ``timer=None`` to skip timing.
    """
    condition = outcome.condition
    try:
        if timer is None:
            interval = estimator.create_interval(
                condition.num_trials, outcome.num_successes, condition.confidence_level
            )
            elapsed_ms = 0.0
        else:
            interval, elapsed_ms = timed_interval(estimator, outcome, timer)
    except NumericalDomainError as e:
        logger.debug(
            f"{estimator.label} failed for n={condition.num_trials}, "
            f"k={outcome.num_successes}: {e}"
        )
        return OutcomeEvaluation(covered=False, failed=True)

    return OutcomeEvaluation(
        covered=interval.contains(condition.p), elapsed_ms=elapsed_ms
    )


@dataclass(frozen=True)
class CoverageAccumulator:
    """Running coverage counts for one estimator.

    Attributes:
        label: Estimator label.
        num_simulations: Outcomes seen, failures included.
        num_covers: Outcomes whose interval contained p.
        num_failures: Outcomes for which no interval could be computed.
        total_elapsed_ms: Time spent in successful estimator calls.
    """
    label: str
    num_simulations: int = 0
    num_covers: int = 0
    num_failures: int = 0
    total_elapsed_ms: float = 0.0

    def combine(self, evaluation: OutcomeEvaluation) -> "CoverageAccumulator":
        """Return a new accumulator with one more evaluation folded in."""
        return replace(
            self,
            num_simulations=self.num_simulations + 1,
            num_covers=self.num_covers + (1 if evaluation.covered and not evaluation.failed else 0),
            num_failures=self.num_failures + (1 if evaluation.failed else 0),
            total_elapsed_ms=self.total_elapsed_ms + evaluation.elapsed_ms,
        )

    def record(
        self,
        estimator: IntervalEstimator,
        outcome: TrialOutcome,
        timer: Optional[Timer] = time.perf_counter,
    ) -> "CoverageAccumulator":
        """Evaluate an outcome with the estimator and fold it in."""
        return self.combine(evaluate_outcome(estimator, outcome, timer))

    @property
    def num_misses(self) -> int:
        """Computed intervals that did not contain p."""
        return self.num_simulations - self.num_covers - self.num_failures

    @property
    def coverage(self) -> float:
        """Fraction of simulations covered (nan before any simulation)."""
        if self.num_simulations == 0:
            return float("nan")
        return self.num_covers / self.num_simulations

    @property
    def failure_rate(self) -> float:
        if self.num_simulations == 0:
            return float("nan")
        return self.num_failures / self.num_simulations

    def __str__(self) -> str:
        return (
            f"{self.label}:\n"
            f"  {self.num_covers} / {self.num_simulations} ({self.coverage:.4%})\n"
            f"  {self.num_failures} failures\n"
            f"  {self.total_elapsed_ms:.3f} milliseconds"
        )


@dataclass(frozen=True)
class Report:
    """Coverage of every estimator for one condition.

    Accumulators are ordered as the estimators were evaluated.
    """
    condition: Condition
    accumulators: Tuple[CoverageAccumulator, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "accumulators", tuple(self.accumulators))

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(acc.label for acc in self.accumulators)

    def get(self, label: str) -> CoverageAccumulator:
        """Accumulator for an estimator label."""
        for acc in self.accumulators:
            if acc.label == label:
                return acc
        raise KeyError(label)
