"""Binomial proportion confidence interval estimators.

Four estimators share one contract: ``create_interval(num_trials,
num_successes, confidence_level)`` returns an Interval or raises
NumericalDomainError. They are stateless and safe to share between
conditions and worker processes.

Example usage:
    from bincov.model.estimators import WilsonScoreInterval

    interval = WilsonScoreInterval().create_interval(100, 5, 0.95)
    print(interval.lower_bound, interval.upper_bound)
"""

import math
from abc import ABC, abstractmethod
from typing import Dict, List, Sequence, Tuple, Type, Union

from bincov.core.entities import Interval
from bincov.core.errors import ConfigurationError, NumericalDomainError
from bincov.model.quantiles import f_ppf, two_sided_z


def check_parameters(num_trials: int, num_successes: int, confidence_level: float) -> None:
    """Validate estimator arguments.

    Raises:
        NumericalDomainError: If any argument is out of range.
    """
    if num_trials <= 0:
        raise NumericalDomainError(f"num_trials must be positive, got {num_trials}")
    if num_successes < 0:
        raise NumericalDomainError(
            f"num_successes must not be negative, got {num_successes}"
        )
    if num_successes > num_trials:
        raise NumericalDomainError(
            f"num_successes ({num_successes}) exceeds num_trials ({num_trials})"
        )
    if not 0.0 < confidence_level < 1.0:
        raise NumericalDomainError(
            f"confidence_level must lie in (0, 1), got {confidence_level}"
        )


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


class BinomialConfidenceInterval(ABC):
    """Base class of the interval estimators."""

    @property
    def label(self) -> str:
        """Name shown in reports."""
        return type(self).__name__

    def create_interval(
        self, num_trials: int, num_successes: int, confidence_level: float
    ) -> Interval:
        check_parameters(num_trials, num_successes, confidence_level)
        lower, upper = self._bounds(num_trials, num_successes, confidence_level)
        return Interval(lower, upper, confidence_level)

    @abstractmethod
    def _bounds(
        self, num_trials: int, num_successes: int, confidence_level: float
    ) -> Tuple[float, float]:
        """Compute (lower, upper) for already validated arguments."""

    def __repr__(self) -> str:
        return f"{self.label}()"


class NormalApproximationInterval(BinomialConfidenceInterval):
    """Wald interval: phat +/- z * sqrt(phat (1 - phat) / n).

    Bounds are not clipped and may fall outside [0, 1]. When phat is 0 or 1
    the interval collapses to the single point phat.
    """

    def _bounds(self, num_trials, num_successes, confidence_level):
        phat = num_successes / num_trials
        z = two_sided_z(confidence_level)
        half_width = z * math.sqrt(phat * (1.0 - phat) / num_trials)
        return phat - half_width, phat + half_width


class WilsonScoreInterval(BinomialConfidenceInterval):
    """Wilson score interval."""

    def _bounds(self, num_trials, num_successes, confidence_level):
        n = num_trials
        phat = num_successes / n
        z = two_sided_z(confidence_level)
        z2 = z * z

        factor = 1.0 + z2 / n
        center = (phat + z2 / (2.0 * n)) / factor
        half_width = z * math.sqrt(phat * (1.0 - phat) / n + z2 / (4.0 * n * n)) / factor

        # Analytically inside [0, 1]; clamping removes rounding overshoot at k = 0, n
        return _clamp(center - half_width), _clamp(center + half_width)


class AgrestiCoullInterval(BinomialConfidenceInterval):
    """Agresti-Coull ("add z^2/2 successes and failures") interval.

    The raw bounds can leave [0, 1] near the boundaries and are truncated.
    """

    def _bounds(self, num_trials, num_successes, confidence_level):
        z = two_sided_z(confidence_level)
        z2 = z * z

        n_tilde = num_trials + z2
        p_tilde = (num_successes + z2 / 2.0) / n_tilde
        half_width = z * math.sqrt(p_tilde * (1.0 - p_tilde) / n_tilde)
        return _clamp(p_tilde - half_width), _clamp(p_tilde + half_width)


class ModifiedClopperPearsonInterval(BinomialConfidenceInterval):
    """Clopper-Pearson "exact" interval with literal bounds at the edges.

    The textbook F-distribution form needs zero degrees of freedom for the
    lower bound when no successes were observed, and for the upper bound
    when every trial succeeded. Those bounds are fixed to 0 and 1
    respectively and no quantile is computed for that side.
    """

    def _bounds(self, num_trials, num_successes, confidence_level):
        n = num_trials
        k = num_successes
        alpha = (1.0 - confidence_level) / 2.0

        lower = 0.0
        if k > 0:
            f_lower = f_ppf(1.0 - alpha, 2 * (n - k + 1), 2 * k)
            lower = k / (k + (n - k + 1) * f_lower)

        upper = 1.0
        if k < n:
            f_upper = f_ppf(1.0 - alpha, 2 * (k + 1), 2 * (n - k))
            upper = (k + 1) * f_upper / (n - k + (k + 1) * f_upper)

        return lower, upper


class MemoizedEstimator:
    """Caches an estimator's results per (num_trials, num_successes, confidence_level).

    A raised NumericalDomainError is cached and re-raised for the same
    arguments. Intended to live for a single condition.
    """

    def __init__(self, estimator: BinomialConfidenceInterval):
        self.estimator = estimator
        self._cache: Dict[Tuple[int, int, float], Union[Interval, NumericalDomainError]] = {}

    @property
    def label(self) -> str:
        return self.estimator.label

    def create_interval(
        self, num_trials: int, num_successes: int, confidence_level: float
    ) -> Interval:
        key = (num_trials, num_successes, confidence_level)
        if key not in self._cache:
            try:
                self._cache[key] = self.estimator.create_interval(*key)
            except NumericalDomainError as e:
                self._cache[key] = e

        result = self._cache[key]
        if isinstance(result, NumericalDomainError):
            raise NumericalDomainError(str(result))
        return result

    def __len__(self) -> int:
        return len(self._cache)


ESTIMATORS: Dict[str, Type[BinomialConfidenceInterval]] = {
    "normal_approximation": NormalApproximationInterval,
    "modified_clopper_pearson": ModifiedClopperPearsonInterval,
    "wilson_score": WilsonScoreInterval,
    "agresti_coull": AgrestiCoullInterval,
}


def resolve_estimators(names: Sequence[str]) -> List[BinomialConfidenceInterval]:
    """Instantiate estimators by name, preserving order.

    Raises:
        ConfigurationError: If a name is unknown.
    """
    unknown = [name for name in names if name not in ESTIMATORS]
    if unknown:
        raise ConfigurationError(
            f"Unknown estimators {unknown}. Available: {sorted(ESTIMATORS)}"
        )
    return [ESTIMATORS[name]() for name in names]
