"""Inverse CDFs used by the interval estimators.

scipy returns nan for arguments outside a distribution's domain; these
wrappers turn that into NumericalDomainError. Results are cached, since
the same quantiles recur for every repetition of a condition.
"""

import math
from functools import lru_cache

from scipy import stats

from bincov.core.errors import NumericalDomainError


def _check_probability(q: float) -> None:
    if not 0.0 < q < 1.0:
        raise NumericalDomainError(f"probability must lie in (0, 1), got {q}")


def normal_ppf(q: float) -> float:
    """Inverse CDF of the standard normal distribution."""
    _check_probability(q)
    return float(stats.norm.ppf(q))


@lru_cache(maxsize=65536)
def f_ppf(q: float, dfn: float, dfd: float) -> float:
    """Inverse CDF of the F distribution with (dfn, dfd) degrees of freedom."""
    _check_probability(q)
    if dfn <= 0 or dfd <= 0:
        raise NumericalDomainError(
            f"F distribution needs positive degrees of freedom, got ({dfn}, {dfd})"
        )

    value = float(stats.f.ppf(q, dfn, dfd))
    if not math.isfinite(value):
        raise NumericalDomainError(
            f"F quantile undefined for q={q}, df=({dfn}, {dfd})"
        )
    return value


@lru_cache(maxsize=256)
def two_sided_z(confidence_level: float) -> float:
    """Normal critical value for a two-sided interval."""
    return normal_ppf(1.0 - (1.0 - confidence_level) / 2.0)
