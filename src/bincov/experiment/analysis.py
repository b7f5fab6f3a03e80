"""Coverage statistics across experiment reports."""

from typing import Iterable, List

import numpy as np
import pandas as pd

from bincov.model.estimators import WilsonScoreInterval
from bincov.results.collector import CoverageAccumulator, Report
from bincov.results.formatting import reports_to_dataframe


def coverage_ci(acc: CoverageAccumulator, confidence: float = 0.95) -> dict:
    """Monte-Carlo uncertainty of an empirical coverage rate.

    Args:
        acc: Completed accumulator.
        confidence: Confidence level of the interval around the coverage.

    Returns:
        Dictionary containing:
        - coverage: Empirical coverage
        - se: Binomial standard error of the coverage
        - ci_lower: Lower Wilson score bound
        - ci_upper: Upper Wilson score bound
        - n: Number of simulations
    """
    n = acc.num_simulations
    if n == 0:
        return {
            "coverage": np.nan,
            "se": np.nan,
            "ci_lower": np.nan,
            "ci_upper": np.nan,
            "n": 0,
        }

    coverage = acc.coverage
    se = float(np.sqrt(coverage * (1.0 - coverage) / n))
    interval = WilsonScoreInterval().create_interval(n, acc.num_covers, confidence)

    return {
        "coverage": coverage,
        "se": se,
        "ci_lower": interval.lower_bound,
        "ci_upper": interval.upper_bound,
        "n": n,
    }


def summarize_coverage(reports: Iterable[Report], confidence: float = 0.95) -> pd.DataFrame:
    """Per (condition, estimator) coverage with its Monte-Carlo interval.

    Adds to the long report table:
    - coverage_se, coverage_ci_lower, coverage_ci_upper
    - coverage_error: coverage minus the nominal confidence level
    - conservative: the coverage interval lies at or above nominal
    - failure_rate
    """
    reports = list(reports)
    frame = reports_to_dataframe(reports)

    stats_rows: List[dict] = []
    for report in reports:
        nominal = report.condition.confidence_level
        for acc in report.accumulators:
            ci = coverage_ci(acc, confidence)
            stats_rows.append({
                "coverage_se": ci["se"],
                "coverage_ci_lower": ci["ci_lower"],
                "coverage_ci_upper": ci["ci_upper"],
                "coverage_error": ci["coverage"] - nominal,
                "conservative": bool(ci["ci_lower"] >= nominal),
                "failure_rate": acc.failure_rate,
            })

    stats = pd.DataFrame(stats_rows, index=frame.index, columns=[
        "coverage_se", "coverage_ci_lower", "coverage_ci_upper",
        "coverage_error", "conservative", "failure_rate",
    ])
    return pd.concat([frame, stats], axis=1)


def compare_estimators(reports: Iterable[Report]) -> pd.DataFrame:
    """Coverage in wide form: one row per condition, one column per estimator.

    Rows keep the condition order of the reports; columns keep the
    estimator evaluation order.
    """
    frame = reports_to_dataframe(reports)
    if frame.empty:
        return frame

    labels = list(dict.fromkeys(frame["estimator"]))
    wide = frame.pivot_table(
        index=["p", "num_trials", "confidence_level"],
        columns="estimator",
        values="coverage",
        sort=False,
    )
    return wide[labels]
