"""Tests for coverage analysis."""

import math

import pytest

from bincov.core.entities import Condition
from bincov.experiment.analysis import compare_estimators, coverage_ci, summarize_coverage
from bincov.results.collector import CoverageAccumulator, Report


@pytest.fixture
def reports():
    accumulators = (
        CoverageAccumulator("NormalApproximationInterval", 1000, 880, 0),
        CoverageAccumulator("ModifiedClopperPearsonInterval", 1000, 990, 0),
    )
    return [
        Report(Condition(0.05, 100, 0.95), accumulators),
        Report(Condition(0.05, 200, 0.95), accumulators),
    ]


class TestCoverageCI:
    """Test Monte-Carlo interval of a coverage rate."""

    def test_known_values(self):
        """Standard error and interval around the coverage."""
        ci = coverage_ci(CoverageAccumulator("X", 10_000, 9_500, 0))

        assert ci["coverage"] == 0.95
        assert ci["se"] == pytest.approx(math.sqrt(0.95 * 0.05 / 10_000))
        assert ci["ci_lower"] < 0.95 < ci["ci_upper"]
        assert ci["n"] == 10_000

    def test_empty_accumulator(self):
        """No simulations gives nan statistics."""
        ci = coverage_ci(CoverageAccumulator("X"))

        assert math.isnan(ci["coverage"])
        assert ci["n"] == 0


class TestSummarizeCoverage:
    """Test the summary table."""

    def test_columns_and_flags(self, reports):
        """Coverage error and conservativeness are reported per row."""
        df = summarize_coverage(reports)

        assert len(df) == 4
        for column in ["coverage", "coverage_se", "coverage_ci_lower",
                       "coverage_ci_upper", "coverage_error", "conservative"]:
            assert column in df.columns

        normal = df[df["estimator"] == "NormalApproximationInterval"].iloc[0]
        exact = df[df["estimator"] == "ModifiedClopperPearsonInterval"].iloc[0]
        assert normal["coverage_error"] == pytest.approx(-0.07)
        assert not normal["conservative"]
        assert exact["conservative"]


class TestCompareEstimators:
    """Test the wide coverage table."""

    def test_wide_shape(self, reports):
        """One row per condition, one column per estimator in evaluation order."""
        wide = compare_estimators(reports)

        assert wide.shape == (2, 2)
        assert list(wide.columns) == [
            "NormalApproximationInterval", "ModifiedClopperPearsonInterval",
        ]
        assert wide.iloc[0]["ModifiedClopperPearsonInterval"] == pytest.approx(0.99)
