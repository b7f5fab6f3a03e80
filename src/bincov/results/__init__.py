"""Results layer: coverage accumulation and report formatting."""

from bincov.results.collector import (
    CoverageAccumulator,
    OutcomeEvaluation,
    Report,
    evaluate_outcome,
)
from bincov.results.formatting import (
    format_report,
    report_to_tsv,
    reports_to_dataframe,
    write_tsv,
)

__all__ = [
    "CoverageAccumulator",
    "OutcomeEvaluation",
    "Report",
    "evaluate_outcome",
    "format_report",
    "report_to_tsv",
    "reports_to_dataframe",
    "write_tsv",
]
