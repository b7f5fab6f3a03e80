"""Report output: TSV lines, console text and pandas tables."""

from typing import Iterable, List, TextIO

import pandas as pd

from bincov.results.collector import Report


def report_to_tsv(report: Report) -> str:
    """One tab-separated line for a condition.

    Columns are p, num_trials and confidence_level followed, for each
    estimator in evaluation order, by label, covers, simulations,
    failures and elapsed milliseconds.
    """
    condition = report.condition
    fields = [repr(condition.p), str(condition.num_trials), repr(condition.confidence_level)]

    for acc in report.accumulators:
        fields.extend([
            acc.label,
            str(acc.num_covers),
            str(acc.num_simulations),
            str(acc.num_failures),
            f"{acc.total_elapsed_ms:.3f}",
        ])

    return "\t".join(fields)


def write_tsv(reports: Iterable[Report], stream: TextIO) -> None:
    """Write one TSV line per report, in the given order."""
    for report in reports:
        stream.write(report_to_tsv(report) + "\n")


def format_report(report: Report) -> str:
    """Human-readable block for one condition."""
    lines = ["----------", str(report.condition)]
    lines.extend(str(acc) for acc in report.accumulators)
    return "\n".join(lines)


def reports_to_dataframe(reports: Iterable[Report]) -> pd.DataFrame:
    """Long-format table with one row per (condition, estimator)."""
    rows: List[dict] = []
    for report in reports:
        condition = report.condition
        for acc in report.accumulators:
            rows.append({
                "p": condition.p,
                "num_trials": condition.num_trials,
                "confidence_level": condition.confidence_level,
                "estimator": acc.label,
                "num_covers": acc.num_covers,
                "num_simulations": acc.num_simulations,
                "num_failures": acc.num_failures,
                "total_elapsed_ms": acc.total_elapsed_ms,
                "coverage": acc.coverage,
            })

    columns = [
        "p", "num_trials", "confidence_level", "estimator",
        "num_covers", "num_simulations", "num_failures",
        "total_elapsed_ms", "coverage",
    ]
    return pd.DataFrame(rows, columns=columns)
