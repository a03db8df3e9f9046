from __future__ import annotations

import csv
import statistics
from collections.abc import Callable
from pathlib import Path

from survey_models import COLUMN_DESCRIPTIONS, Dataset, QualityReport

NA = "NA"


def variables_path(output_file: str | Path) -> Path:
    """Name of the descriptions file that sits next to *output_file*."""
    path = Path(output_file)
    if path.suffix == ".csv":
        return path.with_name(f"{path.stem}_variables.csv")
    return path.with_name(f"{path.name}_variables.csv")


def _cell(value: int | None) -> str:
    return NA if value is None else str(value)


def export_dataset(dataset: Dataset, output_file: str | Path) -> Path:
    path = Path(output_file)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(dataset.columns)
        for row in dataset.rows:
            writer.writerow([_cell(v) for v in row])
    return path


def export_descriptions(columns: tuple[str, ...], output_file: str | Path) -> Path:
    path = variables_path(output_file)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["Variable", "Description"])
        for name in columns:
            writer.writerow([name, COLUMN_DESCRIPTIONS[name]])
    return path


def missing_counts(dataset: Dataset) -> dict[str, int]:
    return {name: sum(v is None for v in dataset.column(name)) for name in dataset.columns}


def count_where(dataset: Dataset, column: str, predicate: Callable[[int], bool]) -> int:
    """Count rows whose *column* value satisfies *predicate*; absent values never count."""
    return sum(1 for v in dataset.column(column) if v is not None and predicate(v))


def quality_report(dataset: Dataset) -> QualityReport:
    missing = {name: n for name, n in missing_counts(dataset).items() if n > 0}
    return QualityReport(
        missing=missing,
        zero_income=count_where(dataset, "income", lambda v: v == 0),
        high_absence=count_where(dataset, "absence", lambda v: v > 50),
    )


def summarize_columns(dataset: Dataset) -> dict[str, dict[str, float | int | None]]:
    """Min, median, mean and max of each column, plus its count of absent values."""
    summary: dict[str, dict[str, float | int | None]] = {}
    for name in dataset.columns:
        values = [v for v in dataset.column(name) if v is not None]
        if values:
            stats = {
                "min": min(values),
                "median": statistics.median(values),
                "mean": statistics.fmean(values),
                "max": max(values),
            }
        else:
            stats = {"min": None, "median": None, "mean": None, "max": None}
        stats["na"] = len(dataset.rows) - len(values)
        summary[name] = stats
    return summary


def _fmt(value: float | int | None) -> str:
    if value is None:
        return NA
    if isinstance(value, float):
        return f"{value:.0f}" if value.is_integer() else f"{value:.2f}"
    return str(value)


def print_summary(dataset: Dataset, head: int = 6) -> None:
    head = max(head, 0)
    print("=" * 64)
    print("DATASET SUMMARY")
    print("=" * 64)
    print(f"Extracted by:  {dataset.strategy or 'unknown'} strategy")
    print(f"Dimensions:    {dataset.n_rows} rows x {dataset.n_cols} columns")
    print(f"Variables:     {', '.join(dataset.columns)}")

    print(f"\nFirst {min(head, dataset.n_rows)} rows:\n")
    print("  " + " ".join(f"{name:>8}" for name in dataset.columns))
    for row in dataset.rows[:head]:
        print("  " + " ".join(f"{_cell(v):>8}" for v in row))

    print("\nSummary statistics:\n")
    print(f"  {'variable':<10} {'min':>8} {'median':>8} {'mean':>10} {'max':>8} {'NA':>4}")
    for name, stats in summarize_columns(dataset).items():
        print(
            f"  {name:<10} {_fmt(stats['min']):>8} {_fmt(stats['median']):>8}"
            f" {_fmt(stats['mean']):>10} {_fmt(stats['max']):>8} {stats['na']:>4}"
        )


def print_quality_report(report: QualityReport) -> None:
    print("\n" + "=" * 64)
    print("DATA QUALITY CHECKS")
    print("=" * 64)
    if report.missing:
        print("Variables with missing values:")
        for name, n in report.missing.items():
            print(f"  {name}: {n}")
    else:
        print("No missing values detected")

    print("\nPotential data issues to review:")
    print(f"- Income values of 0: {report.zero_income} cases")
    print(f"- Absence values > 50: {report.high_absence} cases")


def print_exports(data_path: Path, desc_path: Path) -> None:
    print("\n" + "=" * 64)
    print("EXPORT COMPLETE")
    print("=" * 64)
    for label, path in (("main dataset", data_path), ("variable descriptions", desc_path)):
        size_kb = path.stat().st_size / 1024 if path.exists() else 0.0
        print(f"  {path}  ({label}, {size_kb:.2f} KB)")
