from __future__ import annotations

import logging
import warnings
from collections.abc import Callable, Sequence
from pathlib import Path

import pdfplumber

from survey_extract import extract_primary, extract_secondary
from survey_models import (
    COLUMN_NAMES,
    EXPECTED_ROWS,
    ROW_WIDTH,
    Dataset,
    ExtractionError,
    ExtractionFailed,
    ExtractionResult,
    InputNotFound,
    ShapeMismatchWarning,
)
from survey_report import (
    export_dataset,
    export_descriptions,
    print_exports,
    print_quality_report,
    print_summary,
    quality_report,
)

logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", module="pdfminer")

logger = logging.getLogger(__name__)

Strategy = Callable[[Sequence[str]], ExtractionResult]

STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("primary", extract_primary),
    ("secondary", extract_secondary),
)


def load_page_texts(pdf_path: str | Path) -> list[str]:
    """Decode every page of *pdf_path* to text, in reading order."""
    path = Path(pdf_path)
    if not path.exists():
        raise InputNotFound(f"PDF file not found at specified path: {path}")

    with pdfplumber.open(path) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    logger.info("PDF loaded: %s (%d pages)", path, len(pages))
    return pages


def extract_dataset(
    pages: Sequence[str],
    strategies: Sequence[tuple[str, Strategy]] = STRATEGIES,
) -> Dataset:
    """Run each strategy in order and label the first successful result.

    Raises ExtractionFailed carrying every strategy's error when none succeeds.
    """
    causes: list[tuple[str, ExtractionError]] = []
    for name, strategy in strategies:
        result = strategy(pages)
        if result.ok:
            logger.info("%s extraction produced %d rows", name, len(result.rows))
            return Dataset(rows=tuple(result.rows), columns=COLUMN_NAMES, strategy=name)
        logger.warning("%s extraction failed: %s", name, result.error)
        causes.append((name, result.error))
    raise ExtractionFailed(causes)


def validate_shape(
    dataset: Dataset,
    expected_rows: int = EXPECTED_ROWS,
    expected_cols: int = ROW_WIDTH,
) -> list[str]:
    """Warn (never fail) when the table is not the expected size; return the mismatches."""
    problems: list[str] = []
    if dataset.n_rows != expected_rows:
        problems.append(
            f"Number of cases ({dataset.n_rows}) does not match expected ({expected_rows})"
        )
    if dataset.n_cols != expected_cols:
        problems.append(
            f"Number of variables ({dataset.n_cols}) does not match expected ({expected_cols})"
        )
    for msg in problems:
        warnings.warn(msg, ShapeMismatchWarning, stacklevel=2)
    return problems


def extract_and_export(
    pdf_path: str | Path,
    output_file: str | Path = "job_survey_data.csv",
    head: int = 6,
) -> Dataset:
    pages = load_page_texts(pdf_path)
    dataset = extract_dataset(pages)
    validate_shape(dataset)

    print_summary(dataset, head=head)
    data_path = export_dataset(dataset, output_file)
    desc_path = export_descriptions(dataset.columns, output_file)
    print_exports(data_path, desc_path)
    print_quality_report(quality_report(dataset))
    return dataset
