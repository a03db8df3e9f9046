"""Extract the Job Survey table (Table 2.1) from pages 2-3 of a PDF and export it to CSV.

Two-strategy pipeline:
  1. extract_primary     – joins pages 2 and 3, keeps lines that open with a
                           case number followed by a value, and takes every
                           digit run on them as a token
  2. extract_secondary   – fallback, run only when the primary strategy finds
                           nothing; reads each page on its own and only
                           accepts whole-word digit runs

Every candidate line goes through reconcile_row: fewer than 20 tokens and it
is dropped, otherwise it is cut or padded with NA to the 24 survey variables.
A table that is not 34x24 is still exported, with a warning.
"""

from __future__ import annotations

import argparse
import logging
import sys

from survey_models import SurveyExtractionError
from survey_pipeline import extract_and_export


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {n}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract the Job Survey table from a PDF and export it to CSV.",
    )
    parser.add_argument("pdf", help="Path to the PDF file")
    parser.add_argument(
        "output",
        nargs="?",
        default="job_survey_data.csv",
        help="Output CSV file (default: job_survey_data.csv)",
    )
    parser.add_argument(
        "--head",
        type=_non_negative_int, default=6, metavar="N",
        help="Number of rows to preview (default: 6)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped lines and strategy decisions",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        extract_and_export(args.pdf, args.output, head=args.head)
    except SurveyExtractionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
