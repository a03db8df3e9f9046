from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence

from survey_models import (
    MIN_PAGES,
    MIN_ROW_TOKENS,
    ROW_WIDTH,
    TABLE_PAGES,
    DataRow,
    ExtractionResult,
    InsufficientPages,
    NoCandidateLines,
    NoValidRows,
)

logger = logging.getLogger(__name__)

_PRIMARY_LINE_RE = re.compile(r"^\s*\d{1,2}\s+\d")
_PRIMARY_TOKEN_RE = re.compile(r"\d+")

_SECONDARY_LINE_RE = re.compile(r"^\d{1,2}\s+")
_SECONDARY_TOKEN_RE = re.compile(r"\b\d+\b")
_SECONDARY_MIN_LINE_LEN = 10


def reconcile_row(tokens: Sequence[int]) -> DataRow | None:
    """Fit one line's tokens to the 24-column schema, or None if too short to be a row."""
    if len(tokens) < MIN_ROW_TOKENS:
        return None
    if len(tokens) >= ROW_WIDTH:
        return tuple(tokens[:ROW_WIDTH])
    return tuple(tokens) + (None,) * (ROW_WIDTH - len(tokens))


def _to_ints(raw_tokens: list[str]) -> list[int]:
    values: list[int] = []
    for raw in raw_tokens:
        try:
            values.append(int(raw))
        except ValueError:
            logger.info("Dropping %d-digit token", len(raw))
    return values


def primary_tokens(line: str) -> list[int]:
    return _to_ints(_PRIMARY_TOKEN_RE.findall(line))


def secondary_tokens(line: str) -> list[int]:
    # Digit runs glued to letters ("12a") are dropped, not split.
    return _to_ints(_SECONDARY_TOKEN_RE.findall(line))


def _table_pages(pages: Sequence[str]) -> list[str] | None:
    if len(pages) < MIN_PAGES:
        return None
    return [pages[n - 1] for n in TABLE_PAGES]


def _reconcile_lines(lines: Iterable[str], tokenize: Callable[[str], list[int]]) -> list[DataRow]:
    rows: list[DataRow] = []
    for i, line in enumerate(lines, 1):
        tokens = tokenize(line)
        row = reconcile_row(tokens)
        if row is None:
            logger.info("Skipping line %d - insufficient data points: %d", i, len(tokens))
            continue
        rows.append(row)
    return rows


def extract_primary(pages: Sequence[str]) -> ExtractionResult:
    """Parse pages 2 and 3 as one block of text.

    Lines that start with a one- or two-digit case number followed by another
    number are candidates; every digit run on a candidate line is a token.
    """
    table_pages = _table_pages(pages)
    if table_pages is None:
        return ExtractionResult(
            "primary",
            error=InsufficientPages(f"PDF too short: {len(pages)} pages, expected at least {MIN_PAGES}"),
        )

    combined = "\n".join(table_pages)
    candidates = [ln.strip() for ln in combined.split("\n") if _PRIMARY_LINE_RE.match(ln)]
    logger.debug("Found %d potential data lines", len(candidates))
    if not candidates:
        return ExtractionResult("primary", error=NoCandidateLines("No data lines found in the PDF"))

    rows = _reconcile_lines(candidates, primary_tokens)
    if not rows:
        return ExtractionResult(
            "primary",
            error=NoValidRows(f"No valid data rows extracted from {len(candidates)} candidate lines"),
        )
    logger.debug("Successfully parsed %d data rows", len(rows))
    return ExtractionResult("primary", rows=rows)


def _page_candidates(page_text: str) -> list[str]:
    out: list[str] = []
    for raw in page_text.split("\n"):
        line = raw.strip()
        if len(line) < _SECONDARY_MIN_LINE_LEN:
            continue
        if _SECONDARY_LINE_RE.match(line):
            out.append(line)
    return out


def extract_secondary(pages: Sequence[str]) -> ExtractionResult:
    """Parse pages 2 and 3 one at a time so no row spans the page break."""
    table_pages = _table_pages(pages)
    if table_pages is None:
        return ExtractionResult(
            "secondary",
            error=InsufficientPages(f"PDF must have at least {MIN_PAGES} pages, got {len(pages)}"),
        )

    rows: list[DataRow] = []
    n_candidates = 0
    for page_num, page_text in zip(TABLE_PAGES, table_pages):
        logger.debug("Processing page %d", page_num)
        candidates = _page_candidates(page_text)
        n_candidates += len(candidates)
        page_rows = _reconcile_lines(candidates, secondary_tokens)
        rows.extend(page_rows)

    if not rows:
        if n_candidates == 0:
            err = NoCandidateLines("No data rows could be extracted from the PDF: no candidate lines")
        else:
            err = NoValidRows(f"No data rows could be extracted from {n_candidates} candidate lines")
        return ExtractionResult("secondary", error=err)
    logger.debug("Advanced extraction completed: %d cases extracted", len(rows))
    return ExtractionResult("secondary", rows=rows)
