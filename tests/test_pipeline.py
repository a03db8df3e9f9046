from __future__ import annotations

import csv
import warnings

import pytest

import survey_pipeline
from conftest import SHORT_ROW, make_pages, row_line
from survey_extract import extract_primary, extract_secondary
from survey_models import (
    COLUMN_NAMES,
    Dataset,
    ExtractionFailed,
    ExtractionResult,
    InputNotFound,
    InsufficientPages,
    NoCandidateLines,
    NoValidRows,
    ShapeMismatchWarning,
)
from survey_pipeline import extract_and_export, extract_dataset, load_page_texts, validate_shape


def test_primary_result_used_when_it_succeeds(full_pages):
    dataset = extract_dataset(full_pages)
    assert dataset.strategy == "primary"
    assert dataset.n_rows == 34
    assert dataset.columns == COLUMN_NAMES


def test_falls_back_to_secondary(coded_pages):
    dataset = extract_dataset(coded_pages)
    assert dataset.strategy == "secondary"
    assert list(dataset.rows) == extract_secondary(coded_pages).rows


def test_secondary_not_run_after_primary_success(full_pages):
    calls = []

    def primary(pages):
        calls.append("primary")
        return ExtractionResult("primary", rows=[(1,) * 24])

    def secondary(pages):
        calls.append("secondary")
        return ExtractionResult("secondary", rows=[(2,) * 24])

    dataset = extract_dataset(full_pages, [("primary", primary), ("secondary", secondary)])
    assert calls == ["primary"]
    assert dataset.rows == ((1,) * 24,)


def test_two_pages_fail_both_strategies():
    with pytest.raises(ExtractionFailed) as excinfo:
        extract_dataset(["cover", row_line(1)])
    err = excinfo.value
    assert [name for name, _ in err.causes] == ["primary", "secondary"]
    assert all(isinstance(cause, InsufficientPages) for _, cause in err.causes)
    assert "primary" in str(err) and "secondary" in str(err)


def test_no_candidates_anywhere_is_fatal():
    pages = ["cover", "Table 2.1\nno rows", "end of table"]
    with pytest.raises(ExtractionFailed) as excinfo:
        extract_dataset(pages)
    assert all(isinstance(cause, NoCandidateLines) for _, cause in excinfo.value.causes)


@pytest.mark.parametrize("fixture", ["full_pages", "coded_pages", "short_pages"])
def test_schema_is_fixed(fixture, request):
    dataset = extract_dataset(request.getfixturevalue(fixture))
    assert dataset.columns == COLUMN_NAMES
    assert dataset.n_cols == 24
    assert all(len(row) == 24 for row in dataset.rows)


def test_full_table_has_no_shape_warning(full_pages):
    dataset = extract_dataset(full_pages)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert validate_shape(dataset) == []


def test_thirty_rows_warns(short_pages):
    dataset = extract_dataset(short_pages)
    with pytest.warns(ShapeMismatchWarning, match=r"Number of cases \(30\)"):
        problems = validate_shape(dataset)
    assert len(problems) == 1


def test_column_mismatch_warns():
    dataset = Dataset(rows=((1,) * 23,) * 34, columns=COLUMN_NAMES[:23])
    with pytest.warns(ShapeMismatchWarning, match="variables"):
        validate_shape(dataset)


def test_short_table_still_exported(short_pages, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(survey_pipeline, "load_page_texts", lambda path: short_pages)
    out = tmp_path / "survey.csv"

    with pytest.warns(ShapeMismatchWarning):
        dataset = extract_and_export("survey.pdf", out)

    with out.open(newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == list(COLUMN_NAMES)
    assert len(rows) == 31
    assert dataset.n_rows == 30
    assert (tmp_path / "survey_variables.csv").exists()
    assert "DATA QUALITY CHECKS" in capsys.readouterr().out


def test_load_page_texts_missing_file(tmp_path):
    with pytest.raises(InputNotFound):
        load_page_texts(tmp_path / "absent.pdf")


class _FakePage:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


class _FakePDF:
    def __init__(self, texts):
        self.pages = [_FakePage(t) for t in texts]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_load_page_texts_reads_every_page(tmp_path, monkeypatch):
    pdf = tmp_path / "survey.pdf"
    pdf.write_bytes(b"%PDF-1.4")
    monkeypatch.setattr(
        survey_pipeline.pdfplumber, "open", lambda path: _FakePDF(["cover", None, "rows"])
    )
    assert load_page_texts(pdf) == ["cover", "", "rows"]


def test_falls_back_when_primary_rows_are_all_too_short():
    coded = [f"{n:02d} c " + " ".join(["2"] * 23) for n in range(1, 4)]
    pages = make_pages([SHORT_ROW] + coded, [])
    assert isinstance(extract_primary(pages).error, NoValidRows)

    dataset = extract_dataset(pages)
    assert dataset.strategy == "secondary"
    assert [row[0] for row in dataset.rows] == [1, 2, 3]
    assert list(dataset.rows) == extract_secondary(pages).rows
