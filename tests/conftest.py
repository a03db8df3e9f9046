from __future__ import annotations

import pytest

SAMPLE_ROW = "01 2 1 45000 34 5 3 4 4 3 3 2 2 3 3 1 1 2 2 5 4 4 4 0"
SHORT_ROW = "02 1 2 12000 29 2 4"

HEADER_LINES = [
    "Table 2.1 The Job Survey data",
    "id ethnicgp gender income age years commit satis1 satis2 satis3 satis4",
]


def row_line(case: int, n_tokens: int = 24) -> str:
    """A whitespace-delimited table line: case number then n_tokens - 1 values."""
    values = [f"{case:02d}"] + [str((case + i) % 5 + 1) for i in range(n_tokens - 1)]
    return "   ".join(values)


def make_pages(page2_lines: list[str], page3_lines: list[str]) -> list[str]:
    return [
        "UEL-DS-7006 Job Survey\nQuantitative Data Analysis",
        "\n".join(HEADER_LINES + page2_lines + ["2"]),
        "\n".join(page3_lines + ["3"]),
    ]


@pytest.fixture
def full_pages() -> list[str]:
    return make_pages(
        [row_line(n) for n in range(1, 18)],
        [row_line(n) for n in range(18, 35)],
    )


@pytest.fixture
def short_pages() -> list[str]:
    """Only 30 cases survive."""
    return make_pages(
        [row_line(n) for n in range(1, 16)],
        [row_line(n) for n in range(16, 31)],
    )


@pytest.fixture
def coded_pages() -> list[str]:
    """Case numbers followed by a letter code, which only the fallback reader accepts."""
    return make_pages(
        [f"{n:02d} a " + " ".join(["3"] * 23) for n in range(1, 4)],
        [f"{n:02d} b " + " ".join(["4"] * 23) for n in range(4, 6)],
    )
