from __future__ import annotations

from dataclasses import dataclass, field

ROW_WIDTH = 24
MIN_ROW_TOKENS = 20
EXPECTED_ROWS = 34
MIN_PAGES = 3
TABLE_PAGES = (2, 3)

COLUMN_NAMES: tuple[str, ...] = (
    "id", "ethnicgp", "gender", "income", "age", "years", "commit",
    "satis1", "satis2", "satis3", "satis4",
    "autonom1", "autonom2", "autonom3", "autonom4",
    "routine1", "routine2", "routine3", "routine4",
    "attend", "skill", "prody", "qual", "absence",
)

COLUMN_DESCRIPTIONS: dict[str, str] = {
    "id": "Identification number",
    "ethnicgp": "Ethnic group",
    "gender": "Gender",
    "income": "Gross annual income",
    "age": "Age",
    "years": "Years worked",
    "commit": "Organizational commitment",
    "satis1": "Job-satisfaction scale - Item 1",
    "satis2": "Job-satisfaction scale - Item 2",
    "satis3": "Job-satisfaction scale - Item 3",
    "satis4": "Job-satisfaction scale - Item 4",
    "autonom1": "Job-autonomy scale - Item 1",
    "autonom2": "Job-autonomy scale - Item 2",
    "autonom3": "Job-autonomy scale - Item 3",
    "autonom4": "Job-autonomy scale - Item 4",
    "routine1": "Job-routine scale - Item 1",
    "routine2": "Job-routine scale - Item 2",
    "routine3": "Job-routine scale - Item 3",
    "routine4": "Job-routine scale - Item 4",
    "attend": "Attendance at meeting",
    "skill": "Rated skill",
    "prody": "Rated productivity",
    "qual": "Rated quality",
    "absence": "Absenteeism",
}

DataRow = tuple[int | None, ...]


class SurveyExtractionError(Exception):
    """Base class for every failure raised while extracting the survey table."""


class InputNotFound(SurveyExtractionError):
    """The PDF could not be located before decoding."""


class ExtractionError(SurveyExtractionError):
    """A single extraction strategy produced no dataset."""


class InsufficientPages(ExtractionError):
    pass


class NoCandidateLines(ExtractionError):
    pass


class NoValidRows(ExtractionError):
    pass


class ExtractionFailed(SurveyExtractionError):
    """Every extraction strategy failed; *causes* holds (strategy, error) pairs."""

    def __init__(self, causes: list[tuple[str, ExtractionError]]) -> None:
        self.causes = causes
        detail = "; ".join(f"{name}: {err}" for name, err in causes)
        super().__init__(f"Both extraction methods failed. {detail}")


class ShapeMismatchWarning(UserWarning):
    """Row or column count differs from the expected 34x24 table."""


@dataclass
class ExtractionResult:
    """Outcome of one extraction strategy: accepted rows or the error that stopped it."""

    strategy: str
    rows: list[DataRow] = field(default_factory=list)
    error: ExtractionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Dataset:
    """The reconciled survey table with its fixed column schema."""

    rows: tuple[DataRow, ...]
    columns: tuple[str, ...] = COLUMN_NAMES
    strategy: str = ""

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return len(self.columns)

    def column(self, name: str) -> list[int | None]:
        idx = self.columns.index(name)
        return [row[idx] for row in self.rows]


@dataclass
class QualityReport:
    """Data issues worth reviewing before analysis."""

    missing: dict[str, int]
    zero_income: int
    high_absence: int
