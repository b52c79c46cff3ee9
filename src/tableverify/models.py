from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from .errors import ColumnNotFoundError

EditMode = Literal["viewing", "editing"]
FieldKind = Literal["select", "checkbox", "text", "multiline", "other"]
DateRule = Literal["pastOnly", "futureOnly"]
SelectionMode = Literal["native", "composite"]


@dataclass(frozen=True, slots=True)
class ColumnIndex:
    headers: tuple[str, ...]

    def position(self, label: str, *, case_sensitive: bool = True) -> int:
        for index, header in enumerate(self.headers):
            if header == label:
                return index
            if not case_sensitive and header.casefold() == label.casefold():
                return index
        raise ColumnNotFoundError(label, self.headers)

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and label in self.headers


@dataclass(frozen=True, slots=True)
class RowSnapshot:
    cells: tuple[str, ...]

    def cell(self, position: int) -> str | None:
        if 0 <= position < len(self.cells):
            return self.cells[position]
        return None


@dataclass(frozen=True, slots=True)
class PageSnapshot:
    columns: ColumnIndex
    rows: tuple[RowSnapshot, ...]

    @property
    def fingerprint(self) -> str:
        if not self.rows:
            return ""
        return self.rows[0].cell(0) or ""

    @property
    def last_row(self) -> RowSnapshot | None:
        return self.rows[-1] if self.rows else None

    def find_row(self, column: str, value: str, *, case_sensitive: bool = True) -> int | None:
        position = self.columns.position(column, case_sensitive=case_sensitive)
        for index, row in enumerate(self.rows):
            if row.cell(position) == value:
                return index
        return None


@dataclass(frozen=True, slots=True)
class PaginationState:
    has_next: bool
    has_prev: bool
    current_page_label: str

    @property
    def is_first(self) -> bool:
        return not self.has_prev

    @property
    def is_last(self) -> bool:
        return not self.has_next


@dataclass(frozen=True, slots=True)
class RowLocation:
    page: int
    row: int
    page_label: str = ""

    def describe(self) -> str:
        return f"row number {self.row} on page {self.page}"


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    location: RowLocation | None
    pages_scanned: int

    @property
    def found(self) -> bool:
        return self.location is not None


@dataclass(frozen=True, slots=True)
class SelectionRequest:
    values: tuple[str, ...]

    @classmethod
    def parse(cls, raw: str) -> SelectionRequest:
        values = tuple(part.strip() for part in str(raw or "").split(",") if part.strip())
        if not values:
            raise ValueError("No values provided for multi-select dropdown.")
        return cls(values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True, slots=True)
class MultiSelectOutcome:
    mode: SelectionMode
    applied: tuple[str, ...]
    multiple: bool = True


@dataclass(frozen=True, slots=True)
class EditOutcome:
    entered_edit_mode: bool
    field_kind: FieldKind
    read_back: str
    lingering_edit_mode: bool = False
    states: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DateCellCheck:
    label: str
    cell_date: date
    enabled: bool
    expected_enabled: bool

    @property
    def mismatch(self) -> bool:
        return self.enabled != self.expected_enabled

    def describe(self) -> str:
        return (
            f"{self.cell_date.isoformat()} (cell '{self.label}'): "
            f"expected enabled={self.expected_enabled}, actual enabled={self.enabled}"
        )


@dataclass(frozen=True, slots=True)
class DatePickerReport:
    rule: DateRule
    reference: date
    checks: tuple[DateCellCheck, ...] = ()
    skipped: int = 0

    @property
    def mismatches(self) -> list[DateCellCheck]:
        return [check for check in self.checks if check.mismatch]

    @property
    def ok(self) -> bool:
        return bool(self.checks) and not self.mismatches


@dataclass(frozen=True, slots=True)
class PaginationReport:
    page_buttons: int
    next_found: bool
    next_enabled: bool
    prev_found: bool
    prev_enabled: bool
    active_label: str | None
    issues: tuple[str, ...] = field(default_factory=tuple)
