import pytest

from fake_dom import FakeDriver, PaginatedTable, el

from tableverify.errors import ColumnNotFoundError, ElementNotFoundError
from tableverify.locators import LocatorResolver
from tableverify.models import ColumnIndex
from tableverify.table import TableReader, check_values_precede_column


def _reader(driver: FakeDriver) -> TableReader:
    return TableReader(driver, LocatorResolver(driver))


def test_reader_builds_snapshot_of_current_page() -> None:
    driver = FakeDriver()
    PaginatedTable(driver, ["ID", "Name"], [("U001", "Ann"), ("U002", "Ben"), ("U003", "Cy"), ("U004", "Di")])

    snapshot = _reader(driver).snapshot()

    assert snapshot.columns.headers == ("ID", "Name")
    assert [row.cells for row in snapshot.rows] == [("U001", "Ann"), ("U002", "Ben"), ("U003", "Cy")]
    assert snapshot.fingerprint == "U001"
    assert snapshot.last_row is not None
    assert snapshot.last_row.cells == ("U003", "Cy")
    assert snapshot.find_row("Name", "Ben") == 1


def test_reader_fingerprint_is_first_cell_of_first_row() -> None:
    driver = FakeDriver()
    PaginatedTable(driver, ["ID", "Name"], [("U010", "Jo")])

    assert _reader(driver).fingerprint() == "U010"


def test_find_row_matches_exact_cell_text() -> None:
    driver = FakeDriver()
    PaginatedTable(driver, ["ID", "Name"], [("U001", "Ann Lee"), ("U002", "Ann")])
    reader = _reader(driver)

    found = reader.find_row("Name", "Ann")

    assert found is not None
    assert found[0] == 1
    assert reader.find_row("Name", "An") is None


def test_unknown_column_is_fatal_and_lists_headers() -> None:
    driver = FakeDriver()
    PaginatedTable(driver, ["ID", "Name"], [("U001", "Ann")])

    with pytest.raises(ColumnNotFoundError) as exc_info:
        _reader(driver).find_row("Email", "a@b.c")

    assert "Column 'Email' not found" in str(exc_info.value)
    assert "'ID', 'Name'" in str(exc_info.value)


def test_empty_table_has_no_rows_and_empty_fingerprint() -> None:
    driver = FakeDriver()
    PaginatedTable(driver, ["ID", "Name"], [])
    reader = _reader(driver)

    assert reader.row_elements() == []
    assert reader.fingerprint() == ""
    assert reader.find_row("ID", "U001") is None


def test_missing_table_raises_element_not_found() -> None:
    driver = FakeDriver(el("body", el("p", text="No data")))

    with pytest.raises(ElementNotFoundError):
        _reader(driver).headers()


def test_reader_understands_aria_grid_layout() -> None:
    grid = el(
        "div",
        el(
            "div",
            el("span", text="Order", role="columnheader"),
            el("span", text="Status", role="columnheader"),
            role="row",
        ),
        el(
            "div",
            el("span", text="A-1", role="gridcell"),
            el("span", text="Open", role="gridcell"),
            role="row",
        ),
        role="grid",
    )
    driver = FakeDriver(el("body", grid))
    reader = _reader(driver)

    snapshot = reader.snapshot()

    assert snapshot.columns.headers == ("Order", "Status")
    assert [row.cells for row in snapshot.rows] == [("A-1", "Open")]


def test_column_index_duplicate_headers_first_match_wins() -> None:
    columns = ColumnIndex(("Name", "Role", "Name"))

    assert columns.position("Name") == 0
    assert columns.position("role", case_sensitive=False) == 1
    with pytest.raises(ColumnNotFoundError):
        columns.position("role")


def test_column_lookup_matches_label_exactly() -> None:
    columns = ColumnIndex(("Name", "Role"))

    assert "Name" in columns
    assert "Name " not in columns
    with pytest.raises(ColumnNotFoundError) as exc_info:
        columns.position("Name ")

    assert exc_info.value.column == "Name "


def test_values_must_precede_final_column() -> None:
    headers = ColumnIndex(("User", "Read", "Write", "Actions", "Admin"))

    assert check_values_precede_column(["Read", "Write", " "], headers, "Actions") == []

    problems = check_values_precede_column(["Read", "Admin", "Delete"], headers, "Actions")
    assert problems == [
        "'Admin' appears at position 5, not before 'Actions' (position 4)",
        "'Delete' is not present in the table headers",
    ]


def test_values_check_requires_final_column() -> None:
    with pytest.raises(ColumnNotFoundError):
        check_values_precede_column(["Read"], ColumnIndex(("Read",)), "Actions")
