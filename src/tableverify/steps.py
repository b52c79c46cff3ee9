from __future__ import annotations

from datetime import date
import logging
from pathlib import Path
from typing import Callable

from .config import EngineSettings
from .datepicker import DatePickerValidator, parse_rule
from .driver import Driver, Element
from .errors import ElementNotFoundError, VerificationError, WaitTimeoutError
from .inline_edit import InlineEditor
from .locator_catalog import TABLE_ROOTS, file_input_label_strategies, file_input_strategies, upload_error_strategies
from .locators import LocatorResolver, any_element
from .models import ColumnIndex, SelectionRequest
from .multiselect import MultiSelect
from .pagination import PaginationNavigator
from .reporting import ReportLog, Reporter, step_operation
from .repository import ObjectRepository
from .search import TableSearch
from .strategies import Strategy
from .table import TableReader, check_values_precede_column
from .toggle import RowToggle, describe_state, parse_toggle_state
from .waits import settle, wait_until

FIRST_COLUMN_ELEMENT = "firstColumn"
TABLE_HEADERS_ELEMENT = "tableHeaders"


class TableSteps:
    """Public step operations over paginated tables and composite widgets.

    Every public method is bound to one literal step phrase (see ``step_catalog``),
    reports a verdict to ``reporter`` and raises on failure.
    """

    def __init__(
        self,
        driver: Driver,
        repository: ObjectRepository | None = None,
        *,
        settings: EngineSettings | None = None,
        reporter: Reporter | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.driver = driver
        self.repository = repository or ObjectRepository()
        self.settings = settings or EngineSettings()
        self.reporter = reporter or ReportLog()
        self.today = today
        self.resolver = LocatorResolver(driver)
        self.logger = logging.getLogger("tableverify.steps")

    def find_element(self, element: str, page: str) -> Element:
        strategy = self.repository.locate(page, element)
        found = self.resolver.resolve(None, (strategy,))
        if found is None:
            raise ElementNotFoundError(f"Element '{element}' not found or not visible on page '{page}'")
        return found

    @step_operation("Pagination Control")
    def verify_pagination_control(self) -> str:
        _, navigator, _ = self._table_tools()
        report = navigator.report()
        if report.issues:
            raise VerificationError("Pagination control incomplete: " + "; ".join(report.issues))
        return (
            f"Pagination control present with {report.page_buttons} page button(s); "
            f"Next enabled={report.next_enabled}, Previous enabled={report.prev_enabled}, "
            f"active page={report.active_label or 'unknown'}"
        )

    @step_operation("Navigate All Pages")
    def navigate_all_pages(self) -> str:
        _, navigator, _ = self._table_tools()
        fingerprints = navigator.walk_all()
        return f"Visited {len(fingerprints)} page(s) and returned to the first page"

    @step_operation("Go To Page", "page_number")
    def go_to_page(self, page_number: str) -> str:
        _, navigator, _ = self._table_tools()
        navigator.go_to_page(page_number.strip())
        return f"Navigated to page {page_number}"

    @step_operation("Rows Per Page", "count")
    def select_rows_per_page(self, count: str) -> str:
        _, navigator, _ = self._table_tools()
        rendered = navigator.select_page_size(count.strip())
        return f"Selected {count} rows per page ({rendered} rows shown)"

    @step_operation("Element Not Visible", "element", "page")
    def verify_element_not_visible(self, element: str, page: str) -> str:
        strategy = self.repository.locate(page, element)
        gone = wait_until(
            self.driver,
            lambda: self.resolver.resolve(None, (strategy,)) is None,
            self.settings.absence_timeout,
            poll_interval=self.settings.poll_interval,
            description=f"'{element}' to disappear",
            timeout_ok=True,
        )
        if not gone:
            raise VerificationError(f"Element {element} should not be visible on {page} but it is")
        return f"Element {element} correctly not visible on {page}"

    @step_operation("File Upload", "label")
    def upload_file(self, file_path: str, label: str) -> str:
        path = Path(file_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"File to upload not found: {path}")
        label_element = self.resolver.resolve(None, file_input_label_strategies(label), accept=any_element)
        label_for = self.driver.attribute(label_element, "for") if label_element is not None else None
        file_input = self.resolver.resolve(None, file_input_strategies(label, label_for), accept=any_element)
        if file_input is None:
            raise ElementNotFoundError(f"File input with label '{label}' not found")
        self.driver.set_input_files(file_input, path.resolve())
        settle(self.driver, self.settings.upload_settle, "file upload")
        return f"Uploaded '{path.name}' into '{label}'"

    @step_operation("File Upload Error", "message")
    def verify_upload_error(self, message: str) -> str:
        strategies = upload_error_strategies(message)
        try:
            wait_until(
                self.driver,
                lambda: self.resolver.resolve(None, strategies),
                self.settings.wait_timeout,
                poll_interval=self.settings.poll_interval,
                description=f"upload error '{message}'",
            )
        except WaitTimeoutError as exc:
            raise VerificationError(f"File upload error message '{message}' not displayed") from exc
        return f"File upload error displayed: {message}"

    @step_operation("Row Toggle", "column", "value", "state")
    def set_row_toggle(self, column: str, value: str, state: str) -> str:
        desired = parse_toggle_state(state)
        _, _, search = self._table_tools()
        search.locate_row(column, value, case_sensitive=False)
        toggle = RowToggle(self.driver, self.resolver, self.settings)
        changed = toggle.set(search.row_locator(column, value, case_sensitive=False), desired)
        verb = "Set" if changed else "Kept"
        return f"{verb} toggle to {describe_state(desired)} in row where {column} is '{value}'"

    @step_operation("Multi-select", "values", "element")
    def select_values(self, values: str, element: str, page: str) -> str:
        request = SelectionRequest.parse(values)
        control = self.find_element(element, page)
        selector = MultiSelect(
            self.driver,
            self.resolver,
            self.settings,
            on_selected=lambda value: self.reporter.log_pass("Multi-select value", f"Successfully selected: {value}"),
        )
        outcome = selector.apply(control, request)
        return f"Selected {len(outcome.applied)} value(s) in '{element}': {', '.join(outcome.applied)}"

    @step_operation("Header Verification", "source_page", "target_page", "final_column")
    def verify_values_as_headers(self, source_page: str, target_page: str, final_column: str) -> str:
        values = self._source_values(source_page)
        if not values:
            raise ElementNotFoundError(f"No values found in first column of {source_page} table")
        headers = self._target_headers(target_page)
        if not headers.headers:
            raise ElementNotFoundError(f"No header elements found in {target_page} table")
        problems = check_values_precede_column(values, headers, final_column)
        if problems:
            raise VerificationError("Header verification failed: " + "; ".join(problems))
        return f"All {len(values)} value(s) from {source_page} appear as headers before '{final_column}'"

    @step_operation("Inline Edit", "field", "row_value")
    def edit_row_field(self, field: str, value: str, row_column: str, row_value: str, page: str) -> str:
        field_strategy = self.repository.locate(page, field)
        _, _, search = self._table_tools()
        search.locate_row(row_column, row_value)
        editor = InlineEditor(self.driver, self.resolver, self.settings)
        outcome = editor.edit(search.row_locator(row_column, row_value), field_strategy, value, field_name=field)
        return f"Field '{field}' correctly displays updated value '{outcome.read_back}'"

    @step_operation("Date-picker Rule Validation", "element", "rule")
    def verify_date_picker(self, page: str, element: str, rule: str) -> str:
        try:
            parsed = parse_rule(rule)
        except ValueError as exc:
            raise VerificationError(str(exc)) from exc
        picker = self.find_element(element, page)
        validator = DatePickerValidator(self.driver, self.resolver, self.settings, today=self.today)
        report = validator.verify(picker, parsed)
        return (
            f"Date-picker '{element}' correctly enforces '{parsed}' rule on page '{page}' "
            f"({len(report.checks)} dates checked)"
        )

    @step_operation("Row Deletion Verification", "column", "value")
    def verify_row_deleted(self, column: str, value: str, table: str, page: str) -> str:
        table_strategy = self.repository.locate(page, table)
        reader, _, search = self._table_tools(table_strategy)
        reader.require_root()
        pages = search.verify_absent(column, value)
        return f"Row with {column}='{value}' not found on any of {pages} page(s) in table '{table}'"

    @step_operation("Last Row Check", "column", "value")
    def verify_last_row(self, column: str, value: str) -> str:
        _, _, search = self._table_tools()
        return search.verify_last_row(column, value)

    def _table_tools(self, table: Strategy | None = None) -> tuple[TableReader, PaginationNavigator, TableSearch]:
        roots = (table,) if table is not None else TABLE_ROOTS
        reader = TableReader(self.driver, self.resolver, roots)
        navigator = PaginationNavigator(self.driver, self.resolver, reader, self.settings)
        return reader, navigator, TableSearch(reader, navigator, self.settings)

    def _source_values(self, page: str) -> list[str]:
        strategy = self.repository.get(page, FIRST_COLUMN_ELEMENT)
        if strategy is None:
            reader, _, _ = self._table_tools()
            return reader.first_column_values()
        elements = self.resolver.resolve_all(None, (strategy,), accept=any_element)
        return [text for text in (self.driver.text(element).strip() for element in elements) if text]

    def _target_headers(self, page: str) -> ColumnIndex:
        strategy = self.repository.get(page, TABLE_HEADERS_ELEMENT)
        if strategy is None:
            reader, _, _ = self._table_tools()
            return reader.headers()
        elements = self.resolver.resolve_all(None, (strategy,), accept=any_element)
        return ColumnIndex(tuple(self.driver.text(element).strip() for element in elements))
