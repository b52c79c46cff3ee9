from __future__ import annotations

import logging
from typing import Callable

from .config import EngineSettings
from .driver import Element
from .errors import ElementNotFoundError, NavigationStuckError, VerificationError
from .models import RowLocation, SearchOutcome
from .pagination import PaginationNavigator
from .table import TableReader


class TableSearch:
    def __init__(self, table: TableReader, navigator: PaginationNavigator, settings: EngineSettings) -> None:
        self.table = table
        self.navigator = navigator
        self.settings = settings
        self.logger = logging.getLogger("tableverify.search")

    def scan_current_page(self, column: str, value: str, *, case_sensitive: bool = True) -> int | None:
        found = self.table.find_row(column, value, case_sensitive=case_sensitive)
        return None if found is None else found[0]

    def search(self, column: str, value: str, *, rewind: bool = True, case_sensitive: bool = True) -> SearchOutcome:
        """Scan page after page until ``value`` shows up in ``column``.

        The table is left on the page where the row was found, or on the last page.
        """
        if rewind and self.navigator.has_pagination():
            self.navigator.to_first_page()
        page = 1
        advances = 0
        while True:
            index = self.scan_current_page(column, value, case_sensitive=case_sensitive)
            if index is not None:
                location = RowLocation(page=page, row=index + 1, page_label=self.navigator.current_page_label())
                self.logger.info("Found %s='%s' at %s", column, value, location.describe())
                return SearchOutcome(location=location, pages_scanned=page)
            if not self.navigator.has_next():
                break
            if advances >= self.settings.max_page_steps:
                raise NavigationStuckError("last", self.settings.max_page_steps)
            self.navigator.advance()
            advances += 1
            page += 1
        self.logger.info("%s='%s' not found after scanning %s page(s)", column, value, page)
        return SearchOutcome(location=None, pages_scanned=page)

    def verify_last_row(self, column: str, value: str) -> str:
        if self.navigator.has_pagination():
            self.navigator.to_last_page()
        snapshot = self.table.snapshot()
        position = snapshot.columns.position(column)
        last_row = snapshot.last_row
        if last_row is not None and last_row.cell(position) == value:
            return f"Value '{value}' found in column '{column}' in the last row of the table"

        outcome = self.search(column, value, rewind=True)
        if outcome.location is not None:
            raise VerificationError(
                f"Row with value '{value}' in column '{column}' found in "
                f"{outcome.location.describe()}, but not in the last row."
            )
        raise VerificationError(f"Row with value '{value}' in column '{column}' not found in the table.")

    def verify_absent(self, column: str, value: str) -> int:
        outcome = self.search(column, value, rewind=True)
        if outcome.location is not None:
            raise VerificationError(
                f"Row with {column}='{value}' was found on page {outcome.location.page} - deletion verification failed"
            )
        return outcome.pages_scanned

    def locate_row(self, column: str, value: str, *, case_sensitive: bool = True) -> Element:
        """Return the row element, moving to the page that holds it when needed."""
        found = self.table.find_row(column, value, case_sensitive=case_sensitive)
        if found is not None:
            return found[1]
        outcome = self.search(column, value, rewind=True, case_sensitive=case_sensitive)
        if outcome.location is None:
            raise ElementNotFoundError(f"Row where {column} is '{value}' not found in the table")
        return self.row_locator(column, value, case_sensitive=case_sensitive)()

    def row_locator(self, column: str, value: str, *, case_sensitive: bool = True) -> Callable[[], Element]:
        """Build a callable that re-finds the row on the current page every time it is called."""

        def locate() -> Element:
            found = self.table.find_row(column, value, case_sensitive=case_sensitive)
            if found is None:
                raise ElementNotFoundError(f"Row where {column} is '{value}' not found on the current page")
            return found[1]

        return locate
