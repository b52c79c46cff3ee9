from __future__ import annotations

import logging
from typing import Callable, Sequence

from .config import EngineSettings
from .driver import Driver, Element
from .errors import (
    ElementNotFoundError,
    IneffectiveNavigationError,
    NavigationStuckError,
    VerificationError,
    WaitTimeoutError,
)
from .locator_catalog import (
    ACTIVE_PAGE,
    NEXT_BUTTONS,
    PAGE_NUMBER_BUTTONS,
    PAGINATION_CONTAINERS,
    PREV_BUTTONS,
    ROWS_PER_PAGE_CONTROLS,
    page_button_strategies,
    rows_per_page_option_strategies,
)
from .locators import LocatorResolver
from .models import PaginationReport, PaginationState
from .strategies import Strategy
from .table import TableReader
from .waits import settle, wait_until


class PaginationNavigator:
    """Moves a paginated table between pages using only the observed control state.

    ``steps`` counts clicks for logging and loop bounding; the current page is always
    read back from the control instead.
    """

    def __init__(
        self,
        driver: Driver,
        resolver: LocatorResolver,
        table: TableReader,
        settings: EngineSettings,
    ) -> None:
        self.driver = driver
        self.resolver = resolver
        self.table = table
        self.settings = settings
        self.steps = 0
        self.logger = logging.getLogger("tableverify.pagination")

    def control(self) -> Element | None:
        return self.resolver.resolve(None, PAGINATION_CONTAINERS)

    def require_control(self) -> Element:
        control = self.control()
        if control is None:
            raise ElementNotFoundError("Pagination container not found")
        return control

    def has_pagination(self) -> bool:
        control = self.control()
        if control is None:
            return False
        for strategies in (PAGE_NUMBER_BUTTONS, NEXT_BUTTONS, PREV_BUTTONS):
            if self.resolver.resolve(control, strategies) is not None:
                return True
        return False

    def has_next(self) -> bool:
        return self._can_use(NEXT_BUTTONS)

    def has_prev(self) -> bool:
        return self._can_use(PREV_BUTTONS)

    def is_usable(self, button: Element) -> bool:
        if not self.driver.is_enabled(button):
            return False
        if "disabled" in (self.driver.attribute(button, "class") or ""):
            return False
        return (self.driver.attribute(button, "aria-disabled") or "").lower() != "true"

    def current_page_label(self) -> str:
        control = self.control()
        if control is None:
            return "1"
        active = self.resolver.resolve(control, ACTIVE_PAGE)
        if active is None:
            return "1"
        label = self.driver.text(active).strip() or (self.driver.attribute(active, "data-page") or "").strip()
        return label or "1"

    def state(self) -> PaginationState:
        return PaginationState(
            has_next=self.has_next(),
            has_prev=self.has_prev(),
            current_page_label=self.current_page_label(),
        )

    def advance(self) -> str:
        return self._step(NEXT_BUTTONS, "next")

    def retreat(self) -> str:
        return self._step(PREV_BUTTONS, "previous")

    def to_last_page(self) -> int:
        self.logger.info("Navigating to last page")
        return self._walk(self.has_next, self.advance, "last")

    def to_first_page(self) -> int:
        self.logger.info("Navigating to first page")
        return self._walk(self.has_prev, self.retreat, "first")

    def walk_all(self) -> list[str]:
        """Visit every page forward, then return to the first page.

        Returns the fingerprint of each page in visiting order.
        """
        self.require_control()
        self.to_first_page()
        fingerprints = [self.table.fingerprint()]
        for _ in range(self.settings.max_page_steps):
            if not self.has_next():
                break
            fingerprints.append(self.advance())
        else:
            if self.has_next():
                raise NavigationStuckError("last", self.settings.max_page_steps)
        if len(set(fingerprints)) != len(fingerprints):
            self.logger.warning("Some pages share the same first row: %s", fingerprints)
        self.to_first_page()
        return fingerprints

    def go_to_page(self, label: str) -> None:
        control = self.require_control()
        button = self.resolver.resolve(control, page_button_strategies(label))
        if button is None:
            raise ElementNotFoundError(f"Page button '{label}' not found in pagination bar")
        if self.current_page_label() == label:
            self.logger.info("Already on page %s", label)
            return
        before = self.table.fingerprint()
        self.driver.click(button)
        self.steps += 1
        self._await_change(before)
        current = self.current_page_label()
        if current != label:
            raise VerificationError(f"Expected active page '{label}' but pagination shows '{current}'")
        self.logger.info("Navigated to page %s", label)

    def select_page_size(self, count: str) -> int:
        """Choose ``count`` rows per page and return the number of rows now rendered."""
        control = self.resolver.resolve(None, ROWS_PER_PAGE_CONTROLS)
        if control is None:
            raise ElementNotFoundError("Rows-per-page dropdown not found")
        if self.driver.tag_name(control) == "select":
            if not (self.driver.select_option(control, label=count) or self.driver.select_option(control, value=count)):
                raise ElementNotFoundError(f"Rows-per-page option '{count}' not found")
        else:
            self.driver.click(control)
            settle(self.driver, self.settings.dropdown_settle, "opening rows-per-page dropdown")
            option = self.resolver.resolve(None, rows_per_page_option_strategies(count))
            if option is None:
                raise ElementNotFoundError(f"Rows-per-page option '{count}' not found")
            self.driver.click(option)
        settle(self.driver, self.settings.rows_per_page_settle, "changing rows per page")
        rendered = len(self.table.row_elements())
        if count.strip().isdigit() and rendered > int(count):
            raise VerificationError(f"Selected {count} rows per page but the table shows {rendered} rows")
        self.logger.info("Rows per page set to %s (%s rows rendered)", count, rendered)
        return rendered

    def report(self) -> PaginationReport:
        control = self.require_control()
        numbers = self.resolver.resolve_all(control, PAGE_NUMBER_BUTTONS)
        next_button = self.resolver.resolve(control, NEXT_BUTTONS)
        prev_button = self.resolver.resolve(control, PREV_BUTTONS)
        active = self.resolver.resolve(control, ACTIVE_PAGE)
        issues: list[str] = []
        if next_button is None:
            issues.append("Next button not found")
        if prev_button is None:
            issues.append("Previous button not found")
        return PaginationReport(
            page_buttons=len(numbers),
            next_found=next_button is not None,
            next_enabled=next_button is not None and self.is_usable(next_button),
            prev_found=prev_button is not None,
            prev_enabled=prev_button is not None and self.is_usable(prev_button),
            active_label=self.driver.text(active).strip() if active is not None else None,
            issues=tuple(issues),
        )

    def _can_use(self, strategies: Sequence[Strategy]) -> bool:
        control = self.control()
        if control is None:
            return False
        button = self.resolver.resolve(control, strategies)
        return button is not None and self.is_usable(button)

    def _step(self, strategies: Sequence[Strategy], direction: str) -> str:
        control = self.require_control()
        button = self.resolver.resolve(control, strategies)
        if button is None or not self.is_usable(button):
            raise ElementNotFoundError(f"No usable {direction} button in pagination bar")
        before = self.table.fingerprint()
        self.driver.click(button)
        self.steps += 1
        after = self._await_change(before)
        if after == before:
            raise IneffectiveNavigationError(
                f"Clicking {direction} did not change the table: first row still shows '{before}'"
            )
        self.logger.debug("Moved to %s page (step %s): '%s' -> '%s'", direction, self.steps, before, after)
        settle(self.driver, self.settings.demo_delay)
        return after

    def _await_change(self, before: str) -> str:
        """Block until the first row is rendered, then give its content time to change.

        A missing first row is a timeout; an unchanged one is left to the caller.
        """

        def changed() -> bool:
            return self.table.first_cell() is not None and self.table.fingerprint() != before

        wait_until(
            self.driver,
            lambda: self.table.first_cell() is not None,
            self.settings.wait_timeout,
            poll_interval=self.settings.poll_interval,
            description="first row of the table after page navigation",
        )
        wait_until(
            self.driver,
            changed,
            self.settings.wait_timeout,
            poll_interval=self.settings.poll_interval,
            description="table content to change",
            timeout_ok=True,
        )
        settle(self.driver, self.settings.page_settle, "page navigation")
        if self.table.first_cell() is None:
            raise WaitTimeoutError("First row of the table disappeared after page navigation")
        return self.table.fingerprint()

    def _walk(self, can_move: Callable[[], bool], move: Callable[[], str], target: str) -> int:
        taken = 0
        for _ in range(self.settings.max_page_steps):
            if not can_move():
                self.logger.info("Reached %s page after %s step(s)", target, taken)
                return taken
            move()
            taken += 1
        if can_move():
            raise NavigationStuckError(target, self.settings.max_page_steps)
        return taken
