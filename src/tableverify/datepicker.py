from __future__ import annotations

from datetime import date
import logging
import re
from typing import Callable

from .config import EngineSettings
from .driver import Driver, Element
from .errors import ElementNotFoundError, VerificationError
from .locator_catalog import CALENDARS, DATE_CELL_FALLBACK, DATE_CELLS
from .locators import LocatorResolver
from .models import DateCellCheck, DatePickerReport, DateRule
from .waits import settle, wait_until

DATE_RULES: tuple[DateRule, ...] = ("pastOnly", "futureOnly")
OUTSIDE_MONTH_TOKENS = ("old", "new")
OUTSIDE_MONTH_FRAGMENTS = ("outside", "other-month", "adjacent", "prev-month", "next-month")
DATE_ATTRIBUTES = ("data-date", "datetime", "data-iso")

_ISO_DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})")


def parse_rule(raw: str) -> DateRule:
    rule = str(raw or "").strip()
    if rule == "pastOnly":
        return "pastOnly"
    if rule == "futureOnly":
        return "futureOnly"
    raise ValueError(f"Invalid rule '{raw}'. Expected 'pastOnly' or 'futureOnly'")


def expected_enabled(rule: DateRule, cell_date: date, today: date) -> bool:
    if rule == "pastOnly":
        return cell_date <= today
    return cell_date >= today


def is_date_cell_enabled(driver: Driver, cell: Element) -> bool:
    if not driver.is_enabled(cell):
        return False
    if "disabled" in (driver.attribute(cell, "class") or ""):
        return False
    disabled = driver.attribute(cell, "disabled")
    if disabled is not None and disabled != "false":
        return False
    if (driver.attribute(cell, "aria-disabled") or "").lower() == "true":
        return False
    return driver.css_value(cell, "cursor") not in {"not-allowed", "no-drop"}


def cell_date(driver: Driver, cell: Element, today: date) -> date | None:
    """Resolve the calendar date a cell stands for, or ``None`` when it cannot be trusted."""
    text = driver.text(cell).strip()
    if not text.isdigit():
        return None
    for name in DATE_ATTRIBUTES:
        match = _ISO_DATE_PATTERN.match((driver.attribute(cell, name) or "").strip())
        if match is None:
            continue
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None
    class_name = (driver.attribute(cell, "class") or "").lower()
    if any(token in class_name.split() for token in OUTSIDE_MONTH_TOKENS):
        return None
    if any(fragment in class_name for fragment in OUTSIDE_MONTH_FRAGMENTS):
        return None
    try:
        return today.replace(day=int(text))
    except ValueError:
        return None


class DatePickerValidator:
    def __init__(
        self,
        driver: Driver,
        resolver: LocatorResolver,
        settings: EngineSettings,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.driver = driver
        self.resolver = resolver
        self.settings = settings
        self.today = today
        self.logger = logging.getLogger("tableverify.datepicker")

    def visible_calendar(self) -> Element | None:
        return self.resolver.resolve(None, CALENDARS)

    def open(self, picker: Element) -> Element:
        calendar = self.visible_calendar()
        if calendar is not None:
            self.logger.info("Date-picker already open")
            return calendar
        self.driver.click(picker)
        calendar = wait_until(
            self.driver,
            self.visible_calendar,
            self.settings.wait_timeout,
            poll_interval=self.settings.poll_interval,
            description="calendar widget",
            timeout_ok=True,
        )
        settle(self.driver, self.settings.picker_settle, "opening date-picker")
        if calendar is None:
            raise ElementNotFoundError("Calendar widget not found after opening date-picker")
        return calendar

    def date_cells(self, calendar: Element) -> list[Element]:
        return self.resolver.resolve_all(calendar, DATE_CELLS) or self.resolver.resolve_all(calendar, DATE_CELL_FALLBACK)

    def validate(self, picker: Element, rule: str) -> DatePickerReport:
        parsed = parse_rule(rule)
        calendar = self.open(picker)
        reference = self.today()
        checks: list[DateCellCheck] = []
        skipped = 0
        for cell in self.date_cells(calendar):
            resolved = cell_date(self.driver, cell, reference)
            if resolved is None:
                skipped += 1
                continue
            check = DateCellCheck(
                label=self.driver.text(cell).strip(),
                cell_date=resolved,
                enabled=is_date_cell_enabled(self.driver, cell),
                expected_enabled=expected_enabled(parsed, resolved, reference),
            )
            if check.mismatch:
                self.logger.error("Date validation failed for %s", check.describe())
            checks.append(check)
        self.logger.info("Validated %s date cells for rule '%s' (%s skipped)", len(checks), parsed, skipped)
        return DatePickerReport(rule=parsed, reference=reference, checks=tuple(checks), skipped=skipped)

    def verify(self, picker: Element, rule: str) -> DatePickerReport:
        report = self.validate(picker, rule)
        if not report.checks:
            raise VerificationError("No date cells could be validated in the calendar")
        mismatches = report.mismatches
        if mismatches:
            details = "; ".join(check.describe() for check in mismatches)
            raise VerificationError(f"Date-picker does not enforce '{report.rule}': {details}")
        return report
