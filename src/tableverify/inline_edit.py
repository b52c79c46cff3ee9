from __future__ import annotations

import logging
from typing import Callable

from .config import EngineSettings
from .driver import Driver, Element
from .errors import ElementNotFoundError, VerificationError
from .fields import expected_read_back, read_field, write_field
from .locator_catalog import EDIT_AFFORDANCES, SAVE_AFFORDANCES
from .locators import LocatorResolver, any_element
from .models import EditMode, EditOutcome
from .strategies import Strategy
from .waits import settle

RowLocator = Callable[[], Element]


def probe_mode(resolver: LocatorResolver, row: Element) -> EditMode:
    """Derive the row's mode from which affordance is visible right now."""
    save_visible = resolver.resolve(row, SAVE_AFFORDANCES) is not None
    edit_visible = resolver.resolve(row, EDIT_AFFORDANCES) is not None
    return "editing" if save_visible and not edit_visible else "viewing"


class InlineEditor:
    """Viewing -> Editing -> Saving -> Verifying -> Viewing for one row field.

    The row is re-located through ``locate_row`` after every mutation because the
    table may re-render it.
    """

    def __init__(self, driver: Driver, resolver: LocatorResolver, settings: EngineSettings) -> None:
        self.driver = driver
        self.resolver = resolver
        self.settings = settings
        self.logger = logging.getLogger("tableverify.inline_edit")

    def edit(self, locate_row: RowLocator, field: Strategy, value: str, *, field_name: str = "") -> EditOutcome:
        name = field_name or field.name
        states: list[str] = ["viewing"]

        entered = self._enter_edit_mode(locate_row)
        states.append("editing")

        element = self._field(locate_row(), field, name, interactive=True)
        kind = write_field(self.driver, element, value)
        states.append("saving")

        lingering = self._save(locate_row)
        states.append("verifying")

        settle(self.driver, self.settings.verify_settle, "save")
        row = self._relocate(locate_row)
        element = self._field(row, field, name, interactive=False)
        actual = read_field(self.driver, element)
        expected = expected_read_back(kind, value)
        if actual != expected:
            raise VerificationError(
                f"Value verification failed for field '{name}': Expected '{expected}', Actual '{actual}'"
            )
        states.append("viewing")
        self.logger.info("Field '%s' updated to '%s'", name, actual)
        return EditOutcome(
            entered_edit_mode=entered,
            field_kind=kind,
            read_back=actual,
            lingering_edit_mode=lingering,
            states=tuple(states),
        )

    def _enter_edit_mode(self, locate_row: RowLocator) -> bool:
        row = locate_row()
        if probe_mode(self.resolver, row) == "editing":
            self.logger.info("Row already in edit mode; skipping Edit click")
            return False
        edit_button = self.resolver.resolve(row, EDIT_AFFORDANCES)
        if edit_button is None:
            raise ElementNotFoundError("Edit icon not found in row")
        if not self.driver.is_enabled(edit_button):
            raise ElementNotFoundError("Edit icon is not enabled")
        self.driver.click(edit_button)
        settle(self.driver, self.settings.edit_settle, "clicking Edit")
        if probe_mode(self.resolver, locate_row()) != "editing":
            raise VerificationError("Row did not enter edit mode after clicking Edit")
        return True

    def _save(self, locate_row: RowLocator) -> bool:
        row = locate_row()
        save_button = self.resolver.resolve(row, SAVE_AFFORDANCES)
        if save_button is None or not self.driver.is_enabled(save_button):
            raise ElementNotFoundError("Save icon not found, not visible, or not enabled")
        self.driver.click(save_button)
        settle(self.driver, self.settings.save_settle, "clicking Save")
        row = self._relocate(locate_row)
        lingering = row is not None and probe_mode(self.resolver, row) == "editing"
        if lingering:
            self.logger.warning("Row still appears to be in edit mode after save operation")
        return lingering

    def _relocate(self, locate_row: RowLocator) -> Element | None:
        try:
            return locate_row()
        except ElementNotFoundError as exc:
            # Editing the identifying column moves the row out of reach; fall back to the page.
            self.logger.warning("Could not re-locate row after save: %s", exc)
            return None

    def _field(self, row: Element | None, field: Strategy, name: str, *, interactive: bool) -> Element:
        element = None
        if row is not None:
            element = self.resolver.resolve(row, (field,), accept=any_element)
        if element is None:
            element = self.resolver.resolve(None, (field,), accept=any_element)
        if not interactive:
            if element is None:
                raise ElementNotFoundError(f"Field '{name}' not found for verification")
            return element
        if element is None or not self.driver.is_displayed(element):
            raise ElementNotFoundError(f"Field '{name}' not found or not visible in edit mode")
        if not self.driver.is_enabled(element):
            raise ElementNotFoundError(f"Field '{name}' is not editable")
        return element
