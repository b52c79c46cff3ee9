from __future__ import annotations

import logging
from typing import Callable

from .config import EngineSettings
from .driver import Driver, Element
from .errors import ElementNotFoundError, VerificationError
from .locator_catalog import TOGGLES
from .locators import LocatorResolver
from .waits import settle

ON_CLASS_TOKENS = ("active", "on", "checked", "is-checked")

RowLocator = Callable[[], Element]


def parse_toggle_state(raw: str) -> bool:
    state = str(raw or "").strip().upper()
    if state == "ON":
        return True
    if state == "OFF":
        return False
    raise ValueError(f"Invalid toggle state '{raw}'. Expected 'ON' or 'OFF'")


def describe_state(on: bool) -> str:
    return "ON" if on else "OFF"


def is_toggle_on(driver: Driver, toggle: Element) -> bool:
    if (driver.attribute(toggle, "type") or "").lower() == "checkbox":
        return driver.is_selected(toggle)
    if (driver.attribute(toggle, "aria-checked") or "").lower() == "true":
        return True
    if (driver.attribute(toggle, "aria-pressed") or "").lower() == "true":
        return True
    checked = driver.attribute(toggle, "checked")
    if checked and checked.lower() != "false":
        return True
    tokens = (driver.attribute(toggle, "class") or "").lower().split()
    return any(token in ON_CLASS_TOKENS for token in tokens)


class RowToggle:
    def __init__(self, driver: Driver, resolver: LocatorResolver, settings: EngineSettings) -> None:
        self.driver = driver
        self.resolver = resolver
        self.settings = settings
        self.logger = logging.getLogger("tableverify.toggle")

    def find(self, row: Element) -> Element:
        toggle = self.resolver.resolve(row, TOGGLES)
        if toggle is None:
            raise ElementNotFoundError("Toggle switch not found in table row")
        return toggle

    def set(self, locate_row: RowLocator, desired: bool) -> bool:
        """Switch the row's toggle to ``desired``; returns False when it was already there."""
        toggle = self.find(locate_row())
        if is_toggle_on(self.driver, toggle) == desired:
            self.logger.info("Toggle already %s", describe_state(desired))
            return False
        self.driver.click(toggle)
        settle(self.driver, self.settings.toggle_settle, "clicking toggle")
        actual = is_toggle_on(self.driver, self.find(locate_row()))
        if actual != desired:
            raise VerificationError(
                f"Toggle state verification failed: expected {describe_state(desired)}, "
                f"actual {describe_state(actual)}"
            )
        self.logger.info("Toggle switched to %s", describe_state(desired))
        return True
