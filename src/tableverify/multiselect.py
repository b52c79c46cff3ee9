from __future__ import annotations

import logging
from typing import Callable

from .config import EngineSettings
from .driver import Driver, Element
from .errors import ElementNotFoundError, PartialOperationError
from .locator_catalog import DROPDOWN_TRIGGERS, OPEN_DROPDOWN_PANELS, dropdown_option_strategies
from .locators import LocatorResolver
from .models import MultiSelectOutcome, SelectionRequest
from .waits import settle, wait_until

SelectedCallback = Callable[[str], None]


class MultiSelect:
    """Applies an ordered list of values to a native or composite multi-valued control.

    The outcome is all-or-nothing: the first value that cannot be applied raises
    ``PartialOperationError`` listing the values applied before it.
    """

    def __init__(
        self,
        driver: Driver,
        resolver: LocatorResolver,
        settings: EngineSettings,
        on_selected: SelectedCallback | None = None,
    ) -> None:
        self.driver = driver
        self.resolver = resolver
        self.settings = settings
        self._on_selected = on_selected or (lambda _value: None)
        self.logger = logging.getLogger("tableverify.multiselect")

    def apply(self, control: Element, request: SelectionRequest) -> MultiSelectOutcome:
        if self.driver.tag_name(control).lower() == "select":
            return self._apply_native(control, request)
        return self._apply_composite(control, request)

    def is_open(self) -> bool:
        return self.resolver.resolve(None, OPEN_DROPDOWN_PANELS) is not None

    def open(self, control: Element) -> None:
        candidates = [control, *self._nested_triggers(control)]
        for candidate in candidates:
            if self.driver.is_displayed(candidate) and self.driver.is_enabled(candidate):
                self.driver.click(candidate)
                settle(self.driver, self.settings.dropdown_settle, "opening dropdown")
                return
        raise ElementNotFoundError("No clickable trigger found to open the dropdown")

    def _apply_native(self, control: Element, request: SelectionRequest) -> MultiSelectOutcome:
        multiple = self.driver.attribute(control, "multiple") is not None
        if not multiple:
            self.logger.warning("Select element is not multi-select. Only the last value will remain selected.")
        applied: list[str] = []
        for value in request.values:
            if not (self.driver.select_option(control, label=value) or self.driver.select_option(control, value=value)):
                raise PartialOperationError(value, applied, "option not found in native select")
            applied.append(value)
            self.logger.info("Selected native option: %s", value)
            self._on_selected(value)
            settle(self.driver, self.settings.native_option_delay, "native option")
        return MultiSelectOutcome(mode="native", applied=tuple(applied), multiple=multiple)

    def _apply_composite(self, control: Element, request: SelectionRequest) -> MultiSelectOutcome:
        self.open(control)
        applied: list[str] = []
        for position, value in enumerate(request.values):
            option = self._find_option(value)
            if option is None:
                raise PartialOperationError(value, applied, "option not found")
            self.driver.click(option)
            applied.append(value)
            self.logger.info("Clicked option: %s", value)
            self._on_selected(value)
            settle(self.driver, self.settings.option_settle, "option click")
            if position < len(request.values) - 1 and not self.is_open():
                self.logger.debug("Dropdown closed after selecting %s; reopening", value)
                self.open(control)
        return MultiSelectOutcome(mode="composite", applied=tuple(applied))

    def _find_option(self, value: str) -> Element | None:
        strategies = dropdown_option_strategies(value)
        return wait_until(
            self.driver,
            lambda: self.resolver.resolve(None, strategies),
            self.settings.wait_timeout,
            poll_interval=self.settings.poll_interval,
            description=f"dropdown option '{value}'",
            timeout_ok=True,
        )

    def _nested_triggers(self, control: Element) -> list[Element]:
        triggers: list[Element] = []
        for strategy in DROPDOWN_TRIGGERS:
            trigger = self.resolver.resolve(control, (strategy,))
            if trigger is not None:
                triggers.append(trigger)
        return triggers
