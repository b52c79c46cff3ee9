from __future__ import annotations

import logging
from typing import Callable, Sequence

from .driver import Driver, Element
from .strategies import Strategy

Accept = Callable[[Element], bool]


class LocatorResolver:
    """Evaluates ordered strategy lists first-match-wins against a scope."""

    def __init__(self, driver: Driver) -> None:
        self.driver = driver
        self.logger = logging.getLogger("tableverify.locators")

    def resolve(
        self,
        scope: Element | None,
        strategies: Sequence[Strategy],
        *,
        accept: Accept | None = None,
    ) -> Element | None:
        check = accept or self.driver.is_displayed
        for strategy in strategies:
            for element in self._candidates(scope, strategy):
                if self._accepted(check, element):
                    self.logger.debug("Resolved via strategy '%s'", strategy.name)
                    return element
        return None

    def resolve_all(
        self,
        scope: Element | None,
        strategies: Sequence[Strategy],
        *,
        accept: Accept | None = None,
    ) -> list[Element]:
        check = accept or self.driver.is_displayed
        for strategy in strategies:
            matches = [element for element in self._candidates(scope, strategy) if self._accepted(check, element)]
            if matches:
                self.logger.debug("Resolved %s element(s) via strategy '%s'", len(matches), strategy.name)
                return matches
        return []

    def resolve_strategy(
        self,
        scope: Element | None,
        strategies: Sequence[Strategy],
        *,
        accept: Accept | None = None,
    ) -> tuple[Strategy, Element] | None:
        check = accept or self.driver.is_displayed
        for strategy in strategies:
            for element in self._candidates(scope, strategy):
                if self._accepted(check, element):
                    return strategy, element
        return None

    def _candidates(self, scope: Element | None, strategy: Strategy) -> list[Element]:
        try:
            return self.driver.find_all(scope, strategy)
        except Exception as exc:
            # A stale scope or a selector the page rejects counts as no match for this strategy.
            self.logger.debug("Strategy '%s' failed: %s", strategy.name, exc)
            return []

    def _accepted(self, check: Accept, element: Element) -> bool:
        try:
            return bool(check(element))
        except Exception as exc:
            self.logger.debug("Candidate check failed: %s", exc)
            return False


def any_element(_element: Element) -> bool:
    return True
