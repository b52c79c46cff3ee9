from __future__ import annotations

import logging
from typing import Callable, TypeVar

from .driver import Driver
from .errors import WaitTimeoutError

T = TypeVar("T")

logger = logging.getLogger("tableverify.waits")


def wait_until(
    driver: Driver,
    predicate: Callable[[], T],
    timeout: float,
    *,
    poll_interval: float = 0.25,
    description: str = "condition",
    timeout_ok: bool = False,
) -> T | None:
    """Poll ``predicate`` until it returns a truthy value or ``timeout`` elapses.

    With ``timeout_ok`` the caller declares that running out of time is an acceptable
    outcome, and ``None`` is returned instead of raising ``WaitTimeoutError``.
    """
    deadline = driver.now() + max(timeout, 0.0)
    while True:
        result = predicate()
        if result:
            return result
        remaining = deadline - driver.now()
        if remaining <= 0:
            break
        driver.sleep(min(poll_interval, remaining))

    if timeout_ok:
        logger.info("Timed out after %.1fs waiting for %s (accepted).", timeout, description)
        return None
    raise WaitTimeoutError(f"Timed out after {timeout:.1f}s waiting for {description}")


def settle(driver: Driver, seconds: float, reason: str = "") -> None:
    if seconds <= 0:
        return
    if reason:
        logger.debug("Settling %.2fs after %s", seconds, reason)
    driver.sleep(seconds)
