from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
import logging
from pathlib import Path
import re
import time
from typing import TYPE_CHECKING, Any, Iterator, Protocol

from .errors import TableVerifyError
from .strategies import Strategy

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Page

Element = Any

_MISSING_BROWSER_ERROR_HINTS = (
    "executable doesn't exist",
    "executable does not exist",
    "download new browsers",
    "playwright install",
    "could not find browser",
    "failed to launch chromium because executable",
)

_PROPERTY_ATTRIBUTES = frozenset({"value", "checked", "selected", "multiple"})

_READ_PROPERTY_JS = """
(node, name) => {
  if (name in node) {
    const value = node[name];
    if (typeof value === 'boolean') return value ? 'true' : null;
    return value === undefined || value === null ? null : String(value);
  }
  return node.getAttribute(name);
}
"""

_ADD_OPTION_JS = """
(node, [label, value]) => {
  const options = Array.from(node.options || []);
  const option = options.find((item) => label !== null ? item.text.trim() === label : item.value === value);
  if (!option) return false;
  if (!node.multiple) node.value = option.value;
  option.selected = true;
  node.dispatchEvent(new Event('input', { bubbles: true }));
  node.dispatchEvent(new Event('change', { bubbles: true }));
  return true;
}
"""


class Driver(Protocol):
    """Capability surface the engine drives. ``scope=None`` means the whole document."""

    def find_all(self, scope: Element | None, strategy: Strategy) -> list[Element]: ...

    def find_one(self, scope: Element | None, strategy: Strategy) -> Element | None: ...

    def click(self, element: Element) -> None: ...

    def type_text(self, element: Element, text: str) -> None: ...

    def clear(self, element: Element) -> None: ...

    def text(self, element: Element) -> str: ...

    def attribute(self, element: Element, name: str) -> str | None: ...

    def css_value(self, element: Element, name: str) -> str: ...

    def tag_name(self, element: Element) -> str: ...

    def is_displayed(self, element: Element) -> bool: ...

    def is_enabled(self, element: Element) -> bool: ...

    def is_selected(self, element: Element) -> bool: ...

    def select_option(self, element: Element, *, label: str | None = None, value: str | None = None) -> bool: ...

    def selected_option_texts(self, element: Element) -> list[str]: ...

    def set_input_files(self, element: Element, path: Path) -> None: ...

    def screenshot(self, label: str) -> Path: ...

    def now(self) -> float: ...

    def sleep(self, seconds: float) -> None: ...


class PlaywrightDriver:
    def __init__(self, page: Page, artifacts_dir: Path) -> None:
        self.page = page
        self.artifacts_dir = artifacts_dir
        self.logger = logging.getLogger("tableverify.driver")

    def find_all(self, scope: ElementHandle | None, strategy: Strategy) -> list[ElementHandle]:
        root = scope if scope is not None else self.page
        return list(root.query_selector_all(strategy.to_selector()))

    def find_one(self, scope: ElementHandle | None, strategy: Strategy) -> ElementHandle | None:
        root = scope if scope is not None else self.page
        return root.query_selector(strategy.to_selector())

    def click(self, element: ElementHandle) -> None:
        element.click()

    def type_text(self, element: ElementHandle, text: str) -> None:
        element.type(text)

    def clear(self, element: ElementHandle) -> None:
        element.fill("")

    def text(self, element: ElementHandle) -> str:
        return (element.inner_text() or "").strip()

    def attribute(self, element: ElementHandle, name: str) -> str | None:
        if name in _PROPERTY_ATTRIBUTES:
            return element.evaluate(_READ_PROPERTY_JS, name)
        return element.get_attribute(name)

    def css_value(self, element: ElementHandle, name: str) -> str:
        return str(element.evaluate("(node, name) => getComputedStyle(node).getPropertyValue(name)", name) or "")

    def tag_name(self, element: ElementHandle) -> str:
        return str(element.evaluate("(node) => node.tagName.toLowerCase()"))

    def is_displayed(self, element: ElementHandle) -> bool:
        return element.is_visible()

    def is_enabled(self, element: ElementHandle) -> bool:
        return element.is_enabled()

    def is_selected(self, element: ElementHandle) -> bool:
        return bool(element.evaluate("(node) => Boolean(node.checked || node.selected)"))

    def select_option(self, element: ElementHandle, *, label: str | None = None, value: str | None = None) -> bool:
        return bool(element.evaluate(_ADD_OPTION_JS, [label, value]))

    def selected_option_texts(self, element: ElementHandle) -> list[str]:
        raw = element.evaluate("(node) => Array.from(node.selectedOptions || []).map((item) => item.text.trim())")
        return [str(item) for item in raw or []]

    def set_input_files(self, element: ElementHandle, path: Path) -> None:
        element.set_input_files(str(path))

    def screenshot(self, label: str) -> Path:
        self.artifacts_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        target = self.artifacts_dir / f"{stamp}_{_slug(label)}.png"
        self.page.screenshot(path=str(target), full_page=True)
        self.logger.info("Screenshot saved: %s", target)
        return target

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            self.page.wait_for_timeout(seconds * 1000)


@contextmanager
def playwright_session(
    artifacts_dir: Path,
    *,
    url: str | None = None,
    headless: bool = True,
    viewport: tuple[int, int] = (1280, 720),
) -> Iterator[PlaywrightDriver]:
    from playwright.sync_api import sync_playwright

    with sync_playwright() as playwright:
        try:
            browser = playwright.chromium.launch(headless=headless)
        except Exception as exc:
            if is_missing_browser_error(exc):
                raise TableVerifyError("Chromium not installed. Run: python -m playwright install chromium") from exc
            raise
        try:
            page = browser.new_page(viewport={"width": viewport[0], "height": viewport[1]})
            if url:
                page.goto(url, wait_until="domcontentloaded")
            yield PlaywrightDriver(page, artifacts_dir)
        finally:
            browser.close()


def is_missing_browser_error(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(hint in message for hint in _MISSING_BROWSER_ERROR_HINTS)


def _slug(label: str) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9]+", "_", label).strip("_")
    return cleaned[:80] or "screenshot"
