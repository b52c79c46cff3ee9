from __future__ import annotations

import json
from pathlib import Path
import re
from typing import Any, Mapping

from .errors import ElementNotFoundError
from .strategies import Condition, Strategy, attr_equals, css_strategy, text_equals, xpath_strategy

_SELENIUM_PATTERNS = (
    ("css", r"By\.(?:cssSelector|CSS_SELECTOR|css_selector)\((['\"])(.*)\1\)"),
    ("xpath", r"By\.(?:xpath|XPATH)\((['\"])(.*)\1\)"),
    ("id", r"By\.(?:id|ID)\((['\"])(.*)\1\)"),
    ("name", r"By\.(?:name|NAME)\((['\"])(.*)\1\)"),
)
_PREFIXES = ("css", "xpath", "id", "name")


class ObjectRepository:
    """Named element locators grouped by page, as used by the step phrases."""

    def __init__(self, entries: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._entries: dict[str, dict[str, Strategy]] = {}
        for page, elements in (entries or {}).items():
            for element, spec in elements.items():
                self.register(page, element, spec)

    @classmethod
    def from_json(cls, path: Path) -> ObjectRepository:
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"Object repository {path} must contain a JSON object keyed by page name.")
        return cls(payload)

    def register(self, page: str, element: str, spec: Any) -> Strategy:
        strategy = parse_entry(element, spec)
        self._entries.setdefault(page, {})[element] = strategy
        return strategy

    def get(self, page: str, element: str) -> Strategy | None:
        return self._entries.get(page, {}).get(element)

    def has(self, page: str, element: str) -> bool:
        return self.get(page, element) is not None

    def locate(self, page: str, element: str) -> Strategy:
        strategy = self.get(page, element)
        if strategy is None:
            raise ElementNotFoundError(f"Element '{element}' is not defined for page '{page}'")
        return strategy

    def pages(self) -> list[str]:
        return sorted(self._entries)


def parse_entry(name: str, spec: Any) -> Strategy:
    if isinstance(spec, Strategy):
        return spec
    if isinstance(spec, str):
        return _parse_locator_text(name, spec)
    if isinstance(spec, Mapping):
        return _parse_locator_mapping(name, spec)
    raise ValueError(f"Unsupported locator for '{name}': {spec!r}")


def _parse_locator_text(name: str, text: str) -> Strategy:
    value = text.strip()
    if not value:
        raise ValueError(f"Empty locator for '{name}'.")
    for kind, pattern in _SELENIUM_PATTERNS:
        match = re.fullmatch(pattern, value)
        if match:
            return _build(name, kind, match.group(2))
    for kind in _PREFIXES:
        if value.startswith(f"{kind}="):
            return _build(name, kind, value[len(kind) + 1 :])
    if value.startswith(("/", "(", "./")):
        return xpath_strategy(name, value)
    return css_strategy(name, value)


def _parse_locator_mapping(name: str, spec: Mapping[str, Any]) -> Strategy:
    for kind in _PREFIXES:
        if spec.get(kind):
            return _build(name, kind, str(spec[kind]))
    tag = str(spec.get("tag") or "*")
    conditions: list[Condition] = [attr_equals(str(key), str(value)) for key, value in (spec.get("attributes") or {}).items()]
    if spec.get("text"):
        conditions.append(text_equals(str(spec["text"])))
    if tag == "*" and not conditions:
        raise ValueError(f"Locator for '{name}' needs css, xpath, id, name, tag, attributes or text.")
    return Strategy(name=name, tag=tag, conditions=tuple(conditions))


def _build(name: str, kind: str, value: str) -> Strategy:
    if kind == "css":
        return css_strategy(name, value)
    if kind == "xpath":
        return xpath_strategy(name, value)
    return Strategy(name=name, conditions=(attr_equals(kind, value),))
