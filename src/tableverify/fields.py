from __future__ import annotations

import logging

from .driver import Driver, Element
from .errors import ElementNotFoundError
from .models import FieldKind

_TRUTHY = frozenset({"true", "yes", "1"})

logger = logging.getLogger("tableverify.fields")


def field_kind(driver: Driver, element: Element) -> FieldKind:
    tag = driver.tag_name(element).lower()
    if tag == "select":
        return "select"
    if tag == "textarea":
        return "multiline"
    if tag == "input":
        input_type = (driver.attribute(element, "type") or "text").lower()
        if input_type in {"checkbox", "radio"}:
            return "checkbox"
        return "text"
    return "other"


def wants_checked(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def expected_read_back(kind: FieldKind, value: str) -> str:
    """Return the read-back text a field of ``kind`` shows after ``value`` was written."""
    if kind == "checkbox":
        return "true" if wants_checked(value) else "false"
    return value


def write_field(driver: Driver, element: Element, value: str) -> FieldKind:
    kind = field_kind(driver, element)
    if kind == "select":
        if not driver.select_option(element, label=value):
            raise ElementNotFoundError(f"Option '{value}' not found in dropdown")
        logger.info("Selected '%s' in dropdown", value)
    elif kind == "checkbox":
        checked = wants_checked(value)
        if driver.is_selected(element) != checked:
            driver.click(element)
        logger.info("Set checkbox to %s", checked)
    else:
        driver.clear(element)
        driver.type_text(element, value)
        logger.info("Entered '%s' into %s field", value, kind)
    return kind


def read_field(driver: Driver, element: Element) -> str:
    kind = field_kind(driver, element)
    if kind == "select":
        selected = driver.selected_option_texts(element)
        return selected[0] if selected else ""
    if kind == "checkbox":
        return "true" if driver.is_selected(element) else "false"
    if kind in {"text", "multiline"}:
        return driver.attribute(element, "value") or ""
    text = driver.text(element).strip()
    if text:
        return text
    return driver.attribute(element, "value") or ""
