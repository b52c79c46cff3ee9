from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Mapping

ConditionOp = Literal["contains", "icontains", "equals", "token", "digits", "present", "absent"]
Axis = Literal["descendant", "child", "sibling"]

TEXT = "#text"
OWN_TEXT = "#own-text"

_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_AXIS_SEPARATORS = {"descendant": "//", "child": "/", "sibling": "/following-sibling::"}


def xpath_literal(value: str) -> str:
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def normalize_space(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.split())


@dataclass(frozen=True, slots=True)
class Condition:
    """One predicate over an attribute or the text of a node."""

    target: str
    op: ConditionOp
    value: str = ""
    negate: bool = False

    def to_xpath(self) -> str:
        subject = self._xpath_subject()
        if self.op == "contains":
            clause = f"contains({subject}, {xpath_literal(self.value)})"
        elif self.op == "icontains":
            clause = f"contains(translate({subject}, '{_UPPER}', '{_LOWER}'), {xpath_literal(self.value.lower())})"
        elif self.op == "equals":
            expected = normalize_space(self.value) if self._is_text else self.value
            clause = f"{subject}={xpath_literal(expected)}"
        elif self.op == "token":
            clause = f"contains(concat(' ', normalize-space({subject}), ' '), {xpath_literal(f' {self.value} ')})"
        elif self.op == "digits":
            clause = f"string-length({subject})>0 and translate({subject}, '0123456789', '')=''"
        elif self.op == "present":
            clause = subject if not self._is_text else f"string-length({subject})>0"
        else:
            clause = f"not({subject})" if not self._is_text else f"string-length({subject})=0"
        return f"not({clause})" if self.negate else clause

    def accepts(self, attributes: Mapping[str, str], text: str = "", own_text: str = "") -> bool:
        if self.target == TEXT:
            subject: str | None = normalize_space(text)
        elif self.target == OWN_TEXT:
            subject = normalize_space(own_text)
        else:
            subject = attributes.get(self.target)
        result = self._evaluate(subject)
        return not result if self.negate else result

    def _evaluate(self, subject: str | None) -> bool:
        if self.op == "present":
            return bool(subject) if self._is_text else subject is not None
        if self.op == "absent":
            return not subject if self._is_text else subject is None
        if subject is None:
            return False
        if self.op == "contains":
            return self.value in subject
        if self.op == "icontains":
            return self.value.lower() in subject.lower()
        if self.op == "equals":
            expected = normalize_space(self.value) if self._is_text else self.value
            return subject == expected
        if self.op == "token":
            return self.value in subject.split()
        return bool(subject) and all(char in "0123456789" for char in subject.strip())

    @property
    def _is_text(self) -> bool:
        return self.target in {TEXT, OWN_TEXT}

    def _xpath_subject(self) -> str:
        if self.target == TEXT:
            return "normalize-space(.)"
        if self.target == OWN_TEXT:
            return "normalize-space(text())"
        return f"@{self.target}"


@dataclass(frozen=True, slots=True)
class Strategy:
    """A named, ordered-list entry used to match one kind of element.

    Structural strategies are built from a tag and AND-ed conditions and may be chained
    to an anchor strategy. Raw ``css`` or ``xpath`` strategies come from the object
    repository and are passed to the driver untouched.
    """

    name: str
    tag: str = "*"
    conditions: tuple[Condition, ...] = ()
    anchor: Strategy | None = None
    axis: Axis = "descendant"
    css: str | None = None
    xpath: str | None = None

    @property
    def is_raw(self) -> bool:
        return self.css is not None or self.xpath is not None

    def within(self, anchor: Strategy, axis: Axis = "descendant") -> Strategy:
        return replace(self, anchor=anchor, axis=axis)

    def to_xpath(self) -> str:
        if self.xpath is not None:
            return self.xpath
        if self.css is not None:
            raise ValueError(f"Strategy '{self.name}' is a CSS selector and has no XPath form.")
        step = self.tag
        if self.conditions:
            step = f"{step}[{' and '.join(condition.to_xpath() for condition in self.conditions)}]"
        separator = _AXIS_SEPARATORS[self.axis]
        if self.anchor is None:
            return f".{separator}{step}"
        return f"{self.anchor.to_xpath()}{separator}{step}"

    def to_selector(self) -> str:
        if self.css is not None:
            return f"css={self.css}"
        return f"xpath={self.to_xpath()}"

    def accepts(self, tag: str, attributes: Mapping[str, str], text: str = "", own_text: str = "") -> bool:
        if self.is_raw:
            raise ValueError(f"Strategy '{self.name}' is a raw selector and cannot be evaluated in-process.")
        if self.tag != "*" and self.tag.lower() != tag.lower():
            return False
        return all(condition.accepts(attributes, text, own_text) for condition in self.conditions)


def attr_equals(name: str, value: str) -> Condition:
    return Condition(name, "equals", value)


def attr_contains(name: str, value: str) -> Condition:
    return Condition(name, "contains", value)


def attr_icontains(name: str, value: str) -> Condition:
    return Condition(name, "icontains", value)


def attr_present(name: str) -> Condition:
    return Condition(name, "present")


def has_class(token: str) -> Condition:
    return Condition("class", "token", token)


def class_contains(fragment: str) -> Condition:
    return Condition("class", "contains", fragment)


def lacks_class_fragment(fragment: str) -> Condition:
    return Condition("class", "contains", fragment, negate=True)


def text_equals(value: str) -> Condition:
    return Condition(TEXT, "equals", value)


def text_contains(value: str) -> Condition:
    return Condition(TEXT, "contains", value)


def text_icontains(value: str) -> Condition:
    return Condition(TEXT, "icontains", value)


def own_text_digits() -> Condition:
    return Condition(OWN_TEXT, "digits")


def css_strategy(name: str, selector: str) -> Strategy:
    return Strategy(name=name, css=selector)


def xpath_strategy(name: str, expression: str) -> Strategy:
    return Strategy(name=name, xpath=expression)
