import pytest

from tableverify.strategies import (
    Strategy,
    attr_contains,
    attr_icontains,
    class_contains,
    css_strategy,
    has_class,
    lacks_class_fragment,
    own_text_digits,
    text_equals,
    xpath_literal,
    xpath_strategy,
)


def test_xpath_literal_handles_quotes() -> None:
    assert xpath_literal("Next") == "'Next'"
    assert xpath_literal("it's") == '"it\'s"'
    assert xpath_literal("say \"it's\"") == "concat('say \"it', \"'\", 's\"')"


def test_strategy_renders_relative_xpath() -> None:
    strategy = Strategy("button-aria-next", "button", (attr_contains("aria-label", "Next"),))

    assert strategy.to_xpath() == ".//button[contains(@aria-label, 'Next')]"
    assert strategy.to_selector() == "xpath=.//button[contains(@aria-label, 'Next')]"


def test_strategy_renders_anchor_chain() -> None:
    item = Strategy("li-next", "li", (class_contains("next"),))
    link = Strategy("item-next-link", "a", anchor=item, axis="child")
    sibling = Strategy("file", "input").within(Strategy("label", "label"), "sibling")

    assert link.to_xpath() == ".//li[contains(@class, 'next')]/a"
    assert sibling.to_xpath() == ".//label/following-sibling::input"


def test_class_token_xpath_matches_whole_tokens() -> None:
    condition = has_class("active")

    assert condition.to_xpath() == "contains(concat(' ', normalize-space(@class), ' '), ' active ')"
    assert condition.accepts({"class": "page-link active"})
    assert not condition.accepts({"class": "inactive"})


def test_case_insensitive_condition_lowercases_both_sides() -> None:
    condition = attr_icontains("aria-label", "Pagination")

    assert "translate(@aria-label" in condition.to_xpath()
    assert "'pagination'" in condition.to_xpath()
    assert condition.accepts({"aria-label": "Table PAGINATION"})


def test_text_equals_normalizes_whitespace() -> None:
    condition = text_equals("  Go   to  ")

    assert condition.to_xpath() == "normalize-space(.)='Go to'"
    assert condition.accepts({}, text="Go\n   to")
    assert not condition.accepts({}, text="Go to page")


def test_digits_condition_uses_own_text() -> None:
    condition = own_text_digits()

    assert condition.accepts({}, own_text="12")
    assert not condition.accepts({}, own_text="Next")
    assert not condition.accepts({}, own_text="")


def test_negated_condition_accepts_missing_attribute() -> None:
    condition = lacks_class_fragment("hidden")

    assert condition.to_xpath() == "not(contains(@class, 'hidden'))"
    assert condition.accepts({})
    assert condition.accepts({"class": "dropdown-menu"})
    assert not condition.accepts({"class": "dropdown-menu hidden"})


def test_strategy_accepts_checks_tag_and_all_conditions() -> None:
    strategy = Strategy("div-option", "div", (class_contains("option"), text_equals("Red")))

    assert strategy.accepts("DIV", {"class": "option"}, text="Red")
    assert not strategy.accepts("span", {"class": "option"}, text="Red")
    assert not strategy.accepts("div", {"class": "option"}, text="Blue")


def test_raw_strategies_render_selectors_but_cannot_be_evaluated() -> None:
    css = css_strategy("save", "button.save")
    xpath = xpath_strategy("table", "//table[@id='orders']")

    assert css.to_selector() == "css=button.save"
    assert xpath.to_selector() == "xpath=//table[@id='orders']"
    with pytest.raises(ValueError):
        css.to_xpath()
    with pytest.raises(ValueError):
        css.accepts("button", {"class": "save"})
