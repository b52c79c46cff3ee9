from fake_dom import FakeDriver, el

from tableverify.locator_catalog import NEXT_BUTTONS, PAGINATION_CONTAINERS
from tableverify.locators import LocatorResolver, any_element
from tableverify.strategies import Strategy, attr_equals, css_strategy, text_equals


def test_resolver_returns_first_strategy_match_in_list_order() -> None:
    text_button = el("button", text="Next")
    aria_button = el("button", text="›", aria_label="Next page")
    driver = FakeDriver(el("body", text_button, aria_button))

    resolved = LocatorResolver(driver).resolve(None, NEXT_BUTTONS)

    assert resolved is aria_button


def test_resolver_skips_hidden_matches_and_falls_through() -> None:
    hidden = el("button", text="Go", data_role="primary", hidden="")
    visible = el("button", text="Go")
    driver = FakeDriver(el("body", hidden, visible))
    strategies = (
        Strategy("by-role", "button", (attr_equals("data-role", "primary"),)),
        Strategy("by-text", "button", (text_equals("Go"),)),
    )

    resolver = LocatorResolver(driver)

    assert resolver.resolve(None, strategies) is visible
    assert resolver.resolve(None, strategies, accept=any_element) is hidden


def test_resolver_returns_none_instead_of_raising() -> None:
    driver = FakeDriver(el("body", el("div", text="nothing here")))
    strategies = (css_strategy("raw", "div.pagination"), *PAGINATION_CONTAINERS)

    assert LocatorResolver(driver).resolve(None, strategies) is None


def test_resolve_all_uses_first_strategy_with_matches() -> None:
    first = el("li", text="A", role="option")
    second = el("li", text="B", role="option")
    plain = el("li", text="C")
    driver = FakeDriver(el("body", el("ul", first, second, plain)))
    strategies = (
        Strategy("role-option", "li", (attr_equals("role", "option"),)),
        Strategy("li", "li"),
    )

    matches = LocatorResolver(driver).resolve_all(None, strategies)

    assert matches == [first, second]


def test_resolver_scopes_lookup_to_subtree() -> None:
    outside = el("button", text="Next", aria_label="Next slide")
    inside = el("button", text="›", cls="next")
    nav = el("nav", inside, cls="pagination")
    driver = FakeDriver(el("body", outside, nav))

    resolver = LocatorResolver(driver)

    assert resolver.resolve(None, PAGINATION_CONTAINERS) is nav
    assert resolver.resolve(nav, NEXT_BUTTONS) is inside


def test_resolve_strategy_reports_which_strategy_matched() -> None:
    link = el("a", text="›", rel="next")
    driver = FakeDriver(el("body", el("div", link, cls="pager")))

    found = LocatorResolver(driver).resolve_strategy(None, NEXT_BUTTONS)

    assert found is not None
    strategy, element = found
    assert strategy.name == "link-rel-next"
    assert element is link
