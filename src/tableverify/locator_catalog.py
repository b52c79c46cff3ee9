from __future__ import annotations

from dataclasses import dataclass

from .strategies import (
    OWN_TEXT,
    Condition,
    Strategy,
    attr_contains,
    attr_equals,
    attr_icontains,
    attr_present,
    class_contains,
    has_class,
    lacks_class_fragment,
    own_text_digits,
    text_contains,
    text_equals,
)

TABLE_LIKE_CLASS_TOKENS = ("table", "grid", "datatable", "ag-grid", "k-grid", "mat-table")

_FILE_INPUT = Strategy("file-input", "input", (attr_equals("type", "file"),))


@dataclass(frozen=True, slots=True)
class TableLayout:
    name: str
    headers: tuple[Strategy, ...]
    rows: tuple[Strategy, ...]
    cells: tuple[Strategy, ...]


PAGINATION_CONTAINERS: tuple[Strategy, ...] = (
    Strategy("nav-aria-pagination", "nav", (attr_icontains("aria-label", "pagination"),)),
    Strategy("div-pagination", "div", (class_contains("pagination"),)),
    Strategy("nav-pagination", "nav", (class_contains("pagination"),)),
    Strategy("ul-pagination", "ul", (class_contains("pagination"),)),
    Strategy("div-pager", "div", (class_contains("pager"),)),
    Strategy("div-page-nav", "div", (class_contains("page-nav"),)),
)

NEXT_BUTTONS: tuple[Strategy, ...] = (
    Strategy("button-aria-next", "button", (attr_contains("aria-label", "Next"),)),
    Strategy("link-aria-next", "a", (attr_contains("aria-label", "Next"),)),
    Strategy("link-rel-next", "a", (attr_equals("rel", "next"),)),
    Strategy("button-title-next", "button", (attr_contains("title", "Next"),)),
    Strategy("button-class-next", "button", (class_contains("next"),)),
    Strategy("link-class-next", "a", (class_contains("next"),)),
    Strategy("item-next-link", "a", anchor=Strategy("li-next", "li", (class_contains("next"),)), axis="child"),
    Strategy("button-text-next", "button", (text_contains("Next"),)),
    Strategy("button-arrow-next", "button", (text_equals(">"),)),
    Strategy("button-chevron-next", "button", (text_equals("›"),)),
)

PREV_BUTTONS: tuple[Strategy, ...] = (
    Strategy("button-aria-previous", "button", (attr_contains("aria-label", "Previous"),)),
    Strategy("link-aria-previous", "a", (attr_contains("aria-label", "Previous"),)),
    Strategy("link-rel-prev", "a", (attr_equals("rel", "prev"),)),
    Strategy("button-title-previous", "button", (attr_contains("title", "Previous"),)),
    Strategy("button-class-prev", "button", (class_contains("prev"),)),
    Strategy("link-class-prev", "a", (class_contains("prev"),)),
    Strategy("item-prev-link", "a", anchor=Strategy("li-prev", "li", (class_contains("prev"),)), axis="child"),
    Strategy("button-text-previous", "button", (text_contains("Previous"),)),
    Strategy("button-arrow-previous", "button", (text_equals("<"),)),
    Strategy("button-chevron-previous", "button", (text_equals("‹"),)),
)

PAGE_NUMBER_BUTTONS: tuple[Strategy, ...] = (
    Strategy("button-data-page", "button", (attr_present("data-page"),)),
    Strategy("button-numeric", "button", (own_text_digits(),)),
    Strategy("link-numeric", "a", (own_text_digits(),)),
)

ACTIVE_PAGE: tuple[Strategy, ...] = (
    Strategy("aria-current-page", conditions=(attr_equals("aria-current", "page"),)),
    Strategy("button-active", "button", (has_class("active"),)),
    Strategy("button-current", "button", (has_class("current"),)),
    Strategy("link-active", "a", (has_class("active"),)),
    Strategy("link-current", "a", (has_class("current"),)),
    Strategy("item-active-child", anchor=Strategy("li-active", "li", (has_class("active"),)), axis="child"),
)

TABLE_ROOTS: tuple[Strategy, ...] = (
    Strategy("table", "table"),
    Strategy("role-grid", conditions=(attr_equals("role", "grid"),)),
    Strategy("role-table", conditions=(attr_equals("role", "table"),)),
    *(Strategy(f"class-{token}", "div", (has_class(token),)) for token in TABLE_LIKE_CLASS_TOKENS),
)

HTML_LAYOUT = TableLayout(
    name="html",
    headers=(
        Strategy("thead-th", "th", anchor=Strategy("thead", "thead")),
        Strategy("th", "th"),
    ),
    rows=(
        Strategy("tbody-tr", "tr", anchor=Strategy("tbody", "tbody")),
        Strategy("tr", "tr"),
    ),
    cells=(Strategy("td", "td", axis="child"),),
)

ARIA_LAYOUT = TableLayout(
    name="aria",
    headers=(Strategy("role-columnheader", conditions=(attr_equals("role", "columnheader"),)),),
    rows=(Strategy("role-row", conditions=(attr_equals("role", "row"),)),),
    cells=(
        Strategy("role-gridcell", conditions=(attr_equals("role", "gridcell"),)),
        Strategy("role-cell", conditions=(attr_equals("role", "cell"),)),
    ),
)

TABLE_LAYOUTS: tuple[TableLayout, ...] = (HTML_LAYOUT, ARIA_LAYOUT)

EDIT_AFFORDANCES: tuple[Strategy, ...] = (
    Strategy("button-aria-edit", "button", (attr_equals("aria-label", "Edit"),)),
    Strategy("button-title-edit", "button", (attr_equals("title", "Edit"),)),
    Strategy("data-action-edit", conditions=(attr_equals("data-action", "edit"),)),
    Strategy("button-class-edit", "button", (class_contains("edit"),)),
    Strategy("icon-class-edit", "i", (class_contains("edit"),)),
    Strategy("button-text-edit", "button", (text_equals("Edit"),)),
)

SAVE_AFFORDANCES: tuple[Strategy, ...] = (
    Strategy("button-aria-save", "button", (attr_equals("aria-label", "Save"),)),
    Strategy("button-title-save", "button", (attr_equals("title", "Save"),)),
    Strategy("data-action-save", conditions=(attr_equals("data-action", "save"),)),
    Strategy("button-class-save", "button", (class_contains("save"),)),
    Strategy("icon-class-save", "i", (class_contains("save"),)),
    Strategy("button-text-save", "button", (text_equals("Save"),)),
)

TOGGLES: tuple[Strategy, ...] = (
    Strategy("role-switch", conditions=(attr_equals("role", "switch"),)),
    Strategy("checkbox", "input", (attr_equals("type", "checkbox"),)),
    Strategy("button-toggle", "button", (class_contains("toggle"),)),
    Strategy("div-toggle", "div", (class_contains("toggle"),)),
    Strategy("span-toggle", "span", (class_contains("toggle"),)),
    Strategy("input-switch", "input", (class_contains("switch"),)),
    Strategy("label-switch", "label", (class_contains("switch"),)),
)

DROPDOWN_TRIGGERS: tuple[Strategy, ...] = (
    Strategy("aria-haspopup", conditions=(attr_present("aria-haspopup"),)),
    Strategy("role-combobox", conditions=(attr_equals("role", "combobox"),)),
    Strategy("nested-button", "button"),
    Strategy("dropdown-toggle", "div", (class_contains("dropdown-toggle"),)),
    Strategy("span-select", "span", (class_contains("select"),)),
    Strategy("arrow-icon", "i", (class_contains("arrow"),)),
    Strategy("div-trigger", "div", (class_contains("trigger"),)),
    Strategy("div-control", "div", (class_contains("control"),)),
)

OPEN_DROPDOWN_PANELS: tuple[Strategy, ...] = (
    Strategy("role-listbox", conditions=(attr_equals("role", "listbox"),)),
    Strategy("dropdown-menu-show", "div", (class_contains("dropdown-menu"), has_class("show"))),
    Strategy("dropdown-menu-list", "ul", (class_contains("dropdown-menu"), lacks_class_fragment("hidden"))),
    Strategy("select-dropdown-open", "div", (class_contains("select-dropdown"), has_class("open"))),
    Strategy("options-panel", conditions=(class_contains("options"),)),
)

CALENDARS: tuple[Strategy, ...] = (
    Strategy("div-calendar", "div", (class_contains("calendar"),)),
    Strategy("div-datepicker", "div", (class_contains("datepicker"),)),
    Strategy("div-date-picker", "div", (class_contains("date-picker"),)),
)

DATE_CELLS: tuple[Strategy, ...] = (
    Strategy("td-day", "td", (class_contains("day"),)),
    Strategy("td-date", "td", (class_contains("date"),)),
    Strategy("button-day", "button", (class_contains("day"),)),
    Strategy("button-date", "button", (class_contains("date"),)),
    Strategy("span-day", "span", (class_contains("day"),)),
    Strategy("span-date", "span", (class_contains("date"),)),
)

DATE_CELL_FALLBACK: tuple[Strategy, ...] = (
    Strategy("td", "td"),
    Strategy("button", "button"),
)

ROWS_PER_PAGE_CONTROLS: tuple[Strategy, ...] = (
    Strategy("select-aria-per-page", "select", (attr_icontains("aria-label", "per page"),)),
    Strategy("select-aria-page-size", "select", (attr_icontains("aria-label", "page size"),)),
    Strategy("select-id-rows", "select", (attr_contains("id", "rows"),)),
    Strategy("select-id-page", "select", (attr_contains("id", "page"),)),
    Strategy("select-class-page-size", "select", (class_contains("page-size"),)),
    Strategy("div-dropdown-rows", "div", (class_contains("dropdown"), Condition(OWN_TEXT, "icontains", "rows"))),
)


def page_button_strategies(label: str) -> tuple[Strategy, ...]:
    return (
        Strategy("button-data-page", "button", (attr_equals("data-page", label),)),
        Strategy("link-data-page", "a", (attr_equals("data-page", label),)),
        Strategy("button-aria-page", "button", (attr_equals("aria-label", f"Page {label}"),)),
        Strategy("button-aria-go-to-page", "button", (attr_equals("aria-label", f"Go to page {label}"),)),
        Strategy("link-aria-page", "a", (attr_equals("aria-label", f"Page {label}"),)),
        Strategy("button-text", "button", (text_equals(label),)),
        Strategy("link-text", "a", (text_equals(label),)),
    )


def dropdown_option_strategies(value: str) -> tuple[Strategy, ...]:
    return (
        Strategy("data-value", conditions=(attr_equals("data-value", value),)),
        Strategy("native-option", "option", (text_equals(value),)),
        Strategy("list-item", "li", (text_equals(value),)),
        Strategy("role-option", conditions=(attr_equals("role", "option"), text_equals(value))),
        Strategy("div-option", "div", (class_contains("option"), text_equals(value))),
        Strategy("span-option", "span", (class_contains("option"), text_equals(value))),
        Strategy("dropdown-item", conditions=(class_contains("dropdown-item"), text_equals(value))),
        Strategy("mat-option", "mat-option", (text_equals(value),)),
        Strategy("select-option", conditions=(class_contains("select-option"), text_equals(value))),
        Strategy("link-option", "a", (text_equals(value),)),
    )


def rows_per_page_option_strategies(count: str) -> tuple[Strategy, ...]:
    return (
        Strategy("option-exact", "option", (text_equals(count),)),
        Strategy("role-option-exact", conditions=(attr_equals("role", "option"), text_equals(count))),
        Strategy("list-item-exact", "li", (text_equals(count),)),
        Strategy("div-option-exact", "div", (class_contains("option"), text_equals(count))),
        Strategy("option-contains", "option", (text_contains(count),)),
        Strategy("div-option-contains", "div", (class_contains("option"), text_contains(count))),
        Strategy("list-item-contains", "li", (text_contains(count),)),
    )


def file_input_label_strategies(label: str) -> tuple[Strategy, ...]:
    return (Strategy("label-text", "label", (text_contains(label),)),)


def file_input_strategies(label: str, label_for: str | None = None) -> tuple[Strategy, ...]:
    strategies: list[Strategy] = [
        Strategy("file-aria-label", "input", (attr_equals("type", "file"), attr_contains("aria-label", label))),
    ]
    if label_for:
        strategies.append(Strategy("file-label-for", "input", (attr_equals("type", "file"), attr_equals("id", label_for))))
    strategies.extend(
        (
            Strategy("file-placeholder", "input", (attr_equals("type", "file"), attr_contains("placeholder", label))),
            Strategy("file-title", "input", (attr_equals("type", "file"), attr_contains("title", label))),
            _FILE_INPUT.within(Strategy("label-own-text", "label", (Condition(OWN_TEXT, "contains", label),)), "sibling"),
            _FILE_INPUT.within(Strategy("enclosing-label", "label", (text_contains(label),))),
            _FILE_INPUT.within(Strategy("enclosing-div", "div", (Condition(OWN_TEXT, "contains", label),))),
            _FILE_INPUT.within(Strategy("enclosing-span", "span", (Condition(OWN_TEXT, "contains", label),))),
        )
    )
    return tuple(strategies)


def upload_error_strategies(message: str) -> tuple[Strategy, ...]:
    return (
        Strategy("role-alert", conditions=(attr_equals("role", "alert"), text_contains(message))),
        Strategy("div-error", "div", (class_contains("error"), text_contains(message))),
        Strategy("span-error", "span", (class_contains("error"), text_contains(message))),
        Strategy("p-error", "p", (class_contains("error"), text_contains(message))),
        Strategy("div-alert", "div", (class_contains("alert"), text_contains(message))),
        Strategy("any-own-text", conditions=(Condition(OWN_TEXT, "contains", message),)),
    )
