import inspect

import pytest

from tableverify.step_catalog import STEP_CATALOG, get_step_spec, phrase_for, render_phrase
from tableverify.steps import TableSteps


def test_catalog_has_one_entry_per_step_operation() -> None:
    keys = [spec.key for spec in STEP_CATALOG]

    assert len(STEP_CATALOG) == 14
    assert len(set(keys)) == len(keys)
    assert len({spec.phrase for spec in STEP_CATALOG}) == len(keys)


def test_catalog_methods_exist_with_matching_parameters() -> None:
    for spec in STEP_CATALOG:
        method = getattr(TableSteps, spec.method)
        parameters = list(inspect.signature(method).parameters)[1:]
        assert tuple(parameters) == spec.parameters, spec.key
        assert spec.phrase.count("{string}") == len(spec.parameters), spec.key


def test_render_phrase_quotes_arguments_in_order() -> None:
    rendered = render_phrase("lastRow", "Order ID", "A-17")

    assert rendered == 'I verify row with "Order ID" value "A-17" appears as the last row in the table'


def test_render_phrase_validates_key_and_arity() -> None:
    with pytest.raises(KeyError):
        render_phrase("unknownStep")
    with pytest.raises(ValueError):
        render_phrase("goToPage")


def test_lookup_helpers() -> None:
    spec = get_step_spec("rowToggle")

    assert spec is not None
    assert spec.method == "set_row_toggle"
    assert phrase_for("navigate_all_pages") == "I navigate through all pages using the pagination controls"
    assert phrase_for("not_a_step") is None
    assert get_step_spec("missing") is None
