from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StepKind = Literal["Given", "When", "Then"]


@dataclass(frozen=True, slots=True)
class StepSpec:
    key: str
    kind: StepKind
    phrase: str
    method: str
    parameters: tuple[str, ...] = ()


STEP_CATALOG: tuple[StepSpec, ...] = (
    StepSpec(
        key="paginationControl",
        kind="Then",
        phrase="the pagination control should be visible and functional",
        method="verify_pagination_control",
    ),
    StepSpec(
        key="navigateAllPages",
        kind="When",
        phrase="I navigate through all pages using the pagination controls",
        method="navigate_all_pages",
    ),
    StepSpec(
        key="goToPage",
        kind="When",
        phrase="I go to page number {string} using the pagination bar",
        method="go_to_page",
        parameters=("page_number",),
    ),
    StepSpec(
        key="rowsPerPage",
        kind="When",
        phrase="I select {string} rows per page from dropdown",
        method="select_rows_per_page",
        parameters=("count",),
    ),
    StepSpec(
        key="elementNotVisible",
        kind="Then",
        phrase="I should not see {string} on {string} page",
        method="verify_element_not_visible",
        parameters=("element", "page"),
    ),
    StepSpec(
        key="uploadFile",
        kind="When",
        phrase="I upload the file {string} into the {string} field",
        method="upload_file",
        parameters=("file_path", "label"),
    ),
    StepSpec(
        key="uploadError",
        kind="Then",
        phrase="I should see file upload error {string}",
        method="verify_upload_error",
        parameters=("message",),
    ),
    StepSpec(
        key="rowToggle",
        kind="When",
        phrase="I set the toggle in the table row where {string} is {string} to {string}",
        method="set_row_toggle",
        parameters=("column", "value", "state"),
    ),
    StepSpec(
        key="multiSelect",
        kind="When",
        phrase="I select {string} from {string} dropdown on {string} page",
        method="select_values",
        parameters=("values", "element", "page"),
    ),
    StepSpec(
        key="valuesAsHeaders",
        kind="Then",
        phrase="I verify values from {string} table appear as headers in {string} before column {string}",
        method="verify_values_as_headers",
        parameters=("source_page", "target_page", "final_column"),
    ),
    StepSpec(
        key="inlineEdit",
        kind="When",
        phrase="I edit {string} field to {string} in row where {string} is {string} on {string} page",
        method="edit_row_field",
        parameters=("field", "value", "row_column", "row_value", "page"),
    ),
    StepSpec(
        key="datePickerRule",
        kind="Then",
        phrase="I verify date-picker {string} on {string} page for field {string} enforces date rules",
        method="verify_date_picker",
        parameters=("page", "element", "rule"),
    ),
    StepSpec(
        key="rowDeleted",
        kind="Then",
        phrase="I verify row with {string} = {string} is deleted from {string} table on {string} page",
        method="verify_row_deleted",
        parameters=("column", "value", "table", "page"),
    ),
    StepSpec(
        key="lastRow",
        kind="Then",
        phrase="I verify row with {string} value {string} appears as the last row in the table",
        method="verify_last_row",
        parameters=("column", "value"),
    ),
)

_STEP_BY_KEY = {spec.key: spec for spec in STEP_CATALOG}


def get_step_spec(key: str) -> StepSpec | None:
    return _STEP_BY_KEY.get(key)


def phrase_for(method: str) -> str | None:
    for spec in STEP_CATALOG:
        if spec.method == method:
            return spec.phrase
    return None


def render_phrase(key: str, *arguments: str) -> str:
    spec = get_step_spec(key)
    if spec is None:
        raise KeyError(f"Unknown step '{key}'.")
    if len(arguments) != len(spec.parameters):
        raise ValueError(f"Step '{key}' expects {len(spec.parameters)} argument(s), got {len(arguments)}.")
    rendered = spec.phrase
    for argument in arguments:
        rendered = rendered.replace("{string}", f'"{argument}"', 1)
    return rendered
