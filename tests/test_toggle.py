import pytest

from fake_dom import FakeDriver, Node, PaginatedTable, el, numbered_rows

from tableverify.errors import ElementNotFoundError, VerificationError
from tableverify.reporting import ReportLog
from tableverify.steps import TableSteps
from tableverify.toggle import is_toggle_on, parse_toggle_state


class ActiveFlags:
    """Per-row checkbox state that survives table re-renders."""

    def __init__(self, on: set[str] = frozenset(), *, broken: set[str] = frozenset()) -> None:
        self.on = set(on)
        self.broken = set(broken)

    def cells(self, row: tuple[str, ...]) -> list[Node]:
        key = row[0]
        attrs = {"checked": ""} if key in self.on else {}
        box = el("input", type="checkbox", on_click=self._clicked(key), **attrs)
        return [el("td", box)]

    def _clicked(self, key: str):
        def clicked(node: Node) -> None:
            if key in self.broken:
                node.checked = not node.checked
                return
            if node.checked:
                self.on.add(key)
            else:
                self.on.discard(key)

        return clicked


def _table(driver: FakeDriver, flags: ActiveFlags) -> PaginatedTable:
    return PaginatedTable(driver, ["ID", "Name"], numbered_rows(8), extra_headers=("Active",), row_extras=flags.cells)


def test_parse_toggle_state_accepts_on_off_in_any_case() -> None:
    assert parse_toggle_state(" on ") is True
    assert parse_toggle_state("OFF") is False
    with pytest.raises(ValueError) as exc_info:
        parse_toggle_state("enabled")

    assert str(exc_info.value) == "Invalid toggle state 'enabled'. Expected 'ON' or 'OFF'"


@pytest.mark.parametrize(
    ("node", "expected"),
    [
        (el("input", type="checkbox", checked=""), True),
        (el("input", type="checkbox"), False),
        (el("button", role="switch", aria_checked="true"), True),
        (el("button", role="switch", aria_checked="false"), False),
        (el("button", cls="toggle", aria_pressed="true"), True),
        (el("div", cls="toggle", checked="false"), False),
        (el("span", cls="toggle is-checked"), True),
        (el("span", cls="toggle toggle-on-hover"), False),
    ],
)
def test_is_toggle_on_reads_every_state_convention(node: Node, expected: bool) -> None:
    driver = FakeDriver(el("body", node))

    assert is_toggle_on(driver, node) is expected


def test_toggle_step_finds_row_on_later_page_and_switches_it() -> None:
    driver = FakeDriver()
    flags = ActiveFlags()
    table = _table(driver, flags)
    report = ReportLog()

    TableSteps(driver, reporter=report).set_row_toggle("id", "U007", "ON")

    assert flags.on == {"U007"}
    assert table.page == 3
    assert report.passed[-1].message == "Set toggle to ON in row where id is 'U007'"


def test_toggle_already_in_desired_state_is_not_clicked() -> None:
    driver = FakeDriver()
    flags = ActiveFlags(on={"U002"})
    _table(driver, flags)
    report = ReportLog()

    TableSteps(driver, reporter=report).set_row_toggle("ID", "U002", "on")

    assert flags.on == {"U002"}
    assert [node.tag for node in driver.clicks] == []
    assert report.passed[-1].message.startswith("Kept toggle to ON")


def test_toggle_that_does_not_change_fails_verification() -> None:
    driver = FakeDriver()
    _table(driver, ActiveFlags(broken={"U001"}))

    with pytest.raises(VerificationError) as exc_info:
        TableSteps(driver).set_row_toggle("ID", "U001", "ON")

    assert str(exc_info.value) == "Toggle state verification failed: expected ON, actual OFF"


def test_row_without_toggle_is_element_not_found() -> None:
    driver = FakeDriver()
    PaginatedTable(driver, ["ID", "Name"], numbered_rows(2))

    with pytest.raises(ElementNotFoundError) as exc_info:
        TableSteps(driver).set_row_toggle("ID", "U001", "OFF")

    assert str(exc_info.value) == "Toggle switch not found in table row"


def test_invalid_state_fails_before_touching_the_table() -> None:
    driver = FakeDriver()
    table = _table(driver, ActiveFlags())
    report = ReportLog()

    with pytest.raises(ValueError):
        TableSteps(driver, reporter=report).set_row_toggle("ID", "U004", "maybe")

    assert table.visits == [1]
    assert report.failed[0].step == "Row Toggle"
