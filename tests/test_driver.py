from pathlib import Path

from tableverify.driver import PlaywrightDriver, is_missing_browser_error
from tableverify.strategies import Strategy, attr_equals, css_strategy


class StubPage:
    def __init__(self) -> None:
        self.selectors: list[str] = []
        self.screenshots: list[str] = []
        self.waits: list[float] = []

    def query_selector_all(self, selector: str) -> list[str]:
        self.selectors.append(selector)
        return ["handle"]

    def query_selector(self, selector: str) -> str | None:
        self.selectors.append(selector)
        return None

    def screenshot(self, path: str, full_page: bool = False) -> None:
        self.screenshots.append(path)

    def wait_for_timeout(self, timeout: float) -> None:
        self.waits.append(timeout)


def test_missing_browser_error_detection() -> None:
    assert is_missing_browser_error(RuntimeError("Executable doesn't exist at /ms-playwright/chromium"))
    assert is_missing_browser_error(RuntimeError("Please run the following command: playwright install"))
    assert not is_missing_browser_error(RuntimeError("net::ERR_CONNECTION_REFUSED"))


def test_queries_use_rendered_selectors(tmp_path: Path) -> None:
    page = StubPage()
    driver = PlaywrightDriver(page, tmp_path)  # type: ignore[arg-type]

    assert driver.find_all(None, Strategy("nav", "nav", (attr_equals("role", "navigation"),))) == ["handle"]
    assert driver.find_one(None, css_strategy("grid", "div.grid")) is None

    assert page.selectors == ["xpath=.//nav[@role='navigation']", "css=div.grid"]


def test_screenshot_is_saved_under_artifacts_dir_with_slugged_label(tmp_path: Path) -> None:
    page = StubPage()
    driver = PlaywrightDriver(page, tmp_path / "shots")  # type: ignore[arg-type]

    target = driver.screenshot("Go To Page - 3 Success")

    assert target.parent == tmp_path / "shots"
    assert target.name.endswith("_Go_To_Page_3_Success.png")
    assert page.screenshots == [str(target)]


def test_sleep_waits_in_milliseconds_and_skips_zero(tmp_path: Path) -> None:
    page = StubPage()
    driver = PlaywrightDriver(page, tmp_path)  # type: ignore[arg-type]

    driver.sleep(0)
    driver.sleep(1.5)

    assert page.waits == [1500.0]
