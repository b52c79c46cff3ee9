import logging
from pathlib import Path

import pytest

from fake_dom import FakeDriver

from tableverify.config import EngineSettings
from tableverify.errors import ArtifactCaptureError, VerificationError
from tableverify.reporting import ReportLog, build_logger, step_label, step_operation


class Host:
    def __init__(self, driver: FakeDriver, settings: EngineSettings | None = None) -> None:
        self.driver = driver
        self.settings = settings or EngineSettings()
        self.reporter = ReportLog()
        self.logger = logging.getLogger("tableverify.test")

    @step_operation("Check Cell", "column", "value")
    def check(self, column: str, value: str, fail: bool = False) -> str:
        if fail:
            raise VerificationError(f"{column} is not {value}")
        return f"{column} is {value}"

    @step_operation("Quiet Step")
    def quiet(self) -> None:
        return None


def test_step_label_skips_empty_arguments() -> None:
    assert step_label("Go To Page", ["3"]) == "Go To Page - 3"
    assert step_label("Row Toggle", ["Name", "", None, "ON"]) == "Row Toggle - Name, ON"
    assert step_label("Navigate All Pages", []) == "Navigate All Pages"


def test_successful_step_captures_and_reports_pass() -> None:
    driver = FakeDriver()
    host = Host(driver)

    assert host.check("Status", value="Open") is None

    assert driver.screenshots == ["Check Cell - Status, Open Success"]
    assert [(entry.status, entry.step, entry.message) for entry in host.reporter.entries] == [
        ("PASS", "Check Cell", "Status is Open"),
    ]


def test_step_without_message_reports_completed_label() -> None:
    driver = FakeDriver()
    host = Host(driver)

    host.quiet()

    assert host.reporter.passed[0].message == "Quiet Step completed"


def test_failed_step_reports_captures_and_reraises_original() -> None:
    driver = FakeDriver()
    host = Host(driver)

    with pytest.raises(VerificationError) as exc_info:
        host.check("Status", "Open", fail=True)

    assert str(exc_info.value) == "Status is not Open"
    assert driver.screenshots == ["Check Cell - Status, Open Failed"]
    assert host.reporter.failed[0].message == "Status is not Open"
    assert host.reporter.passed == []


def test_capture_failure_after_step_failure_keeps_original_cause() -> None:
    driver = FakeDriver()
    driver.fail_screenshots = True
    host = Host(driver)

    with pytest.raises(ArtifactCaptureError) as exc_info:
        host.check("Status", "Open", fail=True)

    message = str(exc_info.value)
    assert message.startswith("Screenshot 'Check Cell - Status, Open Failed' failed: screenshot device unavailable")
    assert message.endswith("original failure: VerificationError: Status is not Open")
    assert isinstance(exc_info.value.__cause__, VerificationError)


def test_capture_failure_after_success_is_not_reported_as_pass() -> None:
    driver = FakeDriver()
    driver.fail_screenshots = True
    host = Host(driver)

    with pytest.raises(ArtifactCaptureError):
        host.check("Status", "Open")

    assert host.reporter.entries == []


def test_demo_delay_is_applied_before_capture() -> None:
    driver = FakeDriver()
    host = Host(driver, EngineSettings(demo_delay=2))

    host.check("Status", "Open")

    assert driver.now() == 2.0


def test_build_logger_writes_step_log(tmp_path: Path) -> None:
    logger = logging.getLogger("tableverify")
    previous = list(logger.handlers)
    propagate, level = logger.propagate, logger.level
    for handler in previous:
        logger.removeHandler(handler)
    try:
        built = build_logger(tmp_path)
        built.info("hello from test")
        for handler in built.handlers:
            handler.flush()

        assert built is logger
        assert "hello from test" in (tmp_path / "steps.log").read_text(encoding="utf-8")
        assert build_logger(tmp_path / "other") is logger
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in previous:
            logger.addHandler(handler)
        logger.propagate = propagate
        logger.setLevel(level)
