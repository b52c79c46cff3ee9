from __future__ import annotations

from dataclasses import dataclass, field
import functools
import inspect
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Literal, Protocol, TypeVar

from .errors import ArtifactCaptureError
from .waits import settle

if TYPE_CHECKING:
    from .steps import TableSteps

ReportStatus = Literal["PASS", "FAIL"]
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"

F = TypeVar("F", bound=Callable[..., Any])


class Reporter(Protocol):
    def log_pass(self, step: str, message: str) -> None: ...

    def log_fail(self, step: str, message: str) -> None: ...


@dataclass(frozen=True, slots=True)
class ReportEntry:
    status: ReportStatus
    step: str
    message: str


@dataclass(slots=True)
class ReportLog:
    entries: list[ReportEntry] = field(default_factory=list)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("tableverify.report"))

    def log_pass(self, step: str, message: str) -> None:
        self.entries.append(ReportEntry("PASS", step, message))
        self.logger.info("PASS %s: %s", step, message)

    def log_fail(self, step: str, message: str) -> None:
        self.entries.append(ReportEntry("FAIL", step, message))
        self.logger.error("FAIL %s: %s", step, message)

    @property
    def passed(self) -> list[ReportEntry]:
        return [entry for entry in self.entries if entry.status == "PASS"]

    @property
    def failed(self) -> list[ReportEntry]:
        return [entry for entry in self.entries if entry.status == "FAIL"]


def build_logger(log_dir: Path | None = None) -> logging.Logger:
    logger = logging.getLogger("tableverify")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    logger.propagate = False
    try:
        target_dir = log_dir or Path.home() / ".tableverify"
        target_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(target_dir / "steps.log", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
    except Exception:
        # Fallback to stderr logging if file logger cannot be initialized.
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(stream_handler)
    return logger


def step_label(title: str, arguments: list[Any]) -> str:
    shown = [str(argument) for argument in arguments if argument is not None and str(argument) != ""]
    if not shown:
        return title
    return f"{title} - {', '.join(shown)}"


def step_operation(title: str, *label_args: str) -> Callable[[F], F]:
    """Report and capture a screenshot around a public step.

    The wrapped method returns its pass message. On success a "<label> Success"
    screenshot is taken and the pass is reported; on failure the fail is reported,
    a "<label> Failed" screenshot is taken and the original error is re-raised.
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(self: TableSteps, *args: Any, **kwargs: Any) -> None:
            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            label = step_label(title, [bound.arguments.get(name) for name in label_args])
            self.logger.info("Step started: %s", label)
            try:
                message = func(self, *args, **kwargs)
            except Exception as exc:
                self.logger.error("Step failed: %s: %s", label, exc)
                self.reporter.log_fail(title, str(exc))
                _capture(self, f"{label} Failed", exc)
                raise
            _capture(self, f"{label} Success", None)
            self.reporter.log_pass(title, message or f"{label} completed")

        return wrapper  # type: ignore[return-value]

    return decorator


def _capture(steps: TableSteps, label: str, original: Exception | None) -> Path:
    settle(steps.driver, steps.settings.demo_delay, "demo delay")
    try:
        return steps.driver.screenshot(label)
    except Exception as exc:
        if original is None:
            raise ArtifactCaptureError(f"Screenshot '{label}' failed: {exc}") from exc
        raise ArtifactCaptureError(
            f"Screenshot '{label}' failed: {exc}; original failure: {type(original).__name__}: {original}"
        ) from original
