from __future__ import annotations

from typing import Sequence


class TableVerifyError(Exception):
    """Base class for every failure raised by a step operation."""


class ElementNotFoundError(TableVerifyError):
    pass


class ColumnNotFoundError(ElementNotFoundError):
    def __init__(self, column: str, headers: Sequence[str]) -> None:
        self.column = column
        self.headers = tuple(headers)
        shown = ", ".join(f"'{header}'" for header in self.headers) or "none"
        super().__init__(f"Column '{column}' not found in table headers (available: {shown})")


class WaitTimeoutError(TableVerifyError):
    pass


class NavigationStuckError(TableVerifyError):
    def __init__(self, target: str, attempts: int) -> None:
        self.target = target
        self.attempts = attempts
        super().__init__(f"Failed to reach {target} page within {attempts} attempts")


class VerificationError(TableVerifyError, AssertionError):
    """Observed UI state differs from the expected state."""


class IneffectiveNavigationError(VerificationError):
    pass


class PartialOperationError(TableVerifyError):
    def __init__(self, failed_value: str, applied: Sequence[str], reason: str = "") -> None:
        self.failed_value = failed_value
        self.applied = tuple(applied)
        message = f"Failed to select value: {failed_value}"
        if reason:
            message = f"{message} ({reason})"
        if self.applied:
            message = f"{message}; selected before failure: {', '.join(self.applied)}"
        super().__init__(message)


class ArtifactCaptureError(TableVerifyError):
    pass
