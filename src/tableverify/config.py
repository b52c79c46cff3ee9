"""Engine timings and limits, overridable through ``TABLEVERIFY_*`` environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "TABLEVERIFY_"


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Waiting
    wait_timeout: float = Field(default=10.0, ge=0, description="Upper bound for any single wait")
    poll_interval: float = Field(default=0.25, gt=0, description="Delay between condition checks")
    absence_timeout: float = Field(default=5.0, ge=0, description="Grace period for an element to disappear")

    # Settle delays after UI actions
    page_settle: float = Field(default=1.0, ge=0)
    edit_settle: float = Field(default=1.0, ge=0)
    save_settle: float = Field(default=1.5, ge=0)
    verify_settle: float = Field(default=1.0, ge=0)
    toggle_settle: float = Field(default=1.0, ge=0)
    dropdown_settle: float = Field(default=0.3, ge=0)
    option_settle: float = Field(default=0.5, ge=0)
    native_option_delay: float = Field(default=0.3, ge=0)
    picker_settle: float = Field(default=0.5, ge=0)
    upload_settle: float = Field(default=2.0, ge=0)
    rows_per_page_settle: float = Field(default=3.0, ge=0)

    # Navigation
    max_page_steps: int = Field(default=50, ge=1, description="Click bound for any page walk")

    # Reporting
    demo_delay: float = Field(default=0.0, ge=0, description="Pause before each step screenshot")
    artifacts_dir: Path = Field(default=Path("artifacts") / "screenshots")

    @field_validator("artifacts_dir")
    @classmethod
    def expand_artifacts_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        """Build settings from ``environ``, or from the process environment when omitted."""
        if environ is None:
            return cls()
        overrides: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = str(environ.get(env_key(name), "")).strip()
            if raw:
                overrides[name] = raw
        return cls(**overrides)

    def with_overrides(self, **changes: Any) -> EngineSettings:
        return type(self)(**{**self.model_dump(), **changes})

    def describe(self) -> list[str]:
        return [f"{name}={getattr(self, name)}" for name in type(self).model_fields]


def env_key(field_name: str) -> str:
    return f"{ENV_PREFIX}{field_name.upper()}"
