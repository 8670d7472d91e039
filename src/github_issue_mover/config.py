"""Settings for the issue mover.

Settings come from the process environment only; the token is always passed on
the command line. All settings are optional and the defaults target github.com.

Environment variables:
- ISSUE_MOVER_LOG_LEVEL        (default WARNING)
- ISSUE_MOVER_GITHUB_BASE_URL  (default https://api.github.com)
- ISSUE_MOVER_GITHUB_WEB_HOST  (default github.com)
- ISSUE_MOVER_TIMEOUT          (seconds, default 15)
- ISSUE_MOVER_RETRIES          (default 3)
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MoverSettings(BaseSettings):
    log_level: str = Field(
        default="WARNING",
        description="Root logging level",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    github_web_host: str = Field(
        default="github.com",
        description="Host accepted in --from issue urls",
    )
    timeout: float = Field(
        default=15.0,
        gt=0,
        description="Per-request timeout in seconds, applied by PyGithub",
    )
    retries: int = Field(
        default=3,
        ge=0,
        description="Retries PyGithub performs on transient server errors",
    )

    model_config = SettingsConfigDict(
        env_prefix="ISSUE_MOVER_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("github_web_host")
    @classmethod
    def _normalise_host(cls, value: str) -> str:
        host = value.strip().lower()
        if not host:
            raise ValueError("github_web_host must be non-empty")
        return host
