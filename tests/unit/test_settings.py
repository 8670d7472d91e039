"""Unit tests for settings loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from github_issue_mover.config import MoverSettings

_ENV_VARS = (
    "ISSUE_MOVER_LOG_LEVEL",
    "ISSUE_MOVER_GITHUB_BASE_URL",
    "ISSUE_MOVER_GITHUB_WEB_HOST",
    "ISSUE_MOVER_TIMEOUT",
    "ISSUE_MOVER_RETRIES",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_target_github_com() -> None:
    settings = MoverSettings()

    assert settings.log_level == "WARNING"
    assert settings.github_base_url == "https://api.github.com"
    assert settings.github_web_host == "github.com"
    assert settings.timeout == 15.0
    assert settings.retries == 3


def test_settings_load_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISSUE_MOVER_LOG_LEVEL", "debug")
    monkeypatch.setenv("ISSUE_MOVER_GITHUB_BASE_URL", "https://github.example.com/api/v3")
    monkeypatch.setenv("ISSUE_MOVER_GITHUB_WEB_HOST", " GitHub.Example.com ")
    monkeypatch.setenv("ISSUE_MOVER_TIMEOUT", "30")
    monkeypatch.setenv("ISSUE_MOVER_RETRIES", "0")

    settings = MoverSettings()

    assert settings.log_level == "DEBUG"
    assert settings.github_base_url == "https://github.example.com/api/v3"
    assert settings.github_web_host == "github.example.com"
    assert settings.timeout == 30.0
    assert settings.retries == 0


def test_settings_do_not_read_dotenv(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("ISSUE_MOVER_LOG_LEVEL=DEBUG\n", encoding="utf-8")

    assert MoverSettings().log_level == "WARNING"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("ISSUE_MOVER_LOG_LEVEL", "LOUD"),
        ("ISSUE_MOVER_TIMEOUT", "0"),
        ("ISSUE_MOVER_RETRIES", "-1"),
        ("ISSUE_MOVER_GITHUB_WEB_HOST", "  "),
    ],
)
def test_invalid_settings_are_rejected(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        MoverSettings()
