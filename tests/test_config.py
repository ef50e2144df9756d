from __future__ import annotations

import pytest

from robocourse.config import DeployConfig, LoaderConfig
from robocourse.exceptions import LoaderConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ROBOCOURSE_BASE_URL",
        "ROBOCOURSE_YEARS",
        "ROBOCOURSE_DOCUMENTS",
        "ROBOCOURSE_CURRENT_YEAR",
        "ROBOCOURSE_PARSER_TIMEOUT",
        "ROBOCOURSE_REQUEST_TIMEOUT",
        "DEPLOY_MESSAGE",
        "DEPLOY_REMOTE",
        "DEPLOY_BRANCH",
        "DEPLOY_SITE_URL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = LoaderConfig()

    assert config.years == ("2023", "2024", "2025", "Test")
    assert config.documents == ("robot", "course")
    assert config.current_year == "2023"
    assert config.parser_timeout is None


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROBOCOURSE_BASE_URL", "https://example.org/site")
    monkeypatch.setenv("ROBOCOURSE_YEARS", "2024, 2025 ,")
    monkeypatch.setenv("ROBOCOURSE_DOCUMENTS", "robot,course,rules")
    monkeypatch.setenv("ROBOCOURSE_CURRENT_YEAR", "2025")
    monkeypatch.setenv("ROBOCOURSE_PARSER_TIMEOUT", "2.5")

    config = LoaderConfig.from_env()

    assert config.base_url == "https://example.org/site"
    assert config.years == ("2024", "2025")
    assert config.documents == ("robot", "course", "rules")
    assert config.current_year == "2025"
    assert config.parser_timeout == 2.5


def test_overrides_beat_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROBOCOURSE_BASE_URL", "https://env.example.org")

    config = LoaderConfig.from_env(base_url="https://override.example.org")

    assert config.base_url == "https://override.example.org"


def test_unknown_document_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROBOCOURSE_DOCUMENTS", "robot,weather")

    with pytest.raises(LoaderConfigError):
        LoaderConfig.from_env()


def test_non_numeric_timeout_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROBOCOURSE_PARSER_TIMEOUT", "soon")

    with pytest.raises(LoaderConfigError):
        LoaderConfig.from_env()


def test_non_positive_parser_timeout_is_rejected() -> None:
    with pytest.raises(LoaderConfigError):
        LoaderConfig(parser_timeout=0)


def test_deploy_config_defaults_and_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert DeployConfig.from_env() == DeployConfig(
        message="Update build files", remote="origin", branch="main", site_url=DeployConfig().site_url
    )

    monkeypatch.setenv("DEPLOY_BRANCH", "gh-pages")
    config = DeployConfig.from_env(message=None, remote="upstream")

    assert config.branch == "gh-pages"
    assert config.remote == "upstream"
    assert config.message == "Update build files"
