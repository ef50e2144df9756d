"""Loader and deploy configuration for robocourse."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from robocourse._constants import (
    ACTIVE_DOCUMENTS,
    DEFAULT_BASE_URL,
    DEFAULT_CURRENT_YEAR,
    DEFAULT_YEARS,
    DEPLOY_BRANCH,
    DEPLOY_COMMIT_MESSAGE,
    DEPLOY_REMOTE,
    DEPLOY_SITE_URL,
    DOCUMENT_NAMES,
)
from robocourse.exceptions import LoaderConfigError


def _env_list(value: str | None) -> tuple[str, ...] | None:
    if value is None:
        return None
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or None


def _env_float(name: str, value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise LoaderConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class LoaderConfig:
    """Configuration loader settings.

    Parameters
    ----------
    base_url : str
        Site root the per-year YAML documents are served from.
    years : tuple of str
        Year identifiers loaded by ``ConfigManager.initialize``, in order.
    documents : tuple of str
        Documents fetched for every year.  Must be a subset of
        ``robot``, ``course``, ``sensors`` and ``rules``.
    current_year : str
        Year served by ``get_current_config`` until changed.
    parser_timeout : float or None
        Seconds to wait for the YAML parser before ``initialize`` fails.
        ``None`` waits indefinitely.
    request_timeout : float
        Total timeout for a single document request, in seconds.
    """

    base_url: str = DEFAULT_BASE_URL
    years: tuple[str, ...] = DEFAULT_YEARS
    documents: tuple[str, ...] = ACTIVE_DOCUMENTS
    current_year: str = DEFAULT_CURRENT_YEAR
    parser_timeout: float | None = None
    request_timeout: float = 10.0

    def __post_init__(self) -> None:
        unknown = [name for name in self.documents if name not in DOCUMENT_NAMES]
        if unknown:
            raise LoaderConfigError(f"Unknown document(s) {unknown}; expected a subset of {list(DOCUMENT_NAMES)}")
        if self.parser_timeout is not None and self.parser_timeout <= 0:
            raise LoaderConfigError("parser_timeout must be positive or None")

    @classmethod
    def from_env(cls, **overrides: Any) -> LoaderConfig:
        """Create configuration from ``ROBOCOURSE_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("ROBOCOURSE_BASE_URL")
        if base_url:
            config_kwargs["base_url"] = base_url

        current_year = env.get("ROBOCOURSE_CURRENT_YEAR")
        if current_year:
            config_kwargs["current_year"] = current_year.strip()

        years = _env_list(env.get("ROBOCOURSE_YEARS"))
        if years is not None:
            config_kwargs["years"] = years

        documents = _env_list(env.get("ROBOCOURSE_DOCUMENTS"))
        if documents is not None:
            config_kwargs["documents"] = documents

        parser_timeout = _env_float("ROBOCOURSE_PARSER_TIMEOUT", env.get("ROBOCOURSE_PARSER_TIMEOUT"))
        if parser_timeout is not None:
            config_kwargs["parser_timeout"] = parser_timeout

        request_timeout = _env_float("ROBOCOURSE_REQUEST_TIMEOUT", env.get("ROBOCOURSE_REQUEST_TIMEOUT"))
        if request_timeout is not None:
            config_kwargs["request_timeout"] = request_timeout

        config_kwargs.update(overrides)
        return cls(**config_kwargs)


@dataclasses.dataclass(frozen=True)
class DeployConfig:
    """Settings for the ``robocourse-deploy`` command."""

    message: str = DEPLOY_COMMIT_MESSAGE
    remote: str = DEPLOY_REMOTE
    branch: str = DEPLOY_BRANCH
    site_url: str = DEPLOY_SITE_URL

    @classmethod
    def from_env(cls, **overrides: Any) -> DeployConfig:
        """Create configuration from ``DEPLOY_*`` environment variables."""
        env = os.environ
        _ENV_CONFIG_MAP = {
            "DEPLOY_MESSAGE": "message",
            "DEPLOY_REMOTE": "remote",
            "DEPLOY_BRANCH": "branch",
            "DEPLOY_SITE_URL": "site_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        config_kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**config_kwargs)
