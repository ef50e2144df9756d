"""Models for loaded per-year configuration.

:class:`YearConfig` is the record stored per year.  Its four document
mappings are always present and default to ``{}`` so callers never have
to guard against a missing document.

:class:`LoadWarning` and :class:`LoadReport` make the absorbed failures
of a load visible to callers instead of only to the log.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from robocourse._constants import DOCUMENT_NAMES


def _stringify_keys(value: Any) -> Any:
    """Recursively convert mapping keys to ``str``.

    YAML allows int, bool, float and date keys (``1: first``); the site
    consumes documents as JSON-like objects whose keys are always strings.
    """
    if isinstance(value, dict):
        return {str(key): _stringify_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_stringify_keys(item) for item in value]
    return value


class LoadWarning(BaseModel):
    """A single document that failed and was replaced with ``{}``."""

    model_config = ConfigDict(frozen=True)

    year: str
    document: str
    path: str
    message: str


class YearConfig(BaseModel):
    """Parsed configuration documents for one year."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    year: str
    robot: dict[str, Any] = Field(default_factory=dict)
    course: dict[str, Any] = Field(default_factory=dict)
    sensors: dict[str, Any] = Field(default_factory=dict)
    rules: dict[str, Any] = Field(default_factory=dict)
    image_path: str | None = Field(default=None, serialization_alias="imgpath", validation_alias="imgpath")
    warnings: tuple[LoadWarning, ...] = ()

    @field_validator("robot", "course", "sensors", "rules", mode="before")
    @classmethod
    def _normalize_document(cls, value: Any) -> Any:
        # An empty YAML file parses to None.
        if value is None:
            return {}
        return _stringify_keys(value)

    @property
    def imgpath(self) -> str | None:
        """Alias of :attr:`image_path` under the name used in the site templates."""
        return self.image_path

    @property
    def image_filename(self) -> str | None:
        """``course.image.filename`` if the course document declares one."""
        image = self.course.get("image")
        if not isinstance(image, dict):
            return None
        filename = image.get("filename")
        if filename is None or filename == "":
            return None
        return str(filename)

    def document(self, name: str) -> dict[str, Any]:
        """Return the named document mapping (``robot``, ``course``, ...)."""
        if name not in DOCUMENT_NAMES:
            raise KeyError(name)
        value: dict[str, Any] = getattr(self, name)
        return value


class LoadReport(BaseModel):
    """Outcome of ``ConfigManager.initialize``."""

    model_config = ConfigDict(frozen=True)

    loaded: tuple[str, ...] = ()
    skipped: dict[str, str] = Field(default_factory=dict)
    warnings: tuple[LoadWarning, ...] = ()

    @property
    def degraded(self) -> bool:
        """True when any year was skipped or any document was substituted."""
        return bool(self.skipped or self.warnings)
