"""Custom exception hierarchy for robocourse."""

from __future__ import annotations


class RobocourseError(Exception):
    """Base exception for all robocourse errors."""


class LoaderConfigError(RobocourseError):
    """Invalid or missing configuration."""


class ParserError(RobocourseError):
    """YAML parser bootstrap or parse failure."""


class ParserNotReadyError(ParserError):
    """``parse`` was called before the parser finished loading."""


class ParserUnavailableError(ParserError):
    """The parser module could not be imported."""


class ParserTimeoutError(ParserError):
    """The parser did not become ready within the allowed time."""


class YamlParseError(ParserError):
    """The underlying parser rejected a document."""


class ConfigFetchError(RobocourseError):
    """HTTP-level failure (network, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        path: str = "",
    ) -> None:
        self.status_code = status_code
        self.path = path
        super().__init__(message)


class ConfigInitializationError(RobocourseError):
    """``ConfigManager.initialize`` could not start loading."""


class NotInitializedError(RobocourseError):
    """The manager was used before ``initialize()`` completed."""


class YearNotFoundError(RobocourseError):
    """No configuration is stored for the requested year."""

    def __init__(self, message: str, *, year: str = "") -> None:
        self.year = year
        super().__init__(message)


class YearNotLoadedError(YearNotFoundError):
    """``set_current_year`` was given a year that was never loaded."""


class YearLoadError(RobocourseError):
    """Every document of a year failed to load.

    Raised by ``ConfigManager.load_year_config``; ``initialize`` absorbs
    it and records the year as skipped.
    """

    def __init__(self, message: str, *, year: str = "") -> None:
        self.year = year
        super().__init__(message)
