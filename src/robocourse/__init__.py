"""robocourse - Async loader for per-year robot course YAML configuration."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("robocourse")
except PackageNotFoundError:
    __version__ = "0+local"
from robocourse.config import DeployConfig, LoaderConfig
from robocourse.exceptions import (
    ConfigFetchError,
    ConfigInitializationError,
    LoaderConfigError,
    NotInitializedError,
    ParserError,
    ParserNotReadyError,
    ParserTimeoutError,
    ParserUnavailableError,
    RobocourseError,
    YamlParseError,
    YearLoadError,
    YearNotFoundError,
    YearNotLoadedError,
)
from robocourse.loader import YamlDocumentLoader
from robocourse.manager import ConfigManager
from robocourse.models import LoadReport, LoadWarning, YearConfig
from robocourse.parser import ParserBootstrap

__all__ = [
    "__version__",
    "ConfigFetchError",
    "ConfigInitializationError",
    "ConfigManager",
    "DeployConfig",
    "LoadReport",
    "LoadWarning",
    "LoaderConfig",
    "LoaderConfigError",
    "NotInitializedError",
    "ParserBootstrap",
    "ParserError",
    "ParserNotReadyError",
    "ParserTimeoutError",
    "ParserUnavailableError",
    "RobocourseError",
    "YamlDocumentLoader",
    "YamlParseError",
    "YearConfig",
    "YearLoadError",
    "YearNotFoundError",
    "YearNotLoadedError",
]
