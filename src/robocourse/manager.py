"""Per-year configuration manager."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from robocourse._constants import document_path, year_asset_prefix
from robocourse._transport import HttpTransport, Transport
from robocourse.config import LoaderConfig
from robocourse.exceptions import (
    ConfigInitializationError,
    NotInitializedError,
    ParserError,
    RobocourseError,
    YearLoadError,
    YearNotFoundError,
    YearNotLoadedError,
)
from robocourse.loader import YamlDocumentLoader
from robocourse.models import LoadReport, LoadWarning, YearConfig
from robocourse.parser import ParserBootstrap

_logger = logging.getLogger(__name__)


class ConfigManager:
    """Load every configured year once and serve the results by year.

    Usage::

        async with ConfigManager(LoaderConfig(base_url="https://example.org")) as manager:
            report = await manager.initialize()
            course = manager.get_current_config().course

    A transport can be injected instead of an HTTP session, which is how
    the tests drive the manager.
    """

    def __init__(
        self,
        config: LoaderConfig | None = None,
        *,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
        bootstrap: ParserBootstrap | None = None,
    ) -> None:
        self._config = config or LoaderConfig()
        self._transport = transport
        self._external_session = session is not None
        self._http_session = session
        self._bootstrap = bootstrap or ParserBootstrap()
        self._configs: dict[str, YearConfig] = {}
        self._current_year = self._config.current_year
        self._is_loaded = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ConfigManager:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        self._bootstrap.ensure_loading()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> LoaderConfig:
        return self._config

    @property
    def bootstrap(self) -> ParserBootstrap:
        return self._bootstrap

    @property
    def is_loaded(self) -> bool:
        """True once :meth:`initialize` has iterated every year."""
        return self._is_loaded

    @property
    def current_year(self) -> str:
        return self._current_year

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            if self._http_session is None:
                raise RobocourseError(
                    "Manager has no transport. Use 'async with ConfigManager(...) as manager:' or pass transport="
                )
            self._transport = HttpTransport(self._config, self._http_session)
        return self._transport

    async def initialize(self) -> LoadReport:
        """Wait for the parser, then load every configured year in order.

        A year that fails entirely is logged, recorded in the report and
        left out of the store; the remaining years still load.

        Raises
        ------
        ConfigInitializationError
            If the YAML parser failed to load or did not become ready
            within ``config.parser_timeout``.
        """
        transport = self._require_transport()
        try:
            await self._bootstrap.wait_ready(self._config.parser_timeout)
        except ParserError as exc:
            _logger.error("YAML configuration could not be initialized: %s", exc)
            raise ConfigInitializationError(f"YAML parser unavailable: {exc}") from exc

        loaded: list[str] = []
        skipped: dict[str, str] = {}
        warnings: list[LoadWarning] = []

        for year in self._config.years:
            try:
                year_config = await self._load_year(year, transport)
            except YearLoadError as exc:
                _logger.warning("Skipped YAML configuration for %s: %s", year, exc)
                skipped[year] = str(exc)
                continue
            self._configs[year] = year_config
            loaded.append(year)
            warnings.extend(year_config.warnings)
            _logger.info("Loaded YAML configuration for %s", year)

        self._is_loaded = True
        _logger.info("YAML configuration loaded (%d loaded, %d skipped)", len(loaded), len(skipped))
        return LoadReport(loaded=tuple(loaded), skipped=skipped, warnings=tuple(warnings))

    async def load_year_config(self, year: str) -> YearConfig:
        """Fetch and parse the active documents of *year*.

        A document that fails is replaced with ``{}`` and reported in
        ``YearConfig.warnings``.

        Raises
        ------
        YearLoadError
            If every active document failed.
        """
        return await self._load_year(year, self._require_transport())

    async def _load_year(self, year: str, transport: Transport) -> YearConfig:
        names = self._config.documents
        loader = YamlDocumentLoader(transport, self._bootstrap, year=year)
        paths = [document_path(year, name) for name in names]
        documents, warnings = await loader.load_documents(paths)

        fields: dict[str, dict[str, Any]] = {}
        for name, path in zip(names, paths, strict=True):
            if name not in documents:
                continue
            value = documents[name]
            if value is None:
                value = {}
            if not isinstance(value, dict):
                _logger.warning("Skipped YAML document %s: expected a mapping, got %s", path, type(value).__name__)
                warnings.append(
                    LoadWarning(
                        year=year,
                        document=name,
                        path=path,
                        message=f"expected a mapping, got {type(value).__name__}",
                    )
                )
                continue
            fields[name] = value

        if names and not fields:
            raise YearLoadError(f"No configuration document for {year} could be loaded", year=year)

        try:
            return YearConfig(year=year, warnings=tuple(warnings), **fields)
        except ValidationError as exc:
            raise YearLoadError(f"Configuration for {year} is invalid: {exc}", year=year) from exc

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _require_loaded(self) -> None:
        if not self._is_loaded:
            raise NotInitializedError("Configuration is not loaded yet. Call initialize() first.")

    def get_path(self, year: str) -> str:
        """Site-absolute directory holding *year*'s assets."""
        return year_asset_prefix(year)

    def get_config(self, year: str) -> YearConfig:
        """Return the configuration of *year* with ``image_path`` resolved.

        Raises
        ------
        NotInitializedError
            If :meth:`initialize` has not completed.
        YearNotFoundError
            If *year* is not loaded.
        """
        self._require_loaded()

        config = self._configs.get(year)
        if config is None:
            raise YearNotFoundError(f"No configuration found for {year}", year=year)

        filename = config.image_filename
        image_path = self.get_path(year) + filename if filename is not None else None
        return config.model_copy(update={"image_path": image_path})

    def get_current_config(self) -> YearConfig:
        return self.get_config(self._current_year)

    def set_current_year(self, year: str) -> None:
        """Serve *year* from :meth:`get_current_config`.

        Raises
        ------
        YearNotLoadedError
            If *year* is not loaded.
        """
        if year not in self._configs:
            raise YearNotLoadedError(f"Configuration for {year} is not loaded", year=year)

        self._current_year = year
        _logger.info("Current year set to %s", year)

    def get_available_years(self) -> list[str]:
        """Loaded years in ascending order."""
        return sorted(self._configs)
