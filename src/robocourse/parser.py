"""Lazy, load-once bootstrap of the third-party YAML parser."""

from __future__ import annotations

import asyncio
import importlib
import logging
from collections.abc import Callable
from typing import Any

from robocourse.exceptions import (
    ParserNotReadyError,
    ParserTimeoutError,
    ParserUnavailableError,
    YamlParseError,
)

_logger = logging.getLogger(__name__)

ParserHandle = Callable[[str], Any]


class ParserBootstrap:
    """Import the YAML parser on first use and expose its load function.

    The import runs in the default executor so it does not block the
    event loop.  Completion is signalled exactly once through an
    :class:`asyncio.Event`; dependents await :meth:`wait_ready` instead
    of polling :attr:`is_ready`.

    Parameters
    ----------
    module : str
        Importable module providing the parser.  Defaults to PyYAML.
    function : str
        Attribute of *module* that turns YAML text into Python objects.
        Defaults to ``safe_load`` so documents cannot construct
        arbitrary objects.
    """

    def __init__(self, module: str = "yaml", function: str = "safe_load") -> None:
        self._module_name = module
        self._function_name = function
        self._handle: ParserHandle | None = None
        self._error: BaseException | None = None
        self._done: asyncio.Event | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def is_ready(self) -> bool:
        return self._handle is not None

    @property
    def error(self) -> BaseException | None:
        """The import failure, if :meth:`load` gave up."""
        return self._error

    def _done_event(self) -> asyncio.Event:
        if self._done is None:
            self._done = asyncio.Event()
        return self._done

    def _resolve(self) -> ParserHandle:
        module = importlib.import_module(self._module_name)
        handle = getattr(module, self._function_name)
        if not callable(handle):
            raise TypeError(f"{self._module_name}.{self._function_name} is not callable")
        return handle

    async def load(self) -> None:
        """Import the parser module and resolve the handle.

        Never raises: a failure is logged and recorded in :attr:`error`,
        and the handle stays absent.  Concurrent callers share one import.
        """
        await asyncio.shield(self.ensure_loading())

    async def _load(self) -> None:
        done = self._done_event()
        if self._handle is not None or self._error is not None:
            return

        loop = asyncio.get_running_loop()
        try:
            handle = await loop.run_in_executor(None, self._resolve)
        except Exception as exc:
            self._error = exc
            _logger.error("Failed to load YAML parser %s.%s: %s", self._module_name, self._function_name, exc)
        else:
            self._handle = handle
            _logger.info("YAML parser loaded (%s.%s)", self._module_name, self._function_name)
        finally:
            done.set()

    def ensure_loading(self) -> asyncio.Task[None]:
        """Schedule the import once and return its task."""
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._load())
        return self._task

    async def wait_ready(self, timeout: float | None = None) -> None:
        """Wait until the parser is usable.

        Starts loading if nobody has yet.

        Raises
        ------
        ParserUnavailableError
            If the import failed.
        ParserTimeoutError
            If *timeout* seconds pass first.
        """
        self.ensure_loading()
        done = self._done_event()
        try:
            await asyncio.wait_for(done.wait(), timeout)
        except TimeoutError as exc:
            raise ParserTimeoutError(f"YAML parser not ready after {timeout}s") from exc

        if self._handle is None:
            raise ParserUnavailableError(
                f"YAML parser {self._module_name}.{self._function_name} could not be loaded: {self._error}"
            ) from self._error

    def parse(self, text: str) -> Any:
        """Convert YAML *text* into Python objects.

        Raises
        ------
        ParserNotReadyError
            If the parser has not loaded yet.
        YamlParseError
            If the underlying parser rejects the text.
        """
        if self._handle is None:
            raise ParserNotReadyError("YAML parser is not loaded yet")

        try:
            return self._handle(text)
        except Exception as exc:
            _logger.error("YAML parse error: %s", exc)
            raise YamlParseError(f"Failed to parse YAML document: {exc}") from exc
