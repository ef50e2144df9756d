"""Fetch-and-parse of individual YAML documents."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable
from typing import Any

from robocourse._constants import YAML_SUFFIXES
from robocourse._transport import Transport
from robocourse.exceptions import ConfigFetchError, ParserError
from robocourse.models import LoadWarning
from robocourse.parser import ParserBootstrap

_logger = logging.getLogger(__name__)


def document_name(path: str) -> str:
    """Key a document by its file name without the YAML suffix.

    ``config/years/2023/robot.yaml`` -> ``robot``
    """
    name = posixpath.basename(path)
    for suffix in YAML_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


class YamlDocumentLoader:
    """Load YAML documents through a transport and a parser bootstrap."""

    def __init__(self, transport: Transport, parser: ParserBootstrap, *, year: str = "") -> None:
        self._transport = transport
        self._parser = parser
        self._year = year

    async def load_document(self, path: str) -> Any:
        """Fetch and parse a single document.

        Raises
        ------
        ConfigFetchError
            If the document could not be fetched.
        ParserError
            If the parser is not ready or rejects the document.
        """
        try:
            text = await self._transport.get_text(path)
            return self._parser.parse(text)
        except (ConfigFetchError, ParserError) as exc:
            _logger.error("Failed to load YAML document %s: %s", path, exc)
            raise

    async def load_documents(self, paths: Iterable[str]) -> tuple[dict[str, Any], list[LoadWarning]]:
        """Load *paths* one after another, skipping the ones that fail.

        Returns the parsed documents keyed by :func:`document_name` and a
        warning for every skipped path.  Any error raised for one path,
        including from a custom transport, only skips that path.
        """
        documents: dict[str, Any] = {}
        warnings: list[LoadWarning] = []

        for path in paths:
            name = document_name(path)
            try:
                documents[name] = await self.load_document(path)
            except Exception as exc:
                _logger.warning("Skipped YAML document %s: %s", path, exc)
                warnings.append(LoadWarning(year=self._year, document=name, path=path, message=str(exc)))

        return documents, warnings
