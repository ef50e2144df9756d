"""HTTP transport for fetching static YAML documents."""

from __future__ import annotations

import logging
from typing import Protocol

import aiohttp

from robocourse._constants import USER_AGENT
from robocourse.config import LoaderConfig
from robocourse.exceptions import ConfigFetchError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the document loader.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_text(self, path: str) -> str:
        ...


def join_url(base_url: str, path: str) -> str:
    """Join a site root and a relative document path with exactly one slash."""
    if not base_url:
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class HttpTransport:
    """GET documents relative to ``config.base_url``."""

    def __init__(
        self,
        config: LoaderConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_text(self, path: str) -> str:
        """Fetch ``path`` and return the body decoded as text.

        Raises
        ------
        ConfigFetchError
            On a network error or any status other than 200.
        """
        url = join_url(self._config.base_url, path)
        headers = {
            "accept": "application/yaml, text/yaml, text/plain, */*",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                if resp.status != 200:
                    raise ConfigFetchError(
                        f"HTTP error! status: {resp.status} ({path})",
                        status_code=resp.status,
                        path=path,
                    )
                try:
                    text = await resp.text()
                except UnicodeDecodeError as exc:
                    raise ConfigFetchError(
                        f"Response for {path} is not valid text: {exc}",
                        status_code=resp.status,
                        path=path,
                    ) from exc
        except ConfigFetchError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise ConfigFetchError(
                f"Request for {path} failed: {exc!r}",
                path=path,
            ) from exc

        return text
