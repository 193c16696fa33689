"""HTTP transport for the sample data source."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import aiohttp

from pygesbox._constants import USER_AGENT
from pygesbox.config import GesboxConfig
from pygesbox.exceptions import GesboxMalformedDataError, GesboxNetworkError
from pygesbox.ingestion.samples import decode_payload

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the monitor.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def fetch_raw(self) -> list[Any]:
        ...


class HttpTransport:
    """Fetches the full sample snapshot with a single GET request."""

    def __init__(self, config: GesboxConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.fetch_timeout)

    async def fetch_raw(self) -> list[Any]:
        """GET the endpoint and return the decoded JSON array.

        Raises
        ------
        GesboxNetworkError
            On transport failure, timeout or a non-2xx status.
        GesboxMalformedDataError
            If the body is not decodable text or not a JSON array.
        """
        url = self._config.endpoint_url
        headers = {"accept": "application/json", "user-agent": USER_AGENT}

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                if not 200 <= resp.status < 300:
                    body = await resp.text(errors="replace")
                    raise GesboxNetworkError(
                        f"HTTP {resp.status} from data source: {body[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
                try:
                    text = await resp.text()
                except UnicodeDecodeError as exc:
                    raise GesboxMalformedDataError(f"Data source body is not valid text: {exc}") from exc
        except (GesboxNetworkError, GesboxMalformedDataError):
            raise
        except TimeoutError as exc:
            raise GesboxNetworkError(
                f"Request to data source timed out after {self._config.fetch_timeout:g}s",
                url=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise GesboxNetworkError(f"Request to data source failed: {exc}", url=url) from exc

        payload = decode_payload(text)
        _logger.debug("Data source returned %d raw samples", len(payload))
        return payload
