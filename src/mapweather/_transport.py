"""HTTP transport for the forecast service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import urlsplit

import aiohttp

from mapweather._constants import REQUEST_HEADERS
from mapweather._redact import truncate_for_log
from mapweather.config import MapWeatherConfig
from mapweather.exceptions import WeatherClientError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str, params: Mapping[str, str]) -> dict[str, Any]:
        ...


class HttpTransport:
    """aiohttp-backed transport returning decoded JSON objects."""

    def __init__(
        self,
        config: MapWeatherConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = (
            aiohttp.ClientTimeout(total=config.request_timeout) if config.request_timeout is not None else None
        )

    async def get_json(self, url: str, params: Mapping[str, str]) -> dict[str, Any]:
        """GET *url* with *params* and return the decoded JSON object.

        Raises
        ------
        WeatherClientError
            On connection failure, timeout, non-2xx status, or a body
            that is not a JSON object.
        """
        headers = {**REQUEST_HEADERS, "User-Agent": self._config.user_agent}
        endpoint = urlsplit(url).path or url

        _logger.debug("GET %s params=%s", url, dict(params))

        request_kwargs: dict[str, Any] = {"params": dict(params), "headers": headers}
        if self._timeout is not None:
            request_kwargs["timeout"] = self._timeout

        try:
            async with self._http.get(url, **request_kwargs) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise WeatherClientError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except WeatherClientError:
            raise
        except TimeoutError as exc:
            limit = f" after {self._config.request_timeout}s" if self._config.request_timeout is not None else ""
            raise WeatherClientError(
                f"Request to {endpoint} timed out{limit}",
                endpoint=endpoint,
            ) from exc
        except UnicodeDecodeError as exc:
            raise WeatherClientError(
                f"Invalid JSON from {endpoint}: body is not valid {exc.encoding}",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise WeatherClientError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            body: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise WeatherClientError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise WeatherClientError(
                f"Expected a JSON object from {endpoint}, got {type(body).__name__}",
                endpoint=endpoint,
            )

        if self._config.trace_enabled:
            _logger.debug("Response from %s: %s", endpoint, truncate_for_log(body))

        return body
