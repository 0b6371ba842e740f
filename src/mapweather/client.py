"""High-level async client for the Open-Meteo forecast API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from mapweather._api.forecast import fetch_forecast
from mapweather._transport import HttpTransport, Transport
from mapweather.config import MapWeatherConfig
from mapweather.exceptions import MapWeatherError
from mapweather.models.coordinate import Coordinate
from mapweather.models.weather import NotAvailable, WeatherSummary

_logger = logging.getLogger(__name__)


class WeatherClient:
    """Async client for current conditions at a map point.

    Usage::

        async with WeatherClient(config) as client:
            summary = await client.fetch(coordinate)

    A caller-supplied ``session`` is used as-is and never closed; a
    ``transport`` replaces the HTTP layer entirely (test doubles).
    """

    def __init__(
        self,
        config: MapWeatherConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or MapWeatherConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None

    @property
    def config(self) -> MapWeatherConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WeatherClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise MapWeatherError("Client not initialized. Use 'async with WeatherClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch(self, coordinate: Coordinate) -> WeatherSummary | NotAvailable:
        """Fetch current conditions for *coordinate*.

        Returns :data:`~mapweather.models.NOT_AVAILABLE` when the service
        answers without the expected blocks.

        Raises
        ------
        WeatherClientError
            On transport or parse failure. No retry is attempted.
        """
        transport = self._require_transport()
        _logger.debug("Fetching weather for %s", coordinate)
        return await fetch_forecast(self._config, transport, coordinate)
