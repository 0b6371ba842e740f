"""Forecast endpoint.

Endpoint:
  - GET /v1/forecast (current conditions + daily precipitation probability)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from mapweather._transport import Transport
from mapweather.config import MapWeatherConfig
from mapweather.exceptions import WeatherClientError
from mapweather.models.coordinate import Coordinate
from mapweather.models.weather import NOT_AVAILABLE, ForecastResponse, NotAvailable, WeatherSummary
from mapweather.normalize import safe_floor

_logger = logging.getLogger(__name__)


def build_forecast_params(config: MapWeatherConfig, coordinate: Coordinate) -> dict[str, str]:
    """Query string for a current-conditions request at *coordinate*."""
    return {
        "latitude": f"{coordinate.latitude:.2f}",
        "longitude": f"{coordinate.longitude:.2f}",
        "current_weather": "true",
        "timezone": config.timezone,
        "daily": ",".join(config.daily_fields),
    }


def parse_forecast_response(payload: dict[str, Any], *, endpoint: str = "") -> WeatherSummary | NotAvailable:
    """Turn a decoded forecast payload into a :class:`WeatherSummary`.

    Returns :data:`NOT_AVAILABLE` when ``current_weather`` or ``daily`` is
    missing, when current values are not numeric, or when the daily
    precipitation array has no usable values.

    Raises
    ------
    WeatherClientError
        When a block is present but has the wrong shape.
    """
    try:
        response = ForecastResponse.model_validate(payload)
    except ValidationError as exc:
        raise WeatherClientError(f"Malformed forecast payload from {endpoint}: {exc}", endpoint=endpoint) from exc

    current = response.current_weather
    daily = response.daily
    if current is None or daily is None:
        _logger.debug(
            "Forecast lacks %s",
            "current_weather" if current is None else "daily",
        )
        return NOT_AVAILABLE

    temperature = safe_floor(current.temperature)
    wind_speed = safe_floor(current.windspeed)
    if temperature is None or wind_speed is None:
        _logger.debug("Forecast current_weather missing temperature/windspeed: %s", current.raw)
        return NOT_AVAILABLE

    precipitation = daily.max_precipitation_probability()
    if precipitation is None:
        _logger.debug("Forecast daily precipitation_probability_max is empty")
        return NOT_AVAILABLE

    return WeatherSummary(
        temperature_celsius=temperature,
        wind_speed_kmh=wind_speed,
        precipitation_probability_percent=max(0, min(100, precipitation)),
    )


async def fetch_forecast(
    config: MapWeatherConfig,
    transport: Transport,
    coordinate: Coordinate,
) -> WeatherSummary | NotAvailable:
    """Request and parse current conditions for *coordinate*."""
    params = build_forecast_params(config, coordinate)
    payload = await transport.get_json(config.forecast_url, params)
    return parse_forecast_response(payload, endpoint=config.forecast_path)
