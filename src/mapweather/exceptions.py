"""Custom exception hierarchy for mapweather."""

from __future__ import annotations


class MapWeatherError(Exception):
    """Base exception for all mapweather errors."""


class MapWeatherConfigError(MapWeatherError):
    """Invalid or missing configuration."""


class WeatherClientError(MapWeatherError):
    """HTTP-level failure (network, non-2xx, timeout, invalid JSON).

    The state machine maps this to a failed selection; it never reaches
    the presentation layer as an exception.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class InvalidCoordinateError(MapWeatherError, ValueError):
    """Raw map coordinate is not finite or lies outside the valid range."""

    def __init__(self, message: str, *, latitude: float, longitude: float) -> None:
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(message)
