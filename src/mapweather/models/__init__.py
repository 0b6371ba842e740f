"""Data models for map points and forecast responses."""

from mapweather.models._base import ForecastBaseModel
from mapweather.models.coordinate import Coordinate, normalize_coordinate
from mapweather.models.weather import (
    NOT_AVAILABLE,
    CurrentWeather,
    DailyForecast,
    ForecastResponse,
    NotAvailable,
    WeatherSummary,
)

__all__ = [
    "Coordinate",
    "CurrentWeather",
    "DailyForecast",
    "ForecastBaseModel",
    "ForecastResponse",
    "NOT_AVAILABLE",
    "NotAvailable",
    "WeatherSummary",
    "normalize_coordinate",
]
