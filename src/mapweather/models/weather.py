"""Weather response and summary models."""

from __future__ import annotations

import enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mapweather.models._base import ForecastBaseModel
from mapweather.normalize import safe_float


class CurrentWeather(ForecastBaseModel):
    """The ``current_weather`` block of a forecast response.

    Parameters
    ----------
    temperature : float or None
        Air temperature in °C.
    windspeed : float or None
        Wind speed in km/h.
    winddirection : float or None
        Wind direction in degrees.
    weathercode : int or None
        WMO weather interpretation code.
    time : str or None
        ISO timestamp of the observation (GMT).
    """

    temperature: float | None = None
    windspeed: float | None = None
    winddirection: float | None = None
    weathercode: int | None = None
    time: str | None = None

    @field_validator("temperature", "windspeed", "winddirection", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)


class DailyForecast(ForecastBaseModel):
    """The ``daily`` block of a forecast response."""

    time: list[str] = Field(default_factory=list)
    precipitation_probability_max: list[float | None] = Field(default_factory=list)

    @field_validator("precipitation_probability_max", mode="before")
    @classmethod
    def _coerce_probabilities(cls, value: Any) -> list[float | None]:
        if not isinstance(value, list):
            raise ValueError(f"precipitation_probability_max must be a list, got {type(value).__name__}")
        return [safe_float(item) for item in value]

    def max_precipitation_probability(self) -> int | None:
        """Highest daily precipitation probability, ignoring gaps.

        ``None`` when the array is empty or holds no usable values.
        """
        values = [v for v in self.precipitation_probability_max if v is not None]
        if not values:
            return None
        return int(max(values))


class ForecastResponse(ForecastBaseModel):
    """Top-level forecast payload. Both blocks are optional on the wire."""

    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None
    current_weather: CurrentWeather | None = None
    daily: DailyForecast | None = None


class WeatherSummary(BaseModel):
    """Display-ready current conditions for one coordinate.

    Parameters
    ----------
    temperature_celsius : int
        Current temperature, floored.
    wind_speed_kmh : int
        Current wind speed, floored.
    precipitation_probability_percent : int
        Maximum daily precipitation probability (0-100).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    temperature_celsius: int
    wind_speed_kmh: int
    precipitation_probability_percent: int = Field(ge=0, le=100)


class NotAvailable(enum.Enum):
    """Well-formed response without usable weather for the point."""

    NOT_AVAILABLE = "not_available"

    def __bool__(self) -> bool:
        return False


NOT_AVAILABLE: Final = NotAvailable.NOT_AVAILABLE
