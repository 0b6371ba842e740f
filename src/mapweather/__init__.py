"""mapweather - tap a map point, see its current weather."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mapweather")
except PackageNotFoundError:
    __version__ = "0+local"
from mapweather.client import WeatherClient
from mapweather.config import MapWeatherConfig
from mapweather.exceptions import (
    InvalidCoordinateError,
    MapWeatherConfigError,
    MapWeatherError,
    WeatherClientError,
)
from mapweather.models import (
    NOT_AVAILABLE,
    Coordinate,
    NotAvailable,
    WeatherSummary,
    normalize_coordinate,
)
from mapweather.presentation import MapView, PresentationAdapter, format_summary, render
from mapweather.state import (
    IDLE,
    Failed,
    FailureReason,
    Idle,
    Pending,
    Resolved,
    Selection,
    SelectionKind,
    SelectionStore,
)

__all__ = [
    "__version__",
    "Coordinate",
    "Failed",
    "FailureReason",
    "IDLE",
    "Idle",
    "InvalidCoordinateError",
    "MapView",
    "MapWeatherConfig",
    "MapWeatherConfigError",
    "MapWeatherError",
    "NOT_AVAILABLE",
    "NotAvailable",
    "Pending",
    "PresentationAdapter",
    "Resolved",
    "Selection",
    "SelectionKind",
    "SelectionStore",
    "WeatherClient",
    "WeatherClientError",
    "WeatherSummary",
    "format_summary",
    "normalize_coordinate",
    "render",
]
