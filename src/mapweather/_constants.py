"""Internal constants shared across the library."""

BASE_URL = "https://api.open-meteo.com"
FORECAST_PATH = "/v1/forecast"
USER_AGENT = "mapweather/0.1"

#: Requests are pinned to GMT so "daily" buckets are stable regardless of the point.
DEFAULT_TIMEZONE = "GMT"
DAILY_PRECIPITATION_FIELD = "precipitation_probability_max"

REQUEST_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

# ------------------------------------------------------------------
# Coordinate bounds (decimal degrees)
# ------------------------------------------------------------------

COORDINATE_PRECISION = 2
LATITUDE_MIN = -90.0
LATITUDE_MAX = 90.0
LONGITUDE_MIN = -180.0
LONGITUDE_MAX = 180.0

# ------------------------------------------------------------------
# Presentation labels
# ------------------------------------------------------------------

DISMISS_LABEL = "Fechar"
TEMPERATURE_UNIT = "°C"
WIND_SPEED_UNIT = "Km/h"
