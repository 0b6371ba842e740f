"""Normalized map coordinate."""

from __future__ import annotations

import math
from decimal import InvalidOperation

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mapweather._constants import (
    COORDINATE_PRECISION,
    LATITUDE_MAX,
    LATITUDE_MIN,
    LONGITUDE_MAX,
    LONGITUDE_MIN,
)
from mapweather.exceptions import InvalidCoordinateError
from mapweather.normalize import round_half_away

# Half a unit in the last kept place: values this close to a bound round onto it.
_ROUNDING_SLACK = 0.5 * 10**-COORDINATE_PRECISION


class Coordinate(BaseModel):
    """A map point rounded to two decimal places.

    Two taps that land in the same 0.01° cell compare equal and hash
    the same, which is what the selection store relies on when it checks
    whether a finished request still matches the current selection.

    Parameters
    ----------
    latitude : float
        Latitude in decimal degrees, within [-90, 90].
    longitude : float
        Longitude in decimal degrees, within [-180, 180].
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float = Field(ge=LATITUDE_MIN, le=LATITUDE_MAX)
    longitude: float = Field(ge=LONGITUDE_MIN, le=LONGITUDE_MAX)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _round(cls, value: float) -> float:
        try:
            return round_half_away(float(value), COORDINATE_PRECISION)
        except InvalidOperation as exc:
            raise ValueError(f"coordinate value out of range: {value}") from exc

    def __str__(self) -> str:
        return f"({self.latitude:.2f}, {self.longitude:.2f})"


def normalize_coordinate(latitude: float, longitude: float) -> Coordinate:
    """Turn a raw map press location into a :class:`Coordinate`.

    Raises
    ------
    InvalidCoordinateError
        When either value is not finite or lies outside the valid range
        once rounded.
    """
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidCoordinateError(
            f"coordinate must be finite, got ({latitude}, {longitude})",
            latitude=latitude,
            longitude=longitude,
        )
    # Reject far-off values before rounding; huge magnitudes overflow the decimal context.
    if not (
        LATITUDE_MIN - _ROUNDING_SLACK <= latitude <= LATITUDE_MAX + _ROUNDING_SLACK
        and LONGITUDE_MIN - _ROUNDING_SLACK <= longitude <= LONGITUDE_MAX + _ROUNDING_SLACK
    ):
        raise InvalidCoordinateError(
            f"coordinate out of range: ({latitude}, {longitude})",
            latitude=latitude,
            longitude=longitude,
        )
    lat = round_half_away(latitude, COORDINATE_PRECISION)
    lon = round_half_away(longitude, COORDINATE_PRECISION)
    if not (LATITUDE_MIN <= lat <= LATITUDE_MAX and LONGITUDE_MIN <= lon <= LONGITUDE_MAX):
        raise InvalidCoordinateError(
            f"coordinate out of range: ({latitude}, {longitude})",
            latitude=latitude,
            longitude=longitude,
        )
    return Coordinate(latitude=lat, longitude=lon)
