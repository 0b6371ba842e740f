"""Client configuration for mapweather."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from mapweather._constants import (
    BASE_URL,
    DAILY_PRECIPITATION_FIELD,
    DEFAULT_TIMEZONE,
    FORECAST_PATH,
    USER_AGENT,
)
from mapweather.exceptions import MapWeatherConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_timeout(value: str) -> float | None:
    stripped = value.strip().lower()
    if stripped in {"", "none", "off", "0"}:
        return None
    try:
        timeout = float(stripped)
    except ValueError as exc:
        raise MapWeatherConfigError(f"MAPWEATHER_REQUEST_TIMEOUT must be a number, got {value!r}") from exc
    if timeout < 0:
        raise MapWeatherConfigError(f"MAPWEATHER_REQUEST_TIMEOUT must be positive, got {value!r}")
    return timeout


@dataclasses.dataclass(frozen=True)
class MapWeatherConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Forecast service base URL. Defaults to the public Open-Meteo host.
    forecast_path : str
        Path of the forecast endpoint, appended to ``base_url``.
    timezone : str
        Time zone the service buckets daily values in.
    daily_fields : tuple of str
        Daily aggregates requested alongside the current conditions.
    request_timeout : float or None
        Total timeout in seconds for one forecast request. ``None`` keeps
        the transport default, so a hung request leaves the selection
        pending until the connection gives up.
    user_agent : str
        ``User-Agent`` header sent with every request.
    trace_enabled : bool
        Log truncated request/response payloads at DEBUG level.
    """

    base_url: str = BASE_URL
    forecast_path: str = FORECAST_PATH
    timezone: str = DEFAULT_TIMEZONE
    daily_fields: tuple[str, ...] = (DAILY_PRECIPITATION_FIELD,)
    request_timeout: float | None = None
    user_agent: str = USER_AGENT
    trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise MapWeatherConfigError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise MapWeatherConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.forecast_path}"

    @classmethod
    def from_env(cls, **overrides: Any) -> MapWeatherConfig:
        """Create configuration from environment variables.

        Reads ``MAPWEATHER_BASE_URL``, ``MAPWEATHER_TIMEZONE``, ``MAPWEATHER_USER_AGENT``,
        ``MAPWEATHER_REQUEST_TIMEOUT`` and ``MAPWEATHER_TRACE_ENABLED``.
        Explicit keyword arguments override environment values.

        Raises
        ------
        MapWeatherConfigError
            When a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "MAPWEATHER_BASE_URL": "base_url",
            "MAPWEATHER_TIMEZONE": "timezone",
            "MAPWEATHER_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("MAPWEATHER_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_timeout(timeout_env)

        if "trace_enabled" not in overrides:
            config_kwargs["trace_enabled"] = _env_bool(env.get("MAPWEATHER_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
