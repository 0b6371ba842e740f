from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from mapweather import (
    Failed,
    FailureReason,
    MapWeatherConfig,
    PresentationAdapter,
    Resolved,
    SelectionStore,
    WeatherClient,
    WeatherClientError,
    WeatherSummary,
)


@dataclass
class FakeForecastBackend:
    """Answers forecast requests per ``latitude,longitude`` with optional delays."""

    responses: dict[str, dict[str, Any] | Exception] = field(default_factory=dict)
    delays: dict[str, float] = field(default_factory=dict)
    calls: list[dict[str, str]] = field(default_factory=list)

    async def get_json(self, url: str, params: Mapping[str, str]) -> dict[str, Any]:
        assert url == "https://api.open-meteo.com/v1/forecast"
        self.calls.append(dict(params))
        key = f"{params['latitude']},{params['longitude']}"
        await asyncio.sleep(self.delays.get(key, 0))
        response = self.responses[key]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def config() -> MapWeatherConfig:
    return MapWeatherConfig()


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeForecastBackend:
    fake_backend = FakeForecastBackend()

    async def fake_get_json(_self: Any, url: str, params: Mapping[str, str]) -> dict[str, Any]:
        return await fake_backend.get_json(url, params)

    monkeypatch.setattr("mapweather._transport.HttpTransport.get_json", fake_get_json)
    return fake_backend


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_rapid_taps_show_only_latest_point(config: MapWeatherConfig, backend: FakeForecastBackend) -> None:
    backend.responses["45.68,-73.12"] = {
        "current_weather": {"temperature": 21.9, "windspeed": 13.7},
        "daily": {"precipitation_probability_max": [10, 45, 30]},
    }
    backend.responses["48.86,2.35"] = {
        "current_weather": {"temperature": 12.2, "windspeed": 8.1},
        "daily": {"precipitation_probability_max": [70]},
    }
    # The first tap is slow so it completes after the second one.
    backend.delays["45.68,-73.12"] = 0.05

    async with WeatherClient(config) as client, SelectionStore(client) as store:
        adapter = PresentationAdapter(store)
        adapter.on_map_press(45.678, -73.123)
        adapter.on_map_press(48.857, 2.352)
        await store.wait_settled()

        assert len(backend.calls) == 2
        assert isinstance(store.state, Resolved)
        assert store.state.coordinate.latitude == 48.86
        assert adapter.view.summary == WeatherSummary(
            temperature_celsius=12,
            wind_speed_kmh=8,
            precipitation_probability_percent=70,
        )

        adapter.on_dismiss()
        assert adapter.view.marker is None


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_connection_refused_ends_in_failed(config: MapWeatherConfig, backend: FakeForecastBackend) -> None:
    backend.responses["1.00,2.00"] = WeatherClientError("Connection refused", endpoint="/v1/forecast")

    async with WeatherClient(config) as client, SelectionStore(client) as store:
        adapter = PresentationAdapter(store)
        adapter.on_map_press(1.0, 2.0)
        await store.wait_settled()

        assert isinstance(store.state, Failed)
        assert store.state.reason == FailureReason.CLIENT_ERROR
        assert adapter.view.modal_visible is False


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_missing_daily_ends_in_failed(config: MapWeatherConfig, backend: FakeForecastBackend) -> None:
    backend.responses["1.00,2.00"] = {"current_weather": {"temperature": 3.0, "windspeed": 1.0}}

    async with WeatherClient(config) as client, SelectionStore(client) as store:
        store.select(1.0, 2.0)
        await store.wait_settled()

        assert isinstance(store.state, Failed)
        assert store.state.reason == FailureReason.NOT_AVAILABLE
