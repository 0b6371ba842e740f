from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
import pytest

from mapweather._transport import HttpTransport
from mapweather.client import WeatherClient
from mapweather.config import MapWeatherConfig
from mapweather.exceptions import MapWeatherError, WeatherClientError
from mapweather.models import NOT_AVAILABLE, WeatherSummary, normalize_coordinate

URL = "https://api.open-meteo.com/v1/forecast"


class _FakeResponse:
    def __init__(self, status: int, text: str | BaseException) -> None:
        self.status = status
        self._text = text

    async def text(self) -> str:
        if isinstance(self._text, BaseException):
            raise self._text
        return self._text

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeSession:
    """Stands in for ``aiohttp.ClientSession`` (only ``get``/``close`` are used)."""

    def __init__(self, response: _FakeResponse | None = None, error: BaseException | None = None) -> None:
        self._response = response
        self._error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append((url, kwargs))
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response

    async def close(self) -> None:
        self.closed = True


def _transport(session: _FakeSession, **config: Any) -> HttpTransport:
    return HttpTransport(MapWeatherConfig(**config), session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_get_json_sends_headers_and_params() -> None:
    session = _FakeSession(_FakeResponse(200, '{"daily": {}}'))

    body = await _transport(session).get_json(URL, {"latitude": "1.00"})

    assert body == {"daily": {}}
    url, kwargs = session.calls[0]
    assert url == URL
    assert kwargs["params"] == {"latitude": "1.00"}
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert "timeout" not in kwargs


@pytest.mark.asyncio
async def test_configured_timeout_is_passed_to_session() -> None:
    session = _FakeSession(_FakeResponse(200, "{}"))

    await _transport(session, request_timeout=2.5).get_json(URL, {})

    _, kwargs = session.calls[0]
    assert kwargs["timeout"] == aiohttp.ClientTimeout(total=2.5)


@pytest.mark.asyncio
async def test_non_2xx_raises_client_error() -> None:
    session = _FakeSession(_FakeResponse(503, "maintenance"))

    with pytest.raises(WeatherClientError) as exc_info:
        await _transport(session).get_json(URL, {})

    assert exc_info.value.status_code == 503
    assert exc_info.value.endpoint == "/v1/forecast"


@pytest.mark.asyncio
async def test_connection_refused_raises_client_error() -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("Connection refused"))

    with pytest.raises(WeatherClientError, match="Connection refused"):
        await _transport(session).get_json(URL, {})


@pytest.mark.asyncio
async def test_timeout_raises_client_error() -> None:
    session = _FakeSession(error=asyncio.TimeoutError())

    with pytest.raises(WeatherClientError, match="timed out"):
        await _transport(session, request_timeout=1.0).get_json(URL, {})


@pytest.mark.asyncio
async def test_session_default_timeout_message_omits_limit() -> None:
    session = _FakeSession(error=asyncio.TimeoutError())

    with pytest.raises(WeatherClientError) as exc_info:
        await _transport(session).get_json(URL, {})

    assert str(exc_info.value) == "Request to /v1/forecast timed out"


@pytest.mark.asyncio
async def test_undecodable_body_raises_client_error() -> None:
    body = b'{"x": "\xff\xfe"}'
    session = _FakeSession(_FakeResponse(200, UnicodeDecodeError("utf-8", body, 7, 8, "invalid start byte")))

    with pytest.raises(WeatherClientError, match="Invalid JSON") as exc_info:
        await _transport(session).get_json(URL, {})

    assert exc_info.value.endpoint == "/v1/forecast"


@pytest.mark.asyncio
async def test_malformed_json_raises_client_error() -> None:
    session = _FakeSession(_FakeResponse(200, "<html>oops</html>"))

    with pytest.raises(WeatherClientError, match="Invalid JSON"):
        await _transport(session).get_json(URL, {})


@pytest.mark.asyncio
async def test_non_object_json_raises_client_error() -> None:
    session = _FakeSession(_FakeResponse(200, "[1, 2]"))

    with pytest.raises(WeatherClientError, match="JSON object"):
        await _transport(session).get_json(URL, {})


@pytest.mark.asyncio
async def test_trace_logs_truncated_body(caplog: pytest.LogCaptureFixture) -> None:
    session = _FakeSession(_FakeResponse(200, '{"daily": {"precipitation_probability_max": [1,2,3,4,5,6,7,8,9,10]}}'))

    with caplog.at_level(logging.DEBUG, logger="mapweather._transport"):
        await _transport(session, trace_enabled=True).get_json(URL, {})

    assert "<+2 items>" in caplog.text


# ------------------------------------------------------------------
# WeatherClient lifecycle
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = WeatherClient()

    with pytest.raises(MapWeatherError):
        await client.fetch(normalize_coordinate(0.0, 0.0))


@pytest.mark.asyncio
async def test_client_fetch_over_external_session() -> None:
    session = _FakeSession(
        _FakeResponse(
            200,
            '{"current_weather": {"temperature": 21.9, "windspeed": 13.7},'
            ' "daily": {"precipitation_probability_max": [10, 45, 30]}}',
        )
    )

    async with WeatherClient(session=session) as client:  # type: ignore[arg-type]
        summary = await client.fetch(normalize_coordinate(45.678, -73.123))

    assert summary == WeatherSummary(temperature_celsius=21, wind_speed_kmh=13, precipitation_probability_percent=45)
    assert session.calls[0][1]["params"]["latitude"] == "45.68"
    # Caller-owned sessions are left open.
    assert session.closed is False


@pytest.mark.asyncio
async def test_client_missing_daily_is_not_available() -> None:
    session = _FakeSession(_FakeResponse(200, '{"current_weather": {"temperature": 1, "windspeed": 2}}'))

    async with WeatherClient(session=session) as client:  # type: ignore[arg-type]
        assert await client.fetch(normalize_coordinate(0.0, 0.0)) is NOT_AVAILABLE


@pytest.mark.asyncio
async def test_client_undecodable_body_is_client_error() -> None:
    error = UnicodeDecodeError("utf-8", b"\xff\xfe", 0, 1, "invalid start byte")
    session = _FakeSession(_FakeResponse(200, error))

    async with WeatherClient(session=session) as client:  # type: ignore[arg-type]
        with pytest.raises(WeatherClientError):
            await client.fetch(normalize_coordinate(0.0, 0.0))


@pytest.mark.asyncio
async def test_client_closes_owned_session(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[_FakeSession] = []

    def fake_client_session(*_args: Any, **_kwargs: Any) -> _FakeSession:
        session = _FakeSession(_FakeResponse(200, "{}"))
        created.append(session)
        return session

    monkeypatch.setattr("mapweather.client.aiohttp.ClientSession", fake_client_session)

    async with WeatherClient():
        pass

    assert len(created) == 1
    assert created[0].closed is True
