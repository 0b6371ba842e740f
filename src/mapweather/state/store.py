"""Selection store: the tap -> fetch -> display state machine.

This is the only component allowed to change the current selection.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from mapweather.exceptions import WeatherClientError
from mapweather.models.coordinate import Coordinate, normalize_coordinate
from mapweather.models.weather import NotAvailable, WeatherSummary
from mapweather.state.policy import is_current, settle
from mapweather.state.selection import IDLE, Failed, Idle, Pending, Resolved, Selection

_logger = logging.getLogger(__name__)

SelectionListener = Callable[[Selection], None]


class WeatherFetcher(Protocol):
    """Anything that can fetch weather for a coordinate (``WeatherClient``)."""

    async def fetch(self, coordinate: Coordinate) -> WeatherSummary | NotAvailable:
        ...


class SelectionStore:
    """Single source of truth for the selected point and its weather.

    Every ``select`` starts exactly one fetch. In-flight fetches are never
    cancelled when the user taps again; instead each outcome is applied
    only if its request is still the current ``Pending`` selection, so a
    slow response for an old tap can never overwrite a newer one.

    All transitions run on the event loop thread, and the relevance check
    and the state write happen without a suspension point in between.

    Usage::

        async with WeatherClient() as client, SelectionStore(client) as store:
            store.select(45.678, -73.123)
            await store.wait_settled()
            print(store.state)
    """

    def __init__(self, client: WeatherFetcher) -> None:
        self._client = client
        self._state: Selection = IDLE
        self._sequence = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[SelectionListener] = []

    async def __aenter__(self) -> SelectionStore:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> Selection:
        return self._state

    @property
    def in_flight(self) -> int:
        """Number of fetches that have not finished yet (stale ones included)."""
        return len(self._tasks)

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Call *listener* with the new state after every transition.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Inbound operations
    # ------------------------------------------------------------------

    def select(self, latitude: float, longitude: float) -> Pending:
        """Select a raw map point and start fetching its weather.

        Must be called from within the running event loop.

        Raises
        ------
        InvalidCoordinateError
            When the point is not a valid coordinate. The state is left
            unchanged and no request is made.
        """
        return self.select_coordinate(normalize_coordinate(latitude, longitude))

    def select_coordinate(self, coordinate: Coordinate) -> Pending:
        loop = asyncio.get_running_loop()
        self._sequence += 1
        request = Pending(coordinate=coordinate, sequence=self._sequence)
        self._set_state(request)

        task = loop.create_task(self._run_fetch(request), name=f"mapweather-fetch-{request.sequence}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return request

    def dismiss(self) -> None:
        """Return to ``Idle``, dropping the coordinate and any summary.

        A fetch still in flight for the dismissed selection becomes stale.
        """
        if isinstance(self._state, Idle):
            return
        self._set_state(IDLE)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def wait_settled(self) -> None:
        """Wait until every fetch started so far has finished."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel in-flight fetches. The current state is left as is."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run_fetch(self, request: Pending) -> None:
        outcome: WeatherSummary | NotAvailable | None
        try:
            outcome = await self._client.fetch(request.coordinate)
        except WeatherClientError as exc:
            _logger.warning("Weather fetch for %s failed: %s", request.coordinate, exc)
            outcome = None
        except Exception:
            _logger.warning("Weather fetch for %s raised unexpectedly", request.coordinate, exc_info=True)
            outcome = None

        self._complete(request, outcome)

    def _complete(self, request: Pending, outcome: WeatherSummary | NotAvailable | None) -> bool:
        if not is_current(self._state, request):
            _logger.debug(
                "Discarding stale result for %s (request %d, current %s)",
                request.coordinate,
                request.sequence,
                self._state.kind,
            )
            return False

        settled: Resolved | Failed = settle(request, outcome)
        self._set_state(settled)
        return True

    def _set_state(self, state: Selection) -> None:
        previous = self._state
        self._state = state
        _logger.debug("Selection %s -> %s", previous.kind, state.kind)
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.debug("Selection listener failed", exc_info=True)
