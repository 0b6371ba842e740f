"""Presentation adapter between a map widget and the selection store.

The adapter owns no state machine of its own: it forwards taps and the
dismiss action to :class:`~mapweather.state.SelectionStore` and renders the
store's current selection into a flat :class:`MapView`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from mapweather._constants import DISMISS_LABEL, TEMPERATURE_UNIT, WIND_SPEED_UNIT
from mapweather.exceptions import InvalidCoordinateError
from mapweather.models.coordinate import Coordinate
from mapweather.models.weather import WeatherSummary
from mapweather.state.selection import Failed, Pending, Resolved, Selection
from mapweather.state.store import SelectionStore

_logger = logging.getLogger(__name__)


class MapView(BaseModel):
    """Everything a map screen needs to draw one frame.

    Parameters
    ----------
    marker : Coordinate or None
        Where to draw the pin.
    modal_visible : bool
        Whether the weather modal is shown.
    loading : bool
        Show a spinner inside the modal instead of the summary.
    summary : WeatherSummary or None
        Values to display when the modal is not loading.
    dismiss_label : str or None
        Caption of the dismiss button, ``None`` while there is nothing to dismiss.
    """

    model_config = ConfigDict(frozen=True)

    marker: Coordinate | None = None
    modal_visible: bool = False
    loading: bool = False
    summary: WeatherSummary | None = None
    dismiss_label: str | None = None


def render(selection: Selection) -> MapView:
    """Map a selection onto what the screen shows.

    A failed selection keeps its marker but shows no modal, the same as
    a point with no weather data.
    """
    if isinstance(selection, Pending):
        return MapView(marker=selection.coordinate, modal_visible=True, loading=True)
    if isinstance(selection, Resolved):
        return MapView(
            marker=selection.coordinate,
            modal_visible=True,
            summary=selection.summary,
            dismiss_label=DISMISS_LABEL,
        )
    if isinstance(selection, Failed):
        return MapView(marker=selection.coordinate)
    return MapView()


def format_summary(summary: WeatherSummary) -> list[str]:
    """Display lines for the weather modal."""
    return [
        f"{summary.temperature_celsius} {TEMPERATURE_UNIT}",
        f"{summary.wind_speed_kmh} {WIND_SPEED_UNIT}",
        f"{summary.precipitation_probability_percent}%",
    ]


class PresentationAdapter:
    """Bridge map widget events to a :class:`SelectionStore`.

    ``on_render`` (optional) is called with every new :class:`MapView`.
    """

    def __init__(
        self,
        store: SelectionStore,
        *,
        on_render: Callable[[MapView], None] | None = None,
    ) -> None:
        self._store = store
        self._on_render = on_render
        self._view = render(store.state)
        self._unsubscribe: Callable[[], None] | None = store.subscribe(self._handle_state)

    @property
    def view(self) -> MapView:
        return self._view

    def on_map_press(self, latitude: float, longitude: float) -> Coordinate | None:
        """Forward a map press. Invalid points are logged and ignored."""
        try:
            request = self._store.select(latitude, longitude)
        except InvalidCoordinateError as exc:
            _logger.warning("Ignoring map press: %s", exc)
            return None
        return request.coordinate

    def on_dismiss(self) -> None:
        self._store.dismiss()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _handle_state(self, selection: Selection) -> None:
        self._view = render(selection)
        if self._on_render is not None:
            self._on_render(self._view)
