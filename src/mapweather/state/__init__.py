"""Selection state layer.

This package is the single source of truth for what point is selected and
what is known about its weather. Only the store applies fetch outcomes.
"""

from mapweather.state.selection import (
    IDLE,
    Failed,
    FailureReason,
    Idle,
    Pending,
    Resolved,
    Selection,
    SelectionKind,
)
from mapweather.state.store import SelectionListener, SelectionStore, WeatherFetcher

__all__ = [
    "IDLE",
    "Failed",
    "FailureReason",
    "Idle",
    "Pending",
    "Resolved",
    "Selection",
    "SelectionKind",
    "SelectionListener",
    "SelectionStore",
    "WeatherFetcher",
]
