"""Relevance policy for finished requests.

Kept free of I/O so the compare-and-apply rule can be tested on its own.
"""

from __future__ import annotations

from mapweather.models.weather import NotAvailable, WeatherSummary
from mapweather.state.selection import Failed, FailureReason, Pending, Resolved, Selection


def is_current(state: Selection, request: Pending) -> bool:
    """Return ``True`` when *request* is still the authoritative selection.

    A request is current only while the store is still ``Pending`` on the
    same coordinate and the same ``select`` call. Anything else (a newer
    selection, a dismiss, an already applied result) makes it stale.
    """
    if not isinstance(state, Pending):
        return False
    return state.coordinate == request.coordinate and state.sequence == request.sequence


def settle(request: Pending, outcome: WeatherSummary | NotAvailable | None) -> Resolved | Failed:
    """State that *request* moves to for a given fetch outcome.

    ``None`` stands for a client error.
    """
    if isinstance(outcome, WeatherSummary):
        return Resolved(coordinate=request.coordinate, sequence=request.sequence, summary=outcome)
    reason = FailureReason.CLIENT_ERROR if outcome is None else FailureReason.NOT_AVAILABLE
    return Failed(coordinate=request.coordinate, sequence=request.sequence, reason=reason)
