"""Selection states.

A selection is exactly one of ``Idle``, ``Pending``, ``Resolved`` or
``Failed``. Every non-idle state carries the coordinate and the sequence
number of the ``select`` call that produced it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Final, Literal

from pydantic import BaseModel, ConfigDict, Field

from mapweather.models.coordinate import Coordinate
from mapweather.models.weather import WeatherSummary


class SelectionKind(StrEnum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


class FailureReason(StrEnum):
    NOT_AVAILABLE = "not_available"
    CLIENT_ERROR = "client_error"


class _SelectionBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Idle(_SelectionBase):
    """Nothing selected."""

    kind: Literal[SelectionKind.IDLE] = SelectionKind.IDLE


class Pending(_SelectionBase):
    """A request for ``coordinate`` is in flight."""

    kind: Literal[SelectionKind.PENDING] = SelectionKind.PENDING
    coordinate: Coordinate
    sequence: int = Field(ge=1)


class Resolved(_SelectionBase):
    kind: Literal[SelectionKind.RESOLVED] = SelectionKind.RESOLVED
    coordinate: Coordinate
    sequence: int = Field(ge=1)
    summary: WeatherSummary


class Failed(_SelectionBase):
    """No weather for ``coordinate``.

    ``reason`` is kept for logging and tests; the presentation layer
    treats both reasons the same way.
    """

    kind: Literal[SelectionKind.FAILED] = SelectionKind.FAILED
    coordinate: Coordinate
    sequence: int = Field(ge=1)
    reason: FailureReason


Selection = Annotated[Idle | Pending | Resolved | Failed, Field(discriminator="kind")]

IDLE: Final = Idle()
