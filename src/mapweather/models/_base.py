"""Base model for Open-Meteo forecast responses.

Every wire model inherits from :class:`ForecastBaseModel` which provides:

* ``extra="ignore"`` so fields the service adds later do not break parsing.
* A ``model_validator(mode="before")`` that drops ``None`` and NaN values
  so the field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ForecastBaseModel(BaseModel):
    """Base for forecast response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop null/NaN values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        # Keep an explicitly supplied raw (kwargs construction).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
