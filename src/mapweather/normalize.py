"""Normalization helpers.

Centralizes coordinate rounding and defensive numeric parsing of
forecast payload values.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from mapweather._constants import COORDINATE_PRECISION


def round_half_away(value: float, places: int = COORDINATE_PRECISION) -> float:
    """Round *value* to *places* decimals, ties away from zero.

    Works on the shortest decimal repr of the float, so ``45.675`` rounds
    to ``45.68`` even though its binary value is slightly below the tie.
    """
    quantum = Decimal(1).scaleb(-places)
    # decimal's ROUND_HALF_UP rounds ties away from zero for both signs.
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool) or value == "":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_floor(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return math.floor(parsed)
