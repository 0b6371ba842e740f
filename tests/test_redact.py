from __future__ import annotations

from mapweather._redact import truncate_for_log


def test_truncate_for_log_shortens_long_arrays() -> None:
    payload = {"daily": {"precipitation_probability_max": list(range(20))}}

    truncated = truncate_for_log(payload, max_items=3)
    assert truncated["daily"]["precipitation_probability_max"] == [0, 1, 2, "<+17 items>"]


def test_truncate_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    truncated = truncate_for_log({"value": long_value}, max_string=10)
    assert truncated["value"].startswith("x" * 10)
    assert "<truncated>" in truncated["value"]


def test_truncate_for_log_keeps_scalars() -> None:
    assert truncate_for_log({"temperature": 21.9, "ok": True, "none": None}) == {
        "temperature": 21.9,
        "ok": True,
        "none": None,
    }
