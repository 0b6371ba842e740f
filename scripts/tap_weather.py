#!/usr/bin/env python3
"""Drive the tap -> weather workflow from a terminal.

Each positional argument is one map press given as ``LAT,LON``. Presses
are fed to a :class:`~mapweather.presentation.PresentationAdapter` and
every rendered frame is printed, so the loading/result/failure states can
be watched against the live Open-Meteo API.

Usage
-----
::

    python scripts/tap_weather.py 45.678,-73.123
    python scripts/tap_weather.py --rapid 45.678,-73.123 48.857,2.352

Options::

    --rapid              Send all presses back to back without waiting,
                         so only the last one can be displayed
    --timeout SECONDS    Per-request timeout (default: transport default)
    --dismiss            Dismiss the modal after the last result
    --verbose            Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from mapweather import MapView, MapWeatherConfig, PresentationAdapter, SelectionStore, WeatherClient, format_summary


def _parse_press(text: str) -> tuple[float, float]:
    try:
        lat_text, lon_text = text.split(",", 1)
        return float(lat_text), float(lon_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected LAT,LON, got {text!r}") from exc


def print_view(view: MapView) -> None:
    marker = str(view.marker) if view.marker is not None else "-"
    if not view.modal_visible:
        print(f"[marker {marker}] (no modal)")
    elif view.loading:
        print(f"[marker {marker}] loading…")
    elif view.summary is not None:
        lines = " | ".join(format_summary(view.summary))
        print(f"[marker {marker}] {lines}  [{view.dismiss_label}]")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Show current weather for map presses.")
    parser.add_argument("presses", nargs="+", type=_parse_press, metavar="LAT,LON", help="Map press location")
    parser.add_argument("--rapid", action="store_true", help="Send presses without waiting for results")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    parser.add_argument("--dismiss", action="store_true", help="Dismiss after the last result")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    overrides = {"request_timeout": args.timeout} if args.timeout is not None else {}
    config = MapWeatherConfig.from_env(**overrides)

    async with WeatherClient(config) as client, SelectionStore(client) as store:
        adapter = PresentationAdapter(store, on_render=print_view)
        for latitude, longitude in args.presses:
            adapter.on_map_press(latitude, longitude)
            if not args.rapid:
                await store.wait_settled()
        await store.wait_settled()

        if args.dismiss:
            adapter.on_dismiss()
        adapter.close()


if __name__ == "__main__":
    asyncio.run(main())
