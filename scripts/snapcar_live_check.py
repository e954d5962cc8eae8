"""Manual live check against the SnapCar public API.

Run from the repository root with:
  PYTHONPATH=src SNAPCAR_TOKEN=... python scripts/snapcar_live_check.py

Optional environment variables:
  SNAPCAR_BASE_DOMAIN
  SNAPCAR_LAT
  SNAPCAR_LNG

The script only reads data and never prints the full token.
"""

from __future__ import annotations

import asyncio
import os
import sys

from pysnapcar import Client
from pysnapcar.exceptions import NotFoundError
from pysnapcar.models import Booking
from pysnapcar.util import mask_token

DEFAULT_LAT = 48.855272
DEFAULT_LNG = 2.345865


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        print(f"Missing required environment variable: {name}", file=sys.stderr)
        raise SystemExit(2)
    return value


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        print(f"Invalid number in {name}: {value}", file=sys.stderr)
        raise SystemExit(2) from None


def _format_booking(booking: Booking) -> str:
    service_class = booking.service_class.name if booking.service_class else "-"
    return f"{booking.id} | {booking.status} | {service_class} | {booking.creation_date}"


async def main() -> int:
    token = _require_env("SNAPCAR_TOKEN")
    base_domain = os.getenv("SNAPCAR_BASE_DOMAIN")
    lat = _float_env("SNAPCAR_LAT", DEFAULT_LAT)
    lng = _float_env("SNAPCAR_LNG", DEFAULT_LNG)

    try:
        async with Client(token=token, base_domain=base_domain) as client:
            rider = await client.user()
            etas = await client.eta(lat, lng)
            active = await client.active_bookings()
            history = await client.bookings_history()
            try:
                area = await client.meeting_points(lat, lng)
            except NotFoundError:
                area = None
    except Exception as exc:
        print(f"Error: {exc.__class__.__name__}: {exc}", file=sys.stderr)
        return 1

    print(f"Token: {mask_token(token)}")
    print(f"Rider: {rider.id} ({rider.status})")
    print(f"ETA at {lat},{lng}: {len(etas)}")
    for result in etas:
        name = result.service_class.name if result.service_class else "-"
        print(f"- {name} | {result.status} | {result.eta}")
    print(f"Special area: {area.name if area else '-'}")
    print(f"Active bookings: {len(active)}")
    for booking in active:
        print(f"- {_format_booking(booking)}")
    print(f"History: {history.count} of {history.total}")
    for booking in history.history:
        print(f"- {_format_booking(booking)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
