"""JSON schemas describing the request bodies sent to the API."""

from __future__ import annotations

import json
from importlib import resources

BOOKING_REQUEST_SCHEMA = "booking_request.schema.json"
PRICE_REQUEST_SCHEMA = "price_request.schema.json"
PRICE_CONFIRM_REQUEST_SCHEMA = "price_confirm_request.schema.json"


def load_schema(name: str) -> dict:
    path = resources.files("pysnapcar.schemas") / name
    return json.loads(path.read_text(encoding="utf-8"))
