"""Shared utilities for validation and normalization."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from .exceptions import InvalidParametersError
from .models import Location


def mask_token(token: str | None) -> str:
    if not isinstance(token, str) or not token:
        return "***"
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}{'*' * (len(token) - 8)}{token[-4:]}"


def from_epoch(value: Any) -> datetime | None:
    """Convert epoch seconds (int, float or numeric string) to an aware UTC datetime."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        return datetime.fromtimestamp(int(float(value)), UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def to_epoch(value: datetime) -> int:
    if not isinstance(value, datetime):
        raise InvalidParametersError(
            "planned_start_date must be a datetime.",
            error_code="planned_start_date_invalid",
        )
    if value.tzinfo is None:
        raise InvalidParametersError(
            "planned_start_date must include timezone information.",
            error_code="planned_start_date_naive",
        )
    return int(value.timestamp())


def select_locale_text(value: Any, locale: str, fallback_locale: str) -> Any:
    """Pick the text for ``locale`` from a ``{locale: text}`` payload."""
    if not isinstance(value, Mapping):
        return value
    return value.get(locale) or value.get(fallback_locale)


def validate_coordinates(lat: Any, lng: Any) -> tuple[float, float]:
    for name, value in (("lat", lat), ("lng", lng)):
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise InvalidParametersError(
                f"{name} must be a number.",
                error_code="invalid_coordinates",
            )
    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        raise InvalidParametersError(
            "Coordinates are out of range.",
            error_code="invalid_coordinates",
        )
    return float(lat), float(lng)


def require_location(location: Location | None, name: str) -> Location:
    if location is None or not location.is_complete:
        raise InvalidParametersError(
            f"You must provide a {name.replace('_', ' ')} including at least: "
            "lat, lng, name and city.",
            error_code=f"{name}_missing",
        )
    return location


def location_parameters(location: Location) -> dict[str, Any]:
    address = location.address
    return {
        "lat": location.lat,
        "lng": location.lng,
        "address": {
            "name": address.name if address else None,
            "city": address.city if address else None,
            "postal_code": address.postal_code if address else None,
            "country": address.country if address else None,
        },
    }
