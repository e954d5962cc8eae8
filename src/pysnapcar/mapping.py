"""Payload mapping from API JSON to models.

Each entity has a field table mapping a raw payload key to the attribute it
fills and an optional transform. ``PayloadMapper.populate`` only touches
attributes whose key is present in the payload, so a partial payload updates
an existing instance without clearing the rest of it.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any, TypeVar

from .config import Config
from .exceptions import APIError
from .models import (
    Address,
    BillingDocument,
    BillingDocumentType,
    Booking,
    BookingCancellationReason,
    BookingHistory,
    BookingPrice,
    BookingStatus,
    CancellationFee,
    Driver,
    ETAResult,
    ETAResultStatus,
    GeoPoint,
    Location,
    MeetingPoint,
    PaymentMethod,
    Rider,
    RiderStatus,
    ServiceClass,
    SpecialArea,
    SpecialAreaType,
    TimestampedPoint,
    Vehicle,
)
from .util import from_epoch, select_locale_text

T = TypeVar("T")
Transform = Callable[["PayloadMapper", Any], Any]
FieldTable = Mapping[str, tuple[str, Transform | None]]


def _localized(mapper: PayloadMapper, value: Any) -> Any:
    return mapper.localized(value)


def _timestamp(_mapper: PayloadMapper, value: Any) -> Any:
    return from_epoch(value)


def _flag(_mapper: PayloadMapper, value: Any) -> bool | None:
    if value is None:
        return None
    return bool(value)


def _enum(enum_cls: type[StrEnum]) -> Transform:
    def transform(_mapper: PayloadMapper, value: Any) -> Any:
        if value is None:
            return None
        try:
            return enum_cls(value)
        except ValueError:
            # Keep values this client does not know yet.
            return value

    return transform


def _nested(entity_cls: Callable[[], Any], fields: FieldTable) -> Transform:
    def transform(mapper: PayloadMapper, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return None
        return mapper.populate(entity_cls(), value, fields)

    return transform


def _nested_list(entity_cls: Callable[[], Any], fields: FieldTable) -> Transform:
    def transform(mapper: PayloadMapper, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [
            mapper.populate(entity_cls(), item, fields)
            for item in value
            if isinstance(item, Mapping)
        ]

    return transform


ADDRESS_FIELDS: FieldTable = {
    "name": ("name", None),
    "city": ("city", None),
    "postal_code": ("postal_code", None),
    "country": ("country", None),
}

LOCATION_FIELDS: FieldTable = {
    "lat": ("lat", None),
    "lng": ("lng", None),
    "address": ("address", _nested(Address, ADDRESS_FIELDS)),
}

GEO_POINT_FIELDS: FieldTable = {
    "lat": ("lat", None),
    "lng": ("lng", None),
}

TIMESTAMPED_POINT_FIELDS: FieldTable = {
    "timestamp": ("date", _timestamp),
    "lat": ("lat", None),
    "lng": ("lng", None),
}

SERVICE_CLASS_FIELDS: FieldTable = {
    "id": ("id", None),
    "name": ("name", _localized),
}

MEETING_POINT_FIELDS: FieldTable = {
    "id": ("id", None),
    "name": ("name", _localized),
    "rdv_point": ("rdv_point", _localized),
}

SPECIAL_AREA_FIELDS: FieldTable = {
    "id": ("id", None),
    "name": ("name", _localized),
    "menu_name": ("menu_name", _localized),
    "selection_required": ("selection_required", _flag),
    "area_type": ("area_type", _enum(SpecialAreaType)),
    "meeting_points": ("meeting_points", _nested_list(MeetingPoint, MEETING_POINT_FIELDS)),
    "meeting_points_nameboard": (
        "meeting_points_nameboard",
        _nested_list(MeetingPoint, MEETING_POINT_FIELDS),
    ),
}

ETA_RESULT_FIELDS: FieldTable = {
    "status": ("status", _enum(ETAResultStatus)),
    "eta": ("eta", None),
    "service_class": ("service_class", _nested(ServiceClass, SERVICE_CLASS_FIELDS)),
}

PAYMENT_METHOD_FIELDS: FieldTable = {
    "id": ("id", None),
    "name": ("name", None),
    "type": ("type", None),
    "number": ("number", None),
    "brand": ("brand", None),
}

RIDER_FIELDS: FieldTable = {
    "id": ("id", None),
    "firstname": ("firstname", None),
    "lastname": ("lastname", None),
    "email": ("email", None),
    "status": ("status", _enum(RiderStatus)),
    "payment_method": ("payment_method", _nested(PaymentMethod, PAYMENT_METHOD_FIELDS)),
}

BOOKING_PRICE_FIELDS: FieldTable = {
    "id": ("id", None),
    "price": ("price", None),
    "currency": ("currency", None),
    "formatted_price": ("formatted_price", None),
    "expiry_date": ("expiry_date", _timestamp),
    "service_class_id": ("service_class_id", None),
}

CANCELLATION_FEE_FIELDS: FieldTable = {
    "charged": ("charged", _flag),
    "amount": ("amount", None),
    "currency": ("currency", None),
    "formatted_amount": ("formatted_amount", None),
}

BILLING_DOCUMENT_FIELDS: FieldTable = {
    "id": ("id", None),
    "url": ("url", None),
    "type": ("type", _enum(BillingDocumentType)),
}

VEHICLE_FIELDS: FieldTable = {
    "model": ("model", _localized),
    "color": ("color", _localized),
    "position": ("position", _nested(GeoPoint, GEO_POINT_FIELDS)),
    "plate_number": ("plate_number", None),
}

DRIVER_FIELDS: FieldTable = {
    "id": ("id", None),
    "name": ("name", None),
    "phone": ("phone", None),
}

BOOKING_FIELDS: FieldTable = {
    "id": ("id", None),
    "rider": ("rider", _nested(Rider, RIDER_FIELDS)),
    "service_class": ("service_class", _nested(ServiceClass, SERVICE_CLASS_FIELDS)),
    "status": ("status", _enum(BookingStatus)),
    "timezone": ("timezone", None),
    "planned_start_date": ("planned_start_date", _timestamp),
    "creation_date": ("creation_date", _timestamp),
    "driver_arrival_date": ("driver_arrival_date", _timestamp),
    "start_date": ("start_date", _timestamp),
    "end_date": ("end_date", _timestamp),
    "cancellation_date": ("cancellation_date", _timestamp),
    "cancellation_reason": ("cancellation_reason", _enum(BookingCancellationReason)),
    "meeting_point": ("meeting_point", _nested(MeetingPoint, MEETING_POINT_FIELDS)),
    "start_location": ("start_location", _nested(Location, LOCATION_FIELDS)),
    "end_location": ("end_location", _nested(Location, LOCATION_FIELDS)),
    "driver_info": ("driver_info", None),
    "nameboard": ("nameboard", _flag),
    "booking_price": ("booking_price", _nested(BookingPrice, BOOKING_PRICE_FIELDS)),
    "billed_amount": ("billed_amount", None),
    "vat_amount": ("vat_amount", None),
    "tip": ("tip", None),
    "route": ("route", _nested_list(TimestampedPoint, TIMESTAMPED_POINT_FIELDS)),
    "documents": ("documents", _nested_list(BillingDocument, BILLING_DOCUMENT_FIELDS)),
    "vehicle": ("vehicle", _nested(Vehicle, VEHICLE_FIELDS)),
    "driver": ("driver", _nested(Driver, DRIVER_FIELDS)),
}

BOOKING_HISTORY_FIELDS: FieldTable = {
    "total": ("total", None),
    "offset": ("offset", None),
    "count": ("count", None),
    "history": ("history", _nested_list(Booking, BOOKING_FIELDS)),
}


class PayloadMapper:
    """Hydrate models from API payloads using the locale of a configuration."""

    def __init__(self, config: Config) -> None:
        self._locale = config.locale
        self._fallback_locale = config.fallback_locale

    def localized(self, value: Any) -> Any:
        return select_locale_text(value, self._locale, self._fallback_locale)

    def populate(self, entity: T, payload: Mapping[str, Any], fields: FieldTable) -> T:
        for key, value in payload.items():
            spec = fields.get(key)
            if spec is None:
                continue
            attribute, transform = spec
            setattr(entity, attribute, transform(self, value) if transform else value)
        return entity

    def service_classes(self, payload: Any) -> list[ServiceClass]:
        return [
            self.populate(ServiceClass(), item, SERVICE_CLASS_FIELDS)
            for item in self._require_list(payload)
        ]

    def eta_results(self, payload: Any) -> list[ETAResult]:
        return [
            self.populate(ETAResult(), item, ETA_RESULT_FIELDS)
            for item in self._require_list(payload)
        ]

    def special_area(self, payload: Any) -> SpecialArea:
        return self.populate(SpecialArea(), self._require_object(payload), SPECIAL_AREA_FIELDS)

    def rider(self, payload: Any) -> Rider:
        return self.populate(Rider(), self._require_object(payload), RIDER_FIELDS)

    def booking(self, payload: Any, into: Booking | None = None) -> Booking:
        target = into if into is not None else Booking()
        return self.populate(target, self._require_object(payload), BOOKING_FIELDS)

    def bookings(self, payload: Any) -> list[Booking]:
        return [self.booking(item) for item in self._require_list(payload)]

    def booking_prices(
        self,
        payload: Any,
        booking: Booking,
        manager: Any = None,
    ) -> list[BookingPrice]:
        prices: list[BookingPrice] = []
        for item in self._require_list(payload):
            price = BookingPrice(booking=booking, _manager=manager)
            prices.append(self.populate(price, item, BOOKING_PRICE_FIELDS))
        return prices

    def cancellation_fee(self, payload: Any) -> CancellationFee:
        return self.populate(
            CancellationFee(),
            self._require_object(payload),
            CANCELLATION_FEE_FIELDS,
        )

    def booking_history(self, payload: Any, history: BookingHistory) -> BookingHistory:
        return self.populate(history, self._require_object(payload), BOOKING_HISTORY_FIELDS)

    def _require_object(self, payload: Any) -> Mapping[str, Any]:
        if not isinstance(payload, Mapping):
            raise APIError(
                "Response did not contain a JSON object.",
                error_code="invalid_response",
            )
        return payload

    def _require_list(self, payload: Any) -> list[Mapping[str, Any]]:
        if not isinstance(payload, list):
            raise APIError(
                "Response did not contain a JSON list.",
                error_code="invalid_response",
            )
        return [item for item in payload if isinstance(item, Mapping)]
