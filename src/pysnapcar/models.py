"""Public data models."""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from .exceptions import InvalidParametersError


class BookingStatus(StrEnum):
    PENDING = "pending"
    GOING_TO_GET = "going_to_get"
    DRIVER_WAITING = "driver_waiting"
    ON_BOARD = "on_board"
    COMPLETE = "complete"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.CANCELLED, BookingStatus.COMPLETE)


class BookingCancellationReason(StrEnum):
    RIDER_CANCELLATION = "rider_cancellation"
    RIDER_CANCELLATION_CHARGED = "rider_cancellation_charged"
    SYSTEM_CANCELLATION = "system_cancellation"
    SYSTEM_CANCELLATION_CHARGED = "system_cancellation_charged"
    NO_DRIVER = "no_driver"


class ETAResultStatus(StrEnum):
    OK = "ok"
    UNAVAILABLE = "unavailable"


class RiderStatus(StrEnum):
    BOOKING_ALLOWED = "booking_allowed"
    BOOKING_NOT_ALLOWED = "booking_not_allowed"
    SUSPENDED = "suspended"


class SpecialAreaType(StrEnum):
    STATION = "station"
    AIRPORT = "airport"
    NORMAL = "normal"


class BillingDocumentType(StrEnum):
    BILL = "bill"
    CREDIT_NOTE = "credit_note"


@dataclass(slots=True)
class Address:
    name: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass(slots=True)
class Location:
    lat: float | None = None
    lng: float | None = None
    address: Address | None = None

    @property
    def is_complete(self) -> bool:
        """Whether the location carries what a booking request needs."""
        return (
            self.lat is not None
            and self.lng is not None
            and self.address is not None
            and self.address.name is not None
            and self.address.city is not None
        )


@dataclass(slots=True)
class GeoPoint:
    lat: float | None = None
    lng: float | None = None


@dataclass(slots=True)
class TimestampedPoint:
    date: datetime | None = None
    lat: float | None = None
    lng: float | None = None


@dataclass(slots=True)
class ServiceClass:
    id: str | None = None
    name: str | None = None


@dataclass(slots=True)
class MeetingPoint:
    id: str | None = None
    name: str | None = None
    rdv_point: str | None = None


@dataclass(slots=True)
class SpecialArea:
    id: str | None = None
    name: str | None = None
    menu_name: str | None = None
    selection_required: bool | None = None
    area_type: SpecialAreaType | str | None = None
    meeting_points: list[MeetingPoint] = field(default_factory=list)
    meeting_points_nameboard: list[MeetingPoint] = field(default_factory=list)


@dataclass(slots=True)
class ETAResult:
    status: ETAResultStatus | str | None = None
    eta: int | None = None
    service_class: ServiceClass | None = None


@dataclass(slots=True)
class PaymentMethod:
    id: str | None = None
    name: str | None = None
    type: str | None = None
    number: str | None = None
    brand: str | None = None


@dataclass(slots=True)
class Rider:
    id: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    email: str | None = None
    status: RiderStatus | str | None = None
    payment_method: PaymentMethod | None = None


@dataclass(slots=True)
class CancellationFee:
    charged: bool | None = None
    amount: float | None = None
    currency: str | None = None
    formatted_amount: str | None = None


@dataclass(slots=True)
class BillingDocument:
    id: str | None = None
    url: str | None = None
    type: BillingDocumentType | str | None = None


@dataclass(slots=True)
class Vehicle:
    model: str | None = None
    color: str | None = None
    position: GeoPoint | None = None
    plate_number: str | None = None


@dataclass(slots=True)
class Driver:
    id: str | None = None
    name: str | None = None
    phone: str | None = None


@dataclass(slots=True)
class BookingPrice:
    """A time-limited flat price quote for one service class.

    ``booking`` points back at the intent the quote was requested for; the
    driver info and meeting point sent on confirmation are read from it.
    """

    id: str | None = None
    price: float | None = None
    currency: str | None = None
    formatted_price: str | None = None
    expiry_date: datetime | None = None
    service_class_id: str | None = None
    booking: Booking | None = field(default=None, repr=False, compare=False)
    _manager: Any = field(default=None, repr=False, compare=False)

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expiry_date is None:
            return False
        return (now or datetime.now(UTC)) >= self.expiry_date

    def confirm(self, **kwargs: Any) -> Awaitable[Booking]:
        """Confirm this quote into a booking, see ``BookingManager.confirm_price``."""
        if self._manager is None:
            raise InvalidParametersError(
                "This price was not obtained through a client.",
                error_code="price_unbound",
            )
        return self._manager.confirm_price(self, **kwargs)


@dataclass(slots=True)
class Booking:
    """A booking intent, turned into a live booking by confirming it.

    Every operation that receives server data for a booking updates the
    instance in place, so callers keep observing the same object.
    """

    rider: Rider | None = None
    start_location: Location | None = None
    end_location: Location | None = None
    planned_start_date: datetime | None = None
    nameboard: bool | None = None
    driver_info: str | None = None
    meeting_point: MeetingPoint | None = None
    service_class: ServiceClass | None = None
    id: str | None = None
    status: BookingStatus | str | None = None
    timezone: str | None = None
    creation_date: datetime | None = None
    driver_arrival_date: datetime | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    cancellation_date: datetime | None = None
    cancellation_reason: BookingCancellationReason | str | None = None
    booking_price: BookingPrice | None = None
    billed_amount: float | None = None
    vat_amount: float | None = None
    tip: float | None = None
    route: list[TimestampedPoint] = field(default_factory=list)
    documents: list[BillingDocument] = field(default_factory=list)
    vehicle: Vehicle | None = None
    driver: Driver | None = None

    @property
    def is_scheduled(self) -> bool:
        return self.planned_start_date is not None

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.PENDING


@dataclass(slots=True)
class BookingHistory:
    """One page of past bookings."""

    limit: int
    offset: int = 0
    count: int = 0
    total: int = 0
    history: list[Booking] = field(default_factory=list)
    _client: Any = field(default=None, repr=False, compare=False)

    def more_bookings_available(self) -> bool:
        return int(self.offset) + int(self.count) < int(self.total)

    def next_bookings(self) -> Awaitable[BookingHistory]:
        if not self.more_bookings_available():
            raise InvalidParametersError(
                "There are no more bookings available in the history. Check "
                "more_bookings_available() before loading more bookings.",
                error_code="no_more_bookings",
            )
        if self._client is None:
            raise InvalidParametersError(
                "This history was not obtained through a client.",
                error_code="history_unbound",
            )
        return self._client.bookings_history(int(self.offset) + self.limit, self.limit)
