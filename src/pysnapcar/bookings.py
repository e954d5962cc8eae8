"""Booking lifecycle: confirmation, flat price quotes, cancellation and refresh.

Operations validate their inputs and prepare the request when they are
called, so a missing parameter or token raises right away, before anything is
sent. The returned awaitable performs the request.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from .const import (
    BOOKING_CANCEL_ENDPOINT,
    BOOKING_CANCELLATION_PRICE_ENDPOINT,
    BOOKING_ENDPOINT,
    BOOKING_PRICE_CONFIRM_ENDPOINT,
    BOOKING_PRICES_ENDPOINT,
    BOOKINGS_ENDPOINT,
)
from .dispatch import DispatchCallback, PollingPolicy, await_dispatch
from .exceptions import InvalidParametersError
from .mapping import PayloadMapper
from .models import Booking, BookingPrice, CancellationFee
from .transport import PreparedRequest, Transport
from .util import location_parameters, require_location, to_epoch

_LOGGER = logging.getLogger(__name__)


class BookingManager:
    """Operations on a single booking, bound to a client's transport."""

    def __init__(
        self,
        transport: Transport,
        mapper: Callable[[], PayloadMapper],
        policy: PollingPolicy | None = None,
    ) -> None:
        self._transport = transport
        self._mapper = mapper
        self._policy = policy or PollingPolicy()

    @property
    def policy(self) -> PollingPolicy:
        return self._policy

    def trip_parameters(self, booking: Booking) -> dict[str, Any]:
        """Build the trip part of a booking or price request body."""
        start_location = require_location(booking.start_location, "start_location")
        if booking.rider is None:
            raise InvalidParametersError(
                "You must provide a valid rider.",
                error_code="rider_missing",
            )
        parameters: dict[str, Any] = {
            "start_location": location_parameters(start_location),
            "rider_id": booking.rider.id,
        }
        if booking.end_location is not None:
            parameters["end_location"] = location_parameters(booking.end_location)
        if booking.nameboard is not None:
            parameters["nameboard"] = 1 if booking.nameboard else 0
        if booking.planned_start_date is not None:
            # No date means the booking is dispatched right away.
            parameters["date"] = to_epoch(booking.planned_start_date)
        return parameters

    def confirm(
        self,
        booking: Booking,
        *,
        on_dispatch_started: DispatchCallback | None = None,
        policy: PollingPolicy | None = None,
    ) -> Awaitable[Booking]:
        """Create the booking on the platform.

        The returned awaitable resolves with ``booking`` itself, updated with
        the server data. For a booking with a planned start date it resolves
        once the platform accepts it. Otherwise ``on_dispatch_started`` is
        called once the platform accepts it and the awaitable resolves when
        polling observes that the booking is no longer pending (typically
        ``going_to_get`` or ``cancelled``).
        """
        require_location(booking.start_location, "start_location")
        if booking.rider is None:
            raise InvalidParametersError(
                "You must provide a valid rider.",
                error_code="rider_missing",
            )
        if booking.service_class is None:
            raise InvalidParametersError(
                "You must provide the required service class for this booking.",
                error_code="service_class_missing",
            )
        parameters = self.trip_parameters(booking)
        parameters.update(_dispatch_parameters(booking))
        parameters["service_class_id"] = booking.service_class.id
        request = self._transport.prepare("POST", BOOKINGS_ENDPOINT, parameters)
        _LOGGER.debug("Booking confirm started scheduled=%s", booking.is_scheduled)
        return await_dispatch(
            booking,
            self._update(booking, request),
            self._refresh,
            scheduled=booking.is_scheduled,
            policy=policy or self._policy,
            on_dispatch_started=on_dispatch_started,
        )

    def flat_prices(self, booking: Booking) -> Awaitable[list[BookingPrice]]:
        """Request one flat price per service class available for the trip."""
        require_location(booking.start_location, "start_location")
        require_location(booking.end_location, "end_location")
        request = self._transport.prepare(
            "POST",
            BOOKING_PRICES_ENDPOINT,
            self.trip_parameters(booking),
        )
        return self._quote(booking, request)

    def confirm_price(
        self,
        price: BookingPrice,
        *,
        on_dispatch_started: DispatchCallback | None = None,
        policy: PollingPolicy | None = None,
    ) -> Awaitable[Booking]:
        """Confirm a flat price into a booking.

        The booking the price was quoted for is updated in place and returned,
        with the same completion as ``confirm``.
        """
        booking = price.booking
        if booking is None:
            raise InvalidParametersError(
                "The price is not linked to a booking.",
                error_code="booking_missing",
            )
        if not price.id:
            raise InvalidParametersError(
                "The price has no identifier.",
                error_code="price_id_missing",
            )
        request = self._transport.prepare(
            "POST",
            BOOKING_PRICE_CONFIRM_ENDPOINT.format(price_id=price.id),
            _dispatch_parameters(booking),
        )
        _LOGGER.debug("Booking price %s confirm started", price.id)
        return await_dispatch(
            booking,
            self._update(booking, request),
            self._refresh,
            scheduled=booking.is_scheduled,
            policy=policy or self._policy,
            on_dispatch_started=on_dispatch_started,
        )

    def cancel(self, booking: Booking) -> Awaitable[Booking]:
        request = self._transport.prepare(
            "POST",
            BOOKING_CANCEL_ENDPOINT.format(booking_id=_require_id(booking)),
        )
        _LOGGER.debug("Booking %s cancel started", booking.id)
        return self._update(booking, request)

    def cancellation_price(self, booking: Booking) -> Awaitable[CancellationFee]:
        """Return the fee charged if the booking were cancelled now.

        The platform rejects this call once the rider is on board.
        """
        request = self._transport.prepare(
            "GET",
            BOOKING_CANCELLATION_PRICE_ENDPOINT.format(booking_id=_require_id(booking)),
        )
        return self._cancellation_fee(request)

    def refresh(self, booking: Booking) -> Awaitable[Booking]:
        request = self._transport.prepare(
            "GET",
            BOOKING_ENDPOINT.format(booking_id=_require_id(booking)),
        )
        return self._update(booking, request)

    async def _refresh(self, booking: Booking) -> Booking:
        return await self.refresh(booking)

    async def _update(self, booking: Booking, request: PreparedRequest) -> Booking:
        data = await self._transport.send(request)
        self._mapper().booking(data, into=booking)
        _LOGGER.debug(
            "Booking %s updated from %s status=%s",
            booking.id,
            request.path,
            booking.status,
        )
        return booking

    async def _quote(self, booking: Booking, request: PreparedRequest) -> list[BookingPrice]:
        data = await self._transport.send(request)
        prices = self._mapper().booking_prices(data, booking, self)
        _LOGGER.debug("Booking flat_prices completed count=%s", len(prices))
        return prices

    async def _cancellation_fee(self, request: PreparedRequest) -> CancellationFee:
        data = await self._transport.send(request)
        return self._mapper().cancellation_fee(data)


def _dispatch_parameters(booking: Booking) -> dict[str, Any]:
    parameters: dict[str, Any] = {}
    if booking.driver_info is not None:
        parameters["driver_info"] = booking.driver_info
    if booking.meeting_point is not None:
        parameters["meeting_point_id"] = booking.meeting_point.id
    return parameters


def _require_id(booking: Booking) -> str:
    if not booking.id:
        raise InvalidParametersError(
            "The booking has no identifier yet. Confirm it first.",
            error_code="booking_id_missing",
        )
    return str(booking.id)
