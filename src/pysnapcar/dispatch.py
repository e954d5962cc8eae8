"""Completion of confirmed bookings and dispatch polling.

A scheduled booking (one with a planned start date) is complete as soon as the
platform accepts it. An on-demand booking is only accepted for dispatch: the
caller is notified once through ``on_dispatch_started`` and the booking is then
refreshed at a fixed interval until it leaves the pending status.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .const import POLL_INTERVAL, POLL_MAX_CONSECUTIVE_FAILURES
from .exceptions import APIError, DispatchError, InvalidParametersError
from .models import Booking

_LOGGER = logging.getLogger(__name__)

DispatchCallback = Callable[[Booking], Awaitable[None] | None]
RefreshCallable = Callable[[Booking], Awaitable[Booking]]


@dataclass(frozen=True, slots=True)
class PollingPolicy:
    """How an on-demand booking is polled while it waits for a driver.

    ``max_attempts`` bounds the number of refreshes and
    ``max_consecutive_failures`` the number of failed refreshes in a row;
    ``None`` disables the corresponding limit.
    """

    interval: float = POLL_INTERVAL
    max_attempts: int | None = None
    max_consecutive_failures: int | None = POLL_MAX_CONSECUTIVE_FAILURES

    def __post_init__(self) -> None:
        if isinstance(self.interval, bool) or not isinstance(self.interval, int | float):
            raise InvalidParametersError("interval must be a number.")
        if self.interval < 0:
            raise InvalidParametersError("interval must not be negative.")
        for name in ("max_attempts", "max_consecutive_failures"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidParametersError(f"{name} must be a positive integer or None.")


async def await_dispatch(
    booking: Booking,
    request: Awaitable[Booking],
    refresh: RefreshCallable,
    *,
    scheduled: bool,
    policy: PollingPolicy,
    on_dispatch_started: DispatchCallback | None = None,
) -> Booking:
    """Await a create/confirm request and, for on-demand bookings, its dispatch.

    ``scheduled`` must be computed before ``request`` was issued. A failing
    request propagates immediately and nothing is polled.
    """
    if scheduled:
        return await request
    result = await request
    _LOGGER.debug("Booking %s dispatch started", booking.id)
    if on_dispatch_started is not None:
        outcome = on_dispatch_started(result)
        if inspect.isawaitable(outcome):
            await outcome
    return await _poll_until_dispatched(result, refresh, policy)


async def _poll_until_dispatched(
    booking: Booking,
    refresh: RefreshCallable,
    policy: PollingPolicy,
) -> Booking:
    attempts = 0
    failures = 0
    while True:
        await asyncio.sleep(policy.interval)
        attempts += 1
        try:
            await refresh(booking)
        except APIError as exc:
            failures += 1
            _LOGGER.debug(
                "Booking %s refresh failed attempt=%s error_code=%s",
                booking.id,
                attempts,
                exc.error_code,
            )
            if not booking.is_pending:
                break
            limit = policy.max_consecutive_failures
            if limit is not None and failures >= limit:
                _LOGGER.warning(
                    "Booking %s polling stopped after %s failed refreshes",
                    booking.id,
                    failures,
                )
                raise DispatchError(
                    "Dispatch polling stopped after repeated refresh failures.",
                    error_code="polling_failures_exhausted",
                ) from exc
        else:
            failures = 0
            if not booking.is_pending:
                break
        if policy.max_attempts is not None and attempts >= policy.max_attempts:
            _LOGGER.warning(
                "Booking %s still pending after %s polls",
                booking.id,
                attempts,
            )
            raise DispatchError(
                "Booking is still pending after the maximum number of polls.",
                error_code="polling_attempts_exhausted",
            )
    _LOGGER.debug(
        "Booking %s dispatch completed status=%s polls=%s",
        booking.id,
        booking.status,
        attempts,
    )
    return booking
