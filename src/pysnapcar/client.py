"""Client facade for the SnapCar public API."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

import aiohttp

from .bookings import BookingManager
from .config import Config
from .const import (
    BOOKING_ENDPOINT,
    BOOKINGS_ENDPOINT,
    BOOKINGS_HISTORY_ENDPOINT,
    DEFAULT_HISTORY_LIMIT,
    ETA_ENDPOINT,
    MEETING_POINTS_ENDPOINT,
    SERVICE_CLASSES_ENDPOINT,
    USER_ENDPOINT,
)
from .dispatch import PollingPolicy
from .exceptions import ConfigError, InvalidParametersError
from .mapping import PayloadMapper
from .models import Booking, BookingHistory, ETAResult, Rider, ServiceClass, SpecialArea
from .transport import Transport
from .util import mask_token, validate_coordinates

_LOGGER = logging.getLogger(__name__)


class Client:
    """Entry point holding the configuration, the HTTP session and the booking manager.

    An injected ``session`` is left open by ``aclose``; a session created by
    the client is closed with it.

    The read-only queries are coroutines: invalid arguments and a missing
    token raise when they are awaited. The ``bookings`` operations raise
    those errors when they are called, before returning the awaitable.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        config: Config | None = None,
        token: str | None = None,
        base_domain: str | None = None,
        locale: str | None = None,
        polling: PollingPolicy | None = None,
    ) -> None:
        config = config or Config()
        overrides: dict[str, Any] = {}
        if token is not None:
            overrides["token"] = token
        if base_domain is not None:
            overrides["base_domain"] = base_domain
        if locale is not None:
            overrides["locale"] = locale
        self._config = replace(config, **overrides) if overrides else config
        self._session = session
        self._owns_session = session is None
        self._polling = polling or PollingPolicy()
        self._transport: Transport | None = None
        self._bookings: BookingManager | None = None

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._transport = None
            self._bookings = None

    @property
    def config(self) -> Config:
        return self._config

    def configure(self, **changes: Any) -> Config:
        """Replace configuration values for requests issued from now on."""
        try:
            self._config = replace(self._config, **changes)
        except TypeError as exc:
            raise ConfigError(f"Unknown configuration option: {exc}") from exc
        _LOGGER.debug(
            "Client configured base_domain=%s locale=%s token=%s",
            self._config.base_domain,
            self._config.locale,
            mask_token(self._config.token),
        )
        return self._config

    @property
    def bookings(self) -> BookingManager:
        if self._bookings is None:
            self._bookings = BookingManager(self._ensure_transport(), self._mapper, self._polling)
        return self._bookings

    async def eta(self, lat: float, lng: float) -> list[ETAResult]:
        """Return availability and ETA per service class around a position."""
        lat, lng = validate_coordinates(lat, lng)
        data = await self._ensure_transport().request_json(
            "GET",
            ETA_ENDPOINT,
            {"lat": lat, "lng": lng},
        )
        return self._mapper().eta_results(data)

    async def service_classes(self, lat: float, lng: float) -> list[ServiceClass]:
        lat, lng = validate_coordinates(lat, lng)
        data = await self._ensure_transport().request_json(
            "GET",
            SERVICE_CLASSES_ENDPOINT,
            {"lat": lat, "lng": lng},
        )
        return self._mapper().service_classes(data)

    async def meeting_points(self, lat: float, lng: float) -> SpecialArea:
        """Return the special area at a position.

        Raises ``NotFoundError`` when there is no special area there.
        """
        lat, lng = validate_coordinates(lat, lng)
        data = await self._ensure_transport().request_json(
            "GET",
            MEETING_POINTS_ENDPOINT,
            {"lat": lat, "lng": lng},
        )
        return self._mapper().special_area(data)

    async def user(self) -> Rider:
        data = await self._ensure_transport().request_json("GET", USER_ENDPOINT)
        return self._mapper().rider(data)

    async def active_bookings(self) -> list[Booking]:
        data = await self._ensure_transport().request_json("GET", BOOKINGS_ENDPOINT)
        bookings = self._mapper().bookings(data)
        _LOGGER.debug("Client active_bookings completed count=%s", len(bookings))
        return bookings

    async def bookings_history(
        self,
        offset: int = 0,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> BookingHistory:
        for name, value in (("offset", offset), ("limit", limit)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidParametersError(
                    f"{name} must be a non-negative integer.",
                    error_code="invalid_pagination",
                )
        limit = limit or DEFAULT_HISTORY_LIMIT
        data = await self._ensure_transport().request_json(
            "GET",
            BOOKINGS_HISTORY_ENDPOINT,
            {"offset": offset, "limit": limit},
        )
        history = BookingHistory(limit=limit, offset=offset, _client=self)
        return self._mapper().booking_history(data, history)

    async def booking(self, booking_id: str) -> Booking:
        if not booking_id:
            raise InvalidParametersError(
                "booking_id is required.",
                error_code="booking_id_missing",
            )
        data = await self._ensure_transport().request_json(
            "GET",
            BOOKING_ENDPOINT.format(booking_id=booking_id),
        )
        return self._mapper().booking(data)

    def _mapper(self) -> PayloadMapper:
        return PayloadMapper(self._config)

    def _current_config(self) -> Config:
        return self._config

    def _ensure_transport(self) -> Transport:
        if self._transport is None:
            self._transport = Transport(self._ensure_session(), self._current_config)
        return self._transport

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session
