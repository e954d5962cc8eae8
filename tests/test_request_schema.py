from __future__ import annotations

from datetime import UTC, datetime

import jsonschema
import pytest
from conftest import FakeResponse

from pysnapcar.models import Address, Booking, Location, MeetingPoint, Rider, ServiceClass
from pysnapcar.schemas import (
    BOOKING_REQUEST_SCHEMA,
    PRICE_CONFIRM_REQUEST_SCHEMA,
    PRICE_REQUEST_SCHEMA,
    load_schema,
)


def _booking(**kwargs) -> Booking:
    return Booking(
        rider=Rider(id="r-1"),
        start_location=Location(48.73, 2.36, Address("Orly", "Orly", "94390", "France")),
        end_location=Location(48.85, 2.34, Address("3 Boulevard du Palais", "Paris")),
        planned_start_date=datetime(2016, 1, 1, tzinfo=UTC),
        nameboard=False,
        driver_info="Gate 4",
        meeting_point=MeetingPoint(id="mp-1"),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_booking_request_matches_schema(make_client) -> None:
    client, session = make_client(FakeResponse({"id": "b-1", "status": "pending"}))
    await client.bookings.confirm(_booking(service_class=ServiceClass(id="sc-1")))
    jsonschema.validate(instance=session.calls[0]["json"], schema=load_schema(BOOKING_REQUEST_SCHEMA))


@pytest.mark.asyncio
async def test_price_requests_match_schema(make_client) -> None:
    client, session = make_client(
        FakeResponse([{"id": "p-1", "price": 30, "service_class_id": "sc-1"}]),
        FakeResponse({"id": "b-1", "status": "pending"}),
    )

    prices = await client.bookings.flat_prices(_booking())
    await prices[0].confirm()

    jsonschema.validate(instance=session.calls[0]["json"], schema=load_schema(PRICE_REQUEST_SCHEMA))
    jsonschema.validate(
        instance=session.calls[1]["json"],
        schema=load_schema(PRICE_CONFIRM_REQUEST_SCHEMA),
    )


def test_schemas_are_valid() -> None:
    for name in (BOOKING_REQUEST_SCHEMA, PRICE_REQUEST_SCHEMA, PRICE_CONFIRM_REQUEST_SCHEMA):
        schema = load_schema(name)
        jsonschema.validators.validator_for(schema).check_schema(schema)
