from __future__ import annotations

import aiohttp
import pytest
from conftest import TOKEN, FakeResponse, SequenceSession

from pysnapcar.config import Config
from pysnapcar.exceptions import (
    APIError,
    AuthError,
    ConfigError,
    InvalidParametersError,
    NetworkError,
    NotFoundError,
)
from pysnapcar.transport import Transport


def _transport(session: object, config: Config | None = None) -> Transport:
    current = config or Config(base_domain="https://example/public", token=TOKEN)
    return Transport(session, lambda: current)  # type: ignore[arg-type]


def test_prepare_get_puts_token_in_query() -> None:
    request = _transport(SequenceSession()).prepare("get", "/info/eta", {"lat": 48.5, "lng": 2.0})
    assert request.method == "GET"
    assert request.url == "https://example/public/info/eta"
    assert request.params == {"lat": "48.5", "lng": "2.0", "token": TOKEN}
    assert request.json is None


def test_prepare_post_puts_token_in_body() -> None:
    request = _transport(SequenceSession()).prepare(
        "POST",
        "bookings",
        {"rider_id": "r-1", "driver_info": None},
    )
    assert request.url == "https://example/public/bookings"
    assert request.params is None
    assert request.json == {"rider_id": "r-1", "token": TOKEN}


def test_prepare_without_token_fails_locally() -> None:
    session = SequenceSession()
    transport = _transport(session, Config(base_domain="https://example"))
    with pytest.raises(ConfigError) as excinfo:
        transport.prepare("GET", "/users/me")
    assert excinfo.value.error_code == "missing_token"
    assert session.calls == []


def test_prepare_rejects_absolute_paths() -> None:
    transport = _transport(SequenceSession())
    with pytest.raises(InvalidParametersError):
        transport.prepare("GET", "https://elsewhere/users/me")
    with pytest.raises(InvalidParametersError):
        transport.prepare("GET", "")


def test_prepare_uses_current_config() -> None:
    configs = [Config(token="first")]
    transport = Transport(SequenceSession(), lambda: configs[-1])  # type: ignore[arg-type]
    first = transport.prepare("POST", "/bookings")
    configs.append(Config(token="second"))
    second = transport.prepare("POST", "/bookings")
    assert first.json == {"token": "first"}
    assert second.json == {"token": "second"}


@pytest.mark.asyncio
async def test_request_json_success() -> None:
    session = SequenceSession([FakeResponse({"id": "r-1"})])
    result = await _transport(session).request_json("GET", "/users/me")
    assert result == {"id": "r-1"}
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["params"] == {"token": TOKEN}


@pytest.mark.asyncio
async def test_api_error_carries_server_details() -> None:
    body = {"message": "no_driver", "details": {"service_class_id": "sc-1"}}
    session = SequenceSession([FakeResponse(body, status=400)])
    with pytest.raises(APIError) as excinfo:
        await _transport(session).request_json("POST", "/bookings", {"rider_id": "r-1"})
    error = excinfo.value
    assert error.code == 400
    assert error.error_code == "no_driver"
    assert error.details == {"service_class_id": "sc-1"}
    assert '"no_driver"' in error.server_response


@pytest.mark.asyncio
async def test_non_json_error_body_maps_to_other() -> None:
    session = SequenceSession([FakeResponse(status=502, text_data="<html>Bad gateway</html>")])
    with pytest.raises(APIError) as excinfo:
        await _transport(session).request_json("GET", "/users/me")
    assert excinfo.value.error_code == "other"
    assert excinfo.value.server_response == "<html>Bad gateway</html>"


@pytest.mark.asyncio
async def test_status_specific_errors() -> None:
    session = SequenceSession(
        [
            FakeResponse({"message": "invalid_token"}, status=401),
            FakeResponse({"message": "not_found"}, status=404),
        ]
    )
    transport = _transport(session)
    with pytest.raises(AuthError):
        await transport.request_json("GET", "/users/me")
    with pytest.raises(NotFoundError) as excinfo:
        await transport.request_json("GET", "/info/meeting_points")
    assert excinfo.value.code == 404


@pytest.mark.asyncio
async def test_network_failure_is_not_retried() -> None:
    session = SequenceSession([aiohttp.ClientError("boom")])
    with pytest.raises(NetworkError) as excinfo:
        await _transport(session).request_json("GET", "/users/me")
    assert excinfo.value.code is None
    assert excinfo.value.error_code == "other"
    assert len(session.calls) == 1


@pytest.mark.asyncio
async def test_invalid_json_response() -> None:
    session = SequenceSession([FakeResponse(json_error=ValueError("bad"))])
    with pytest.raises(APIError) as excinfo:
        await _transport(session).request_json("GET", "/users/me")
    assert excinfo.value.error_code == "invalid_response"
