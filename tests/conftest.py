from __future__ import annotations

import json
from typing import Any

import pytest

from pysnapcar import Client, PollingPolicy

TOKEN = "3xI121nd93N7rhOFT7yk76I4B80PJA23"


class FakeResponse:
    def __init__(
        self,
        payload: Any = None,
        *,
        status: int = 200,
        text_data: str | None = None,
        json_error: Exception | None = None,
    ) -> None:
        self.status = status
        self._payload = payload
        self._text_data = text_data
        self._json_error = json_error

    async def json(self) -> Any:
        if self._json_error is not None:
            raise self._json_error
        return self._payload

    async def text(self) -> str:
        if self._text_data is not None:
            return self._text_data
        return json.dumps(self._payload)


class FakeRequestContext:
    def __init__(self, response: FakeResponse) -> None:
        self._response = response

    async def __aenter__(self) -> FakeResponse:
        return self._response

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class SequenceSession:
    """Replays queued responses and records every request made."""

    def __init__(self, responses: list[object] | None = None) -> None:
        self._responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def queue(self, *responses: object) -> None:
        self._responses.extend(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeRequestContext:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self._responses:
            raise AssertionError(f"Unexpected request {method} {url}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return FakeRequestContext(response)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_client():
    def _make(*responses: object, **kwargs: Any) -> tuple[Client, SequenceSession]:
        session = SequenceSession(list(responses))
        kwargs.setdefault("token", TOKEN)
        kwargs.setdefault("polling", PollingPolicy(interval=0))
        client = Client(session, **kwargs)  # type: ignore[arg-type]
        return client, session

    return _make
