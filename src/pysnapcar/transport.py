"""HTTP transport for the SnapCar public API."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import aiohttp

from .config import Config
from .const import DEFAULT_HEADERS, TOKEN_PARAM
from .exceptions import (
    APIError,
    AuthError,
    ConfigError,
    InvalidParametersError,
    NetworkError,
    NotFoundError,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PreparedRequest:
    """A request bound to the configuration that was active when it was issued."""

    method: str
    url: str
    path: str
    params: dict[str, Any] | None
    json: dict[str, Any] | None
    timeout: aiohttp.ClientTimeout


class Transport:
    """Issue one request at a time and normalize failures into ``APIError``."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        config: Callable[[], Config],
    ) -> None:
        if session is None:
            raise ConfigError("Session is required.", error_code="missing_session")
        self._session = session
        self._config = config

    def prepare(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> PreparedRequest:
        """Build a request, failing before any I/O when it cannot be sent.

        The token is sent as a request parameter: in the query string for GET
        and in the JSON body otherwise.
        """
        config = self._config()
        if not config.has_token:
            raise ConfigError(
                "You have to provide a SnapCar API token in order to perform API calls.",
                error_code="missing_token",
            )
        url = self._build_url(config, path)
        data = {key: value for key, value in (params or {}).items() if value is not None}
        data[TOKEN_PARAM] = config.token
        method = method.upper()
        timeout = aiohttp.ClientTimeout(total=config.timeout)
        if method == "GET":
            return PreparedRequest(method, url, path, _query(data), None, timeout)
        return PreparedRequest(method, url, path, None, data, timeout)

    async def send(self, request: PreparedRequest) -> Any:
        _LOGGER.debug("Request %s %s started", request.method, request.path)
        try:
            async with self._session.request(
                request.method,
                request.url,
                params=request.params,
                json=request.json,
                headers=DEFAULT_HEADERS,
                timeout=request.timeout,
                ssl=True,
            ) as response:
                await self._raise_for_status(response)
                try:
                    data = await response.json()
                except (aiohttp.ContentTypeError, ValueError) as exc:
                    raise APIError(
                        "Response did not contain valid JSON.",
                        code=response.status,
                        error_code="invalid_response",
                    ) from exc
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise NetworkError(
                "An error occurred while sending the request.",
                error_code="other",
            ) from exc
        _LOGGER.debug("Request %s %s completed", request.method, request.path)
        return data

    async def request_json(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self.send(self.prepare(method, path, params))

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        try:
            body = await response.text()
        except (aiohttp.ClientError, UnicodeDecodeError):
            body = None
        payload = _decode_error_body(body)
        if payload is None:
            error_code = "other"
            message = "An error occurred while sending the request."
            details = None
        else:
            error_code = str(payload.get("message") or "other")
            message = "An API error occurred. Check the error code for more details."
            details = payload.get("details")
        _LOGGER.debug(
            "Request failed with status %s error_code=%s",
            response.status,
            error_code,
        )
        if response.status in (401, 403):
            error_cls: type[APIError] = AuthError
        elif response.status == 404:
            error_cls = NotFoundError
        else:
            error_cls = APIError
        raise error_cls(
            message,
            code=response.status,
            error_code=error_code,
            details=details,
            server_response=body,
        )

    def _build_url(self, config: Config, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise InvalidParametersError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise InvalidParametersError("Use relative paths when building API requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{config.base_domain}{normalized_path}"


def _query(data: Mapping[str, Any]) -> dict[str, str]:
    query: dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, bool):
            query[key] = "1" if value else "0"
        else:
            query[key] = str(value)
    return query


def _decode_error_body(body: str | None) -> dict[str, Any] | None:
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None
