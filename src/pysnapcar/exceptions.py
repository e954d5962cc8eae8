"""Library exceptions."""

from __future__ import annotations

from typing import Any


class SnapCarError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.error_code = error_code or self.default_code
        self.detail = detail or message or self.error_code or ""
        super().__init__(message or self.detail)


class ConfigError(SnapCarError):
    """Raised when the client is not configured well enough to issue a request."""

    error_type = "config"
    default_code = "invalid_config"


class InvalidParametersError(SnapCarError):
    """Raised when call inputs fail a precondition, before any request is sent."""

    error_type = "invalid_parameters"
    default_code = "invalid_parameters"


class APIError(SnapCarError):
    """Raised when the API answers with an error or cannot be reached."""

    error_type = "api"
    default_code = "other"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: int | None = None,
        error_code: str | None = None,
        detail: str | None = None,
        details: Any = None,
        server_response: str | None = None,
    ) -> None:
        super().__init__(message, error_code=error_code, detail=detail)
        self.code = code
        self.details = details
        self.server_response = server_response


class AuthError(APIError):
    """Raised when the API rejects the token."""


class NotFoundError(APIError):
    """Raised when the requested resource does not exist."""


class NetworkError(APIError):
    """Raised when network communication fails before a response is received."""


class DispatchError(APIError):
    """Raised when dispatch polling stops before the booking left the pending status."""

    default_code = "polling_stopped"
