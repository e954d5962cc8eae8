"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .const import DEFAULT_BASE_DOMAIN, DEFAULT_LOCALE, DEFAULT_TIMEOUT
from .exceptions import ConfigError


@dataclass(frozen=True, slots=True)
class Config:
    """Settings shared by every request issued through a client.

    Instances are immutable; use the ``with_*`` helpers (or
    ``Client.configure``) to derive a changed copy. Requests already in flight
    keep the configuration they were issued with.
    """

    base_domain: str = DEFAULT_BASE_DOMAIN
    token: str | None = None
    locale: str = DEFAULT_LOCALE
    fallback_locale: str = DEFAULT_LOCALE
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not isinstance(self.base_domain, str) or not self.base_domain.strip():
            raise ConfigError("base_domain must be a non-empty string.")
        object.__setattr__(self, "base_domain", self.base_domain.strip().rstrip("/"))
        if self.token is not None and not isinstance(self.token, str):
            raise ConfigError("token must be a string.")
        for name in ("locale", "fallback_locale"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{name} must be a non-empty string.")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int | float):
            raise ConfigError("timeout must be a number.")
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive.")

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def with_token(self, token: str | None) -> Config:
        return replace(self, token=token)

    def with_locale(self, locale: str) -> Config:
        return replace(self, locale=locale)

    def with_base_domain(self, base_domain: str) -> Config:
        return replace(self, base_domain=base_domain)
