"""pysnapcar package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .bookings import BookingManager
from .client import Client
from .config import Config
from .dispatch import PollingPolicy
from .exceptions import (
    APIError,
    AuthError,
    ConfigError,
    DispatchError,
    InvalidParametersError,
    NetworkError,
    NotFoundError,
    SnapCarError,
)
from .models import (
    Address,
    BillingDocument,
    BillingDocumentType,
    Booking,
    BookingCancellationReason,
    BookingHistory,
    BookingPrice,
    BookingStatus,
    CancellationFee,
    Driver,
    ETAResult,
    ETAResultStatus,
    GeoPoint,
    Location,
    MeetingPoint,
    PaymentMethod,
    Rider,
    RiderStatus,
    ServiceClass,
    SpecialArea,
    SpecialAreaType,
    TimestampedPoint,
    Vehicle,
)

try:
    __version__ = version("pysnapcar")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "APIError",
    "Address",
    "AuthError",
    "BillingDocument",
    "BillingDocumentType",
    "Booking",
    "BookingCancellationReason",
    "BookingHistory",
    "BookingManager",
    "BookingPrice",
    "BookingStatus",
    "CancellationFee",
    "Client",
    "Config",
    "ConfigError",
    "DispatchError",
    "Driver",
    "ETAResult",
    "ETAResultStatus",
    "GeoPoint",
    "InvalidParametersError",
    "Location",
    "MeetingPoint",
    "NetworkError",
    "NotFoundError",
    "PaymentMethod",
    "PollingPolicy",
    "Rider",
    "RiderStatus",
    "ServiceClass",
    "SnapCarError",
    "SpecialArea",
    "SpecialAreaType",
    "TimestampedPoint",
    "Vehicle",
    "__version__",
]
