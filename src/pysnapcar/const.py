"""Constants for the SnapCar public API."""

DEFAULT_BASE_DOMAIN = "https://api.snapcar.com/public"
DEFAULT_LOCALE = "en"
DEFAULT_TIMEOUT = 30.0

TOKEN_PARAM = "token"

ETA_ENDPOINT = "/info/eta"
SERVICE_CLASSES_ENDPOINT = "/info/service_classes"
MEETING_POINTS_ENDPOINT = "/info/meeting_points"
USER_ENDPOINT = "/users/me"

BOOKINGS_ENDPOINT = "/bookings"
BOOKINGS_HISTORY_ENDPOINT = "/bookings/history"
BOOKING_ENDPOINT = "/bookings/{booking_id}"
BOOKING_CANCEL_ENDPOINT = "/bookings/{booking_id}/cancel"
BOOKING_CANCELLATION_PRICE_ENDPOINT = "/bookings/{booking_id}/cancellation_price"
BOOKING_PRICES_ENDPOINT = "/bookings/prices"
BOOKING_PRICE_CONFIRM_ENDPOINT = "/bookings/prices/{price_id}/confirm"

DEFAULT_HISTORY_LIMIT = 20

# Dispatch polling defaults.
POLL_INTERVAL = 3.0
POLL_MAX_CONSECUTIVE_FAILURES = 20

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pysnapcar",
}
