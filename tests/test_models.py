from datetime import UTC, datetime, timedelta

from pysnapcar.models import Booking, BookingPrice, BookingStatus

EXPIRY = datetime(2016, 1, 1, 0, 10, tzinfo=UTC)


def test_booking_status_is_terminal() -> None:
    assert BookingStatus.CANCELLED.is_terminal
    assert BookingStatus.COMPLETE.is_terminal
    assert not BookingStatus.PENDING.is_terminal
    assert not BookingStatus.ON_BOARD.is_terminal


def test_booking_price_is_expired() -> None:
    price = BookingPrice(id="p-1", expiry_date=EXPIRY)
    assert not price.is_expired(EXPIRY - timedelta(seconds=1))
    assert price.is_expired(EXPIRY)
    assert price.is_expired(EXPIRY + timedelta(seconds=1))


def test_booking_price_without_expiry_never_expires() -> None:
    assert not BookingPrice(id="p-1").is_expired(datetime(2100, 1, 1, tzinfo=UTC))
    assert not BookingPrice(id="p-1").is_expired()


def test_booking_is_scheduled() -> None:
    assert Booking(planned_start_date=EXPIRY).is_scheduled
    assert not Booking().is_scheduled
