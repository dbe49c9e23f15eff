"""
Time and Duration

Instants are timezone-aware datetimes in UTC and intervals are timedeltas.
Naive datetimes are interpreted as UTC; aware ones are converted to UTC,
so two Times compare equal exactly when they denote the same instant.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Union

from .errors import DivisionByZeroError
from .numeric import divide


Time = datetime
Duration = timedelta

SECONDS_PER_YEAR = Decimal("31557600")  # 365.25 days

DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def to_utc(value: datetime) -> Time:
    """Normalize a datetime to an aware UTC instant"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def now() -> Time:
    return datetime.now(timezone.utc)


def from_unix(seconds: int, nanos: int = 0) -> Time:
    """
    Create a Time from a Unix timestamp

    Args:
        seconds: Seconds since the epoch
        nanos: Additional nanoseconds (truncated to microseconds)
    """
    return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(
        seconds=seconds, microseconds=nanos // 1000
    )


def to_unix(value: Time) -> int:
    """Whole seconds since the epoch"""
    return int((to_utc(value) - datetime(1970, 1, 1, tzinfo=timezone.utc)) // timedelta(seconds=1))


def seconds(n: Union[int, float]) -> Duration:
    return timedelta(seconds=n)


def minutes(n: Union[int, float]) -> Duration:
    return timedelta(minutes=n)


def hours(n: Union[int, float]) -> Duration:
    return timedelta(hours=n)


def days(n: Union[int, float]) -> Duration:
    return timedelta(days=n)


def divide_duration(duration: Duration, divisor: int) -> Duration:
    """
    Split a duration into equal parts

    Raises:
        DivisionByZeroError: If divisor is zero
    """
    if divisor == 0:
        raise DivisionByZeroError()
    return duration / divisor


def total_seconds(duration: Duration) -> Decimal:
    """Exact number of seconds in a duration"""
    micros = (duration.days * 86400 + duration.seconds) * 1_000_000 + duration.microseconds
    return divide(Decimal(micros), Decimal(1_000_000))


def year_fraction(duration: Duration) -> Decimal:
    """Duration expressed in years of 365.25 days"""
    return divide(total_seconds(duration), SECONDS_PER_YEAR)


def format_time(value: Time, fmt: str = DEFAULT_TIME_FORMAT) -> str:
    return to_utc(value).strftime(fmt)
