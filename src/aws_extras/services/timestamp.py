"""
Timestamp provider used to stamp persisted items.

A ``TimestampProvider`` is composed of a clock returning the current instant
and a formatter turning that instant into a string; both can be substituted
independently, e.g. with a fixed clock in tests.
"""

from datetime import datetime, timezone
from typing import Callable, Protocol


class DateFormatting(Protocol):
    """A type producing string representations of instants."""

    def string(self, instant: datetime) -> str:
        ...


class ISO8601Formatter:
    """
    Formats instants as ``YYYY-MM-DDTHH:MM:SSZ``.

    The output is pinned to UTC with whole-second precision and is assembled
    from integer fields, so it never depends on the process locale or local
    timezone. Naive datetimes are interpreted as UTC.
    """

    def string(self, instant: datetime) -> str:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        utc = instant.astimezone(timezone.utc)
        return (
            f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
            f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}Z"
        )


iso8601 = ISO8601Formatter()


def utc_now() -> datetime:
    """Return the current instant in UTC."""
    return datetime.now(timezone.utc)


class TimestampProvider:
    """
    Provides formatted timestamps for "now".

    Args:
        clock: Callable returning the current instant
        formatter: Formatter turning the instant into a string
    """

    def __init__(self, clock: Callable[[], datetime], formatter: DateFormatting) -> None:
        self._clock = clock
        self._formatter = formatter

    def timestamp(self) -> str:
        """Return the formatted current instant."""
        return self._formatter.string(self._clock())

    @classmethod
    def live(cls) -> 'TimestampProvider':
        """A provider reading the system clock and formatting as ISO 8601."""
        return cls(clock=utc_now, formatter=iso8601)
