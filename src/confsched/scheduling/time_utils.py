#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Time helpers shared by the scheduling engine: half-open intervals,
an injectable clock and parsing of user supplied date/time strings.
All instants are naive local `datetime.datetime` objects."""

import datetime
from typing import NamedTuple, Protocol, Self, runtime_checkable

from dateutil import parser as date_parser

from confsched.scheduling.exceptions import ParseError


class TimeInterval(NamedTuple):
    """The half-open interval ``[start, end)`` between two instants."""

    start: datetime.datetime
    end: datetime.datetime

    def is_well_formed(self) -> bool:
        """An interval is well formed if it starts strictly before it ends."""
        return self.start < self.end

    def contains(self, dt: datetime.datetime) -> bool:
        """Check if `dt` falls inside the interval. The end instant is excluded."""
        return self.start <= dt < self.end

    def overlaps(self, other: Self) -> bool:
        """Check if the two intervals share at least one instant.

        Back-to-back intervals (one ends exactly when the other starts)
        do not overlap.
        """
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        start = self.start.strftime("%Y-%m-%d %H:%M")
        if self.start.date() == self.end.date():
            return f"{start}-{self.end.strftime('%H:%M')}"
        return f"{start} to {self.end.strftime('%Y-%m-%d %H:%M')}"


def intervals_overlap(interval_1: TimeInterval, interval_2: TimeInterval) -> bool:
    """Check if `interval_1` and `interval_2` overlap. Symmetric in its arguments."""
    return interval_1.overlaps(interval_2)


@runtime_checkable
class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime.datetime: ...


class SystemClock:
    """Reads the current local time from the operating system."""

    def now(self) -> datetime.datetime:
        return datetime.datetime.now()


class FixedClock:
    """A clock frozen at `instant`, used to make time dependent
    policies deterministic."""

    def __init__(self, instant: datetime.datetime):
        self.instant = instant

    def now(self) -> datetime.datetime:
        return self.instant

    def advance(self, delta: datetime.timedelta) -> None:
        self.instant += delta


def parse_datetime(text: str) -> datetime.datetime:
    """Parse a free-form date/time string (eg ``2026-11-02 10:30``).

    Raises
    ------
    ParseError if `text` cannot be interpreted as a date and time or
    if it carries timezone information.
    """
    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise ParseError(f"Could not parse {text!r} as a date and time") from e
    if parsed.tzinfo is not None:
        raise ParseError(f"Timezone aware times are not supported: {text!r}")
    return parsed
