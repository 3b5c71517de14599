#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""The business hours during which events may be scheduled."""

import datetime
from enum import StrEnum, auto

from confsched.scheduling.time_utils import Clock, SystemClock, TimeInterval

EARLIEST_START_HOUR = 9
LATEST_START_HOUR = 16
DEFAULT_EVENT_DURATION_MINUTES = 60


class RejectionReason(StrEnum):
    """Why a proposed event was not scheduled."""

    EMPTY_TITLE = auto()
    UNKNOWN_SPEAKER = auto()
    NOT_A_SPEAKER = auto()
    UNKNOWN_ROOM = auto()
    MALFORMED_INTERVAL = auto()
    IN_THE_PAST = auto()
    OUTSIDE_WINDOW = auto()
    LATEST_HOUR_NOT_ON_THE_HOUR = auto()
    ROOM_CONFLICT = auto()
    SPEAKER_CONFLICT = auto()


class TimeWindowPolicy:
    """Restricts event start times to ``[earliest_hour, latest_hour]``.

    An event starting during `latest_hour` must start exactly on the hour,
    so that it does not run past ``latest_hour + event_duration``. Any
    minute is accepted during `earliest_hour`. Events cannot start
    before the current instant given by `clock`.
    """

    def __init__(
        self,
        earliest_hour: int = EARLIEST_START_HOUR,
        latest_hour: int = LATEST_START_HOUR,
        event_duration: datetime.timedelta = datetime.timedelta(
            minutes=DEFAULT_EVENT_DURATION_MINUTES
        ),
        clock: Clock | None = None,
    ):
        if not 0 <= earliest_hour <= latest_hour <= 23:
            raise ValueError(
                f"Invalid scheduling window: {earliest_hour}:00 - {latest_hour}:00"
            )
        if event_duration <= datetime.timedelta(0):
            raise ValueError("Events must last a positive amount of time")
        self.earliest_hour = earliest_hour
        self.latest_hour = latest_hour
        self.event_duration = event_duration
        self.clock = clock or SystemClock()

    def interval_for(self, start: datetime.datetime) -> TimeInterval:
        """The interval occupied by an event of the default duration."""
        return TimeInterval(start=start, end=start + self.event_duration)

    def latest_end(self, day: datetime.date) -> datetime.datetime:
        """The latest instant an event held on `day` may end."""
        return (
            datetime.datetime.combine(day, datetime.time(hour=self.latest_hour))
            + self.event_duration
        )

    def check(self, start: datetime.datetime) -> RejectionReason | None:
        """Check a proposed start time.

        Returns
        -------
        None if an event may start at `start`, otherwise the reason it
        may not.
        """
        if start < self.clock.now():
            return RejectionReason.IN_THE_PAST
        if not self.earliest_hour <= start.hour <= self.latest_hour:
            return RejectionReason.OUTSIDE_WINDOW
        if start.hour == self.latest_hour and start.time() != datetime.time(
            hour=self.latest_hour
        ):
            return RejectionReason.LATEST_HOUR_NOT_ON_THE_HOUR
        return None

    def check_interval(self, interval: TimeInterval) -> RejectionReason | None:
        """Check a proposed event interval, including its end time."""
        if not interval.is_well_formed():
            return RejectionReason.MALFORMED_INTERVAL
        if (reason := self.check(interval.start)) is not None:
            return reason
        if interval.end > self.latest_end(interval.start.date()):
            return RejectionReason.OUTSIDE_WINDOW
        return None
