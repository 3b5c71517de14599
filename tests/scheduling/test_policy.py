#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime

import pytest

from confsched.scheduling.policy import RejectionReason, TimeWindowPolicy
from confsched.scheduling.time_utils import FixedClock, TimeInterval


def at(hour: int, minute: int = 0, day: int = 1) -> datetime.datetime:
    return datetime.datetime(2024, 7, day, hour, minute)


@pytest.fixture
def policy(clock: FixedClock) -> TimeWindowPolicy:
    return TimeWindowPolicy(clock=clock)


@pytest.mark.parametrize("minute", [0, 1, 30, 59])
def test_any_minute_at_earliest_hour(policy: TimeWindowPolicy, minute: int):
    assert policy.check(at(9, minute)) is None


def test_latest_hour_on_the_hour(policy: TimeWindowPolicy):
    assert policy.check(at(16)) is None


@pytest.mark.parametrize("minute", [1, 30, 59])
def test_latest_hour_must_start_on_the_hour(policy: TimeWindowPolicy, minute: int):
    assert policy.check(at(16, minute)) == RejectionReason.LATEST_HOUR_NOT_ON_THE_HOUR


@pytest.mark.parametrize("hour", [0, 8, 17, 23])
def test_outside_window(policy: TimeWindowPolicy, hour: int):
    assert policy.check(at(hour)) == RejectionReason.OUTSIDE_WINDOW


def test_in_the_past(policy: TimeWindowPolicy, clock: FixedClock):
    assert policy.check(clock.now() - datetime.timedelta(minutes=1)) == (
        RejectionReason.IN_THE_PAST
    )


def test_later_today_is_allowed(policy: TimeWindowPolicy, clock: FixedClock):
    now = clock.now()
    assert policy.check(now.replace(hour=10, minute=0)) is None


def test_past_check_follows_the_clock(policy: TimeWindowPolicy, clock: FixedClock):
    start = at(10)
    assert policy.check(start) is None
    clock.advance(start - clock.now() + datetime.timedelta(seconds=1))
    assert policy.check(start) == RejectionReason.IN_THE_PAST


def test_interval_for_uses_default_duration(policy: TimeWindowPolicy):
    assert policy.interval_for(at(16)) == TimeInterval(at(16), at(17))


def test_check_interval(policy: TimeWindowPolicy):
    assert policy.check_interval(TimeInterval(at(16), at(17))) is None
    assert policy.check_interval(TimeInterval(at(15, 30), at(17, 30))) == (
        RejectionReason.OUTSIDE_WINDOW
    )
    assert policy.check_interval(TimeInterval(at(11), at(10))) == (
        RejectionReason.MALFORMED_INTERVAL
    )


def test_custom_window(clock: FixedClock):
    policy = TimeWindowPolicy(
        earliest_hour=8,
        latest_hour=18,
        event_duration=datetime.timedelta(minutes=30),
        clock=clock,
    )
    assert policy.check(at(8, 15)) is None
    assert policy.check(at(18, 15)) == RejectionReason.LATEST_HOUR_NOT_ON_THE_HOUR
    assert policy.latest_end(at(8).date()) == at(18, 30)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"earliest_hour": 17, "latest_hour": 9},
        {"latest_hour": 24},
        {"event_duration": datetime.timedelta(0)},
    ],
)
def test_invalid_policy(kwargs: dict):
    with pytest.raises(ValueError):
        TimeWindowPolicy(**kwargs)
