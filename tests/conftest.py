#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime

import pytest

from confsched.scheduling.policy import TimeWindowPolicy
from confsched.scheduling.rooms import Room, RoomManager
from confsched.scheduling.scheduler import Scheduler
from confsched.scheduling.time_utils import FixedClock
from confsched.scheduling.users import Attendee, Speaker, UserManager, UserRole

# Tuesday morning, before the first session of the day
NOW = datetime.datetime(2024, 6, 25, 8, 30)
CONFERENCE_DAY = datetime.date(2024, 7, 1)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def user_manager() -> UserManager:
    manager = UserManager()
    manager.create_user("alice", "alice-pw", UserRole.SPEAKER)
    manager.create_user("bob", "bob-pw", UserRole.SPEAKER)
    manager.create_user("carol", "carol-pw", UserRole.ATTENDEE)
    manager.create_user("dave", "dave-pw", UserRole.ATTENDEE)
    manager.create_user("olivia", "olivia-pw", UserRole.ORGANIZER)
    return manager


@pytest.fixture
def room_manager(user_manager: UserManager) -> RoomManager:
    manager = RoomManager(user_manager)
    manager.create_room("Room 1", capacity=30)
    manager.create_room("Room 2")
    return manager


@pytest.fixture
def speakers(user_manager: UserManager) -> dict[str, Speaker]:
    return {s.username: s for s in user_manager.list_speakers()}


@pytest.fixture
def attendees(user_manager: UserManager) -> dict[str, Attendee]:
    return {
        u.username: u for u in user_manager.users if isinstance(u, Attendee)
    }


@pytest.fixture
def rooms(room_manager: RoomManager) -> dict[str, Room]:
    return {r.room_name: r for r in room_manager.rooms}


@pytest.fixture
def scheduler(
    user_manager: UserManager, room_manager: RoomManager, clock: FixedClock
) -> Scheduler:
    return Scheduler(user_manager, room_manager, TimeWindowPolicy(clock=clock))
