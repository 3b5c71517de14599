#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
from confsched.scheduling.policy import RejectionReason, TimeWindowPolicy
from confsched.scheduling.rooms import Event, Room, RoomManager
from confsched.scheduling.scheduler import ProposalOutcome, Scheduler
from confsched.scheduling.users import (
    Attendee,
    Organizer,
    Speaker,
    User,
    UserManager,
    UserRole,
    as_speaker,
)
