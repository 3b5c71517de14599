#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""The organizer's view of the engine: turn a proposal made of usernames,
room ids and a start time into a booked event, or explain why it was
rejected."""

import datetime
import logging

from pydantic import BaseModel

from confsched.scheduling.policy import RejectionReason, TimeWindowPolicy
from confsched.scheduling.rooms import Event, RoomManager
from confsched.scheduling.time_utils import TimeInterval
from confsched.scheduling.users import RoomId, UserManager, as_speaker

logger = logging.getLogger(__name__)


class ProposalOutcome(BaseModel):
    """The result of proposing an event.

    Attributes
    ----------
    accepted
        Whether the event was created.
    event
        The created event. Set only if `accepted`.
    reason
        Why the proposal was rejected. Set only if not `accepted`.
    conflicts
        The existing events that clash with the proposal, if it was
        rejected because of a double booking.
    """

    accepted: bool
    event: Event | None = None
    reason: RejectionReason | None = None
    conflicts: list[Event] = []

    @classmethod
    def rejected(
        cls, reason: RejectionReason, conflicts: list[Event] | None = None
    ) -> "ProposalOutcome":
        return cls(accepted=False, reason=reason, conflicts=conflicts or [])


class Scheduler:
    def __init__(
        self,
        user_manager: UserManager,
        room_manager: RoomManager,
        policy: TimeWindowPolicy | None = None,
    ):
        self.user_manager = user_manager
        self.room_manager = room_manager
        self.policy = policy or TimeWindowPolicy()

    def propose(
        self,
        title: str,
        speaker_username: str,
        room_id: RoomId,
        start: datetime.datetime,
        end: datetime.datetime | None = None,
    ) -> ProposalOutcome:
        """Book an event if it satisfies the scheduling policy and does not
        double-book the room or the speaker.

        Parameters
        ----------
        title
            The event title. Must not be blank.
        speaker_username
            The username of the speaker giving the event.
        room_id
            The identity of the room hosting the event.
        start
            When the event starts.
        end
            When the event ends. Defaults to `start` plus the policy's
            event duration.
        """
        if not title.strip():
            return ProposalOutcome.rejected(RejectionReason.EMPTY_TITLE)
        user = self.user_manager.lookup_user_by_username(speaker_username)
        if user is None:
            return ProposalOutcome.rejected(RejectionReason.UNKNOWN_SPEAKER)
        speaker = as_speaker(user)
        if speaker is None:
            return ProposalOutcome.rejected(RejectionReason.NOT_A_SPEAKER)
        room = self.room_manager.get_room(room_id)
        if room is None:
            return ProposalOutcome.rejected(RejectionReason.UNKNOWN_ROOM)

        interval = (
            self.policy.interval_for(start)
            if end is None
            else TimeInterval(start=start, end=end)
        )
        if (reason := self.policy.check_interval(interval)) is not None:
            logger.debug(f"'{title}' at {interval} rejected: {reason}")
            return ProposalOutcome.rejected(reason)

        event, conflicts = self.room_manager.try_schedule_event(
            title, speaker, interval.start, interval.end, room
        )
        if event is None:
            if not conflicts:
                return ProposalOutcome.rejected(RejectionReason.MALFORMED_INTERVAL)
            reason = (
                RejectionReason.ROOM_CONFLICT
                if any(c.room_id == room.room_id for c in conflicts)
                else RejectionReason.SPEAKER_CONFLICT
            )
            return ProposalOutcome.rejected(reason, conflicts)
        return ProposalOutcome(accepted=True, event=event)
