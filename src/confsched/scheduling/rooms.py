#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Rooms, the events booked into them and the conflict checks that keep
rooms and speakers from being double-booked."""

import datetime
import logging
import threading
from typing import Self, Sequence

from pydantic import BaseModel, Field, model_validator

from confsched.scheduling.exceptions import (
    InvalidReferenceError,
    PreconditionViolatedError,
)
from confsched.scheduling.time_utils import TimeInterval
from confsched.scheduling.users import (
    Attendee,
    EventId,
    RoomId,
    Speaker,
    UserId,
    UserManager,
    new_id,
)

logger = logging.getLogger(__name__)


class Room(BaseModel):
    """A bookable location.

    Parameters
    ----------
    room_name
        Human readable label, eg "Room 1".
    capacity
        How many people fit in the room, if known.
    events
        The ids of the events hosted in the room, in creation order.
    """

    room_id: RoomId = Field(default_factory=new_id, frozen=True)
    room_name: str
    capacity: int | None = None
    events: list[EventId] = Field(default_factory=list)

    def __str__(self) -> str:
        if self.capacity is None:
            return self.room_name
        return f"{self.room_name} (Capacity: {self.capacity})"


class Event(BaseModel):
    """A single scheduled occurrence.

    Parameters
    ----------
    starts_at, ends_at
        The event occupies the half-open interval ``[starts_at, ends_at)``.
    speaker_id
        The identity of the (single) speaker of the event.
    room_id
        The identity of the room hosting the event.
    attendee_ids
        The users signed up to the event. Each id appears at most once.
    """

    event_id: EventId = Field(default_factory=new_id, frozen=True)
    title: str = Field(frozen=True)
    starts_at: datetime.datetime = Field(frozen=True)
    ends_at: datetime.datetime = Field(frozen=True)
    speaker_id: UserId = Field(frozen=True)
    room_id: RoomId = Field(frozen=True)
    attendee_ids: list[UserId] = Field(default_factory=list)

    @model_validator(mode="after")
    def starts_before_end(self) -> Self:
        if not self.starts_at < self.ends_at:
            raise ValueError(
                "Event must start before it ends, "
                f"got {self.starts_at} - {self.ends_at}"
            )
        return self

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(start=self.starts_at, end=self.ends_at)

    def add_attendees(self, attendees_to_add: Sequence[Attendee]) -> None:
        """Sign up `attendees_to_add`. Attendees already signed up are skipped."""
        for attendee in attendees_to_add:
            if attendee.user_id not in self.attendee_ids:
                self.attendee_ids.append(attendee.user_id)

    def remove_attendee(self, attendee: Attendee) -> bool:
        """Remove `attendee` from the event.

        Returns
        -------
        True if the attendee was signed up and has been removed, False if
        they were not signed up in the first place.
        """
        try:
            self.attendee_ids.remove(attendee.user_id)
        except ValueError:
            return False
        return True

    def __str__(self) -> str:
        return f"'{self.title}' {self.interval} ({len(self.attendee_ids)} attending)"


class RoomManager:
    """Owns the rooms and events of the conference.

    Rooms and events are stored in tables keyed by their identity and
    reference each other (and speakers) by identity only.

    Parameters
    ----------
    user_manager
        If set, speakers passed to the manager must be the accounts
        registered there.
    """

    def __init__(self, user_manager: UserManager | None = None):
        self.user_manager = user_manager
        self._rooms: dict[RoomId, Room] = {}
        self._events: dict[EventId, Event] = {}
        # guards the validate-then-create sequence in `schedule_event`
        self._lock = threading.RLock()

    @property
    def rooms(self) -> list[Room]:
        return list(self._rooms.values())

    @property
    def events(self) -> list[Event]:
        return list(self._events.values())

    def add_room(self, room: Room) -> Room:
        if room.room_id in self._rooms:
            raise InvalidReferenceError(f"Room {room.room_id} is already registered")
        self._rooms[room.room_id] = room
        return room

    def create_room(self, room_name: str, capacity: int | None = None) -> Room:
        room = self.add_room(Room(room_name=room_name, capacity=capacity))
        logger.info(f"Created room '{room_name}'")
        return room

    def get_room(self, room_id: RoomId) -> Room | None:
        return self._rooms.get(room_id)

    def lookup_room_by_name(self, room_name: str) -> Room | None:
        """Case-insensitive lookup of a room by its label."""
        for room in self._rooms.values():
            if room.room_name.lower() == room_name.lower():
                return room
        return None

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    def get_events_for_room(self, room: Room) -> list[Event]:
        """The events hosted in `room`, in creation order.

        Raises
        ------
        InvalidReferenceError if `room` is not managed by this manager.
        """
        return self._lookup_events(self._resolve_room(room).events)

    def get_events_for_speaker(self, speaker: Speaker) -> list[Event]:
        """The events `speaker` is booked for, grouped by room.

        Raises
        ------
        InvalidReferenceError if `speaker` is booked for an event this
        manager does not know.
        """
        return self._lookup_events(speaker.booked_event_ids())

    def find_conflicts(
        self,
        speaker: Speaker,
        start: datetime.datetime,
        end: datetime.datetime,
        room: Room,
    ) -> list[Event]:
        """Return the events that would clash with an event held by
        `speaker` in `room` during ``[start, end)``.

        Events booked in `room` are listed first, followed by the events
        the speaker gives in other rooms. The events of `room` are read
        from this manager's table, never from the object passed in.

        Raises
        ------
        InvalidReferenceError if `room` is not managed by this manager or
        `speaker` is not a registered speaker.
        """
        room = self._resolve_room(room)
        self._check_speaker(speaker)
        candidate = TimeInterval(start=start, end=end)
        conflicts = [
            event
            for event in self.get_events_for_room(room)
            if event.interval.overlaps(candidate)
        ]
        # the speaker may be busy in any room, not just the target one
        for event in self.get_events_for_speaker(speaker):
            if event.interval.overlaps(candidate) and event not in conflicts:
                conflicts.append(event)
        for event in conflicts:
            logger.debug(f"{candidate} clashes with {event}")
        return conflicts

    def is_event_creation_valid(
        self,
        title: str,
        speaker: Speaker,
        start: datetime.datetime,
        end: datetime.datetime,
        room: Room,
    ) -> bool:
        """Check whether an event can be created without double-booking
        `room` or `speaker`.

        Parameters
        ----------
        title
            The title of the proposed event. It does not take part in
            the check.
        speaker
            The speaker of the proposed event.
        start, end
            The proposed event occupies ``[start, end)``.
        room
            The room the event would be held in.

        Returns
        -------
        False if the interval is empty or reversed, if `room` hosts an
        overlapping event or if `speaker` speaks at an overlapping event
        in any room. True otherwise.

        Raises
        ------
        InvalidReferenceError if `room` or `speaker` do not exist.
        """
        if not TimeInterval(start=start, end=end).is_well_formed():
            return False
        return not self.find_conflicts(speaker, start, end, room)

    def create_event(
        self,
        title: str,
        speaker: Speaker,
        start: datetime.datetime,
        end: datetime.datetime,
        room: Room,
    ) -> Event:
        """Create an event and register it with `room` and `speaker`.

        Callers must have checked `is_event_creation_valid` with the
        same arguments; conflicts are not checked again here. Use
        `schedule_event` to check and create in one step.

        Raises
        ------
        InvalidReferenceError if `room` is not managed by this manager
        or `speaker` is not a registered speaker.
        PreconditionViolatedError if `start` is not before `end`.
        """
        managed_room = self._resolve_room(room)
        self._check_speaker(speaker)
        if not start < end:
            raise PreconditionViolatedError(
                f"Cannot create an event starting at {start} and ending at {end}"
            )
        event = Event(
            title=title,
            starts_at=start,
            ends_at=end,
            speaker_id=speaker.user_id,
            room_id=managed_room.room_id,
        )
        self._register(event, speaker, managed_room)
        logger.info(
            f"Created event '{title}' in {managed_room.room_name} with "
            f"{speaker.username} at {event.interval}"
        )
        return event

    def schedule_event(
        self,
        title: str,
        speaker: Speaker,
        start: datetime.datetime,
        end: datetime.datetime,
        room: Room,
    ) -> Event | None:
        """Check and create an event as a single step.

        Returns
        -------
        The new event, or None if it would double-book the room or the
        speaker (or if the interval is malformed).
        """
        event, _ = self.try_schedule_event(title, speaker, start, end, room)
        return event

    def try_schedule_event(
        self,
        title: str,
        speaker: Speaker,
        start: datetime.datetime,
        end: datetime.datetime,
        room: Room,
    ) -> tuple[Event | None, list[Event]]:
        """Like `schedule_event`, but also return the events that prevented
        the booking. They are found under the same lock as the check, so
        they are exactly the events the check saw.

        Returns
        -------
        ``(event, [])`` if the event was created, ``(None, conflicts)``
        otherwise. `conflicts` is empty only if the interval is malformed.
        """
        with self._lock:
            if not TimeInterval(start=start, end=end).is_well_formed():
                return None, []
            conflicts = self.find_conflicts(speaker, start, end, room)
            if conflicts:
                return None, conflicts
            return self.create_event(title, speaker, start, end, room), []

    def add_event(self, event: Event, speaker: Speaker) -> Event:
        """Register an existing event (eg one loaded from disk) with its room
        and speaker.

        Raises
        ------
        InvalidReferenceError if the event's room is not managed by this
        manager, `speaker` is not the event's speaker or the event is
        already registered.
        """
        room = self.get_room(event.room_id)
        if room is None:
            raise InvalidReferenceError(
                f"Event {event.event_id} refers to unknown room {event.room_id}"
            )
        self._check_speaker(speaker)
        if speaker.user_id != event.speaker_id:
            raise InvalidReferenceError(
                f"{speaker.username} does not speak at event {event.event_id}"
            )
        if event.event_id in self._events:
            raise InvalidReferenceError(f"Event {event.event_id} already registered")
        self._register(event, speaker, room)
        return event

    def remove_event(self, event_id: EventId, speaker: Speaker) -> bool:
        """Delete an event, detaching it from its room and its speaker.

        Returns
        -------
        False if no event with `event_id` exists, True otherwise.

        Raises
        ------
        InvalidReferenceError if `speaker` is not the speaker of the event
        or is not booked for it. Nothing is removed in that case.
        """
        with self._lock:
            event = self._events.get(event_id)
            if event is None:
                return False
            self._check_speaker(speaker)
            bucket = speaker.events_speaking.get(event.room_id, [])
            if speaker.user_id != event.speaker_id or event_id not in bucket:
                raise InvalidReferenceError(
                    f"{speaker.username} does not speak at event {event_id}"
                )
            del self._events[event_id]
            self._rooms[event.room_id].events.remove(event_id)
            bucket.remove(event_id)
            if not bucket:
                del speaker.events_speaking[event.room_id]
        logger.info(f"Removed event '{event.title}'")
        return True

    def sign_up(self, event_id: EventId, attendee: Attendee) -> bool:
        """Sign `attendee` up to an event.

        Returns
        -------
        True if the attendee was added, False if the event does not exist
        or the attendee was already signed up.
        """
        event = self.get_event(event_id)
        if event is None or attendee.user_id in event.attendee_ids:
            return False
        event.add_attendees([attendee])
        return True

    def cancel_sign_up(self, event_id: EventId, attendee: Attendee) -> bool:
        event = self.get_event(event_id)
        if event is None:
            return False
        return event.remove_attendee(attendee)

    def _resolve_room(self, room: Room) -> Room:
        managed_room = self._rooms.get(room.room_id)
        if managed_room is None:
            raise InvalidReferenceError(f"Room '{room.room_name}' is not registered")
        return managed_room

    def _check_speaker(self, speaker: Speaker) -> None:
        if not isinstance(speaker, Speaker):
            raise InvalidReferenceError(f"{speaker} cannot speak at events")
        if (
            self.user_manager is not None
            and self.user_manager.get_user(speaker.user_id) is not speaker
        ):
            raise InvalidReferenceError(
                f"Speaker '{speaker.username}' is not registered"
            )

    def _lookup_events(self, event_ids: list[EventId]) -> list[Event]:
        events = []
        for event_id in event_ids:
            event = self._events.get(event_id)
            if event is None:
                raise InvalidReferenceError(f"Unknown event {event_id}")
            events.append(event)
        return events

    def _register(self, event: Event, speaker: Speaker, room: Room) -> None:
        self._events[event.event_id] = event
        room.events.append(event.event_id)
        speaker.events_speaking.setdefault(room.room_id, []).append(event.event_id)
