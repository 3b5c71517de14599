#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Conference accounts. Every user shares an identity, a username and
credentials; speakers additionally track the events they are booked for."""

import logging
import uuid
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter
from rapidfuzz import fuzz, process, utils

from confsched.scheduling.exceptions import (
    InvalidCredentialsError,
    UsernameTakenError,
)

UserId = str
RoomId = str
EventId = str

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Allocate a fresh opaque identity."""
    return str(uuid.uuid4())


class UserRole(StrEnum):
    ATTENDEE = "attendee"
    SPEAKER = "speaker"
    ORGANIZER = "organizer"


class BaseUser(BaseModel):
    """Fields shared by every account type.

    Parameters
    ----------
    user_id
        The identity of the user, assigned once at construction.
    username
        Unique across all users. Uniqueness is enforced by `UserManager`.
    password
        The credentials checked at login.
    """

    user_id: UserId = Field(default_factory=new_id, frozen=True)
    username: str
    password: str

    def __str__(self) -> str:
        return f"{self.username} ({type(self).__name__.lower()})"


class Attendee(BaseUser):
    role: Literal["attendee"] = "attendee"


class Organizer(BaseUser):
    role: Literal["organizer"] = "organizer"


class Speaker(BaseUser):
    """A user who can be booked to speak at events.

    Parameters
    ----------
    events_speaking
        The events this speaker is booked for, grouped by the room
        hosting them. Kept in sync by `RoomManager` as events are
        created or removed.
    """

    role: Literal["speaker"] = "speaker"
    events_speaking: dict[RoomId, list[EventId]] = Field(default_factory=dict)

    def booked_event_ids(self) -> list[EventId]:
        """The ids of all events the speaker is booked for, room by room."""
        return [
            event_id
            for event_ids in self.events_speaking.values()
            for event_id in event_ids
        ]


User = Annotated[Attendee | Speaker | Organizer, Field(discriminator="role")]
UserAdapter: TypeAdapter[User] = TypeAdapter(User)

_USER_TYPES: dict[UserRole, type[BaseUser]] = {
    UserRole.ATTENDEE: Attendee,
    UserRole.SPEAKER: Speaker,
    UserRole.ORGANIZER: Organizer,
}


def as_speaker(user: BaseUser | None) -> Speaker | None:
    """Narrow `user` to a `Speaker`, or return `None` if it is any other
    kind of account."""
    if isinstance(user, Speaker):
        return user
    return None


class UserManager:
    """Owns the users of the conference, keyed by identity."""

    def __init__(self):
        self._users: dict[UserId, User] = {}
        self._username_to_id: dict[str, UserId] = {}

    def __len__(self) -> int:
        return len(self._users)

    @property
    def users(self) -> list[User]:
        return list(self._users.values())

    @property
    def usernames(self) -> list[str]:
        return list(self._username_to_id)

    def add_user(self, user: User) -> User:
        """Register an already constructed user.

        Raises
        ------
        UsernameTakenError if another user has the same username.
        """
        if user.username in self._username_to_id:
            raise UsernameTakenError(f"Username '{user.username}' is already taken")
        self._users[user.user_id] = user
        self._username_to_id[user.username] = user.user_id
        return user

    def create_user(
        self, username: str, password: str, role: UserRole | str = UserRole.ATTENDEE
    ) -> User:
        """Create an account of type `role`.

        Raises
        ------
        UsernameTakenError if `username` is already registered.
        ValueError if `role` is not a known role.
        """
        user_type = _USER_TYPES[UserRole(role)]
        user = self.add_user(user_type(username=username, password=password))
        logger.info(f"Created {user.role} account '{username}'")
        return user

    def get_user(self, user_id: UserId) -> User | None:
        return self._users.get(user_id)

    def lookup_user_by_username(self, username: str) -> User | None:
        user_id = self._username_to_id.get(username)
        if user_id is None:
            return None
        return self._users[user_id]

    def authenticate(self, username: str, password: str) -> User:
        """Return the user whose credentials match.

        Raises
        ------
        InvalidCredentialsError if the username is unknown or the
        password does not match.
        """
        user = self.lookup_user_by_username(username)
        if user is None or user.password != password:
            raise InvalidCredentialsError("Invalid username or password")
        return user

    def list_speakers(self) -> list[Speaker]:
        """All speakers, in registration order."""
        return [user for user in self._users.values() if isinstance(user, Speaker)]

    def find_speakers(self, name: str, threshold: int = 80) -> list[Speaker]:
        """Fuzzy search the speakers by username, best match first.

        Parameters
        ----------
        name
            The (possibly misspelled) username searched for.
        threshold
            Minimum `fuzz.WRatio` score for a speaker to be returned.
        """
        speakers = self.list_speakers()
        matches = process.extract(
            query=name,
            choices=[speaker.username for speaker in speakers],
            processor=utils.default_process,
            scorer=fuzz.WRatio,
            score_cutoff=threshold,
            limit=10,
        )
        # process.extract returns a tuple of (string, score, index)
        return [speakers[match[-1]] for match in matches]
