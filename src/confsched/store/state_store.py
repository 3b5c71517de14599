#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Persistence of the conference state between sessions.

The users, rooms and events are flattened into one polars dataframe per
`DatabaseNamespace` and written as parquet files. Derived relationships
(the events of each room and the bookings of each speaker) are not
stored; they are rebuilt from the events table on load.
"""

import contextlib
import logging
from pathlib import Path
from typing import Iterator

import polars as pl

from confsched.scheduling.exceptions import InvalidReferenceError
from confsched.scheduling.rooms import Event, Room, RoomManager
from confsched.scheduling.users import UserAdapter, UserManager, as_speaker
from confsched.store.database_schemas import DATABASE_SCHEMAS, DatabaseNamespace

logger = logging.getLogger(__name__)


class StateStore:
    """Loads and saves a `UserManager` / `RoomManager` pair.

    Parameters
    ----------
    state_dir
        Directory holding one ``<namespace>.parquet`` file per table.
    """

    dbs_schemas: dict[DatabaseNamespace, dict[str, pl.DataType]] = DATABASE_SCHEMAS

    def __init__(self, state_dir: Path | str):
        self.state_dir = Path(state_dir)

    def _path(self, namespace: DatabaseNamespace) -> Path:
        return self.state_dir / f"{namespace}.parquet"

    @classmethod
    def dump(
        cls, user_manager: UserManager, room_manager: RoomManager
    ) -> dict[DatabaseNamespace, pl.DataFrame]:
        """Flatten the managers into one dataframe per namespace."""
        records = {
            DatabaseNamespace.USERS: [
                user.model_dump(include={"user_id", "username", "password", "role"})
                for user in user_manager.users
            ],
            DatabaseNamespace.ROOMS: [
                room.model_dump(exclude={"events"}) for room in room_manager.rooms
            ],
            # events are listed in creation order, which preserves the
            # order of each room's event list on restore
            DatabaseNamespace.EVENTS: [
                event.model_dump() for event in room_manager.events
            ],
        }
        return {
            namespace: pl.DataFrame(rows, schema=cls.dbs_schemas[namespace])
            for namespace, rows in records.items()
        }

    @classmethod
    def restore(
        cls, dbs: dict[DatabaseNamespace, pl.DataFrame]
    ) -> tuple[UserManager, RoomManager]:
        """Rebuild the managers from the dataframes produced by `dump`.

        Raises
        ------
        InvalidReferenceError if an event refers to a user that is not a
        speaker or to a room that does not exist.
        """
        user_manager = UserManager()
        for record in dbs[DatabaseNamespace.USERS].to_dicts():
            user_manager.add_user(UserAdapter.validate_python(record))
        room_manager = RoomManager(user_manager)
        for record in dbs[DatabaseNamespace.ROOMS].to_dicts():
            room_manager.add_room(Room(**record))
        for record in dbs[DatabaseNamespace.EVENTS].to_dicts():
            record["attendee_ids"] = record["attendee_ids"] or []
            event = Event(**record)
            speaker = as_speaker(user_manager.get_user(event.speaker_id))
            if speaker is None:
                raise InvalidReferenceError(
                    f"Event {event.event_id} refers to unknown speaker "
                    f"{event.speaker_id}"
                )
            room_manager.add_event(event, speaker)
        return user_manager, room_manager

    def save(self, user_manager: UserManager, room_manager: RoomManager) -> None:
        self.state_dir.mkdir(parents=True, exist_ok=True)
        for namespace, dataframe in self.dump(user_manager, room_manager).items():
            dataframe.write_parquet(self._path(namespace))
        logger.info(
            f"Saved {len(user_manager)} users, {len(room_manager.rooms)} rooms and "
            f"{len(room_manager.events)} events to {self.state_dir}"
        )

    def load(self) -> tuple[UserManager, RoomManager]:
        """Load the saved state. A directory without saved state yields
        empty managers."""
        if not all(self._path(namespace).exists() for namespace in DatabaseNamespace):
            logger.info(f"No saved state in {self.state_dir}, starting empty")
            user_manager = UserManager()
            return user_manager, RoomManager(user_manager)
        dbs = {}
        for namespace in DatabaseNamespace:
            schema = self.dbs_schemas[namespace]
            dbs[namespace] = (
                pl.read_parquet(self._path(namespace)).select(list(schema)).cast(schema)
            )
        user_manager, room_manager = self.restore(dbs)
        logger.info(f"Loaded state from {self.state_dir}")
        return user_manager, room_manager

    @contextlib.contextmanager
    def session(self) -> Iterator[tuple[UserManager, RoomManager]]:
        """Load the state, hand it to the caller and save it back when the
        block exits normally. Nothing is saved if the block raises."""
        user_manager, room_manager = self.load()
        yield user_manager, room_manager
        self.save(user_manager, room_manager)
