#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
from enum import StrEnum, auto

import polars as pl

from confsched.scheduling.users import UserRole


class DatabaseNamespace(StrEnum):
    """Namespace for each table of the persisted conference state"""

    USERS = auto()
    ROOMS = auto()
    EVENTS = auto()


DATABASE_SCHEMAS = {
    DatabaseNamespace.USERS: {
        "user_id": pl.String,
        "username": pl.String,
        "password": pl.String,
        "role": pl.Enum([x.value for x in UserRole]),
    },
    DatabaseNamespace.ROOMS: {
        "room_id": pl.String,
        "room_name": pl.String,
        "capacity": pl.Int32,
    },
    # room event lists and speaker bookings are rebuilt from this table
    DatabaseNamespace.EVENTS: {
        "event_id": pl.String,
        "title": pl.String,
        "starts_at": pl.Datetime,
        "ends_at": pl.Datetime,
        "speaker_id": pl.String,
        "room_id": pl.String,
        "attendee_ids": pl.List(pl.String),
    },
}
