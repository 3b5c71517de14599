#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime

from rich.console import Console

from confsched.interactive.display import (
    display_outcome,
    display_rooms,
    display_speaker_schedule,
)
from confsched.scheduling.rooms import Room, RoomManager
from confsched.scheduling.scheduler import Scheduler
from confsched.scheduling.users import Speaker, UserManager


def at(hour: int, minute: int = 0) -> datetime.datetime:
    return datetime.datetime(2024, 7, 1, hour, minute)


def _console() -> Console:
    return Console(record=True, width=200)


def test_display_rooms(
    user_manager: UserManager,
    room_manager: RoomManager,
    speakers: dict[str, Speaker],
    rooms: dict[str, Room],
):
    room_manager.create_event(
        "Keynote", speakers["alice"], at(10), at(11), rooms["Room 1"]
    )
    console = _console()
    display_rooms(user_manager, room_manager, console=console)
    output = console.export_text()
    assert "Room 1 (Capacity: 30)" in output
    assert "Room 2" in output
    assert "Keynote" in output
    assert "alice" in output


def test_display_no_rooms(user_manager: UserManager):
    console = _console()
    display_rooms(user_manager, RoomManager(), console=console)
    assert "No rooms found!" in console.export_text()


def test_display_speaker_schedule(
    user_manager: UserManager,
    room_manager: RoomManager,
    speakers: dict[str, Speaker],
    rooms: dict[str, Room],
):
    room_manager.create_event(
        "Keynote", speakers["alice"], at(10), at(11), rooms["Room 1"]
    )
    room_manager.create_event(
        "Panel", speakers["bob"], at(10), at(11), rooms["Room 2"]
    )
    console = _console()
    display_speaker_schedule(speakers["alice"], user_manager, room_manager, console)
    output = console.export_text()
    assert "Events by Speaker alice" in output
    assert "Keynote" in output
    assert "Panel" not in output


def test_display_outcome(
    scheduler: Scheduler,
    user_manager: UserManager,
    room_manager: RoomManager,
    rooms: dict[str, Room],
):
    room_id = rooms["Room 1"].room_id
    console = _console()
    display_outcome(
        scheduler.propose("Keynote", "alice", room_id, at(10)),
        user_manager,
        room_manager,
        console,
    )
    display_outcome(
        scheduler.propose("Clash", "bob", room_id, at(10, 30)),
        user_manager,
        room_manager,
        console,
    )
    output = console.export_text()
    assert "Event scheduled: 'Keynote'" in output
    assert "The room is in use at this time." in output
    assert "Conflicting events" in output
