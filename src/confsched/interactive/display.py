#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
from rich.console import Console
from rich.table import Table

from confsched.scheduling.policy import RejectionReason
from confsched.scheduling.rooms import Event, RoomManager
from confsched.scheduling.scheduler import ProposalOutcome
from confsched.scheduling.users import Speaker, UserManager

REJECTION_MESSAGES = {
    RejectionReason.EMPTY_TITLE: "The event title cannot be blank.",
    RejectionReason.UNKNOWN_SPEAKER: "No user with that username exists.",
    RejectionReason.NOT_A_SPEAKER: "That user is not a Speaker.",
    RejectionReason.UNKNOWN_ROOM: "The room does not exist.",
    RejectionReason.MALFORMED_INTERVAL: "The event must end after it starts.",
    RejectionReason.IN_THE_PAST: "The event cannot be scheduled in the past.",
    RejectionReason.OUTSIDE_WINDOW: "The event falls outside the allowed hours.",
    RejectionReason.LATEST_HOUR_NOT_ON_THE_HOUR: (
        "Events in the last allowed hour must start on the hour."
    ),
    RejectionReason.ROOM_CONFLICT: "The room is in use at this time.",
    RejectionReason.SPEAKER_CONFLICT: (
        "The speaker is speaking in another room at this time."
    ),
}


def _events_table(
    title: str,
    events: list[Event],
    user_manager: UserManager,
    room_manager: RoomManager,
) -> Table:
    """
    ┏━━━━━━━┳━━━━━━━━━━━━━━━━━━━┳━━━━━━┳━━━━━━━━━┳━━━━━━━━━━━┓
    ┃ Title ┃ When              ┃ Room ┃ Speaker ┃ Attendees ┃
    ┡━━━━━━━╇━━━━━━━━━━━━━━━━━━━╇━━━━━━╇━━━━━━━━━╇━━━━━━━━━━━┩
    """  # noqa
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Title", style="white")
    table.add_column("When", style="cyan", no_wrap=True)
    table.add_column("Room", style="green")
    table.add_column("Speaker", style="yellow")
    table.add_column("Attendees", justify="right")
    for event in events:
        speaker = user_manager.get_user(event.speaker_id)
        room = room_manager.get_room(event.room_id)
        table.add_row(
            event.title,
            str(event.interval),
            room.room_name if room else event.room_id,
            speaker.username if speaker else event.speaker_id,
            str(len(event.attendee_ids)),
        )
    return table


def display_rooms(
    user_manager: UserManager,
    room_manager: RoomManager,
    console: Console | None = None,
):
    """Print one table per room listing its events in creation order."""
    console = console or Console()
    if not room_manager.rooms:
        console.print("No rooms found!")
        return
    for room in room_manager.rooms:
        events = room_manager.get_events_for_room(room)
        console.print(_events_table(str(room), events, user_manager, room_manager))


def display_speaker_schedule(
    speaker: Speaker,
    user_manager: UserManager,
    room_manager: RoomManager,
    console: Console | None = None,
):
    console = console or Console()
    events = room_manager.get_events_for_speaker(speaker)
    console.print(
        _events_table(
            f"Events by Speaker {speaker.username}",
            events,
            user_manager,
            room_manager,
        )
    )


def display_outcome(
    outcome: ProposalOutcome,
    user_manager: UserManager,
    room_manager: RoomManager,
    console: Console | None = None,
):
    """Report whether a proposed event was scheduled and, if not, why."""
    console = console or Console()
    if outcome.accepted:
        console.print(f"[bold green]Event scheduled:[/bold green] {outcome.event}")
        return
    console.print(
        "[bold red]The event was unable to be created:[/bold red] "
        f"{REJECTION_MESSAGES[outcome.reason]}"
    )
    if outcome.conflicts:
        console.print(
            _events_table(
                "Conflicting events", outcome.conflicts, user_manager, room_manager
            )
        )
