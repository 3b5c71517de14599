#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Structured configs for the command line endpoints. Every field can be
overridden from the command line, eg ``schedule_event event.title=Keynote``."""

import datetime
from dataclasses import dataclass, field
from typing import List, Optional

from hydra.core.config_store import ConfigStore
from omegaconf import MISSING

from confsched.scheduling.policy import (
    DEFAULT_EVENT_DURATION_MINUTES,
    EARLIEST_START_HOUR,
    LATEST_START_HOUR,
    TimeWindowPolicy,
)


@dataclass
class SchedulingConfig:
    earliest_hour: int = EARLIEST_START_HOUR
    latest_hour: int = LATEST_START_HOUR
    event_duration_minutes: int = DEFAULT_EVENT_DURATION_MINUTES


@dataclass
class EventProposalConfig:
    title: str = MISSING
    speaker: str = MISSING
    # the room name, eg "Room 1"
    room: str = MISSING
    start: str = MISSING


@dataclass
class AccountConfig:
    username: str = MISSING
    password: str = MISSING
    role: str = "attendee"


@dataclass
class ConferenceConfig:
    state_dir: str = "${root:state}"
    debug: bool = False
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)


@dataclass
class ScheduleEventConfig(ConferenceConfig):
    event: EventProposalConfig = field(default_factory=EventProposalConfig)


@dataclass
class ManageConferenceConfig(ConferenceConfig):
    accounts: List[AccountConfig] = field(default_factory=list)
    rooms: List[str] = field(default_factory=list)


@dataclass
class ShowScheduleConfig(ConferenceConfig):
    # restrict the output to one speaker, if set
    speaker: Optional[str] = None


def build_policy(cfg: SchedulingConfig) -> TimeWindowPolicy:
    return TimeWindowPolicy(
        earliest_hour=cfg.earliest_hour,
        latest_hour=cfg.latest_hour,
        event_duration=datetime.timedelta(minutes=cfg.event_duration_minutes),
    )


def register_configs() -> None:
    cs = ConfigStore.instance()
    cs.store(name="schedule_event", node=ScheduleEventConfig)
    cs.store(name="manage_conference", node=ManageConferenceConfig)
    cs.store(name="show_schedule", node=ShowScheduleConfig)
