#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime

from hydra import compose, initialize
from omegaconf import OmegaConf

from confsched.configs import build_policy, register_configs


def test_compose_schedule_event_config():
    register_configs()
    with initialize(version_base=None):
        cfg = compose(
            config_name="schedule_event",
            overrides=[
                "event.title=Keynote",
                "event.speaker=alice",
                "event.room='Room 1'",
                "event.start='2024-07-01 10:00'",
                "scheduling.latest_hour=17",
            ],
        )
    assert cfg.event.room == "Room 1"
    assert cfg.scheduling.earliest_hour == 9
    assert OmegaConf.to_container(cfg, resolve=True)["state_dir"].endswith("state")
    policy = build_policy(cfg.scheduling)
    assert policy.latest_hour == 17
    assert policy.event_duration == datetime.timedelta(minutes=60)


def test_compose_manage_conference_config():
    register_configs()
    with initialize(version_base=None):
        cfg = compose(
            config_name="manage_conference",
            overrides=[
                "rooms=['Room 1','Room 2']",
                "accounts=[{username: alice, password: pw, role: speaker}]",
            ],
        )
    assert list(cfg.rooms) == ["Room 1", "Room 2"]
    assert cfg.accounts[0].role == "speaker"
