#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import logging

import hydra
from omegaconf import DictConfig, OmegaConf

from confsched.configs import build_policy, register_configs
from confsched.interactive.display import display_outcome, display_speaker_schedule
from confsched.scheduling.exceptions import ParseError
from confsched.scheduling.policy import RejectionReason
from confsched.scheduling.scheduler import Scheduler
from confsched.scheduling.time_utils import parse_datetime
from confsched.scheduling.users import as_speaker
from confsched.store.state_store import StateStore

logger = logging.getLogger(__name__)

register_configs()


@hydra.main(version_base=None, config_name="schedule_event")
def schedule_event(cfg: DictConfig):
    if cfg.debug:
        logger.info(OmegaConf.to_yaml(cfg, resolve=True))
    try:
        start = parse_datetime(cfg.event.start)
    except ParseError as e:
        logger.warning(f"Proposal '{cfg.event.title}' rejected: {e}")
        return
    with StateStore(cfg.state_dir).session() as (user_manager, room_manager):
        room = room_manager.lookup_room_by_name(cfg.event.room)
        if room is None:
            names = ", ".join(r.room_name for r in room_manager.rooms)
            logger.warning(
                f"Room '{cfg.event.room}' not found. Rooms available: {names}"
            )
            return
        scheduler = Scheduler(user_manager, room_manager, build_policy(cfg.scheduling))
        outcome = scheduler.propose(
            cfg.event.title, cfg.event.speaker, room.room_id, start
        )
        display_outcome(outcome, user_manager, room_manager)
        if not outcome.accepted:
            logger.warning(f"Proposal '{cfg.event.title}' rejected: {outcome.reason}")
            if outcome.reason == RejectionReason.UNKNOWN_SPEAKER:
                suggestions = user_manager.find_speakers(cfg.event.speaker)
                if suggestions:
                    names = ", ".join(s.username for s in suggestions)
                    logger.info(f"Did you mean: {names}?")
            return
        speaker = as_speaker(user_manager.lookup_user_by_username(cfg.event.speaker))
        display_speaker_schedule(speaker, user_manager, room_manager)


if __name__ == "__main__":
    schedule_event()
