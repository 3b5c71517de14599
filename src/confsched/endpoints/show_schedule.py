#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import logging

import hydra
from omegaconf import DictConfig

from confsched.configs import register_configs
from confsched.interactive.display import display_rooms, display_speaker_schedule
from confsched.scheduling.users import as_speaker
from confsched.store.state_store import StateStore

logger = logging.getLogger(__name__)

register_configs()


@hydra.main(version_base=None, config_name="show_schedule")
def show_schedule(cfg: DictConfig):
    user_manager, room_manager = StateStore(cfg.state_dir).load()
    if cfg.speaker is None:
        display_rooms(user_manager, room_manager)
        return
    speaker = as_speaker(user_manager.lookup_user_by_username(cfg.speaker))
    if speaker is None:
        logger.warning(f"{cfg.speaker} is not a Speaker")
        return
    display_speaker_schedule(speaker, user_manager, room_manager)


if __name__ == "__main__":
    show_schedule()
