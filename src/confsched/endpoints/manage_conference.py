#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Register accounts and rooms, eg

    manage_conference 'rooms=[Room 1, Room 2]' \
        'accounts=[{username: alice, password: pw, role: speaker}]'
"""

import logging

import hydra
from omegaconf import DictConfig, OmegaConf

from confsched.configs import register_configs
from confsched.scheduling.exceptions import UsernameTakenError
from confsched.store.state_store import StateStore

logger = logging.getLogger(__name__)

register_configs()


@hydra.main(version_base=None, config_name="manage_conference")
def manage_conference(cfg: DictConfig):
    if cfg.debug:
        logger.info(OmegaConf.to_yaml(cfg, resolve=True))
    with StateStore(cfg.state_dir).session() as (user_manager, room_manager):
        for room_name in cfg.rooms:
            if room_manager.lookup_room_by_name(room_name) is not None:
                logger.warning(f"Room '{room_name}' already exists, skipping")
                continue
            room_manager.create_room(room_name)
        for account in cfg.accounts:
            try:
                user_manager.create_user(
                    account.username, account.password, account.role
                )
            except UsernameTakenError as e:
                logger.warning(f"{e}, skipping")


if __name__ == "__main__":
    manage_conference()
