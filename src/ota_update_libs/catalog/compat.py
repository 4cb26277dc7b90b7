# Copyright 2025 TIER IV, INC. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Decide whether an update is compatible with, or installable on the device.

NOTE: is_compatible and can_install are two different gates and are kept
    separated on purpose:
    1. is_compatible decides whether an update should be listed, it accepts
       any update whose version is not older than the current version.
    2. can_install decides whether an update can be installed now, it only
       accepts update with exactly the current version.
"""

from __future__ import annotations

import logging

from ota_update_libs.device_config import DeviceConfig

from .schema import UpdateRecord

logger = logging.getLogger(__name__)


def _newer_than_current_build(update: UpdateRecord, cfg: DeviceConfig) -> bool:
    return update.timestamp > cfg.current_build_timestamp


def is_compatible(update: UpdateRecord, cfg: DeviceConfig) -> bool:
    if update.version < cfg.current_version:
        logger.debug(
            f"{update.name} is older than current version {cfg.current_version}"
        )
        return False

    if not cfg.downgrade_allowed and not _newer_than_current_build(update, cfg):
        logger.debug(f"{update.name} is older than/equal to the current build")
        return False

    if update.release_type.casefold() != cfg.current_release_type.casefold():
        logger.debug(f"{update.name} has release type {update.release_type}")
        return False

    logger.debug(f"{update.name} is compatible, ts: {update.timestamp}")
    return True


def can_install(update: UpdateRecord, cfg: DeviceConfig) -> bool:
    return (
        cfg.downgrade_allowed or _newer_than_current_build(update, cfg)
    ) and update.version.casefold() == cfg.current_version.casefold()
