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
"""Detect whether a freshly fetched listing brings updates not seen before."""

from __future__ import annotations

import logging
from typing import Iterable

from ota_update_libs.device_config import DeviceConfig

from .parser import ListingDocument, parse_listing
from .schema import UpdateRecord

logger = logging.getLogger(__name__)


def has_new_updates(
    old_catalog: Iterable[UpdateRecord], new_catalog: Iterable[UpdateRecord]
) -> bool:
    """Return True if <new_catalog> has at least one update not in <old_catalog>.

    Updates are identified by download_id. Both catalogs are expected to
        be filtered already, no compatibility check is done here.
    """
    old_ids = {_update.download_id for _update in old_catalog}
    for _update in new_catalog:
        if _update.download_id not in old_ids:
            logger.debug(f"found new update: {_update.name} ({_update.download_id})")
            return True
    return False


def check_for_new_updates(
    old_document: ListingDocument,
    new_document: ListingDocument,
    device_config: DeviceConfig,
) -> bool:
    """Compare two bucket listings.

    Returns:
        True if <new_document> has at least one compatible update
            not available in <old_document>.
    """
    old_catalog = parse_listing(old_document, device_config, compatible_only=True)
    new_catalog = parse_listing(new_document, device_config, compatible_only=True)
    return has_new_updates(old_catalog, new_catalog)
