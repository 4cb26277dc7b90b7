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
"""Locate the compressed data of an entry inside a zip container.

The installer needs the offset of the payload inside the update package
    to stream from it directly, without unpacking the package first.

NOTE: the entries are assumed to be laid out contiguously, in the directory
    order, each as local file header followed by its compressed data. The
    offset is computed with a single pass over the directory, it is not
    cross-checked against the actual local file headers.
"""

from __future__ import annotations

import logging
from typing import Iterable, NamedTuple
from zipfile import ZipInfo

from ota_update_libs.consts import ZIP_LOCAL_HEADER_FIXED_SIZE
from ota_update_libs.errors import EntryNotFoundError

logger = logging.getLogger(__name__)


class ZipDirectoryEntry(NamedTuple):
    name: str
    compressed_size: int
    extra_field_length: int = 0

    @classmethod
    def from_zipinfo(cls, zinfo: ZipInfo) -> ZipDirectoryEntry:
        return cls(
            name=zinfo.filename,
            compressed_size=zinfo.compress_size,
            extra_field_length=len(zinfo.extra) if zinfo.extra else 0,
        )

    @property
    def header_size(self) -> int:
        """Size of the local file header of this entry."""
        return (
            ZIP_LOCAL_HEADER_FIXED_SIZE
            + len(self.name.encode("utf-8"))
            + self.extra_field_length
        )


def locate_entry_offset(entries: Iterable[ZipDirectoryEntry], target_name: str) -> int:
    """Get the offset to the compressed data of <target_name>.

    Args:
        entries: The directory entries of the zip container, in container order.
        target_name: The full path of the entry within the container.

    Raises:
        EntryNotFoundError if <target_name> is not in <entries>.
    """
    offset = 0
    for _entry in entries:
        offset += _entry.header_size
        if _entry.name == target_name:
            return offset
        offset += _entry.compressed_size

    logger.error(f"entry {target_name} not found")
    raise EntryNotFoundError(target_name)
