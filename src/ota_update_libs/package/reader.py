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
"""Read the metadata of an update package without decompressing it."""

from __future__ import annotations

import logging
from os import PathLike
from typing import Union
from zipfile import ZipFile

from ota_update_libs.consts import AB_PAYLOAD_BIN_PATH, AB_PAYLOAD_PROPERTIES_PATH
from ota_update_libs.errors import EntryNotFoundError

from .zip_offset import ZipDirectoryEntry, locate_entry_offset

logger = logging.getLogger(__name__)

NOT_AN_UPDATE_PACKAGE = "package is not a recognized update format"


class UpdatePackageReader:
    """Helper class for reading the update package zip file.

    This class is NOT safe for multi-thread, create separated instance
        for each worker thread if used in multi-threaded environment.
    """

    def __init__(
        self,
        _f: Union[ZipFile, str, PathLike],
        *,
        close_on_exit: bool = True,
    ) -> None:
        if isinstance(_f, ZipFile):
            self._f = _f
        else:
            self._f = ZipFile(_f, mode="r")
        self._close_on_exit = close_on_exit

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._close_on_exit:
            self.close()
        return False

    def close(self) -> None:
        self._f.close()

    def _has_entry(self, name: str) -> bool:
        try:
            self._f.getinfo(name)
            return True
        except KeyError:
            return False

    def directory_entries(self) -> list[ZipDirectoryEntry]:
        return [ZipDirectoryEntry.from_zipinfo(_zinfo) for _zinfo in self._f.infolist()]

    def is_ab_update(self) -> bool:
        """Check if this package is an A/B update package.

        An A/B update package carries both payload.bin and payload_properties.txt.
        """
        return self._has_entry(AB_PAYLOAD_BIN_PATH) and self._has_entry(
            AB_PAYLOAD_PROPERTIES_PATH
        )

    def entry_offset(self, name: str) -> int:
        return locate_entry_offset(self.directory_entries(), name)

    def payload_offset(self) -> int:
        """Get the offset of the payload.bin data in this package.

        Raises:
            EntryNotFoundError if this package doesn't have a payload.bin.
        """
        try:
            return self.entry_offset(AB_PAYLOAD_BIN_PATH)
        except EntryNotFoundError:
            raise EntryNotFoundError(
                AB_PAYLOAD_BIN_PATH, NOT_AN_UPDATE_PACKAGE
            ) from None

    def read_payload_properties(self) -> list[str]:
        """Read the payload_properties.txt as a list of non-empty lines."""
        try:
            with self._f.open(AB_PAYLOAD_PROPERTIES_PATH) as _f:
                _raw = _f.read().decode("utf-8")
        except KeyError:
            raise EntryNotFoundError(
                AB_PAYLOAD_PROPERTIES_PATH, NOT_AN_UPDATE_PACKAGE
            ) from None
        return [_line.strip() for _line in _raw.splitlines() if _line.strip()]
