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
"""Errors raised by ota-update-libs."""

from __future__ import annotations


class UpdateMetadataError(Exception):
    """Base class for all ota-update-libs errors."""


class DecodeError(UpdateMetadataError, ValueError):
    """The object key doesn't follow the update package naming convention."""


class DocumentStructureError(UpdateMetadataError, ValueError):
    """The bucket listing document doesn't have the expected shape."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"could not read update list: {reason}")


class EntryNotFoundError(UpdateMetadataError, KeyError):
    """The requested entry is not present in the zip container."""

    def __init__(self, entry_name: str, msg: str | None = None) -> None:
        self.entry_name = entry_name
        self.msg = msg or f"entry {entry_name!r} not found in the container"
        super().__init__(self.msg)

    # NOTE: KeyError.__str__ quotes the message, use the plain message instead.
    def __str__(self) -> str:
        return self.msg
