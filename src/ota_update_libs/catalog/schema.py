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
"""Models for the bucket listing document and the update records parsed from it."""

from __future__ import annotations

from typing import Any, List, NamedTuple

from pydantic import Field, field_validator

from ota_update_libs.common import AliasEnabledModel, FrozenModel
from ota_update_libs.consts import LIST_BUCKET_CONTENTS


class DecodedObjectKey(NamedTuple):
    name: str
    version: str
    timestamp: int
    release_type: str


class BucketObject(AliasEnabledModel):
    """One <Contents> element of a bucket listing."""

    key: str = Field(alias="Key")
    size: int = Field(alias="Size")
    etag: str = Field(alias="ETag")


class ListBucketResult(AliasEnabledModel):
    """The <ListBucketResult> root of a bucket listing.

    <Contents> is either a single element or a list of elements, it is always
        normalized into a list here. Each element is validated individually
        later with BucketObject, so that one malformed element won't fail
        the whole listing.
    """

    contents: List[Any] = Field(alias=LIST_BUCKET_CONTENTS, default_factory=list)

    @field_validator("contents", mode="before")
    @classmethod
    def _normalize_contents(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return [value]
        return value


class UpdateRecord(FrozenModel):
    """An update package available in the bucket.

    Two records with the same download_id refer to the same update, no matter
        what the other fields are.
    """

    name: str
    version: str
    timestamp: int
    release_type: str
    download_id: str
    file_size: int
    download_url: str
