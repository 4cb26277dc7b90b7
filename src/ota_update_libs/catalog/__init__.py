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
"""Parsing, filtering and diffing of update catalogs from bucket listings."""

from .compat import can_install, is_compatible
from .diff import check_for_new_updates, has_new_updates
from .filename_codec import decode_object_key, encode_object_key
from .parser import (
    ListingParseResult,
    collect_listing,
    load_listing_document,
    parse_listing,
    parse_listing_file,
)
from .schema import BucketObject, DecodedObjectKey, ListBucketResult, UpdateRecord

__all__ = [
    "BucketObject",
    "DecodedObjectKey",
    "ListBucketResult",
    "ListingParseResult",
    "UpdateRecord",
    "can_install",
    "check_for_new_updates",
    "collect_listing",
    "decode_object_key",
    "encode_object_key",
    "has_new_updates",
    "is_compatible",
    "load_listing_document",
    "parse_listing",
    "parse_listing_file",
]
