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
"""Decode update information from the object key of an update package.

The object key follows the convention:

    <device>/<name>-<version>-<YYYYMMDD>-<HHMM>-<release_type>[-signed].zip

For example:

    surya/PixelExperience_Plus_surya-13.0-20230520-1550-NIS-signed.zip
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from ota_update_libs.consts import (
    BUILD_TIMESTAMP_SKEW,
    KEY_DATE_FORMAT,
    KEY_FIELDS_SEP,
    KEY_PATH_SEP,
    KEY_TIME_FORMAT,
    PACKAGE_SUFFIX,
    SIGNED_SUFFIX,
)
from ota_update_libs.errors import DecodeError

from .schema import DecodedObjectKey

MIN_KEY_FIELDS = 5

_DATE_PA = re.compile(r"^\d{8}$")
_TIME_PA = re.compile(r"^\d{4}$")


def _parse_build_datetime(date_field: str, time_field: str) -> datetime:
    if not _DATE_PA.match(date_field):
        raise DecodeError(f"invalid build date field: {date_field!r}")
    if not _TIME_PA.match(time_field):
        raise DecodeError(f"invalid build time field: {time_field!r}")

    try:
        return datetime.strptime(
            f"{date_field}{time_field}", f"{KEY_DATE_FORMAT}{KEY_TIME_FORMAT}"
        ).replace(tzinfo=timezone.utc)
    except ValueError as e:
        raise DecodeError(
            f"invalid build date/time: {date_field=}, {time_field=}: {e!r}"
        ) from e


def decode_object_key(object_key: str) -> DecodedObjectKey:
    """Decode <object_key> into name, version, build timestamp and release type.

    Raises:
        DecodeError if <object_key> doesn't follow the naming convention.
    """
    _path_parts = object_key.split(KEY_PATH_SEP)
    if len(_path_parts) < 2 or not _path_parts[1]:
        raise DecodeError(f"{object_key=} doesn't contain a package name")
    name = _path_parts[1]

    _stem = object_key
    if _stem.endswith(PACKAGE_SUFFIX):
        _stem = _stem[: -len(PACKAGE_SUFFIX)]

    _fields = _stem.split(KEY_FIELDS_SEP)
    if len(_fields) < MIN_KEY_FIELDS:
        raise DecodeError(
            f"{object_key=} has {len(_fields)} fields, expect at least {MIN_KEY_FIELDS}"
        )
    version, date_field, time_field, release_type = _fields[1:MIN_KEY_FIELDS]

    build_dt = _parse_build_datetime(date_field, time_field)
    return DecodedObjectKey(
        name=name,
        version=version,
        timestamp=int(build_dt.timestamp()) - BUILD_TIMESTAMP_SKEW,
        release_type=release_type,
    )


def encode_object_key(
    device: str,
    name_prefix: str,
    version: str,
    build_dt: datetime,
    release_type: str,
    *,
    signed: bool = True,
) -> str:
    """Compose an object key following the naming convention.

    <build_dt> is interpreted as UTC if it is naive.
    """
    if build_dt.tzinfo is None:
        build_dt = build_dt.replace(tzinfo=timezone.utc)
    build_dt = build_dt.astimezone(timezone.utc)

    _fields = [
        name_prefix,
        version,
        build_dt.strftime(KEY_DATE_FORMAT),
        build_dt.strftime(KEY_TIME_FORMAT),
        release_type,
    ]
    if signed:
        _fields.append(SIGNED_SUFFIX)
    return f"{device}{KEY_PATH_SEP}{KEY_FIELDS_SEP.join(_fields)}{PACKAGE_SUFFIX}"
