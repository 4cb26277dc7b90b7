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
"""Shared test fixtures for ota-update-libs tests."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile

import pytest

from ota_update_libs.device_config import DeviceConfig

BUCKET_ENDPOINT = "https://s3.example.com"
BUCKET_NAME = "ota-updates"
DEVICE = "surya"

SAMPLE_KEY = "surya/PixelExperience_Plus_surya-13.0-20230520-1550-NIS-signed.zip"
SAMPLE_KEY_BUILD_DT = datetime(2023, 5, 20, 15, 50, tzinfo=timezone.utc)
SAMPLE_KEY_TIMESTAMP = int(SAMPLE_KEY_BUILD_DT.timestamp()) - 60

# 2023-05-13T17:46:40Z, newer than OLD_BUILD_KEY, older than the others
CURRENT_BUILD_TIMESTAMP = 1684000000

NEW_BUILD_KEY = "surya/PixelExperience_Plus_surya-13.0-20230601-0930-NIS-signed.zip"
OLD_BUILD_KEY = "surya/PixelExperience_Plus_surya-13.0-20230401-1200-NIS-signed.zip"
OTHER_TYPE_KEY = (
    "surya/PixelExperience_Plus_surya-13.0-20230520-1550-OFFICIAL-signed.zip"
)
MALFORMED_KEY = "surya/changelog.txt"


def bucket_object_xml(key: str, etag: str, size: int) -> str:
    return (
        "<Contents>"
        f"<Key>{key}</Key>"
        "<LastModified>2023-05-20T16:02:11.000Z</LastModified>"
        f"<ETag>&quot;{etag}&quot;</ETag>"
        f"<Size>{size}</Size>"
        "<StorageClass>STANDARD</StorageClass>"
        "</Contents>"
    )


def listing_xml(*contents: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<ListBucketResult xmlns="http://s3.amazonaws.com/doc/2006-03-01/">'
        f"<Name>{BUCKET_NAME}</Name>"
        f"<Prefix>{DEVICE}</Prefix>"
        "<MaxKeys>1000</MaxKeys>"
        "<IsTruncated>false</IsTruncated>"
        f"{''.join(contents)}"
        "</ListBucketResult>"
    )


def write_package(
    fpath: Path,
    entries: Iterable[tuple[str, bytes]],
    *,
    compression: int = ZIP_STORED,
) -> Path:
    with ZipFile(fpath, mode="w", compression=compression) as zf:
        for _name, _data in entries:
            zf.writestr(_name, _data)
    return fpath


@pytest.fixture
def device_config() -> DeviceConfig:
    return DeviceConfig(
        current_version="13.0",
        current_build_timestamp=CURRENT_BUILD_TIMESTAMP,
        current_release_type="NIS",
        downgrade_allowed=False,
        bucket_endpoint=BUCKET_ENDPOINT,
        bucket_name=BUCKET_NAME,
        device=DEVICE,
    )


@pytest.fixture
def sample_listing() -> str:
    """A bucket listing with every kind of entry we care about."""
    return listing_xml(
        bucket_object_xml(SAMPLE_KEY, "etag-sample", 1384271234),
        bucket_object_xml(MALFORMED_KEY, "etag-changelog", 2048),
        bucket_object_xml(OLD_BUILD_KEY, "etag-old", 1380000000),
        bucket_object_xml(OTHER_TYPE_KEY, "etag-other-type", 1390000000),
        bucket_object_xml(NEW_BUILD_KEY, "etag-new", 1385000000),
    )


PAYLOAD_BIN = b"CrAU" + b"\x00\x01" * 512
PAYLOAD_PROPERTIES = (
    b"FILE_HASH=lURPCIkIAjtMOyB/EjQcl8zDzqtD6Ovxe4a3T7TxfSw=\n"
    b"FILE_SIZE=1028\n"
    b"METADATA_HASH=OHO6tBoWVsPZzW8rn2W7zM0V5ptmy2YfmH0H5QAnqfE=\n"
    b"METADATA_SIZE=36\n"
)


@pytest.fixture
def ab_package(tmp_path: Path) -> Path:
    """An A/B update package, entries are stored without compression."""
    return write_package(
        tmp_path / "ab_update.zip",
        [
            ("META-INF/com/android/metadata", b"ota-type=AB\n"),
            ("care_map.pb", b"\x0a\x04test"),
            ("payload.bin", PAYLOAD_BIN),
            ("payload_properties.txt", PAYLOAD_PROPERTIES),
        ],
    )


@pytest.fixture
def non_ab_package(tmp_path: Path) -> Path:
    """A legacy update package which is installed by the recovery."""
    return write_package(
        tmp_path / "legacy_update.zip",
        [
            ("META-INF/com/google/android/update-binary", b"\x7fELF" * 64),
            ("META-INF/com/google/android/updater-script", b'ui_print("hi");\n'),
            ("system.new.dat.br", b"\x00" * 4096),
        ],
        compression=ZIP_DEFLATED,
    )
