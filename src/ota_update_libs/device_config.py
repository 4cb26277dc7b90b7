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
"""Read-only configuration of the running device.

The values here are what an updater needs to know about the current build
    and where to look for updates. The host is responsible for collecting
    them (from build properties, a config file, etc.) and passing the
    DeviceConfig into the library, nothing in this library looks up global
    state on its own.

Example device_config.yaml:

    current_version: "13.0"
    current_build_timestamp: 1684597800
    current_release_type: NIS
    downgrade_allowed: false
    bucket_endpoint: https://s3.example.com
    bucket_name: ota-updates
    device: surya
"""

from __future__ import annotations

from typing import Optional

from .common import ConfigFileModel
from .consts import KEY_PATH_SEP


class DeviceConfig(ConfigFileModel):
    current_version: str = ""
    current_build_timestamp: int = 0
    current_release_type: str = ""
    downgrade_allowed: bool = False

    bucket_endpoint: str = ""
    bucket_name: str = ""

    device: str = ""
    # NOTE: set when the device is going to be upgraded to a new device
    #   codename, the new one takes priority when looking up updates.
    next_device: Optional[str] = None
    ab_device: bool = False

    @property
    def bucket_url(self) -> str:
        return f"{self.bucket_endpoint}{KEY_PATH_SEP}{self.bucket_name}{KEY_PATH_SEP}"

    @property
    def update_device(self) -> str:
        return self.next_device or self.device

    @property
    def listing_url(self) -> str:
        """The URL to fetch the bucket listing for this device."""
        return f"{self.bucket_url}?prefix={self.update_device}"

    def download_url_for(self, object_key: str) -> str:
        return f"{self.bucket_url}{object_key}"
