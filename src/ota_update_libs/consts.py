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
"""Consts related to update listings and update packages."""

LIST_BUCKET_RESULT = "ListBucketResult"
LIST_BUCKET_CONTENTS = "Contents"

PACKAGE_SUFFIX = ".zip"
SIGNED_SUFFIX = "signed"
KEY_FIELDS_SEP = "-"
KEY_PATH_SEP = "/"
KEY_DATE_FORMAT = "%Y%m%d"
KEY_TIME_FORMAT = "%H%M"

# Build date encoded in the file name might be bumped one minute higher than
#   the real build date of the image.
BUILD_TIMESTAMP_SKEW = 60

# Each zip local file header is (30 + n + m) bytes, n is the length of
#   the file name, m is the length of the extra field.
ZIP_LOCAL_HEADER_FIXED_SIZE = 30

AB_PAYLOAD_BIN_PATH = "payload.bin"
AB_PAYLOAD_PROPERTIES_PATH = "payload_properties.txt"
