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

from __future__ import annotations

import logging
from datetime import datetime, timezone
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING

from ota_update_libs.catalog import can_install, parse_listing_file
from ota_update_libs.catalog.schema import UpdateRecord
from ota_update_libs.device_config import DeviceConfig
from ota_update_libs.errors import DocumentStructureError
from ota_update_tools._utils import exit_with_err_msg, load_device_config

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction


logger = logging.getLogger(__name__)


def list_updates_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    list_updates_arg_parser = sub_arg_parser.add_parser(
        name="list-updates",
        help=(_help_txt := "List all update packages within a bucket listing."),
        description=_help_txt,
        parents=parent_parser,
    )
    list_updates_arg_parser.add_argument(
        "--config",
        "-c",
        help="Device config file in YAML or JSON, all-default config is used if not specified.",
    )
    list_updates_arg_parser.add_argument(
        "--compatible-only",
        action="store_true",
        help="Only list the updates compatible with the device.",
    )
    list_updates_arg_parser.add_argument(
        "listing",
        help="Points to a bucket listing file, in XML or JSON.",
    )
    list_updates_arg_parser.set_defaults(handler=list_updates_cmd)


_DIV = "-" * 18


def _render_output(_in: list[UpdateRecord], device_config: DeviceConfig) -> str:
    _buffer = StringIO()

    _title = f"{_DIV} update packages {_DIV}\n"
    _buffer.write(_title)
    for idx, _update in enumerate(_in):
        built_at = datetime.fromtimestamp(_update.timestamp, tz=timezone.utc)
        installable = can_install(_update, device_config)
        _buffer.write(
            f"{idx=}\t{_update.name}\tversion={_update.version}\t"
            f"release_type={_update.release_type}\tbuilt_at={built_at.isoformat()}\t"
            f"size={_update.file_size}\t{installable=}\n"
        )
    _buffer.write("-" * len(_title))
    return _buffer.getvalue()


def list_updates_cmd(args: Namespace) -> None:
    logger.debug(f"calling {list_updates_cmd.__name__} with {args}")
    listing = Path(args.listing)
    if not listing.is_file():
        exit_with_err_msg(f"{listing} not found.")
    device_config = load_device_config(args.config)

    print(f"bucket listing: {listing}")
    try:
        res = parse_listing_file(
            listing, device_config, compatible_only=args.compatible_only
        )
    except DocumentStructureError as e:
        exit_with_err_msg(str(e))
    print(_render_output(res, device_config))
