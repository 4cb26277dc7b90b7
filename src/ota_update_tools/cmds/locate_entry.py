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
from pathlib import Path
from typing import TYPE_CHECKING
from zipfile import BadZipFile

from ota_update_libs.consts import AB_PAYLOAD_BIN_PATH
from ota_update_libs.errors import EntryNotFoundError
from ota_update_libs.package import UpdatePackageReader
from ota_update_tools._utils import exit_with_err_msg, load_device_config

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction


logger = logging.getLogger(__name__)


def locate_entry_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    locate_entry_arg_parser = sub_arg_parser.add_parser(
        name="locate-entry",
        help=(
            _help_txt
            := "Print the offset of an entry's data within an update package zip file."
        ),
        description=_help_txt,
        parents=parent_parser,
    )
    locate_entry_arg_parser.add_argument(
        "--config",
        "-c",
        help="Device config file in YAML or JSON, all-default config is used if not specified.",
    )
    locate_entry_arg_parser.add_argument(
        "--entry",
        default=AB_PAYLOAD_BIN_PATH,
        help="The full path of the entry within the update package.",
    )
    locate_entry_arg_parser.add_argument(
        "package",
        help="Points to an update package zip file.",
    )
    locate_entry_arg_parser.set_defaults(handler=locate_entry_cmd)


def locate_entry_cmd(args: Namespace) -> None:
    logger.debug(f"calling {locate_entry_cmd.__name__} with {args}")
    package = Path(args.package)
    if not package.is_file():
        exit_with_err_msg(f"{package} not found.")
    device_config = load_device_config(args.config)

    try:
        with UpdatePackageReader(package) as reader:
            is_ab_update = reader.is_ab_update()
            print(
                f"update package: {package}, A/B update: {is_ab_update}, "
                f"A/B device: {device_config.ab_device}"
            )
            if is_ab_update != device_config.ab_device:
                logger.warning(
                    f"{package} doesn't match the device, "
                    f"A/B update: {is_ab_update}, A/B device: {device_config.ab_device}"
                )
            if args.entry == AB_PAYLOAD_BIN_PATH:
                offset = reader.payload_offset()
            else:
                offset = reader.entry_offset(args.entry)
    except BadZipFile as e:
        exit_with_err_msg(f"{package} is not a valid zip file: {e}")
    except EntryNotFoundError as e:
        exit_with_err_msg(str(e))
    print(f"entry={args.entry}\t{offset=}")
