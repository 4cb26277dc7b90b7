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

from ota_update_libs.catalog import check_for_new_updates
from ota_update_libs.errors import DocumentStructureError
from ota_update_tools._utils import exit_with_err_msg, load_device_config

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction


logger = logging.getLogger(__name__)


def check_updates_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    check_updates_arg_parser = sub_arg_parser.add_parser(
        name="check-updates",
        help=(
            _help_txt
            := "Compare two bucket listings and check if the new one brings new compatible updates."
        ),
        description=_help_txt,
        parents=parent_parser,
    )
    check_updates_arg_parser.add_argument(
        "--config",
        "-c",
        help="Device config file in YAML or JSON, all-default config is used if not specified.",
    )
    check_updates_arg_parser.add_argument(
        "old_listing",
        help="The previously fetched bucket listing file.",
    )
    check_updates_arg_parser.add_argument(
        "new_listing",
        help="The freshly fetched bucket listing file.",
    )
    check_updates_arg_parser.set_defaults(handler=check_updates_cmd)


def check_updates_cmd(args: Namespace) -> None:
    logger.debug(f"calling {check_updates_cmd.__name__} with {args}")
    old_listing, new_listing = Path(args.old_listing), Path(args.new_listing)
    for _listing in (old_listing, new_listing):
        if not _listing.is_file():
            exit_with_err_msg(f"{_listing} not found.")
    device_config = load_device_config(args.config)

    try:
        found = check_for_new_updates(
            old_listing.read_bytes(), new_listing.read_bytes(), device_config
        )
    except DocumentStructureError as e:
        exit_with_err_msg(str(e))

    if found:
        print(f"{new_listing} has new updates compared to {old_listing}.")
    else:
        print(f"No new updates in {new_listing}.")
