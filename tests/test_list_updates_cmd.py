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
"""Tests for list_updates command module."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from ota_update_libs.device_config import DeviceConfig
from ota_update_tools.cmds.list_updates import list_updates_cmd, list_updates_cmd_args
from tests.conftest import NEW_BUILD_KEY, OTHER_TYPE_KEY, SAMPLE_KEY


@pytest.fixture
def listing_file(tmp_path: Path, sample_listing: str) -> Path:
    listing_f = tmp_path / "updates.xml"
    listing_f.write_text(sample_listing)
    return listing_f


@pytest.fixture
def config_file(tmp_path: Path, device_config: DeviceConfig) -> Path:
    cfg_f = tmp_path / "device_config.yaml"
    cfg_f.write_text(device_config.export_config())
    return cfg_f


class TestListUpdatesCmdArgs:
    def test_args_registration(self):
        """Test that list-updates command arguments are registered correctly."""
        arg_parser = argparse.ArgumentParser()
        sub_parser = arg_parser.add_subparsers()

        list_updates_cmd_args(sub_parser)

        args = arg_parser.parse_args(
            ["list-updates", "--config", "cfg.yaml", "--compatible-only", "some_path"]
        )
        assert args.config == "cfg.yaml"
        assert args.compatible_only is True
        assert args.listing == "some_path"
        assert args.handler is list_updates_cmd

    def test_args_defaults(self):
        arg_parser = argparse.ArgumentParser()
        sub_parser = arg_parser.add_subparsers()

        list_updates_cmd_args(sub_parser)

        args = arg_parser.parse_args(["list-updates", "some_path"])
        assert args.config is None
        assert args.compatible_only is False


class TestListUpdatesCmd:
    def test_list_all(self, listing_file: Path, config_file: Path, capsys):
        args = argparse.Namespace(
            listing=str(listing_file), config=str(config_file), compatible_only=False
        )
        list_updates_cmd(args)

        captured = capsys.readouterr()
        assert SAMPLE_KEY.split("/")[1] in captured.out
        assert OTHER_TYPE_KEY.split("/")[1] in captured.out
        assert "installable=True" in captured.out

    def test_list_compatible_only(
        self, listing_file: Path, config_file: Path, capsys
    ):
        args = argparse.Namespace(
            listing=str(listing_file), config=str(config_file), compatible_only=True
        )
        list_updates_cmd(args)

        captured = capsys.readouterr()
        assert NEW_BUILD_KEY.split("/")[1] in captured.out
        assert OTHER_TYPE_KEY.split("/")[1] not in captured.out

    def test_listing_not_found(self, tmp_path: Path, capsys):
        args = argparse.Namespace(
            listing=str(tmp_path / "missing.xml"), config=None, compatible_only=False
        )
        with pytest.raises(SystemExit) as exc_info:
            list_updates_cmd(args)

        assert exc_info.value.code == 1
        assert "ERR:" in capsys.readouterr().out

    def test_invalid_listing(self, tmp_path: Path, capsys):
        listing_f = tmp_path / "error.xml"
        listing_f.write_text("<Error><Code>AccessDenied</Code></Error>")

        args = argparse.Namespace(
            listing=str(listing_f), config=None, compatible_only=False
        )
        with pytest.raises(SystemExit):
            list_updates_cmd(args)
        assert "could not read update list" in capsys.readouterr().out

    def test_config_not_found(self, listing_file: Path, tmp_path: Path, capsys):
        args = argparse.Namespace(
            listing=str(listing_file),
            config=str(tmp_path / "missing.yaml"),
            compatible_only=False,
        )
        with pytest.raises(SystemExit):
            list_updates_cmd(args)
        assert "device config" in capsys.readouterr().out
