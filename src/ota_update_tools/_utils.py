from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

from ota_update_libs.device_config import DeviceConfig

LOGGING_FORMAT = (
    "[%(asctime)s][%(levelname)s]-%(name)s:%(funcName)s:%(lineno)d,%(message)s"
)


def configure_logging(log_level):
    logging.basicConfig(level=logging.CRITICAL, format=LOGGING_FORMAT, force=True)
    _tool_logger = logging.getLogger("ota_update_tools")
    _tool_logger.setLevel(log_level)
    _libs_logger = logging.getLogger("ota_update_libs")
    _libs_logger.setLevel(log_level)


def exit_with_err_msg(err_msg: str, exit_code: int = 1) -> NoReturn:
    print(f"ERR: {err_msg}")
    sys.exit(exit_code)


def load_device_config(config_fpath: str | None) -> DeviceConfig:
    """Load the device config, use all-default config if not specified."""
    if not config_fpath:
        return DeviceConfig()

    _fpath = Path(config_fpath)
    if not _fpath.is_file():
        exit_with_err_msg(f"device config {_fpath} not found.")
    try:
        return DeviceConfig.load_config(_fpath)
    except Exception as e:
        exit_with_err_msg(f"failed to load device config {_fpath}: {e}")
