# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "yizhi"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# Set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)

TASKS_KEY = "tasks"
DATA_KEY = "data"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    log_level: str
    retry_failed_writes: bool
    track_contribution: bool


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "log_level": "WARNING",
        "retry_failed_writes": True,
        "track_contribution": True,
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set DATA_PATH dynamically.

    Must be called before any blob store is created.
    """
    global DATA_PATH

    if not APP_CONFIG_PATH.is_file():
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
