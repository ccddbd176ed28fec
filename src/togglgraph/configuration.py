# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import platformdirs

APP_NAME = "togglgraph"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

DEFAULT_CACHE_TIMEOUT = 5
MIN_CACHE_TIMEOUT = 1


class Configuration(TypedDict):
    api_token: Optional[str]
    workspace_id: Optional[str]
    workspace_name: Optional[str]
    cache_timeout: int  # minutes
    timezone: str  # IANA name or "local"
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "api_token": None,
        "workspace_id": None,
        "workspace_name": None,
        "cache_timeout": DEFAULT_CACHE_TIMEOUT,
        "timezone": "local",
        "log_level": "WARNING",
    }
