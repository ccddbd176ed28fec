# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from togglgraph import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError()

        # Back-fill keys added after the file was written
        for key, value in configuration.get_default_configuration().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        api_token: Optional[str] = None,
        workspace_id: Optional[str] = None,
        workspace_name: Optional[str] = None,
        cache_timeout: Optional[int] = None,
        timezone: Optional[str] = None,
        log_level: Optional[str] = None,
        remove_api_token: bool = False,
    ) -> None:
        self.is_dirty = True

        if api_token is not None:
            self.config["api_token"] = api_token
        if remove_api_token:
            self.config["api_token"] = None
        if workspace_id is not None:
            self.config["workspace_id"] = workspace_id
        if workspace_name is not None:
            self.config["workspace_name"] = workspace_name
        if cache_timeout is not None:
            self.config["cache_timeout"] = max(
                configuration.MIN_CACHE_TIMEOUT, cache_timeout
            )
        if timezone is not None:
            self.config["timezone"] = timezone
        if log_level is not None:
            self.config["log_level"] = log_level.upper()


CONFIGURATION_REPO = ConfigurationRepository()
