"""Application Settings and Configuration.

This module combines configuration from the configuration manager with
application-wide constants.

Security Impact:
    - Settings are loaded from secure configuration sources
    - Connection strings are never logged
"""

from typing import Optional

from clinic_records import __version__
from clinic_records.infrastructure.config_manager import ApiConfig, ConfigManager, StoreConfig

APP_NAME = "Clinic Records API"
APP_VERSION = __version__


class Settings:
    """Application settings loaded lazily from the configuration manager.

    Parameters:
        config_manager: Source of configuration; defaults to the environment
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self._config_manager = config_manager
        self.app_name = APP_NAME
        self.version = APP_VERSION

    @property
    def config_manager(self) -> ConfigManager:
        if self._config_manager is None:
            self._config_manager = ConfigManager.from_environment()
        return self._config_manager

    @property
    def store(self) -> StoreConfig:
        return self.config_manager.get_store_config()

    @property
    def api(self) -> ApiConfig:
        return self.config_manager.get_api_config()


def get_settings() -> Settings:
    """Fresh settings read from the current environment."""
    return Settings()
