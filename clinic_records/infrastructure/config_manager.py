"""Configuration Manager for Secure Credential Handling.

This module loads the document store connection settings. Connection strings
may carry credentials, so they are held as SecretStr and never logged.

Security Impact:
    - Credentials are never logged or exposed in error messages
    - Supports environment variables (and a project-root .env file) or a JSON file
    - Validates configuration before use

Architecture:
    - Infrastructure layer, isolated from domain
    - Type-safe configuration using Pydantic models
    - Fail-fast validation prevents runtime errors
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr, field_validator

logger = logging.getLogger(__name__)

DEFAULT_PATIENTS_URI = "mongodb://localhost:27017/patient_db"
DEFAULT_USERS_URI = "mongodb://localhost:27017/user_db"
DEFAULT_CLINICAL_URI = "mongodb://localhost:27017/clinical_db"

SUPPORTED_SCHEMES = ("mongodb", "mongodb+srv")


class StoreConfig(BaseModel):
    """Document store configuration with secure credential handling.

    Each collection lives behind its own connection string so the three can
    be pointed at different databases or clusters.

    Parameters:
        patients_uri: Connection string for the patients database (secret)
        users_uri: Connection string for the users database (secret)
        clinical_uri: Connection string for the clinical database (secret)
        connect_timeout_ms: Connect and server-selection timeout
    """

    patients_uri: SecretStr = Field(default=SecretStr(DEFAULT_PATIENTS_URI))
    users_uri: SecretStr = Field(default=SecretStr(DEFAULT_USERS_URI))
    clinical_uri: SecretStr = Field(default=SecretStr(DEFAULT_CLINICAL_URI))
    connect_timeout_ms: int = Field(default=5000, gt=0, description="Connection timeout in milliseconds")

    @field_validator("patients_uri", "users_uri", "clinical_uri")
    @classmethod
    def validate_uri(cls, v: SecretStr) -> SecretStr:
        """Validate connection string scheme without echoing the string."""
        scheme = urlparse(v.get_secret_value()).scheme
        if scheme not in SUPPORTED_SCHEMES:
            raise ValueError(f"Unsupported connection string scheme: {scheme or '<none>'}")
        return v

    def uri_for(self, store: str) -> str:
        """Get the connection string for a named store (patients, users, clinical).

        Security Impact:
            - Password is retrieved from SecretStr but not logged
        """
        try:
            secret: SecretStr = getattr(self, f"{store}_uri")
        except AttributeError:
            raise ValueError(f"Unknown store: {store}") from None
        return secret.get_secret_value()

    @staticmethod
    def describe_uri(uri: str) -> str:
        """Host and database part of a connection string, safe for logs."""
        parsed = urlparse(uri)
        return f"{parsed.hostname or 'unknown'}{parsed.path or ''}"


class ApiConfig(BaseModel):
    """HTTP listener and logging settings."""

    host: str = "0.0.0.0"
    port: int = Field(default=3000, gt=0, lt=65536)
    log_level: str = "INFO"
    json_logs: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in levels:
            raise ValueError(f"Unsupported log level: {v}. Supported: {levels}")
        return v.upper()


class ConfigManager:
    """Configuration manager for store credentials and listener settings.

    Example Usage:
        ```python
        config = ConfigManager.from_environment()
        store_config = config.get_store_config()

        config = ConfigManager.from_file("config.json")
        api_config = config.get_api_config()
        ```
    """

    def __init__(self, config_data: Dict[str, Any]):
        self._config_data = config_data
        self._store_config: Optional[StoreConfig] = None
        self._api_config: Optional[ApiConfig] = None

    @classmethod
    def from_environment(cls) -> "ConfigManager":
        """Load configuration from environment variables.

        Environment Variables:
            - CR_PATIENTS_DB_URI: Patients database connection string (secret)
            - CR_USERS_DB_URI: Users database connection string (secret)
            - CR_CLINICAL_DB_URI: Clinical database connection string (secret)
            - CR_DB_CONNECT_TIMEOUT_MS: Connection timeout in milliseconds
            - CR_API_HOST / CR_API_PORT: Listener address
            - CR_LOG_LEVEL: Logging level
            - CR_JSON_LOGS: Emit JSON log lines ("true"/"false")

        A ``.env`` file in the project root is loaded first when present;
        variables already set in the environment win.
        """
        env_path = Path(__file__).parent.parent.parent / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            logger.debug(f"Loaded environment variables from {env_path}")

        store: Dict[str, Any] = {}
        for key, var in (
            ("patients_uri", "CR_PATIENTS_DB_URI"),
            ("users_uri", "CR_USERS_DB_URI"),
            ("clinical_uri", "CR_CLINICAL_DB_URI"),
            ("connect_timeout_ms", "CR_DB_CONNECT_TIMEOUT_MS"),
        ):
            if os.getenv(var):
                store[key] = os.getenv(var)

        api: Dict[str, Any] = {}
        for key, var in (
            ("host", "CR_API_HOST"),
            ("port", "CR_API_PORT"),
            ("log_level", "CR_LOG_LEVEL"),
        ):
            if os.getenv(var):
                api[key] = os.getenv(var)
        if os.getenv("CR_JSON_LOGS"):
            api["json_logs"] = os.getenv("CR_JSON_LOGS", "false").lower() == "true"

        return cls({"store": store, "api": api})

    @classmethod
    def from_file(cls, config_path: str) -> "ConfigManager":
        """Load configuration from a JSON file with ``store`` and ``api`` sections.

        Security Impact:
            - File permissions should be restricted (600) for credential files

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        stat_info = config_file.stat()
        if stat_info.st_mode & 0o077 != 0:
            logger.warning(
                f"Configuration file has overly permissive permissions: {config_path}. "
                "Consider setting to 600 for credential files."
            )

        try:
            with open(config_file, "r") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {str(e)}")

        return cls(config_data)

    def get_store_config(self) -> StoreConfig:
        """Get validated store configuration."""
        if self._store_config is None:
            self._store_config = StoreConfig(**self._config_data.get("store", {}))
        return self._store_config

    def get_api_config(self) -> ApiConfig:
        """Get validated listener configuration."""
        if self._api_config is None:
            self._api_config = ApiConfig(**self._config_data.get("api", {}))
        return self._api_config


def get_store_config() -> StoreConfig:
    """Convenience wrapper: store configuration from the environment."""
    return ConfigManager.from_environment().get_store_config()
