"""Application configuration management using Dynaconf."""

import os
from pathlib import Path
from threading import Lock
from typing import Any

from dynaconf import Dynaconf

DEFAULT_CONFIG_PATH = "agent_config.yaml"


class AppConfig:
    """Singleton configuration manager for the pass_persist agent."""

    _instance = None
    _lock = Lock()
    _initialized = False

    def __new__(cls, config_path: str = DEFAULT_CONFIG_PATH) -> "AppConfig":
        """Create or return the singleton instance of AppConfig."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._initialized = False
            return cls._instance

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH) -> None:
        """Initialize singleton settings once from the specified config path."""
        if self.__class__._initialized and hasattr(self, "settings"):
            return
        self._init_config(config_path)

    def _init_config(self, config_path: str) -> None:
        """Initialize the configuration from the specified file."""
        if self.__class__._initialized:
            return

        # If caller passed the default name, prefer data/agent_config.yaml if present
        if config_path == DEFAULT_CONFIG_PATH:
            data_path = Path("data") / DEFAULT_CONFIG_PATH
            if data_path.exists():
                config_path = str(data_path)

        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Config file {config_path} not found")

        self.config_path = config_path
        self.settings = Dynaconf(
            settings_files=[config_path],
            environments=False,
            envvar_prefix="PASSPERSIST",
        )
        self.__class__._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded configuration so the next AppConfig() reloads from disk."""
        with cls._lock:
            cls._instance = None
            cls._initialized = False

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key."""
        return self.settings.get(key, default)

    def reload(self) -> None:
        """Reload the configuration from disk."""
        self.settings.reload()
