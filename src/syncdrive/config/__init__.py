"""Configuration package for the sync drive orchestrator."""

from .settings import (
    AppSettings,
    LoggingSettings,
    SyncSettings,
    get_settings
)

from .schema import (
    SUPPORTED_CONFIG_VERSION,
    SyncDriveConfig,
    SyncTask,
    SyncTaskError
)

from .store import (
    CONFIG_FILE_NAME,
    ConfigStore,
    ConfigStoreError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigPersistError
)

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "SyncSettings",
    "get_settings",
    
    "SUPPORTED_CONFIG_VERSION",
    "SyncDriveConfig",
    "SyncTask",
    "SyncTaskError",
    
    "CONFIG_FILE_NAME",
    "ConfigStore",
    "ConfigStoreError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigPersistError"
]
