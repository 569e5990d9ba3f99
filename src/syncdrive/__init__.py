"""Sync drive task orchestrator."""

from .config import (
    AppSettings,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigPersistError,
    ConfigStore,
    ConfigStoreError,
    SyncDriveConfig,
    SyncSettings,
    SyncTask,
    SyncTaskError,
    get_settings
)
from .core import (
    BatchResult,
    NoSyncTaskError,
    SyncEngine,
    SyncRuntime,
    SyncTaskManager,
    TaskOutcome
)

__version__ = "1.0.0"

__all__ = [
    "AppSettings",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigPersistError",
    "ConfigStore",
    "ConfigStoreError",
    "SyncDriveConfig",
    "SyncSettings",
    "SyncTask",
    "SyncTaskError",
    "get_settings",
    "BatchResult",
    "NoSyncTaskError",
    "SyncEngine",
    "SyncRuntime",
    "SyncTaskManager",
    "TaskOutcome"
]
