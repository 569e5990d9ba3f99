"""Core orchestration package."""

from .engine import SyncEngine
from .runtime import SyncRuntime
from .manager import SyncTaskManager, BatchResult, TaskOutcome, NoSyncTaskError

__all__ = [
    "SyncEngine",
    "SyncRuntime",
    "SyncTaskManager",
    "BatchResult",
    "TaskOutcome",
    "NoSyncTaskError"
]
