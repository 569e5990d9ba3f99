"""Sync engine interface consumed by sync tasks."""

from abc import ABC, abstractmethod

from ..config.schema import SyncTask
from ..utils.logging import get_logger


class SyncEngine(ABC):
    """Abstract base class for the component that moves files for a task.

    The engine reads everything it needs from the task: the persisted
    definition and the runtime parameters injected by the manager. Failures
    are reported by raising; the manager isolates them per task.
    """
    
    def __init__(self, **kwargs):
        self.logger = get_logger(self.__class__.__name__)
    
    @abstractmethod
    def start(self, task: SyncTask) -> None:
        """Begin syncing the task's local and remote folders.
        
        Args:
            task: Task with runtime parameters attached
        """
        pass
    
    @abstractmethod
    def stop(self, task: SyncTask) -> None:
        """Stop any sync work running for the task.
        
        Args:
            task: Task previously passed to ``start`` or never started
        """
        pass
