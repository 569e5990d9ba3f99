"""Sync task manager: drives every configured task through start and stop."""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from .engine import SyncEngine
from .runtime import SyncRuntime
from ..config.schema import SyncDriveConfig, SyncTask
from ..config.settings import SyncSettings, get_settings
from ..config.store import ConfigStore, ConfigPersistError
from ..utils.logging import get_logger, log_execution_time


class NoSyncTaskError(Exception):
    """Raised when the configuration holds no sync tasks."""
    pass


@dataclass
class TaskOutcome:
    """Result of one task's start or stop call."""

    task_id: str
    name: str
    action: str
    success: bool
    error: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.name}({self.task_id})"


@dataclass
class BatchResult:
    """Outcomes for every task processed by one start or stop call."""

    action: str
    ok: bool = True
    outcomes: List[TaskOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> List[TaskOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> List[TaskOutcome]:
        return [o for o in self.outcomes if not o.success]


class SyncTaskManager:
    """Starts and stops the sync tasks listed in ``sync_drive_config.json``."""

    def __init__(
        self,
        pan_user: Any,
        drive_id: str,
        pan_client: Any,
        sync_config_folder_path: Union[str, Path],
        engine: SyncEngine,
        file_download_parallel: int = 2,
        file_upload_parallel: int = 2,
        file_download_block_size: int = 10 * 1024 * 1024,
        file_upload_block_size: int = 10 * 1024 * 1024,
        use_internal_url: bool = False,
        max_download_rate: int = 0,
        max_upload_rate: int = 0,
        task_start_interval: float = 0.2,
        store: Optional[ConfigStore] = None,
        on_outcome: Optional[Callable[[TaskOutcome], None]] = None
    ):
        """Initialize the sync task manager.

        Args:
            pan_user: Owning user context shared by all tasks
            drive_id: Drive identifier injected into every task
            pan_client: Cloud storage client handle shared by all tasks
            sync_config_folder_path: Folder holding the config file and task state
            engine: Sync engine the tasks delegate to
            task_start_interval: Pause in seconds after each started task
            store: Config store override, defaults to one over the config folder
            on_outcome: Called with every TaskOutcome as it is produced
        """
        self.sync_config_folder_path = str(sync_config_folder_path)
        self.store = store or ConfigStore(self.sync_config_folder_path)
        self.task_start_interval = task_start_interval
        self.on_outcome = on_outcome
        self.logger = get_logger(self.__class__.__name__)

        self.runtime = SyncRuntime(
            pan_user=pan_user,
            drive_id=drive_id,
            pan_client=pan_client,
            sync_db_folder_path=self.sync_config_folder_path,
            engine=engine,
            file_download_parallel=file_download_parallel,
            file_upload_parallel=file_upload_parallel,
            file_download_block_size=file_download_block_size,
            file_upload_block_size=file_upload_block_size,
            use_internal_url=use_internal_url,
            max_download_rate=max_download_rate,
            max_upload_rate=max_upload_rate
        )

        # Held in memory between start() and stop()
        self._config = SyncDriveConfig()

    @classmethod
    def from_settings(
        cls,
        pan_user: Any,
        drive_id: str,
        pan_client: Any,
        engine: SyncEngine,
        sync_settings: Optional[SyncSettings] = None,
        **kwargs
    ) -> "SyncTaskManager":
        """Build a manager from the shared runtime settings."""
        sync_settings = sync_settings or get_settings().sync

        return cls(
            pan_user=pan_user,
            drive_id=drive_id,
            pan_client=pan_client,
            sync_config_folder_path=sync_settings.config_folder_path,
            engine=engine,
            file_download_parallel=sync_settings.file_download_parallel,
            file_upload_parallel=sync_settings.file_upload_parallel,
            file_download_block_size=sync_settings.file_download_block_size,
            file_upload_block_size=sync_settings.file_upload_block_size,
            use_internal_url=sync_settings.use_internal_url,
            max_download_rate=sync_settings.max_download_rate,
            max_upload_rate=sync_settings.max_upload_rate,
            task_start_interval=sync_settings.task_start_interval,
            **kwargs
        )

    @property
    def config_file_path(self) -> Path:
        return self.store.config_file_path

    @property
    def config(self) -> SyncDriveConfig:
        return self._config

    @property
    def tasks(self) -> List[SyncTask]:
        return self._config.sync_task_list

    @log_execution_time
    def start(self) -> BatchResult:
        """Load the config file and start every task in order.

        A failing task is logged and reported, then the next task is tried.
        The document is written back once all tasks have been attempted.

        Returns:
            BatchResult with one outcome per task

        Raises:
            ConfigNotFoundError: If the config file does not exist
            ConfigParseError: If the config file is malformed
            NoSyncTaskError: If the config file lists no tasks
            ConfigPersistError: If the document cannot be written back
        """
        self._config = self.store.load()

        if not self._config.sync_task_list:
            raise NoSyncTaskError(f"No sync task configured in {self.config_file_path}")

        self.logger.info("Starting sync tasks", tasks_count=len(self.tasks))
        result = BatchResult(action="start")

        for task in self.tasks:
            if task.ensure_id():
                self.logger.info("Assigned id to sync task", name=task.name, task_id=task.id)

            task.attach(self.runtime)

            try:
                task.start()
            except Exception as e:
                self.logger.error(
                    "Start sync task failed",
                    task=task.name_label(),
                    error=str(e)
                )
                self._record(result, task, success=False, error=str(e))
                continue

            self.logger.info(
                "Sync task started",
                task=task.name_label(),
                local_folder_path=task.local_folder_path,
                pan_folder_path=task.pan_folder_path,
                mode=task.mode
            )
            self._record(result, task, success=True)

            if self.task_start_interval > 0:
                time.sleep(self.task_start_interval)

        self._persist(result)
        return result

    @log_execution_time
    def stop(self) -> BatchResult:
        """Stop every task held in memory, in order.

        The config file is not reloaded: called before start() this works on
        an empty task list and writes an empty document.

        Returns:
            BatchResult with one outcome per task

        Raises:
            ConfigPersistError: If the document cannot be written back
        """
        self.logger.info("Stopping sync tasks", tasks_count=len(self.tasks))
        result = BatchResult(action="stop")

        for task in self.tasks:
            try:
                task.stop()
            except Exception as e:
                self.logger.error(
                    "Stop sync task failed",
                    task=task.name_label(),
                    error=str(e)
                )
                self._record(result, task, success=False, error=str(e))
                continue

            self.logger.info("Sync task stopped", task=task.name_label())
            self._record(result, task, success=True)

        self._persist(result)
        return result

    def _record(self, result: BatchResult, task: SyncTask, success: bool, error: Optional[str] = None) -> None:
        outcome = TaskOutcome(
            task_id=task.id,
            name=task.name,
            action=result.action,
            success=success,
            error=error
        )
        result.outcomes.append(outcome)

        if self.on_outcome:
            self.on_outcome(outcome)

    def _persist(self, result: BatchResult) -> None:
        try:
            self.store.save(self._config)
        except ConfigPersistError as e:
            e.result = result
            raise

        self.logger.info(
            "Sync task batch finished",
            action=result.action,
            succeeded=len(result.succeeded),
            failed=len(result.failed)
        )
