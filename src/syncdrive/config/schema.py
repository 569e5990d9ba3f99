"""Schema definitions for the persisted sync drive configuration document."""

import uuid
from typing import Any, List, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationInfo, field_validator

if TYPE_CHECKING:
    from ..core.runtime import SyncRuntime


SUPPORTED_CONFIG_VERSION = "1.0"


class SyncTaskError(Exception):
    """Raised by a sync task that cannot carry out a lifecycle call."""
    pass


class SyncTask(BaseModel):
    """One local folder to remote folder sync pairing.

    Persisted fields are read and written only under their camelCase aliases,
    so a snake_case key in the file is an unknown key. Unknown keys are kept as
    extras so re-saving never drops or renames data. A JSON null in a declared
    field reads as the field default.
    The runtime parameters are not persisted; they are borrowed from the
    owning manager through ``attach``.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(default="", description="Human-readable task name")
    id: str = Field(default="", description="Task identifier, UUID-shaped")
    drive_id: str = Field(default="", alias="driveId", description="Remote drive identifier")
    local_folder_path: str = Field(default="", alias="localFolderPath", description="Local folder to sync")
    pan_folder_path: str = Field(default="", alias="panFolderPath", description="Remote folder to sync")
    mode: str = Field(default="sync", description="Engine-defined sync mode")
    last_sync_time: str = Field(default="", alias="lastSyncTime", description="Last completed sync or empty")

    _runtime: Any = PrivateAttr(default=None)
    _running: bool = PrivateAttr(default=False)

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, v, info: ValidationInfo):
        if v is None:
            return cls.model_fields[info.field_name].default
        return v

    def ensure_id(self) -> bool:
        """Assign a fresh UUID when the task has none. Returns True if assigned."""
        if self.id:
            return False
        self.id = str(uuid.uuid4())
        return True

    def attach(self, runtime: "SyncRuntime") -> None:
        """Inject the shared runtime parameters by reference."""
        self._runtime = runtime
        self.drive_id = runtime.drive_id

    @property
    def runtime(self) -> Optional["SyncRuntime"]:
        return self._runtime

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pan_user(self) -> Any:
        return self._require_runtime().pan_user

    @property
    def pan_client(self) -> Any:
        return self._require_runtime().pan_client

    @property
    def sync_db_folder_path(self) -> str:
        return self._require_runtime().sync_db_folder_path

    @property
    def file_download_parallel(self) -> int:
        return self._require_runtime().file_download_parallel

    @property
    def file_upload_parallel(self) -> int:
        return self._require_runtime().file_upload_parallel

    @property
    def file_download_block_size(self) -> int:
        return self._require_runtime().file_download_block_size

    @property
    def file_upload_block_size(self) -> int:
        return self._require_runtime().file_upload_block_size

    @property
    def use_internal_url(self) -> bool:
        return self._require_runtime().use_internal_url

    @property
    def max_download_rate(self) -> int:
        return self._require_runtime().max_download_rate

    @property
    def max_upload_rate(self) -> int:
        return self._require_runtime().max_upload_rate

    def start(self) -> None:
        """Hand the task to the sync engine.

        Raises:
            SyncTaskError: If no runtime has been attached
        """
        runtime = self._require_runtime()
        runtime.engine.start(self)
        self._running = True

    def stop(self) -> None:
        """Ask the sync engine to stop the task.

        Raises:
            SyncTaskError: If no runtime has been attached
        """
        runtime = self._require_runtime()
        runtime.engine.stop(self)
        self._running = False

    def name_label(self) -> str:
        """Short label used when reporting on the task."""
        return f"{self.name}({self.id})"

    def _require_runtime(self) -> "SyncRuntime":
        if self._runtime is None:
            raise SyncTaskError(f"Sync task {self.name_label()} has no runtime attached")
        return self._runtime


class SyncDriveConfig(BaseModel):
    """Root of the sync drive configuration file."""

    model_config = ConfigDict(extra="allow")

    config_ver: str = Field(default=SUPPORTED_CONFIG_VERSION, alias="configVer", description="Schema version")
    sync_task_list: List[SyncTask] = Field(default_factory=list, alias="syncTaskList", description="Ordered sync tasks")

    @field_validator("config_ver", mode="before")
    @classmethod
    def validate_config_ver(cls, v):
        if v is None:
            return SUPPORTED_CONFIG_VERSION
        if v != SUPPORTED_CONFIG_VERSION:
            raise ValueError(f"Unsupported config version {v!r}, expected {SUPPORTED_CONFIG_VERSION!r}")
        return v

    @field_validator('sync_task_list', mode='before')
    @classmethod
    def validate_sync_task_list(cls, v):
        if v is None:
            return []
        return v

    def to_document(self) -> dict:
        """Serialize to the on-disk JSON shape."""
        return self.model_dump(by_alias=True, mode="json")
