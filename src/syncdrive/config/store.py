"""Read and write the sync drive configuration file."""

import json
import os
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .schema import SyncDriveConfig
from ..utils.logging import LoggerMixin


CONFIG_FILE_NAME = "sync_drive_config.json"

# rwxr-xr-x
CONFIG_FILE_MODE = 0o755


class ConfigStoreError(Exception):
    """Base error for configuration file access."""
    pass


class ConfigNotFoundError(ConfigStoreError):
    """Raised when the configuration file does not exist."""
    pass


class ConfigParseError(ConfigStoreError):
    """Raised when the configuration file is not a valid document."""
    pass


class ConfigPersistError(ConfigStoreError):
    """Raised when the configuration file cannot be written.

    ``result`` carries the lifecycle batch result when the failure happens at
    the end of a start or stop cycle.
    """

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class ConfigStore(LoggerMixin):
    """Round-trips ``SyncDriveConfig`` through ``sync_drive_config.json``.

    The folder is supplied by the caller and is never created here.
    """

    def __init__(self, config_folder_path: Union[str, Path]):
        self.config_folder_path = Path(config_folder_path)

    @property
    def config_file_path(self) -> Path:
        return self.config_folder_path / CONFIG_FILE_NAME

    def load(self) -> SyncDriveConfig:
        """Load the configuration document.

        A zero-byte file yields the default document with no tasks. Whitespace
        alone is not a document and fails to parse.

        Returns:
            Parsed SyncDriveConfig

        Raises:
            ConfigNotFoundError: If the file does not exist
            ConfigParseError: If the file is not a valid document
            ConfigStoreError: If the file cannot be read
        """
        file_path = self.config_file_path

        if not file_path.exists():
            raise ConfigNotFoundError(f"Sync drive config file not found: {file_path}")

        try:
            raw = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ConfigParseError(f"Sync drive config {file_path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise ConfigStoreError(f"Failed to read sync drive config {file_path}: {e}") from e

        if not raw:
            self.logger.info("Sync drive config is empty, using defaults", file_path=str(file_path))
            return SyncDriveConfig()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            self.logger.debug("Parse sync drive config json error", file_path=str(file_path), error=str(e))
            raise ConfigParseError(f"Invalid JSON in {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigParseError(f"Sync drive config root must be an object, got {type(data).__name__}")

        try:
            config = SyncDriveConfig.model_validate(data)
        except ValidationError as e:
            self.logger.debug("Sync drive config failed validation", file_path=str(file_path), error=str(e))
            raise ConfigParseError(f"Invalid sync drive config {file_path}: {e}") from e

        self.logger.info(
            "Sync drive config loaded",
            file_path=str(file_path),
            tasks_count=len(config.sync_task_list)
        )
        return config

    def save(self, config: SyncDriveConfig) -> None:
        """Write the document, fully replacing the previous file.

        Raises:
            ConfigPersistError: If the file cannot be written
        """
        file_path = self.config_file_path
        text = json.dumps(config.to_document(), indent=1, ensure_ascii=False)

        try:
            fd = os.open(file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            self.logger.error("Failed to save sync drive config", file_path=str(file_path), error=str(e))
            raise ConfigPersistError(f"Failed to save sync drive config {file_path}: {e}") from e

        self.logger.info(
            "Sync drive config saved",
            file_path=str(file_path),
            tasks_count=len(config.sync_task_list)
        )
