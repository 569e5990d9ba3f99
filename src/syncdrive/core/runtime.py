"""Runtime parameters shared by every task in a batch."""

from dataclasses import dataclass
from typing import Any

from .engine import SyncEngine


@dataclass(frozen=True)
class SyncRuntime:
    """Settings and handles the manager lends to each sync task.

    One instance is built per manager and every task holds a reference to the
    same object. Frozen, so tasks cannot change shared settings.
    """
    
    pan_user: Any
    drive_id: str
    pan_client: Any
    sync_db_folder_path: str
    engine: SyncEngine
    
    file_download_parallel: int = 2
    file_upload_parallel: int = 2
    file_download_block_size: int = 10 * 1024 * 1024
    file_upload_block_size: int = 10 * 1024 * 1024
    use_internal_url: bool = False
    
    # 0 means unlimited
    max_download_rate: int = 0
    max_upload_rate: int = 0
