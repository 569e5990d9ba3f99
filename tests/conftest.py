"""Shared fixtures for the sync drive tests."""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from syncdrive.core import SyncTaskManager
from syncdrive.utils.logging import setup_logging

from .fakes import FakeSyncEngine


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    setup_logging(log_level="DEBUG", log_format="console")


@pytest.fixture()
def engine() -> FakeSyncEngine:
    return FakeSyncEngine()


@pytest.fixture()
def make_manager(tmp_path):
    """Factory for managers over tmp_path with no start pause."""
    
    def _make(engine, **kwargs):
        kwargs.setdefault("task_start_interval", 0)
        return SyncTaskManager(
            pan_user={"user_id": "user_456"},
            drive_id="drive_001",
            pan_client=object(),
            sync_config_folder_path=tmp_path,
            engine=engine,
            **kwargs
        )
    
    return _make
