"""Tests for the task model, shared runtime and settings."""

import dataclasses

import pytest
from pydantic import ValidationError

from syncdrive.config import LoggingSettings, SyncSettings, SyncTask, SyncTaskError
from syncdrive.core import SyncRuntime

from .fakes import FakeSyncEngine


def make_runtime(engine, **overrides):
    values = dict(
        pan_user="user",
        drive_id="drive_001",
        pan_client="client",
        sync_db_folder_path="/tmp/sync",
        engine=engine
    )
    values.update(overrides)
    return SyncRuntime(**values)


def test_ensure_id_assigns_only_when_empty():
    task = SyncTask(name="a")
    
    assert task.ensure_id() is True
    assigned = task.id
    assert assigned
    assert task.ensure_id() is False
    assert task.id == assigned


def test_name_label_never_needs_runtime():
    assert SyncTask(name="games", id="g-1").name_label() == "games(g-1)"


def test_start_without_runtime_raises_task_error():
    task = SyncTask(name="games", id="g-1")
    
    with pytest.raises(SyncTaskError):
        task.start()
    with pytest.raises(SyncTaskError):
        task.stop()
    with pytest.raises(SyncTaskError):
        task.max_upload_rate


def test_start_and_stop_delegate_to_engine():
    engine = FakeSyncEngine()
    task = SyncTask(name="games", id="g-1")
    task.attach(make_runtime(engine))
    
    task.start()
    assert task.is_running
    task.stop()
    
    assert not task.is_running
    assert engine.started == ["games"]
    assert engine.stopped == ["games"]


def test_engine_failure_leaves_task_not_running():
    engine = FakeSyncEngine(fail_start={"games"})
    task = SyncTask(name="games", id="g-1")
    task.attach(make_runtime(engine))
    
    with pytest.raises(RuntimeError):
        task.start()
    
    assert not task.is_running


def test_runtime_is_read_only():
    runtime = make_runtime(FakeSyncEngine())
    
    with pytest.raises(dataclasses.FrozenInstanceError):
        runtime.max_upload_rate = 10


def test_task_reads_fields_by_alias_only():
    task = SyncTask.model_validate({"driveId": "d", "panFolderPath": "/p", "drive_id": "other"})
    
    assert task.drive_id == "d"
    assert task.pan_folder_path == "/p"
    assert task.model_extra == {"drive_id": "other"}


def test_sync_settings_defaults():
    settings = SyncSettings()
    
    assert settings.file_download_parallel >= 1
    assert settings.task_start_interval == 0.2
    assert settings.max_download_rate == 0


def test_sync_settings_read_environment(monkeypatch):
    monkeypatch.setenv("SYNC_FILE_UPLOAD_PARALLEL", "8")
    monkeypatch.setenv("SYNC_USE_INTERNAL_URL", "true")
    
    settings = SyncSettings()
    
    assert settings.file_upload_parallel == 8
    assert settings.use_internal_url is True


@pytest.mark.parametrize("field, value", [
    ("file_download_parallel", 0),
    ("file_upload_block_size", 0),
    ("max_download_rate", -1),
    ("task_start_interval", -0.5)
])
def test_sync_settings_reject_invalid_values(field, value):
    with pytest.raises(ValidationError):
        SyncSettings(**{field: value})


def test_logging_settings_normalize_level():
    assert LoggingSettings(level="debug").level == "DEBUG"
    
    with pytest.raises(ValidationError):
        LoggingSettings(level="chatty")
