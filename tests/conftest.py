# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from notebook_api.core.config import Settings
from notebook_api.infrastructure.storage.local_files import AttachmentStore
from notebook_api.main import create_app
from notebook_api.repositories.json_repo import JsonRecordRepository
from notebook_api.services.note_service import NoteService
from notebook_api.services.task_service import TaskService


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from any .env file, with a per-test data directory."""
    return Settings(
        _env_file=None,
        data_dir=tmp_path / "data",
        storage_backend="json",
        api_prefix="",
        log_level="WARNING",
    )


@pytest.fixture()
def uploads(settings: Settings) -> AttachmentStore:
    return AttachmentStore(settings.uploads_path, settings.uploads_url_normalized)


@pytest.fixture()
def note_service(settings: Settings, uploads: AttachmentStore) -> NoteService:
    return NoteService(JsonRecordRepository(settings.notes_path), uploads)


@pytest.fixture()
def task_service(settings: Settings) -> TaskService:
    return TaskService(JsonRecordRepository(settings.tasks_path))


@pytest.fixture()
def client(settings: Settings):
    # The context manager runs the lifespan (creates the uploads dir)
    with TestClient(create_app(settings)) as c:
        yield c
