"""Tests for the Mongo-backed repository, using an in-memory fake database."""

from __future__ import annotations

from pathlib import Path

import pytest

from fakes import FakeDatabase, make_file
from notebook_api.core.config import Settings
from notebook_api.core.exceptions import NotFoundError, StorageError
from notebook_api.infrastructure.db import mongo
from notebook_api.infrastructure.storage.local_files import AttachmentStore
from notebook_api.repositories.json_repo import JsonRecordRepository
from notebook_api.repositories.mongo_repo import MongoRecordRepository
from notebook_api.repositories.note_repo import build_note_repository
from notebook_api.repositories.task_repo import build_task_repository
from notebook_api.services.note_service import NoteService
from notebook_api.services.task_service import TaskService


@pytest.fixture()
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def repo(fake_db: FakeDatabase) -> MongoRecordRepository:
    return MongoRecordRepository("notes", db_getter=lambda: fake_db)


class TestMongoRecordRepository:
    def test_insert_and_get_hide_object_id(self, repo: MongoRecordRepository) -> None:
        record = {"id": "a", "title": "T"}
        assert repo.insert(record) == {"id": "a", "title": "T"}
        assert "_id" not in record
        assert repo.get("a") == {"id": "a", "title": "T"}
        assert repo.get("b") is None

    def test_list_keeps_insertion_order(self, repo: MongoRecordRepository) -> None:
        for rid in ("c", "a", "b"):
            repo.insert({"id": rid, "status": "draft"})
        assert [r["id"] for r in repo.list()] == ["c", "a", "b"]
        assert all("_id" not in r for r in repo.list())

    def test_list_filters(self, repo: MongoRecordRepository) -> None:
        repo.insert({"id": "1", "status": "draft"})
        repo.insert({"id": "2", "status": "completed"})
        assert [r["id"] for r in repo.list({"status": "completed"})] == ["2"]

    def test_replace(self, repo: MongoRecordRepository) -> None:
        repo.insert({"id": "1", "title": "old"})
        assert repo.replace({"id": "1", "title": "new"}) is True
        assert repo.get("1") == {"id": "1", "title": "new"}
        assert repo.replace({"id": "zzz", "title": "x"}) is False

    def test_delete(self, repo: MongoRecordRepository) -> None:
        repo.insert({"id": "1"})
        assert repo.delete("1") is True
        assert repo.delete("1") is False
        assert repo.list() == []


def test_note_service_on_mongo(fake_db: FakeDatabase, tmp_path: Path) -> None:
    uploads = AttachmentStore(tmp_path / "uploads")
    service = NoteService(MongoRecordRepository("notes", db_getter=lambda: fake_db), uploads)

    note = service.create_note("Homework", "Finish ch.3", files=[make_file("a.txt")])
    service.update_note(note["id"], status="completed")
    service.add_attachments(note["id"], [make_file("b.txt")])

    stored = service.get_note(note["id"])
    assert stored["status"] == "completed"
    assert [a["fileName"] for a in stored["attachments"]] == ["a.txt", "b.txt"]
    assert len(fake_db["notes"].docs) == 1

    service.delete_note(note["id"])
    assert fake_db["notes"].docs == []
    assert list((tmp_path / "uploads").iterdir()) == []
    with pytest.raises(NotFoundError):
        service.get_note(note["id"])


def test_task_service_on_mongo(fake_db: FakeDatabase) -> None:
    service = TaskService(MongoRecordRepository("tasks", db_getter=lambda: fake_db))
    task = service.create_task("t")
    assert service.set_done(task["id"])["done"] is True
    assert fake_db["tasks"].docs[0]["done"] is True


def test_get_db_requires_init() -> None:
    mongo.close_mongo()
    assert mongo.db_ready() is False
    with pytest.raises(StorageError):
        mongo.get_db()


def test_backend_selection(tmp_path: Path) -> None:
    json_settings = Settings(_env_file=None, data_dir=tmp_path, storage_backend="json")
    mongo_settings = Settings(_env_file=None, data_dir=tmp_path, storage_backend="mongo", notes_collection="n")

    assert isinstance(build_note_repository(json_settings), JsonRecordRepository)
    assert isinstance(build_task_repository(json_settings), JsonRecordRepository)
    note_repo = build_note_repository(mongo_settings)
    assert isinstance(note_repo, MongoRecordRepository)
    assert note_repo.collection_name == "n"
    assert isinstance(build_task_repository(mongo_settings), MongoRecordRepository)
