"""Repo de la colección de notas (archivo JSON o colección Mongo según settings)."""
from notebook_api.core.config import Settings
from notebook_api.repositories.base import RecordRepository
from notebook_api.repositories.json_repo import JsonRecordRepository
from notebook_api.repositories.mongo_repo import MongoRecordRepository


def build_note_repository(settings: Settings) -> RecordRepository:
    if settings.storage_backend == "mongo":
        return MongoRecordRepository(settings.notes_collection)
    return JsonRecordRepository(settings.notes_path)
