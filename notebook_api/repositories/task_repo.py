"""Repo de la colección de tareas (variante plana)."""
from notebook_api.core.config import Settings
from notebook_api.repositories.base import RecordRepository
from notebook_api.repositories.json_repo import JsonRecordRepository
from notebook_api.repositories.mongo_repo import MongoRecordRepository


def build_task_repository(settings: Settings) -> RecordRepository:
    if settings.storage_backend == "mongo":
        return MongoRecordRepository(settings.tasks_collection)
    return JsonRecordRepository(settings.tasks_path)
