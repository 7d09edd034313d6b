"""Repositorio sobre una colección Mongo, con documentos indexados por `id` (no `_id`)."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from pymongo.collection import Collection
from pymongo.database import Database

from notebook_api.infrastructure.db.mongo import get_db
from notebook_api.repositories.base import Record, RecordRepository

# `_id` nunca sale del repositorio
PROJECTION = {"_id": 0}


class MongoRecordRepository(RecordRepository):
    def __init__(self, collection: str, db_getter: Callable[[], Database] = get_db) -> None:
        super().__init__()
        self.collection_name = collection
        self._db_getter = db_getter

    @property
    def coll(self) -> Collection:
        return self._db_getter()[self.collection_name]

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Record]:
        # ObjectId crece con el tiempo: ordenar por _id conserva el orden de inserción
        return list(self.coll.find(dict(filters or {}), PROJECTION).sort("_id", 1))

    def get(self, record_id: str) -> Optional[Record]:
        return self.coll.find_one({"id": record_id}, PROJECTION)

    def insert(self, record: Record) -> Record:
        # insert_one agrega `_id` al dict que recibe; se inserta una copia
        self.coll.insert_one(dict(record))
        return record

    def replace(self, record: Record) -> bool:
        res = self.coll.replace_one({"id": record["id"]}, dict(record))
        return res.matched_count > 0

    def delete(self, record_id: str) -> bool:
        res = self.coll.delete_one({"id": record_id})
        return res.deleted_count > 0
