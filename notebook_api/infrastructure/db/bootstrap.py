"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging

from pymongo.errors import PyMongoError

from notebook_api.core.config import Settings
from notebook_api.infrastructure.db.mongo import get_db

_log = logging.getLogger("notebook.mongo.bootstrap")


ATTACHMENT_SCHEMA: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["id", "fileName", "fileSize", "fileType", "filePath"],
    "properties": {
        "id": {"bsonType": "string"},
        "fileName": {"bsonType": "string"},
        "fileSize": {"bsonType": ["int", "long"], "minimum": 0},
        "fileType": {"bsonType": "string"},
        "filePath": {"bsonType": "string"},
    },
}

NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["id", "title", "content", "status", "createdAt", "updatedAt", "attachments"],
    "properties": {
        "id": {"bsonType": "string"},
        "title": {"bsonType": "string", "minLength": 1},
        "content": {"bsonType": "string", "minLength": 1},
        "status": {"bsonType": "string", "enum": ["draft", "completed"]},
        "createdAt": {"bsonType": ["int", "long"]},
        "updatedAt": {"bsonType": ["int", "long"]},
        "attachments": {"bsonType": "array", "items": ATTACHMENT_SCHEMA},
    },
}

TASK_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["id", "title", "done"],
    "properties": {
        "id": {"bsonType": "string"},
        "title": {"bsonType": "string"},
        "done": {"bsonType": "bool"},
    },
}


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if name not in db.list_collection_names():
            if validator:
                db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                db.create_collection(name)
        elif validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        ix = dict(ix)
        keys = ix.pop("keys")
        try:
            coll.create_index(keys, **ix)
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections(settings: Settings) -> None:
    """
    Garantiza colecciones, validadores e índices mínimos (notas y tareas).
    """
    specs = [
        (settings.notes_collection, NOTE_VALIDATOR, [
            {"keys": [("id", 1)], "name": "uniq_id", "unique": True},
            {"keys": [("status", 1)], "name": "by_status"},
        ]),
        (settings.tasks_collection, TASK_VALIDATOR, [
            {"keys": [("id", 1)], "name": "uniq_id", "unique": True},
        ]),
    ]
    for name, validator, indexes in specs:
        _collmod_or_create(name, validator)
        _ensure_indexes(name, indexes)
    _log.info("Colecciones verificadas: %s", ", ".join(s[0] for s in specs))
