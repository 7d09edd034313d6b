"""Cliente MongoDB síncrono (PyMongo) compartido por los repositorios.

`init_mongo()` se llama una sola vez en el startup cuando `storage_backend="mongo"`.
"""
from __future__ import annotations

import logging
from typing import Optional

import certifi
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from notebook_api.core.config import Settings
from notebook_api.core.exceptions import StorageError

_log = logging.getLogger("notebook.mongo")

_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def _client_kwargs(settings: Settings) -> dict:
    # Ajustes conservadores: 15s y CA de certifi cuando hay TLS
    kwargs = dict(serverSelectionTimeoutMS=15000)
    if settings.mongo_uri.startswith("mongodb+srv://"):
        # SRV ya implica TLS; proveemos CA bundle para robustez
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        if settings.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
        if settings.mongo_tls_allow_invalid_hostnames:
            kwargs["tlsAllowInvalidHostnames"] = True
    return kwargs


def init_mongo(settings: Settings) -> None:
    """
    Inicializa el cliente y valida conexión (ping).
    No tumba la app si Mongo no responde: deja la db en None y loggea.
    """
    global _client, _db
    try:
        _client = MongoClient(settings.mongo_uri, **_client_kwargs(settings))
        _client.admin.command("ping")
        _db = _client[settings.mongo_db]
        _log.info("Mongo conectado (db=%s)", settings.mongo_db)
    except ServerSelectionTimeoutError as e:
        _log.warning("Mongo no accesible (timeout): %s", e)
        close_mongo()
    except PyMongoError as e:
        _log.warning("Error de conexión a Mongo: %s", e)
        close_mongo()


def close_mongo() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None


def get_db() -> Database:
    """
    Devuelve la referencia a la base de datos.
    Úsalo en repositorios, no en routers.
    """
    if _db is None:
        raise StorageError("Mongo no inicializado. Intenta más tarde.")
    return _db


def db_ready() -> bool:
    return _db is not None
