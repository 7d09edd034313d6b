"""Entrada principal de la app FastAPI (configura middlewares, excepciones, storage y routers)."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from notebook_api.api.router import api_router
from notebook_api.api.routers import health
from notebook_api.core.config import Settings, settings as default_settings
from notebook_api.core.exceptions import register_exception_handlers
from notebook_api.core.logging import setup_logging
from notebook_api.core.middleware import add_middlewares
from notebook_api.infrastructure.db.bootstrap import ensure_collections
from notebook_api.infrastructure.db.mongo import close_mongo, db_ready, init_mongo
from notebook_api.infrastructure.storage.local_files import AttachmentStore
from notebook_api.repositories.note_repo import build_note_repository
from notebook_api.repositories.task_repo import build_task_repository
from notebook_api.services.note_service import NoteService
from notebook_api.services.task_service import TaskService

_log = logging.getLogger("notebook.startup")


def _lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings.uploads_path.mkdir(parents=True, exist_ok=True)
        if settings.storage_backend == "mongo":
            init_mongo(settings)
            # Garantiza colecciones/índices/validadores mínimos si hay conexión
            if db_ready():
                ensure_collections(settings)
            else:
                _log.warning("Mongo no listo; omitiendo ensure_collections()")
        _log.info(
            "Storage backend=%s data_dir=%s uploads=%s",
            settings.storage_backend, settings.data_dir, settings.uploads_path,
        )
        yield
        if settings.storage_backend == "mongo":
            close_mongo()

    return lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, lifespan=_lifespan(settings))
    app.state.settings = settings

    files = AttachmentStore(settings.uploads_path, settings.uploads_url_normalized)
    app.state.note_service = NoteService(build_note_repository(settings), files)
    app.state.task_service = TaskService(build_task_repository(settings))

    add_middlewares(app, settings)
    register_exception_handlers(app)

    app.include_router(health.router)
    # Monta routers bajo el prefijo configurado
    app.include_router(api_router, prefix=settings.api_prefix_normalized)
    # Adjuntos servidos tal cual en /uploads/<nombre-generado>
    app.mount(
        settings.uploads_url_normalized,
        StaticFiles(directory=str(settings.uploads_path), check_dir=False),
        name="uploads",
    )
    return app


app = create_app()


def run() -> None:
    """Arranca uvicorn con host/puerto de settings (script `notebook-api`)."""
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, log_config=None)


if __name__ == "__main__":
    run()
