"""
Dependencias reutilizables para routers (FastAPI Depends).

- Los servicios se construyen una vez en `create_app` y viven en `app.state`.
- Mantener esta capa delgada: sin lógica de negocio.
"""
from typing import List, Optional, Union

from fastapi import Request, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from notebook_api.core.config import Settings
from notebook_api.services.note_service import IncomingFile, NoteService
from notebook_api.services.task_service import TaskService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def to_incoming(files: Optional[List[Union[UploadFile, str]]]) -> List[IncomingFile]:
    """Adapta los UploadFile de Starlette al tipo que entiende el servicio.

    Un `<input type=file>` vacío llega como la cadena "" y se descarta aquí.
    """
    return [
        IncomingFile(filename=f.filename, content_type=f.content_type, stream=f.file)
        for f in (files or [])
        if isinstance(f, StarletteUploadFile)
    ]
