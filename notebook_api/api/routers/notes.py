"""
Endpoints para `notes` y sus adjuntos.

Los errores del servicio (`ValidationError`, `NotFoundError`) se traducen a
400/404 `{message}` en los handlers globales; aquí no se arman HTTPException.
"""
from typing import Any, Dict, List, Optional, Tuple, Union

from fastapi import APIRouter, Depends, File, Form, Query, Request, Response, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as StarletteUploadFile

from notebook_api.api.deps import get_note_service, to_incoming
from notebook_api.api.schemas.note import AttachmentOut, NoteOut, NoteUpdate
from notebook_api.core.exceptions import ValidationError
from notebook_api.services.note_service import NoteService


router = APIRouter(prefix="/notes", tags=["Notes"])

FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@router.get(
    "",
    response_model=List[NoteOut],
    summary="Listar notas",
    description="Devuelve todas las notas en orden de inserción; filtro opcional por status.",
)
def list_notes(
    status_f: Optional[str] = Query(default=None, alias="status"),
    service: NoteService = Depends(get_note_service),
) -> List[NoteOut]:
    return [NoteOut.model_validate(n) for n in service.list_notes(status=status_f)]


@router.get("/{note_id}", response_model=NoteOut, summary="Obtener nota")
def get_note(note_id: str, service: NoteService = Depends(get_note_service)) -> NoteOut:
    return NoteOut.model_validate(service.get_note(note_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteOut,
    summary="Crear nota",
    description="multipart/form-data con title, content, status opcional y `files` opcionales.",
)
def create_note(
    title: Optional[str] = Form(default=None),
    content: Optional[str] = Form(default=None),
    status_f: Optional[str] = Form(default=None, alias="status"),
    files: Optional[List[Union[UploadFile, str]]] = File(default=None),
    service: NoteService = Depends(get_note_service),
) -> NoteOut:
    note = service.create_note(title, content, status_f, to_incoming(files))
    return NoteOut.model_validate(note)


async def _read_update_body(request: Request) -> Tuple[Dict[str, Any], List[StarletteUploadFile]]:
    """Lee el cuerpo de PUT: JSON, o formulario (el frontend manda FormData)."""
    ctype = (request.headers.get("content-type") or "").lower()
    if ctype.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise ValidationError("Malformed JSON body.")
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object.")
        return data, []
    if ctype.startswith(FORM_TYPES):
        form = await request.form()
        fields = {k: v for k, v in form.items() if isinstance(v, str)}
        files = [v for v in form.getlist("files") if isinstance(v, StarletteUploadFile)]
        return fields, files
    return {}, []


@router.put(
    "/{note_id}",
    response_model=NoteOut,
    summary="Editar nota",
    description=(
        "Actualización parcial (JSON o formulario). Campos omitidos o vacíos conservan "
        "su valor. Si el formulario trae `files`, se agregan como adjuntos."
    ),
)
async def update_note(
    note_id: str,
    request: Request,
    service: NoteService = Depends(get_note_service),
) -> NoteOut:
    fields, files = await _read_update_body(request)
    try:
        try:
            payload = NoteUpdate.model_validate(fields)
        except PydanticValidationError as e:
            raise RequestValidationError(e.errors(include_url=False))
        note = await run_in_threadpool(
            service.update_note, note_id, payload.title, payload.content, payload.status
        )
        if any(f.filename for f in files):
            await run_in_threadpool(service.add_attachments, note_id, to_incoming(files))
            note = await run_in_threadpool(service.get_note, note_id)
        return NoteOut.model_validate(note)
    finally:
        for f in files:
            await f.close()


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Borrar nota y sus adjuntos")
def delete_note(note_id: str, service: NoteService = Depends(get_note_service)) -> Response:
    service.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{note_id}/attachments",
    status_code=status.HTTP_201_CREATED,
    response_model=List[AttachmentOut],
    summary="Agregar adjuntos",
)
def add_attachments(
    note_id: str,
    files: Optional[List[Union[UploadFile, str]]] = File(default=None),
    service: NoteService = Depends(get_note_service),
) -> List[AttachmentOut]:
    created = service.add_attachments(note_id, to_incoming(files))
    return [AttachmentOut.model_validate(a) for a in created]


@router.delete(
    "/{note_id}/attachments/{attachment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Borrar un adjunto",
)
def delete_attachment(
    note_id: str,
    attachment_id: str,
    service: NoteService = Depends(get_note_service),
) -> Response:
    service.delete_attachment(note_id, attachment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
