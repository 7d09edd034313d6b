"""
Service layer for notes: CRUD plus the attachment lifecycle.

Los archivos de los adjuntos viven en el `AttachmentStore` y sus metadatos en
el arreglo `attachments` de la nota. Borrar una nota borra sus archivos; borrar
un adjunto borra el archivo y la entrada. No hay rollback entre ambos recursos:
si algo falla a mitad de camino puede quedar un archivo huérfano.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, Iterable, List, Optional
from uuid import uuid4

from notebook_api.core.exceptions import NotFoundError, ValidationError
from notebook_api.core.time import now_ms
from notebook_api.infrastructure.storage.local_files import AttachmentStore
from notebook_api.repositories.base import RecordRepository

_log = logging.getLogger("notebook.notes")

STATUSES = ("draft", "completed")
DEFAULT_STATUS = "draft"
DEFAULT_FILE_TYPE = "application/octet-stream"

Note = Dict[str, Any]
Attachment = Dict[str, Any]


@dataclass
class IncomingFile:
    """Archivo recibido del cliente, independiente del framework HTTP."""

    filename: Optional[str]
    content_type: Optional[str]
    stream: BinaryIO


def _usable(files: Optional[Iterable[IncomingFile]]) -> List[IncomingFile]:
    # Un <input type=file> vacío llega como parte sin nombre
    return [f for f in (files or []) if f is not None and f.filename]


def _normalize_status(status: Optional[str]) -> Optional[str]:
    value = str(status or "").strip().lower()
    if not value:
        return None
    if value not in STATUSES:
        raise ValidationError("Status must be one of: draft, completed.")
    return value


class NoteService:
    def __init__(self, repo: RecordRepository, files: AttachmentStore) -> None:
        self._repo = repo
        self._files = files

    # --- lectura ---

    def list_notes(self, status: Optional[str] = None) -> List[Note]:
        status = _normalize_status(status)
        filters = {"status": status} if status else None
        return self._repo.list(filters)

    def get_note(self, note_id: str) -> Note:
        note = self._repo.get(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        note.setdefault("attachments", [])
        return note

    # --- escritura ---

    def create_note(
        self,
        title: Optional[str],
        content: Optional[str],
        status: Optional[str] = None,
        files: Optional[Iterable[IncomingFile]] = None,
    ) -> Note:
        if not title or not content:
            raise ValidationError("Title and content are required.")
        status = _normalize_status(status) or DEFAULT_STATUS
        now = now_ms()
        note: Note = {
            "id": str(uuid4()),
            "title": title,
            "content": content,
            "status": status,
            "createdAt": now,
            "updatedAt": now,
            "attachments": [],
        }
        with self._repo.locked():
            note["attachments"] = self._store_files(_usable(files))
            self._repo.insert(note)
        _log.info("Created note %s with %d attachment(s)", note["id"], len(note["attachments"]))
        return note

    def update_note(
        self,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Note:
        """Actualización parcial.

        Un campo omitido *o vacío* conserva su valor anterior (`nuevo or previo`),
        así que una actualización nunca deja un campo en "". Los clientes
        existentes dependen de esta semántica.
        """
        with self._repo.locked():
            note = self.get_note(note_id)
            status = _normalize_status(status)
            note["title"] = title or note.get("title")
            note["content"] = content or note.get("content")
            note["status"] = status or note.get("status") or DEFAULT_STATUS
            self._touch(note)
            self._repo.replace(note)
        return note

    def delete_note(self, note_id: str) -> None:
        with self._repo.locked():
            note = self.get_note(note_id)
            # Primero los archivos, luego el registro (best-effort, sin rollback)
            for att in note["attachments"]:
                self._files.delete(att.get("filePath", ""))
            self._repo.delete(note_id)
        _log.info("Deleted note %s and %d attachment(s)", note_id, len(note["attachments"]))

    def add_attachments(self, note_id: str, files: Optional[Iterable[IncomingFile]]) -> List[Attachment]:
        with self._repo.locked():
            note = self.get_note(note_id)
            usable = _usable(files)
            if not usable:
                raise ValidationError("No files uploaded.")
            new_attachments = self._store_files(usable)
            note["attachments"].extend(new_attachments)
            self._touch(note)
            self._repo.replace(note)
        return new_attachments

    def delete_attachment(self, note_id: str, attachment_id: str) -> None:
        with self._repo.locked():
            note = self.get_note(note_id)
            idx = next(
                (i for i, att in enumerate(note["attachments"]) if att.get("id") == attachment_id),
                None,
            )
            if idx is None:
                raise NotFoundError("Attachment not found")
            att = note["attachments"].pop(idx)
            # Si el archivo ya no está en disco, se considera borrado igual
            self._files.delete(att.get("filePath", ""))
            self._touch(note)
            self._repo.replace(note)

    # --- helpers ---

    def _store_files(self, files: List[IncomingFile]) -> List[Attachment]:
        out: List[Attachment] = []
        for f in files:
            stored = self._files.store(f.stream, f.filename)
            out.append({
                "id": str(uuid4()),
                "fileName": f.filename,
                "fileSize": stored.size,
                "fileType": f.content_type or DEFAULT_FILE_TYPE,
                "filePath": stored.path,
            })
        return out

    @staticmethod
    def _touch(note: Note) -> None:
        # updatedAt nunca queda por debajo de createdAt
        note["updatedAt"] = max(now_ms(), int(note.get("createdAt") or 0))
