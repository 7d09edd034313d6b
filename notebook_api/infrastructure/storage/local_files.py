"""Almacén de adjuntos en disco local.

Los binarios se guardan como `<uuid4><ext>` dentro de `uploads_dir` y se
referencian desde la nota con la ruta pública `/uploads/<nombre>`. El nombre
original sólo se conserva en los metadatos del adjunto.
"""
from __future__ import annotations

import logging
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO

_log = logging.getLogger("notebook.uploads")


@dataclass(frozen=True)
class StoredFile:
    name: str  # nombre generado en disco
    path: str  # ruta pública relativa, p.ej. /uploads/<name>
    size: int


class AttachmentStore:
    def __init__(self, root: Path, url_prefix: str = "/uploads") -> None:
        self.root = Path(root)
        self.url_prefix = "/" + url_prefix.strip("/")

    def _generate_name(self, original_name: str | None) -> str:
        ext = PurePosixPath(original_name or "").suffix
        return f"{uuid.uuid4()}{ext}"

    def _locate(self, relative_path: str) -> Path:
        # Sólo el basename: nunca se sale de uploads_dir
        return self.root / PurePosixPath(relative_path or "").name

    def store(self, stream: BinaryIO, original_name: str | None) -> StoredFile:
        """Copia el stream a un archivo nuevo y devuelve su ruta pública y tamaño."""
        self.root.mkdir(parents=True, exist_ok=True)
        name = self._generate_name(original_name)
        target = self.root / name
        with target.open("wb") as out:
            shutil.copyfileobj(stream, out, 256 * 1024)
        size = target.stat().st_size
        _log.info("Stored upload %s (%s bytes) as %s", original_name, size, name)
        return StoredFile(name=name, path=f"{self.url_prefix}/{name}", size=size)

    def delete(self, relative_path: str) -> bool:
        """Borra el archivo; si no existe es un no-op y devuelve False."""
        target = self._locate(relative_path)
        if not target.name:
            return False
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            _log.warning("Could not delete upload %s: %s", target.name, e)
            return False
        _log.info("Deleted upload %s", target.name)
        return True
