"""Persistencia en un único documento JSON (arreglo de registros).

Cada request lee la colección completa y la reescribe completa; no hay caché.
Los errores de lectura/escritura se loggean y nunca se propagan al caller.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

_log = logging.getLogger("notebook.storage")


class JsonCollectionFile:
    """Lee/escribe una colección de registros (dicts) como un arreglo JSON."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> List[Dict[str, Any]]:
        """Devuelve los registros; `[]` si el archivo no existe o no se puede leer."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            _log.error("Error reading %s: %s", self.path, e)
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            _log.error("Error parsing %s: %s", self.path, e)
            return []
        if not isinstance(data, list):
            _log.error("Unexpected content in %s: expected a JSON array", self.path)
            return []
        records = [r for r in data if isinstance(r, dict)]
        if len(records) != len(data):
            _log.error("Dropping %d malformed record(s) in %s", len(data) - len(records), self.path)
        return records

    def save(self, records: List[Dict[str, Any]]) -> bool:
        """Reemplaza el documento completo; devuelve False si la escritura falló.

        Escribe a un temporal en el mismo directorio y hace `os.replace`, así un
        lector nunca ve el archivo a medias.
        """
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            _log.error("Error writing %s: %s", self.path, e)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False
