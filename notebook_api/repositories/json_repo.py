"""Repositorio sobre un archivo JSON: cada operación lee y reescribe la colección completa."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from notebook_api.infrastructure.storage.json_file import JsonCollectionFile
from notebook_api.repositories.base import Record, RecordRepository

_log = logging.getLogger("notebook.repo.json")


def _matches(record: Record, filters: Optional[Dict[str, Any]]) -> bool:
    return all(record.get(k) == v for k, v in (filters or {}).items())


class JsonRecordRepository(RecordRepository):
    def __init__(self, path: Path) -> None:
        super().__init__()
        self.file = JsonCollectionFile(path)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Record]:
        return [r for r in self.file.load() if _matches(r, filters)]

    def get(self, record_id: str) -> Optional[Record]:
        return next((r for r in self.file.load() if r.get("id") == record_id), None)

    def insert(self, record: Record) -> Record:
        records = self.file.load()
        records.append(record)
        self._save(records)
        return record

    def replace(self, record: Record) -> bool:
        records = self.file.load()
        for i, r in enumerate(records):
            if r.get("id") == record.get("id"):
                records[i] = record
                self._save(records)
                return True
        return False

    def delete(self, record_id: str) -> bool:
        records = self.file.load()
        kept = [r for r in records if r.get("id") != record_id]
        if len(kept) == len(records):
            return False
        self._save(kept)
        return True

    def _save(self, records: List[Record]) -> None:
        # Una escritura fallida no se reporta al cliente: la respuesta refleja
        # la mutación en memoria (ver DESIGN.md).
        if not self.file.save(records):
            _log.warning("Changes to %s were not persisted", self.file.path)
