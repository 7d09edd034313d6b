"""Contrato común de los repositorios (JSON en disco o colección Mongo).

Los servicios dependen sólo de esta interfaz. Cada repositorio expone un lock
re-entrante que el servicio sostiene durante todo read-modify-write.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class RecordRepository(ABC):
    """Registros (dicts) identificados por su campo `id`, en orden de inserción."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def locked(self) -> threading.RLock:
        """Lock del backing store; usar como `with repo.locked(): ...`."""
        return self._lock

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Record]:
        ...

    @abstractmethod
    def get(self, record_id: str) -> Optional[Record]:
        ...

    @abstractmethod
    def insert(self, record: Record) -> Record:
        ...

    @abstractmethod
    def replace(self, record: Record) -> bool:
        """Reemplaza el registro con el mismo `id`; False si no existe."""

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        ...
