"""Utilidades de tiempo: timestamps en milisegundos epoch (formato del frontend)."""
from __future__ import annotations

import time


def now_ms() -> int:
    """Milisegundos desde epoch, equivalente a `Date.now()` en el navegador."""
    return time.time_ns() // 1_000_000
