"""Schemas para endpoints de health."""
from typing import Optional

from pydantic import BaseModel


class PingOut(BaseModel):
    message: str


class HealthOut(BaseModel):
    ok: bool
    storage_backend: str
    mongo_ready: Optional[bool] = None
