"""Esquemas Pydantic para `tasks`."""
from typing import Optional

from pydantic import BaseModel


class TaskCreate(BaseModel):
    title: Optional[str] = None


class TaskPatch(BaseModel):
    # Sin `done` el servidor invierte el valor actual
    done: Optional[bool] = None


class TaskOut(BaseModel):
    id: str
    title: str
    done: bool
