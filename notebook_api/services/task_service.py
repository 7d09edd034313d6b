"""Servicio de tareas (variante plana: título + done)."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from notebook_api.core.exceptions import NotFoundError, ValidationError
from notebook_api.core.time import now_ms
from notebook_api.repositories.base import RecordRepository

Task = Dict[str, Any]


class TaskService:
    def __init__(self, repo: RecordRepository) -> None:
        self._repo = repo

    def list_tasks(self) -> List[Task]:
        return self._repo.list()

    def create_task(self, title: Optional[str]) -> Task:
        if not title:
            raise ValidationError("Title is required.")
        with self._repo.locked():
            task: Task = {"id": self._next_id(), "title": title, "done": False}
            self._repo.insert(task)
        return task

    def _next_id(self) -> str:
        # id = timestamp de creación (ms); si ya está tomado se avanza 1 ms
        taken = {t.get("id") for t in self._repo.list()}
        ts = now_ms()
        while str(ts) in taken:
            ts += 1
        return str(ts)

    def delete_task(self, task_id: str) -> None:
        with self._repo.locked():
            if not self._repo.delete(task_id):
                raise NotFoundError("Task not found")

    def set_done(self, task_id: str, done: Optional[bool] = None) -> Task:
        """Con `done=None` invierte el valor guardado; con un bool lo fija tal cual."""
        with self._repo.locked():
            task = self._repo.get(task_id)
            if task is None:
                raise NotFoundError("Task not found")
            task["done"] = (not task.get("done", False)) if done is None else bool(done)
            self._repo.replace(task)
        return task
