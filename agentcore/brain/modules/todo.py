"""Todo module: numbered tasks that can be marked complete."""

from __future__ import annotations

from typing import List, Optional

from ..models import TodoItem, utc_now
from .base import BrainModule, OnAdd


class TodoModule(BrainModule[TodoItem]):
    name = "todo"

    def __init__(self, *, on_add: Optional[OnAdd[TodoItem]] = None) -> None:
        super().__init__(on_add=on_add)
        self._todos: List[TodoItem] = []

    def add(self, title: str) -> int:
        """Create a task and return its id (sequential, starting at 1)."""

        with self._lock.write():
            item = TodoItem(id=len(self._todos) + 1, title=title)
            self._todos.append(item)
        self._notify(item)
        return item.id

    def complete(self, todo_id: int) -> bool:
        updated: Optional[TodoItem] = None
        with self._lock.write():
            for i, item in enumerate(self._todos):
                if item.id == todo_id:
                    updated = item.model_copy(update={"completed": True, "completed_at": utc_now()})
                    self._todos[i] = updated
                    break
        if updated is None:
            return False
        self._notify(updated)
        return True

    def list(self) -> List[TodoItem]:
        with self._lock.read():
            return list(self._todos)

    def pending(self) -> List[TodoItem]:
        with self._lock.read():
            return [item for item in self._todos if not item.completed]


__all__ = ["TodoModule"]
