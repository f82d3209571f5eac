import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

from .errors import BlankTitleError
from .schemas.todo import Todo, TodoStats
from .storage import TodoStorage

logger = logging.getLogger(__name__)


class TodoStore:
    """Authoritative in-memory task list with write-through persistence.

    Records are kept newest-first. Every mutating call saves the full list
    before returning; calls that reference an unknown id do nothing. Not
    thread-safe: one user, one caller at a time.
    """

    def __init__(self, storage: TodoStorage):
        self._storage = storage
        self._todos: List[Todo] = storage.load()
        self._last_id = max((t.id for t in self._todos), default=0)
        logger.info("Loaded %d todos", len(self._todos))

    def _save(self) -> None:
        self._storage.save(self._todos)

    def _find(self, todo_id: int) -> Optional[Todo]:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    def _next_id(self) -> int:
        # Millisecond timestamp, bumped past the last id so two adds in the
        # same millisecond still get distinct, increasing ids.
        self._last_id = max(int(time.time() * 1000), self._last_id + 1)
        return self._last_id

    def get_all(self) -> List[Todo]:
        return [todo.model_copy() for todo in self._todos]

    def add(self, title: str) -> Todo:
        title = title.strip()
        if not title:
            raise BlankTitleError()

        todo = Todo(
            id=self._next_id(),
            title=title,
            completed=False,
            created_at=datetime.now(timezone.utc),
        )
        self._todos.insert(0, todo)
        self._save()
        logger.debug("Added todo %s", todo.id)
        return todo.model_copy()

    def toggle(self, todo_id: int) -> None:
        todo = self._find(todo_id)
        if todo is None:
            return
        todo.completed = not todo.completed
        self._save()

    def delete(self, todo_id: int) -> None:
        remaining = [t for t in self._todos if t.id != todo_id]
        if len(remaining) == len(self._todos):
            return
        self._todos = remaining
        self._save()

    def update(self, todo_id: int, title: str) -> None:
        title = title.strip()
        if not title:
            raise BlankTitleError()

        todo = self._find(todo_id)
        if todo is None:
            return
        todo.title = title
        self._save()

    def clear_completed(self) -> None:
        before = len(self._todos)
        self._todos = [t for t in self._todos if not t.completed]
        self._save()
        logger.debug("Cleared %d completed todos", before - len(self._todos))

    def get_stats(self) -> TodoStats:
        total = len(self._todos)
        completed = sum(1 for t in self._todos if t.completed)
        return TodoStats(total=total, completed=completed, active=total - completed)
