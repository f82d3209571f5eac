import logging
from typing import Callable, List

from .errors import PersistenceError
from .schemas.todo import FilterType, Todo, TodoStats, TodoView
from .store import TodoStore

logger = logging.getLogger(__name__)


class TodoController:
    """Holds the view state and turns user actions into store calls.

    After every action the whole list and the stats are re-read from the
    store; there is no incremental update.
    """

    def __init__(self, store: TodoStore):
        self.store = store
        self.filter = FilterType.ALL
        self.todos: List[Todo] = []
        self.stats = TodoStats()
        self.refresh()

    def refresh(self) -> None:
        self.todos = self.store.get_all()
        self.stats = self.store.get_stats()

    @property
    def filtered(self) -> List[Todo]:
        if self.filter == FilterType.ACTIVE:
            return [t for t in self.todos if not t.completed]
        if self.filter == FilterType.COMPLETED:
            return [t for t in self.todos if t.completed]
        return list(self.todos)

    def view(self) -> TodoView:
        return TodoView(filter=self.filter, todos=self.filtered, stats=self.stats)

    def _dispatch(self, action: Callable[[], object]) -> None:
        try:
            action()
        except PersistenceError as e:
            # The in-memory change stands; the next successful save catches up.
            logger.error("Failed to persist todos: %s", e.message)
        finally:
            self.refresh()

    def on_add(self, title: str) -> None:
        self._dispatch(lambda: self.store.add(title))

    def on_toggle(self, todo_id: int) -> None:
        self._dispatch(lambda: self.store.toggle(todo_id))

    def on_delete(self, todo_id: int) -> None:
        self._dispatch(lambda: self.store.delete(todo_id))

    def on_update(self, todo_id: int, title: str) -> None:
        self._dispatch(lambda: self.store.update(todo_id, title))

    def on_clear_completed(self) -> None:
        self._dispatch(self.store.clear_completed)

    def set_filter(self, value: FilterType) -> None:
        self.filter = FilterType(value)
