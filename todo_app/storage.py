"""Local persistence: a key/value table and the todo list adapter on top of it.

``KeyValueStorage`` plays the role browser local storage plays for a web
client: string values under string keys, each write replacing the previous
value. ``TodoStorage`` keeps the whole task list as one JSON array under a
single key.
"""

import logging
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import TODO_STORAGE_KEY
from .database import create_tables, get_session
from .errors import PersistenceError
from .models import StorageEntry
from .schemas.todo import Todo

logger = logging.getLogger(__name__)

_TODO_LIST = TypeAdapter(List[Todo])


class KeyValueStorage:
    def __init__(self, bind: Optional[Engine] = None):
        self._bind = bind
        try:
            create_tables(bind)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not initialise storage: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        try:
            with get_session(self._bind) as session:
                entry = session.get(StorageEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read {key!r}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            with get_session(self._bind) as session:
                entry = session.get(StorageEntry, key)
                if entry is None:
                    entry = StorageEntry(key=key, value=value)
                else:
                    entry.value = value
                session.add(entry)
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not write {key!r}: {e}") from e


class TodoStorage:
    """Loads and saves the full task list under one storage key."""

    def __init__(self, kv: KeyValueStorage, key: str = TODO_STORAGE_KEY):
        self.kv = kv
        self.key = key

    def load(self) -> List[Todo]:
        """Return the stored list, or an empty list if nothing usable is stored.

        A value that is not valid JSON or does not match the record shape is
        treated as absent: it is logged and left in place until the next save
        overwrites it.
        """
        raw = self.kv.get_item(self.key)
        if raw is None:
            return []

        try:
            records = _TODO_LIST.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Ignoring malformed todo list under key %r (%d errors): %s",
                self.key,
                e.error_count(),
                e.errors(include_url=False)[:3],
            )
            return []

        seen = set()
        unique: List[Todo] = []
        for record in records:
            if record.id in seen:
                logger.warning("Dropping duplicate todo id %s from key %r", record.id, self.key)
                continue
            seen.add(record.id)
            unique.append(record)
        return unique

    def save(self, records: Sequence[Todo]) -> None:
        payload = _TODO_LIST.dump_json(list(records), by_alias=True).decode("utf-8")
        self.kv.set_item(self.key, payload)
        logger.debug("Saved %d todos under key %r", len(records), self.key)
