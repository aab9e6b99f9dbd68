"""
SQL-backed key-value store.

Persists entries in the ``storage_entries`` table through
:class:`StorageEntryRepository`.  Database errors are rolled back and
re-raised as :class:`StorageError`.
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.db.repositories.storage_entry import StorageEntryRepository
from app.storage.base import KeyValueStore, StorageError


class SQLKeyValueStore(KeyValueStore):
    """Key-value store over a SQLModel session."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = StorageEntryRepository(session)

    def get(self, key: str) -> Optional[str]:
        try:
            entry = self.repository.get_by_key(key)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"Failed to read '{key}': {e}") from e
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        try:
            self.repository.upsert(key, value)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"Failed to write '{key}': {e}") from e

    def delete(self, key: str) -> None:
        try:
            self.repository.delete(key)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"Failed to delete '{key}': {e}") from e
