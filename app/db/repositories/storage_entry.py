"""
Storage entry repository.

Handles database operations for :class:`StorageEntry`.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.models.storage_entry import StorageEntry


class StorageEntryRepository:
    """Repository for StorageEntry database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_key(self, key: str) -> Optional[StorageEntry]:
        statement = select(StorageEntry).where(StorageEntry.key == key)
        return self.session.exec(statement).first()

    def upsert(self, key: str, value: str) -> StorageEntry:
        """Insert *key* or overwrite its value if it already exists."""
        entry = self.get_by_key(key)
        if entry is None:
            entry = StorageEntry(key=key, value=value)
        else:
            entry.value = value
            entry.updated_at = datetime.datetime.utcnow()
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def delete(self, key: str) -> bool:
        entry = self.get_by_key(key)
        if entry:
            self.session.delete(entry)
            self.session.commit()
            return True
        return False
