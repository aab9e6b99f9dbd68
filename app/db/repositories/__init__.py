"""Database repositories."""

from app.db.repositories.storage_entry import StorageEntryRepository

__all__ = [
    "StorageEntryRepository",
]
