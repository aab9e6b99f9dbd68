"""Key-value storage backends."""

from app.storage.base import KeyValueStore, StorageError
from app.storage.memory import InMemoryKeyValueStore
from app.storage.sql import SQLKeyValueStore

__all__ = ["KeyValueStore", "StorageError", "InMemoryKeyValueStore", "SQLKeyValueStore"]
