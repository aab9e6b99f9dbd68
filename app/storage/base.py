"""
Abstract key-value store.

The history, stats and theme documents are kept in a flat string
key-value store, the way a browser keeps them in local storage.  The
core only talks to this interface so that the backing store (in-memory,
SQL table, remote API) can be swapped without touching it.

Every failure of the backing store, including "storage disabled", is
raised as :class:`StorageError`.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """The backing store is unavailable or rejected the operation."""


class KeyValueStore(ABC):
    """Abstract base class that every key-value backend must implement."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or ``None`` if absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove *key*.  Removing a missing key is not an error."""
        ...
