"""In-memory key-value store, mainly for tests and scripts."""

from typing import Optional

from app.storage.base import KeyValueStore, StorageError


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store.

    Setting ``available = False`` makes every operation raise
    :class:`StorageError`, emulating storage disabled by the client.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise StorageError("Storage is unavailable")

    def get(self, key: str) -> Optional[str]:
        self._check()
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check()
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._check()
        self._data.pop(key, None)
