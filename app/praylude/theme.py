"""
Theme preference (dark/light) kept in the key-value store.

Reads never fail: a missing, unknown or unreadable value falls back to
the configured default.  Writes are best effort and only logged on
failure.
"""

import logging
from typing import Optional

from app.core.config import settings
from app.storage.base import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

THEMES = ("dark", "light")


def _default_theme() -> str:
    return settings.DEFAULT_THEME if settings.DEFAULT_THEME in THEMES else "dark"


def get_theme(store: KeyValueStore, key: Optional[str] = None) -> str:
    try:
        saved = store.get(key or settings.THEME_KEY)
    except StorageError as e:
        logger.warning("Failed to read theme from storage: %s", e)
        return _default_theme()
    if saved not in THEMES:
        return _default_theme()
    return saved


def set_theme(store: KeyValueStore, theme: str, key: Optional[str] = None) -> None:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme '{theme}'. Available: {list(THEMES)}")
    try:
        store.set(key or settings.THEME_KEY, theme)
    except StorageError as e:
        logger.warning("Failed to save theme to storage: %s", e)


def toggle_theme(store: KeyValueStore, key: Optional[str] = None) -> str:
    """Switch dark <-> light and return the new theme."""
    next_theme = "light" if get_theme(store, key) == "dark" else "dark"
    set_theme(store, next_theme, key)
    return next_theme
