"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Praylude"
    VERSION: str = "0.1.0"
    DESCRIPTION: str = "Guided Christian meditation sessions, playback and history."
    AUTHORS: List[str] = ["Praylude team"]

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database (backs the key-value store)
    DATABASE_URL: str = "sqlite:///./praylude.db"

    # Content
    CONTENT_PATH: str = "data/mock-techniques.json"

    # Key-value storage
    STORAGE_KEY_PREFIX: str = "praylude"
    DEFAULT_THEME: str = "dark"

    # Player
    TICK_INTERVAL_SECONDS: float = 1.0
    PLAYER_SERVER_TICKS: bool = True
    PLAYER_IDLE_TIMEOUT_SECONDS: float = 3600.0

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def SESSIONS_KEY(self) -> str:
        return f"{self.STORAGE_KEY_PREFIX}_sessions"

    @property
    def STATS_KEY(self) -> str:
        return f"{self.STORAGE_KEY_PREFIX}_stats"

    @property
    def THEME_KEY(self) -> str:
        return f"{self.STORAGE_KEY_PREFIX}_theme"


# Global settings instance
settings = Settings()
