"""
API test fixtures.

Runs the FastAPI app against an in-memory SQLite database and a fresh
player service with client-driven ticks.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import app.db.base  # noqa: F401
from app.api.dependencies import get_player_service
from app.content.provider import ContentProvider
from app.db.session import get_db
from app.main import app
from app.praylude.history import HistoryStore
from app.services.player_service import PlayerService
from app.storage.sql import SQLKeyValueStore

CONTENT_PATH = Path(__file__).resolve().parents[2] / "data" / "mock-techniques.json"


@pytest.fixture
def db_engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def client(db_engine):
    def override_get_db():
        with Session(db_engine) as session:
            yield session

    def record(event):
        with Session(db_engine) as session:
            HistoryStore(SQLKeyValueStore(session)).record_completion(event.session_name, event.total_duration)

    player_service = PlayerService(ContentProvider(CONTENT_PATH), on_complete=record, server_ticks=False)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_player_service] = lambda: player_service
    yield TestClient(app)
    app.dependency_overrides.clear()
