"""
Database session management.

Provides SQLModel engine and session creation.
"""

from sqlmodel import create_engine, Session
from typing import Generator

from app.core.config import settings

DATABASE_URL: str = settings.DATABASE_URL

# SQLite connections are shared between the event loop and the threadpool
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    pool_pre_ping=True,   # Verify connections before using
    connect_args=connect_args
)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.
    
    Yields:
        SQLModel Session instance
    
    Example:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.exec(select(Item)).all()
    """
    with Session(engine) as session:
        yield session
