"""
Key-value storage database model.

One row per logical storage key.  Values are opaque strings (the
history and stats documents are JSON-serialised by their owner).
"""

import datetime
from typing import Optional

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class StorageEntry(SQLModel, table=True):
    """A single key-value pair of the client's persistent store."""

    __tablename__ = "storage_entries"

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(unique=True, index=True, max_length=255, nullable=False)
    value: str = Field(sa_column=Column(Text, nullable=False))

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
