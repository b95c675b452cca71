"""Database model backing the SQL document store."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class StoredDocument(SQLModel, table=True):
    """A JSON document addressed by (collection, id)."""

    __tablename__ = "document"

    collection: str = ORMField(primary_key=True, max_length=64)
    id: str = ORMField(primary_key=True, max_length=255)
    data_json: str
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["StoredDocument"]
