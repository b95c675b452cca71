"""Database engine helpers."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from .config import DATABASE_URL


def make_engine(url: str = DATABASE_URL) -> Engine:
    connect_args = {}
    kwargs = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if url in {"sqlite://", "sqlite:///:memory:"}:
            # One shared connection keeps the in-memory database alive.
            kwargs["poolclass"] = StaticPool
    return create_engine(url, connect_args=connect_args, **kwargs)


def init_db(engine: Engine) -> None:
    """Create the document table, preparing the directory of a SQLite file."""

    # Registers the document table on the shared metadata.
    from .. import models  # noqa: F401

    database = engine.url.database
    if engine.url.drivername.startswith("sqlite") and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


__all__ = ["init_db", "make_engine"]
