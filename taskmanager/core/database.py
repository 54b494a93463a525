"""Database configuration and session helpers."""

from __future__ import annotations

import logging
from typing import Iterator

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, SQLModel, create_engine

from .config import DATA_DIR, DATABASE_URL, DB_RESET
from .errors import StorageUnavailable

logger = logging.getLogger(__name__)


def _database_url() -> str:
    if DATABASE_URL:
        return DATABASE_URL
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{DATA_DIR / 'app.db'}"


_URL = _database_url()
_CONNECT_ARGS = {"check_same_thread": False} if _URL.startswith("sqlite") else {}

engine = create_engine(_URL, connect_args=_CONNECT_ARGS)


def init_db(reset: bool = DB_RESET) -> None:
    """Create all tables, dropping them first when ``reset`` is set."""

    if reset:
        logger.warning("DB_RESET is set; dropping all tables")
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)


def check_database(session: Session) -> None:
    """Raise ``StorageUnavailable`` when the database cannot answer a query."""

    try:
        session.execute(text("SELECT 1"))
    except OperationalError as exc:
        raise StorageUnavailable() from exc


def get_session() -> Iterator[Session]:
    """FastAPI dependency that yields a database session."""

    with Session(engine) as session:
        yield session


__all__ = ["check_database", "engine", "get_session", "init_db"]
