"""Database engine and session management."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from projector_core.db.base import Base

_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def _ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def init_engine(url: str, create_tables: bool = True, **kwargs) -> Engine:
    """Create the global engine and session factory.

    Tables are created on first use; the store is small enough that it
    carries no migration history.
    """
    global _engine, _SessionLocal
    import projector_core.db.tables  # noqa: F401 — register tables on Base.metadata

    _ensure_sqlite_dir(url)
    _engine = create_engine(url, **kwargs)
    _SessionLocal = sessionmaker(bind=_engine)
    if create_tables:
        Base.metadata.create_all(_engine)
    return _engine


def get_session() -> Generator[Session, None, None]:
    """Yield a session, closing it when done."""
    if _SessionLocal is None:
        raise RuntimeError("Database engine not initialised — call init_engine() first")
    session = _SessionLocal()
    try:
        yield session
    finally:
        session.close()
