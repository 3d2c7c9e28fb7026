"""
db/session.py

Engine and session plumbing for the player store.

The engine is built lazily so importing the API or CLI never opens a
connection; the first `get_engine()` call resolves the URL from the
environment.
"""

from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import resolve_database_url

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _pool_options() -> dict[str, Any]:
    """
    Connection pool sizing, overridable per deployment.
    """

    return {
        "pool_pre_ping": True,
        "pool_recycle": _env_int("DB_POOL_RECYCLE", 1800),
        "pool_size": _env_int("DB_POOL_SIZE", 5),
        "max_overflow": _env_int("DB_MAX_OVERFLOW", 10),
    }


def create_db_engine(database_url: str | None = None) -> Engine:
    url = database_url or resolve_database_url()
    if not url.startswith("postgresql"):
        raise RuntimeError(
            "The player store requires a PostgreSQL URL (upserts rely on ON CONFLICT)."
        )
    echo = os.getenv("SQL_ECHO", "").strip().lower() in _TRUTHY
    return create_engine(url, echo=echo, **_pool_options())


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        # Rows are handed back to callers after commit, so keep them loaded.
        _session_factory = sessionmaker(
            bind=get_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _session_factory


def SessionLocal() -> Session:
    return get_session_factory()()


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Session for one CLI run or script; always closed on exit.

    Commits are left to the store, which commits per write.
    """

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.
    """

    with session_scope() as session:
        yield session
