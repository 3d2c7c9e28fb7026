from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.scraping.logging_utils import configure_logging


def _validate_env() -> None:
    """
    Validate required environment variables at startup.

    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.
    """

    from db.config import configured_database_url, load_env_files

    load_env_files()

    errors: list[str] = []

    if configured_database_url() is None:
        errors.append(
            "No database URL configured. Set PLAYER_STORE_DATABASE_URL or DATABASE_URL."
        )

    base_url = os.getenv("PLAYER_SCRAPE_BASE_URL", "").strip()
    if base_url and not base_url.startswith(("http://", "https://")):
        errors.append(
            f"PLAYER_SCRAPE_BASE_URL='{base_url}' must start with http:// or https://."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed - missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _check_db() -> None:
    """Open a session and run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text

    from db.session import session_scope

    try:
        with session_scope() as db:
            db.execute(text("SELECT 1"))
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def _check_schema() -> None:
    """
    Every table registered on Base.metadata must exist in the database.

    Does NOT auto-migrate.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401 - registers all ORM models on Base.metadata
    from db.base import Base
    from db.session import get_engine

    inspector = sa_inspect(get_engine())
    actual: set[str] = set(inspector.get_table_names())
    expected: set[str] = set(Base.metadata.tables.keys())
    missing = expected - actual

    if missing:
        logging.getLogger(__name__).critical(
            "Schema mismatch - %d table(s) absent from the database: %s. "
            "Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity and schema on boot."""
    _check_db()
    logging.getLogger(__name__).info("Database connectivity confirmed")
    _check_schema()
    logging.getLogger(__name__).info("Database schema validated")
    yield


def create_app(*, validate: bool = True) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    if validate:
        _validate_env()
    configure_logging()

    application = FastAPI(
        title="Player Profile Ingestion API",
        version="1.0.0",
        lifespan=_lifespan if validate else None,
    )

    from app.api.routers import player_scraping_router

    application.include_router(player_scraping_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


def run() -> None:
    """
    Serve the API with uvicorn; API_HOST and API_PORT override the bind address.
    """

    import uvicorn

    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        log_config=None,
    )


if __name__ == "__main__":
    run()
