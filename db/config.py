"""
db/config.py

Database settings for the player store: `.env` loading and URL resolution.
"""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILENAMES = (".env", ".env.local")
DATABASE_URL_VARS = ("PLAYER_STORE_DATABASE_URL", "DATABASE_URL")

_DRIVER_PREFIXES = {
    "postgres://": "postgresql+psycopg://",
    "postgresql://": "postgresql+psycopg://",
}


def read_env_file(path: Path) -> dict[str, str]:
    """
    Parse KEY=VALUE lines; blank lines, comments and `export ` prefixes are
    tolerated, surrounding quotes are stripped.
    """

    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.removeprefix("export ").strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def load_env_files(project_root: Path | None = None) -> None:
    """
    Copy `.env` then `.env.local` into the process environment.

    Variables already set in the environment always win.
    """

    root = project_root or PROJECT_ROOT
    for filename in ENV_FILENAMES:
        env_path = root / filename
        if not env_path.exists():
            continue
        for key, value in read_env_file(env_path).items():
            os.environ.setdefault(key, value)


def normalize_database_url(url: str) -> str:
    """
    Rewrite bare postgres URLs to the psycopg (v3) driver.
    """

    url = url.strip()
    for prefix, replacement in _DRIVER_PREFIXES.items():
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


def configured_database_url() -> str | None:
    for name in DATABASE_URL_VARS:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return None


def resolve_database_url() -> str:
    """
    Return the player store URL: PLAYER_STORE_DATABASE_URL, else DATABASE_URL.
    """

    load_env_files()
    url = configured_database_url()
    if url is None:
        raise RuntimeError(
            "No database URL configured. Set PLAYER_STORE_DATABASE_URL or DATABASE_URL."
        )
    return normalize_database_url(url)
