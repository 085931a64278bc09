"""
db/config.py

Connection URL handling for the waste tracker database.

The service talks to exactly one PostgreSQL database, named by DATABASE_URL.
Values may also come from `.env` / `.env.local` at the project root; real
process environment variables always win.
"""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILENAMES: tuple[str, ...] = (".env", ".env.local")

_PSYCOPG_SCHEME = "postgresql+psycopg://"
_BARE_SCHEMES = ("postgres://", "postgresql://")


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :]
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip().strip('"').strip("'")


def load_env_files(root: Path = PROJECT_ROOT, filenames: tuple[str, ...] = ENV_FILENAMES) -> None:
    """
    Copy KEY=VALUE pairs from the env files under ``root`` into os.environ.

    Keys already present in the environment are left untouched, and earlier
    files take precedence over later ones.
    """

    for filename in filenames:
        env_path = root / filename
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is not None:
                os.environ.setdefault(*parsed)


def to_psycopg_url(url: str) -> str:
    """
    Return ``url`` in the ``postgresql+psycopg://`` form SQLAlchemy needs.

    Raises RuntimeError for anything that is not a PostgreSQL URL.
    """

    url = url.strip()
    for scheme in _BARE_SCHEMES:
        if url.startswith(scheme):
            return _PSYCOPG_SCHEME + url[len(scheme) :]
    if url.startswith("postgresql+"):
        return url
    raise RuntimeError("DATABASE_URL must be a PostgreSQL URL (postgresql://...).")


def database_url_from_env() -> str:
    """
    Read DATABASE_URL (after loading env files) and normalize it.
    """

    load_env_files()
    raw_url = os.getenv("DATABASE_URL", "").strip()
    if not raw_url:
        raise RuntimeError("No database URL configured. Set DATABASE_URL.")
    return to_psycopg_url(raw_url)
