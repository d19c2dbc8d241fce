"""
SQLAlchemy engine singleton backing durable client storage.

SQLite (the default) keeps its own pooling; server databases get a
connection pool sized for the poll thread plus the HTTP workers.
"""

from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from airbrb_client.config import DATABASE_URL


def build_engine(url: str) -> Engine:
    """
    Create an engine for the given database URL.

    Args:
        url: SQLAlchemy database URL

    Returns:
        Engine: Configured engine (no connection is opened yet)
    """
    options: dict[str, Any] = {"future": True, "echo": False}
    if url.startswith("sqlite"):
        # Poll thread and request handlers share the same file
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,  # Detect connections dropped by the server
            pool_recycle=3600,
        )
    return create_engine(url, **options)


engine: Engine = build_engine(DATABASE_URL)


def check_engine_health(target: Engine | None = None) -> bool:
    """
    Check if the storage database is reachable.

    Used by the /ready endpoint.

    Returns:
        bool: True if a trivial query succeeds, False otherwise
    """
    try:
        with (target or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
