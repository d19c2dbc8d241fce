"""
Writers for durable client storage.

Upserts use the dialect's INSERT ... ON CONFLICT DO UPDATE so a write is a
single statement on both SQLite and PostgreSQL.
"""

from typing import Any

from sqlalchemy import delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Connection
from sqlalchemy.sql import func

from airbrb_client.models.storage import StoredValue


def _insert_for(conn: Connection) -> Any:
    if conn.dialect.name == "postgresql":
        return postgresql.insert
    if conn.dialect.name == "sqlite":
        return sqlite.insert
    raise RuntimeError(f"Unsupported storage dialect: {conn.dialect.name}")


def upsert_stored_value(conn: Connection, key: str, value: str) -> None:
    """
    Store text under a key, replacing whatever was there (last writer wins).

    Args:
        conn: Active database connection (within transaction)
        key: Storage key
        value: JSON text to store
    """
    insert = _insert_for(conn)
    stmt = insert(StoredValue).values(key=key, value=value)
    stmt = stmt.on_conflict_do_update(
        index_elements=[StoredValue.key],
        set_={"value": stmt.excluded.value, "updated_at": func.now()},
    )
    conn.execute(stmt)


def delete_stored_value(conn: Connection, key: str) -> None:
    conn.execute(delete(StoredValue).where(StoredValue.key == key))
