"""
JSON key/value store over the client_storage table.

This is the client's durable storage: reads that hit missing or corrupt
data degrade to a default instead of raising.
"""

import json
from typing import Any

import structlog
from sqlalchemy.engine import Engine

from airbrb_client.db.readers.storage import get_stored_value
from airbrb_client.db.writers.storage import delete_stored_value, upsert_stored_value
from airbrb_client.models.base import Base

logger = structlog.get_logger(__name__)


class KeyValueStore:
    """
    Durable JSON storage keyed by string.

    Example:
        >>> store = KeyValueStore(engine)
        >>> store.set_json("airbrb_auth", {"token": "t", "email": "a@b.c"})
        >>> store.get_json("airbrb_auth")
        {'token': 't', 'email': 'a@b.c'}
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_tables(self) -> None:
        """Create the storage table if missing (local SQLite files, tests)."""
        Base.metadata.create_all(self.engine)

    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Read and decode the JSON document under a key.

        Args:
            key: Storage key
            default: Returned when the key is absent or its value is corrupt

        Returns:
            Decoded document or ``default``
        """
        with self.engine.connect() as conn:
            raw = get_stored_value(conn, key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.error("storage_value_corrupt", key=key)
            return default

    def set_json(self, key: str, value: Any) -> None:
        with self.engine.begin() as conn:
            upsert_stored_value(conn, key, json.dumps(value, default=str))

    def remove(self, key: str) -> None:
        with self.engine.begin() as conn:
            delete_stored_value(conn, key)
