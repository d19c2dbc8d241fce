from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from airbrb_client.models.storage import StoredValue


def get_stored_value(conn: Connection, key: str) -> Optional[str]:
    """
    Fetch the raw JSON text stored under a key.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        key (str): Storage key

    Returns:
        Optional[str]: Stored text, or None if the key is absent
    """
    result = conn.execute(select(StoredValue.value).where(StoredValue.key == key))
    row = result.fetchone()
    return row[0] if row else None
