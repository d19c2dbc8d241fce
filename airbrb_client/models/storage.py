# models/storage.py

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from airbrb_client.models.base import Base


class StoredValue(Base):
    """
    ORM model for durable client storage.

    A flat key/value table holding JSON documents: the persisted session
    under a fixed key and per-user notification and review ledgers under
    email-prefixed keys. Writes overwrite unconditionally.
    """

    __tablename__ = "client_storage"

    key = Column(String(320), primary_key=True)
    value = Column(Text, nullable=False)  # JSON document
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
