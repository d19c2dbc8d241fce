"""
FastAPI dependency injection providers.

Routes reach the storage engine and the running ``AirbrbClient`` through
these providers so tests can swap them with ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Generator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.engine import Engine

from airbrb_client.db.engine import engine
from airbrb_client.services.client import AirbrbClient
from airbrb_client.services.notifications import NotificationCenter


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide the storage engine.

    Yields:
        Engine: SQLAlchemy database engine
    """
    yield engine


def get_client(request: Request) -> AirbrbClient:
    """
    Provide the application's ``AirbrbClient`` (created on startup).

    Example:
        >>> app.dependency_overrides[get_client] = lambda: fake_client
    """
    return request.app.state.client


def get_notifications(client: AirbrbClient = Depends(get_client)) -> NotificationCenter:
    """
    Provide the signed-in user's notification inbox.

    Raises:
        HTTPException: 401 when nobody is signed in
    """
    if client.notifications is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not logged in")
    return client.notifications
