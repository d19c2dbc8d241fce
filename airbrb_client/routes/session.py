"""Sign-in routes. Signing in starts the user's notification polling."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends

from airbrb_client.dependencies import get_client
from airbrb_client.errors import ClientError
from airbrb_client.routes._helpers import http_error
from airbrb_client.schemas.session import LoginPayload, RegisterPayload, Session
from airbrb_client.services.client import AirbrbClient

logger = structlog.get_logger(__name__)
router = APIRouter()


def session_view(session: Session) -> dict[str, Any]:
    """Public view of a session; the token never leaves the process."""
    return {
        "authenticated": session.is_authenticated,
        "email": session.email,
        "name": session.name,
    }


@router.get("/session")
def get_session(client: AirbrbClient = Depends(get_client)) -> dict[str, Any]:
    return session_view(client.sessions.session)


@router.post("/session/login")
def login(payload: LoginPayload, client: AirbrbClient = Depends(get_client)) -> dict[str, Any]:
    try:
        client.sessions.login(payload.email, payload.password)
    except ClientError as e:
        raise http_error(e)
    return session_view(client.sessions.session)


@router.post("/session/register")
def register(payload: RegisterPayload, client: AirbrbClient = Depends(get_client)) -> dict[str, Any]:
    try:
        client.sessions.register(
            payload.email, payload.password, payload.name, payload.confirm_password
        )
    except ClientError as e:
        raise http_error(e)
    return session_view(client.sessions.session)


@router.post("/session/logout")
def logout(client: AirbrbClient = Depends(get_client)) -> dict[str, Any]:
    client.sessions.logout()
    return session_view(client.sessions.session)
