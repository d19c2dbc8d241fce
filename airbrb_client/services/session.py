"""
Session store: who is signed in, persisted across restarts.

The session is the only auth state in the client. Login and register
replace it, logout clears it, and every change is written through to
durable storage and announced to subscribers.
"""

import threading
from typing import Callable, Optional, cast

import structlog
from pydantic import ValidationError

from airbrb_client.airbrb_api import auth as auth_api
from airbrb_client.config import SESSION_STORAGE_KEY
from airbrb_client.db.store import KeyValueStore
from airbrb_client.errors import ClientError, NotAuthenticatedError, PreconditionError
from airbrb_client.schemas.session import AuthResponse, Session

logger = structlog.get_logger(__name__)

SessionListener = Callable[[Session], None]

PASSWORD_MISMATCH = "Passwords do not match."


class SessionStore:
    def __init__(self, store: KeyValueStore):
        self._store = store
        self._listeners: list[SessionListener] = []
        self._lock = threading.Lock()
        self._session = self._restore()

    def _restore(self) -> Session:
        stored = self._store.get_json(SESSION_STORAGE_KEY)
        if not stored:
            return Session()
        try:
            session = Session.model_validate(stored)
        except ValidationError:
            logger.error("stored_session_invalid", key=SESSION_STORAGE_KEY)
            return Session()
        logger.info("session_restored", email=session.email)
        return session

    @property
    def session(self) -> Session:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def require(self) -> Session:
        """
        Return the current session or fail if nobody is signed in.

        Raises:
            NotAuthenticatedError: If there is no token
        """
        if not self._session.is_authenticated:
            raise NotAuthenticatedError()
        return self._session

    def require_token(self) -> str:
        return cast(str, self.require().token)

    def subscribe(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def _set(self, session: Session) -> None:
        with self._lock:
            self._session = session
            if session.is_authenticated:
                self._store.set_json(SESSION_STORAGE_KEY, session.to_wire())
            else:
                self._store.remove(SESSION_STORAGE_KEY)
        for listener in list(self._listeners):
            listener(session)

    def login(self, email: str, password: str) -> AuthResponse:
        """
        Sign in and replace the current session.

        Raises:
            ClientError: Gateway failure; the current session is left untouched
        """
        data = auth_api.login(email, password)
        self._set(Session(token=data.token, email=email, name=data.name))
        logger.info("logged_in", email=email)
        return data

    def register(
        self, email: str, password: str, name: str, confirm_password: Optional[str] = None
    ) -> AuthResponse:
        """
        Create an account and sign in as it.

        Raises:
            PreconditionError: If ``confirm_password`` is given and differs;
                nothing is sent
            ClientError: Gateway failure; the current session is left untouched
        """
        if confirm_password is not None and confirm_password != password:
            raise PreconditionError(PASSWORD_MISMATCH)
        data = auth_api.register(email, password, name)
        self._set(Session(token=data.token, email=email, name=name))
        logger.info("registered", email=email)
        return data

    def logout(self) -> None:
        """
        Sign out. The local session is cleared even if the backend call fails.
        """
        token = self._session.token
        try:
            if token:
                auth_api.logout(token)
        except ClientError as e:
            logger.warning("logout_request_failed", error=e.message)
        finally:
            self._set(Session())
        logger.info("logged_out")
