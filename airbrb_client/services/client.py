"""
Session lifecycle wiring.

``AirbrbClient`` owns the session store and, while someone is signed in,
that user's notification inbox and reconciliation engine. Signing in builds
a fresh engine; signing out or switching users stops the old one first.
"""

import threading
from typing import Optional, cast

import structlog

from airbrb_client.db.store import KeyValueStore
from airbrb_client.schemas.session import Session
from airbrb_client.services.notifications import NotificationCenter
from airbrb_client.services.reconciliation import ReconciliationEngine
from airbrb_client.services.session import SessionStore

logger = structlog.get_logger(__name__)


class AirbrbClient:
    def __init__(self, store: KeyValueStore, poll: bool = True):
        """
        Args:
            store: Durable storage for the session and per-user data
            poll: Start the background loop on sign-in. Disable to drive
                ``engine.poll()`` by hand.
        """
        self.store = store
        self.poll = poll
        self.sessions = SessionStore(store)
        self.notifications: Optional[NotificationCenter] = None
        self.engine: Optional[ReconciliationEngine] = None
        self._lock = threading.Lock()
        self.sessions.subscribe(self._on_session_change)

    def start(self) -> None:
        """Resume a restored session, if any."""
        self._on_session_change(self.sessions.session)

    def close(self) -> None:
        with self._lock:
            self._teardown()

    def _on_session_change(self, session: Session) -> None:
        with self._lock:
            if not session.is_authenticated:
                self._teardown()
                return
            current = self.engine
            if current is not None and (current.email, current.token) == (session.email, session.token):
                return
            self._teardown()

            email = cast(str, session.email)
            self.notifications = NotificationCenter(self.store, email)
            self.notifications.load()
            self.engine = ReconciliationEngine(cast(str, session.token), email, self.notifications)
            if self.poll:
                self.engine.start()
            logger.info("session_engine_ready", email=session.email)

    def _teardown(self) -> None:
        if self.engine is not None:
            self.engine.stop()
        self.engine = None
        self.notifications = None
