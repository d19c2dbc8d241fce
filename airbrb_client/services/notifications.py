"""
Per-user notification inbox.

Notifications are kept newest first, capped at ``MAX_NOTIFICATIONS`` (oldest
dropped), and written to durable storage on every change under a key
namespaced by the user's email.
"""

import threading
from typing import Optional

import structlog
from pydantic import ValidationError

from airbrb_client.config import MAX_NOTIFICATIONS, NOTIFICATIONS_STORAGE_PREFIX
from airbrb_client.db.store import KeyValueStore
from airbrb_client.metrics import notifications_emitted
from airbrb_client.schemas.notifications import Notification, NotificationType

logger = structlog.get_logger(__name__)


def storage_key(email: str) -> str:
    return f"{NOTIFICATIONS_STORAGE_PREFIX}{email}"


class NotificationCenter:
    """
    Notification list owned by one signed-in user.

    Thread-safe: the reconciliation thread adds while request handlers read,
    mark and dismiss.
    """

    def __init__(self, store: KeyValueStore, email: str, max_notifications: int = MAX_NOTIFICATIONS):
        self._store = store
        self.email = email
        self.max_notifications = max_notifications
        self._items: list[Notification] = []
        self._lock = threading.Lock()

    def load(self) -> list[Notification]:
        """
        Replace the in-memory list with the user's stored history.

        Malformed history is logged and treated as empty.
        """
        raw = self._store.get_json(storage_key(self.email))
        items: list[Notification] = []
        if isinstance(raw, list):
            try:
                items = [Notification.model_validate(entry) for entry in raw]
            except ValidationError:
                logger.error("stored_notifications_invalid", email=self.email)
                items = []
        elif raw is not None:
            logger.error("stored_notifications_invalid", email=self.email)

        with self._lock:
            self._items = items[: self.max_notifications]
        return self.items()

    def _persist(self) -> None:
        self._store.set_json(storage_key(self.email), [n.to_wire() for n in self._items])

    def items(self) -> list[Notification]:
        with self._lock:
            return list(self._items)

    @property
    def unread_count(self) -> int:
        with self._lock:
            return sum(1 for n in self._items if not n.read)

    def add(self, type: NotificationType, message: str, detail: str = "") -> Notification:
        notification = Notification(type=type, message=message, detail=detail)
        with self._lock:
            self._items.insert(0, notification)
            del self._items[self.max_notifications :]
            self._persist()
        notifications_emitted.labels(type=type.value).inc()
        logger.info("notification_emitted", type=type.value, message=message, email=self.email)
        return notification

    def mark_all_read(self) -> None:
        with self._lock:
            self._items = [n.model_copy(update={"read": True}) for n in self._items]
            self._persist()

    def mark_read(self, notification_id: str) -> Optional[Notification]:
        """
        Mark one notification as read.

        Returns:
            The updated notification, or None if the id is unknown
        """
        updated = None
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == notification_id:
                    updated = item.model_copy(update={"read": True})
                    self._items[index] = updated
                    self._persist()
                    break
        return updated

    def dismiss(self, notification_id: str) -> bool:
        with self._lock:
            remaining = [n for n in self._items if n.id != notification_id]
            if len(remaining) == len(self._items):
                return False
            self._items = remaining
            self._persist()
        return True
