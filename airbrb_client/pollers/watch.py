"""Headless notification watcher: resume or open a session and keep polling."""

import threading

import structlog

from airbrb_client.config import LOGIN_EMAIL, LOGIN_PASSWORD
from airbrb_client.db.engine import engine
from airbrb_client.db.store import KeyValueStore
from airbrb_client.logging_config import setup_logging
from airbrb_client.services.client import AirbrbClient

logger = structlog.get_logger(__name__)


def main() -> None:
    setup_logging()

    store = KeyValueStore(engine)
    store.create_tables()
    client = AirbrbClient(store)

    if not client.sessions.is_authenticated:
        if not LOGIN_EMAIL or not LOGIN_PASSWORD:
            raise SystemExit("No stored session; set AIRBRB_EMAIL and AIRBRB_PASSWORD")
        client.sessions.login(LOGIN_EMAIL, LOGIN_PASSWORD)
    else:
        client.start()

    logger.info("watcher_running", email=client.sessions.session.email)
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        logger.info("watcher_stopping")
    finally:
        client.close()


if __name__ == "__main__":
    main()
