import json

import structlog

from airbrb_client.airbrb_api.bookings import get_all_bookings
from airbrb_client.config import DEBUG
from airbrb_client.metrics import poll_duration, poll_total
from airbrb_client.schemas.bookings import Booking

logger = structlog.get_logger(__name__)


def poll_bookings(token: str) -> list[Booking]:
    """
    Fetch the full booking list visible to the signed-in user.

    Args:
        token (str): Bearer token

    Returns:
        list[Booking]: Every booking, in backend order
    """
    with poll_duration.labels(entity_type="bookings").time():
        try:
            bookings = get_all_bookings(token)

            if DEBUG and bookings:
                logger.debug("Sample booking:\n%s", json.dumps(bookings[0].to_wire(), indent=2))

            logger.debug("Fetched %d bookings", len(bookings))

            poll_total.labels(entity_type="bookings", status="success").inc()

            return bookings
        except Exception:
            poll_total.labels(entity_type="bookings", status="failure").inc()
            raise
