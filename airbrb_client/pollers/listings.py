import json

import structlog

from airbrb_client.airbrb_api.listings import get_all_listings
from airbrb_client.config import DEBUG
from airbrb_client.metrics import poll_duration, poll_total
from airbrb_client.schemas.listings import ListingSummary

logger = structlog.get_logger(__name__)


def poll_host_listings(email: str) -> list[ListingSummary]:
    """
    Fetch all listings and keep the ones owned by ``email``.

    Args:
        email (str): Host email

    Returns:
        list[ListingSummary]: The host's listings
    """
    with poll_duration.labels(entity_type="listings").time():
        try:
            listings = get_all_listings()
            mine = [listing for listing in listings if listing.owner == email]

            if DEBUG and mine:
                logger.debug("Sample listing:\n%s", json.dumps(mine[0].to_wire(), indent=2))

            logger.debug("Fetched %d listings, %d hosted by %s", len(listings), len(mine), email)

            poll_total.labels(entity_type="listings", status="success").inc()

            return mine
        except Exception:
            poll_total.labels(entity_type="listings", status="failure").inc()
            raise
