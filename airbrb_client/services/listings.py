"""
Host-side listing rules: availability editing, publishing and CRUD, plus
the rating helpers shown next to a listing.
"""

import math
from typing import Any, NamedTuple, Optional, cast

import structlog

from airbrb_client.airbrb_api import listings as listings_api
from airbrb_client.errors import PreconditionError
from airbrb_client.pollers.listings import poll_host_listings
from airbrb_client.schemas.listings import Address, DateRange, ListingPayload, ListingSummary, Review
from airbrb_client.services.session import SessionStore
from airbrb_client.utils.datetime import to_day

logger = structlog.get_logger(__name__)


def add_availability_range(ranges: list[DateRange], start: Any, end: Any) -> list[DateRange]:
    """
    Append a range to a listing's availability draft.

    Duplicate and overlapping ranges are accepted as entered; only the range
    itself is validated.

    Args:
        ranges: Current draft, in entry order
        start: First available day
        end: Last available day

    Returns:
        list[DateRange]: A new list with the range appended

    Raises:
        PreconditionError: If a date is missing/invalid or start is after end
    """
    start_day = to_day(start)
    end_day = to_day(end)
    if start_day is None or end_day is None:
        raise PreconditionError("Please provide both a start and an end date.")
    if start_day > end_day:
        raise PreconditionError("The start date must be on or before the end date.")
    return [*ranges, DateRange(start=start_day, end=end_day)]


def publish(sessions: SessionStore, listing_id: str, availability: list[DateRange]) -> None:
    """
    Publish a draft listing.

    Raises:
        NotAuthenticatedError: If nobody is signed in
        PreconditionError: If no availability range was supplied
    """
    token = sessions.require_token()
    if not availability:
        raise PreconditionError("Please add at least one availability range before publishing.")
    listings_api.publish_listing(listing_id, availability, token)
    logger.info("listing_published", listing_id=listing_id, ranges=len(availability))


def unpublish(sessions: SessionStore, listing_id: str) -> None:
    token = sessions.require_token()
    listings_api.unpublish_listing(listing_id, token)
    logger.info("listing_unpublished", listing_id=listing_id)


def create(sessions: SessionStore, payload: ListingPayload) -> str:
    token = sessions.require_token()
    listing_id = listings_api.create_listing(payload, token)
    logger.info("listing_created", listing_id=listing_id)
    return listing_id


def update(sessions: SessionStore, listing_id: str, payload: ListingPayload) -> None:
    token = sessions.require_token()
    listings_api.update_listing(listing_id, payload, token)


def delete(sessions: SessionStore, listing_id: str) -> None:
    token = sessions.require_token()
    listings_api.delete_listing(listing_id, token)
    logger.info("listing_deleted", listing_id=listing_id)


def hosted_listings(sessions: SessionStore) -> list[ListingSummary]:
    session = sessions.require()
    return poll_host_listings(cast(str, session.email))


def average_rating(reviews: list[Review]) -> Optional[float]:
    """Mean rating rounded to one decimal, or None without reviews."""
    if not reviews:
        return None
    return round(sum(r.rating for r in reviews) / len(reviews), 1)


class RatingBucket(NamedTuple):
    stars: int
    count: int
    percent: int


def rating_breakdown(reviews: list[Review]) -> list[RatingBucket]:
    """
    Reviews per star value, 5 down to 1.

    ``percent`` is the share of all reviews rounded half up to a whole
    number; every bucket is 0 when there are no reviews.
    """
    counts = {stars: 0 for stars in range(5, 0, -1)}
    for review in reviews:
        counts[review.rating] += 1
    total = len(reviews) or 1
    return [
        RatingBucket(stars, count, math.floor(count * 100 / total + 0.5))
        for stars, count in counts.items()
    ]


def reviews_with_rating(reviews: list[Review], stars: int) -> list[Review]:
    """Reviews with exactly ``stars`` stars, in their original order."""
    return [review for review in reviews if review.rating == stars]


def format_address(address: Address) -> str:
    parts = [address.line1, address.city, address.state, address.country]
    return ", ".join(part for part in parts if part)
