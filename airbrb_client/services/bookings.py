"""
Booking workflows for guests and hosts.

Guest side: request a stay (local precondition chain, then the backend),
list one's bookings for a listing, review an accepted stay. Host side:
accept/decline pending requests and summarize a listing's bookings.
"""

import threading
from datetime import date
from typing import Any, NamedTuple, Optional, cast

import structlog

from airbrb_client.airbrb_api import bookings as bookings_api
from airbrb_client.airbrb_api import listings as listings_api
from airbrb_client.config import REVIEWS_STORAGE_PREFIX
from airbrb_client.db.store import KeyValueStore
from airbrb_client.errors import PreconditionError
from airbrb_client.schemas.bookings import Booking, BookingStatus
from airbrb_client.schemas.listings import DateRange, Listing, Review
from airbrb_client.services.availability import compute_total, is_within_availability, nights_between
from airbrb_client.services.session import SessionStore
from airbrb_client.utils.datetime import to_day, utc_now

logger = structlog.get_logger(__name__)

LOGIN_REQUIRED = "Please log in before making a booking."
DATES_REQUIRED = "Please select both check-in and check-out dates."
OUTSIDE_AVAILABILITY = "Selected dates are outside the available ranges."
NO_NIGHTS = "Please select at least one night."


def request_booking(sessions: SessionStore, listing: Listing, start: Any, end: Any) -> str:
    """
    Validate a stay and send the booking request.

    Checks run in order and the first failure wins: signed in, both dates
    given, inside one availability range, at least one night.

    Args:
        sessions: Session store of the guest
        listing: Full listing record (with availability)
        start: Check-in day
        end: Check-out day

    Returns:
        str: ID of the new pending booking

    Raises:
        PreconditionError: A local check failed; nothing was sent
        ClientError: The backend rejected or never received the request
    """
    if not sessions.is_authenticated:
        raise PreconditionError(LOGIN_REQUIRED)
    if not start or not end:
        raise PreconditionError(DATES_REQUIRED)
    if not is_within_availability(listing, start, end):
        raise PreconditionError(OUTSIDE_AVAILABILITY)
    nights = nights_between(start, end)
    if nights == 0:
        raise PreconditionError(NO_NIGHTS)

    date_range = DateRange(start=start, end=end)
    total = compute_total(listing, nights)
    booking_id = bookings_api.create_booking(
        listing.id, date_range, total, sessions.require_token()
    )
    logger.info(
        "booking_requested",
        booking_id=booking_id,
        listing_id=listing.id,
        nights=nights,
        total_price=total,
    )
    return booking_id


def guest_bookings(sessions: SessionStore, listing_id: str) -> list[Booking]:
    """The signed-in guest's bookings for one listing."""
    session = sessions.require()
    bookings = bookings_api.get_all_bookings(cast(str, session.token))
    return [b for b in bookings if b.listing_id == listing_id and b.owner == session.email]


def respond_to_booking(sessions: SessionStore, booking: Booking, accept: bool) -> None:
    """
    Accept or decline a pending booking request as the host.

    Raises:
        PreconditionError: If the booking is no longer pending
    """
    token = sessions.require_token()
    if booking.status != BookingStatus.PENDING:
        raise PreconditionError("Only pending booking requests can be accepted or declined.")
    if accept:
        bookings_api.accept_booking(booking.id, token)
    else:
        bookings_api.decline_booking(booking.id, token)
    logger.info("booking_answered", booking_id=booking.id, accepted=accept)


class BookingStats(NamedTuple):
    online_days: int
    accepted_count: int
    booked_days: int
    profit: float


class HostBookingOverview(NamedTuple):
    listing: Listing
    bookings: list[Booking]
    pending: list[Booking]
    stats: BookingStats


def _touches_year(date_range: DateRange, year: int) -> bool:
    return date_range.start.year == year or date_range.end.year == year


def booking_stats(listing: Listing, bookings: list[Booking], today: Optional[date] = None) -> BookingStats:
    """
    Summary figures for a host's listing.

    ``booked_days`` and ``profit`` count accepted bookings that start or end
    in the current year.
    """
    today = today or utc_now().date()
    posted = to_day(listing.posted_on)
    online_days = max(0, (today - posted).days) if posted else 0

    accepted = [b for b in bookings if b.status == BookingStatus.ACCEPTED]
    this_year = [b for b in accepted if _touches_year(b.date_range, today.year)]
    booked_days = sum(nights_between(b.date_range.start, b.date_range.end) for b in this_year)
    profit = sum(b.total_price for b in this_year)
    return BookingStats(online_days, len(accepted), booked_days, profit)


def host_booking_overview(
    sessions: SessionStore, listing_id: str, today: Optional[date] = None
) -> HostBookingOverview:
    """
    Bookings of one listing as its owner sees them, newest stay first.

    Raises:
        PreconditionError: If the signed-in user does not own the listing
    """
    session = sessions.require()
    listing = listings_api.get_listing(listing_id)
    if listing.owner != session.email:
        raise PreconditionError("Only the listing owner can view bookings.")

    bookings = [
        b for b in bookings_api.get_all_bookings(cast(str, session.token)) if b.listing_id == listing_id
    ]
    bookings.sort(key=lambda b: b.date_range.start, reverse=True)
    pending = [b for b in bookings if b.status == BookingStatus.PENDING]
    return HostBookingOverview(listing, bookings, pending, booking_stats(listing, bookings, today))


class ReviewService:
    """
    Review submission for accepted stays.

    Each booking can be reviewed once; reviewed booking ids are kept in
    durable storage per guest. Only one submission runs at a time.
    """

    def __init__(self, sessions: SessionStore, store: KeyValueStore):
        self.sessions = sessions
        self.store = store
        self._submitting = threading.Lock()

    def _ledger_key(self, email: str) -> str:
        return f"{REVIEWS_STORAGE_PREFIX}{email}"

    def reviewed_booking_ids(self, email: str) -> set[str]:
        stored = self.store.get_json(self._ledger_key(email), default=[])
        if not isinstance(stored, list):
            logger.error("review_ledger_invalid", email=email)
            return set()
        return {str(booking_id) for booking_id in stored}

    def eligible_bookings(self, listing_id: str) -> list[Booking]:
        """Accepted, not yet reviewed bookings of the signed-in guest for a listing."""
        session = self.sessions.require()
        reviewed = self.reviewed_booking_ids(cast(str, session.email))
        return [
            b
            for b in guest_bookings(self.sessions, listing_id)
            if b.status == BookingStatus.ACCEPTED and b.id not in reviewed
        ]

    def submit(self, listing_id: str, booking: Optional[Booking], rating: int, comment: str) -> Review:
        """
        Post a review for one of the guest's accepted bookings.

        Raises:
            PreconditionError: No booking selected, booking not eligible, empty
                comment, already reviewed, or another submission in progress
        """
        session = self.sessions.require()
        email = cast(str, session.email)
        if booking is None:
            raise PreconditionError("Please select a completed booking to review.")
        if (
            booking.owner != email
            or booking.listing_id != listing_id
            or booking.status != BookingStatus.ACCEPTED
        ):
            raise PreconditionError("Only accepted bookings can be reviewed.")
        if not 1 <= rating <= 5:
            raise PreconditionError("Rating must be between 1 and 5.")
        if not comment.strip():
            raise PreconditionError("Please enter your review.")

        if not self._submitting.acquire(blocking=False):
            raise PreconditionError("A review is already being submitted.")
        try:
            reviewed = self.reviewed_booking_ids(email)
            if booking.id in reviewed:
                raise PreconditionError("You have already reviewed this booking.")

            review = Review(
                rating=rating, comment=comment.strip(), created_by=email, created_at=utc_now()
            )
            listings_api.leave_review(listing_id, booking.id, review, cast(str, session.token))
            self.store.set_json(self._ledger_key(email), sorted(reviewed | {booking.id}))
        finally:
            self._submitting.release()

        logger.info("review_submitted", listing_id=listing_id, booking_id=booking.id)
        return review
