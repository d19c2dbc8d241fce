"""
Booking reconciliation: turn booking-state changes into notifications.

The backend has no push channel and no delta endpoint, so each session runs
a loop that re-fetches the full booking list, diffs it against the previous
snapshot and emits:

- a "host" notification when a new pending booking appears on a listing the
  user owns
- a "guest" notification when one of the user's own bookings moves to
  accepted or declined

The first successful poll only seeds the snapshot. A failed poll leaves the
snapshot untouched so the next successful one diffs against the last
known-good state.
"""

import threading
import time
from enum import Enum
from typing import Callable, Collection, Iterable, Mapping, NamedTuple, Optional

import structlog

from airbrb_client.airbrb_api.listings import get_listing
from airbrb_client.config import HOST_REFRESH_INTERVAL_SECONDS, POLL_INTERVAL_SECONDS
from airbrb_client.errors import ClientError
from airbrb_client.metrics import polls_skipped, tracked_bookings
from airbrb_client.pollers.bookings import poll_bookings
from airbrb_client.pollers.listings import poll_host_listings
from airbrb_client.schemas.bookings import Booking, BookingStatus
from airbrb_client.schemas.notifications import NotificationType
from airbrb_client.services.notifications import NotificationCenter

logger = structlog.get_logger(__name__)

TERMINAL_STATUSES = (BookingStatus.ACCEPTED, BookingStatus.DECLINED)


class EngineState(str, Enum):
    IDLE = "idle"
    WARM_UP = "warm_up"
    POLLING = "polling"
    STOPPED = "stopped"


class BookingChange(NamedTuple):
    kind: NotificationType
    booking: Booking
    previous_status: Optional[BookingStatus] = None


def placeholder_title(listing_id: str) -> str:
    return f"Listing #{listing_id}"


def diff_bookings(
    previous: Mapping[str, Booking],
    current: Iterable[Booking],
    email: str,
    host_listing_ids: Collection[str],
) -> list[BookingChange]:
    """
    Compare a fresh booking list against the previous snapshot.

    Args:
        previous: Last snapshot, keyed by booking id
        current: Freshly fetched bookings, in backend order
        email: Signed-in user's email
        host_listing_ids: Ids of listings the user owns

    Returns:
        list[BookingChange]: Changes worth notifying about, in ``current`` order.
        Bookings missing from ``current`` produce nothing.
    """
    changes = []
    for booking in current:
        before = previous.get(booking.id)
        if before is None:
            if booking.listing_id in host_listing_ids and booking.status == BookingStatus.PENDING:
                changes.append(BookingChange(NotificationType.HOST, booking))
        elif (
            before.status != booking.status
            and booking.owner == email
            and booking.status in TERMINAL_STATUSES
        ):
            changes.append(BookingChange(NotificationType.GUEST, booking, before.status))
    return changes


class ReconciliationEngine:
    """
    Per-session polling loop and its state.

    Built when a user signs in and stopped when they sign out or another user
    signs in. Polls never overlap: a tick that finds the previous poll still
    running is skipped.

    Example:
        >>> engine = ReconciliationEngine(token, "host@example.com", center)
        >>> engine.start()   # warm-up, then a poll every 6 seconds
        >>> engine.stop()
    """

    def __init__(
        self,
        token: str,
        email: str,
        notifications: NotificationCenter,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        host_refresh_interval: float = HOST_REFRESH_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.token = token
        self.email = email
        self.notifications = notifications
        self.poll_interval = poll_interval
        self.host_refresh_interval = host_refresh_interval
        self._clock = clock

        self._snapshot: dict[str, Booking] = {}
        self._initialized = False
        self._host_listings: dict[str, str] = {}
        self._host_refreshed_at: Optional[float] = None
        self._title_cache: dict[str, str] = {}

        self._poll_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._cancelled = False
        self._thread: Optional[threading.Thread] = None

    @property
    def state(self) -> EngineState:
        if self._cancelled:
            return EngineState.STOPPED
        if self._initialized:
            return EngineState.POLLING
        if self._thread is not None:
            return EngineState.WARM_UP
        return EngineState.IDLE

    @property
    def snapshot(self) -> dict[str, Booking]:
        return dict(self._snapshot)

    @property
    def host_listing_titles(self) -> dict[str, str]:
        return dict(self._host_listings)

    # ------------------------------------------------------------------
    # Listing titles
    # ------------------------------------------------------------------

    def refresh_host_listings(self) -> bool:
        """
        Reload the set of listings owned by the user.

        Returns:
            bool: False if the fetch failed (previous set and timestamp kept)
        """
        try:
            listings = poll_host_listings(self.email)
        except ClientError as e:
            logger.warning("host_listings_refresh_failed", email=self.email, error=e.message)
            return False

        titles = {listing.id: listing.title or placeholder_title(listing.id) for listing in listings}
        self._host_listings = titles
        self._title_cache.update(titles)
        self._host_refreshed_at = self._clock()
        return True

    def _host_listings_stale(self) -> bool:
        if self._host_refreshed_at is None:
            return True
        return self._clock() - self._host_refreshed_at > self.host_refresh_interval

    def resolve_listing_title(self, listing_id: str) -> str:
        """
        Title for a listing: host listings, then cached titles, then the backend.

        Titles are cosmetic, so a failed lookup yields a placeholder.
        """
        if listing_id in self._host_listings:
            return self._host_listings[listing_id]
        if listing_id in self._title_cache:
            return self._title_cache[listing_id]
        try:
            listing = get_listing(listing_id)
        except ClientError as e:
            logger.warning("listing_title_lookup_failed", listing_id=listing_id, error=e.message)
            return placeholder_title(listing_id)
        title = listing.title or placeholder_title(listing_id)
        self._title_cache[listing_id] = title
        return title

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def poll(self) -> bool:
        """
        Run one reconciliation cycle.

        Returns:
            bool: True if the snapshot was updated, False if the poll was
            skipped, failed or discarded
        """
        if self._cancelled:
            polls_skipped.labels(reason="cancelled").inc()
            return False
        if not self._poll_lock.acquire(blocking=False):
            polls_skipped.labels(reason="in_flight").inc()
            logger.debug("poll_skipped_in_flight", email=self.email)
            return False
        try:
            return self._poll_once()
        finally:
            self._poll_lock.release()

    def _poll_once(self) -> bool:
        if self._host_listings_stale():
            self.refresh_host_listings()

        try:
            bookings = poll_bookings(self.token)
        except ClientError as e:
            logger.warning("poll_failed", email=self.email, error=e.message)
            return False

        if self._cancelled:
            logger.info("poll_discarded", email=self.email)
            return False

        next_snapshot = {booking.id: booking for booking in bookings}

        if not self._initialized:
            self._initialized = True
            logger.info("snapshot_seeded", email=self.email, bookings=len(next_snapshot))
        else:
            changes = diff_bookings(self._snapshot, bookings, self.email, self._host_listings)
            # Titles first: a lookup can block across stop()
            titled = [
                (change, self.resolve_listing_title(change.booking.listing_id)) for change in changes
            ]
            for change, title in titled:
                if self._cancelled:
                    logger.info("poll_discarded", email=self.email, pending=len(titled))
                    return False
                self._notify(change, title)

        if self._cancelled:
            return False
        self._snapshot = next_snapshot
        tracked_bookings.set(len(next_snapshot))
        return True

    def _notify(self, change: BookingChange, title: str) -> None:
        booking = change.booking
        stay = f"{booking.date_range.start.isoformat()} to {booking.date_range.end.isoformat()}"

        if change.kind == NotificationType.HOST:
            self.notifications.add(
                NotificationType.HOST,
                "New booking request",
                f"{booking.owner} requested {title} for {stay}.",
            )
        else:
            status = booking.status.value
            self.notifications.add(
                NotificationType.GUEST,
                f"Booking {status}",
                f"Your booking for {title} ({stay}) was {status}.",
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the warm-up and the recurring poll on a daemon thread."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name=f"reconciliation-{self.email}", daemon=True
        )
        self._thread.start()
        logger.info("reconciliation_started", email=self.email, interval=self.poll_interval)

    def _run(self) -> None:
        self.refresh_host_listings()
        self._tick()
        while not self._stop_event.wait(self.poll_interval):
            self._tick()

    def _tick(self) -> None:
        try:
            self.poll()
        except Exception:
            # Keep the loop alive; the next tick retries from the same snapshot
            logger.exception("poll_crashed", email=self.email)

    def stop(self, timeout: float = 5.0) -> None:
        """
        Cancel the loop and drop all session state.

        An in-flight request is not aborted; its result is discarded.
        Notifications stay in storage.
        """
        self._cancelled = True
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

        self._snapshot = {}
        self._initialized = False
        self._host_listings = {}
        self._host_refreshed_at = None
        self._title_cache = {}
        tracked_bookings.set(0)
        logger.info("reconciliation_stopped", email=self.email)
