from enum import Enum

from pydantic import Field

from airbrb_client.schemas.base import ApiModel
from airbrb_client.schemas.listings import DateRange


class BookingStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class Booking(ApiModel):
    """
    A guest's booking request for a listing.

    Status moves from pending to accepted or declined, both terminal, and
    only the listing owner moves it.
    """

    id: str
    listing_id: str
    owner: str = Field(..., description="Guest email")
    status: BookingStatus
    date_range: DateRange
    total_price: float = Field(0, ge=0)


class BookingPayload(ApiModel):
    """Body of POST /bookings/new/:listingId."""

    date_range: DateRange
    total_price: float = Field(..., ge=0)


class BookingsResponse(ApiModel):
    bookings: list[Booking]


class BookingCreatedResponse(ApiModel):
    booking_id: str
