from datetime import date, datetime
from typing import Any, Optional

from pydantic import Field, field_serializer, field_validator, model_validator

from airbrb_client.schemas.base import ApiModel
from airbrb_client.utils.datetime import day_to_timestamp, to_day


class DateRange(ApiModel):
    """
    Inclusive calendar-day interval.

    Accepts plain ISO dates or the ISO timestamps the backend stores and
    always serializes back to midnight-UTC timestamps.
    """

    start: date
    end: date

    @field_validator("start", "end", mode="before")
    @classmethod
    def normalize_day(cls, value: Any) -> date:
        day = to_day(value)
        if day is None:
            raise ValueError(f"invalid date: {value!r}")
        return day

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.start > self.end:
            raise ValueError("start must be on or before end")
        return self

    @field_serializer("start", "end", when_used="json")
    def serialize_day(self, value: date) -> str:
        return day_to_timestamp(value)


class Address(ApiModel):
    line1: str = ""
    city: str = ""
    state: str = ""
    country: str = ""


class ListingMetadata(ApiModel):
    property_type: str = ""
    bedrooms: int = 0
    beds: int = 0
    bathrooms: float = 0
    amenities: set[str] = Field(default_factory=set)
    description: str = ""
    gallery: list[str] = Field(default_factory=list)
    thumbnail_video_url: Optional[str] = None


class Review(ApiModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


class ListingSummary(ApiModel):
    """Item of GET /listings."""

    id: str
    owner: str
    title: str = ""
    address: Address = Field(default_factory=Address)
    price: float = 0
    thumbnail: str = ""
    reviews: list[Review] = Field(default_factory=list)


class Listing(ListingSummary):
    """Full record of GET /listings/:id."""

    metadata: ListingMetadata = Field(default_factory=ListingMetadata)
    published: bool = False
    availability: list[DateRange] = Field(default_factory=list)
    posted_on: Optional[datetime] = None


class ListingPayload(ApiModel):
    """Body of POST /listings/new and PUT /listings/:id."""

    title: str = Field(..., min_length=1)
    address: Address
    price: float = Field(..., gt=0)
    thumbnail: str = ""
    metadata: ListingMetadata = Field(default_factory=ListingMetadata)


class ListingsResponse(ApiModel):
    listings: list[ListingSummary]


class ListingResponse(ApiModel):
    listing: Listing


class ListingCreatedResponse(ApiModel):
    listing_id: str
