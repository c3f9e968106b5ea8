"""Flight offer DTOs handed to the ranking engine."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import CabinClass, TimeBucket


class FlightSegment(BaseModel):
    """A single flight leg of an offer."""

    model_config = ConfigDict(frozen=True)

    airline_code: str = Field(min_length=2, max_length=3)
    flight_number: str = Field(min_length=1)
    origin: str = Field(min_length=3, max_length=3, description="IATA airport code")
    destination: str = Field(
        min_length=3, max_length=3, description="IATA airport code"
    )
    departure_time: datetime
    arrival_time: datetime
    cabin_class: CabinClass = CabinClass.ECONOMY
    aircraft_type: str | None = None

    @field_validator("airline_code", "origin", "destination")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def departure_bucket(self) -> TimeBucket:
        """Time-of-day bucket of the departure, wall clock as given."""
        return TimeBucket.from_hour(self.departure_time.hour)


class OfferPrice(BaseModel):
    """Price of an offer.

    ``amount`` is the total charged and the only figure used for scoring.
    ``markup`` and ``service_fee`` are internal and never serialized.
    """

    model_config = ConfigDict(frozen=True)

    amount: float = Field(ge=0)
    currency: str = Field(default="INR", min_length=3, max_length=3)
    service_fee: float | None = Field(default=None, ge=0, exclude=True, repr=False)
    markup: float | None = Field(default=None, exclude=True, repr=False)

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()


class Offer(BaseModel):
    """A purchasable flight itinerary with price and schedule."""

    model_config = ConfigDict(frozen=True)

    offer_id: str = Field(min_length=1)
    segments: tuple[FlightSegment, ...] = Field(min_length=1)
    duration_minutes: int = Field(ge=0)
    stops: int = Field(ge=0)
    price: OfferPrice

    @property
    def primary_segment(self) -> FlightSegment:
        return self.segments[0]

    @property
    def primary_carrier(self) -> str:
        return self.segments[0].airline_code

    @property
    def departure_time(self) -> datetime:
        return self.segments[0].departure_time
