"""Curated route quality metadata (the "flight DNA" of a route)."""

from __future__ import annotations

import math
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .bounds import clamp_optional


class Specificity(IntEnum):
    """How narrowly a quality record is keyed; higher wins."""

    ROUTE = 0
    AIRLINE = 1
    FLIGHT = 2


class RouteQualityRecord(BaseModel):
    """Quality attributes keyed by route, optional airline and flight number.

    Values come from an external catalogue and are clamped on read.
    """

    model_config = ConfigDict(frozen=True)

    record_id: str = Field(min_length=1)
    route: str
    airline_code: str | None = None
    flight_number: str | None = None
    on_time_pct: float | None = None
    aircraft_type: str | None = None
    seat_pitch_inches: float | None = None
    connectivity: bool = False
    meal_rating: float | None = None

    @field_validator("route")
    @classmethod
    def _upper_route(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("airline_code")
    @classmethod
    def _upper_airline(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip().upper()

    @field_validator("flight_number")
    @classmethod
    def _blank_flight(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("on_time_pct", mode="before")
    @classmethod
    def _clamp_on_time(cls, value: float | None) -> float | None:
        return clamp_optional(value, 0.0, 100.0)

    @field_validator("meal_rating", mode="before")
    @classmethod
    def _clamp_meal(cls, value: float | None) -> float | None:
        return clamp_optional(value, 0.0, 5.0)

    @field_validator("seat_pitch_inches", mode="before")
    @classmethod
    def _positive_pitch(cls, value: float | None) -> float | None:
        pitch = clamp_optional(value, 0.0, math.inf)
        if pitch is None or not 0 < pitch < math.inf:
            return None
        return pitch

    @property
    def specificity(self) -> Specificity:
        if self.flight_number is not None:
            return Specificity.FLIGHT
        if self.airline_code is not None:
            return Specificity.AIRLINE
        return Specificity.ROUTE

    def applies_to(self, route: str, airline_code: str, flight_number: str) -> bool:
        """True when every key this record sets matches the given segment."""
        if self.route != route:
            return False
        if self.airline_code is not None and self.airline_code != airline_code:
            return False
        return self.flight_number is None or self.flight_number == flight_number
