"""Shared fixtures and factories for ranking engine tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from sky_ranker_core.schemas import (
    CabinClass,
    FlightSegment,
    Offer,
    OfferPrice,
    PreferenceProfile,
    RouteQualityRecord,
)

_VIA = ("HYD", "BOM", "MAA", "CCU")


@pytest.fixture
def now() -> datetime:
    """Fixed clock so confidence and recency are reproducible."""
    return datetime(2026, 10, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_offer():
    """Factory fixture for Offer instances on BLR-DEL.

    One segment per leg; intermediate stops are filled in automatically.
    """

    def _make(
        offer_id: str,
        amount: float,
        *,
        airline: str = "6E",
        flight: str = "2031",
        departure_hour: int = 9,
        duration: int = 150,
        stops: int = 0,
        currency: str = "INR",
        cabin: CabinClass = CabinClass.ECONOMY,
        origin: str = "BLR",
        destination: str = "DEL",
    ) -> Offer:
        departure = datetime(2026, 11, 2, departure_hour, 15)
        airports = [origin, *_VIA[:stops], destination]
        segments = [
            FlightSegment(
                airline_code=airline,
                flight_number=flight if leg == 0 else f"{flight}{leg}",
                origin=airports[leg],
                destination=airports[leg + 1],
                departure_time=departure + timedelta(minutes=leg * 90),
                arrival_time=departure + timedelta(minutes=leg * 90 + 75),
                cabin_class=cabin,
            )
            for leg in range(stops + 1)
        ]
        return Offer(
            offer_id=offer_id,
            segments=tuple(segments),
            duration_minutes=duration,
            stops=stops,
            price=OfferPrice(amount=amount, currency=currency),
        )

    return _make


@pytest.fixture
def make_record():
    """Factory fixture for RouteQualityRecord instances."""

    def _make(
        record_id: str,
        *,
        route: str = "BLR-DEL",
        airline: str | None = None,
        flight: str | None = None,
        on_time: float | None = None,
        meal: float | None = None,
        pitch: float | None = None,
        wifi: bool = False,
    ) -> RouteQualityRecord:
        return RouteQualityRecord(
            record_id=record_id,
            route=route,
            airline_code=airline,
            flight_number=flight,
            on_time_pct=on_time,
            meal_rating=meal,
            seat_pitch_inches=pitch,
            connectivity=wifi,
        )

    return _make


@pytest.fixture
def make_profile(now: datetime):
    """Factory fixture for PreferenceProfile instances.

    ``days_since_booking`` of None leaves ``last_booking_at`` unset.
    """

    def _make(
        *,
        user_id: str = "u-1",
        bookings: int = 20,
        days_since_booking: float | None = 10,
        **fields,
    ) -> PreferenceProfile:
        last = (
            now - timedelta(days=days_since_booking)
            if days_since_booking is not None
            else None
        )
        return PreferenceProfile(
            user_id=user_id,
            total_bookings=bookings,
            last_booking_at=last,
            **fields,
        )

    return _make


@pytest.fixture
def blr_del_offers(make_offer):
    """Cold-start scenario: a cheap one-stop and two nonstops of differing quality."""
    return [
        make_offer("A", 6000, airline="6E", flight="2031", duration=150),
        make_offer("B", 4500, airline="SG", flight="101", duration=240, stops=1),
        make_offer("C", 7000, airline="AI", flight="803", duration=150),
    ]


@pytest.fixture
def blr_del_records(make_record):
    return [
        make_record("q-a", airline="6E", flight="2031", on_time=80),
        make_record("q-c", airline="AI", flight="803", on_time=95),
    ]
