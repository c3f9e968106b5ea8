"""Shared fixtures for API tests: in-memory SQLite and an ASGI client."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sky_ranker_api.dependencies import get_db
from sky_ranker_api.main import create_app
from sky_ranker_db.models import Base, RouteQuality, TravelPreference

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)

    async with factory() as session:
        session.add_all(
            [
                RouteQuality(
                    record_id="q-a",
                    route="BLR-DEL",
                    airline_code="6E",
                    flight_number="2031",
                    on_time_pct=80,
                ),
                RouteQuality(
                    record_id="q-c",
                    route="BLR-DEL",
                    airline_code="AI",
                    flight_number="803",
                    on_time_pct=95,
                    connectivity=True,
                    seat_pitch_inches=32,
                ),
                RouteQuality(record_id="q-bom", route="BLR-BOM", on_time_pct=40),
                TravelPreference(
                    user_id="loyal",
                    airline_prefs={"6E": 0.9},
                    price_sensitivity=0.2,
                    total_bookings=20,
                    last_booking_at=datetime.now(UTC) - timedelta(days=5),
                    price_anchors={"BLR-DEL": 6000},
                ),
                TravelPreference(
                    user_id="messy",
                    airline_prefs={"6E": 4.0},
                    price_sensitivity=3.0,
                    temporal_prefs={"MORNING": 0, "EVENING": 0},
                    total_bookings=-2,
                ),
            ]
        )
        await session.commit()

    yield factory
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory) -> FastAPI:
    application = create_app()

    async def _override_db() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = _override_db
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.fixture
def offer_payload():
    """Factory fixture for JSON offers on BLR-DEL."""

    def _make(
        offer_id: str,
        amount: float,
        *,
        airline: str = "6E",
        flight: str = "2031",
        duration: int = 150,
        stops: int = 0,
        markup: float | None = None,
    ) -> dict:
        airports = ["BLR", *["HYD"] * stops, "DEL"]
        segments = [
            {
                "airline_code": airline,
                "flight_number": flight if leg == 0 else f"{flight}{leg}",
                "origin": airports[leg],
                "destination": airports[leg + 1],
                "departure_time": f"2026-11-02T{9 + leg * 2:02}:15:00",
                "arrival_time": f"2026-11-02T{10 + leg * 2:02}:30:00",
            }
            for leg in range(stops + 1)
        ]
        price = {"amount": amount, "currency": "INR"}
        if markup is not None:
            price["markup"] = markup
        return {
            "offer_id": offer_id,
            "segments": segments,
            "duration_minutes": duration,
            "stops": stops,
            "price": price,
        }

    return _make


@pytest.fixture
def blr_del_payload(offer_payload):
    return [
        offer_payload("A", 6000, airline="6E", flight="2031"),
        offer_payload("B", 4500, airline="SG", flight="101", duration=240, stops=1),
        offer_payload("C", 7000, airline="AI", flight="803", markup=350),
    ]
